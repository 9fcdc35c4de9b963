"""Built-in vehicle catalog."""

from collections.abc import Iterable

from ...domain.models import Vehicle
from ...ports.catalog import VehicleCatalogPort

# TRUCK carries loads up to 15000 kg, CARRETA anything heavier
DEFAULT_VEHICLES = (
    Vehicle(
        id="TRK-STD-01",
        category_label="TRUCK",
        tare_weight=9960,
        max_capacity=26000,
        driver_name="Auto Select 1",
    ),
    Vehicle(
        id="CRT-HVY-01",
        category_label="CARRETA",
        tare_weight=9900,
        max_capacity=50000,
        driver_name="Auto Select 2",
    ),
    Vehicle(
        id="TRK-GEN-03",
        category_label="GENERIC-01",
        tare_weight=5000,
        max_capacity=10000,
        driver_name="Spare Driver",
    ),
)


class StaticCatalog(VehicleCatalogPort):
    """Catalog over a fixed sequence of vehicles."""

    def __init__(self, vehicles: Iterable[Vehicle] = DEFAULT_VEHICLES) -> None:
        self._vehicles = tuple(vehicles)

    def list_vehicles(self) -> list[Vehicle]:
        return list(self._vehicles)
