"""Vehicle catalog loaded from a YAML file.

Expected layout::

    vehicles:
      - id: TRK-STD-01
        category: TRUCK
        tare_weight: 9960
        max_capacity: 26000
        plate_number: ABC1D23   # optional
        driver_name: Auto Select 1   # optional
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from ...domain.exceptions import CatalogError
from ...domain.models import Vehicle
from ...ports.catalog import VehicleCatalogPort

logger = logging.getLogger(__name__)


class VehicleEntry(BaseModel):
    id: str
    category: str
    tare_weight: float = Field(ge=0)
    max_capacity: float = Field(gt=0)
    plate_number: str | None = None
    driver_name: str | None = None

    def to_vehicle(self) -> Vehicle:
        return Vehicle(
            id=self.id,
            category_label=self.category,
            tare_weight=self.tare_weight,
            max_capacity=self.max_capacity,
            plate_number=self.plate_number,
            driver_name=self.driver_name,
        )


class CatalogFile(BaseModel):
    vehicles: list[VehicleEntry] = []


class YamlCatalog(VehicleCatalogPort):
    """Catalog read once from disk; later file changes are not picked up."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._vehicles = self._load()

    def list_vehicles(self) -> list[Vehicle]:
        return list(self._vehicles)

    def _load(self) -> tuple[Vehicle, ...]:
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise CatalogError(f"Cannot read vehicle catalog {self.path}: {e}") from e

        try:
            catalog = CatalogFile.model_validate(data or {})
            vehicles = tuple(entry.to_vehicle() for entry in catalog.vehicles)
        except (ValidationError, ValueError) as e:
            raise CatalogError(f"Invalid vehicle catalog {self.path}: {e}") from e

        logger.info(f"Loaded {len(vehicles)} vehicles from {self.path}")
        return vehicles
