"""Automatic vehicle selection from the invoice net weight."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .models import Vehicle, VehicleSelection

logger = logging.getLogger(__name__)

TRUCK_MAX_WEIGHT = 15000.0  # kg
LIGHT_CATEGORY = "TRUCK"
HEAVY_CATEGORY = "CARRETA"


@dataclass(frozen=True)
class SelectionRules:
    """Weight threshold splitting light and heavy vehicle categories."""

    truck_max_weight: float = TRUCK_MAX_WEIGHT
    light_category: str = LIGHT_CATEGORY
    heavy_category: str = HEAVY_CATEGORY

    def category_for(self, net_weight: float) -> str:
        """Fixed threshold, independent of any vehicle's capacity."""
        if net_weight <= self.truck_max_weight:
            return self.light_category
        return self.heavy_category


def find_vehicle(vehicles: Sequence[Vehicle], vehicle_id: str) -> Vehicle | None:
    for vehicle in vehicles:
        if vehicle.id == vehicle_id:
            return vehicle
    return None


def auto_select_vehicle(
    net_weight: float,
    vehicles: Sequence[Vehicle],
    rules: SelectionRules | None = None,
) -> VehicleSelection:
    """Pick the first catalog vehicle of the weight's category.

    An empty match is not an error; the selection carries a message telling
    the caller to choose a vehicle manually.
    """
    category = (rules or SelectionRules()).category_for(net_weight)

    for vehicle in vehicles:
        if vehicle.category_label == category:
            logger.info(f"Auto-selected {vehicle.id} ({category}) for {net_weight} kg")
            return VehicleSelection(
                category=category,
                vehicle=vehicle,
                message=(
                    f"Vehicle selected automatically: {category} "
                    f"(based on weight {net_weight:g} kg)"
                ),
            )

    logger.info(f"No catalog vehicle for category {category}")
    return VehicleSelection(
        category=category,
        vehicle=None,
        message=(
            f"No vehicle of category {category} in catalog; "
            "select a vehicle manually"
        ),
    )
