"""Catalog port - interface for the vehicle fleet."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import Vehicle


class VehicleCatalogPort(ABC):
    """Read-only, ordered vehicle catalog."""

    @abstractmethod
    def list_vehicles(self) -> list["Vehicle"]:
        pass
