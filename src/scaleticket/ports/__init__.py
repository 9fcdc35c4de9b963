"""Ports - interfaces for external dependencies."""

from .catalog import VehicleCatalogPort
from .clock import Clock
from .randomness import RandomSource
from .storage import TicketStorePort

__all__ = ["Clock", "RandomSource", "TicketStorePort", "VehicleCatalogPort"]
