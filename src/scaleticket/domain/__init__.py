"""Domain layer - core business logic."""

from .exceptions import CatalogError, IncompleteInputError, ScaleTicketError
from .models import (
    ExtractionErrorKind,
    ExtractionResult,
    IssuingResult,
    StoredTicket,
    Ticket,
    TicketStatus,
    Vehicle,
    VehicleSelection,
)

__all__ = [
    "CatalogError",
    "ExtractionErrorKind",
    "ExtractionResult",
    "IncompleteInputError",
    "IssuingResult",
    "ScaleTicketError",
    "StoredTicket",
    "Ticket",
    "TicketStatus",
    "Vehicle",
    "VehicleSelection",
]
