"""Domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class ExtractionErrorKind(str, Enum):
    """Why an extraction result carries an error."""

    DOCUMENT_MALFORMED = "document-malformed"
    FIELD_MISSING = "field-missing"
    WEIGHT_NOT_NUMERIC = "weight-not-numeric"


class TicketStatus(str, Enum):
    PRINTED = "Printed"


@dataclass
class ExtractionResult:
    """Fields extracted from one fiscal XML document."""

    invoice_id: str | None = None
    net_weight: float | None = None
    invoice_date: str | None = None  # "YYYY-MM-DD HH:MM" or raw document text
    extracted_plate: str | None = None
    filename_date: str | None = None  # "YYYY-MM-DD 12:00"
    error: str | None = None
    error_kind: ExtractionErrorKind | None = None

    @property
    def is_complete(self) -> bool:
        return (
            self.error is None
            and self.invoice_id is not None
            and self.net_weight is not None
        )


@dataclass(frozen=True)
class Vehicle:
    """Catalog entry for a weighed vehicle."""

    id: str
    category_label: str
    tare_weight: float  # kg
    max_capacity: float  # kg
    plate_number: str | None = None
    driver_name: str | None = None

    def __post_init__(self) -> None:
        if self.tare_weight < 0:
            raise ValueError(f"Vehicle {self.id}: tare weight must be >= 0")
        if self.max_capacity <= self.tare_weight:
            raise ValueError(
                f"Vehicle {self.id}: max capacity must exceed tare weight"
            )

    @property
    def catalog_plate(self) -> str:
        return self.plate_number or self.category_label


@dataclass(frozen=True)
class VehicleSelection:
    """Outcome of automatic vehicle selection.

    A missing vehicle is informational: the caller falls back to manual
    selection.
    """

    category: str
    vehicle: Vehicle | None
    message: str

    @property
    def found(self) -> bool:
        return self.vehicle is not None


@dataclass(frozen=True)
class Ticket:
    """Weighbridge ticket, immutable once computed."""

    invoice_id: str
    net_weight_invoice: float
    vehicle_id: str
    plate_number: str
    tare_weight: float
    gross_weight_calculated: int
    issue_timestamp: datetime
    status: TicketStatus = TicketStatus.PRINTED


@dataclass(frozen=True)
class StoredTicket:
    """Ticket together with the identifier assigned by the store."""

    id: str
    ticket: Ticket


@dataclass
class IssuingResult:
    """Result of issuing a ticket for one document."""

    source_path: Path
    extraction: ExtractionResult | None = None
    selection: VehicleSelection | None = None
    ticket: Ticket | None = None
    stored: StoredTicket | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0 and self.ticket is not None
