"""Ticket computation: issue timestamp and simulated gross weight."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, time, timedelta, tzinfo

from ..ports.clock import Clock
from ..ports.randomness import RandomSource
from .exceptions import IncompleteInputError
from .extraction import parse_document_datetime
from .models import ExtractionResult, Ticket, TicketStatus, Vehicle

logger = logging.getLogger(__name__)

WINDOW_START = 7 * 3600 + 12 * 60 + 50  # 07:12:50
WINDOW_END = 15 * 3600 + 45 * 60 + 50  # 15:45:50
VARIATION = 0.002  # +/- 0.2 %
MAX_DELTA_KG = 20.0


@dataclass(frozen=True)
class TicketRules:
    """Bounds for the randomized parts of a ticket."""

    window_start: int = WINDOW_START  # seconds since midnight, inclusive
    window_end: int = WINDOW_END
    variation: float = VARIATION
    max_delta_kg: float = MAX_DELTA_KG
    filename_date_fallback: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.window_start <= self.window_end < 86400:
            raise ValueError("Issue time window must lie within one day")
        if self.variation < 0 or self.max_delta_kg < 0:
            raise ValueError("Weight variation bounds must be non-negative")


def seconds_to_time(seconds: int) -> time:
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return time(hours, minutes, secs)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity."""
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class TicketEngine:
    """Turns a complete extraction and a vehicle into a printed ticket.

    Time and randomness come from the injected ports; with fixed ports the
    computation is fully deterministic.
    """

    def __init__(
        self,
        clock: Clock,
        rng: RandomSource,
        rules: TicketRules | None = None,
        local_tz: tzinfo | None = None,
    ) -> None:
        self.clock = clock
        self.rng = rng
        self.rules = rules or TicketRules()
        # Same zone FieldExtractor renders dates in; None means the host zone
        self.local_tz = local_tz

    def compute(self, result: ExtractionResult, vehicle: Vehicle | None) -> Ticket:
        """Compute a ticket.

        Raises IncompleteInputError without drawing any randomness when the
        extraction carries an error, lacks a required field, or no vehicle
        was resolved.
        """
        invoice_id, net_weight, vehicle = self._require_complete(result, vehicle)

        issue_timestamp = self.issue_timestamp(result)
        gross_weight = self.gross_weight(net_weight, vehicle.tare_weight)

        ticket = Ticket(
            invoice_id=invoice_id,
            net_weight_invoice=net_weight,
            vehicle_id=vehicle.id,
            plate_number=result.extracted_plate or vehicle.catalog_plate,
            tare_weight=vehicle.tare_weight,
            gross_weight_calculated=gross_weight,
            issue_timestamp=issue_timestamp,
            status=TicketStatus.PRINTED,
        )
        logger.info(
            f"Computed ticket for invoice {ticket.invoice_id}: "
            f"gross={ticket.gross_weight_calculated} kg at {ticket.issue_timestamp}"
        )
        return ticket

    def _require_complete(
        self, result: ExtractionResult, vehicle: Vehicle | None
    ) -> tuple[str, float, Vehicle]:
        if result.error is not None:
            raise IncompleteInputError(f"Extraction has an error: {result.error}")
        if not result.invoice_id:
            raise IncompleteInputError("Extraction has no invoice id")
        if result.net_weight is None:
            raise IncompleteInputError("Extraction has no net weight")
        if vehicle is None:
            raise IncompleteInputError("No vehicle selected")
        return result.invoice_id, result.net_weight, vehicle

    def base_datetime(self, result: ExtractionResult) -> datetime:
        """Invoice emission date, or the clock when it does not parse."""
        candidates = [result.invoice_date]
        if self.rules.filename_date_fallback:
            candidates.append(result.filename_date)

        for value in candidates:
            parsed = parse_document_datetime(value) if value else None
            if parsed is not None:
                if parsed.tzinfo is not None:
                    parsed = parsed.astimezone(self.local_tz).replace(tzinfo=None)
                return parsed

        logger.debug("No usable document date, using current time")
        return self.clock.now()

    def issue_timestamp(self, result: ExtractionResult) -> datetime:
        """Next calendar day at a random time inside the issue window.

        Naive wall-clock arithmetic: the day is added to the calendar date,
        so daylight-saving transitions never shift the drawn time.
        """
        issue_date = self.base_datetime(result).date() + timedelta(days=1)
        seconds = self.rng.randint(self.rules.window_start, self.rules.window_end)
        return datetime.combine(issue_date, seconds_to_time(seconds))

    def gross_weight(self, net_weight: float, tare_weight: float) -> int:
        """Tare plus the net weight perturbed by a capped random delta."""
        factor = self.rng.uniform(1 - self.rules.variation, 1 + self.rules.variation)
        delta = clamp(
            net_weight * (factor - 1),
            -self.rules.max_delta_kg,
            self.rules.max_delta_kg,
        )
        return round_half_up(net_weight + delta + tare_weight)
