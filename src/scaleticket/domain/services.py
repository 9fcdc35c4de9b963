"""Domain services - orchestrate business logic."""

import logging
from pathlib import Path

from ..ports.catalog import VehicleCatalogPort
from ..ports.storage import TicketStorePort
from .exceptions import ScaleTicketError
from .extraction import FieldExtractor
from .models import ExtractionResult, IssuingResult, Vehicle, VehicleSelection
from .tickets import TicketEngine
from .vehicles import SelectionRules, auto_select_vehicle, find_vehicle

logger = logging.getLogger(__name__)


class IssuingService:
    """Orchestrates ticket issuing for a fiscal XML document."""

    def __init__(
        self,
        extractor: FieldExtractor,
        engine: TicketEngine,
        catalog: VehicleCatalogPort,
        store: TicketStorePort,
        selection_rules: SelectionRules | None = None,
    ) -> None:
        self.extractor = extractor
        self.engine = engine
        self.catalog = catalog
        self.store = store
        self.selection_rules = selection_rules or SelectionRules()

    def extract(self, path: Path) -> ExtractionResult:
        return self.extractor.extract_file(path)

    def select_vehicle(self, net_weight: float) -> VehicleSelection:
        return auto_select_vehicle(
            net_weight, self.catalog.list_vehicles(), self.selection_rules
        )

    def issue(
        self,
        path: Path,
        vehicle_id: str | None = None,
        dry_run: bool = False,
    ) -> IssuingResult:
        """Issue a ticket for a document.

        Pipeline:
            1. Read and extract fields
            2. Resolve vehicle (explicit id, else automatic selection)
            3. Compute ticket
            4. Store ticket (unless dry_run=True)
        """
        result = IssuingResult(source_path=path)
        logger.info(f"Issuing: {path.name}")

        if path.suffix.lower() != ".xml":
            result.errors.append(f"Unsupported file type: {path.suffix}")
            return result

        # 1. Extract
        extraction = self.extract(path)
        result.extraction = extraction
        if not extraction.is_complete:
            result.errors.append(extraction.error or "Incomplete extraction")
            return result

        # 2. Vehicle
        vehicle = self._resolve_vehicle(extraction, vehicle_id, result)
        if vehicle is None:
            return result

        try:
            # 3. Compute
            result.ticket = self.engine.compute(extraction, vehicle)

            # 4. Store
            if not dry_run:
                result.stored = self.store.save(result.ticket)
                logger.info(f"Stored ticket {result.stored.id}")
            else:
                logger.info("Not stored (--dry-run)")

        except ScaleTicketError as e:
            logger.error(f"Issuing failed: {e}")
            result.errors.append(str(e))
        except OSError as e:
            logger.exception(f"Storing ticket failed: {e}")
            result.errors.append(f"Failed to store ticket: {e}")

        return result

    def _resolve_vehicle(
        self,
        extraction: ExtractionResult,
        vehicle_id: str | None,
        result: IssuingResult,
    ) -> Vehicle | None:
        if vehicle_id is not None:
            vehicle = find_vehicle(self.catalog.list_vehicles(), vehicle_id)
            if vehicle is None:
                result.errors.append(f"Unknown vehicle: {vehicle_id}")
            return vehicle

        if extraction.net_weight is None:
            result.errors.append("Extraction has no net weight")
            return None

        result.selection = self.select_vehicle(extraction.net_weight)
        if result.selection.vehicle is None:
            result.errors.append(result.selection.message)
        return result.selection.vehicle
