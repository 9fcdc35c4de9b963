"""Ticket store using YAML files on the local filesystem."""

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from ...domain.models import StoredTicket, Ticket, TicketStatus
from ...ports.clock import Clock
from ...ports.storage import TicketStorePort
from ..system.clock import SystemClock

logger = logging.getLogger(__name__)

ID_PREFIX = "TKT-"


def ticket_to_dict(stored: StoredTicket, stored_at: datetime) -> dict[str, Any]:
    ticket = stored.ticket
    return {
        "id": stored.id,
        "invoice_id": ticket.invoice_id,
        "net_weight_invoice": ticket.net_weight_invoice,
        "vehicle_id": ticket.vehicle_id,
        "plate_number": ticket.plate_number,
        "tare_weight": ticket.tare_weight,
        "gross_weight_calculated": ticket.gross_weight_calculated,
        "issue_timestamp": ticket.issue_timestamp.isoformat(),
        "status": ticket.status.value,
        "stored_at": stored_at.isoformat(),
    }


def ticket_from_dict(data: dict[str, Any]) -> StoredTicket:
    ticket = Ticket(
        invoice_id=str(data["invoice_id"]),
        net_weight_invoice=float(data["net_weight_invoice"]),
        vehicle_id=str(data["vehicle_id"]),
        plate_number=str(data["plate_number"]),
        tare_weight=float(data["tare_weight"]),
        gross_weight_calculated=int(data["gross_weight_calculated"]),
        issue_timestamp=datetime.fromisoformat(data["issue_timestamp"]),
        status=TicketStatus(data.get("status", TicketStatus.PRINTED.value)),
    )
    return StoredTicket(id=str(data["id"]), ticket=ticket)


class FilesystemTicketStore(TicketStorePort):
    """Stores one YAML document per ticket in a yyyy/mm/ structure.

    Ids are "TKT-" plus the last six digits of the store clock's epoch
    milliseconds, suffixed with a counter on collision.
    """

    def __init__(self, base_path: Path, clock: Clock | None = None) -> None:
        self.base_path = base_path
        self.clock = clock or SystemClock()

    def save(self, ticket: Ticket) -> StoredTicket:
        stored_at = self.clock.now()
        stamp = ticket.issue_timestamp

        # Build destination directory: base/yyyy/mm/
        dest_dir = self.base_path / str(stamp.year) / f"{stamp.month:02d}"
        dest_dir.mkdir(parents=True, exist_ok=True)

        base_id = f"{ID_PREFIX}{int(stored_at.timestamp() * 1000) % 1_000_000:06d}"
        ticket_id = base_id

        # Handle collision
        counter = 1
        while self._path_for(ticket_id) is not None:
            ticket_id = f"{base_id}-{counter}"
            counter += 1

        stored = StoredTicket(id=ticket_id, ticket=ticket)
        dest = dest_dir / f"{ticket_id}.yaml"
        dest.write_text(
            yaml.safe_dump(ticket_to_dict(stored, stored_at), sort_keys=False),
            encoding="utf-8",
        )
        logger.info(f"Stored: {dest.relative_to(self.base_path)}")

        return stored

    def list_recent(self, limit: int = 20) -> list[StoredTicket]:
        entries: list[tuple[str, StoredTicket]] = []
        for path in self.base_path.glob(f"*/*/{ID_PREFIX}*.yaml"):
            try:
                data = yaml.safe_load(path.read_text(encoding="utf-8"))
                entries.append((str(data.get("stored_at", "")), ticket_from_dict(data)))
            except Exception as e:
                logger.warning(f"Failed to read ticket {path}: {e}")

        entries.sort(key=lambda entry: entry[0], reverse=True)
        return [stored for _, stored in entries[:limit]]

    def _path_for(self, ticket_id: str) -> Path | None:
        return next(self.base_path.glob(f"*/*/{ticket_id}.yaml"), None)


def quarantine_file(path: Path, quarantine_dir: Path) -> Path:
    """Move a rejected document to quarantine."""
    quarantine_dir.mkdir(parents=True, exist_ok=True)
    dest = quarantine_dir / path.name

    if dest.exists():
        counter = 1
        stem = path.stem
        while dest.exists():
            dest = quarantine_dir / f"{stem} ({counter}){path.suffix}"
            counter += 1

    shutil.move(str(path), dest)
    logger.warning(f"Quarantined: {path.name}")

    return dest
