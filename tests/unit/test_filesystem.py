"""Unit tests for the filesystem ticket store."""

from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml

from scaleticket.adapters.storage import (
    FilesystemTicketStore,
    InMemoryTicketStore,
    quarantine_file,
)
from scaleticket.adapters.storage.filesystem import ticket_from_dict, ticket_to_dict
from scaleticket.domain.models import StoredTicket, Ticket, TicketStatus


@pytest.fixture
def ticket() -> Ticket:
    return Ticket(
        invoice_id="00012345",
        net_weight_invoice=12345.0,
        vehicle_id="TRK-STD-01",
        plate_number="ABC1D23",
        tare_weight=9960,
        gross_weight_calculated=22310,
        issue_timestamp=datetime(2024, 3, 16, 9, 41, 7),
    )


@pytest.fixture
def store(tmp_path: Path, mock_clock: MagicMock) -> FilesystemTicketStore:
    return FilesystemTicketStore(tmp_path, clock=mock_clock)


class TestTicketSerialization:
    """Tests for ticket_to_dict / ticket_from_dict."""

    def test_fields(self, ticket: Ticket) -> None:
        data = ticket_to_dict(
            StoredTicket(id="TKT-123456", ticket=ticket), datetime(2024, 3, 16, 10, 0)
        )
        assert data["id"] == "TKT-123456"
        assert data["issue_timestamp"] == "2024-03-16T09:41:07"
        assert data["status"] == "Printed"
        assert data["stored_at"] == "2024-03-16T10:00:00"

    def test_restores_ticket(self, ticket: Ticket) -> None:
        stored = StoredTicket(id="TKT-123456", ticket=ticket)
        data = yaml.safe_load(yaml.safe_dump(ticket_to_dict(stored, datetime.now())))
        assert ticket_from_dict(data) == stored


class TestFilesystemTicketStore:
    """Tests for FilesystemTicketStore."""

    def test_save_writes_yaml_in_year_month_dir(
        self, store: FilesystemTicketStore, ticket: Ticket, tmp_path: Path
    ) -> None:
        stored = store.save(ticket)
        path = tmp_path / "2024" / "03" / f"{stored.id}.yaml"
        assert path.exists()
        data = yaml.safe_load(path.read_text())
        assert data["invoice_id"] == "00012345"
        assert data["gross_weight_calculated"] == 22310

    def test_id_format(self, store: FilesystemTicketStore, ticket: Ticket) -> None:
        stored = store.save(ticket)
        assert stored.id.startswith("TKT-")
        assert len(stored.id) == len("TKT-") + 6
        assert stored.id[4:].isdigit()
        assert stored.ticket == ticket

    def test_id_collision_gets_suffix(
        self, store: FilesystemTicketStore, ticket: Ticket
    ) -> None:
        # Frozen clock produces the same base id twice
        first = store.save(ticket)
        second = store.save(ticket)
        third = store.save(ticket)
        assert second.id == f"{first.id}-1"
        assert third.id == f"{first.id}-2"

    def test_list_recent_newest_first(
        self, tmp_path: Path, mock_clock: MagicMock, ticket: Ticket
    ) -> None:
        store = FilesystemTicketStore(tmp_path, clock=mock_clock)
        mock_clock.now.return_value = datetime(2024, 6, 30, 9, 0, 0)
        older = store.save(ticket)
        mock_clock.now.return_value = datetime(2024, 6, 30, 9, 5, 0)
        newer = store.save(ticket)

        recent = store.list_recent()
        assert [s.id for s in recent] == [newer.id, older.id]

    def test_list_recent_limit(self, store: FilesystemTicketStore, ticket: Ticket) -> None:
        for _ in range(3):
            store.save(ticket)
        assert len(store.list_recent(limit=2)) == 2

    def test_list_recent_skips_broken_files(
        self, store: FilesystemTicketStore, ticket: Ticket, tmp_path: Path
    ) -> None:
        store.save(ticket)
        broken = tmp_path / "2024" / "03" / "TKT-999999.yaml"
        broken.write_text("not: valid: yaml: {{{\n")
        assert len(store.list_recent()) == 1

    def test_list_recent_empty(self, tmp_path: Path) -> None:
        store = FilesystemTicketStore(tmp_path / "missing")
        assert store.list_recent() == []


class TestInMemoryTicketStore:
    """Tests for InMemoryTicketStore."""

    def test_sequential_ids(self, ticket: Ticket) -> None:
        store = InMemoryTicketStore()
        assert store.save(ticket).id == "TKT-000001"
        assert store.save(ticket).id == "TKT-000002"

    def test_list_recent(self, ticket: Ticket) -> None:
        store = InMemoryTicketStore()
        first = store.save(ticket)
        second = store.save(ticket)
        assert store.list_recent() == [second, first]
        assert store.list_recent(limit=1) == [second]
        assert first.ticket.status == TicketStatus.PRINTED


class TestQuarantineFile:
    """Tests for quarantine_file."""

    def test_moves_file(self, tmp_path: Path) -> None:
        src = tmp_path / "bad.xml"
        src.write_text("<broken")
        dest = quarantine_file(src, tmp_path / "q")
        assert dest == tmp_path / "q" / "bad.xml"
        assert dest.exists()
        assert not src.exists()

    def test_name_collision(self, tmp_path: Path) -> None:
        quarantine = tmp_path / "q"
        quarantine.mkdir()
        (quarantine / "bad.xml").write_text("old")
        src = tmp_path / "bad.xml"
        src.write_text("new")
        dest = quarantine_file(src, quarantine)
        assert dest.name == "bad (1).xml"
        assert dest.read_text() == "new"
