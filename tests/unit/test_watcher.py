"""Unit tests for the inbox watcher."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from watchdog.events import DirCreatedEvent

from scaleticket.adapters.storage import InMemoryTicketStore
from scaleticket.config import PathsConfig, Settings
from scaleticket.domain.extraction import FieldExtractor
from scaleticket.domain.services import IssuingService
from scaleticket.domain.tickets import TicketEngine
from scaleticket.watcher import InboxHandler, initial_scan


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    (tmp_path / "inbox").mkdir()
    paths = PathsConfig(source=tmp_path / "inbox", base=tmp_path / "base")
    return Settings(paths=paths).ensure_dirs()


@pytest.fixture
def store() -> InMemoryTicketStore:
    return InMemoryTicketStore()


@pytest.fixture
def handler(
    settings: Settings,
    store: InMemoryTicketStore,
    extractor: FieldExtractor,
    mock_clock: MagicMock,
    mock_rng: MagicMock,
    mock_catalog: MagicMock,
) -> InboxHandler:
    service = IssuingService(
        extractor=extractor,
        engine=TicketEngine(clock=mock_clock, rng=mock_rng),
        catalog=mock_catalog,
        store=store,
    )
    return InboxHandler(settings, service)


class TestInboxHandler:
    """Tests for InboxHandler."""

    def test_matches_patterns(self, handler: InboxHandler) -> None:
        assert handler._matches_patterns(Path("cte.xml"))
        assert handler._matches_patterns(Path("CTE.XML"))
        assert not handler._matches_patterns(Path("scan.pdf"))

    def test_issue_success_removes_pending(
        self,
        handler: InboxHandler,
        settings: Settings,
        store: InMemoryTicketStore,
        cte_xml: bytes,
    ) -> None:
        pending = settings.paths.pending / "cte.xml"
        pending.write_bytes(cte_xml)

        handler._issue(pending)

        assert not pending.exists()
        assert len(store.list_recent()) == 1

    def test_issue_failure_quarantines(
        self,
        handler: InboxHandler,
        settings: Settings,
        store: InMemoryTicketStore,
    ) -> None:
        pending = settings.paths.pending / "broken.xml"
        pending.write_text("<cteProc>")

        handler._issue(pending)

        assert not pending.exists()
        assert (settings.paths.quarantine / "broken.xml").exists()
        assert store.list_recent() == []

    def test_ingest_copies_and_trashes(
        self, handler: InboxHandler, settings: Settings, cte_xml: bytes
    ) -> None:
        incoming = settings.paths.source / "cte.xml"
        incoming.write_bytes(cte_xml)

        dest = handler._ingest(incoming)

        assert dest == settings.paths.pending / "cte.xml"
        assert dest.read_bytes() == cte_xml
        assert not incoming.exists()
        assert len(list(settings.paths.trash.iterdir())) == 1

    def test_ignores_directories(self, handler: InboxHandler, tmp_path: Path) -> None:
        handler._handle_file = MagicMock()  # type: ignore[method-assign]
        event = DirCreatedEvent(str(tmp_path / "sub.xml"))
        handler.on_created(event)
        handler._handle_file.assert_not_called()


class TestInitialScan:
    """Tests for initial_scan."""

    def test_issues_pending_files(
        self,
        handler: InboxHandler,
        settings: Settings,
        store: InMemoryTicketStore,
        cte_xml: bytes,
    ) -> None:
        (settings.paths.pending / "left-over.xml").write_bytes(cte_xml)

        initial_scan(settings, handler.service)

        assert len(store.list_recent()) == 1
        assert list(settings.paths.pending.iterdir()) == []
