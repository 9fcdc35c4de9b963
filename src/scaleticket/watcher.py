"""Filesystem watcher issuing tickets for XML files dropped in the inbox."""

import fnmatch
import logging
import shutil
import time
from datetime import datetime
from pathlib import Path

from watchdog.events import FileCreatedEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .adapters.catalog import create_catalog
from .adapters.storage import FilesystemTicketStore, quarantine_file
from .adapters.system import PythonRandom, SystemClock
from .config import Settings
from .domain.extraction import FieldExtractor
from .domain.services import IssuingService
from .domain.tickets import TicketEngine

logger = logging.getLogger(__name__)

STABILITY_WAIT = 0.5  # seconds between checks
STABILITY_TIMEOUT = 30  # max seconds to wait


def create_issuing_service(settings: Settings) -> IssuingService:
    """Create an IssuingService with configured adapters."""
    clock = SystemClock()
    extractor = FieldExtractor()
    return IssuingService(
        extractor=extractor,
        engine=TicketEngine(
            clock=clock,
            rng=PythonRandom(),
            rules=settings.ticket.to_rules(),
            local_tz=extractor.local_tz,
        ),
        catalog=create_catalog(settings.catalog),
        store=FilesystemTicketStore(settings.paths.tickets, clock=clock),
        selection_rules=settings.selection.to_rules(),
    )


class InboxHandler(FileSystemEventHandler):
    """Handle new XML documents from watchdog."""

    def __init__(self, settings: Settings, service: IssuingService) -> None:
        self.settings = settings
        self.service = service
        self.patterns = settings.watch.patterns

    def on_created(self, event: FileCreatedEvent) -> None:
        if event.is_directory:
            return

        path = Path(event.src_path)
        if self._matches_patterns(path):
            self._handle_file(path)

    def _matches_patterns(self, path: Path) -> bool:
        return any(fnmatch.fnmatch(path.name, p) for p in self.patterns)

    def _handle_file(self, path: Path) -> None:
        """Wait for stability, ingest, then issue."""
        logger.info(f"New file detected: {path.name}")

        if not self._wait_for_stability(path):
            logger.warning(f"File never stabilized: {path.name}")
            return

        try:
            pending_path = self._ingest(path)
            self._issue(pending_path)
        except Exception as e:
            logger.exception(f"Failed to handle {path.name}: {e}")

    def _wait_for_stability(self, path: Path) -> bool:
        """Wait until the file size stops changing."""
        start = time.time()
        last_size = -1

        while time.time() - start < STABILITY_TIMEOUT:
            if not path.exists():
                return False

            size = path.stat().st_size
            if size > 0 and size == last_size:
                return True

            last_size = size
            time.sleep(STABILITY_WAIT)

        logger.warning(f"Timeout waiting for file: {path.name}")
        return path.exists() and path.stat().st_size > 0

    def _ingest(self, path: Path) -> Path:
        """Copy file to .pending, move original to .trash."""
        pending = self.settings.paths.pending
        trash = self.settings.paths.trash

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        # Copy to .pending
        dest = pending / path.name
        if dest.exists():
            dest = pending / f"{timestamp}_{path.name}"

        shutil.copy2(path, dest)
        logger.info(f"Copied to pending: {dest.name}")

        # Move original to .trash
        trash_name = f"{timestamp}_{path.name}"
        shutil.move(str(path), trash / trash_name)
        logger.info(f"Moved to trash: {trash_name}")

        return dest

    def _issue(self, path: Path) -> None:
        """Issue a ticket; quarantine the document on failure."""
        result = self.service.issue(path)

        if result.success and result.stored:
            logger.info(f"Issued: {path.name} -> {result.stored.id}")
            path.unlink()
        else:
            logger.error(f"Issuing failed: {path.name} - {result.errors}")
            quarantine_file(path, self.settings.paths.quarantine)


def initial_scan(settings: Settings, service: IssuingService) -> None:
    """Issue tickets for files already waiting on startup."""
    handler = InboxHandler(settings, service)
    source = settings.paths.source

    for pattern in settings.watch.patterns:
        for path in source.glob(pattern):
            if path.is_file():
                handler._handle_file(path)

    # Also process any files already in .pending
    for pattern in settings.watch.patterns:
        for path in settings.paths.pending.glob(pattern):
            if path.is_file():
                logger.info(f"Processing pending file: {path.name}")
                handler._issue(path)


def run_watcher(settings: Settings) -> None:
    """Run the inbox watcher daemon."""
    source = settings.paths.source

    if not source.exists():
        logger.error(f"Source directory not found: {source}")
        raise SystemExit(1)

    settings.ensure_dirs()
    service = create_issuing_service(settings)

    logger.info(f"Watching: {source}")
    logger.info(f"Pending: {settings.paths.pending}")
    logger.info(f"Quarantine: {settings.paths.quarantine}")
    logger.info(f"Tickets: {settings.paths.tickets}/yyyy/mm/")
    logger.info(f"Patterns: {settings.watch.patterns}")

    initial_scan(settings, service)

    handler = InboxHandler(settings, service)
    observer = Observer()
    observer.schedule(handler, str(source), recursive=False)
    observer.start()

    try:
        while observer.is_alive():
            observer.join(timeout=1)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        observer.stop()

    observer.join()
