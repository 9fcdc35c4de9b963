"""In-process ticket store, for tests and dry runs."""

import logging

from ...domain.models import StoredTicket, Ticket
from ...ports.storage import TicketStorePort

logger = logging.getLogger(__name__)


class InMemoryTicketStore(TicketStorePort):
    """Keeps tickets in a list; ids are sequential TKT-000001, TKT-000002..."""

    def __init__(self) -> None:
        self._tickets: list[StoredTicket] = []

    def save(self, ticket: Ticket) -> StoredTicket:
        stored = StoredTicket(id=f"TKT-{len(self._tickets) + 1:06d}", ticket=ticket)
        self._tickets.append(stored)
        logger.debug(f"Saved in memory: {stored.id}")
        return stored

    def list_recent(self, limit: int = 20) -> list[StoredTicket]:
        return list(reversed(self._tickets))[:limit]
