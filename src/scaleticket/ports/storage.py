"""Storage port - interface for ticket persistence."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import StoredTicket, Ticket


class TicketStorePort(ABC):
    """Interface for durable ticket storage."""

    @abstractmethod
    def save(self, ticket: "Ticket") -> "StoredTicket":
        """Record a ticket.

        Returns the ticket with its store-assigned identifier.
        """
        pass

    @abstractmethod
    def list_recent(self, limit: int = 20) -> list["StoredTicket"]:
        """Return stored tickets, newest first."""
        pass
