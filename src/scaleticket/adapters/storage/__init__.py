"""Ticket storage adapters."""

from .filesystem import FilesystemTicketStore, quarantine_file
from .memory import InMemoryTicketStore

__all__ = ["FilesystemTicketStore", "InMemoryTicketStore", "quarantine_file"]
