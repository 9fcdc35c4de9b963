"""Clock port - interface for wall-clock time."""

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Source of the current local time."""

    @abstractmethod
    def now(self) -> datetime:
        """Current naive local date-time."""
        pass
