"""Clock adapter using the host's local time."""

from datetime import datetime

from ...ports.clock import Clock


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now()
