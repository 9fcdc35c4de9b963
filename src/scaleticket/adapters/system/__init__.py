"""Clock and randomness adapters."""

from .clock import SystemClock
from .randomness import PythonRandom

__all__ = ["PythonRandom", "SystemClock"]
