"""Random port - interface for ticket variation draws."""

from abc import ABC, abstractmethod


class RandomSource(ABC):
    """Uniform random draws. Not required to be cryptographically strong."""

    @abstractmethod
    def randint(self, low: int, high: int) -> int:
        """Integer in the closed range [low, high]."""
        pass

    @abstractmethod
    def uniform(self, low: float, high: float) -> float:
        """Float in the range [low, high]."""
        pass
