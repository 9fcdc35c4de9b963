"""Random adapter backed by the standard Mersenne Twister."""

import random

from ...ports.randomness import RandomSource


class PythonRandom(RandomSource):
    """RandomSource over a private random.Random instance.

    Pass a seed to reproduce a sequence of tickets.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)

    def uniform(self, low: float, high: float) -> float:
        return self._random.uniform(low, high)
