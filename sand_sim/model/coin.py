"""Random tie-break sources for the step engine."""

import numpy as np
from typing import Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class CoinFlip(Protocol):
    """Fair boolean source used to order the two diagonal candidates."""

    def flip(self) -> bool:
        """
        Return one outcome.

        True keeps the listed diagonal order, False swaps it.
        """
        ...


class GeneratorCoin:
    """Coin backed by a numpy Generator. Seed it for reproducible runs."""

    def __init__(self, rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def flip(self) -> bool:
        return bool(self.rng.integers(0, 2))


class FixedCoin:
    """Coin that always lands the same way."""

    def __init__(self, value: bool = True):
        self.value = bool(value)

    def flip(self) -> bool:
        return self.value


class SequenceCoin:
    """Coin replaying a scripted list of outcomes, cycling when exhausted."""

    def __init__(self, outcomes: Iterable[bool]):
        self.outcomes = [bool(o) for o in outcomes]
        if not self.outcomes:
            raise ValueError("SequenceCoin needs at least one outcome")
        self.calls = 0

    def flip(self) -> bool:
        outcome = self.outcomes[self.calls % len(self.outcomes)]
        self.calls += 1
        return outcome
