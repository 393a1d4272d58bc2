"""Injectable random source.

All randomness in the engine flows through one ``RandomSource`` passed in
at construction time. ``random.Random`` satisfies the protocol, so a seeded
instance makes a session reproducible; tests substitute scripted doubles.

Example:
    >>> rng = create_rng(42)
    >>> 0 <= rng.random() < 1
    True
"""

from __future__ import annotations

import random
from collections.abc import MutableSequence, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

from delve.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    """The subset of ``random.Random`` the engine relies on."""

    def random(self) -> float: ...

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...

    def choices(
        self,
        population: Sequence[T],
        weights: Sequence[float] | None = None,
        *,
        cum_weights: Sequence[float] | None = None,
        k: int = 1,
    ) -> list[T]: ...

    def shuffle(self, x: MutableSequence[Any]) -> None: ...


def create_rng(seed: int | None = None) -> random.Random:
    """Create the session random source.

    Args:
        seed: Optional seed for reproducible sessions.

    Returns:
        A ``random.Random`` instance.
    """
    if seed is not None:
        logger.debug("Seeded random source created", seed=seed)
    return random.Random(seed)


def chance(rng: RandomSource, probability: float) -> bool:
    """Return True with the given probability."""
    return rng.random() < probability


def below(rng: RandomSource, limit: int) -> int:
    """Uniform integer in ``[0, limit)``; 0 when ``limit`` is not positive."""
    if limit <= 0:
        return 0
    return rng.randrange(limit)


__all__ = [
    "RandomSource",
    "create_rng",
    "chance",
    "below",
]
