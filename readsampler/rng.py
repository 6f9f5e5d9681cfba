"""Uniform random sources used by the reservoir sampler."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

import numpy as np

# Seeds are unsigned 64-bit integers.
MAX_SEED = 2**64 - 1


class UniformSource(ABC):
    """Base interface for continuous uniform draws."""

    @abstractmethod
    def uniform(self) -> float:
        """Return one draw from ``[0, 1)``."""


class NumpyUniformSource(UniformSource):
    """Uniform source backed by a numpy PCG64 ``Generator``."""

    def __init__(self, seed: int | None = None) -> None:
        """Initialize the source.

        Args:
            seed: Random seed for reproducibility. ``None`` derives one from
                the current time (see :func:`time_seed`).

        Raises:
            ValueError: If *seed* is negative or wider than 64 bits.
        """
        if seed is None:
            seed = time_seed()
        if seed < 0 or seed > MAX_SEED:
            raise ValueError(f"seed must be an unsigned 64-bit integer, got {seed}")
        self.seed = int(seed)
        self._rng = np.random.default_rng(self.seed)

    def uniform(self) -> float:
        return float(self._rng.random())


def time_seed() -> int:
    """Return the current wall-clock time in milliseconds as a seed."""
    return time.time_ns() // 1_000_000


def resolve_seed(seed: int | None) -> int:
    """Return *seed* unchanged, or a time-derived seed when it is ``None``."""
    return time_seed() if seed is None else int(seed)
