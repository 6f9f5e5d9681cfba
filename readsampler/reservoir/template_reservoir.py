"""Fixed-capacity reservoir sampler over templates (Algorithm R)."""

from __future__ import annotations

import math

from readsampler.record import Template
from readsampler.reservoir.base import TemplateSampler
from readsampler.rng import NumpyUniformSource, UniformSource

# "canonical": i = floor(f * (k + 1)), textbook Algorithm R, uniform inclusion.
# "reference": i = floor(f * k), the index rule of the original downsampler.
#   The first template after the reservoir fills always replaces a slot, so
#   early templates are under-represented.
INDEX_FORMULAS = ("canonical", "reference")


class ReservoirSampler(TemplateSampler):
    """Keep a uniform random sample of at most ``capacity`` templates.

    The reservoir is a list of ``capacity`` slots allocated up front. While it
    is filling, template ``k`` goes to slot ``k``. Afterwards each template
    draws a candidate slot and either overwrites it or is dropped. Retained
    templates are therefore ordered by slot, not by arrival.

    Attributes:
        rng: Uniform source consulted once per template after the fill.
        index_formula: One of :data:`INDEX_FORMULAS`.
    """

    def __init__(
        self,
        capacity: int,
        rng: UniformSource | None = None,
        index_formula: str = "canonical",
    ) -> None:
        """Initialize the sampler.

        Args:
            capacity: Maximum number of templates to retain (``N >= 0``).
            rng: Uniform source. Defaults to an unseeded
                :class:`~readsampler.rng.NumpyUniformSource`.
            index_formula: Replacement index rule, ``"canonical"`` or
                ``"reference"``.

        Raises:
            ValueError: If *capacity* is negative or not an integer, or
                *index_formula* is unknown.
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ValueError(f"capacity must be an integer, got {capacity!r}")
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        if index_formula not in INDEX_FORMULAS:
            raise ValueError(
                f"Unknown index formula: {index_formula!r} (choose from {INDEX_FORMULAS})"
            )
        self.rng = rng if rng is not None else NumpyUniformSource()
        self.index_formula = index_formula
        self._capacity = capacity
        self._slots: list[Template | None] = [None] * capacity
        self._k = 0

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def observe(self, template: Template) -> None:
        k = self._k
        if k < self._capacity:
            self._slots[k] = template
        elif self._capacity > 0:
            i = self._candidate_index(self.rng.uniform(), k)
            if i < self._capacity:
                self._slots[i] = template
        self._k = k + 1

    def finalize(self) -> list[Template]:
        return [t for t in self._slots if t is not None]

    # ------------------------------------------------------------------
    # Convenience properties
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def n_observed(self) -> int:
        """Number of templates seen so far (uncapped)."""
        return self._k

    @property
    def n_retained(self) -> int:
        return min(self._capacity, self._k)

    @property
    def slots(self) -> tuple[Template | None, ...]:
        """Read-only view of the slot array, empty slots as ``None``."""
        return tuple(self._slots)

    def _candidate_index(self, f: float, k: int) -> int:
        denominator = k + 1 if self.index_formula == "canonical" else k
        return math.floor(f * denominator)
