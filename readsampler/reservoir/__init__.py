"""Reservoir samplers."""

from readsampler.reservoir.base import TemplateSampler
from readsampler.reservoir.template_reservoir import INDEX_FORMULAS, ReservoirSampler

__all__ = ["TemplateSampler", "ReservoirSampler", "INDEX_FORMULAS"]
