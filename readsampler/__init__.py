"""readsampler — single-pass reservoir sampling of read templates.

Public API
----------
The usable surface is importable directly from ``readsampler``::

    from readsampler import ReservoirSampler, group_templates, run_sampling
    from readsampler.config import SamplerConfig
    from readsampler.alignment_io import open_alignment_reader, open_alignment_writer
"""

from __future__ import annotations

__version__ = "0.1.0"

# Sampling core
from readsampler.emit import emit_templates
from readsampler.errors import (
    InputOrderViolation,
    ReadSamplerError,
    RecordSinkError,
    RecordSourceError,
)
from readsampler.grouping import group_templates
from readsampler.record import Record, Template
from readsampler.reservoir import ReservoirSampler, TemplateSampler
from readsampler.rng import NumpyUniformSource, UniformSource

# Run driver and configuration
from readsampler.config import SamplerConfig, load_config
from readsampler.pipeline import SamplingResult, run_sampling

__all__ = [
    # Data model
    "Record",
    "Template",
    # Primary abstractions
    "UniformSource",
    "NumpyUniformSource",
    "TemplateSampler",
    "ReservoirSampler",
    # Functional API
    "group_templates",
    "emit_templates",
    "run_sampling",
    "SamplingResult",
    # Configuration
    "SamplerConfig",
    "load_config",
    # Errors
    "ReadSamplerError",
    "InputOrderViolation",
    "RecordSourceError",
    "RecordSinkError",
    "__version__",
]
