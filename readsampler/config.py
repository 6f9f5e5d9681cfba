"""Sampler configuration: dataclass defaults, YAML files and overrides."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from readsampler.errors import ConfigError
from readsampler.reservoir.template_reservoir import INDEX_FORMULAS
from readsampler.rng import MAX_SEED

DEFAULT_CAPACITY = 5000
DEFAULT_PROGRESS_INTERVAL = 1_000_000


@dataclass
class SamplerConfig:
    """Runtime configuration for one sampling run.

    Attributes:
        capacity: Number of templates (reads, or read pairs) to keep.
        seed: Random seed; ``None`` derives one from the current time.
        index_formula: Replacement index rule, ``"canonical"`` or
            ``"reference"`` (see :mod:`readsampler.reservoir`).
        validate_order: Fail when a key reappears non-contiguously.
        check_sort: Require ``SO:queryname`` in the input header.
        progress_interval: Log a progress line every this many templates
            (``0`` disables progress lines).
    """

    capacity: int = DEFAULT_CAPACITY
    seed: Optional[int] = None
    index_formula: str = "canonical"
    validate_order: bool = False
    check_sort: bool = True
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {self.capacity}")
        if self.seed is not None and not 0 <= self.seed <= MAX_SEED:
            raise ValueError(f"seed must be an unsigned 64-bit integer, got {self.seed}")
        if self.index_formula not in INDEX_FORMULAS:
            raise ValueError(
                f"Unknown index formula: {self.index_formula!r} (choose from {INDEX_FORMULAS})"
            )
        if self.progress_interval < 0:
            raise ValueError("progress_interval must be non-negative")


def load_config(
    path: Optional[Union[str, Path]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> SamplerConfig:
    """Build a :class:`SamplerConfig` from defaults, a YAML file and overrides.

    Later sources win: dataclass defaults, then *path*, then *overrides*.
    ``None`` values in *overrides* are ignored so unset CLI flags do not
    clobber file values.

    Args:
        path: Optional YAML file with any subset of the config fields.
        overrides: Optional mapping of field name to value.

    Raises:
        ConfigError: If the file cannot be read, has unknown keys, or a value
            has the wrong type or range.
    """
    try:
        merged = OmegaConf.structured(SamplerConfig)
        if path is not None:
            merged = OmegaConf.merge(merged, OmegaConf.load(str(path)))
        if overrides:
            explicit = {k: v for k, v in overrides.items() if v is not None}
            merged = OmegaConf.merge(merged, explicit)
        return OmegaConf.to_object(merged)
    except (OmegaConfBaseException, OSError, ValueError) as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
