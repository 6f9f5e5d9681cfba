"""End-to-end sampling run: source -> grouper -> reservoir -> sink.

The primary API is :func:`run_sampling`. It pulls the record source exactly
once, feeds templates to a :class:`~readsampler.reservoir.ReservoirSampler`
and, only after the source is exhausted, emits the retained templates.
Source and grouping errors therefore abort the run before any record is
written; sink errors surface during emission and leave the output incomplete.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable, Iterator

from readsampler.config import SamplerConfig
from readsampler.emit import RecordSink, emit_templates
from readsampler.grouping import group_templates
from readsampler.record import Record, Template
from readsampler.reservoir.template_reservoir import ReservoirSampler
from readsampler.rng import NumpyUniformSource, UniformSource, resolve_seed

logger = logging.getLogger(__name__)


@dataclass
class SamplingResult:
    """Summary of one sampling run.

    Attributes:
        seed: Seed actually used (resolved when the config left it unset).
        n_templates: Templates observed in the input.
        n_sampled: Templates written to the sink, ``min(capacity, n_templates)``.
        n_records_written: Records written to the sink.
        wall_seconds: Wall-clock time for the run.
    """

    seed: int
    n_templates: int
    n_sampled: int
    n_records_written: int
    wall_seconds: float


def _with_progress(templates: Iterable[Template], interval: int) -> Iterator[Template]:
    """Pass *templates* through, logging a line every *interval* templates."""
    for n, template in enumerate(templates, start=1):
        yield template
        if interval and n % interval == 0:
            logger.info("%d reads (read pairs) processed...", n)


def run_sampling(
    records: Iterable[Record],
    sink: RecordSink,
    config: SamplerConfig | None = None,
    rng: UniformSource | None = None,
) -> SamplingResult:
    """Sample templates from *records* and write them to *sink*.

    Args:
        records: Key-grouped record source, consumed once.
        sink: Object with ``write(record)`` or a callable.
        config: Sampler configuration; defaults to :class:`SamplerConfig()`.
        rng: Uniform source override. When omitted a numpy source seeded from
            ``config.seed`` (or the current time) is used.

    Returns:
        :class:`SamplingResult` for the run.
    """
    config = config or SamplerConfig()
    start = time.perf_counter()
    if rng is None:
        seed = resolve_seed(config.seed)
        rng = NumpyUniformSource(seed)
    else:
        seed = int(getattr(rng, "seed", config.seed or 0))

    sampler = ReservoirSampler(config.capacity, rng=rng, index_formula=config.index_formula)
    templates = group_templates(records, validate_order=config.validate_order)

    logger.info("Iteration starts.")
    for template in _with_progress(templates, config.progress_interval):
        sampler.observe(template)

    if sampler.n_observed == 0:
        logger.warning("No templates found in the input; output will be empty.")
    elif sampler.n_observed <= config.capacity:
        logger.warning("--num exceeds the input read counts! output all.")
    logger.debug(
        "Observed %d templates, retaining %d", sampler.n_observed, sampler.n_retained
    )

    n_written = emit_templates(sampler.slots, sink)
    return SamplingResult(
        seed=seed,
        n_templates=sampler.n_observed,
        n_sampled=sampler.n_retained,
        n_records_written=n_written,
        wall_seconds=time.perf_counter() - start,
    )
