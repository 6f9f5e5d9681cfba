"""Command-line entry point.

Usage:
    readsampler --infile input.bam --outfile output.bam --num 5000 --seed 43
    readsampler -i input.sam.gz -o sample.sam --config sampler.yaml --level debug
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime

from readsampler import __version__
from readsampler.alignment_io import (
    check_queryname_sorted,
    open_alignment_reader,
    open_alignment_writer,
)
from readsampler.config import load_config
from readsampler.errors import ReadSamplerError
from readsampler.pipeline import run_sampling
from readsampler.reservoir import INDEX_FORMULAS
from readsampler.rng import resolve_seed

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="readsampler",
        description="Random sample --num reads (SE) or read pairs (PE) from BAM or SAM",
    )
    parser.add_argument("-i", "--infile", required=True, help="input BAM/SAM, queryname sorted")
    parser.add_argument("-o", "--outfile", required=True, help="output BAM or SAM")
    parser.add_argument(
        "-n",
        "--num",
        type=int,
        default=None,
        help="number of reads (read pairs if PE) to downsample (default: 5000)",
    )
    parser.add_argument("-s", "--seed", type=int, default=None, help="seed (default: time-based)")
    parser.add_argument("--config", default=None, help="optional YAML sampler config")
    parser.add_argument(
        "--index-formula",
        choices=INDEX_FORMULAS,
        default=None,
        help="replacement index rule (default: canonical)",
    )
    parser.add_argument(
        "--validate-order",
        action="store_true",
        default=None,
        help="fail if a query name reappears non-contiguously",
    )
    parser.add_argument(
        "--no-check-sort",
        dest="check_sort",
        action="store_false",
        default=None,
        help="do not require SO:queryname in the header",
    )
    parser.add_argument("--level", choices=list(LOG_LEVELS), default="info")
    parser.add_argument("-v", "--version", action="version", version=f"v{__version__}")
    return parser


class LogFormatter(logging.Formatter):
    """Timestamps as ``2020-01-31 12:00:00.123 +0000``."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = datetime.fromtimestamp(record.created).astimezone()
        return f"{stamp:%Y-%m-%d %H:%M:%S}.{int(record.msecs):03d} {stamp:%z}"


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(LogFormatter("[%(asctime)s %(levelname)s] %(message)s"))
    logging.basicConfig(level=LOG_LEVELS[level], handlers=[handler])


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.level)

    try:
        config = load_config(
            args.config,
            overrides={
                "capacity": args.num,
                "seed": args.seed,
                "index_formula": args.index_formula,
                "validate_order": args.validate_order,
                "check_sort": args.check_sort,
            },
        )
        config.seed = resolve_seed(config.seed)
        logger.info(
            "{ infile = %s, outfile = %s, num = %d, seed = %d, level = %s }",
            args.infile,
            args.outfile,
            config.capacity,
            config.seed,
            args.level,
        )

        with open_alignment_reader(args.infile) as reader:
            if config.check_sort:
                check_queryname_sorted(reader.header_lines)
            with open_alignment_writer(args.outfile, reader.header_lines) as writer:
                result = run_sampling(reader, writer, config)
    except ReadSamplerError as exc:
        logger.error("%s", exc)
        return 1

    logger.info(
        "Sampled %d of %d templates (%d records) in %.1fs",
        result.n_sampled,
        result.n_templates,
        result.n_records_written,
        result.wall_seconds,
    )
    logger.info("All done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
