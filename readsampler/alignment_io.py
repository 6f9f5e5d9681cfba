"""SAM/BAM record sources and sinks.

SAM files (optionally gzip-compressed, detected from a ``.gz`` suffix) are
handled as text: header lines start with ``@`` and every other line becomes a
:class:`~readsampler.record.Record` keyed by its QNAME column. BAM files need
``pysam``, which is an optional dependency (``pip install 'readsampler[bam]'``).
"""

from __future__ import annotations

import gzip
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Iterator

from readsampler.errors import (
    InputFileError,
    RecordSinkError,
    RecordSourceError,
    UnsortedInputError,
)
from readsampler.record import Record

logger = logging.getLogger(__name__)

_SAM_SUFFIXES = (".sam", ".sam.gz")
_BAM_SUFFIXES = (".bam",)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require_pysam() -> Any:
    try:
        import pysam  # type: ignore[import-not-found]
    except ImportError as exc:
        raise ImportError(
            "BAM input/output requires pysam. Install it with: pip install 'readsampler[bam]'"
        ) from exc
    return pysam


def _open_text(path: Path, mode: str) -> IO[str]:
    if path.name.lower().endswith(".gz"):
        return gzip.open(path, mode + "t", encoding="utf-8")
    return path.open(mode, encoding="utf-8")


def _is_bam(path: Path) -> bool:
    return path.name.lower().endswith(_BAM_SUFFIXES)


def validate_input_path(path: str | Path) -> Path:
    """Return *path* as a :class:`Path` if it exists and looks like SAM/BAM.

    Raises:
        InputFileError: If the file is missing or has another extension.
    """
    path = Path(path)
    if not path.exists():
        raise InputFileError(f"{path} does not exist!")
    if not path.name.lower().endswith(_SAM_SUFFIXES + _BAM_SUFFIXES):
        raise InputFileError(f"{path} does not seem to be a SAM or BAM!")
    return path


def check_queryname_sorted(header_lines: list[str]) -> None:
    """Require an ``@HD`` header line declaring ``SO:queryname``.

    Raises:
        UnsortedInputError: Naming what is missing from the header.
    """
    hd_lines = [line for line in header_lines if line.startswith("@HD")]
    if not hd_lines:
        raise UnsortedInputError("'@HD' not found in header!")
    tags = dict(
        field.split(":", 1) for field in hd_lines[0].rstrip("\n").split("\t")[1:] if ":" in field
    )
    if "SO" not in tags:
        raise UnsortedInputError("'SO' not found in '@HD'!")
    if tags["SO"] != "queryname":
        raise UnsortedInputError(
            "Not sorted by queryname! "
            "Please run 'samtools sort -n -o output.bam input.bam' first!"
        )


# ---------------------------------------------------------------------------
# Readers
# ---------------------------------------------------------------------------


class SamTextReader:
    """Iterate records of a SAM text file.

    Attributes:
        header_lines: Header lines (``@``-prefixed) without trailing newlines.
    """

    def __init__(self, handle: IO[str], name: str = "<sam>") -> None:
        self._handle = handle
        self._name = name
        self._lineno = 0
        self._pending: str | None = None
        self.header_lines: list[str] = []
        for line in self._lines():
            if line.startswith("@"):
                self.header_lines.append(line)
            else:
                self._pending = line
                break

    def _lines(self) -> Iterator[str]:
        try:
            for line in self._handle:
                self._lineno += 1
                yield line.rstrip("\r\n")
        except (OSError, UnicodeDecodeError, EOFError) as exc:
            raise RecordSourceError(
                f"failed to read {self._name} near line {self._lineno}: {exc}"
            ) from exc

    def _record(self, line: str) -> Record:
        qname = line.split("\t", 1)[0]
        if not qname:
            raise RecordSourceError(f"{self._name}:{self._lineno}: empty record or QNAME")
        return Record(key=qname, payload=line)

    def __iter__(self) -> Iterator[Record]:
        if self._pending is not None:
            line, self._pending = self._pending, None
            yield self._record(line)
        for line in self._lines():
            yield self._record(line)


class BamReader:
    """Iterate records of a BAM file through pysam."""

    def __init__(self, handle: Any, name: str = "<bam>") -> None:
        self._handle = handle
        self._name = name
        self.header_lines: list[str] = str(handle.header).splitlines()

    def __iter__(self) -> Iterator[Record]:
        try:
            for segment in self._handle.fetch(until_eof=True):
                yield Record(key=segment.query_name, payload=segment)
        except (OSError, ValueError) as exc:
            raise RecordSourceError(f"failed to read {self._name}: {exc}") from exc


@contextmanager
def open_alignment_reader(path: str | Path) -> Iterator[SamTextReader | BamReader]:
    """Open a SAM, gzipped SAM or BAM file for record iteration.

    Raises:
        InputFileError: If the path is missing or not SAM/BAM.
        RecordSourceError: If the file cannot be opened.
    """
    path = validate_input_path(path)
    logger.debug("Reading %s as %s", path, "BAM" if _is_bam(path) else "SAM")
    if _is_bam(path):
        pysam = _require_pysam()
        try:
            handle = pysam.AlignmentFile(str(path), "rb", check_sq=False)
        except (OSError, ValueError) as exc:
            raise RecordSourceError(f"failed to read {path}: {exc}") from exc
        with handle:
            yield BamReader(handle, name=str(path))
        return

    try:
        handle = _open_text(path, "r")
    except OSError as exc:
        raise RecordSourceError(f"failed to read {path}: {exc}") from exc
    with handle:
        yield SamTextReader(handle, name=str(path))


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


class SamTextWriter:
    """Write records as SAM text lines after copying the input header."""

    def __init__(self, handle: IO[str], header_lines: list[str], name: str = "<sam>") -> None:
        self._handle = handle
        self._name = name
        for line in header_lines:
            self._put(line)

    def _put(self, line: str) -> None:
        try:
            self._handle.write(line + "\n")
        except OSError as exc:
            raise RecordSinkError(f"failed to write {self._name}: {exc}") from exc

    def write(self, record: Record) -> None:
        payload = record.payload
        self._put(payload if isinstance(payload, str) else payload.to_string())


class BamWriter:
    """Write records to a BAM file through pysam."""

    def __init__(self, handle: Any, pysam: Any, name: str = "<bam>") -> None:
        self._handle = handle
        self._pysam = pysam
        self._name = name

    def write(self, record: Record) -> None:
        segment = record.payload
        try:
            if isinstance(segment, str):
                segment = self._pysam.AlignedSegment.fromstring(segment, self._handle.header)
            self._handle.write(segment)
        except (OSError, ValueError) as exc:
            raise RecordSinkError(f"failed to write {self._name}: {exc}") from exc


@contextmanager
def open_alignment_writer(
    path: str | Path, header_lines: list[str]
) -> Iterator[SamTextWriter | BamWriter]:
    """Open *path* for writing, as BAM for a ``.bam`` suffix and SAM text otherwise.

    Raises:
        RecordSinkError: If the file cannot be created.
    """
    path = Path(path)
    logger.debug("Writing %s as %s", path, "BAM" if _is_bam(path) else "SAM")
    if _is_bam(path):
        pysam = _require_pysam()
        try:
            header = pysam.AlignmentHeader.from_text("\n".join(header_lines) + "\n")
            handle = pysam.AlignmentFile(str(path), "wb", header=header)
        except (OSError, ValueError) as exc:
            raise RecordSinkError(f"failed to write {path}: {exc}") from exc
        with handle:
            yield BamWriter(handle, pysam, name=str(path))
        return

    try:
        handle = _open_text(path, "w")
    except OSError as exc:
        raise RecordSinkError(f"failed to write {path}: {exc}") from exc
    with handle:
        yield SamTextWriter(handle, header_lines, name=str(path))
