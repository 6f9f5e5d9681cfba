"""Exception hierarchy for readsampler.

Every failure is fatal to a sampling run: library code raises, and only the
command-line entry point catches :class:`ReadSamplerError` to turn it into a
non-zero exit status.
"""

from __future__ import annotations


class ReadSamplerError(Exception):
    """Base class for all readsampler errors."""


class InputOrderViolation(ReadSamplerError, ValueError):
    """A grouping key reappeared after its template was already closed."""

    def __init__(self, key: str, position: int) -> None:
        self.key = key
        self.position = position
        super().__init__(
            f"Key {key!r} reappears non-contiguously at record {position}; "
            "input must be grouped by key (e.g. 'samtools sort -n')."
        )


class RecordSourceError(ReadSamplerError):
    """Upstream failure while reading or parsing records."""


class RecordSinkError(ReadSamplerError):
    """Downstream failure while writing records."""


class InputFileError(RecordSourceError):
    """Input path is missing or does not look like SAM/BAM."""


class UnsortedInputError(RecordSourceError):
    """Input header does not declare a queryname sort order."""


class ConfigError(ReadSamplerError):
    """Invalid or unreadable sampler configuration."""
