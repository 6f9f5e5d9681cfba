"""Record and template value types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator


@dataclass(frozen=True)
class Record:
    """One input record.

    Attributes:
        key: Grouping key (e.g. the SAM query name).
        payload: Opaque record body handed back to the sink unchanged.
    """

    key: str
    payload: Any


@dataclass(frozen=True)
class Template:
    """Contiguous run of records sharing one key, in source order.

    Attributes:
        key: Grouping key shared by every record.
        records: Records in the order they were read.
    """

    key: str
    records: tuple[Record, ...]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)
