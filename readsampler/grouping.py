"""Group a key-ordered record stream into templates.

The input must already be grouped by key (all records of one key contiguous,
as produced by ``samtools sort -n``). By default a violation is not detected:
a key that reappears later simply starts another, smaller template. Pass
``validate_order=True`` to fail with :class:`InputOrderViolation` instead; that
mode remembers every closed key, so memory grows with the number of distinct
keys.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from readsampler.errors import InputOrderViolation
from readsampler.record import Record, Template


def group_templates(
    records: Iterable[Record],
    validate_order: bool = False,
) -> Iterator[Template]:
    """Yield templates from *records*, one per contiguous run of a key.

    Args:
        records: Record stream, consumed once.
        validate_order: Raise if a key reappears non-contiguously.

    Yields:
        :class:`Template` objects in input order.

    Raises:
        InputOrderViolation: If *validate_order* is set and the input is not
            grouped by key.
    """
    closed: set[str] = set()
    current_key: str | None = None
    current: list[Record] = []

    for position, record in enumerate(records):
        if not current or record.key == current_key:
            current_key = record.key
            current.append(record)
            continue

        yield Template(key=current_key, records=tuple(current))
        if validate_order:
            closed.add(current_key)
            if record.key in closed:
                raise InputOrderViolation(record.key, position)
        current_key = record.key
        current = [record]

    if current:
        yield Template(key=current_key, records=tuple(current))
