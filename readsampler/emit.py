"""Write sampled templates to a record sink."""

from __future__ import annotations

from typing import Callable, Iterable, Protocol, Union

from readsampler.record import Record, Template


class RecordWriter(Protocol):
    def write(self, record: Record) -> None: ...


RecordSink = Union[RecordWriter, Callable[[Record], None]]


def emit_templates(slots: Iterable[Template | None], sink: RecordSink) -> int:
    """Write every retained template's records to *sink*, slot by slot.

    Templates come out in slot order, which generally differs from their
    order in the input once the reservoir starts overwriting slots. Records
    inside a template keep their input order.

    Args:
        slots: Reservoir slots; ``None`` entries are skipped.
        sink: Object with a ``write(record)`` method, or a callable.

    Returns:
        Number of records written.
    """
    write = sink.write if hasattr(sink, "write") else sink
    n_written = 0
    for template in slots:
        if template is None:
            continue
        for record in template.records:
            write(record)
            n_written += 1
    return n_written
