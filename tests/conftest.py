"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from _helpers import SAM_HEADER, sam_line


@pytest.fixture()
def paired_sam(tmp_path: Path) -> Path:
    """Queryname-sorted SAM with ten read pairs."""
    path = tmp_path / "pairs.sam"
    lines = list(SAM_HEADER)
    for i in range(10):
        qname = f"read{i:02d}"
        lines.append(sam_line(qname, flag=99, pos=10 + i))
        lines.append(sam_line(qname, flag=147, pos=100 + i))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
