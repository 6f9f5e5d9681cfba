"""Tests for the readsampler command-line entry point."""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path

import pytest

from _helpers import sam_line
from readsampler import alignment_io
from readsampler.cli import LogFormatter, main


def _body(path: Path) -> list[str]:
    return [line for line in path.read_text(encoding="utf-8").splitlines() if not line.startswith("@")]


def test_samples_read_pairs(tmp_path: Path, paired_sam: Path) -> None:
    out = tmp_path / "sample.sam"
    assert main(["-i", str(paired_sam), "-o", str(out), "-n", "3", "-s", "43"]) == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("@HD\tVN:1.6\tSO:queryname\n")
    body = _body(out)
    assert len(body) == 6
    qnames = [line.split("\t", 1)[0] for line in body]
    assert len(set(qnames)) == 3
    assert all(qnames.count(q) == 2 for q in qnames)


def test_same_seed_same_output(tmp_path: Path, paired_sam: Path) -> None:
    first, second = tmp_path / "a.sam", tmp_path / "b.sam"
    main(["-i", str(paired_sam), "-o", str(first), "-n", "4", "-s", "7"])
    main(["-i", str(paired_sam), "-o", str(second), "-n", "4", "-s", "7"])
    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")


def test_config_file_supplies_defaults(tmp_path: Path, paired_sam: Path) -> None:
    cfg = tmp_path / "sampler.yaml"
    cfg.write_text("capacity: 2\nseed: 5\n", encoding="utf-8")
    out = tmp_path / "sample.sam"
    assert main(["-i", str(paired_sam), "-o", str(out), "--config", str(cfg)]) == 0
    assert len(_body(out)) == 4


def test_unsorted_input_fails(tmp_path: Path) -> None:
    src = tmp_path / "coord.sam"
    src.write_text("@HD\tVN:1.6\tSO:coordinate\n" + sam_line("a") + "\n", encoding="utf-8")
    out = tmp_path / "out.sam"
    assert main(["-i", str(src), "-o", str(out)]) == 1
    assert not out.exists()


def test_unsorted_input_allowed_with_flag(tmp_path: Path) -> None:
    src = tmp_path / "coord.sam"
    src.write_text("@HD\tVN:1.6\tSO:coordinate\n" + sam_line("a") + "\n", encoding="utf-8")
    out = tmp_path / "out.sam"
    assert main(["-i", str(src), "-o", str(out), "--no-check-sort"]) == 0
    assert _body(out) == [sam_line("a")]


def test_order_violation_fails(tmp_path: Path) -> None:
    src = tmp_path / "mixed.sam"
    lines = ["@HD\tVN:1.6\tSO:queryname", sam_line("a"), sam_line("b"), sam_line("a")]
    src.write_text("\n".join(lines) + "\n", encoding="utf-8")
    out = tmp_path / "out.sam"
    assert main(["-i", str(src), "-o", str(out), "--validate-order"]) == 1
    assert _body(out) == []


def test_missing_input_fails(tmp_path: Path) -> None:
    assert main(["-i", str(tmp_path / "nope.bam"), "-o", str(tmp_path / "o.bam")]) == 1


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == "v0.1.0"


def test_seed_wider_than_64_bits_fails(tmp_path: Path, paired_sam: Path) -> None:
    out = tmp_path / "out.sam"
    assert main(["-i", str(paired_sam), "-o", str(out), "-s", str(2**64)]) == 1
    assert not out.exists()


def test_write_failure_fails(
    tmp_path: Path, paired_sam: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A sink that cannot write after the header makes the run exit 1."""
    open_text = alignment_io._open_text

    class _FullDisk(io.StringIO):
        def __init__(self) -> None:
            super().__init__()
            self.lines = 0

        def write(self, text: str) -> int:
            self.lines += 1
            if self.lines > 2:
                raise OSError(28, "No space left on device")
            return super().write(text)

    def fake_open_text(path: Path, mode: str):
        return _FullDisk() if mode == "w" else open_text(path, mode)

    monkeypatch.setattr(alignment_io, "_open_text", fake_open_text)
    assert main(["-i", str(paired_sam), "-o", str(tmp_path / "out.sam"), "-n", "2", "-s", "1"]) == 1


def test_log_timestamps_carry_milliseconds() -> None:
    formatter = LogFormatter("[%(asctime)s %(levelname)s] %(message)s")
    record = logging.LogRecord("readsampler", logging.INFO, __file__, 1, "All done.", None, None)
    line = formatter.format(record)
    assert re.fullmatch(
        r"\[\d{4}-\d\d-\d\d \d\d:\d\d:\d\d\.\d{3} [+-]\d{4} INFO\] All done\.", line
    )
