"""Tests for sampler configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from readsampler.config import DEFAULT_CAPACITY, SamplerConfig, load_config
from readsampler.errors import ConfigError


def test_defaults() -> None:
    cfg = load_config()
    assert isinstance(cfg, SamplerConfig)
    assert cfg.capacity == DEFAULT_CAPACITY == 5000
    assert cfg.seed is None
    assert cfg.index_formula == "canonical"
    assert cfg.check_sort is True


def test_yaml_file_then_overrides(tmp_path: Path) -> None:
    path = tmp_path / "sampler.yaml"
    path.write_text("capacity: 10\nseed: 7\nindex_formula: reference\n", encoding="utf-8")
    cfg = load_config(path, overrides={"capacity": 20, "seed": None})
    assert cfg.capacity == 20
    assert cfg.seed == 7
    assert cfg.index_formula == "reference"


def test_unknown_key_rejected(tmp_path: Path) -> None:
    path = tmp_path / "sampler.yaml"
    path.write_text("capacty: 10\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


@pytest.mark.parametrize(
    "overrides",
    [
        {"capacity": -1},
        {"index_formula": "textbook"},
        {"capacity": "many"},
        {"seed": -1},
        {"seed": 2**64},
    ],
)
def test_invalid_values_rejected(overrides: dict) -> None:
    with pytest.raises(ConfigError):
        load_config(overrides=overrides)


def test_missing_file_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.yaml")
