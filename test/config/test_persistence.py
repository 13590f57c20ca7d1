################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

"""Tests for numerics parameter YAML persistence."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from dream_numerics.config.numerics_params import NoiseParams
from dream_numerics.config.numerics_params import NumericsParams
from dream_numerics.config.numerics_params import ToleranceParams
from dream_numerics.config.persistence import NumericsPersistenceError
from dream_numerics.config.persistence import dumps_yaml
from dream_numerics.config.persistence import is_yaml_path
from dream_numerics.config.persistence import load_yaml_params
from dream_numerics.config.persistence import loads_yaml
from dream_numerics.config.persistence import save_yaml_params


def _build_params() -> NumericsParams:
    """Create non-default parameters for persistence tests."""
    return NumericsParams.defaults().replace(
        tolerance=ToleranceParams(ulps=16, singular_rtol=1e-10),
        noise=NoiseParams(seed=99),
    )


def test_is_yaml_path() -> None:
    """Only .yaml and .yml suffixes are accepted."""
    assert is_yaml_path("params.yaml")
    assert is_yaml_path(Path("dir") / "params.YML")
    assert not is_yaml_path("params.json")


def test_dumps_and_loads_round_trip() -> None:
    """Serialized YAML parses back into equal parameters."""
    params: NumericsParams = _build_params()
    text: str = dumps_yaml(params)

    assert text.startswith("tolerance:")
    restored: NumericsParams = loads_yaml(text)
    assert restored.as_nested_dict() == params.as_nested_dict()


def test_empty_document_yields_defaults() -> None:
    """An empty YAML document means every value takes its default."""
    assert loads_yaml("").as_nested_dict() == NumericsParams.defaults().as_nested_dict()


def test_partial_document_overrides_defaults() -> None:
    """Only the keys present in the document are overridden."""
    params: NumericsParams = loads_yaml("camera:\n  near: 0.5\n  far: 10.0\n")
    assert params.camera.near == 0.5
    assert params.camera.far == 10.0
    assert params.noise.seed == 0


def test_loads_rejects_invalid_documents() -> None:
    """Malformed, mis-shaped and out-of-range documents are refused."""
    documents: list[str] = [
        "- 1\n- 2\n",
        "tolerance: [unclosed\n",
        "unknown: {}\n",
        "noise:\n  seed: -5\n",
        "camera:\n  origin: [1.0, 2.0]\n",
    ]
    for text in documents:
        with pytest.raises(NumericsPersistenceError):
            loads_yaml(text)


@pytest.mark.parametrize("atomic_write", [True, False])
def test_save_and_load_file(tmp_path: Path, atomic_write: bool) -> None:
    """Parameters survive a save and load through the filesystem."""
    path: Path = tmp_path / "nested" / "numerics.yaml"
    params: NumericsParams = _build_params()

    save_yaml_params(path, params, atomic_write=atomic_write)
    assert path.exists()
    assert [p.name for p in path.parent.iterdir()] == ["numerics.yaml"]

    restored: NumericsParams = load_yaml_params(path)
    assert restored.as_nested_dict() == params.as_nested_dict()


def test_save_and_load_log_paths(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Saving and loading report the file at INFO level."""
    path: Path = tmp_path / "numerics.yml"
    with caplog.at_level(logging.INFO):
        save_yaml_params(path, NumericsParams.defaults())
        load_yaml_params(path)
    assert "Saved numerics parameters" in caplog.text
    assert "Loaded numerics parameters" in caplog.text


def test_rejects_non_yaml_paths(tmp_path: Path) -> None:
    """Saving and loading require a YAML suffix."""
    with pytest.raises(NumericsPersistenceError):
        save_yaml_params(tmp_path / "numerics.json", NumericsParams.defaults())
    with pytest.raises(NumericsPersistenceError):
        load_yaml_params(tmp_path / "numerics.json")


def test_missing_file_raises(tmp_path: Path) -> None:
    """Loading a missing file is a persistence error."""
    with pytest.raises(NumericsPersistenceError):
        load_yaml_params(tmp_path / "missing.yaml")


def test_failed_atomic_write_keeps_previous_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """An interrupted atomic save leaves the old file and no staged copy."""
    path: Path = tmp_path / "numerics.yaml"
    save_yaml_params(path, NumericsParams.defaults())
    previous: str = path.read_text(encoding="utf-8")

    def _fail_fsync(fd: int) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "fsync", _fail_fsync)
    with pytest.raises(NumericsPersistenceError):
        save_yaml_params(path, _build_params())

    assert path.read_text(encoding="utf-8") == previous
    assert [p.name for p in tmp_path.iterdir()] == ["numerics.yaml"]
