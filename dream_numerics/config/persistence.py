################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

"""YAML persistence for the numerics parameter tree."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any
from typing import cast

import yaml

from dream_numerics.config.numerics_params import NumericsParams
from dream_numerics.config.numerics_params import NumericsParamsError


_LOG: logging.Logger = logging.getLogger(__name__)


class NumericsPersistenceError(Exception):
    """Raised when loading or saving numerics parameter files fails."""


def is_yaml_path(path: str | os.PathLike[str]) -> bool:
    """Return True if the path has a YAML extension."""
    suffix: str = Path(os.fspath(path)).suffix.lower()
    return suffix in {".yaml", ".yml"}


def dumps_yaml(params: NumericsParams) -> str:
    """Serialize parameters to deterministic YAML."""
    safe_dump: Any = cast(Any, yaml.safe_dump)
    return safe_dump(
        params.as_nested_dict(),
        sort_keys=False,
        indent=2,
        default_flow_style=False,
    )


def loads_yaml(text: str) -> NumericsParams:
    """Parse and validate parameters from YAML text.

    Missing namespaces and keys take their default values, so an empty
    document yields the default parameters.
    """
    try:
        loaded: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise NumericsPersistenceError("Malformed YAML parameters") from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise NumericsPersistenceError("YAML root must be a mapping")

    try:
        params: NumericsParams = NumericsParams.from_nested_dict(loaded)
        params.validate()
    except NumericsParamsError as exc:
        raise NumericsPersistenceError(str(exc)) from exc
    return params


def _replace_file(target: Path, text: str) -> None:
    """Write text beside target and rename it over target in one step."""
    fd: int
    name: str
    fd, name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    staged: Path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as stream:
            stream.write(text)
            stream.flush()
            os.fsync(stream.fileno())
        staged.replace(target)
    except BaseException:
        staged.unlink(missing_ok=True)
        raise


def save_yaml_params(
    path: str | os.PathLike[str],
    params: NumericsParams,
    *,
    atomic_write: bool = True,
) -> None:
    """Save parameters to disk as YAML.

    With atomic_write the file is staged in the same directory and renamed
    into place, so readers never observe a partially written file.
    """
    if not is_yaml_path(path):
        raise NumericsPersistenceError("Path must end with .yaml or .yml")

    target: Path = Path(os.fspath(path))
    text: str = dumps_yaml(params)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        if atomic_write:
            _replace_file(target, text)
        else:
            target.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise NumericsPersistenceError(
            f"Failed to save YAML parameters to {target}"
        ) from exc

    _LOG.info("Saved numerics parameters to %s", target)


def load_yaml_params(path: str | os.PathLike[str]) -> NumericsParams:
    """Load parameters from a YAML file."""
    if not is_yaml_path(path):
        raise NumericsPersistenceError("Path must end with .yaml or .yml")

    path_obj: Path = Path(os.fspath(path))
    try:
        text: str = path_obj.read_text(encoding="utf-8")
    except OSError as exc:
        raise NumericsPersistenceError(
            f"Failed to load YAML parameters from {path_obj}"
        ) from exc

    params: NumericsParams = loads_yaml(text)
    _LOG.info("Loaded numerics parameters from %s", path_obj)
    return params
