################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

"""Structured configuration schema for the numerics core and its consumers."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from dataclasses import replace
from typing import Any

import numpy as np

from dream_numerics.math_utils.ulps import DEFAULT_ULPS
from dream_numerics.math_utils.units import NumericConstants


# ULP threshold for tolerance-based matrix equality
TOLERANCE_ULPS: int = DEFAULT_ULPS
# Relative determinant threshold for singular 4x4 inversion
TOLERANCE_SINGULAR_RTOL: float = NumericConstants.SINGULAR_RTOL
# Length below which rotation axes and directions are degenerate
TOLERANCE_DEGENERATE_EPS: float = NumericConstants.EPS

# Camera position in world coordinates
CAMERA_ORIGIN: np.ndarray = np.array([0.0, 0.0, 0.0], dtype=np.float64)
# Unit view direction in world coordinates
CAMERA_DIRECTION: np.ndarray = np.array([0.0, 0.0, 1.0], dtype=np.float64)
# Unit up vector in world coordinates
CAMERA_UP: np.ndarray = np.array([0.0, 1.0, 0.0], dtype=np.float64)
# Vertical field of view in degrees
CAMERA_FIELD_OF_VIEW_DEG: float = 60.0
# Near clip plane distance
CAMERA_NEAR: float = 0.1
# Far clip plane distance
CAMERA_FAR: float = 100.0

# Seed for the lattice noise permutation and value tables
NOISE_SEED: int = 0


class NumericsParamsError(Exception):
    """Raised when numerics parameter validation fails."""


def _as_float_array(value: Any, name: str) -> np.ndarray:
    """Coerce a value to a float64 numpy array with shape (3,)."""
    try:
        array: np.ndarray = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise NumericsParamsError(f"{name} must be numeric") from exc
    if array.shape != (3,):
        raise NumericsParamsError(f"{name} must have shape (3,)")
    if not np.all(np.isfinite(array)):
        raise NumericsParamsError(f"{name} must contain finite values")
    return array


def _require_positive(value: float, name: str) -> None:
    """Require a positive finite number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise NumericsParamsError(f"{name} must be a number")
    if not np.isfinite(value) or value <= 0.0:
        raise NumericsParamsError(f"{name} must be positive")


def _require_non_negative_int(value: int, name: str) -> None:
    """Require a non-negative integer value."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise NumericsParamsError(f"{name} must be an int")
    if value < 0:
        raise NumericsParamsError(f"{name} must be non-negative")


@dataclass(frozen=True)
class ToleranceParams:
    """Numerical thresholds shared by the transform builders."""

    # ULP threshold for tolerance-based equality
    ulps: int = TOLERANCE_ULPS
    # Relative determinant threshold for singular inversion
    singular_rtol: float = TOLERANCE_SINGULAR_RTOL
    # Length below which directions are degenerate
    degenerate_eps: float = TOLERANCE_DEGENERATE_EPS


@dataclass(frozen=True)
class CameraParams:
    """Point camera placement and projection."""

    # Camera position in world coordinates
    origin: np.ndarray = field(default_factory=lambda: CAMERA_ORIGIN.copy())
    # Unit view direction in world coordinates
    direction: np.ndarray = field(default_factory=lambda: CAMERA_DIRECTION.copy())
    # Unit up vector in world coordinates
    up: np.ndarray = field(default_factory=lambda: CAMERA_UP.copy())
    # Vertical field of view in degrees
    field_of_view_deg: float = CAMERA_FIELD_OF_VIEW_DEG
    # Near clip plane distance
    near: float = CAMERA_NEAR
    # Far clip plane distance
    far: float = CAMERA_FAR

    def __post_init__(self) -> None:
        """Coerce camera vectors into float64 numpy arrays."""
        object.__setattr__(
            self, "origin", _as_float_array(self.origin, "camera.origin")
        )
        object.__setattr__(
            self, "direction", _as_float_array(self.direction, "camera.direction")
        )
        object.__setattr__(self, "up", _as_float_array(self.up, "camera.up"))


@dataclass(frozen=True)
class NoiseParams:
    """Lattice noise generator parameters."""

    # Seed for the permutation and value tables
    seed: int = NOISE_SEED


@dataclass(frozen=True)
class NumericsParams:
    """Complete configuration tree."""

    tolerance: ToleranceParams
    camera: CameraParams
    noise: NoiseParams

    @classmethod
    def defaults(cls) -> NumericsParams:
        """Return the default parameter tree."""
        return cls(
            tolerance=ToleranceParams(),
            camera=CameraParams(),
            noise=NoiseParams(),
        )

    @classmethod
    def from_nested_dict(cls, data: dict[str, Any]) -> NumericsParams:
        """Build a parameter tree from a nested mapping, filling in defaults.

        Unknown namespaces or keys raise NumericsParamsError.
        """
        if not isinstance(data, dict):
            raise NumericsParamsError("parameter root must be a mapping")
        namespaces: dict[str, type] = {
            "tolerance": ToleranceParams,
            "camera": CameraParams,
            "noise": NoiseParams,
        }
        unknown: set[str] = set(data) - set(namespaces)
        if unknown:
            raise NumericsParamsError(f"unknown namespaces: {sorted(unknown)}")

        built: dict[str, Any] = {}
        for name, params_type in namespaces.items():
            values: Any = data.get(name, {})
            if values is None:
                values = {}
            if not isinstance(values, dict):
                raise NumericsParamsError(f"{name} must be a mapping")
            allowed: set[str] = {f.name for f in fields(params_type)}
            extra: set[str] = set(values) - allowed
            if extra:
                raise NumericsParamsError(f"unknown {name} keys: {sorted(extra)}")
            built[name] = params_type(**values)
        return cls(**built)

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        _require_non_negative_int(self.tolerance.ulps, "tolerance.ulps")
        _require_positive(self.tolerance.singular_rtol, "tolerance.singular_rtol")
        _require_positive(self.tolerance.degenerate_eps, "tolerance.degenerate_eps")

        _require_positive(self.camera.field_of_view_deg, "camera.field_of_view_deg")
        if self.camera.field_of_view_deg >= 180.0:
            raise NumericsParamsError("camera.field_of_view_deg must be below 180")
        _require_positive(self.camera.near, "camera.near")
        _require_positive(self.camera.far, "camera.far")

        _require_non_negative_int(self.noise.seed, "noise.seed")

    def replace(self, **namespace_overrides: Any) -> NumericsParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict of plain Python values."""
        return _dataclass_to_dict(self)


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses and numpy arrays into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            item.name: _dataclass_to_dict(getattr(value, item.name))
            for item in fields(value)
        }
    if isinstance(value, np.ndarray):
        return value.tolist()
    return value
