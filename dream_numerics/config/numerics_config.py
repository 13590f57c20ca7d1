################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

"""High-level configuration wrapper for the numerics core."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from dream_numerics.config.numerics_params import CameraParams
from dream_numerics.config.numerics_params import NoiseParams
from dream_numerics.config.numerics_params import NumericsParams
from dream_numerics.config.numerics_params import NumericsParamsError
from dream_numerics.config.numerics_params import ToleranceParams
from dream_numerics.math_utils.matrix import Matrix
from dream_numerics.math_utils.vector import Vector


# Allowed deviation of camera direction and up from unit length
UNIT_LENGTH_TOLERANCE: float = 1e-6


class NumericsConfigError(Exception):
    """Raised when numerics configuration validation fails."""


@dataclass(frozen=True)
class NumericsConfig:
    """Validated view of the numerics parameter tree."""

    params: NumericsParams

    def __init__(self, params: NumericsParams) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(self, "params", params)
        self.validate()

    @classmethod
    def defaults(cls) -> NumericsConfig:
        """Return a configuration holding the default parameters."""
        return cls(NumericsParams.defaults())

    def validate(self) -> None:
        """Validate parameter invariants and cross-namespace policies."""
        try:
            self.params.validate()
        except NumericsParamsError as exc:
            raise NumericsConfigError(str(exc)) from exc

        camera: CameraParams = self.params.camera
        for name, axis in (("direction", camera.direction), ("up", camera.up)):
            if abs(float(np.linalg.norm(axis)) - 1.0) > UNIT_LENGTH_TOLERANCE:
                raise NumericsConfigError(f"camera.{name} must be unit length")

        side: np.ndarray = np.cross(camera.direction, camera.up)
        if float(np.linalg.norm(side)) <= self.params.tolerance.degenerate_eps:
            raise NumericsConfigError("camera.direction and camera.up are parallel")

        if camera.near >= camera.far:
            raise NumericsConfigError("camera.near must be less than camera.far")

    def tolerance(self) -> ToleranceParams:
        """Return the numerical tolerance parameters."""
        return self.params.tolerance

    def camera(self) -> CameraParams:
        """Return the camera parameters."""
        return self.params.camera

    def noise(self) -> NoiseParams:
        """Return the noise generator parameters."""
        return self.params.noise

    def inverse_matrix(self, matrix: Matrix) -> Matrix:
        """Invert a 4x4 matrix with the configured singularity threshold."""
        return matrix.inverse_matrix(rtol=self.params.tolerance.singular_rtol)

    def equal_within_tolerance(self, a: Matrix | Vector, b: Matrix | Vector) -> bool:
        """Compare two matrices or vectors with the configured ULP budget."""
        return a.equal_within_tolerance(b, ulps=self.params.tolerance.ulps)
