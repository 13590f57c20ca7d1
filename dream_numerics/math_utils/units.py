################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################
"""Angle conversions and numeric constants."""

from __future__ import annotations

import numpy as np
from numpy.typing import DTypeLike
from numpy.typing import NDArray


# Default scalar kind for vectors and matrices
RealT: np.dtype = np.dtype(np.float64)


class Angle:
    """Angular unit conversions."""

    @staticmethod
    def deg2rad(x: float | NDArray[np.float64]) -> float | NDArray[np.float64]:
        """Convert degrees to radians."""
        arr: NDArray[np.float64] = np.asarray(x, dtype=float)
        result: NDArray[np.float64] = np.deg2rad(arr)
        if np.ndim(result) == 0:
            return float(result)
        return result

    @staticmethod
    def rad2deg(x: float | NDArray[np.float64]) -> float | NDArray[np.float64]:
        """Convert radians to degrees."""
        arr: NDArray[np.float64] = np.asarray(x, dtype=float)
        result: NDArray[np.float64] = np.rad2deg(arr)
        if np.ndim(result) == 0:
            return float(result)
        return result


class NumericConstants:
    """Thresholds used by the transform builders."""

    # Length below which a direction vector is treated as zero
    EPS: float = 1e-12
    # Relative determinant threshold below which a matrix is singular
    SINGULAR_RTOL: float = 1e-12


def scalar_dtype(dtype: DTypeLike) -> np.dtype:
    """Return a validated numeric scalar dtype."""
    kind: np.dtype = np.dtype(dtype)
    if kind.kind not in ("f", "i", "u"):
        raise TypeError(f"unsupported scalar kind: {kind}")
    return kind
