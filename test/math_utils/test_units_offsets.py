################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################
"""Tests for angle conversions, scalar kinds and storage offsets."""

from __future__ import annotations

import math

import numpy as np
import pytest

from dream_numerics.math_utils.offsets import column_major_offset
from dream_numerics.math_utils.offsets import row_major_offset
from dream_numerics.math_utils.units import Angle
from dream_numerics.math_utils.units import scalar_dtype


def test_angle_round_trip() -> None:
    """Degrees and radians convert in both directions."""
    assert Angle.deg2rad(180.0) == pytest.approx(math.pi)
    assert Angle.rad2deg(math.pi / 2.0) == pytest.approx(90.0)

    degrees: np.ndarray = np.array([0.0, 45.0, 90.0])
    assert np.allclose(Angle.rad2deg(Angle.deg2rad(degrees)), degrees)


def test_scalar_dtype_accepts_numeric_kinds() -> None:
    """Float, signed and unsigned integer kinds are supported."""
    assert scalar_dtype(np.float32) == np.dtype(np.float32)
    assert scalar_dtype("int32") == np.dtype(np.int32)
    assert scalar_dtype(np.uint8) == np.dtype(np.uint8)


def test_scalar_dtype_rejects_other_kinds() -> None:
    """Boolean and complex scalars are rejected."""
    with pytest.raises(TypeError):
        scalar_dtype(np.bool_)
    with pytest.raises(TypeError):
        scalar_dtype(np.complex128)


def test_offsets() -> None:
    """Row-major walks columns first, column-major walks rows first."""
    assert row_major_offset(1, 2, 4) == 6
    assert column_major_offset(1, 2, 4) == 9
    assert row_major_offset(0, 0, 4) == column_major_offset(0, 0, 4) == 0


def test_offsets_cover_storage_once() -> None:
    """Each layout maps the (row, col) grid onto every index exactly once."""
    rows: int = 2
    cols: int = 3
    row_major: set[int] = {
        row_major_offset(r, c, cols) for r in range(rows) for c in range(cols)
    }
    column_major: set[int] = {
        column_major_offset(r, c, rows) for r in range(rows) for c in range(cols)
    }
    assert row_major == set(range(rows * cols))
    assert column_major == set(range(rows * cols))
