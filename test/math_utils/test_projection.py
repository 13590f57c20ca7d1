################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################
"""Tests for projection builders."""

from __future__ import annotations

import math

import numpy as np
import pytest

from dream_numerics.math_utils.errors import DegenerateTransformError
from dream_numerics.math_utils.matrix import Mat44
from dream_numerics.math_utils.matrix import Matrix
from dream_numerics.math_utils.projection import orthographic_matrix
from dream_numerics.math_utils.projection import perspective_matrix
from dream_numerics.math_utils.projection import rotation
from dream_numerics.math_utils.ulps import equal_within_ulps
from dream_numerics.math_utils.vector import Vec2
from dream_numerics.math_utils.vector import Vec3
from dream_numerics.math_utils.vector import Vector


def test_symmetric_frustum() -> None:
    """A 90 degree square frustum scales x and y equally."""
    m: Matrix = perspective_matrix(math.pi / 2.0, 1.0, 1.0, 10.0)
    assert equal_within_ulps(m.at(0, 0), m.at(5))
    assert m.at(0, 0) == pytest.approx(1.0)
    assert isinstance(m, Mat44)


def test_perspective_layout() -> None:
    """Entries are written in the column-major layout graphics APIs expect."""
    m: Matrix = perspective_matrix(math.pi / 3.0, 2.0, 1.0, 10.0)
    f: float = 1.0 / math.tan(math.pi / 6.0)

    assert m.value()[11] == -1.0
    assert m.at(3, 2) == -1.0
    assert m.at(0, 0) == pytest.approx(f / 2.0)
    assert m.at(1, 1) == pytest.approx(f)
    assert m.at(2, 2) == pytest.approx(-11.0 / 9.0)
    assert m.at(2, 3) == pytest.approx(-20.0 / 9.0)
    assert m.at(3, 3) == 0.0
    assert np.count_nonzero(m.value()) == 5


def test_perspective_maps_clip_planes_to_unit_depth() -> None:
    """Points on the near and far planes land on depth -1 and +1."""
    m: Matrix = perspective_matrix(math.pi / 2.0, 1.0, 1.0, 10.0)
    near_point: Vector = m * Vec3(0.0, 0.0, -1.0)
    far_point: Vector = m * Vec3(0.0, 0.0, -10.0)
    assert near_point[2] == pytest.approx(-1.0)
    assert far_point[2] == pytest.approx(1.0)


def test_degenerate_perspective_inputs() -> None:
    """Inputs that would divide by zero are refused."""
    with pytest.raises(DegenerateTransformError):
        perspective_matrix(math.pi / 2.0, 1.0, 5.0, 5.0)
    with pytest.raises(DegenerateTransformError):
        perspective_matrix(math.pi / 2.0, 0.0, 1.0, 10.0)
    with pytest.raises(DegenerateTransformError):
        perspective_matrix(0.0, 1.0, 1.0, 10.0)


def test_orthographic_layout() -> None:
    """Scale on the diagonal and the negated offset in the last column."""
    m: Matrix = orthographic_matrix(Vec3(1.0, 2.0, 3.0), Vec3(2.0, 4.0, 8.0))
    assert m.at(0, 0) == 1.0
    assert m.at(1, 1) == 0.5
    assert m.at(2, 2) == -0.25
    assert [m.at(r, 3) for r in range(4)] == [-1.0, -2.0, -3.0, 1.0]
    assert m.value()[12:16].tolist() == [-1.0, -2.0, -3.0, 1.0]


def test_degenerate_orthographic_inputs() -> None:
    """Zero extents and wrong vector lengths are refused."""
    with pytest.raises(DegenerateTransformError):
        orthographic_matrix(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 0.0, 1.0))
    with pytest.raises(TypeError):
        orthographic_matrix(Vec2(0.0, 0.0), Vec2(1.0, 1.0))


def test_rotation_shorthands() -> None:
    """rotation() forwards every form to the 4x4 factory."""
    axis: Vector = Vec3(0.0, 0.0, 1.0)
    pivot: Vector = Vec3(1.0, 1.0, 0.0)
    assert rotation(0.5, axis) == Mat44.rotating_matrix(0.5, axis)
    assert rotation(0.5, axis, pivot) == Mat44.rotating_matrix(0.5, axis, pivot)

    source: Vector = Vec3(1.0, 0.0, 0.0)
    target: Vector = Vec3(0.0, 1.0, 0.0)
    assert rotation(source, target, axis) == Mat44.rotating_matrix(
        source, target, axis
    )


def test_float32_projection() -> None:
    """Builders honour the requested scalar kind."""
    m: Matrix = perspective_matrix(math.pi / 2.0, 1.0, 1.0, 10.0, np.float32)
    assert m.value().dtype == np.float32
