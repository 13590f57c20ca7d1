################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################
"""Tests for the matrix container and its (row, column) addressing."""

from __future__ import annotations

import copy

import numpy as np
import pytest

from dream_numerics.math_utils.errors import ContractViolation
from dream_numerics.math_utils.matrix import IDENTITY
from dream_numerics.math_utils.matrix import ZERO
from dream_numerics.math_utils.matrix import Identity
from dream_numerics.math_utils.matrix import Mat22
from dream_numerics.math_utils.matrix import Mat33
from dream_numerics.math_utils.matrix import Mat44
from dream_numerics.math_utils.matrix import Matrix
from dream_numerics.math_utils.offsets import column_major_offset
from dream_numerics.math_utils.vector import Vec2
from dream_numerics.math_utils.vector import Vec3
from dream_numerics.math_utils.vector import Vec4
from dream_numerics.math_utils.vector import Vector


def _pattern(rows: int, cols: int) -> Matrix:
    """Return a matrix numbered 0, 1, 2, ... row by row."""
    m: Matrix = Matrix.of(rows, cols)()
    m.load_test_pattern()
    return m


def test_types_are_cached_per_shape_and_kind() -> None:
    """Matrix.of returns one class per (R, C, dtype)."""
    assert Matrix.of(4, 4) is Mat44
    assert Matrix.of(3, 3) is Mat33
    assert Matrix.of(2, 3).__name__ == "Mat23"
    assert Matrix.of(4, 4, np.float32).__name__ == "Mat44_float32"
    assert Mat44(ZERO).shape() == (4, 4)

    with pytest.raises(ValueError):
        Matrix.of(0, 4)
    with pytest.raises(TypeError):
        Matrix()


def test_token_construction() -> None:
    """ZERO and Identity tokens initialize every entry."""
    assert np.array_equal(Mat33(ZERO).as_array(), np.zeros((3, 3)))
    assert np.array_equal(Mat44(IDENTITY).as_array(), np.eye(4))
    assert np.array_equal(Mat33(Identity(2.0)).as_array(), 2.0 * np.eye(3))
    assert Mat44.identity_matrix(3.0) == Mat44(Identity(3.0))
    assert Mat22.zero_matrix() == Mat22(ZERO)

    rectangular: Matrix = Matrix.of(2, 3)(IDENTITY)
    assert np.array_equal(rectangular.as_array(), np.eye(2, 3))


def test_copy_construction_requires_matching_shape() -> None:
    """Copying between shapes is a type error."""
    source: Matrix = _pattern(3, 3)
    duplicate: Matrix = Mat33(source)
    assert duplicate == source

    duplicate[0, 0] = 42.0
    assert source.at(0, 0) == 0.0

    with pytest.raises(TypeError):
        Mat44(source)


def test_sequence_construction_is_length_checked() -> None:
    """Bulk loads must supply exactly R*C scalars in storage order."""
    m: Matrix = Mat22([1.0, 2.0, 3.0, 4.0])
    # Storage is column-major, so the first two scalars fill column 0
    assert m.at(0, 0) == 1.0
    assert m.at(1, 0) == 2.0
    assert m.at(0, 1) == 3.0
    assert Mat22.from_sequence([1.0, 2.0, 3.0, 4.0]) == m

    with pytest.raises(ValueError):
        Mat22([1.0, 2.0, 3.0])
    with pytest.raises(ValueError):
        Mat22.from_array(np.zeros((3, 3)))


def test_logical_addressing_is_layout_independent() -> None:
    """at(r, c) is row r, column c; value() exposes column-major storage."""
    m: Matrix = Mat22.from_rows([[1.0, 2.0], [3.0, 4.0]])
    assert m.at(0, 1) == 2.0
    assert m[1, 0] == 3.0
    assert m.value().tolist() == [1.0, 3.0, 2.0, 4.0]
    assert m.at(2) == 2.0
    assert Mat22.MAJOR_ORDER == "column"


def test_test_pattern_numbers_rows() -> None:
    """The test pattern walks each row in turn."""
    m: Matrix = _pattern(4, 4)
    for r in range(4):
        for c in range(4):
            assert m.at(r, c) == r * 4 + c
            assert m.value()[column_major_offset(r, c, 4)] == r * 4 + c


def test_accessors_are_bounds_checked() -> None:
    """Out-of-range rows, columns and raw indices violate the contract."""
    m: Matrix = Mat44(ZERO)
    with pytest.raises(ContractViolation):
        m.at(4, 0)
    with pytest.raises(ContractViolation):
        m.at(0, -1)
    with pytest.raises(ContractViolation):
        m.at(16)
    with pytest.raises(ContractViolation):
        m[0, 4] = 1.0


def test_bulk_mutators() -> None:
    """zero() and load_identity() overwrite every entry."""
    m: Matrix = _pattern(3, 3)
    m.load_identity(5.0)
    assert np.array_equal(m.as_array(), 5.0 * np.eye(3))
    m.zero()
    assert np.array_equal(m.as_array(), np.zeros((3, 3)))


def test_set_without_stride_writes_storage_order() -> None:
    """A contiguous copy lands in a column of a column-major matrix."""
    m: Matrix = Mat44(ZERO)
    m.set(0, 1, Vec4(1.0, 2.0, 3.0, 4.0))
    assert [m.at(r, 1) for r in range(4)] == [1.0, 2.0, 3.0, 4.0]
    assert m.get(0, 1, 4) == Vec4(1.0, 2.0, 3.0, 4.0)


def test_set_with_stride_writes_a_row() -> None:
    """A stride of R places consecutive components in consecutive columns."""
    m: Matrix = Mat44(ZERO)
    m.set(2, 0, Vec3(7.0, 8.0, 9.0), 4)
    assert [m.at(2, c) for c in range(4)] == [7.0, 8.0, 9.0, 0.0]
    assert m.get(2, 0, 3, 4) == Vec3(7.0, 8.0, 9.0)

    partial: Matrix = Mat44(ZERO)
    partial.set(1, 2, Vec2(5.0, 6.0))
    assert partial.at(1, 2) == 5.0
    assert partial.at(2, 2) == 6.0


def test_set_past_the_end_violates_contract() -> None:
    """Writes that would run off the end of storage are rejected."""
    m: Matrix = Mat44(ZERO)
    with pytest.raises(ContractViolation):
        m.set(2, 3, Vec4(1.0, 2.0, 3.0, 4.0))
    with pytest.raises(ContractViolation):
        m.set(1, 1, Vec4(1.0, 2.0, 3.0, 4.0), 4)
    with pytest.raises(ContractViolation):
        m.set(0, 0, Vec2(1.0, 2.0), 0)


def test_transposed_matrix_swaps_shape() -> None:
    """Transposition is defined for every shape."""
    m: Matrix = _pattern(2, 3)
    t: Matrix = m.transposed_matrix()
    assert t.shape() == (3, 2)
    assert np.array_equal(t.as_array(), m.as_array().T)


def test_transpose_is_an_involution() -> None:
    """Transposing twice restores the original exactly."""
    for rows, cols in ((2, 3), (4, 4), (3, 1)):
        m: Matrix = _pattern(rows, cols)
        assert m.transposed_matrix().transposed_matrix() == m

    square: Matrix = _pattern(4, 4)
    original: Matrix = square.copy()
    assert square.transpose() is square
    assert square != original
    assert square.transpose() == original


def test_in_place_transpose_requires_square() -> None:
    """Only square matrices can be transposed in place."""
    assert hasattr(Mat33, "transpose")
    assert not hasattr(Matrix.of(2, 3), "transpose")


def test_capabilities_follow_shape_and_kind() -> None:
    """Capabilities exist only where they are mathematically defined."""
    assert hasattr(Mat44, "inverse_matrix")
    assert not hasattr(Mat33, "inverse_matrix")
    assert not hasattr(Mat22, "inverse_matrix")
    assert not hasattr(Matrix.of(2, 3), "scaling_matrix")
    assert hasattr(Matrix.of(2, 3), "multiply")
    assert hasattr(Mat44, "equal_within_tolerance")
    assert hasattr(Matrix.of(4, 4, np.float32), "equal_within_tolerance")
    assert not hasattr(Matrix.of(4, 4, np.int32), "equal_within_tolerance")
    assert hasattr(Matrix.of(4, 4, np.int32), "inverse_matrix")


def test_copies_are_independent() -> None:
    """Copies do not share storage with the original."""
    m: Matrix = _pattern(3, 3)
    for duplicate in (m.copy(), copy.copy(m), copy.deepcopy(m)):
        duplicate[1, 1] = -1.0
        assert m.at(1, 1) == 4.0


def test_exact_equality() -> None:
    """Exact equality compares shape and every entry."""
    assert _pattern(3, 3) == _pattern(3, 3)
    assert _pattern(2, 3) != _pattern(3, 2)
    assert _pattern(2, 2) != Mat22(ZERO)
    with pytest.raises(TypeError):
        hash(Mat22(ZERO))


def test_repr_round_trips_rows() -> None:
    """The repr shows the logical rows."""
    m: Matrix = Mat22.from_rows([[1.0, 2.0], [3.0, 4.0]])
    assert repr(m) == "Mat22.from_rows([[1.0, 2.0], [3.0, 4.0]])"


def test_get_returns_vector_of_requested_length() -> None:
    """get() builds a vector class of the requested length."""
    v: Vector = _pattern(3, 3).get(0, 0, 3)
    assert isinstance(v, Vec3)
    assert v == Vec3(0.0, 3.0, 6.0)
