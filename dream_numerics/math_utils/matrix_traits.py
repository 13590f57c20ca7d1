################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################
"""Capability mixins composed into concrete matrix classes.

``Matrix.of(R, C, dtype)`` mixes in only the capabilities that are defined
for the requested shape and scalar kind:

* MatrixMultiplicationTraits for every shape
* MatrixSquareTraits when R == C
* MatrixInverseTraits when R == C == 4
* MatrixEqualityTraits when the scalar kind is float32 or float64

A method that is not defined for a shape is absent from that class, so
``Mat33.inverse_matrix`` raises AttributeError and static type checkers can
flag the call.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING
from typing import Any
from typing import cast

import numpy as np
from numpy.typing import NDArray

from dream_numerics.math_utils.errors import DegenerateTransformError
from dream_numerics.math_utils.errors import ensure
from dream_numerics.math_utils.ulps import DEFAULT_ULPS
from dream_numerics.math_utils.ulps import all_equal_within_ulps
from dream_numerics.math_utils.units import NumericConstants
from dream_numerics.math_utils.vector import Vector
from dream_numerics.math_utils.vector import cross_product
from dream_numerics.math_utils.vector import dot_product


if TYPE_CHECKING:
    from dream_numerics.math_utils.matrix import Matrix


_LOG: logging.Logger = logging.getLogger(__name__)


class MatrixMultiplicationTraits:
    """Matrix-vector and matrix-matrix products in column-vector notation."""

    __slots__ = ()

    def multiply(self, other: Any) -> Any:
        """Return ``self * other`` for a vector or matrix operand.

        A vector of length C yields a vector of length R. A vector of length
        C-1 is treated as a non-homogeneous point: a trailing 1 is appended,
        the product is divided by its last coordinate and reduced back to
        length R-1. A matrix with C rows and K columns yields an R x K
        matrix, so applying B after A is ``B * A``.
        """
        matrix: Matrix = cast("Matrix", self)
        from dream_numerics.math_utils.matrix import Matrix

        if isinstance(other, Matrix):
            if type(other).R != matrix.C:
                raise TypeError(
                    f"cannot multiply {type(matrix).__name__} by "
                    f"{type(other).__name__}"
                )
            product: NDArray[Any] = matrix.as_array() @ other.as_array()
            return Matrix.of(matrix.R, type(other).C, matrix.dtype).from_array(
                product
            )

        if isinstance(other, Vector):
            length: int = type(other).D
            if length == matrix.C:
                result: NDArray[Any] = matrix.as_array() @ other.value()
                return Vector.of(matrix.R, matrix.dtype)(result)
            if length == matrix.C - 1:
                return self._multiply_point(other)
            raise TypeError(
                f"cannot multiply {type(matrix).__name__} by {type(other).__name__}"
            )

        raise TypeError(
            f"cannot multiply {type(matrix).__name__} by {type(other).__name__}"
        )

    def _multiply_point(self, point: Vector) -> Vector:
        """Apply the matrix to a non-homogeneous point."""
        homogeneous: Vector = self.multiply(point << 1)
        w: Any = homogeneous[len(homogeneous) - 1]
        if w == 0 or not math.isfinite(w):
            raise DegenerateTransformError(
                "perspective divide by a zero or non-finite w"
            )
        return (homogeneous / w).reduce()

    def __mul__(self, other: Any) -> Any:
        from dream_numerics.math_utils.matrix import Matrix

        if not isinstance(other, (Matrix, Vector)):
            return NotImplemented
        return self.multiply(other)

    def __matmul__(self, other: Any) -> Any:
        return self.__mul__(other)


class MatrixInverseTraits:
    """Closed-form inversion, defined only for 4x4 matrices."""

    __slots__ = ()

    def determinant(self) -> float:
        """Return the determinant of the 4x4 matrix."""
        s: NDArray[Any]
        c: NDArray[Any]
        s, c = _sub_determinants(cast("Matrix", self).as_array())
        return _determinant(s, c)

    def inverse_matrix(self, rtol: float = NumericConstants.SINGULAR_RTOL) -> Matrix:
        """Return the inverse computed from the adjugate and determinant.

        Raises DegenerateTransformError when the determinant is zero, not
        finite, or smaller than ``rtol`` times the Hadamard bound: the smaller
        of the products of the row norms and of the column norms. The ratio
        measures how close the rows are to linear dependence. A translation
        only enters the bound through the norm of its own column.
        """
        matrix: Matrix = cast("Matrix", self)
        a: NDArray[Any] = matrix.as_array().astype(np.float64)
        s: NDArray[Any]
        c: NDArray[Any]
        s, c = _sub_determinants(a)
        det: float = _determinant(s, c)

        bound: float = min(
            float(np.prod(np.linalg.norm(a, axis=1))),
            float(np.prod(np.linalg.norm(a, axis=0))),
        )
        if det == 0.0 or not math.isfinite(det) or abs(det) <= rtol * bound:
            _LOG.debug("Refusing to invert matrix with determinant %g", det)
            raise DegenerateTransformError(f"matrix is singular (det={det:g})")

        adjugate: NDArray[np.float64] = np.array(
            [
                [
                    a[1, 1] * c[5] - a[1, 2] * c[4] + a[1, 3] * c[3],
                    -a[0, 1] * c[5] + a[0, 2] * c[4] - a[0, 3] * c[3],
                    a[3, 1] * s[5] - a[3, 2] * s[4] + a[3, 3] * s[3],
                    -a[2, 1] * s[5] + a[2, 2] * s[4] - a[2, 3] * s[3],
                ],
                [
                    -a[1, 0] * c[5] + a[1, 2] * c[2] - a[1, 3] * c[1],
                    a[0, 0] * c[5] - a[0, 2] * c[2] + a[0, 3] * c[1],
                    -a[3, 0] * s[5] + a[3, 2] * s[2] - a[3, 3] * s[1],
                    a[2, 0] * s[5] - a[2, 2] * s[2] + a[2, 3] * s[1],
                ],
                [
                    a[1, 0] * c[4] - a[1, 1] * c[2] + a[1, 3] * c[0],
                    -a[0, 0] * c[4] + a[0, 1] * c[2] - a[0, 3] * c[0],
                    a[3, 0] * s[4] - a[3, 1] * s[2] + a[3, 3] * s[0],
                    -a[2, 0] * s[4] + a[2, 1] * s[2] - a[2, 3] * s[0],
                ],
                [
                    -a[1, 0] * c[3] + a[1, 1] * c[1] - a[1, 2] * c[0],
                    a[0, 0] * c[3] - a[0, 1] * c[1] + a[0, 2] * c[0],
                    -a[3, 0] * s[3] + a[3, 1] * s[1] - a[3, 2] * s[0],
                    a[2, 0] * s[3] - a[2, 1] * s[1] + a[2, 2] * s[0],
                ],
            ],
            dtype=np.float64,
        )
        return type(matrix).from_array(adjugate / det)


def _sub_determinants(a: NDArray[Any]) -> tuple[NDArray[Any], NDArray[Any]]:
    """Return the 2x2 minors of the top and bottom row pairs of a 4x4 matrix."""
    s: NDArray[Any] = np.array(
        [
            a[0, 0] * a[1, 1] - a[1, 0] * a[0, 1],
            a[0, 0] * a[1, 2] - a[1, 0] * a[0, 2],
            a[0, 0] * a[1, 3] - a[1, 0] * a[0, 3],
            a[0, 1] * a[1, 2] - a[1, 1] * a[0, 2],
            a[0, 1] * a[1, 3] - a[1, 1] * a[0, 3],
            a[0, 2] * a[1, 3] - a[1, 2] * a[0, 3],
        ],
        dtype=np.float64,
    )
    c: NDArray[Any] = np.array(
        [
            a[2, 0] * a[3, 1] - a[3, 0] * a[2, 1],
            a[2, 0] * a[3, 2] - a[3, 0] * a[2, 2],
            a[2, 0] * a[3, 3] - a[3, 0] * a[2, 3],
            a[2, 1] * a[3, 2] - a[3, 1] * a[2, 2],
            a[2, 1] * a[3, 3] - a[3, 1] * a[2, 3],
            a[2, 2] * a[3, 3] - a[3, 2] * a[2, 3],
        ],
        dtype=np.float64,
    )
    return s, c


def _determinant(s: NDArray[Any], c: NDArray[Any]) -> float:
    """Return the determinant from the 2x2 minors of a 4x4 matrix."""
    return float(
        s[0] * c[5]
        - s[1] * c[4]
        + s[2] * c[3]
        + s[3] * c[2]
        - s[4] * c[1]
        + s[5] * c[0]
    )


class MatrixSquareTraits:
    """Transform factories and composers for square N x N matrices.

    Rotations about an axis fill the upper-left 3x3 block of an identity
    matrix, so they require N >= 3. ``rotating_matrix_around_z`` only touches
    the first two axes and also works for N == 2.
    """

    __slots__ = ()

    @classmethod
    def scaling_matrix(cls, amount: Vector) -> Matrix:
        """Return a diagonal matrix scaling the first K axes by amount."""
        matrix_type: type[Matrix] = cast("type[Matrix]", cls)
        ensure(len(amount) <= matrix_type.R, "K <= N")
        result: Matrix = matrix_type.identity_matrix()
        for i, value in enumerate(amount):
            result[i, i] = value
        return result

    @classmethod
    def translating_matrix(cls, amount: Vector) -> Matrix:
        """Return an identity matrix with amount in the last column."""
        matrix_type: type[Matrix] = cast("type[Matrix]", cls)
        ensure(len(amount) < matrix_type.R, "K < N")
        result: Matrix = matrix_type.identity_matrix()
        last: int = matrix_type.C - 1
        for i, value in enumerate(amount):
            result[i, last] = value
        return result

    @classmethod
    def rotating_matrix(
        cls,
        radians_or_from: Any,
        normal_or_to: Vector,
        point_or_normal: Vector | None = None,
    ) -> Matrix:
        """Return a rotation matrix.

        Accepted forms:

        * ``rotating_matrix(radians, normal)``: rotation about a unit axis
          through the origin
        * ``rotating_matrix(radians, normal, point)``: rotation about an axis
          through point
        * ``rotating_matrix(from, to, normal)``: see rotating_matrix_between
        """
        matrix_type: type[Matrix] = cast("type[Matrix]", cls)
        if isinstance(radians_or_from, Vector):
            if point_or_normal is None:
                raise TypeError("rotating_matrix(from, to, normal) requires normal")
            return cls.rotating_matrix_between(
                radians_or_from, normal_or_to, point_or_normal
            )

        radians: float = float(radians_or_from)
        rotation: Matrix = cls._axis_angle_matrix(radians, normal_or_to)
        if point_or_normal is None:
            return rotation

        point: Vector = point_or_normal
        return (
            matrix_type.translating_matrix(point)
            * rotation
            * matrix_type.translating_matrix(-point)
        )

    @classmethod
    def rotating_matrix_between(
        cls,
        from_unit_vector: Vector,
        to_unit_vector: Vector,
        around_normal: Vector,
        eps: float = NumericConstants.EPS,
    ) -> Matrix:
        """Return the rotation taking from_unit_vector onto to_unit_vector.

        The axis is ``cross(from, to)``. When the inputs are parallel the
        identity is returned. When they are anti-parallel the axis is
        ambiguous: the rotation is by pi about the component of
        around_normal orthogonal to from_unit_vector, and
        DegenerateTransformError is raised if that component vanishes.
        """
        matrix_type: type[Matrix] = cast("type[Matrix]", cls)
        source: Vector = from_unit_vector.normalized_vector(eps)
        target: Vector = to_unit_vector.normalized_vector(eps)

        cos_angle: float = float(np.clip(dot_product(source, target), -1.0, 1.0))
        axis: Vector = cross_product(source, target)
        if axis.length() > eps:
            return cls._axis_angle_matrix(math.acos(cos_angle), axis)

        if cos_angle > 0.0:
            return matrix_type.identity_matrix()

        # Anti-parallel: project the hint normal off the source direction
        hint: Vector = around_normal - source * dot_product(around_normal, source)
        if hint.length() <= eps:
            raise DegenerateTransformError(
                "around_normal is parallel to the anti-parallel input vectors"
            )
        _LOG.debug("Resolving anti-parallel rotation about %s", hint)
        return cls._axis_angle_matrix(math.pi, hint)

    @classmethod
    def _axis_angle_matrix(cls, radians: float, normal: Vector) -> Matrix:
        """Return the Rodrigues rotation about normal through the origin."""
        matrix_type: type[Matrix] = cast("type[Matrix]", cls)
        ensure(matrix_type.R >= 3, "N >= 3")
        if len(normal) != 3:
            raise TypeError("rotation axis must be a 3-component vector")
        axis: Vector = normal.normalized_vector()
        x: float = float(axis[0])
        y: float = float(axis[1])
        z: float = float(axis[2])
        c: float = math.cos(radians)
        s: float = math.sin(radians)
        t: float = 1.0 - c

        result: Matrix = matrix_type.identity_matrix()
        result[0, 0] = t * x * x + c
        result[0, 1] = t * x * y - s * z
        result[0, 2] = t * x * z + s * y
        result[1, 0] = t * x * y + s * z
        result[1, 1] = t * y * y + c
        result[1, 2] = t * y * z - s * x
        result[2, 0] = t * x * z - s * y
        result[2, 1] = t * y * z + s * x
        result[2, 2] = t * z * z + c
        return result

    @classmethod
    def rotating_matrix_around_x(cls, radians: float) -> Matrix:
        """Return a rotation about the x axis."""
        matrix_type: type[Matrix] = cast("type[Matrix]", cls)
        ensure(matrix_type.R >= 3, "N >= 3")
        c: float = math.cos(radians)
        s: float = math.sin(radians)
        result: Matrix = matrix_type.identity_matrix()
        result[1, 1] = c
        result[1, 2] = -s
        result[2, 1] = s
        result[2, 2] = c
        return result

    @classmethod
    def rotating_matrix_around_y(cls, radians: float) -> Matrix:
        """Return a rotation about the y axis."""
        matrix_type: type[Matrix] = cast("type[Matrix]", cls)
        ensure(matrix_type.R >= 3, "N >= 3")
        c: float = math.cos(radians)
        s: float = math.sin(radians)
        result: Matrix = matrix_type.identity_matrix()
        result[0, 0] = c
        result[0, 2] = s
        result[2, 0] = -s
        result[2, 2] = c
        return result

    @classmethod
    def rotating_matrix_around_z(cls, radians: float) -> Matrix:
        """Return a rotation about the z axis (also valid for 2x2)."""
        matrix_type: type[Matrix] = cast("type[Matrix]", cls)
        ensure(matrix_type.R >= 2, "N >= 2")
        c: float = math.cos(radians)
        s: float = math.sin(radians)
        result: Matrix = matrix_type.identity_matrix()
        result[0, 0] = c
        result[0, 1] = -s
        result[1, 0] = s
        result[1, 1] = c
        return result

    # Composers: the new transform is applied after this one

    def rotated_matrix(
        self,
        radians: float,
        normal: Vector,
        point: Vector | None = None,
    ) -> Matrix:
        """Return ``self * rotating_matrix(radians, normal[, point])``."""
        matrix: Matrix = cast("Matrix", self)
        return matrix * type(matrix).rotating_matrix(radians, normal, point)

    def scaled_matrix(self, amount: Vector) -> Matrix:
        """Return ``self * scaling_matrix(amount)``."""
        matrix: Matrix = cast("Matrix", self)
        return matrix * type(matrix).scaling_matrix(amount)

    def translated_matrix(self, amount: Vector) -> Matrix:
        """Return ``self * translating_matrix(amount)``."""
        matrix: Matrix = cast("Matrix", self)
        return matrix * type(matrix).translating_matrix(amount)

    def transpose(self) -> Matrix:
        """Transpose in place and return self."""
        matrix: Matrix = cast("Matrix", self)
        matrix.load(matrix.as_array().T.ravel(order="F"))
        return matrix


class MatrixEqualityTraits:
    """Tolerance-based equality for float32 and float64 matrices."""

    __slots__ = ()

    def equal_within_tolerance(self, other: Matrix, ulps: int = DEFAULT_ULPS) -> bool:
        """Return True if every entry pair is equal within ulps."""
        matrix: Matrix = cast("Matrix", self)
        from dream_numerics.math_utils.matrix import Matrix

        if not isinstance(other, Matrix) or other.shape() != matrix.shape():
            raise TypeError("tolerance equality requires matrices of equal shape")
        return all_equal_within_ulps(
            matrix.value().tolist(), other.value().tolist(), ulps, matrix.dtype
        )
