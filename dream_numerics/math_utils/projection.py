################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################
"""Projection builders and 4x4 rotation shorthands.

The projection matrices are written by raw storage index in the
column-major layout used by every matrix class, which matches the memory
layout OpenGL expects from ``value()``.
"""

from __future__ import annotations

import math

from numpy.typing import DTypeLike

from dream_numerics.math_utils.errors import DegenerateTransformError
from dream_numerics.math_utils.matrix import ZERO
from dream_numerics.math_utils.matrix import Mat44
from dream_numerics.math_utils.matrix import Matrix
from dream_numerics.math_utils.units import RealT
from dream_numerics.math_utils.vector import Vector


def perspective_matrix(
    field_of_view: float,
    aspect_ratio: float,
    near: float,
    far: float,
    dtype: DTypeLike = RealT,
) -> Matrix:
    """Return a right-handed perspective projection looking down -z.

    Args:
        field_of_view: Vertical field of view in radians
        aspect_ratio: Viewport width divided by height
        near: Distance to the near clip plane
        far: Distance to the far clip plane
        dtype: Scalar kind of the returned matrix

    Returns:
        4x4 matrix mapping eye coordinates into clip coordinates
    """
    tangent: float = math.tan(field_of_view * 0.5)
    if tangent == 0.0 or not math.isfinite(tangent):
        raise DegenerateTransformError("field_of_view must be in (0, pi)")
    if aspect_ratio == 0.0:
        raise DegenerateTransformError("aspect_ratio must be non-zero")
    if near == far:
        raise DegenerateTransformError("near and far clip planes must differ")

    f: float = 1.0 / tangent
    n: float = 1.0 / (near - far)

    result: Matrix = Matrix.of(4, 4, dtype)(ZERO)
    result[0] = f / aspect_ratio
    result[5] = f
    result[10] = (far + near) * n
    result[11] = -1.0
    result[14] = (2.0 * far * near) * n
    return result


def orthographic_matrix(
    translation: Vector,
    size: Vector,
    dtype: DTypeLike = RealT,
) -> Matrix:
    """Return an orthographic projection of a box of the given size.

    Args:
        translation: Offset of the box, negated into the last column
        size: Extent of the box along x, y and z
        dtype: Scalar kind of the returned matrix
    """
    if len(translation) != 3 or len(size) != 3:
        raise TypeError("translation and size must be 3-component vectors")
    if any(extent == 0 for extent in size):
        raise DegenerateTransformError("size components must be non-zero")

    result: Matrix = Matrix.of(4, 4, dtype)(ZERO)
    result[0] = 2.0 / size[0]
    result[5] = 2.0 / size[1]
    result[10] = -2.0 / size[2]

    result[12] = -translation[0]
    result[13] = -translation[1]
    result[14] = -translation[2]
    result[15] = 1.0
    return result


def rotation(
    radians_or_from: float | Vector,
    around_normal_or_to: Vector,
    around_point_or_normal: Vector | None = None,
) -> Matrix:
    """Return a 4x4 rotation, see ``MatrixSquareTraits.rotating_matrix``.

    ``rotation(radians, around_normal)``,
    ``rotation(radians, around_normal, around_point)`` and
    ``rotation(from_unit_vector, to_unit_vector, around_normal)``.
    """
    return Mat44.rotating_matrix(
        radians_or_from, around_normal_or_to, around_point_or_normal
    )
