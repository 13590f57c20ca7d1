################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

"""Vector and matrix algebra for homogeneous 3D transforms."""

from __future__ import annotations

from dream_numerics.math_utils.errors import ContractViolation
from dream_numerics.math_utils.errors import DegenerateTransformError
from dream_numerics.math_utils.matrix import IDENTITY
from dream_numerics.math_utils.matrix import ZERO
from dream_numerics.math_utils.matrix import Identity
from dream_numerics.math_utils.matrix import Mat22
from dream_numerics.math_utils.matrix import Mat33
from dream_numerics.math_utils.matrix import Mat44
from dream_numerics.math_utils.matrix import Matrix
from dream_numerics.math_utils.matrix import Zero
from dream_numerics.math_utils.projection import orthographic_matrix
from dream_numerics.math_utils.projection import perspective_matrix
from dream_numerics.math_utils.projection import rotation
from dream_numerics.math_utils.vector import Vec2
from dream_numerics.math_utils.vector import Vec3
from dream_numerics.math_utils.vector import Vec4
from dream_numerics.math_utils.vector import Vector
from dream_numerics.math_utils.vector import cross_product
from dream_numerics.math_utils.vector import dot_product


__all__ = [
    "ContractViolation",
    "DegenerateTransformError",
    "IDENTITY",
    "Identity",
    "Mat22",
    "Mat33",
    "Mat44",
    "Matrix",
    "Vec2",
    "Vec3",
    "Vec4",
    "Vector",
    "ZERO",
    "Zero",
    "cross_product",
    "dot_product",
    "orthographic_matrix",
    "perspective_matrix",
    "rotation",
]
