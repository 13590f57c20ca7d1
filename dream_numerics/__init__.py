################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

"""Fixed-dimension vector and matrix algebra for 3D transforms."""

from __future__ import annotations

from dream_numerics.math_utils import IDENTITY
from dream_numerics.math_utils import ZERO
from dream_numerics.math_utils import ContractViolation
from dream_numerics.math_utils import DegenerateTransformError
from dream_numerics.math_utils import Identity
from dream_numerics.math_utils import Mat22
from dream_numerics.math_utils import Mat33
from dream_numerics.math_utils import Mat44
from dream_numerics.math_utils import Matrix
from dream_numerics.math_utils import Vec2
from dream_numerics.math_utils import Vec3
from dream_numerics.math_utils import Vec4
from dream_numerics.math_utils import Vector
from dream_numerics.math_utils import Zero
from dream_numerics.math_utils import cross_product
from dream_numerics.math_utils import dot_product
from dream_numerics.math_utils import orthographic_matrix
from dream_numerics.math_utils import perspective_matrix
from dream_numerics.math_utils import rotation
from dream_numerics.noise import PerlinNoise
from dream_numerics.renderer import PointCamera


__all__ = [
    "ContractViolation",
    "DegenerateTransformError",
    "IDENTITY",
    "Identity",
    "Mat22",
    "Mat33",
    "Mat44",
    "Matrix",
    "PerlinNoise",
    "PointCamera",
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
