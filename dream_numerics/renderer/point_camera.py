################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

"""Camera positioned at a point and looking along a direction."""

from __future__ import annotations

from typing import Sequence

from dream_numerics.config.numerics_config import NumericsConfig
from dream_numerics.config.numerics_params import CameraParams
from dream_numerics.config.numerics_params import NumericsParams
from dream_numerics.math_utils.matrix import ZERO
from dream_numerics.math_utils.matrix import Mat44
from dream_numerics.math_utils.matrix import Matrix
from dream_numerics.math_utils.projection import perspective_matrix
from dream_numerics.math_utils.units import Angle
from dream_numerics.math_utils.units import NumericConstants
from dream_numerics.math_utils.vector import Vec3
from dream_numerics.math_utils.vector import Vector
from dream_numerics.math_utils.vector import cross_product


Vec3Like = Vector | Sequence[float]


class PointCamera:
    """Point camera producing view and projection matrices.

    The direction and up vectors are expected to be unit length and not
    parallel to each other.

    Attributes:
        origin: Camera position in world coordinates
        direction: Unit view direction in world coordinates
        up: Unit up vector in world coordinates
        field_of_view: Vertical field of view in radians
        near: Near clip plane distance
        far: Far clip plane distance
        singular_rtol: Singularity threshold used to invert the view matrix
    """

    def __init__(
        self,
        origin: Vec3Like = (0.0, 0.0, 0.0),
        direction: Vec3Like = (0.0, 0.0, 1.0),
        up: Vec3Like = (0.0, 1.0, 0.0),
        *,
        field_of_view: float = float(Angle.deg2rad(60.0)),
        near: float = 0.1,
        far: float = 100.0,
        singular_rtol: float = NumericConstants.SINGULAR_RTOL,
    ) -> None:
        self.origin: Vector = Vec3(origin)
        self.direction: Vector = Vec3(direction)
        self.up: Vector = Vec3(up)
        self.field_of_view: float = field_of_view
        self.near: float = near
        self.far: float = far
        self.singular_rtol: float = singular_rtol

    @classmethod
    def from_config(cls, config: NumericsConfig) -> PointCamera:
        """Build a camera from a validated configuration."""
        params: CameraParams = config.camera()
        return cls(
            params.origin,
            params.direction,
            params.up,
            field_of_view=float(Angle.deg2rad(params.field_of_view_deg)),
            near=params.near,
            far=params.far,
            singular_rtol=config.tolerance().singular_rtol,
        )

    @classmethod
    def from_params(cls, params: CameraParams) -> PointCamera:
        """Build a camera from camera parameters and default tolerances.

        Raises NumericsConfigError when the camera axes or clip planes are
        inconsistent.
        """
        return cls.from_config(
            NumericsConfig(NumericsParams.defaults().replace(camera=params))
        )

    @staticmethod
    def look_at(origin: Vector, direction: Vector, up: Vector) -> Matrix:
        """Return the view matrix of a camera at origin looking along direction.

        Equivalent to gluLookAt for a normalized direction and up vector.
        The rotation rows are the side, true up and backward axes, so the
        result maps world coordinates into camera space with the camera
        looking down -z.
        """
        side: Vector = cross_product(direction, up)
        true_up: Vector = cross_product(side, direction)

        # Basis vectors land in columns, the transpose turns them into rows
        m: Matrix = Mat44(ZERO)
        m.set(0, 0, side)
        m.set(0, 1, true_up)
        m.set(0, 2, -direction)
        m[3, 3] = 1.0

        return m.transpose() * Mat44.translating_matrix(-origin)

    def view_matrix(self) -> Matrix:
        """Return the world-to-camera transform."""
        return self.look_at(self.origin, self.direction, self.up)

    def camera_to_world_matrix(self) -> Matrix:
        """Return the inverse of the view matrix."""
        return self.view_matrix().inverse_matrix(rtol=self.singular_rtol)

    def projection_matrix(self, aspect_ratio: float) -> Matrix:
        """Return the perspective projection for a viewport aspect ratio."""
        return perspective_matrix(self.field_of_view, aspect_ratio, self.near, self.far)

    def set(self, origin: Vec3Like, direction: Vec3Like) -> None:
        """Move the camera along a ray, keeping its up vector."""
        self.origin = Vec3(origin)
        self.direction = Vec3(direction)

    def __repr__(self) -> str:
        return (
            f"PointCamera(origin={self.origin!r}, direction={self.direction!r}, "
            f"up={self.up!r})"
        )
