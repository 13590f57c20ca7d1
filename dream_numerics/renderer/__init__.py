################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

"""Renderer-side consumers of the matrix API."""

from dream_numerics.renderer.point_camera import PointCamera


__all__ = ["PointCamera"]
