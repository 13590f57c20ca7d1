################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

"""Procedural scalar fields."""

from dream_numerics.noise.perlin_noise import PerlinNoise


__all__ = ["PerlinNoise"]
