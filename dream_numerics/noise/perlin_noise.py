################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################

"""Seeded lattice value noise sampled over 3D space."""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

from dream_numerics.config.numerics_params import NoiseParams
from dream_numerics.math_utils.vector import Vec3
from dream_numerics.math_utils.vector import Vector


_LOG: logging.Logger = logging.getLogger(__name__)


# Size of the permutation and value tables; must be a power of two
TABLE_SIZE: int = 256

# (frequency, amplitude) pairs summed by turbulence, amplitudes sum to 1
TURBULENCE_OCTAVES: tuple[tuple[float, float], ...] = (
    (1.0 / 32.0, 1.0 / 2.0),
    (1.0 / 16.0, 1.0 / 4.0),
    (1.0 / 8.0, 1.0 / 8.0),
    (1.0 / 4.0, 1.0 / 16.0),
    (1.0 / 2.0, (1.0 / 16.0) * 0.75),
    (1.0, (1.0 / 16.0) * 0.25),
)


def linear_interpolate(t: float, a: float, b: float) -> float:
    """Return the value a fraction t of the way from a to b."""
    return a + (b - a) * t


class PerlinNoise:
    """Value noise on the integer lattice with trilinear interpolation.

    Every lattice point is assigned a pseudo-random value in [0, 1) through
    a seeded permutation table, so samples are reproducible for a given
    seed and always fall in [0, 1].
    """

    def __init__(self, seed: int = 0) -> None:
        rng: np.random.Generator = np.random.default_rng(seed)
        self._indices: NDArray[np.int64] = rng.permutation(TABLE_SIZE)
        self._table: NDArray[np.float64] = rng.random(TABLE_SIZE)
        self.seed: int = seed

        _LOG.debug("Seeded lattice noise tables with seed %d", seed)

    @classmethod
    def from_params(cls, params: NoiseParams) -> PerlinNoise:
        """Build a noise generator from configuration parameters."""
        return cls(params.seed)

    def _permute(self, x: int) -> int:
        return int(self._indices[x & (TABLE_SIZE - 1)])

    def lattice_noise(self, i: int, j: int, k: int) -> float:
        """Return the value assigned to lattice point (i, j, k)."""
        index: int = self._permute(i + self._permute(j + self._permute(k)))
        return float(self._table[index])

    def sample(self, at: Any) -> float:
        """Return the interpolated noise value at a point."""
        origin: Vector = Vec3(at).floor()
        t: Vector = Vec3(at).frac()

        x: int = int(origin[0])
        y: int = int(origin[1])
        z: int = int(origin[2])

        # Corners of the lower z face, then the upper z face
        d: list[float] = []
        for lz in range(2):
            d.append(self.lattice_noise(x, y, z + lz))
            d.append(self.lattice_noise(x, y + 1, z + lz))
            d.append(self.lattice_noise(x + 1, y + 1, z + lz))
            d.append(self.lattice_noise(x + 1, y, z + lz))

        x0: float = linear_interpolate(t[0], d[0], d[3])
        x1: float = linear_interpolate(t[0], d[1], d[2])
        x2: float = linear_interpolate(t[0], d[4], d[7])
        x3: float = linear_interpolate(t[0], d[5], d[6])

        y0: float = linear_interpolate(t[1], x0, x1)
        y1: float = linear_interpolate(t[1], x2, x3)

        return linear_interpolate(t[2], y0, y1)

    def sample_octave(self, at: Any, frequency: float, amplitude: float) -> float:
        """Return the noise sampled at a scaled point, scaled by amplitude."""
        return self.sample(Vec3(at) * frequency) * amplitude

    def turbulence(self, at: Any) -> float:
        """Return the sum of six octaves of noise, in [0, 1]."""
        total: float = 0.0
        for frequency, amplitude in TURBULENCE_OCTAVES:
            total += self.sample_octave(at, frequency, amplitude)
        return total

    def marble(self, strength: float, at: Any) -> float:
        """Return a marble pattern: x-aligned veins perturbed by turbulence."""
        point: Vector = Vec3(at)
        return 0.5 * (1.0 + math.sin(point[0] + strength * self.turbulence(point)))
