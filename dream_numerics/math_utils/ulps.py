################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################
"""Floating-point equality measured in units in the last place (ULPs).

Two scalars of a float kind are compared by the number of representable
values that separate them. The IEEE-754 bit pattern of each value is
reinterpreted as a signed integer of the same width and remapped so that
integer order matches float order; the ULP distance is then the absolute
difference of the two integers.

Values whose exact result is zero (for example the off-diagonal entries of
``M * inverse(M)``) land on tiny non-zero values whose ULP distance from 0.0
is astronomical. ``equal_within_ulps`` therefore also accepts pairs whose
absolute difference is within ``ulps`` steps of the ULP grid at 1.0.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np
from numpy.typing import DTypeLike


# Default ULP threshold for tolerance-based equality
DEFAULT_ULPS: int = 64

# Integer image used to order each supported float kind
_ORDERED_INT: dict[np.dtype, np.dtype] = {
    np.dtype(np.float32): np.dtype(np.int32),
    np.dtype(np.float64): np.dtype(np.int64),
}


def is_float_kind(dtype: DTypeLike) -> bool:
    """Return True if tolerance equality is defined for the scalar kind."""
    return np.dtype(dtype) in _ORDERED_INT


def _ordered_bits(x: float, dtype: np.dtype) -> int:
    """Return the lexicographically ordered integer image of a float."""
    int_dtype: np.dtype = _ORDERED_INT[dtype]
    bits: int = int(np.asarray(x, dtype=dtype).view(int_dtype))
    if bits < 0:
        # Negative floats are sign-magnitude; flip them onto the integer line
        return int(np.iinfo(int_dtype).min) - bits
    return bits


def ulp_distance(a: float, b: float, dtype: DTypeLike = np.float64) -> float:
    """Return the number of representable steps between two scalars.

    NaN is infinitely far from every value, including another NaN.
    """
    kind: np.dtype = np.dtype(dtype)
    if kind not in _ORDERED_INT:
        raise TypeError(f"ULP distance is not defined for {kind}")
    a_cast: float = float(np.asarray(a, dtype=kind))
    b_cast: float = float(np.asarray(b, dtype=kind))
    if math.isnan(a_cast) or math.isnan(b_cast):
        return math.inf
    return float(abs(_ordered_bits(a_cast, kind) - _ordered_bits(b_cast, kind)))


def equal_within_ulps(
    a: float,
    b: float,
    ulps: int = DEFAULT_ULPS,
    dtype: DTypeLike = np.float64,
) -> bool:
    """Return True if two scalars are equal within a ULP threshold."""
    if ulps < 0:
        raise ValueError("ulps must be non-negative")
    kind: np.dtype = np.dtype(dtype)
    distance: float = ulp_distance(a, b, kind)
    if distance <= ulps:
        return True
    # NaN differences compare False below
    unit_step: float = float(np.finfo(kind).eps)
    a_cast: float = float(np.asarray(a, dtype=kind))
    b_cast: float = float(np.asarray(b, dtype=kind))
    return abs(a_cast - b_cast) <= ulps * unit_step


def all_equal_within_ulps(
    a: Iterable[float],
    b: Iterable[float],
    ulps: int = DEFAULT_ULPS,
    dtype: DTypeLike = np.float64,
) -> bool:
    """Return True if every corresponding pair is equal within ulps."""
    return all(
        equal_within_ulps(x, y, ulps, dtype) for x, y in zip(a, b, strict=True)
    )
