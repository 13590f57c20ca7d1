################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################
"""Linear storage offsets for (row, column) matrix addressing.

Both functions map a logical (row, col) pair to an index into contiguous
storage. ``stride`` is the length of one major line: the column count for
row-major storage and the row count for column-major storage.
"""

from __future__ import annotations

from typing import Callable


OffsetFunction = Callable[[int, int, int], int]


def row_major_offset(row: int, col: int, stride: int) -> int:
    """Return the linear index of (row, col) in row-major storage."""
    return row * stride + col


def column_major_offset(row: int, col: int, stride: int) -> int:
    """Return the linear index of (row, col) in column-major storage."""
    return col * stride + row
