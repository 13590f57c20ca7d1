################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################
"""Fixed-size matrices addressed by (row, column).

Standard mathematical notation is used regardless of memory layout: ``at(r,
c)`` is the entry in row r and column c, and vectors are columns, so ``M *
v`` applies M to v. Storage is column-major (OpenGL order) for every matrix
class; the layout is only observable through ``value()``, which hands the
contiguous store to graphics APIs.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any
from typing import ClassVar
from typing import Sequence

import numpy as np
from numpy.typing import DTypeLike
from numpy.typing import NDArray

from dream_numerics.math_utils.errors import ensure
from dream_numerics.math_utils.matrix_traits import MatrixEqualityTraits
from dream_numerics.math_utils.matrix_traits import MatrixInverseTraits
from dream_numerics.math_utils.matrix_traits import MatrixMultiplicationTraits
from dream_numerics.math_utils.matrix_traits import MatrixSquareTraits
from dream_numerics.math_utils.offsets import OffsetFunction
from dream_numerics.math_utils.offsets import column_major_offset
from dream_numerics.math_utils.ulps import is_float_kind
from dream_numerics.math_utils.units import RealT
from dream_numerics.math_utils.units import scalar_dtype
from dream_numerics.math_utils.vector import Vector


class Zero:
    """Construction token: fill every entry with 0."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ZERO"


@dataclass(frozen=True)
class Identity:
    """Construction token: scalar on the diagonal, 0 elsewhere."""

    scalar: float = 1.0


ZERO: Zero = Zero()
IDENTITY: Identity = Identity()


class Matrix:
    """R x C matrix of scalars with (row, column) addressing.

    Use ``Matrix.of(R, C, dtype)`` (or the ``Mat22``/``Mat33``/``Mat44``
    aliases) to obtain a concrete matrix class.

    Constructors:

    * ``Mat44()``: uninitialized storage, must be written before it is read
    * ``Mat44(ZERO)``, ``Mat44(IDENTITY)``, ``Mat44(Identity(2.0))``
    * ``Mat44(other)``: copy of a matrix with the same shape
    * ``Mat44(values)``: R*C scalars in storage (column-major) order
    """

    __slots__ = ("_matrix",)

    R: ClassVar[int] = 0
    C: ClassVar[int] = 0
    dtype: ClassVar[np.dtype] = RealT

    # Physical layout of value(); the (row, col) API is layout independent
    MAJOR_ORDER: ClassVar[str] = "column"
    offset: ClassVar[OffsetFunction] = staticmethod(column_major_offset)

    _matrix: NDArray[Any]

    # Make numpy scalars defer to the operators on this class
    __array_ufunc__ = None

    def __init__(self, init: Any = None) -> None:
        """Initialize storage from a token, a matrix or a scalar sequence."""
        if type(self).R == 0:
            raise TypeError("use Matrix.of(R, C) to create a concrete matrix type")

        size: int = self.R * self.C
        if init is None:
            self._matrix = np.empty(size, dtype=self.dtype)
        elif isinstance(init, Zero):
            self._matrix = np.zeros(size, dtype=self.dtype)
        elif isinstance(init, Identity):
            self._matrix = np.empty(size, dtype=self.dtype)
            self.load_identity(init.scalar)
        elif isinstance(init, Matrix):
            if init.shape() != self.shape():
                raise TypeError(
                    f"cannot copy {type(init).__name__} into {type(self).__name__}"
                )
            self._matrix = init.value().astype(self.dtype, copy=True)
        else:
            self._matrix = np.empty(size, dtype=self.dtype)
            self.load(init)

    @classmethod
    def of(cls, R: int, C: int, dtype: DTypeLike = RealT) -> type[Matrix]:
        """Return the concrete matrix class for a shape and scalar kind."""
        if not isinstance(R, int) or not isinstance(C, int) or R < 1 or C < 1:
            raise ValueError("R and C must be positive integers")
        kind: np.dtype = scalar_dtype(dtype)
        key: tuple[int, int, np.dtype] = (R, C, kind)
        matrix_type: type[Matrix] | None = _MATRIX_TYPES.get(key)
        if matrix_type is None:
            bases: list[type] = [MatrixMultiplicationTraits]
            if R == C:
                bases.append(MatrixSquareTraits)
            if R == C == 4:
                bases.append(MatrixInverseTraits)
            if is_float_kind(kind):
                bases.append(MatrixEqualityTraits)
            bases.append(Matrix)

            name: str = f"Mat{R}{C}" if kind == RealT else f"Mat{R}{C}_{kind.name}"
            namespace: dict[str, Any] = {
                "__slots__": (),
                "R": R,
                "C": C,
                "dtype": kind,
            }
            matrix_type = type(name, tuple(bases), namespace)
            _MATRIX_TYPES[key] = matrix_type
        return matrix_type

    @classmethod
    def zero_matrix(cls) -> Matrix:
        """Return a matrix filled with 0."""
        return cls(ZERO)

    @classmethod
    def identity_matrix(cls, scalar: float = 1.0) -> Matrix:
        """Return a matrix with scalar on the diagonal."""
        return cls(Identity(scalar))

    @classmethod
    def from_sequence(cls, values: Sequence[float] | NDArray[Any]) -> Matrix:
        """Return a matrix from R*C scalars in storage order."""
        return cls(values)

    @classmethod
    def from_array(cls, array: NDArray[Any]) -> Matrix:
        """Return a matrix from an (R, C) array in logical layout."""
        values: NDArray[Any] = np.asarray(array)
        if values.shape != (cls.R, cls.C):
            raise ValueError(
                f"{cls.__name__} requires shape {(cls.R, cls.C)}, "
                f"got {values.shape}"
            )
        result: Matrix = cls.__new__(cls)
        result._matrix = np.ravel(values, order="F").astype(cls.dtype, copy=True)
        return result

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> Matrix:
        """Return a matrix from a sequence of R rows of C scalars."""
        return cls.from_array(np.asarray(rows, dtype=cls.dtype))

    def shape(self) -> tuple[int, int]:
        """Return (R, C)."""
        return (self.R, self.C)

    # Bulk initialization

    def load(self, values: Sequence[float] | NDArray[Any]) -> None:
        """Copy R*C scalars in storage order into this matrix."""
        array: NDArray[Any] = np.asarray(values)
        if array.shape != (self.R * self.C,):
            raise ValueError(
                f"{type(self).__name__} requires {self.R * self.C} scalars, "
                f"got shape {array.shape}"
            )
        self._matrix[:] = array.astype(self.dtype, copy=False)

    def zero(self) -> None:
        """Set every entry to 0."""
        self._matrix.fill(0)

    def load_identity(self, n: float = 1.0) -> None:
        """Set the diagonal to n and every other entry to 0."""
        self._matrix.fill(0)
        for i in range(min(self.R, self.C)):
            self._matrix[self.offset(i, i, self.R)] = n

    def load_test_pattern(self) -> None:
        """Number the entries 0, 1, 2, ... walking each row in turn."""
        i: int = 0
        for r in range(self.R):
            for c in range(self.C):
                self[r, c] = i
                i += 1

    # Accessors

    def _index(self, row: int, col: int | None = None) -> int:
        """Return the storage index for (row, col) or a raw index."""
        if col is None:
            i: int = operator.index(row)
            ensure(0 <= i < self.R * self.C, "0 <= i < R * C")
            return i
        r: int = operator.index(row)
        c: int = operator.index(col)
        ensure(0 <= r < self.R and 0 <= c < self.C, "0 <= r < R and 0 <= c < C")
        return self.offset(r, c, self.R)

    def at(self, row: int, col: int | None = None) -> Any:
        """Return the entry at (row, col), or at raw storage index row."""
        return self._matrix[self._index(row, col)].item()

    def __getitem__(self, key: int | tuple[int, int]) -> Any:
        if isinstance(key, tuple):
            return self.at(*key)
        return self.at(key)

    def __setitem__(self, key: int | tuple[int, int], value: float) -> None:
        index: int = self._index(*key) if isinstance(key, tuple) else self._index(key)
        self._matrix[index] = value

    def value(self) -> NDArray[Any]:
        """Return the contiguous column-major backing store."""
        return self._matrix

    def as_array(self) -> NDArray[Any]:
        """Return a copy of the entries as an (R, C) array."""
        return self._matrix.reshape((self.R, self.C), order="F").copy()

    # Vector slices

    def _slice(
        self,
        row: int,
        col: int,
        length: int,
        element_offset: int | None,
    ) -> slice:
        """Return the storage slice for a vector placed at (row, col)."""
        start: int = self._index(row, col)
        stride: int = 1 if element_offset is None else operator.index(element_offset)
        ensure(stride > 0, "element_offset > 0")
        last: int = start + stride * (length - 1)
        ensure(last < self.R * self.C, "start + element_offset * (D - 1) < R * C")
        return slice(start, last + 1, stride)

    def set(
        self,
        row: int,
        col: int,
        vector: Vector,
        element_offset: int | None = None,
    ) -> None:
        """Copy a vector into the matrix starting at (row, col).

        Without element_offset the components are copied contiguously in
        the storage order, so in a column-major matrix the vector lands in
        a column. ``element_offset`` is the storage distance between
        consecutive components: ``set(0, 0, v, R)`` writes row 0.
        """
        self._matrix[self._slice(row, col, len(vector), element_offset)] = (
            vector.value()
        )

    def get(
        self,
        row: int,
        col: int,
        length: int,
        element_offset: int | None = None,
    ) -> Vector:
        """Return the vector that ``set`` would have written at (row, col)."""
        values: NDArray[Any] = self._matrix[
            self._slice(row, col, length, element_offset)
        ]
        return Vector.of(length, self.dtype)(values)

    # Whole-matrix operations

    def transposed_matrix(self) -> Matrix:
        """Return a transposed copy; defined for every shape."""
        return Matrix.of(self.C, self.R, self.dtype).from_array(self.as_array().T)

    def copy(self) -> Matrix:
        """Return an independent copy of this matrix."""
        return type(self)(self)

    def __copy__(self) -> Matrix:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Matrix:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        """Return True if every entry is exactly equal."""
        if not isinstance(other, Matrix):
            return NotImplemented
        if other.shape() != self.shape():
            return False
        return bool(np.array_equal(self._matrix, other._matrix))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_rows({self.as_array().tolist()!r})"


_MATRIX_TYPES: dict[tuple[int, int, np.dtype], type[Matrix]] = {}


Mat22: type[Matrix] = Matrix.of(2, 2)
Mat33: type[Matrix] = Matrix.of(3, 3)
Mat44: type[Matrix] = Matrix.of(4, 4)
