################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of Dream Numerics
#
#  SPDX-License-Identifier: Apache-2.0
#  See LICENSE.md for more information.
#
################################################################################
"""Fixed-length numeric vectors.

The vector length is part of the type: ``Vector.of(3)`` returns a concrete
class whose instances always hold exactly three scalars. Operations between
vectors of different lengths are type errors, and capabilities that only
make sense for one length (the cross product) only exist on that class.
"""

from __future__ import annotations

import numbers
import operator
from typing import Any
from typing import Callable
from typing import ClassVar
from typing import Iterator
from typing import Sequence

import numpy as np
from numpy.typing import DTypeLike
from numpy.typing import NDArray

from dream_numerics.math_utils.errors import DegenerateTransformError
from dream_numerics.math_utils.errors import ensure
from dream_numerics.math_utils.ulps import DEFAULT_ULPS
from dream_numerics.math_utils.ulps import all_equal_within_ulps
from dream_numerics.math_utils.ulps import is_float_kind
from dream_numerics.math_utils.units import NumericConstants
from dream_numerics.math_utils.units import RealT
from dream_numerics.math_utils.units import scalar_dtype


class VectorCrossProductTraits:
    """Cross product, defined only for three-component vectors."""

    __slots__ = ()

    def cross_product(self, other: Vector) -> Vector:
        """Return the right-handed cross product ``self x other``."""
        vec: Vector = self  # type: ignore[assignment]
        if not isinstance(other, Vector) or type(other).D != 3:
            raise TypeError("cross product requires two 3-component vectors")
        a: NDArray[Any] = vec.value()
        b: NDArray[Any] = other.value()
        return type(vec)._wrap(
            np.array(
                [
                    a[1] * b[2] - a[2] * b[1],
                    a[2] * b[0] - a[0] * b[2],
                    a[0] * b[1] - a[1] * b[0],
                ],
                dtype=vec.dtype,
            )
        )


class Vector:
    """Fixed-length tuple of scalars.

    Use ``Vector.of(D, dtype)`` (or the ``Vec2``/``Vec3``/``Vec4`` aliases) to
    obtain a concrete vector type.
    """

    __slots__ = ("_vector",)

    D: ClassVar[int] = 0
    dtype: ClassVar[np.dtype] = RealT

    _vector: NDArray[Any]

    # Make numpy scalars defer to the reflected operators below
    __array_ufunc__ = None

    def __init__(self, *components: Any) -> None:
        """Initialize from D scalars or from one length-D sequence."""
        if type(self).D == 0:
            raise TypeError("use Vector.of(D) to create a concrete vector type")

        values: Any = components
        if len(components) == 1 and _is_sequence(components[0]):
            values = components[0]
        if isinstance(values, Vector):
            values = values.value()

        array: NDArray[Any] = np.array(values, dtype=self.dtype)
        if array.shape != (self.D,):
            raise ValueError(
                f"{type(self).__name__} requires {self.D} components, "
                f"got shape {array.shape}"
            )
        self._vector = array

    @classmethod
    def of(cls, D: int, dtype: DTypeLike = RealT) -> type[Vector]:
        """Return the concrete vector class for a length and scalar kind."""
        if not isinstance(D, int) or D < 1:
            raise ValueError("D must be a positive integer")
        kind: np.dtype = scalar_dtype(dtype)
        key: tuple[int, np.dtype] = (D, kind)
        vector_type: type[Vector] | None = _VECTOR_TYPES.get(key)
        if vector_type is None:
            bases: tuple[type, ...] = (Vector,)
            if D == 3:
                bases = (VectorCrossProductTraits, Vector)
            name: str = f"Vec{D}" if kind == RealT else f"Vec{D}_{kind.name}"
            vector_type = type(name, bases, {"__slots__": (), "D": D, "dtype": kind})
            vector_type.__module__ = __name__
            _VECTOR_TYPES[key] = vector_type
        return vector_type

    @classmethod
    def zero(cls) -> Vector:
        """Return a vector with every component set to 0."""
        return cls._wrap(np.zeros(cls.D, dtype=cls.dtype))

    @classmethod
    def filled(cls, value: float) -> Vector:
        """Return a vector with every component set to value."""
        return cls._wrap(np.full(cls.D, value, dtype=cls.dtype))

    @classmethod
    def _wrap(cls, array: NDArray[Any]) -> Vector:
        """Adopt an already-validated array as backing storage."""
        result: Vector = cls.__new__(cls)
        result._vector = array
        return result

    # Accessors

    def at(self, index: int) -> Any:
        """Return the component at index."""
        i: int = operator.index(index)
        ensure(0 <= i < self.D, "0 <= index < D")
        return self._vector[i].item()

    def __getitem__(self, index: int) -> Any:
        return self.at(index)

    def __setitem__(self, index: int, value: float) -> None:
        i: int = operator.index(index)
        ensure(0 <= i < self.D, "0 <= index < D")
        self._vector[i] = value

    def __len__(self) -> int:
        return self.D

    def __iter__(self) -> Iterator[Any]:
        return iter(self._vector.tolist())

    def value(self) -> NDArray[Any]:
        """Return the contiguous backing store."""
        return self._vector

    def copy(self) -> Vector:
        """Return an independent copy of this vector."""
        return self._wrap(self._vector.copy())

    def __copy__(self) -> Vector:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Vector:
        return self.copy()

    def __array__(
        self, dtype: DTypeLike = None, copy: bool | None = None
    ) -> NDArray[Any]:
        return np.array(self._vector, dtype=dtype)

    def __repr__(self) -> str:
        components: str = ", ".join(repr(x) for x in self._vector.tolist())
        return f"{type(self).__name__}({components})"

    # Arithmetic

    def _operand(self, other: Any) -> Any:
        """Return the array or scalar operand for other, or None."""
        if isinstance(other, Vector):
            if type(other).D != self.D:
                return None
            return other._vector
        if isinstance(other, (numbers.Real, np.number)):
            return other
        return None

    def _binary(
        self,
        other: Any,
        op: Callable[[Any, Any], Any],
        reflected: bool = False,
    ) -> Any:
        operand: Any = self._operand(other)
        if operand is None:
            return NotImplemented
        result: NDArray[Any] = (
            op(operand, self._vector) if reflected else op(self._vector, operand)
        )
        return self._wrap(np.asarray(result).astype(self.dtype, copy=False))

    def __add__(self, other: Any) -> Vector:
        return self._binary(other, np.add)

    def __radd__(self, other: Any) -> Vector:
        return self._binary(other, np.add, reflected=True)

    def __sub__(self, other: Any) -> Vector:
        return self._binary(other, np.subtract)

    def __rsub__(self, other: Any) -> Vector:
        return self._binary(other, np.subtract, reflected=True)

    def __mul__(self, other: Any) -> Vector:
        return self._binary(other, np.multiply)

    def __rmul__(self, other: Any) -> Vector:
        return self._binary(other, np.multiply, reflected=True)

    def __truediv__(self, other: Any) -> Vector:
        return self._binary(other, np.true_divide)

    def __rtruediv__(self, other: Any) -> Vector:
        return self._binary(other, np.true_divide, reflected=True)

    def __neg__(self) -> Vector:
        return self._wrap(-self._vector)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        if type(other).D != self.D:
            return False
        return bool(np.array_equal(self._vector, other._vector))

    __hash__ = None  # type: ignore[assignment]

    def equal_within_tolerance(self, other: Vector, ulps: int = DEFAULT_ULPS) -> bool:
        """Return True if every component pair is equal within ulps."""
        if not is_float_kind(self.dtype):
            raise TypeError(f"tolerance equality is not defined for {self.dtype}")
        if not isinstance(other, Vector) or type(other).D != self.D:
            raise TypeError("tolerance equality requires vectors of equal length")
        return all_equal_within_ulps(
            self._vector.tolist(), other._vector.tolist(), ulps, self.dtype
        )

    # Products and norms

    def dot_product(self, other: Vector) -> Any:
        """Return the inner product with another vector of equal length."""
        if not isinstance(other, Vector) or type(other).D != self.D:
            raise TypeError("dot product requires vectors of equal length")
        return np.dot(self._vector, other._vector).item()

    def length(self) -> float:
        """Return the Euclidean length."""
        return float(np.linalg.norm(self._vector))

    def normalized_vector(self, eps: float = NumericConstants.EPS) -> Vector:
        """Return a unit-length copy of this vector."""
        norm: float = self.length()
        if not np.isfinite(norm) or norm <= eps:
            raise DegenerateTransformError("cannot normalize a near-zero vector")
        return self._wrap((self._vector / norm).astype(self.dtype, copy=False))

    # Lattice decomposition

    def floor(self) -> Vector:
        """Replace each component by its floor, in place."""
        if self.dtype.kind == "f":
            np.floor(self._vector, out=self._vector)
        return self

    def frac(self) -> Vector:
        """Replace each component by its fractional part in [0, 1), in place."""
        if self.dtype.kind == "f":
            np.subtract(self._vector, np.floor(self._vector), out=self._vector)
            # x - floor(x) rounds up to 1 for tiny negative x
            below_one: Any = np.nextafter(self.dtype.type(1), self.dtype.type(0))
            np.minimum(self._vector, below_one, out=self._vector)
        else:
            self._vector[:] = 0
        return self

    # Homogeneous coordinates

    def reduce(self) -> Vector:
        """Return a vector of length D-1 without the last component."""
        ensure(self.D > 1, "D > 1")
        return Vector.of(self.D - 1, self.dtype)._wrap(self._vector[:-1].copy())

    def append(self, value: float) -> Vector:
        """Return a vector of length D+1 with value as the last component."""
        extended: NDArray[Any] = np.empty(self.D + 1, dtype=self.dtype)
        extended[:-1] = self._vector
        extended[-1] = value
        return Vector.of(self.D + 1, self.dtype)._wrap(extended)

    def __lshift__(self, value: float) -> Vector:
        if not isinstance(value, (numbers.Real, np.number)):
            return NotImplemented
        return self.append(value)


_VECTOR_TYPES: dict[tuple[int, np.dtype], type[Vector]] = {}


def _is_sequence(value: Any) -> bool:
    """Return True for sequence-like constructor arguments."""
    if isinstance(value, (str, bytes)):
        return False
    return isinstance(value, (Sequence, np.ndarray, Vector))


def dot_product(a: Vector, b: Vector) -> Any:
    """Return the inner product of two vectors of equal length."""
    return a.dot_product(b)


def cross_product(a: Vector, b: Vector) -> Vector:
    """Return the right-handed cross product of two 3-component vectors."""
    if not isinstance(a, VectorCrossProductTraits):
        raise TypeError("cross product requires two 3-component vectors")
    return a.cross_product(b)


Vec2: type[Vector] = Vector.of(2)
Vec3: type[Vector] = Vector.of(3)
Vec4: type[Vector] = Vector.of(4)
