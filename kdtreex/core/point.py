from __future__ import annotations

import operator
from typing import Any, Iterable, Iterator

import numpy as np

from kdtreex import config as kx_config
from kdtreex.errors import InvalidArgument, LogicError, OutOfRange


def _coerce_values(values: Iterable[Any]) -> np.ndarray:
    try:
        arr = np.array(values if isinstance(values, np.ndarray) else list(values), copy=True)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"Cannot build a point from {type(values).__name__}.") from exc
    if arr.ndim != 1:
        raise InvalidArgument(f"Point values must be one-dimensional; got shape {arr.shape}.")
    if arr.size == 0:
        return np.zeros(0, dtype=kx_config.runtime_config().default_dtype)
    if arr.dtype.kind not in "iuf":
        raise InvalidArgument(f"Point values must be integers or floats; got dtype {arr.dtype}.")
    return arr


def _is_integral(arr: np.ndarray) -> bool:
    return arr.dtype.kind in "iu"


class Point:
    """Fixed-length numeric vector that exclusively owns its coordinates.

    ``Point(3)`` allocates three zeros, ``Point([1, 2])`` copies the given
    values, and ``Point(other)`` deep-copies another point. Ownership is
    transferred with :meth:`take`, which leaves the source as the empty
    0-dimensional point.

    Indexing is bounds-checked against ``[0, dims)`` for both reads and
    writes; negative indices are rejected rather than wrapped.
    """

    __slots__ = ("_data",)

    def __init__(self, source: "int | Point | Iterable[Any]" = 0, *, dtype: Any = None) -> None:
        if isinstance(source, Point):
            data = source._data.copy()
            if dtype is not None:
                data = data.astype(dtype)
        elif isinstance(source, (int, np.integer)) and not isinstance(source, bool):
            dims = int(source)
            if dims < 0:
                raise InvalidArgument(f"Point dimensions must be non-negative; got {dims}.")
            resolved = dtype if dtype is not None else kx_config.runtime_config().default_dtype
            data = np.zeros(dims, dtype=resolved)
        else:
            data = _coerce_values(source)
            if dtype is not None:
                data = data.astype(dtype)
        self._data: np.ndarray = data

    @classmethod
    def take(cls, other: "Point") -> "Point":
        """Move ``other``'s storage into a new point, leaving ``other`` empty."""

        if not isinstance(other, Point):
            raise InvalidArgument(f"Can only take ownership from a Point; got {type(other).__name__}.")
        if other.readonly:
            raise LogicError("Cannot take ownership of a read-only point.")
        moved = cls.__new__(cls)
        moved._data = other._data
        other._data = np.zeros(0, dtype=moved._data.dtype)
        return moved

    @property
    def dims(self) -> int:
        return int(self._data.shape[0])

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def readonly(self) -> bool:
        return not self._data.flags.writeable

    def size(self) -> int:
        return self.dims

    def copy(self) -> "Point":
        return Point(self)

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the coordinates as a numpy array."""

        return self._data.copy()

    def tolist(self) -> list:
        return self._data.tolist()

    def freeze(self) -> None:
        """Make the coordinates read-only; used once a point is owned by a tree."""

        self._data.setflags(write=False)

    def _check_index(self, index: Any) -> int:
        try:
            i = operator.index(index)
        except TypeError as exc:
            raise OutOfRange(f"Point index must be an integer; got {type(index).__name__}.") from exc
        if i < 0 or i >= self.dims:
            raise OutOfRange(f"Point index {i} out of range for {self.dims}-dimensional point.")
        return i

    def __getitem__(self, index: Any) -> Any:
        return self._data[self._check_index(index)].item()

    def __setitem__(self, index: Any, value: Any) -> None:
        i = self._check_index(index)
        if self.readonly:
            raise LogicError("Point is read-only once it is owned by a tree.")
        self._data[i] = value

    def __len__(self) -> int:
        return self.dims

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data.tolist())

    def distance_to(self, other: "Point") -> Any:
        """Squared Euclidean distance to ``other``."""

        if self.dims != other.dims:
            raise InvalidArgument(
                f"Cannot measure distance between {self.dims}- and {other.dims}-dimensional points."
            )
        if _is_integral(self._data) and _is_integral(other._data):
            # fixed-width integer products wrap around; Python ints do not
            return sum(
                (a - b) * (a - b) for a, b in zip(self._data.tolist(), other._data.tolist())
            )
        diff = self._data - other._data
        return np.dot(diff, diff).item()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        if self.dims != other.dims:
            raise LogicError("size mismatch: cannot compare points of different dimensionality.")
        return bool(np.array_equal(self._data, other._data))

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __copy__(self) -> "Point":
        return Point(self)

    def __deepcopy__(self, memo: dict) -> "Point":
        return Point(self)

    def __str__(self) -> str:
        return "(" + ", ".join(str(value) for value in self._data.tolist()) + ")"

    def __repr__(self) -> str:
        return f"Point({self._data.tolist()!r})"


__all__ = ["Point"]
