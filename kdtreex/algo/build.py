from __future__ import annotations

from typing import Any, Iterable, List, MutableSequence

import numpy as np

from kdtreex import config as kx_config
from kdtreex.core.point import Point
from kdtreex.core.tree import NO_NODE, KDTree
from kdtreex.diagnostics import log_operation
from kdtreex.errors import InvalidArgument
from kdtreex.logging import get_logger

LOGGER = get_logger("algo.build")

_SELECTION_STRATEGIES = ("partition", "sort")


def _ensure_points(values: Iterable[Any]) -> List[Point]:
    """Wrap raw coordinate rows as points; existing points are kept as-is."""

    if isinstance(values, np.ndarray):
        if values.ndim != 2:
            raise InvalidArgument(f"Expected a 2-D array of points; got shape {values.shape}.")
        return [Point(row) for row in values]
    points: List[Point] = []
    for index, value in enumerate(values):
        if isinstance(value, Point):
            points.append(value)
            continue
        if isinstance(value, (int, float, np.number)):
            raise InvalidArgument(
                f"Row {index} is the scalar {value!r}; each point needs a sequence of coordinates."
            )
        points.append(Point(value))
    return points


def _validate_dimensionality(points: List[Point]) -> int:
    if not points:
        raise InvalidArgument("Cannot build a k-d tree from an empty point set.")
    dims = points[0].size()
    for index, point in enumerate(points):
        if point.size() != dims:
            raise InvalidArgument(
                "inconsistent point dimensionality: "
                f"point {index} has {point.size()} dimensions, expected {dims}."
            )
    if dims == 0:
        raise InvalidArgument("Cannot build a k-d tree from 0-dimensional points.")
    if len({id(point) for point in points}) != len(points):
        raise InvalidArgument("The same Point object appears more than once in the input.")
    if any(point.readonly for point in points):
        raise InvalidArgument("Points already owned by a tree cannot be moved into another tree.")
    return dims


def _select_median(keys: np.ndarray, *, selection: str) -> np.ndarray:
    """Return a permutation of ``keys`` whose middle element has rank ``len // 2``."""

    median = keys.shape[0] // 2
    if selection == "sort":
        return np.argsort(keys, kind="stable")
    return np.argpartition(keys, median)


class _ArenaBuilder:
    """Recursive median-split construction into flat node arrays."""

    def __init__(self, pending: List[Point], coords: np.ndarray, dims: int, selection: str) -> None:
        self._pending = pending
        self._coords = coords
        self._dims = dims
        self._selection = selection
        self._order = np.arange(len(pending), dtype=np.int64)
        self.split_points: List[Point] = []
        self.split_axes: List[int] = []
        self.left: List[int] = []
        self.right: List[int] = []
        self.parents: List[int] = []

    def build(self) -> int:
        return self._build(0, self._order.shape[0], depth=0, parent=NO_NODE)

    def _build(self, lo: int, hi: int, *, depth: int, parent: int) -> int:
        if hi <= lo:
            return NO_NODE

        axis = depth % self._dims
        segment = self._order[lo:hi]
        permutation = _select_median(self._coords[segment, axis], selection=self._selection)
        self._order[lo:hi] = segment[permutation]
        median = lo + (hi - lo) // 2

        handle = len(self.split_points)
        source = int(self._order[median])
        self.split_points.append(Point.take(self._pending[source]))
        self.split_axes.append(axis)
        self.left.append(NO_NODE)
        self.right.append(NO_NODE)
        self.parents.append(parent)

        left = self._build(lo, median, depth=depth + 1, parent=handle)
        right = self._build(median + 1, hi, depth=depth + 1, parent=handle)
        self.left[handle] = left
        self.right[handle] = right
        return handle


def build_tree(points: Iterable[Any], *, selection: str | None = None) -> KDTree:
    """Build a balanced k-d tree, taking ownership of ``points``.

    Every input :class:`Point` is moved into the tree and left as the empty
    0-dimensional point; a mutable input sequence is cleared afterwards.
    Raw coordinate rows (lists, tuples or a 2-D array) are accepted too.

    At depth ``d`` the points are split on axis ``d % dims`` around the
    element of rank ``count // 2``. ``selection`` chooses how that median is
    found: ``"partition"`` (introselect, the default) or ``"sort"``.
    """

    runtime = kx_config.runtime_config()
    strategy = (selection or runtime.selection).strip().lower()
    if strategy not in _SELECTION_STRATEGIES:
        raise InvalidArgument(
            f"Unsupported selection strategy '{selection}'. Expected one of {_SELECTION_STRATEGIES}."
        )

    with log_operation(LOGGER, "build_tree") as op_log:
        pending = _ensure_points(points)
        dims = _validate_dimensionality(pending)
        coords = np.stack([point.to_numpy() for point in pending])

        builder = _ArenaBuilder(pending, coords, dims, strategy)
        root = builder.build()
        tree = KDTree.from_arena(
            split_points=builder.split_points,
            split_axes=builder.split_axes,
            left=builder.left,
            right=builder.right,
            parents=builder.parents,
            root_handle=root,
            dims=dims,
        )
        if isinstance(points, MutableSequence):
            del points[:]

        op_log.add_metadata(
            points=tree.num_points,
            dims=dims,
            height=tree.height(),
            selection=strategy,
        )
    return tree


__all__ = ["build_tree"]
