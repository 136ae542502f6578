from __future__ import annotations

import math
from typing import Any, Tuple

from kdtreex import config as kx_config
from kdtreex.core.point import Point
from kdtreex.core.tree import NO_NODE, KDTree
from kdtreex.diagnostics import log_operation
from kdtreex.errors import InvalidArgument
from kdtreex.logging import get_logger

LOGGER = get_logger("queries.nearest")

_METHODS = ("pruned", "brute_force")


def _ensure_reference(tree: KDTree, reference: Any) -> Point:
    if tree.num_points == 0:
        raise InvalidArgument("Cannot query an empty tree.")
    point = reference if isinstance(reference, Point) else Point(reference)
    if point.size() != tree.dims:
        raise InvalidArgument(
            f"Reference point has {point.size()} dimensions; tree points have {tree.dims}."
        )
    return point


class _SearchState:
    """Best-so-far accumulator shared by every call of one pruned search."""

    __slots__ = ("best_handle", "best_distance", "visited")

    def __init__(self) -> None:
        self.best_handle = NO_NODE
        self.best_distance: Any = math.inf
        self.visited = 0


def _brute_force_scan(tree: KDTree, reference: Point) -> Tuple[Point, Any, int]:
    best_point: Point | None = None
    best_distance: Any = math.inf
    visited = 0
    for point in tree:
        visited += 1
        distance = point.distance_to(reference)
        if distance < best_distance:
            best_point = point
            best_distance = distance
    if best_point is None:
        raise InvalidArgument("Cannot query an empty tree.")
    return best_point, best_distance, visited


def _pruned_descent(tree: KDTree, handle: int, reference: Point, state: _SearchState) -> None:
    local_point = tree.split_points[handle]
    state.visited += 1

    local_distance = local_point.distance_to(reference)
    if local_distance < state.best_distance:
        state.best_handle = handle
        state.best_distance = local_distance

    axis = int(tree.split_axes[handle])
    delta = reference[axis] - local_point[axis]
    if delta > 0:
        closer, farther = tree.right_of(handle), tree.left_of(handle)
    else:
        closer, farther = tree.left_of(handle), tree.right_of(handle)

    if closer != NO_NODE:
        _pruned_descent(tree, closer, reference, state)
    # The farther half-space can only hold a closer point if the best-distance
    # sphere crosses the splitting hyperplane.
    if farther != NO_NODE and delta * delta < state.best_distance:
        _pruned_descent(tree, farther, reference, state)


def _pruned_search(tree: KDTree, reference: Point) -> Tuple[Point, Any, int]:
    state = _SearchState()
    _pruned_descent(tree, tree.root_handle, reference, state)
    return tree.split_points[state.best_handle], state.best_distance, state.visited


def brute_force_nearest(tree: KDTree, reference: Any) -> Point:
    """Return a copy of the stored point closest to ``reference`` by linear scan.

    Every point is visited in in-order sequence; on equal distances the
    earliest visited point is kept.
    """

    point = _ensure_reference(tree, reference)
    best, _, _ = _brute_force_scan(tree, point)
    return best.copy()


def pruned_nearest(tree: KDTree, reference: Any) -> Point:
    """Return a copy of the stored point closest to ``reference``.

    Recursive descent that always explores the child on the reference's side
    of each splitting hyperplane and skips the other child when the squared
    axis offset is not smaller than the best squared distance found so far.
    """

    point = _ensure_reference(tree, reference)
    best, _, _ = _pruned_search(tree, point)
    return best.copy()


def nearest_neighbor(
    tree: KDTree,
    reference: Any,
    *,
    method: str | None = None,
    return_distance: bool = False,
) -> Point | Tuple[Point, Any]:
    """Nearest-neighbour query dispatching on ``method`` with operation logging.

    ``method`` is ``"pruned"`` or ``"brute_force"`` and defaults to the
    runtime config's ``search`` setting. With ``return_distance`` the squared
    distance is returned alongside the point.
    """

    chosen = (method or kx_config.runtime_config().search).strip().lower().replace("-", "_")
    if chosen not in _METHODS:
        raise InvalidArgument(f"Unsupported search method '{method}'. Expected one of {_METHODS}.")

    with log_operation(LOGGER, "nearest_query") as op_log:
        point = _ensure_reference(tree, reference)
        if chosen == "brute_force":
            best, distance, visited = _brute_force_scan(tree, point)
        else:
            best, distance, visited = _pruned_search(tree, point)
        op_log.add_metadata(method=chosen, points=tree.num_points, visited=visited)

    result = best.copy()
    if return_distance:
        return result, distance
    return result


__all__ = [
    "brute_force_nearest",
    "pruned_nearest",
    "nearest_neighbor",
]
