"""kdtreex: balanced k-d tree for exact nearest-neighbour queries.

Quick Start
-----------
>>> from kdtreex import Point, build_tree, pruned_nearest
>>>
>>> points = [Point([2, 3]), Point([5, 4]), Point([9, 6]),
...           Point([4, 7]), Point([8, 1]), Point([7, 2])]
>>> tree = build_tree(points)  # moves the points into the tree
>>> print(pruned_nearest(tree, Point([9, 2])))
(8, 1)

Classes
-------
Point : Fixed-length numeric vector with bounds-checked indexing.
KDTree : Immutable median-split tree built by ``build_tree``.
TreeIterator : In-order cursor returned by ``KDTree.begin()``.
KDIndex : Façade bundling construction and queries.
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

try:
    __version__ = _pkg_version("kdtreex")
except PackageNotFoundError:  # pragma: no cover - best effort during local development
    __version__ = "0.0.1"

from .core import NO_NODE, KDNode, KDTree, Point, TreeIterator
from .errors import InvalidArgument, KDTreeError, LogicError, OutOfRange
from .algo import build_tree
from .queries import brute_force_nearest, nearest_neighbor, pruned_nearest
from .render import render_tree
from .api import KDIndex

__all__ = [
    "__version__",
    "KDIndex",
    "KDNode",
    "KDTree",
    "NO_NODE",
    "Point",
    "TreeIterator",
    "build_tree",
    "brute_force_nearest",
    "nearest_neighbor",
    "pruned_nearest",
    "render_tree",
    "KDTreeError",
    "InvalidArgument",
    "LogicError",
    "OutOfRange",
]
