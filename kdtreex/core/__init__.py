"""Core data structures: points, the node arena and its in-order iterator."""

from .iterator import TreeIterator
from .point import Point
from .tree import NO_NODE, KDNode, KDTree

__all__ = [
    "NO_NODE",
    "KDNode",
    "KDTree",
    "Point",
    "TreeIterator",
]
