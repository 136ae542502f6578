from __future__ import annotations


class KDTreeError(Exception):
    """Base class for errors raised by kdtreex."""


class InvalidArgument(KDTreeError, ValueError):
    """Bad dimension count, empty point set or mismatched dimensionality."""


class OutOfRange(KDTreeError, IndexError):
    """Coordinate index or iterator position outside its valid range."""


class LogicError(KDTreeError, RuntimeError):
    """Operation that is meaningless for the operands, e.g. comparing sizes."""


__all__ = [
    "KDTreeError",
    "InvalidArgument",
    "OutOfRange",
    "LogicError",
]
