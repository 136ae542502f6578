"""Public ergonomic façade for kdtreex."""

from .index import KDIndex

__all__ = ["KDIndex"]
