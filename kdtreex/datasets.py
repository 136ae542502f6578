from __future__ import annotations

from typing import List

import numpy as np
from numpy.random import Generator, default_rng

from kdtreex.core.point import Point

RANGE_BEGIN = -10
RANGE_END = 10

EXAMPLE_POINTS = ((2, 3), (5, 4), (9, 6), (4, 7), (8, 1), (7, 2))


def _ensure_rng(rng: Generator | None) -> Generator:
    return rng or default_rng()


def random_points(
    rng: Generator | None,
    count: int,
    dims: int,
    *,
    low: int = RANGE_BEGIN,
    high: int = RANGE_END,
) -> List[Point]:
    """Sample `count` integer points uniformly from ``[low, high]`` per axis."""

    if count < 0 or dims < 0:
        raise ValueError("count and dims must be non-negative.")
    generator = _ensure_rng(rng)
    samples = generator.integers(low, high, size=(count, dims), endpoint=True, dtype=np.int64)
    return [Point(row) for row in samples]


def gaussian_points(
    rng: Generator | None,
    count: int,
    dims: int,
    *,
    dtype: np.dtype | type[np.floating] = np.float64,
) -> np.ndarray:
    """Sample `count` Gaussian rows with the requested dimensionality."""

    generator = _ensure_rng(rng)
    if count <= 0 or dims <= 0:
        return np.zeros((max(count, 0), max(dims, 0)), dtype=dtype)
    samples = generator.normal(loc=0.0, scale=1.0, size=(count, dims))
    return np.asarray(samples, dtype=dtype)


def example_points() -> List[Point]:
    """The six-point planar example used to illustrate k-d tree search."""

    return [Point(values) for values in EXAMPLE_POINTS]


__all__ = [
    "EXAMPLE_POINTS",
    "RANGE_BEGIN",
    "RANGE_END",
    "example_points",
    "gaussian_points",
    "random_points",
]
