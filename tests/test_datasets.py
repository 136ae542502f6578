import numpy as np

from kdtreex.core import Point
from kdtreex.datasets import EXAMPLE_POINTS, example_points, gaussian_points, random_points


def test_random_points_are_integers_in_range():
    points = random_points(np.random.default_rng(0), 200, 3)

    assert len(points) == 200
    assert all(point.size() == 3 for point in points)
    values = [value for point in points for value in point]
    assert min(values) >= -10
    assert max(values) <= 10
    assert all(isinstance(value, int) for value in values)


def test_random_points_are_reproducible():
    first = random_points(np.random.default_rng(42), 10, 2, low=0, high=5)
    second = random_points(np.random.default_rng(42), 10, 2, low=0, high=5)

    assert [p.tolist() for p in first] == [p.tolist() for p in second]


def test_gaussian_points_shape():
    rows = gaussian_points(np.random.default_rng(1), 7, 4, dtype=np.float32)

    assert rows.shape == (7, 4)
    assert rows.dtype == np.float32
    assert gaussian_points(None, 0, 3).shape == (0, 3)


def test_example_points_are_fresh_copies():
    first = example_points()
    first[0][0] = 100

    assert example_points()[0] == Point(list(EXAMPLE_POINTS[0]))
