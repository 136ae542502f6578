import numpy as np
import pytest

from kdtreex.algo import build_tree
from kdtreex.core import TreeIterator
from kdtreex.datasets import example_points
from kdtreex.errors import OutOfRange

_IN_ORDER = ["(2, 3)", "(5, 4)", "(4, 7)", "(7, 2)", "(8, 1)", "(9, 6)"]


def _example_tree():
    return build_tree(example_points())


def test_begin_is_leftmost_deepest_leaf():
    tree = _example_tree()

    first = tree.begin()

    assert str(first.deref()) == "(2, 3)"
    assert first != tree.end()


def test_manual_cursor_walk_visits_in_order():
    tree = _example_tree()

    seen = []
    it = tree.begin()
    while it != tree.end():
        seen.append(str(it.deref()))
        it.advance()

    assert seen == _IN_ORDER
    assert it.at_end


def test_python_iteration_matches_cursor_walk():
    tree = _example_tree()

    assert [str(point) for point in tree] == _IN_ORDER
    assert [str(point) for point in tree] == _IN_ORDER


def test_end_sentinel_fails_fast():
    tree = _example_tree()
    end = tree.end()

    with pytest.raises(OutOfRange):
        end.deref()
    with pytest.raises(OutOfRange):
        end.advance()
    with pytest.raises(StopIteration):
        next(end)


def test_iterator_equality_tracks_position():
    tree = _example_tree()
    a = tree.begin()
    b = tree.begin()

    assert a == b
    a.advance()
    assert a != b
    b.advance()
    assert a == b
    assert tree.end() == _example_tree().end()
    assert tree.begin() != _example_tree().begin()


def test_copy_is_independent():
    tree = _example_tree()
    a = tree.begin()
    b = a.copy()

    a.advance()

    assert str(b.deref()) == "(2, 3)"
    assert str(a.deref()) == "(5, 4)"


def test_subtree_iteration_stays_inside_subtree():
    tree = _example_tree()

    left = [str(point) for point in tree.root.left_child.begin()]
    right = [str(point) for point in tree.root.right_child.begin()]

    assert left == ["(2, 3)", "(5, 4)", "(4, 7)"]
    assert right == ["(8, 1)", "(9, 6)"]


def test_from_subtree_on_leaf_yields_single_point():
    tree = _example_tree()
    leaf = tree.root.right_child.left_child

    it = TreeIterator.from_subtree(tree, leaf.handle)

    assert [str(point) for point in it] == ["(8, 1)"]


@pytest.mark.parametrize("count", [1, 2, 3, 7, 10, 64, 101])
def test_iteration_visits_every_node_once(count: int):
    rng = np.random.default_rng(count)
    tree = build_tree(rng.normal(size=(count, 3)))

    handles = []
    it = tree.begin()
    while not it.at_end:
        handles.append(it.handle)
        it.advance()

    assert sorted(handles) == list(range(count))


def test_in_order_sequence_is_sorted_along_root_axis_around_root():
    rng = np.random.default_rng(5)
    tree = build_tree(rng.normal(size=(31, 2)))
    root_value = tree.root.split_point[0]

    values = [point[0] for point in tree]
    root_position = [it for it, point in enumerate(tree) if point is tree.root.split_point][0]

    assert all(value <= root_value for value in values[:root_position])
    assert all(value >= root_value for value in values[root_position + 1:])
