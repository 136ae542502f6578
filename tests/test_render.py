from kdtreex import render_tree
from kdtreex.algo import build_tree
from kdtreex.datasets import example_points


def test_render_tree_draws_right_subtree_on_top():
    tree = build_tree(example_points())

    expected = "\n".join(
        [
            "    (9, 6)",
            "     \\",
            "        (8, 1)",
            " /",
            "(7, 2)",
            " \\",
            "        (4, 7)",
            "     /",
            "    (5, 4)",
            "     \\",
            "        (2, 3)",
        ]
    )
    assert render_tree(tree) == expected
    assert str(tree) == expected


def test_render_single_point():
    tree = build_tree([[1.5, 2.0, -3.0]])

    assert render_tree(tree) == "(1.5, 2.0, -3.0)"
