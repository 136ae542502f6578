import logging

import pytest

from kdtreex import config as kx_config
from kdtreex.algo import build_tree
from kdtreex.datasets import example_points
from kdtreex.logging import get_logger
from kdtreex.queries import nearest_neighbor


def test_get_logger_nests_under_package():
    assert get_logger("queries.nearest").name == "kdtreex.queries.nearest"
    assert get_logger("kdtreex.algo").name == "kdtreex.algo"
    assert get_logger().name == "kdtreex"


def test_build_tree_emits_resource_log(caplog: pytest.LogCaptureFixture) -> None:
    kx_config.reset_runtime_config_cache()
    caplog.set_level(logging.INFO, logger="kdtreex.algo.build")

    build_tree(example_points())

    records = [record for record in caplog.records if "op=build_tree" in record.message]
    assert records, "expected build_tree operation log"
    message = records[-1].message
    assert "wall_ms=" in message
    assert "cpu_user_ms=" in message
    assert "rss_delta=" in message
    assert "points=6" in message
    assert "dims=2" in message
    assert "height=3" in message
    assert "selection=partition" in message


def test_nearest_query_emits_visit_count(caplog: pytest.LogCaptureFixture) -> None:
    kx_config.reset_runtime_config_cache()
    tree = build_tree(example_points())
    caplog.set_level(logging.INFO, logger="kdtreex.queries.nearest")

    nearest_neighbor(tree, [9, 2], method="pruned")
    nearest_neighbor(tree, [9, 2], method="brute_force")

    messages = [record.message for record in caplog.records if "op=nearest_query" in record.message]
    assert len(messages) == 2
    assert "method=pruned" in messages[0]
    assert "visited=3" in messages[0]
    assert "method=brute_force" in messages[1]
    assert "visited=6" in messages[1]


def test_failed_operation_is_not_logged(caplog: pytest.LogCaptureFixture) -> None:
    kx_config.reset_runtime_config_cache()
    caplog.set_level(logging.INFO, logger="kdtreex.algo.build")

    with pytest.raises(ValueError):
        build_tree([])

    assert not [record for record in caplog.records if "op=build_tree" in record.message]


def test_diagnostics_can_be_disabled(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("KDTREEX_ENABLE_DIAGNOSTICS", "0")
    kx_config.reset_runtime_config_cache()
    caplog.set_level(logging.INFO, logger="kdtreex.queries.nearest")

    tree = build_tree(example_points())
    nearest_neighbor(tree, [0, 0])

    records = [record for record in caplog.records if "op=nearest_query" in record.message]
    assert records
    message = records[-1].message
    assert "cpu_user_ms=NA" in message
    assert "rss_delta=NA" in message

    monkeypatch.delenv("KDTREEX_ENABLE_DIAGNOSTICS", raising=False)
    kx_config.reset_runtime_config_cache()
