import pytest

from kdtreex import config as kx_config


def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in [
        "KDTREEX_PRECISION",
        "KDTREEX_SELECTION",
        "KDTREEX_SEARCH",
        "KDTREEX_ENABLE_DIAGNOSTICS",
        "KDTREEX_LOG_LEVEL",
    ]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_cache():
    kx_config.reset_runtime_config_cache()
    yield
    kx_config.reset_runtime_config_cache()


def test_runtime_config_defaults(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)

    runtime = kx_config.runtime_config()

    assert runtime.precision == "float64"
    assert runtime.default_dtype.name == "float64"
    assert runtime.selection == "partition"
    assert runtime.search == "pruned"
    assert runtime.enable_diagnostics is True
    assert runtime.log_level == "INFO"


def test_runtime_config_reads_environment(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("KDTREEX_PRECISION", "Float32")
    monkeypatch.setenv("KDTREEX_SELECTION", "sort")
    monkeypatch.setenv("KDTREEX_SEARCH", "brute-force")
    monkeypatch.setenv("KDTREEX_ENABLE_DIAGNOSTICS", "off")
    monkeypatch.setenv("KDTREEX_LOG_LEVEL", "debug")

    runtime = kx_config.runtime_config()

    assert runtime.precision == "float32"
    assert runtime.selection == "sort"
    assert runtime.search == "brute_force"
    assert runtime.enable_diagnostics is False
    assert runtime.log_level == "DEBUG"


def test_runtime_config_is_cached(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)
    first = kx_config.runtime_config()
    monkeypatch.setenv("KDTREEX_SELECTION", "sort")

    assert kx_config.runtime_config() is first
    kx_config.reset_runtime_config_cache()
    assert kx_config.runtime_config().selection == "sort"


@pytest.mark.parametrize(
    "key, value",
    [
        ("KDTREEX_PRECISION", "float16"),
        ("KDTREEX_SELECTION", "median-of-medians"),
        ("KDTREEX_SEARCH", "approximate"),
    ],
)
def test_runtime_config_rejects_unknown_values(monkeypatch: pytest.MonkeyPatch, key: str, value: str):
    _clear_env(monkeypatch)
    monkeypatch.setenv(key, value)

    with pytest.raises(ValueError):
        kx_config.runtime_config()


def test_unrecognised_boolean_falls_back_to_default(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("KDTREEX_ENABLE_DIAGNOSTICS", "maybe")

    assert kx_config.runtime_config().enable_diagnostics is True


def test_describe_runtime_is_serialisable(monkeypatch: pytest.MonkeyPatch):
    _clear_env(monkeypatch)

    snapshot = kx_config.describe_runtime()

    assert snapshot == {
        "precision": "float64",
        "selection": "partition",
        "search": "pruned",
        "enable_diagnostics": True,
        "log_level": "INFO",
    }
