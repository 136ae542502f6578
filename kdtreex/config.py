from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict

import numpy as np

_SUPPORTED_PRECISION = {"float32", "float64", "int32", "int64"}
_SUPPORTED_SELECTION = {"partition", "sort"}
_SUPPORTED_SEARCH = {"pruned", "brute_force"}
_DEFAULT_PRECISION = "float64"
_DEFAULT_SELECTION = "partition"
_DEFAULT_SEARCH = "pruned"


def _bool_from_env(value: str | None, *, default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _normalise_choice(value: str | None, *, default: str, supported: set[str], label: str) -> str:
    if value is None or value.strip() == "":
        return default
    choice = value.strip().lower().replace("-", "_")
    if choice not in supported:
        raise ValueError(f"Unsupported {label} '{value}'. Expected one of {sorted(supported)}.")
    return choice


def _normalise_precision(value: str | None) -> str:
    return _normalise_choice(
        value, default=_DEFAULT_PRECISION, supported=_SUPPORTED_PRECISION, label="precision"
    )


def _parse_selection(value: str | None) -> str:
    return _normalise_choice(
        value, default=_DEFAULT_SELECTION, supported=_SUPPORTED_SELECTION, label="selection strategy"
    )


def _parse_search(value: str | None) -> str:
    return _normalise_choice(
        value, default=_DEFAULT_SEARCH, supported=_SUPPORTED_SEARCH, label="search method"
    )


@dataclass(frozen=True)
class RuntimeConfig:
    precision: str
    selection: str
    search: str
    enable_diagnostics: bool
    log_level: str

    @property
    def default_dtype(self) -> np.dtype:
        return np.dtype(self.precision)

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        precision = _normalise_precision(os.getenv("KDTREEX_PRECISION"))
        selection = _parse_selection(os.getenv("KDTREEX_SELECTION"))
        search = _parse_search(os.getenv("KDTREEX_SEARCH"))
        enable_diagnostics = _bool_from_env(
            os.getenv("KDTREEX_ENABLE_DIAGNOSTICS"), default=True
        )
        log_level = os.getenv("KDTREEX_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        return cls(
            precision=precision,
            selection=selection,
            search=search,
            enable_diagnostics=enable_diagnostics,
            log_level=log_level,
        )


def _configure_logging(level: str) -> None:
    logger = logging.getLogger("kdtreex")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(levelname)s %(name)s: %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)


@lru_cache(maxsize=None)
def runtime_config() -> RuntimeConfig:
    config = RuntimeConfig.from_env()
    _configure_logging(config.log_level)
    return config


def reset_runtime_config_cache() -> None:
    runtime_config.cache_clear()


def describe_runtime() -> Dict[str, Any]:
    """Return a serialisable view of the active runtime configuration."""

    config = runtime_config()
    return {
        "precision": config.precision,
        "selection": config.selection,
        "search": config.search,
        "enable_diagnostics": config.enable_diagnostics,
        "log_level": config.log_level,
    }


__all__ = [
    "RuntimeConfig",
    "runtime_config",
    "reset_runtime_config_cache",
    "describe_runtime",
]
