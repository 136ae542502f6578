from __future__ import annotations

import os
from typing import Dict

from kdtreex import config as kx_config

_OVERRIDE_ENV = {
    "selection": "KDTREEX_SELECTION",
    "search": "KDTREEX_SEARCH",
    "precision": "KDTREEX_PRECISION",
    "log_level": "KDTREEX_LOG_LEVEL",
    "diagnostics": "KDTREEX_ENABLE_DIAGNOSTICS",
}


def _apply_runtime_overrides(
    *,
    selection: str | None = None,
    search: str | None = None,
    precision: str | None = None,
    log_level: str | None = None,
    diagnostics: bool | None = None,
) -> kx_config.RuntimeConfig:
    """Export CLI overrides to the environment and reload the runtime config."""

    values = {
        "selection": selection,
        "search": search,
        "precision": precision,
        "log_level": log_level,
        "diagnostics": None if diagnostics is None else ("1" if diagnostics else "0"),
    }
    for field, value in values.items():
        if value is not None:
            os.environ[_OVERRIDE_ENV[field]] = str(value)
    kx_config.reset_runtime_config_cache()
    return kx_config.runtime_config()


def _emit_runtime_banner() -> Dict[str, object]:
    snapshot = kx_config.describe_runtime()
    print(
        f"[queries] selection={snapshot['selection']} search={snapshot['search']} "
        f"precision={snapshot['precision']} diagnostics={int(bool(snapshot['enable_diagnostics']))}"
    )
    return snapshot
