from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

import psutil

from kdtreex import config as kx_config


@dataclass
class _ResourceSample:
    cpu_user: float
    cpu_system: float
    rss: int


def _sample_resources(process: psutil.Process) -> _ResourceSample:
    times = process.cpu_times()
    memory = process.memory_info()
    return _ResourceSample(cpu_user=times.user, cpu_system=times.system, rss=memory.rss)


@dataclass
class OperationLog:
    """Collects metadata for a single logged operation."""

    name: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, **values: Any) -> None:
        self.metadata.update(values)


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.3f}"
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _format_message(
    op_log: OperationLog,
    *,
    wall_ms: float,
    cpu_user_ms: float | None,
    cpu_system_ms: float | None,
    rss_delta: int | None,
) -> str:
    parts = [f"op={op_log.name}", f"wall_ms={wall_ms:.3f}"]
    parts.append("cpu_user_ms=NA" if cpu_user_ms is None else f"cpu_user_ms={cpu_user_ms:.3f}")
    parts.append("cpu_system_ms=NA" if cpu_system_ms is None else f"cpu_system_ms={cpu_system_ms:.3f}")
    parts.append("rss_delta=NA" if rss_delta is None else f"rss_delta={rss_delta}")
    for key, value in op_log.metadata.items():
        parts.append(f"{key}={_format_value(value)}")
    return " ".join(parts)


@contextmanager
def log_operation(logger: logging.Logger, name: str) -> Iterator[OperationLog]:
    """Time an operation and emit one ``op=<name>`` INFO record when it completes.

    CPU and RSS deltas are polled through psutil when diagnostics are enabled
    in the runtime config; otherwise they are reported as ``NA``. Nothing is
    logged if the wrapped block raises.
    """

    runtime = kx_config.runtime_config()
    op_log = OperationLog(name=name)
    process = psutil.Process() if runtime.enable_diagnostics else None
    before = _sample_resources(process) if process is not None else None
    start = time.perf_counter()
    yield op_log
    wall_ms = (time.perf_counter() - start) * 1e3

    cpu_user_ms: float | None = None
    cpu_system_ms: float | None = None
    rss_delta: int | None = None
    if process is not None and before is not None:
        after = _sample_resources(process)
        cpu_user_ms = (after.cpu_user - before.cpu_user) * 1e3
        cpu_system_ms = (after.cpu_system - before.cpu_system) * 1e3
        rss_delta = after.rss - before.rss

    if logger.isEnabledFor(logging.INFO):
        logger.info(
            _format_message(
                op_log,
                wall_ms=wall_ms,
                cpu_user_ms=cpu_user_ms,
                cpu_system_ms=cpu_system_ms,
                rss_delta=rss_delta,
            )
        )


__all__ = ["OperationLog", "log_operation"]
