"""Per-operation resource logging.

Every public operation runs inside :func:`log_operation`, which emits a single
``op=<name> wall_ms=... cpu_user_ms=... rss_delta=...`` line followed by any
metadata the operation attached. CPU and RSS sampling go through ``psutil``
and are skipped (reported as ``NA``) when diagnostics are disabled in the
runtime configuration.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

import psutil

from kdtreex import config as kx_config


@dataclass
class OperationLog:
    op: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add_metadata(self, **fields: Any) -> None:
        self.metadata.update(fields)


@dataclass(frozen=True)
class _ResourceSample:
    wall: float
    cpu_user: float | None
    rss: int | None


def _sample(enabled: bool, process: psutil.Process | None) -> _ResourceSample:
    wall = time.perf_counter()
    if not enabled or process is None:
        return _ResourceSample(wall=wall, cpu_user=None, rss=None)
    return _ResourceSample(
        wall=wall,
        cpu_user=process.cpu_times().user,
        rss=process.memory_info().rss,
    )


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.4f}"
    return str(value)


def _render(op_log: OperationLog, start: _ResourceSample, end: _ResourceSample) -> str:
    wall_ms = (end.wall - start.wall) * 1e3
    if start.cpu_user is None or end.cpu_user is None:
        cpu_user = "NA"
    else:
        cpu_user = f"{(end.cpu_user - start.cpu_user) * 1e3:.3f}"
    if start.rss is None or end.rss is None:
        rss_delta = "NA"
    else:
        rss_delta = str(end.rss - start.rss)
    parts = [
        f"op={op_log.op}",
        f"wall_ms={wall_ms:.3f}",
        f"cpu_user_ms={cpu_user}",
        f"rss_delta={rss_delta}",
    ]
    parts.extend(f"{key}={_format_value(value)}" for key, value in op_log.metadata.items())
    return " ".join(parts)


@contextmanager
def log_operation(
    logger: logging.Logger, op: str, *, level: int = logging.INFO
) -> Iterator[OperationLog]:
    """Time the wrapped block and log a one-line resource summary for ``op``."""

    op_log = OperationLog(op=op)
    if not logger.isEnabledFor(level):
        yield op_log
        return

    enabled = kx_config.runtime_config().enable_diagnostics
    process = psutil.Process() if enabled else None
    start = _sample(enabled, process)
    yield op_log
    end = _sample(enabled, process)
    logger.log(level, _render(op_log, start, end))


__all__ = ["OperationLog", "log_operation"]
