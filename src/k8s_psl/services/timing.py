"""Per-step timing for service operations.

Each decorated step emits one ``step.complete`` debug event and records
its wall time in ``ServiceResult.meta["duration_ms"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import ParamSpec

import structlog

from k8s_psl.services.result import ServiceResult

log = structlog.get_logger("k8s_psl.timing")

_P = ParamSpec("_P")


def timed_step(func: Callable[_P, ServiceResult]) -> Callable[_P, ServiceResult]:
    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
        started = time.perf_counter()
        result = func(*args, **kwargs)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        log.debug("step.complete", op=result.op, ok=result.ok, duration_ms=duration_ms)
        meta = {**(result.meta or {}), "duration_ms": duration_ms}
        return result.model_copy(update={"meta": meta})

    return wrapper
