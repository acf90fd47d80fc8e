"""Per-call timing for service operations.

``@traced`` wraps a service method; ``trace_span()`` marks a nested step
inside it.  Tracing is off unless :func:`enable_telemetry` was called
(the CLI does so for ``--verbose``), and when off the wrappers only pay
for one ContextVar read.  The finished span tree lands in
``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from hasoneproduct.services.result import ServiceResult

log = structlog.get_logger("hasoneproduct.telemetry")

_tracing: ContextVar[bool] = ContextVar("hasoneproduct_tracing", default=False)
_active: ContextVar[Span | None] = ContextVar("hasoneproduct_active_span", default=None)


@dataclass
class Span:
    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    @property
    def duration_ms(self) -> float:
        return 0.0 if self.finished is None else (self.finished - self.started) * 1000

    def finish(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        tree: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            tree["annotations"] = dict(self.annotations)
        if self.children:
            tree["children"] = [child.to_dict() for child in self.children]
        return tree


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Record a child step of the active traced call.

    Yields None outside a traced call or while tracing is off.
    """
    parent = get_current_span()
    if parent is None:
        yield None
        return

    span = Span(name)
    parent.children.append(span)
    reset = _active.set(span)
    try:
        yield span
    finally:
        span.finish()
        _active.reset(reset)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time *func* and attach its span tree to the ServiceResult it returns."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _tracing.get():
            return func(*args, **kwargs)

        span = Span(func.__qualname__)
        reset = _active.set(span)
        try:
            result = func(*args, **kwargs)
        except Exception:
            log.debug("span.failed", span_name=span.name)
            raise
        finally:
            span.finish()
            _active.reset(reset)

        log.debug("span.complete", span_name=span.name, duration_ms=round(span.duration_ms, 2))
        if not isinstance(result, ServiceResult):
            return result
        meta = dict(result.meta or {})
        meta["telemetry"] = span.to_dict()
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    _tracing.set(True)


def disable_telemetry() -> None:
    _tracing.set(False)


def get_current_span() -> Span | None:
    """The innermost open span, or None while tracing is off."""
    return _active.get() if _tracing.get() else None
