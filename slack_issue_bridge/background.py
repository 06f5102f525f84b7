"""Utilities for running Slack and GitHub calls off the listener thread."""

from __future__ import annotations

from contextvars import copy_context
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from structlog.contextvars import bind_contextvars, get_contextvars


_executor = ThreadPoolExecutor(max_workers=8, thread_name_prefix="issue-bridge")


def run_async(
    func: Callable[..., Any],
    /,
    *args: Any,
    trace_id: str | None = None,
    **kwargs: Any,
) -> Future:
    """Submit *func* to the shared thread pool and return a Future.

    The caller's contextvars travel with the call so structlog events emitted by
    the worker keep the caller's ``trace_id``.
    """

    context = copy_context()
    if trace_id is not None:
        existing_trace = context.run(lambda: get_contextvars().get("trace_id"))
        if existing_trace != trace_id:
            context.run(lambda: bind_contextvars(trace_id=trace_id))

    def runner() -> Any:
        return context.run(func, *args, **kwargs)

    return _executor.submit(runner)

