"""Dispatch context binding for structured logging.

This module provides utilities for binding dispatch-scoped context to logs,
so every entry emitted while one pipeline run is being dispatched carries
the run's identity and a dispatch ID.

Usage:
    from infrastructure.logging import bind_dispatch_context

    with bind_dispatch_context(namespace="ci", pipeline_run="build-1"):
        # All logs within this block will include the context
        logger.info("dispatch_started")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_dispatch_context(
    namespace: Optional[str] = None,
    pipeline_run: Optional[str] = None,
    dispatch_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind dispatch-scoped context to all logs within the context manager.

    Args:
        namespace: Namespace of the pipeline run being dispatched.
        pipeline_run: Name of the pipeline run being dispatched.
        dispatch_id: Unique dispatch identifier. Auto-generated if not provided.
        **extra_context: Additional key-value pairs to include in logs
            (e.g. binding, provider).

    Yields:
        None - context is automatically bound to structlog's context vars.

    Example:
        with bind_dispatch_context(namespace="ci", pipeline_run="build-1"):
            for binding in bindings:
                with bind_dispatch_context(binding=binding.name):
                    logger.info("binding_notified")
    """
    context: dict[str, Any] = {}

    # Nested blocks keep the outer dispatch ID
    current = structlog.contextvars.get_contextvars().get("dispatch_id")
    context["dispatch_id"] = dispatch_id or current or str(uuid.uuid4())

    if namespace is not None:
        context["namespace"] = namespace

    if pipeline_run is not None:
        context["pipeline_run"] = pipeline_run

    context.update(extra_context)

    previous = {
        key: value
        for key, value in structlog.contextvars.get_contextvars().items()
        if key in context
    }
    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())
        if previous:
            structlog.contextvars.bind_contextvars(**previous)


def get_dispatch_id() -> Optional[str]:
    """Get the current dispatch ID from the logging context.

    Returns:
        The dispatch ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("dispatch_id")


def clear_dispatch_context() -> None:
    """Clear all dispatch-scoped context from the logging context.

    Should be called by the reconcile loop between events to prevent
    context leakage.
    """
    structlog.contextvars.clear_contextvars()
