"""Structured logging for the notifier (structlog).

    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()
    logger = get_module_logger()

    with bind_dispatch_context(namespace="ci", pipeline_run="build-1"):
        logger.info("dispatch_started")
"""

from infrastructure.logging.setup import configure_logging, get_module_logger
from infrastructure.logging.context import (
    bind_dispatch_context,
    clear_dispatch_context,
    get_dispatch_id,
)
from infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_dispatch_context",
    "clear_dispatch_context",
    "get_dispatch_id",
    "SENSITIVE_PATTERNS",
    "add_app_info",
    "mask_sensitive_data",
    "truncate_large_values",
]
