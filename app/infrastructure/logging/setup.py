"""Structlog configuration for the notifier process.

Log entries carry callsite context, bound dispatch context, and app
identity; credential-looking fields are masked before rendering. Output is
JSON in production (no PREFIX) and human-readable otherwise. Under pytest
nothing is emitted.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()
    logger = get_module_logger()
    logger.info("binding_notified", provider_type="SlackApp")
"""

import inspect
import logging
import sys
from types import ModuleType
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.configuration import settings
from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
)
from infrastructure.security import json_default

APP_NAME = "tekton-notifier"
SILENT = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _render_default(value):
    try:
        return json_default(value)
    except TypeError:
        return repr(value)


def _build_processors(prod_mode: bool) -> list:
    callsite = structlog.processors.CallsiteParameterAdder(
        parameters=[
            structlog.processors.CallsiteParameter.FILENAME,
            structlog.processors.CallsiteParameter.LINENO,
            structlog.processors.CallsiteParameter.FUNC_NAME,
        ]
    )
    renderer = (
        structlog.processors.JSONRenderer(default=_render_default)
        if prod_mode
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        callsite,
        add_app_info(APP_NAME, settings.GIT_SHA),
        # after merge_contextvars so bound context is masked too
        mask_sensitive_data(),
        truncate_large_values(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def _apply(processors: list, level: int, force: bool = False) -> BoundLogger:
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=force)
    return structlog.stdlib.get_logger()


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Level name overriding settings.LOG_LEVEL.
        is_production: Overrides settings.is_production (JSON vs console).

    Returns:
        The configured root logger.
    """
    if _is_test_environment():
        logging.root.setLevel(SILENT)
        return _apply(
            [
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                mask_sensitive_data(),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            SILENT,
            force=True,
        )

    if is_production is None:
        is_production = settings.is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()
    return _apply(
        _build_processors(is_production),
        getattr(logging, level_name, logging.INFO),
    )


logger: BoundLogger = configure_logging()


def _caller_module() -> Optional[ModuleType]:
    # two frames up: past this helper and past get_module_logger
    frame = inspect.currentframe()
    for _ in range(2):
        frame = frame.f_back if frame else None
    return inspect.getmodule(frame) if frame else None


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    Example:
        # In modules/notifications/dispatcher.py
        logger = get_module_logger()
        # context: {"component": "dispatcher",
        #           "module_path": "modules.notifications.dispatcher"}
    """
    module = _caller_module()
    if module is None:
        return logger.bind(component="unknown")
    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
