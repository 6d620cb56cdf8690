"""Structlog processors applied to every notifier log entry.

Usage:
    from infrastructure.logging.formatters import mask_sensitive_data
"""

from typing import Any, Callable

from infrastructure.security.secrets import REDACTED

Processor = Callable[[Any, str, dict[str, Any]], dict[str, Any]]


def add_app_info(app_name: str, app_version: str = "unknown") -> Processor:
    """Create a processor that adds application info to log entries."""

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


# Key fragments whose values never reach a log sink
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "private_key",
        "authorization",
        "credential",
        "jwt",
        "bearer",
        "pem",
    }
)


def _mask(value: Any, patterns: frozenset[str], mask_value: str) -> Any:
    if isinstance(value, dict):
        return {
            key: (
                mask_value
                if isinstance(key, str)
                and item is not None
                and any(pattern in key.lower() for pattern in patterns)
                else _mask(item, patterns, mask_value)
            )
            for key, item in value.items()
        }
    if isinstance(value, bytes):
        return mask_value
    return value


def mask_sensitive_data(
    mask_value: str = REDACTED,
    additional_patterns: frozenset[str] | None = None,
) -> Processor:
    """Create a processor that masks sensitive data in log entries.

    Keys are matched case-insensitively against SENSITIVE_PATTERNS, nested
    dictionaries are walked, and raw ``bytes`` values are always masked since
    secret material is carried as bytes.

    Args:
        mask_value: The string to replace sensitive values with.
        additional_patterns: Extra patterns to consider sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | frozenset(additional_patterns)

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        return _mask(event_dict, patterns, mask_value)

    return processor


def truncate_large_values(max_length: int = 500) -> Processor:
    """Create a processor that truncates overly large string values.

    Provider error bodies (GitHub JSON, webhook responses) can be large.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
