"""Dispatch infrastructure settings."""

from infrastructure.configuration.base import InfrastructureSettings


class DispatchSettings(InfrastructureSettings):
    """Notification dispatcher configuration.

    Environment Variables:
        DISPATCH_ENABLED: Master switch; when false, dispatch is a no-op
            (no recorded-status write, no deliveries)

    Example:
        ```python
        from infrastructure.configuration import settings

        if settings.dispatch.DISPATCH_ENABLED:
            ...
        ```
    """

    DISPATCH_ENABLED: bool = True
