"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the notifier
using Pydantic BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)

Example:
    ```python
    from infrastructure.configuration import settings

    timeout = settings.slack.SLACK_REQUEST_TIMEOUT_SECONDS

    # Check environment
    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings, settings

__all__ = ["Settings", "settings"]
