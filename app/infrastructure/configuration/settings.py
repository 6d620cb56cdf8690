"""Notifier configuration settings - main aggregator."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import (
    CloudEventsSettings,
    GitHubSettings,
    SlackSettings,
)

# Infrastructure settings
from infrastructure.configuration.infrastructure import DispatchSettings


class Settings(BaseSettings):
    """Notifier configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Integrations**: External service configurations (GitHub, Slack, CloudEvents)
    - **Infrastructure**: Core system configurations (dispatch)

    Environment Variables:
        PREFIX: Environment prefix for non-production deployments
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.configuration import settings

        github_api = settings.github.GITHUB_API_URL
        if settings.dispatch.DISPATCH_ENABLED:
            ...
        ```
    """

    # Application-level settings
    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    # Integration settings
    github: GitHubSettings
    slack: SlackSettings
    cloudevents: CloudEventsSettings

    # Infrastructure settings
    dispatch: DispatchSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production.

        Returns:
            True if PREFIX is empty (production), False otherwise.
        """
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Integrations
            "github": GitHubSettings,
            "slack": SlackSettings,
            "cloudevents": CloudEventsSettings,
            # Infrastructure
            "dispatch": DispatchSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
