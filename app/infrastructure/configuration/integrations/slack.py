"""Slack integration settings."""

from infrastructure.configuration.base import IntegrationSettings


class SlackSettings(IntegrationSettings):
    """Slack Web API configuration.

    The access token itself is never configured here: each SlackApp provider
    references its own secret.

    Environment Variables:
        SLACK_API_URL: Web API base URL (must end with a slash)
        SLACK_REQUEST_TIMEOUT_SECONDS: Transport timeout per API call
    """

    SLACK_API_URL: str = "https://slack.com/api/"
    SLACK_REQUEST_TIMEOUT_SECONDS: int = 30
