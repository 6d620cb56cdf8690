from typing import Optional

from slack_sdk import WebClient

from infrastructure.configuration import settings as default_settings
from infrastructure.configuration.settings import Settings
from infrastructure.security import SecretBytes, reveal_str


def new_web_client(token: SecretBytes, settings: Optional[Settings] = None) -> WebClient:
    """Returns a Slack WebClient authenticated with a bot access token.

    Each provider carries its own token, so clients are built per provider
    rather than shared.
    """
    settings = settings or default_settings
    return WebClient(
        token=reveal_str(token),
        base_url=settings.slack.SLACK_API_URL,
        timeout=settings.slack.SLACK_REQUEST_TIMEOUT_SECONDS,
    )
