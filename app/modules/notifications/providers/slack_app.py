"""Chat provider posting pipeline run summaries to Slack channels."""

from datetime import timedelta
from typing import Any, Dict, List, Optional

from slack_sdk.errors import SlackApiError, SlackClientError

from infrastructure.configuration.settings import Settings
from infrastructure.logging import get_module_logger
from infrastructure.security import SecretBytes
from integrations.slack.client import new_web_client
from modules.notifications import annotations
from modules.notifications.errors import ProviderError
from modules.notifications.models import (
    PipelineRunEvent,
    ProviderType,
    RunCondition,
    SlackChannel,
)
from modules.notifications.providers.base import NotificationProvider

logger = get_module_logger()

COLOR_GOOD = "#2EB886"
COLOR_WARNING = "#DAA038"
COLOR_DANGER = "#A30100"

_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE


def attachment_color(condition: Optional[RunCondition]) -> str:
    match condition:
        case RunCondition.SUCCEEDED:
            return COLOR_GOOD
        case RunCondition.UNKNOWN:
            return COLOR_WARNING
        case _:
            return COLOR_DANGER


def _with_fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(frac).rjust(width, '0').rstrip('0')}"


def format_duration(delta: timedelta) -> str:
    """Render a duration like ``1h3m5s``, ``3m5s``, ``0s`` or ``250ms``."""
    total = (
        (delta.days * 86400 + delta.seconds) * _SECOND
        + delta.microseconds * _MICROSECOND
    )
    if total == 0:
        return "0s"
    sign = "-" if total < 0 else ""
    total = abs(total)

    if total < _SECOND:
        if total < _MICROSECOND:
            return f"{sign}{total}ns"
        if total < _MILLISECOND:
            return f"{sign}{_with_fraction(total, _MICROSECOND)}µs"
        return f"{sign}{_with_fraction(total, _MILLISECOND)}ms"

    hours, rest = divmod(total, _HOUR)
    minutes, rest = divmod(rest, _MINUTE)
    seconds = f"{_with_fraction(rest, _SECOND)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return f"{sign}{seconds}"


def dashboard_url(base_url: str, namespace: str, name: str) -> str:
    return f"{base_url.rstrip('/')}/#/namespaces/{namespace}/pipelineruns/{name}"


def build_message(event: PipelineRunEvent) -> Dict[str, Any]:
    """Build the chat.postMessage arguments (without channel) for ``event``."""
    title = f"{event.name}.{event.namespace}"

    if event.start_time and event.completion_time:
        context = format_duration(event.completion_time - event.start_time)
    else:
        context = "n/a"
    base_url = event.annotations.get(annotations.DASHBOARD_BASE_URL)
    if base_url:
        url = dashboard_url(base_url, event.namespace, event.name)
        context += f" | <{url}|open dashboard>"

    blocks: List[Dict[str, Any]] = [
        {"type": "section", "text": {"type": "mrkdwn", "text": f"*{title}*"}},
        {
            "type": "section",
            "text": {"type": "plain_text", "text": f"{event.reason}: {event.message}"},
        },
        {"type": "context", "elements": [{"type": "mrkdwn", "text": context}]},
    ]
    return {
        "fallback": f"{event.reason}: {title}",
        "attachments": [{"color": attachment_color(event.condition), "blocks": blocks}],
    }


def resolve_channel(channel: SlackChannel) -> str:
    if channel.id:
        return channel.id
    if channel.name:
        return channel.name
    raise ProviderError.invalid_provider_spec("slack channel needs an id or a name")


class SlackAppProvider(NotificationProvider):
    """Posts a finished run's summary to each configured channel in order.

    Delivery stops at the first channel that fails.
    """

    def __init__(
        self,
        access_token: SecretBytes,
        channels: List[SlackChannel],
        settings: Optional[Settings] = None,
    ):
        self.access_token = access_token
        self.channels = list(channels)
        self._settings = settings

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.SLACK_APP

    def _notify(self, event: PipelineRunEvent) -> None:
        if event.condition is None or event.condition == RunCondition.UNKNOWN:
            logger.debug("slack_message_skipped_unfinished", pipeline_run=event.name)
            return

        client = new_web_client(self.access_token, self._settings)
        for channel in self.channels:
            channel_id = resolve_channel(channel)
            message = build_message(event)
            try:
                response = client.chat_postMessage(
                    channel=channel_id,
                    text=message["fallback"],
                    **message,
                )
            except SlackApiError as e:
                raise ProviderError.runtime_error(
                    f"got an error from Slack: {e.response.get('error', '')}"
                ) from e
            except (SlackClientError, OSError) as e:
                raise ProviderError.runtime_error(
                    f"failed to post Slack message: {e}"
                ) from e

            if not response.get("ok"):
                raise ProviderError.runtime_error(
                    f"got an error from Slack: {response.get('error', '')}"
                )
            logger.info(
                "slack_message_posted",
                channel=channel_id,
                ts=response.get("ts"),
                pipeline_run=event.name,
            )
