"""Notification providers.

Exports:
    NotificationProvider: Abstract base class for providers
    GitHubAppProvider: Commit statuses through a GitHub App
    SlackAppProvider: Chat messages through a Slack App
    CloudEventsProvider: CloudEvents to an event sink
    resolve_provider: Build a provider from a provider resource
"""

from modules.notifications.providers.base import NotificationProvider
from modules.notifications.providers.cloudevents import (
    CloudEvent,
    CloudEventsProtocol,
    CloudEventsProvider,
    SendResult,
    WebhookProtocol,
)
from modules.notifications.providers.github_app import GitHubAppProvider
from modules.notifications.providers.resolver import resolve_provider
from modules.notifications.providers.slack_app import SlackAppProvider

__all__ = [
    "NotificationProvider",
    "CloudEvent",
    "CloudEventsProtocol",
    "CloudEventsProvider",
    "SendResult",
    "WebhookProtocol",
    "GitHubAppProvider",
    "SlackAppProvider",
    "resolve_provider",
]
