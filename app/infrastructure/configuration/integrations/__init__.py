"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.cloudevents import CloudEventsSettings
from infrastructure.configuration.integrations.github import GitHubSettings
from infrastructure.configuration.integrations.slack import SlackSettings

__all__ = [
    "CloudEventsSettings",
    "GitHubSettings",
    "SlackSettings",
]
