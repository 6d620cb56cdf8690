"""Unit tests for infrastructure.configuration.settings module.

Tests cover:
- Defaults for every settings section
- Environment variable overrides
- Settings aggregation and explicit section overrides
"""

import pytest

from infrastructure.configuration.infrastructure import DispatchSettings
from infrastructure.configuration.integrations import (
    CloudEventsSettings,
    GitHubSettings,
    SlackSettings,
)
from infrastructure.configuration.settings import Settings


@pytest.mark.unit
class TestSectionDefaults:
    def test_github_defaults(self, test_settings):
        github = test_settings.github
        assert github.GITHUB_API_URL == "https://api.github.com"
        assert github.GITHUB_JWT_EXPIRATION_SECONDS == 540
        assert github.GITHUB_REQUEST_TIMEOUT_SECONDS == 30

    def test_slack_defaults(self, test_settings):
        assert test_settings.slack.SLACK_API_URL == "https://slack.com/api/"
        assert test_settings.slack.SLACK_REQUEST_TIMEOUT_SECONDS == 30

    def test_cloudevents_defaults(self, test_settings):
        cloudevents = test_settings.cloudevents
        assert cloudevents.CLOUDEVENTS_SOURCE
        assert cloudevents.CLOUDEVENTS_TYPE
        assert cloudevents.CLOUDEVENTS_REQUEST_TIMEOUT_SECONDS == 30

    def test_dispatch_enabled_by_default(self, test_settings):
        assert test_settings.dispatch.DISPATCH_ENABLED is True


@pytest.mark.unit
class TestEnvironmentOverrides:
    def test_github_api_url_override(self, monkeypatch):
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3")

        assert GitHubSettings().GITHUB_API_URL == "https://ghe.example.com/api/v3"

    def test_slack_timeout_override(self, monkeypatch):
        monkeypatch.setenv("SLACK_REQUEST_TIMEOUT_SECONDS", "5")

        assert SlackSettings().SLACK_REQUEST_TIMEOUT_SECONDS == 5

    def test_cloudevents_source_override(self, monkeypatch):
        monkeypatch.setenv("CLOUDEVENTS_SOURCE", "/my/cluster")

        assert CloudEventsSettings().CLOUDEVENTS_SOURCE == "/my/cluster"

    def test_dispatch_kill_switch(self, monkeypatch):
        monkeypatch.setenv("DISPATCH_ENABLED", "false")

        assert DispatchSettings().DISPATCH_ENABLED is False


@pytest.mark.unit
class TestSettings:
    def test_subsettings_are_instantiated(self, test_settings):
        assert isinstance(test_settings.github, GitHubSettings)
        assert isinstance(test_settings.slack, SlackSettings)
        assert isinstance(test_settings.cloudevents, CloudEventsSettings)
        assert isinstance(test_settings.dispatch, DispatchSettings)

    def test_explicit_section_is_kept(self, monkeypatch):
        monkeypatch.delenv("DISPATCH_ENABLED", raising=False)
        dispatch = DispatchSettings(DISPATCH_ENABLED=False)

        settings = Settings(dispatch=dispatch)

        assert settings.dispatch.DISPATCH_ENABLED is False

    def test_production_when_prefix_empty(self, test_settings):
        assert test_settings.PREFIX == ""
        assert test_settings.is_production is True

    def test_non_production_with_prefix(self, monkeypatch):
        monkeypatch.setenv("PREFIX", "dev-")

        assert Settings().is_production is False

    def test_application_defaults(self, test_settings):
        assert test_settings.LOG_LEVEL == "INFO"
        assert test_settings.GIT_SHA == "Unknown"
