"""Test data factories for deterministic test data generation."""

from tests.factories.notifications import (
    make_binding,
    make_cloudevents_provider_config,
    make_github_provider_config,
    make_pipeline_run,
    make_secret,
    make_slack_provider_config,
)

__all__ = [
    "make_binding",
    "make_cloudevents_provider_config",
    "make_github_provider_config",
    "make_pipeline_run",
    "make_secret",
    "make_slack_provider_config",
]
