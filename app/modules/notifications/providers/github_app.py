"""Commit status provider backed by a GitHub App."""

from typing import Optional

from infrastructure.configuration.settings import Settings
from infrastructure.logging import get_module_logger
from infrastructure.security import SecretBytes
from integrations.github import GitHubApiError, GitHubAppClient
from modules.notifications import annotations
from modules.notifications.errors import ProviderError
from modules.notifications.models import PipelineRunEvent, ProviderType, RunCondition
from modules.notifications.providers.base import NotificationProvider

logger = get_module_logger()


def commit_state(condition: RunCondition) -> str:
    """Map a run condition to a GitHub commit status state."""
    match condition:
        case RunCondition.UNKNOWN:
            return "pending"
        case RunCondition.SUCCEEDED:
            return "success"
        case RunCondition.FAILED:
            return "error"
        case _:
            return "failure"


class GitHubAppProvider(NotificationProvider):
    """Reports pipeline run results as commit statuses.

    The run must carry the owner, repository, and commit SHA annotations and
    a correlation id (the context-id annotation, falling back to the
    pipeline reference).
    """

    def __init__(
        self,
        app_id: int,
        private_key: SecretBytes,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self.app_id = app_id
        self.private_key = private_key
        self.base_url = base_url
        self._settings = settings

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.GITHUB_APP

    def _required_annotation(self, event: PipelineRunEvent, key: str) -> str:
        value = event.annotations.get(key)
        if not value:
            raise ProviderError.failed_validation(f"missing annotation {key}")
        return value

    def _notify(self, event: PipelineRunEvent) -> None:
        context_id = event.annotations.get(annotations.CONTEXT_ID) or event.pipeline_ref
        if not context_id:
            raise ProviderError.failed_validation(
                f"missing annotation {annotations.CONTEXT_ID} and no pipeline reference"
            )
        owner = self._required_annotation(event, annotations.GITHUB_OWNER)
        repo = self._required_annotation(event, annotations.GITHUB_REPO)
        sha = self._required_annotation(event, annotations.GITHUB_SHA)

        if event.condition is None:
            logger.debug("github_status_skipped_no_condition", pipeline_run=event.name)
            return

        client = GitHubAppClient(
            self.app_id,
            self.private_key,
            base_url=self.base_url,
            settings=self._settings,
        )
        try:
            client.create_commit_status(
                owner,
                repo,
                sha,
                state=commit_state(event.condition),
                context=f"tekton: {context_id}",
                description=event.reason,
                target_url="",
            )
        except GitHubApiError as e:
            raise ProviderError.runtime_error(
                f"failed to create commit status: {e}"
            ) from e
        logger.info(
            "github_commit_status_created",
            owner=owner,
            repo=repo,
            sha=sha,
            state=commit_state(event.condition),
        )
