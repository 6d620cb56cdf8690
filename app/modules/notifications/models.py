"""Notification dispatch models.

Pydantic models for the resources the dispatcher reads (pipeline runs,
bindings, providers, secrets) and for the results it reports back to the
reconcile loop.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.notifications import annotations
from modules.notifications.errors import ProviderErrorCode


class RunCondition(str, Enum):
    """Terminal condition of a pipeline run.

    The value is what gets persisted as the recorded status.
    """

    UNKNOWN = "Unknown"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"


class PipelineRunEvent(BaseModel):
    """Immutable snapshot of a pipeline run at the time it was observed.

    Attributes:
        namespace: Namespace of the run
        name: Name of the run
        condition: Current ``Succeeded`` condition status, None before the
            run reports any condition
        reason: Condition reason (e.g. "Succeeded", "PipelineRunTimeout")
        message: Condition message
        start_time: When the run started
        completion_time: When the run completed
        annotations: Run annotations, including routing metadata
        pipeline_ref: Name of the referenced pipeline, if any
        resource_version: Version used for optimistic writes
    """

    model_config = ConfigDict(frozen=True)

    namespace: str
    name: str
    condition: Optional[RunCondition] = None
    reason: str = ""
    message: str = ""
    start_time: Optional[datetime] = None
    completion_time: Optional[datetime] = None
    annotations: Dict[str, str] = Field(default_factory=dict)
    pipeline_ref: Optional[str] = None
    resource_version: Optional[str] = None

    @property
    def recorded_status(self) -> Optional[str]:
        """Status persisted by the last dispatch round, if any."""
        return self.annotations.get(annotations.LAST_STATUS)


class TaskRunFilter(BaseModel):
    enabled: bool


class PipelineRunFilter(BaseModel):
    enabled: bool


class RunFilter(BaseModel):
    """Declared filtering rules for a binding.

    Accepted and stored but not evaluated when selecting bindings.
    """

    task_run: Optional[TaskRunFilter] = None
    pipeline_run: Optional[PipelineRunFilter] = None
    label_selector: Optional[Dict[str, Any]] = None


class NotificationBinding(BaseModel):
    """Routes run events from any namespace to a provider in its own namespace.

    ``ready`` mirrors the binding's Ready condition; a binding whose readiness
    has not been reported is not selected.
    """

    name: str
    namespace: str
    provider_ref: str
    suspend: bool = False
    ready: bool = False
    filter: Optional[RunFilter] = None


class ProviderType(str, Enum):
    GITHUB_APP = "GitHubApp"
    SLACK_APP = "SlackApp"
    CLOUD_EVENTS = "CloudEvents"


class SecretKeyReference(BaseModel):
    """Reference to a secret in the provider's namespace.

    ``key`` overrides the provider kind's default data key.
    """

    name: str
    key: Optional[str] = None


class PrivateKeySource(BaseModel):
    secret_ref: Optional[SecretKeyReference] = None


class AccessTokenSource(BaseModel):
    secret_ref: Optional[SecretKeyReference] = None


class GitHubAppSpec(BaseModel):
    app_id: int
    private_key: Optional[PrivateKeySource] = None
    base_url: Optional[str] = None


class SlackChannel(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None


class SlackAppSpec(BaseModel):
    access_token: Optional[AccessTokenSource] = None
    channels: List[SlackChannel] = Field(default_factory=list)


class WebhookSpec(BaseModel):
    url: str = ""


class CloudEventsSpec(BaseModel):
    protocol: str = "Webhook"
    webhook: Optional[WebhookSpec] = None
    source: Optional[str] = None
    type: Optional[str] = None


class ProviderConfig(BaseModel):
    """Provider resource as stored in the cluster.

    ``type`` is the raw tag and may name a kind this build does not know;
    exactly one of the variant specs is meaningful for a known tag.
    """

    name: str
    namespace: str
    type: str
    github_app: Optional[GitHubAppSpec] = None
    slack_app: Optional[SlackAppSpec] = None
    cloud_events: Optional[CloudEventsSpec] = None


class SecretResource(BaseModel):
    name: str
    namespace: str
    data: Optional[Dict[str, bytes]] = None


class DeliveryStatus(str, Enum):
    DELIVERED = "delivered"
    FAILED = "failed"


class DeliveryOutcome(BaseModel):
    """Result of notifying one binding's provider.

    Example:
        outcome = DeliveryOutcome(
            binding="notify-ci",
            namespace="ci",
            provider="github",
            provider_type="GitHubApp",
            status=DeliveryStatus.FAILED,
            error_code=ProviderErrorCode.FAILED_VALIDATION,
            message="FailedValidation: missing annotation ...",
        )
    """

    binding: str
    namespace: str
    provider: str
    provider_type: Optional[str] = None
    status: DeliveryStatus
    error_code: Optional[ProviderErrorCode] = None
    message: str = ""

    @property
    def is_success(self) -> bool:
        """Check if delivery was successful."""
        return self.status == DeliveryStatus.DELIVERED


class DispatchResult(BaseModel):
    """Report of one dispatch round, returned to the reconcile loop.

    Attributes:
        dispatched: True when the recorded status was written and bindings
            were processed
        requeue: True when the caller should retry the run later
        outcomes: Per-binding delivery outcomes
        dispatch_id: Correlation id carried by the round's log entries
    """

    dispatched: bool = False
    requeue: bool = False
    outcomes: List[DeliveryOutcome] = Field(default_factory=list)
    dispatch_id: Optional[str] = None

    @classmethod
    def skipped(cls) -> "DispatchResult":
        return cls()

    @classmethod
    def retry(cls) -> "DispatchResult":
        return cls(requeue=True)

    @property
    def failed_outcomes(self) -> List[DeliveryOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.is_success]
