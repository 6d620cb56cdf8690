"""Pipeline run notification dispatch.

Observes terminal-state transitions of pipeline runs and fans them out to
the providers bound in the run's namespace: commit statuses (GitHub App),
chat messages (Slack App), and event sinks (CloudEvents).
"""

from modules.notifications.dispatcher import NotificationDispatcher
from modules.notifications.errors import ProviderError, ProviderErrorCode
from modules.notifications.models import (
    DeliveryOutcome,
    DeliveryStatus,
    DispatchResult,
    NotificationBinding,
    PipelineRunEvent,
    ProviderConfig,
    ProviderType,
    RunCondition,
)
from modules.notifications.store import (
    ConflictError,
    InMemoryObjectStore,
    NotFoundError,
    ObjectStore,
    ObjectStoreError,
)

__all__ = [
    "NotificationDispatcher",
    "ProviderError",
    "ProviderErrorCode",
    "DeliveryOutcome",
    "DeliveryStatus",
    "DispatchResult",
    "NotificationBinding",
    "PipelineRunEvent",
    "ProviderConfig",
    "ProviderType",
    "RunCondition",
    "ConflictError",
    "InMemoryObjectStore",
    "NotFoundError",
    "ObjectStore",
    "ObjectStoreError",
]
