"""Object store interface for dispatch resources.

The authoritative copies of pipeline runs, bindings, providers, and secrets
live in the cluster. The dispatcher reaches them only through this protocol,
so the cluster client can be swapped for the in-memory store in tests and
local runs.
"""

import threading
from typing import Dict, List, Optional, Protocol, Tuple

from infrastructure.logging import get_module_logger
from modules.notifications.models import (
    NotificationBinding,
    PipelineRunEvent,
    ProviderConfig,
    SecretResource,
)

logger = get_module_logger()


class ObjectStoreError(Exception):
    """Base class for object store failures."""


class NotFoundError(ObjectStoreError):
    """Requested object does not exist."""


class ConflictError(ObjectStoreError):
    """Optimistic write lost against a concurrent modification."""


class ObjectStore(Protocol):
    """Storage interface used by the dispatcher.

    Methods:
        get_pipeline_run: Fetch the current snapshot of a run
        patch_pipeline_run_annotations: Merge annotations into a run,
            guarded by the caller's resource version
        list_notification_bindings: List bindings, across all namespaces
            unless one is given
        get_provider_config: Fetch a provider by name
        get_secret: Fetch a secret by name
    """

    def get_pipeline_run(self, namespace: str, name: str) -> PipelineRunEvent:
        """Raises NotFoundError when the run does not exist."""
        ...

    def patch_pipeline_run_annotations(
        self,
        namespace: str,
        name: str,
        annotations: Dict[str, str],
        resource_version: Optional[str] = None,
    ) -> PipelineRunEvent:
        """Merge ``annotations`` into the run and return the updated snapshot.

        Raises:
            NotFoundError: the run no longer exists
            ConflictError: ``resource_version`` is stale
        """
        ...

    def list_notification_bindings(
        self, namespace: Optional[str] = None
    ) -> List[NotificationBinding]:
        """Bindings anywhere in the cluster route runs from every namespace."""
        ...

    def get_provider_config(self, namespace: str, name: str) -> ProviderConfig:
        """Raises NotFoundError when the provider does not exist."""
        ...

    def get_secret(self, namespace: str, name: str) -> SecretResource:
        """Raises NotFoundError when the secret does not exist."""
        ...


Key = Tuple[str, str]


class InMemoryObjectStore:
    """In-memory implementation of ObjectStore.

    Every write to a pipeline run bumps its resource version; a patch that
    carries a different version fails with ConflictError, mirroring the
    cluster's optimistic concurrency.
    """

    def __init__(self) -> None:
        self._runs: Dict[Key, PipelineRunEvent] = {}
        self._bindings: Dict[Key, NotificationBinding] = {}
        self._providers: Dict[Key, ProviderConfig] = {}
        self._secrets: Dict[Key, SecretResource] = {}
        self._lock = threading.Lock()
        self._next_version = 1

    def _bump_version(self) -> str:
        version = str(self._next_version)
        self._next_version += 1
        return version

    def put_pipeline_run(self, run: PipelineRunEvent) -> PipelineRunEvent:
        """Create or replace a run, assigning a fresh resource version."""
        with self._lock:
            stored = run.model_copy(update={"resource_version": self._bump_version()})
            self._runs[(run.namespace, run.name)] = stored
            return stored

    def put_notification_binding(self, binding: NotificationBinding) -> None:
        with self._lock:
            self._bindings[(binding.namespace, binding.name)] = binding

    def put_provider_config(self, provider: ProviderConfig) -> None:
        with self._lock:
            self._providers[(provider.namespace, provider.name)] = provider

    def put_secret(self, secret: SecretResource) -> None:
        with self._lock:
            self._secrets[(secret.namespace, secret.name)] = secret

    def get_pipeline_run(self, namespace: str, name: str) -> PipelineRunEvent:
        with self._lock:
            run = self._runs.get((namespace, name))
        if run is None:
            raise NotFoundError(f"pipelinerun {namespace}/{name} not found")
        return run

    def patch_pipeline_run_annotations(
        self,
        namespace: str,
        name: str,
        annotations: Dict[str, str],
        resource_version: Optional[str] = None,
    ) -> PipelineRunEvent:
        with self._lock:
            run = self._runs.get((namespace, name))
            if run is None:
                raise NotFoundError(f"pipelinerun {namespace}/{name} not found")
            if resource_version is not None and resource_version != run.resource_version:
                logger.debug(
                    "pipeline_run_patch_conflict",
                    namespace=namespace,
                    pipeline_run=name,
                    expected=resource_version,
                    actual=run.resource_version,
                )
                raise ConflictError(
                    f"pipelinerun {namespace}/{name} was modified "
                    f"(expected version {resource_version}, found {run.resource_version})"
                )
            updated = run.model_copy(
                update={
                    "annotations": {**run.annotations, **annotations},
                    "resource_version": self._bump_version(),
                }
            )
            self._runs[(namespace, name)] = updated
            return updated

    def list_notification_bindings(
        self, namespace: Optional[str] = None
    ) -> List[NotificationBinding]:
        with self._lock:
            return [
                binding
                for (binding_ns, _), binding in self._bindings.items()
                if namespace is None or binding_ns == namespace
            ]

    def get_provider_config(self, namespace: str, name: str) -> ProviderConfig:
        with self._lock:
            provider = self._providers.get((namespace, name))
        if provider is None:
            raise NotFoundError(f"provider {namespace}/{name} not found")
        return provider

    def get_secret(self, namespace: str, name: str) -> SecretResource:
        with self._lock:
            secret = self._secrets.get((namespace, name))
        if secret is None:
            raise NotFoundError(f"secret {namespace}/{name} not found")
        return secret
