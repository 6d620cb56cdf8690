"""Dispatch orchestration for pipeline run notifications.

One dispatch round takes an observed pipeline run and:
1. Stops unless the run reports a condition that has not been dispatched yet
2. Records the condition on the run (optimistic write) before delivering
3. Lists the namespace's bindings and keeps the ready, unsuspended ones
4. Resolves each binding's provider and notifies it, sequentially

A failing binding never prevents the others from being notified. Only
store conflicts and listing failures surface to the caller, as a requeue.

Usage Example:
    from modules.notifications import NotificationDispatcher

    dispatcher = NotificationDispatcher(store)
    result = dispatcher.reconcile("ci", "build-1")
    if result.requeue:
        ...
"""

from typing import Optional

from infrastructure.configuration import settings as default_settings
from infrastructure.configuration.settings import Settings
from infrastructure.logging import (
    bind_dispatch_context,
    clear_dispatch_context,
    get_dispatch_id,
    get_module_logger,
)
from modules.notifications import annotations
from modules.notifications.change_detector import should_dispatch
from modules.notifications.errors import ProviderError
from modules.notifications.models import (
    DeliveryOutcome,
    DeliveryStatus,
    DispatchResult,
    NotificationBinding,
    PipelineRunEvent,
    SecretResource,
)
from modules.notifications.providers.resolver import resolve_provider
from modules.notifications.selector import select_bindings
from modules.notifications.store import (
    ConflictError,
    NotFoundError,
    ObjectStore,
    ObjectStoreError,
)

logger = get_module_logger()


class NotificationDispatcher:
    """Routes pipeline run status changes to the namespace's providers.

    Attributes:
        store: ObjectStore used for runs, bindings, providers, and secrets
        settings: Settings passed to resolved providers
    """

    def __init__(self, store: ObjectStore, settings: Optional[Settings] = None):
        self.store = store
        self.settings = settings or default_settings

    def reconcile(self, namespace: str, name: str) -> DispatchResult:
        """Fetch the current snapshot of a run and dispatch it."""
        # context left over from the previous run on this worker
        clear_dispatch_context()
        try:
            event = self.store.get_pipeline_run(namespace, name)
        except NotFoundError:
            logger.debug("pipeline_run_gone", namespace=namespace, pipeline_run=name)
            return DispatchResult.skipped()
        return self.dispatch(event)

    def dispatch(self, event: PipelineRunEvent) -> DispatchResult:
        """Run one dispatch round for ``event``.

        Returns:
            DispatchResult with ``requeue=True`` when the recorded status
            could not be written or bindings could not be listed.

        Raises:
            ObjectStoreError: for store failures on the status write other
                than conflicts and missing runs.
        """
        if not self.settings.dispatch.DISPATCH_ENABLED:
            logger.debug("dispatch_disabled", namespace=event.namespace)
            return DispatchResult.skipped()

        with bind_dispatch_context(namespace=event.namespace, pipeline_run=event.name):
            if event.condition is None:
                logger.debug("dispatch_skipped_no_condition")
                return DispatchResult.skipped()

            current = event.condition.value
            if not should_dispatch(current, event.recorded_status):
                logger.debug("dispatch_skipped_unchanged", status=current)
                return DispatchResult.skipped()

            try:
                self.store.patch_pipeline_run_annotations(
                    event.namespace,
                    event.name,
                    {annotations.LAST_STATUS: current},
                    resource_version=event.resource_version,
                )
            except (ConflictError, NotFoundError) as e:
                logger.info("recorded_status_write_requeued", error=str(e))
                return DispatchResult.retry()

            logger.info(
                "recorded_status_written",
                status=current,
                previous=event.recorded_status,
            )

            try:
                bindings = self.store.list_notification_bindings()
            except ObjectStoreError as e:
                logger.error("binding_list_failed", error=str(e))
                return DispatchResult.retry()

            candidates = select_bindings(bindings)
            if not candidates:
                logger.info("no_active_bindings", total=len(bindings))
                return DispatchResult(dispatched=True, dispatch_id=get_dispatch_id())

            result = DispatchResult(dispatched=True, dispatch_id=get_dispatch_id())
            for binding in candidates:
                with bind_dispatch_context(
                    binding=binding.name, provider=binding.provider_ref
                ):
                    result.outcomes.append(self._notify_binding(binding, event))

            logger.info(
                "dispatch_completed",
                bindings=len(candidates),
                failed=len(result.failed_outcomes),
            )
            return result

    def _lookup_secret(self, namespace: str, name: str) -> Optional[SecretResource]:
        try:
            return self.store.get_secret(namespace, name)
        except NotFoundError:
            return None

    def _notify_binding(
        self, binding: NotificationBinding, event: PipelineRunEvent
    ) -> DeliveryOutcome:
        outcome = DeliveryOutcome(
            binding=binding.name,
            namespace=binding.namespace,
            provider=binding.provider_ref,
            status=DeliveryStatus.FAILED,
        )
        try:
            try:
                config = self.store.get_provider_config(
                    binding.namespace, binding.provider_ref
                )
            except ObjectStoreError as e:
                raise ProviderError.invalid_provider_spec(
                    f"failed to get provider {binding.provider_ref}: {e}"
                ) from e
            outcome.provider_type = config.type

            provider = resolve_provider(config, self._lookup_secret, self.settings)
            provider.notify(event)
        except ProviderError as e:
            logger.warning(
                "binding_notification_failed",
                provider_type=outcome.provider_type,
                error_code=e.code.value,
                retryable=e.retryable,
                error=e.message,
            )
            outcome.error_code = e.code
            outcome.message = str(e)
            return outcome
        except Exception as e:
            logger.error(
                "binding_notification_error",
                provider_type=outcome.provider_type,
                error=str(e),
                exc_info=True,
            )
            outcome.message = str(e)
            return outcome

        logger.info("binding_notified", provider_type=outcome.provider_type)
        outcome.status = DeliveryStatus.DELIVERED
        return outcome
