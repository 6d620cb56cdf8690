"""Notification provider abstract base class.

All provider implementations (GitHubApp, SlackApp, CloudEvents) must
implement this interface.
"""

from abc import ABC, abstractmethod

from infrastructure.logging import get_module_logger
from modules.notifications.errors import ProviderError
from modules.notifications.models import PipelineRunEvent, ProviderType

logger = get_module_logger()


class NotificationProvider(ABC):
    """Abstract base class for notification providers.

    A provider is built by the resolver from a provider resource and its
    secret, then asked to deliver one pipeline run event. Providers hold only
    their resolved configuration.

    Example Implementation:
        class EchoProvider(NotificationProvider):

            @property
            def provider_type(self) -> ProviderType:
                return ProviderType.CLOUD_EVENTS

            def _notify(self, event: PipelineRunEvent) -> None:
                print(event.name)
    """

    @property
    @abstractmethod
    def provider_type(self) -> ProviderType:
        """Provider kind, used for routing and logging."""
        pass

    def notify(self, event: PipelineRunEvent) -> None:
        """Deliver ``event``.

        Returns normally on success or when the event is intentionally
        skipped.

        Raises:
            ProviderError: on any failure. Unexpected exceptions from the
                implementation are converted to the RuntimeError code.
        """
        try:
            self._notify(event)
        except ProviderError:
            raise
        except Exception as e:
            logger.error(
                "provider_unexpected_error",
                provider_type=self.provider_type.value,
                error=str(e),
                exc_info=True,
            )
            raise ProviderError.runtime_error(
                f"unexpected {type(e).__name__}: {e}"
            ) from e

    @abstractmethod
    def _notify(self, event: PipelineRunEvent) -> None:
        pass
