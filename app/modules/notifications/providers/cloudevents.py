"""Event sink provider emitting CloudEvents over HTTP webhooks.

Events are sent in structured content mode: the whole envelope, with the
pipeline run snapshot as ``data``, is the JSON request body.
"""

from abc import ABC, abstractmethod
from typing import Optional

import requests
from cloudevents.exceptions import GenericException
from cloudevents.http import CloudEvent, to_structured
from pydantic import BaseModel

from infrastructure.configuration import settings as default_settings
from infrastructure.configuration.settings import Settings
from infrastructure.logging import get_module_logger
from modules.notifications.errors import ProviderError
from modules.notifications.models import PipelineRunEvent, ProviderType
from modules.notifications.providers.base import NotificationProvider

logger = get_module_logger()


class SendResult(BaseModel):
    """Outcome of handing an event to a protocol.

    Attributes:
        acked: True when the sink accepted the event
        status_code: HTTP status returned by the sink, if any
        detail: Human readable description of a negative result
    """

    acked: bool
    status_code: Optional[int] = None
    detail: str = ""

    @classmethod
    def ack(cls, status_code: Optional[int] = None) -> "SendResult":
        return cls(acked=True, status_code=status_code)

    @classmethod
    def nack(cls, detail: str, status_code: Optional[int] = None) -> "SendResult":
        return cls(acked=False, status_code=status_code, detail=detail)


class CloudEventsProtocol(ABC):
    """Transport that delivers a CloudEvent to a sink."""

    @abstractmethod
    def send(self, event: CloudEvent) -> SendResult:
        pass


class WebhookProtocol(CloudEventsProtocol):
    """POSTs structured-mode CloudEvents to a sink URL."""

    def __init__(
        self,
        sink_url: str,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        self.sink_url = sink_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, event: CloudEvent) -> SendResult:
        headers, body = to_structured(event)
        try:
            response = self.session.post(
                self.sink_url,
                data=body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            return SendResult.nack(f"request to sink failed: {e}")

        if 200 <= response.status_code < 300:
            return SendResult.ack(response.status_code)
        return SendResult.nack(
            f"sink returned {response.status_code}", status_code=response.status_code
        )


class CloudEventsProvider(NotificationProvider):
    def __init__(
        self,
        protocol: CloudEventsProtocol,
        source: Optional[str] = None,
        event_type: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or default_settings
        self.protocol = protocol
        self.source = source if source is not None else settings.cloudevents.CLOUDEVENTS_SOURCE
        self.event_type = (
            event_type if event_type is not None else settings.cloudevents.CLOUDEVENTS_TYPE
        )

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.CLOUD_EVENTS

    def to_event(self, event: PipelineRunEvent) -> CloudEvent:
        # id, time and specversion are filled in by the SDK
        attributes = {"source": self.source, "type": self.event_type}
        try:
            return CloudEvent(
                {key: value for key, value in attributes.items() if value},
                event.model_dump(mode="json"),
            )
        except GenericException as e:
            raise ProviderError.runtime_error(f"validation failed: {e}") from e

    def _notify(self, event: PipelineRunEvent) -> None:
        cloud_event = self.to_event(event)
        result = self.protocol.send(cloud_event)
        if not result.acked:
            raise ProviderError.runtime_error(f"failed to send, {result.detail}")
        logger.info(
            "cloudevent_sent",
            event_id=cloud_event["id"],
            event_type=cloud_event["type"],
            pipeline_run=event.name,
        )
