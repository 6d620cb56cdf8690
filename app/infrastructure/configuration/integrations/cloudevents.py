"""CloudEvents integration settings."""

from infrastructure.configuration.base import IntegrationSettings


class CloudEventsSettings(IntegrationSettings):
    """Defaults for CloudEvents envelopes sent to webhook sinks.

    Environment Variables:
        CLOUDEVENTS_SOURCE: Default ``source`` attribute of emitted events
        CLOUDEVENTS_TYPE: Default ``type`` attribute of emitted events
        CLOUDEVENTS_REQUEST_TIMEOUT_SECONDS: Transport timeout per delivery
    """

    CLOUDEVENTS_SOURCE: str = "/integrations.tekton.ornew.io/notifier"
    CLOUDEVENTS_TYPE: str = "io.ornew.tekton.integrations.pipelinerun.v1"
    CLOUDEVENTS_REQUEST_TIMEOUT_SECONDS: int = 30
