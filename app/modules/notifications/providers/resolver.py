"""Builds a ready-to-use provider from a provider resource.

Resolution validates the resource and fetches its secret. It performs no
network I/O beyond the secret lookup it is handed.
"""

from typing import Callable, Optional

from infrastructure.configuration import settings as default_settings
from infrastructure.configuration.settings import Settings
from infrastructure.logging import get_module_logger
from infrastructure.security import SecretBytes, wrap
from modules.notifications.errors import ProviderError
from modules.notifications.models import (
    ProviderConfig,
    ProviderType,
    SecretKeyReference,
    SecretResource,
)
from modules.notifications.providers.base import NotificationProvider
from modules.notifications.providers.cloudevents import (
    CloudEventsProvider,
    WebhookProtocol,
)
from modules.notifications.providers.github_app import GitHubAppProvider
from modules.notifications.providers.slack_app import SlackAppProvider

logger = get_module_logger()

SecretLookup = Callable[[str, str], Optional[SecretResource]]

DEFAULT_PRIVATE_KEY_KEY = "private-key.pem"
DEFAULT_ACCESS_TOKEN_KEY = "access-token"
WEBHOOK_PROTOCOL = "Webhook"


def _fetch_secret_value(
    config: ProviderConfig,
    ref: SecretKeyReference,
    default_key: str,
    secret_lookup: SecretLookup,
) -> SecretBytes:
    key = ref.key or default_key
    try:
        secret = secret_lookup(config.namespace, ref.name)
    except Exception as e:
        raise ProviderError.not_found_private_key(
            f"failed to get secret {ref.name}: {e}"
        ) from e
    if secret is None:
        raise ProviderError.not_found_private_key(f"secret {ref.name} not found")
    if secret.data is None:
        raise ProviderError.not_found_private_key(f"data not found in secret {ref.name}")
    if key not in secret.data:
        raise ProviderError.not_found_private_key(f"missing key {key} in secret {ref.name}")
    return wrap(secret.data[key])


def _resolve_github_app(
    config: ProviderConfig, secret_lookup: SecretLookup, settings: Settings
) -> GitHubAppProvider:
    spec = config.github_app
    if spec is None:
        raise ProviderError.invalid_provider_spec("missing value .githubApp")
    if spec.private_key is None or spec.private_key.secret_ref is None:
        raise ProviderError.invalid_provider_spec(
            "missing valid values in .githubApp.privateKey"
        )
    private_key = _fetch_secret_value(
        config, spec.private_key.secret_ref, DEFAULT_PRIVATE_KEY_KEY, secret_lookup
    )
    return GitHubAppProvider(
        spec.app_id, private_key, base_url=spec.base_url, settings=settings
    )


def _resolve_slack_app(
    config: ProviderConfig, secret_lookup: SecretLookup, settings: Settings
) -> SlackAppProvider:
    spec = config.slack_app
    if spec is None:
        raise ProviderError.invalid_provider_spec("missing value .slackApp")
    if spec.access_token is None or spec.access_token.secret_ref is None:
        raise ProviderError.invalid_provider_spec(
            "missing valid values in .slackApp.accessToken"
        )
    if not spec.channels:
        raise ProviderError.invalid_provider_spec("missing value .slackApp.channels")
    access_token = _fetch_secret_value(
        config, spec.access_token.secret_ref, DEFAULT_ACCESS_TOKEN_KEY, secret_lookup
    )
    return SlackAppProvider(access_token, spec.channels, settings=settings)


def _resolve_cloud_events(
    config: ProviderConfig, settings: Settings
) -> CloudEventsProvider:
    spec = config.cloud_events
    if spec is None:
        raise ProviderError.invalid_provider_spec("missing value .cloudEvents")
    if spec.protocol != WEBHOOK_PROTOCOL:
        raise ProviderError.invalid_provider_spec(
            f"unknown CloudEvents protocol: {spec.protocol}"
        )
    if spec.webhook is None or not spec.webhook.url:
        raise ProviderError.invalid_provider_spec("missing value .cloudEvents.webhook.url")
    protocol = WebhookProtocol(
        spec.webhook.url,
        timeout=settings.cloudevents.CLOUDEVENTS_REQUEST_TIMEOUT_SECONDS,
    )
    return CloudEventsProvider(
        protocol, source=spec.source, event_type=spec.type, settings=settings
    )


def resolve_provider(
    config: ProviderConfig,
    secret_lookup: SecretLookup,
    settings: Optional[Settings] = None,
) -> NotificationProvider:
    """Build the provider described by ``config``.

    Args:
        config: Provider resource.
        secret_lookup: Callable ``(namespace, name)`` returning the secret,
            None, or raising when it cannot be read.
        settings: Optional settings override passed to the provider.

    Raises:
        ProviderError: InvalidProviderSpec for an unknown type or an
            incomplete spec, NotFoundPrivateKey when the credential cannot
            be read.
    """
    settings = settings or default_settings
    try:
        provider_type = ProviderType(config.type)
    except ValueError as e:
        raise ProviderError.invalid_provider_spec(
            f"unknown provider type: {config.type}"
        ) from e

    match provider_type:
        case ProviderType.GITHUB_APP:
            provider = _resolve_github_app(config, secret_lookup, settings)
        case ProviderType.SLACK_APP:
            provider = _resolve_slack_app(config, secret_lookup, settings)
        case ProviderType.CLOUD_EVENTS:
            provider = _resolve_cloud_events(config, settings)
        case _:
            raise AssertionError(f"unhandled provider type: {provider_type}")

    logger.debug(
        "provider_resolved",
        provider=config.name,
        namespace=config.namespace,
        provider_type=provider_type.value,
    )
    return provider
