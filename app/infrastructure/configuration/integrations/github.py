"""GitHub App integration settings."""

from infrastructure.configuration.base import IntegrationSettings


class GitHubSettings(IntegrationSettings):
    """GitHub REST API configuration used by the commit-status provider.

    Environment Variables:
        GITHUB_API_URL: API root used when a provider has no enterprise base URL
        GITHUB_JWT_EXPIRATION_SECONDS: Lifetime of the app-level JWT (max 600)
        GITHUB_REQUEST_TIMEOUT_SECONDS: Transport timeout per HTTP call

    Example:
        ```python
        from infrastructure.configuration import settings

        api_url = settings.github.GITHUB_API_URL
        ```
    """

    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_JWT_EXPIRATION_SECONDS: int = 540
    GITHUB_REQUEST_TIMEOUT_SECONDS: int = 30
