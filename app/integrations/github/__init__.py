from integrations.github.client import (
    GitHubApiError,
    GitHubAppClient,
    create_jwt_token,
)

__all__ = ["GitHubApiError", "GitHubAppClient", "create_jwt_token"]
