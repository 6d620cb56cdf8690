"""GitHub App REST client.

Authenticates as a GitHub App (RS256 JWT signed with the app's private key),
exchanges it for a repository installation access token, and creates commit
statuses with that token.
"""

import calendar
import time
from typing import Any, Dict, Optional

import jwt
import requests

from infrastructure.configuration import settings as default_settings
from infrastructure.configuration.settings import Settings
from infrastructure.logging import get_module_logger
from infrastructure.security import SecretBytes, reveal, reveal_str

logger = get_module_logger()

GITHUB_ACCEPT = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"


class GitHubApiError(Exception):
    """Raised when a GitHub API call fails or returns an unexpected payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


# generate the epoch seconds for the jwt token
def epoch_seconds() -> int:
    return calendar.timegm(time.gmtime())


def create_jwt_token(
    app_id: int, private_key: SecretBytes, expiration_seconds: int = 540
) -> str:
    """
    Generate an app JWT for the GitHub API

    Claims are:
    iss: the GitHub App id
    iat: issued-at, backdated 60 seconds for clock drift
    exp: expiry, at most ten minutes after iat

    Returns the encoded token
    """
    if not app_id:
        logger.error("jwt_token_creation_failed", error="Missing app id")
        raise ValueError("Missing app id")
    if not private_key:
        logger.error("jwt_token_creation_failed", error="Missing private key")
        raise ValueError("Missing private key")

    now = epoch_seconds()
    claims = {"iss": str(app_id), "iat": now - 60, "exp": now + expiration_seconds}
    try:
        token = jwt.encode(payload=claims, key=reveal(private_key), algorithm="RS256")
    except (ValueError, TypeError, jwt.PyJWTError) as e:
        raise GitHubApiError(f"failed to sign app JWT: {e}") from e
    if isinstance(token, str):
        return token
    return token.decode()


class GitHubAppClient:
    """Client for the subset of the GitHub REST API used for commit statuses.

    Args:
        app_id: Numeric GitHub App id.
        private_key: PEM encoded RSA private key of the app.
        base_url: API root. Defaults to ``settings.github.GITHUB_API_URL``;
            GitHub Enterprise uses ``https://<host>/api/v3``.
        settings: Optional settings override.
        session: Optional ``requests.Session`` to send requests through.
    """

    def __init__(
        self,
        app_id: int,
        private_key: SecretBytes,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        self._settings = settings or default_settings
        self.app_id = app_id
        self._private_key = private_key
        self.base_url = (base_url or self._settings.github.GITHUB_API_URL).rstrip("/")
        self.timeout = self._settings.github.GITHUB_REQUEST_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        bearer: str,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        headers = {
            "Accept": GITHUB_ACCEPT,
            "Authorization": f"Bearer {bearer}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        try:
            response = self.session.request(
                method, url, headers=headers, json=json_body, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise GitHubApiError(f"{method} {path} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise GitHubApiError(
                f"{method} {path} returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise GitHubApiError(f"{method} {path} returned invalid JSON") from e

    def _app_token(self) -> str:
        return create_jwt_token(
            self.app_id,
            self._private_key,
            self._settings.github.GITHUB_JWT_EXPIRATION_SECONDS,
        )

    def get_repository_installation_id(self, owner: str, repo: str) -> int:
        payload = self._request(
            "GET", f"/repos/{owner}/{repo}/installation", self._app_token()
        )
        installation_id = payload.get("id")
        if not installation_id:
            raise GitHubApiError(f"no installation found for {owner}/{repo}")
        return installation_id

    def create_installation_token(self, installation_id: int) -> SecretBytes:
        payload = self._request(
            "POST",
            f"/app/installations/{installation_id}/access_tokens",
            self._app_token(),
        )
        token = payload.get("token")
        if not token:
            raise GitHubApiError("installation access token missing from response")
        return SecretBytes(token)

    def create_commit_status(
        self,
        owner: str,
        repo: str,
        sha: str,
        state: str,
        context: str,
        description: str = "",
        target_url: str = "",
    ) -> Dict[str, Any]:
        """Create a commit status on ``sha`` as the app's repository installation."""
        installation_id = self.get_repository_installation_id(owner, repo)
        token = self.create_installation_token(installation_id)
        logger.debug(
            "github_commit_status_creating",
            owner=owner,
            repo=repo,
            sha=sha,
            state=state,
            status_context=context,
        )
        return self._request(
            "POST",
            f"/repos/{owner}/{repo}/statuses/{sha}",
            reveal_str(token),
            json_body={
                "state": state,
                "target_url": target_url,
                "description": description,
                "context": context,
            },
        )
