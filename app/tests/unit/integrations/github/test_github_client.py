"""Unit tests for the GitHub App REST client."""

from unittest.mock import MagicMock, patch

import jwt
import pytest
import requests

from infrastructure.security import reveal_str, wrap
from integrations.github.client import (
    GitHubApiError,
    GitHubAppClient,
    create_jwt_token,
)


def make_response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {}
    response.text = text
    return response


@pytest.fixture
def session():
    session = MagicMock()
    session.request.side_effect = [
        make_response(200, {"id": 99}),
        make_response(201, {"token": "ghs_installation"}),
        make_response(201, {"id": 1, "state": "success"}),
    ]
    return session


@pytest.fixture
def client(rsa_private_key_pem, session, test_settings):
    return GitHubAppClient(
        12345, wrap(rsa_private_key_pem), settings=test_settings, session=session
    )


@pytest.mark.unit
class TestCreateJwtToken:
    def test_signs_rs256_app_token(self, rsa_private_key_pem, rsa_public_key_pem):
        token = create_jwt_token(12345, wrap(rsa_private_key_pem), 540)

        claims = jwt.decode(token, rsa_public_key_pem, algorithms=["RS256"])
        assert claims["iss"] == "12345"
        assert claims["exp"] - claims["iat"] == 600

    def test_missing_app_id(self, rsa_private_key_pem):
        with pytest.raises(ValueError):
            create_jwt_token(0, wrap(rsa_private_key_pem))

    def test_missing_private_key(self):
        with pytest.raises(ValueError):
            create_jwt_token(12345, wrap(b""))

    def test_invalid_private_key(self):
        with pytest.raises(GitHubApiError):
            create_jwt_token(12345, wrap(b"not a pem"))


@pytest.mark.unit
class TestGitHubAppClient:
    def test_create_commit_status_flow(self, client, session):
        client.create_commit_status(
            "acme", "api", "abc123", state="success", context="tekton: build"
        )

        calls = session.request.call_args_list
        assert [(c.args[0], c.args[1]) for c in calls] == [
            ("GET", "https://api.github.com/repos/acme/api/installation"),
            ("POST", "https://api.github.com/app/installations/99/access_tokens"),
            ("POST", "https://api.github.com/repos/acme/api/statuses/abc123"),
        ]
        assert calls[2].kwargs["headers"]["Authorization"] == "Bearer ghs_installation"
        assert calls[2].kwargs["json"] == {
            "state": "success",
            "target_url": "",
            "description": "",
            "context": "tekton: build",
        }
        assert calls[0].kwargs["timeout"] == 30

    def test_app_token_used_for_installation_lookup(self, client, session):
        client.create_commit_status("acme", "api", "abc123", "pending", "tekton: b")

        auth = session.request.call_args_list[0].kwargs["headers"]["Authorization"]
        assert auth.startswith("Bearer ey")

    def test_enterprise_base_url(self, rsa_private_key_pem, session, test_settings):
        client = GitHubAppClient(
            1,
            wrap(rsa_private_key_pem),
            base_url="https://ghe.example.com/api/v3/",
            settings=test_settings,
            session=session,
        )

        client.create_commit_status("acme", "api", "abc123", "success", "tekton: b")

        urls = [c.args[1] for c in session.request.call_args_list]
        assert all(url.startswith("https://ghe.example.com/api/v3/") for url in urls)
        assert urls[0] == "https://ghe.example.com/api/v3/repos/acme/api/installation"

    def test_http_error_raises(self, client, session):
        session.request.side_effect = [make_response(404, text="Not Found")]

        with pytest.raises(GitHubApiError) as exc_info:
            client.get_repository_installation_id("acme", "api")

        assert exc_info.value.status_code == 404

    def test_transport_error_raises(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(GitHubApiError):
            client.get_repository_installation_id("acme", "api")

    def test_missing_installation_token(self, client, session):
        session.request.side_effect = [make_response(201, {})]

        with pytest.raises(GitHubApiError):
            client.create_installation_token(99)

    def test_installation_token_is_wrapped(self, client, session):
        session.request.side_effect = [make_response(201, {"token": "ghs_x"})]

        token = client.create_installation_token(99)

        assert str(token) == "[REDACTED]"
        assert reveal_str(token) == "ghs_x"

    def test_default_session(self, rsa_private_key_pem, test_settings):
        with patch("integrations.github.client.requests.Session") as session_class:
            client = GitHubAppClient(1, wrap(rsa_private_key_pem), settings=test_settings)

        assert client.session is session_class.return_value
