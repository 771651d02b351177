"""Tests for the AuthClient class."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from newsdesk.clients import APIError, AuthClient, ResponseValidationError
from schemas import Identity


def make_response(body, status_code=200, is_success=True):
    response = MagicMock()
    response.is_success = is_success
    response.status_code = status_code
    response.url = "https://project.example.co/auth/v1/user"
    response.json.return_value = body
    return response


def auth_client(*responses, access_token="session-jwt"):
    config = {"base_url": "https://project.example.co", "api_key": "anon"}
    if access_token:
        config["access_token"] = access_token
    client = AuthClient(config)
    client._client = MagicMock()
    client._client.request = AsyncMock(side_effect=list(responses))
    return client


class TestGetCurrentUser:
    """Tests for AuthClient.get_current_user()."""

    def test_returns_identity(self):
        client = auth_client(make_response({
            "id": "user-1",
            "email": "ada@example.com",
            "user_metadata": {"full_name": "Ada Editor"},
            "aud": "authenticated",
        }))

        user = asyncio.run(client.get_current_user())

        assert isinstance(user, Identity)
        assert user.id == "user-1"
        assert user.display_name == "Ada Editor"
        client._client.request.assert_awaited_once_with("GET", "/auth/v1/user")

    def test_no_token_means_no_user(self):
        client = auth_client(access_token=None)

        assert asyncio.run(client.get_current_user()) is None
        client._client.request.assert_not_called()

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_rejected_session_means_no_user(self, status_code):
        client = auth_client(
            make_response({"msg": "invalid JWT"}, status_code=status_code, is_success=False)
        )

        assert asyncio.run(client.get_current_user()) is None

    def test_server_error_propagates(self):
        client = auth_client(make_response({}, status_code=500, is_success=False))

        with pytest.raises(APIError) as exc_info:
            asyncio.run(client.get_current_user())

        assert exc_info.value.status_code == 500

    def test_malformed_user_raises_validation_error(self):
        client = auth_client(make_response({"email": "ada@example.com"}))

        with pytest.raises(ResponseValidationError):
            asyncio.run(client.get_current_user())
