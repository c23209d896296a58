"""Tests for AuthorizationGate."""

from unittest.mock import Mock, patch
from urllib.parse import parse_qs, urlparse

import pytest

from meetbot.auth import SCOPES, AuthorizationGate
from meetbot.config import Settings
from meetbot.errors import AuthorizationError


@pytest.fixture
def settings():
    return Settings(
        google_client_id="client-id",
        google_client_secret="client-secret",
        google_redirect_uri="https://bot.example.com/auth/google/callback",
    )


@pytest.fixture
def gate(settings, storage):
    return AuthorizationGate(settings, storage)


def _flow_returning(refresh_token):
    flow = Mock()
    flow.credentials = Mock(refresh_token=refresh_token)
    return flow


class TestHasCredential:
    async def test_false_without_token(self, gate):
        assert await gate.has_credential("whatsapp:+1555") is False

    async def test_true_with_token(self, gate, storage):
        await storage.save_refresh_token("whatsapp:+1555", "rt")

        assert await gate.has_credential("whatsapp:+1555") is True


class TestBuildAuthUrl:
    def test_url_requests_offline_calendar_access(self, gate):
        url = gate.build_auth_url("whatsapp:+1555")

        query = parse_qs(urlparse(url).query)
        assert query["client_id"] == ["client-id"]
        assert query["redirect_uri"] == ["https://bot.example.com/auth/google/callback"]
        assert query["access_type"] == ["offline"]
        assert query["prompt"] == ["consent"]
        assert query["scope"] == [" ".join(SCOPES)]
        assert query["state"] == ["whatsapp:whatsapp:+1555"]


class TestGetCredential:
    async def test_none_without_token(self, gate):
        assert await gate.get_credential("nobody") is None

    async def test_builds_refreshable_credentials(self, gate, storage):
        await storage.save_refresh_token("user1", "rt-1")

        credentials = await gate.get_credential("user1")

        assert credentials.refresh_token == "rt-1"
        assert credentials.client_id == "client-id"
        assert credentials.client_secret == "client-secret"
        assert credentials.token is None


class TestHandleCallback:
    @pytest.mark.parametrize(
        "code,state",
        [(None, "whatsapp:user1"), ("code", None), ("code", "slack:user1")],
    )
    async def test_invalid_request(self, gate, code, state):
        with pytest.raises(AuthorizationError, match="Invalid request"):
            await gate.handle_callback(code, state)

    async def test_stores_refresh_token(self, gate, storage):
        flow = _flow_returning("rt-new")

        with patch.object(gate, "_flow", return_value=flow):
            user_id = await gate.handle_callback("auth-code", "whatsapp:+1555")

        assert user_id == "+1555"
        flow.fetch_token.assert_called_once_with(code="auth-code")
        assert await storage.get_refresh_token("+1555") == "rt-new"

    async def test_missing_refresh_token(self, gate, storage):
        with patch.object(gate, "_flow", return_value=_flow_returning(None)):
            with pytest.raises(AuthorizationError, match="refresh token"):
                await gate.handle_callback("auth-code", "whatsapp:+1555")

        assert await storage.get_refresh_token("+1555") is None

    async def test_exchange_failure(self, gate):
        flow = _flow_returning("rt")
        flow.fetch_token.side_effect = Exception("invalid_grant")

        with patch.object(gate, "_flow", return_value=flow):
            with pytest.raises(AuthorizationError, match="Failed to authenticate"):
                await gate.handle_callback("auth-code", "whatsapp:+1555")

    async def test_save_failure(self, gate, storage):
        await storage._conn.execute("DROP TABLE user_tokens")

        with patch.object(gate, "_flow", return_value=_flow_returning("rt")):
            with pytest.raises(AuthorizationError, match="save"):
                await gate.handle_callback("auth-code", "whatsapp:+1555")
