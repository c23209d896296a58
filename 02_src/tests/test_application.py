"""Tests for Application bootstrap."""

import pytest

from meetbot.app import Application
from meetbot.config import Settings
from meetbot.dialogue import DialogueEngine


@pytest.fixture
def settings():
    return Settings(
        anthropic_api_key="test-key",
        google_client_id="client-id",
        google_client_secret="client-secret",
    )


class TestApplication:
    def test_properties_before_start(self, settings):
        application = Application(settings=settings, db_path=":memory:")

        with pytest.raises(RuntimeError, match="not started"):
            application.dialogue_engine
        with pytest.raises(RuntimeError, match="not started"):
            application.storage
        with pytest.raises(RuntimeError, match="not started"):
            application.auth_gate

    async def test_start_and_stop(self, settings):
        application = Application(settings=settings, db_path=":memory:")

        await application.start()
        try:
            assert isinstance(application.dialogue_engine, DialogueEngine)
            assert await application.auth_gate.has_credential("nobody") is False
            assert await application.storage.get_trace_events() == []
        finally:
            await application.stop()

    async def test_start_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        application = Application(
            settings=Settings(anthropic_api_key=None), db_path=":memory:"
        )

        with pytest.raises(ValueError):
            await application.start()
        await application.stop()
