"""Tests for LinkShortener."""

import json

import httpx

from meetbot.links import LinkShortener

LONG_URL = "https://accounts.google.com/o/oauth2/auth?client_id=abc&state=whatsapp%3A1"


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestShorten:
    async def test_disabled_without_token(self):
        def handler(request):
            raise AssertionError("no request expected")

        shortener = LinkShortener(None, client=_client(handler))

        assert shortener.enabled is False
        assert await shortener.shorten(LONG_URL) == LONG_URL
        await shortener.close()

    async def test_returns_bitly_link(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"link": "https://bit.ly/abc"})

        shortener = LinkShortener("token-1", client=_client(handler))

        assert await shortener.shorten(LONG_URL) == "https://bit.ly/abc"
        assert seen["auth"] == "Bearer token-1"
        assert seen["body"] == {"long_url": LONG_URL}
        await shortener.close()

    async def test_falls_back_on_http_error(self):
        shortener = LinkShortener(
            "token-1", client=_client(lambda request: httpx.Response(403))
        )

        assert await shortener.shorten(LONG_URL) == LONG_URL
        await shortener.close()

    async def test_falls_back_on_unexpected_body(self):
        shortener = LinkShortener(
            "token-1", client=_client(lambda request: httpx.Response(200, json={}))
        )

        assert await shortener.shorten(LONG_URL) == LONG_URL
        await shortener.close()
