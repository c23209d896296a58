"""Bitly link shortening."""

import httpx

from ..logging_config import get_logger

logger = get_logger(__name__)

BITLY_SHORTEN_URL = "https://api-ssl.bitly.com/v4/shorten"


class LinkShortener:
    """Shortens links through Bitly; returns the long URL when it can't."""

    def __init__(
        self,
        access_token: str | None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
    ):
        self._access_token = access_token
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def enabled(self) -> bool:
        return bool(self._access_token)

    async def shorten(self, long_url: str) -> str:
        if not self.enabled:
            return long_url

        try:
            response = await self._client.post(
                BITLY_SHORTEN_URL,
                headers={"Authorization": f"Bearer {self._access_token}"},
                json={"long_url": long_url},
            )
            response.raise_for_status()
            return response.json()["link"]
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.warning(f"Link shortening failed, using long URL: {e}")
            return long_url

    async def close(self) -> None:
        await self._client.aclose()
