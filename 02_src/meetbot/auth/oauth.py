"""Google OAuth authorization gate."""

import asyncio
from typing import Protocol

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import Flow

from ..config import Settings
from ..errors import AuthorizationError
from ..logging_config import get_logger
from ..storage import IStorage

logger = get_logger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar"]
TOKEN_URI = "https://oauth2.googleapis.com/token"
STATE_PREFIX = "whatsapp:"


class IAuthorizationGate(Protocol):
    """What the dialogue engine needs to know about credentials."""

    async def has_credential(self, user_id: str) -> bool:
        ...

    def build_auth_url(self, user_id: str) -> str:
        ...

    async def get_credential(self, user_id: str) -> Credentials | None:
        ...


class AuthorizationGate:
    """Owns the OAuth consent flow and stored refresh tokens."""

    def __init__(self, settings: Settings, storage: IStorage):
        self._settings = settings
        self._storage = storage
        self._client_config = {
            "web": {
                "client_id": settings.google_client_id,
                "client_secret": settings.google_client_secret,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": TOKEN_URI,
                "redirect_uris": [settings.google_redirect_uri],
            }
        }

    def _flow(self, state: str | None = None) -> Flow:
        # The callback runs on a fresh Flow, so PKCE verifiers can't be carried over.
        return Flow.from_client_config(
            self._client_config,
            scopes=SCOPES,
            redirect_uri=self._settings.google_redirect_uri,
            state=state,
            autogenerate_code_verifier=False,
        )

    async def has_credential(self, user_id: str) -> bool:
        """True if a refresh token is stored for the user."""
        return await self._storage.get_refresh_token(user_id) is not None

    def build_auth_url(self, user_id: str) -> str:
        """Consent-screen URL carrying the user identity in ``state``."""
        url, _ = self._flow().authorization_url(
            access_type="offline",
            prompt="consent",
            state=f"{STATE_PREFIX}{user_id}",
        )
        return url

    async def get_credential(self, user_id: str) -> Credentials | None:
        """Credentials for the calendar API, refreshed on first use."""
        refresh_token = await self._storage.get_refresh_token(user_id)
        if refresh_token is None:
            return None

        return Credentials(
            token=None,
            refresh_token=refresh_token,
            token_uri=TOKEN_URI,
            client_id=self._settings.google_client_id,
            client_secret=self._settings.google_client_secret,
            scopes=SCOPES,
        )

    async def handle_callback(self, code: str | None, state: str | None) -> str:
        """Exchange an authorization code and store the refresh token.

        Returns:
            The user identity the token was stored for.

        Raises:
            AuthorizationError: bad request, failed exchange, missing
                refresh token, or the token could not be saved.
        """
        if not code or not state or not state.startswith(STATE_PREFIX):
            raise AuthorizationError("Invalid request")

        user_id = state[len(STATE_PREFIX):]
        flow = self._flow(state=state)

        try:
            await asyncio.to_thread(flow.fetch_token, code=code)
        except Exception as e:
            logger.error(f"OAuth code exchange failed for {user_id}: {e}")
            raise AuthorizationError("Failed to authenticate with Google.") from e

        refresh_token = flow.credentials.refresh_token
        if not refresh_token:
            raise AuthorizationError(
                "Google didn't return a refresh token. Try again."
            )

        if not await self._storage.save_refresh_token(user_id, refresh_token):
            raise AuthorizationError("Failed to save token.")

        logger.info(f"Stored calendar credential for {user_id}")
        return user_id
