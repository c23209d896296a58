"""Google OAuth routes."""

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse, RedirectResponse

from ...app import Application
from ...errors import AuthorizationError

SUCCESS_TEXT = "Authentication successful! You can now schedule meetings on WhatsApp."


def create_auth_router(app: Application) -> APIRouter:
    """Create OAuth router."""
    router = APIRouter(prefix="/auth/google", tags=["auth"])

    @router.get("")
    async def start_authorization(user_id: str = Query(...)) -> RedirectResponse:
        """Redirect to the Google consent screen."""
        return RedirectResponse(app.auth_gate.build_auth_url(user_id))

    @router.get("/callback", response_class=PlainTextResponse)
    async def oauth_callback(
        code: str | None = Query(None),
        state: str | None = Query(None),
    ) -> str:
        """Store the refresh token for the user named in ``state``."""
        try:
            await app.auth_gate.handle_callback(code, state)
        except AuthorizationError as e:
            return str(e)
        return SUCCESS_TEXT

    return router
