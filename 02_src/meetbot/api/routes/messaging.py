"""Messaging API routes."""

from pydantic import BaseModel
from fastapi import APIRouter

from ...app import Application


class MessageRequest(BaseModel):
    """Request model for sending a message."""

    user_id: str
    text: str


class MessageResponse(BaseModel):
    """Response model for message."""

    response: str
    state: str


def create_messaging_router(app: Application) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/messages", response_model=MessageResponse)
    async def send_message(request: MessageRequest) -> dict:
        """Send a message to the dialogue engine."""
        result = await app.dialogue_engine.handle_message(
            user_id=request.user_id, text=request.text
        )
        return {"response": result.reply, "state": result.state.value}

    return router
