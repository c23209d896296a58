"""Twilio WhatsApp webhook."""

from fastapi import APIRouter, Form
from fastapi.responses import Response
from twilio.twiml.messaging_response import MessagingResponse

from ...app import Application
from ...logging_config import get_logger

logger = get_logger(__name__)


def twiml_reply(text: str) -> Response:
    """Wrap a reply in a TwiML document."""
    twiml = MessagingResponse()
    twiml.message(text)
    return Response(content=str(twiml), media_type="text/xml")


def create_whatsapp_router(app: Application) -> APIRouter:
    """Create the inbound message webhook router."""
    router = APIRouter(tags=["whatsapp"])

    @router.post("/whatsapp")
    async def inbound_message(
        from_: str = Form(..., alias="From"),
        body: str = Form("", alias="Body"),
    ) -> Response:
        """Run one dialogue turn and answer with exactly one message."""
        result = await app.dialogue_engine.handle_message(user_id=from_, text=body)
        return twiml_reply(result.reply)

    return router
