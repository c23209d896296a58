"""Slot extraction on top of the LLM provider.

The model either asks a clarifying question (plain text) or calls the
``create_calendar_event`` tool with the meeting details. Tool arguments
are validated against a strict schema; anything malformed, and any
backend error, surfaces as ``ExtractionUnavailable``.
"""

import asyncio
import json
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..prompts import FALLBACK_CLARIFICATION
from ..errors import ExtractionUnavailable
from ..logging_config import get_logger
from ..models import (
    ExtractionOutcome,
    NeedsClarification,
    SlotSet,
    SlotsReady,
    Turn,
)
from .llm_provider import ILLMProvider

logger = get_logger(__name__)

TOOL_NAME = "create_calendar_event"

CREATE_EVENT_TOOL = {
    "name": TOOL_NAME,
    "description": (
        "Create a calendar event with a video-conference link once the title, "
        "date, start time and duration are all known and unambiguous."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Meeting title"},
            "date": {
                "type": "string",
                "description": "Meeting date as the user said it, or YYYY-MM-DD",
            },
            "startTime": {
                "type": "string",
                "description": "Start time including AM/PM or 24-hour clock",
            },
            "durationMinutes": {"type": "number", "exclusiveMinimum": 0},
            "attendees": {
                "type": "array",
                "items": {"type": "string", "format": "email"},
            },
        },
        "required": ["title", "date", "startTime", "durationMinutes"],
    },
}

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class CreateEventArguments(BaseModel):
    """Tool arguments as the model is expected to send them."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str
    date: str
    start_time: str = Field(alias="startTime")
    duration_minutes: int = Field(alias="durationMinutes")
    attendees: list[str] = Field(default_factory=list)

    @field_validator("attendees", mode="before")
    @classmethod
    def _null_is_empty(cls, value):
        return [] if value is None else value

    @field_validator("attendees")
    @classmethod
    def _emails_only(cls, value: list[str]) -> list[str]:
        cleaned: list[str] = []
        for address in value:
            address = address.strip()
            if not _EMAIL_RE.match(address):
                raise ValueError(f"not an email address: {address!r}")
            if address.lower() not in (a.lower() for a in cleaned):
                cleaned.append(address)
        return cleaned

    def to_slot_set(self) -> SlotSet:
        return SlotSet(
            title=self.title,
            date=self.date,
            start_time=self.start_time,
            duration_minutes=self.duration_minutes,
            attendees=tuple(self.attendees),
        )


def render_transcript(transcript: list[Turn]) -> tuple[str | None, list[dict]]:
    """Split a transcript into a system prompt and API messages.

    Assistant tool calls are rendered as text so a retained session never
    carries a tool_use block without its tool_result. Consecutive turns
    with the same role are merged.
    """
    system_parts: list[str] = []
    messages: list[dict] = []

    for turn in transcript:
        if turn.role == "system":
            system_parts.append(turn.content)
            continue

        content = turn.content
        if turn.payload is not None:
            call = json.dumps(turn.payload, ensure_ascii=False)
            content = f"{content}\n{TOOL_NAME}({call})".strip()
        if not content:
            continue

        if messages and messages[-1]["role"] == turn.role:
            messages[-1]["content"] += "\n\n" + content
        else:
            messages.append({"role": turn.role, "content": content})

    system = "\n\n".join(system_parts) if system_parts else None
    return system, messages


class SlotExtractor:
    """Decides whether a transcript is ready to schedule."""

    def __init__(self, llm_provider: ILLMProvider, timeout: float = 30.0):
        self._llm = llm_provider
        self._timeout = timeout

    async def extract(self, transcript: list[Turn]) -> ExtractionOutcome:
        """Return NeedsClarification or SlotsReady for the transcript.

        Raises:
            ExtractionUnavailable: backend error, timeout, or a tool call
                whose arguments do not match the schema.
        """
        system, messages = render_transcript(transcript)
        if not messages:
            raise ExtractionUnavailable("transcript has no user turns")

        try:
            reply = await asyncio.wait_for(
                self._llm.complete(
                    messages=messages, system=system, tools=[CREATE_EVENT_TOOL]
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise ExtractionUnavailable(
                f"extractor timed out after {self._timeout}s"
            ) from e
        except Exception as e:
            raise ExtractionUnavailable(str(e)) from e

        call = next((c for c in reply.tool_calls if c.name == TOOL_NAME), None)
        if call is None:
            text = reply.text or FALLBACK_CLARIFICATION
            return NeedsClarification(
                text=text, turn=Turn(role="assistant", content=text)
            )

        try:
            arguments = CreateEventArguments.model_validate(call.arguments)
        except ValidationError as e:
            logger.warning(f"Malformed {TOOL_NAME} arguments: {call.arguments}")
            raise ExtractionUnavailable(f"malformed tool arguments: {e}") from e

        turn = Turn(role="assistant", content=reply.text, payload=call.arguments)
        return SlotsReady(slots=arguments.to_slot_set(), turn=turn)
