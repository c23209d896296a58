"""DialogueEngine: one scheduling turn per inbound message."""

import asyncio
from collections.abc import Callable
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from .. import prompts
from ..auth import IAuthorizationGate
from ..calendar import ICalendarClient
from ..errors import ExtractionUnavailable, ResolutionFailure, SchedulingError
from ..links import LinkShortener
from ..logging_config import get_logger
from ..models import (
    DialogueState,
    ExtractionOutcome,
    NeedsClarification,
    ResolvedSchedule,
    SlotSet,
    Turn,
    TurnResult,
)
from ..temporal import TemporalResolver
from ..tracker import ITracker
from .session_store import SessionStore

logger = get_logger(__name__)

ACTOR = "dialogue_engine"


class ISlotExtractor(Protocol):
    async def extract(self, transcript: list[Turn]) -> ExtractionOutcome:
        ...


class IDialogueEngine(Protocol):
    """Turns inbound messages into exactly one reply each."""

    async def handle_message(self, user_id: str, text: str) -> TurnResult:
        """Run one turn for the user and return the reply."""
        ...


class DialogueEngine:
    """Slot-filling dialogue in front of the calendar.

    Per message: check authorization, record the user turn, ask the
    extractor whether the meeting is fully specified, and either relay its
    question or resolve the time and create the event. The session is
    cleared only after the event is created; every failure after the
    extractor leaves it in place so the user can correct one detail
    instead of starting over.
    """

    def __init__(
        self,
        sessions: SessionStore,
        extractor: ISlotExtractor,
        resolver: TemporalResolver,
        auth_gate: IAuthorizationGate,
        calendar: ICalendarClient,
        tracker: ITracker,
        shortener: LinkShortener | None = None,
        resolver_timeout: float = 5.0,
        clock: Callable[[], datetime] | None = None,
    ):
        self._sessions = sessions
        self._extractor = extractor
        self._resolver = resolver
        self._auth = auth_gate
        self._calendar = calendar
        self._tracker = tracker
        self._shortener = shortener
        self._resolver_timeout = resolver_timeout
        self._clock = clock or (lambda: datetime.now(ZoneInfo(resolver.timezone)))

    @property
    def sessions(self) -> SessionStore:
        return self._sessions

    async def handle_message(self, user_id: str, text: str) -> TurnResult:
        """Run one turn for the user and return the reply."""
        # Taken before any await so turns run in arrival order.
        async with self._sessions.lock(user_id):
            result = await self._run_turn(user_id, text.strip())

        logger.info(
            f"Turn for {user_id} ended in {result.state.value}",
            extra={"user_id": user_id},
        )
        return result

    async def _run_turn(self, user_id: str, text: str) -> TurnResult:
        if not await self._auth.has_credential(user_id):
            return await self._request_authorization(user_id)

        self._sessions.get_or_create(user_id)
        self._sessions.append_turn(user_id, Turn(role="user", content=text))
        await self._track(
            "message_received", DialogueState.COLLECTING, user_id, message_text=text
        )

        transcript = self._sessions.get(user_id) or []
        try:
            outcome = await self._extractor.extract(transcript)
        except ExtractionUnavailable as e:
            logger.warning(f"Extractor unavailable for {user_id}: {e}", exc_info=True)
            await self._track("extraction_unavailable", DialogueState.COLLECTING, user_id)
            return TurnResult(prompts.FALLBACK_CLARIFICATION, DialogueState.COLLECTING)

        self._sessions.append_turn(user_id, outcome.turn)

        if isinstance(outcome, NeedsClarification):
            await self._track(
                "clarification_requested",
                DialogueState.COLLECTING,
                user_id,
                question=outcome.text,
            )
            return TurnResult(outcome.text, DialogueState.COLLECTING)

        slots = outcome.slots
        if not slots.is_complete():
            await self._track(
                "slots_invalid",
                DialogueState.COLLECTING,
                user_id,
                title=slots.title,
                duration_minutes=slots.duration_minutes,
            )
            return TurnResult(prompts.INVALID_SLOTS, DialogueState.COLLECTING)

        schedule = await self._resolve(user_id, slots)
        if schedule is None:
            return TurnResult(prompts.RESOLUTION_FAILED, DialogueState.COLLECTING)

        return await self._commit(user_id, slots, schedule)

    async def _track(
        self, event_type: str, state: DialogueState, user_id: str, **data
    ) -> None:
        """Record a trace event tagged with the state it happened in."""
        await self._tracker.track(
            event_type=event_type,
            actor=ACTOR,
            data={"user_id": user_id, "state": state.value, **data},
        )

    async def _request_authorization(self, user_id: str) -> TurnResult:
        url = self._auth.build_auth_url(user_id)
        if self._shortener:
            url = await self._shortener.shorten(url)

        await self._track("auth_required", DialogueState.AWAITING_AUTH, user_id)
        return TurnResult(
            prompts.AUTH_REQUIRED.format(url=url), DialogueState.AWAITING_AUTH
        )

    async def _resolve(self, user_id: str, slots: SlotSet) -> ResolvedSchedule | None:
        logger.debug(f"{user_id} -> {DialogueState.RESOLVING.value}")
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(
                    self._resolver.schedule,
                    slots.date,
                    slots.start_time,
                    slots.duration_minutes,
                    self._clock(),
                ),
                timeout=self._resolver_timeout,
            )
        except (ResolutionFailure, asyncio.TimeoutError) as e:
            logger.warning(f"Could not resolve time for {user_id}: {e!r}")
            await self._track(
                "resolution_failed",
                DialogueState.RESOLVING,
                user_id,
                date=slots.date,
                start_time=slots.start_time,
            )
            return None

    async def _commit(
        self, user_id: str, slots: SlotSet, schedule: ResolvedSchedule
    ) -> TurnResult:
        logger.debug(f"{user_id} -> {DialogueState.COMMITTING.value}")
        try:
            credential = await self._auth.get_credential(user_id)
            if credential is None:
                raise SchedulingError("credential disappeared before commit")

            event = await self._calendar.create_event(
                credential=credential,
                title=slots.title,
                start=schedule.start,
                end=schedule.end,
                attendees=list(slots.attendees),
            )
        except SchedulingError as e:
            logger.error(f"Error creating event for {user_id}: {e}", exc_info=True)
            await self._track(
                "scheduling_failed", DialogueState.COMMITTING, user_id, title=slots.title
            )
            return TurnResult(prompts.SCHEDULING_FAILED, DialogueState.COLLECTING)

        self._sessions.clear(user_id)
        await self._track(
            "event_scheduled",
            DialogueState.COMMITTING,
            user_id,
            event_id=event.event_id,
            title=slots.title,
            start=schedule.start.isoformat(),
            end=schedule.end.isoformat(),
            attendees=list(slots.attendees),
        )

        reply = prompts.CONFIRMATION.format(
            title=slots.title,
            when=schedule.start.strftime(prompts.WHEN_FORMAT),
            link=event.conference_link or prompts.NO_CONFERENCE_LINK,
        )
        return TurnResult(reply, DialogueState.IDLE)
