"""Pytest configuration and fixtures."""

import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import AsyncMock, Mock
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

TIMEZONE = "Asia/Kolkata"
NOW = datetime(2026, 10, 19, 9, 0, tzinfo=ZoneInfo(TIMEZONE))
AUTH_URL = "https://accounts.google.com/o/oauth2/auth?state=whatsapp%3Auser1"
MEET_LINK = "https://meet.google.com/abc-defg-hij"


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from meetbot.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def tracker(storage):
    """Create Tracker with storage."""
    from meetbot.tracker import Tracker

    return Tracker(storage)


@pytest.fixture
def sessions():
    """Create an empty SessionStore."""
    from meetbot.dialogue import SessionStore

    return SessionStore("You schedule meetings.")


@pytest.fixture
def resolver():
    """Create a TemporalResolver in the test timezone."""
    from meetbot.temporal import TemporalResolver

    return TemporalResolver(TIMEZONE)


@pytest.fixture
def make_slots_ready():
    """Factory for SlotsReady outcomes."""
    from meetbot.models import SlotSet, SlotsReady, Turn

    def _make(
        title="Standup",
        date="2026-10-20",
        start_time="3:00 PM",
        duration_minutes=30,
        attendees=("bob@x.com",),
    ):
        payload = {
            "title": title,
            "date": date,
            "startTime": start_time,
            "durationMinutes": duration_minutes,
            "attendees": list(attendees),
        }
        return SlotsReady(
            slots=SlotSet(
                title=title,
                date=date,
                start_time=start_time,
                duration_minutes=duration_minutes,
                attendees=tuple(attendees),
            ),
            turn=Turn(role="assistant", content="", payload=payload),
        )

    return _make


@pytest.fixture
def make_clarification():
    """Factory for NeedsClarification outcomes."""
    from meetbot.models import NeedsClarification, Turn

    def _make(text="Did you mean 8 AM or 8 PM?"):
        return NeedsClarification(text=text, turn=Turn(role="assistant", content=text))

    return _make


@pytest.fixture
def mock_extractor(make_clarification):
    """Create mock slot extractor (asks a question by default)."""
    extractor = Mock()
    extractor.extract = AsyncMock(return_value=make_clarification())
    return extractor


@pytest.fixture
def mock_auth_gate():
    """Create mock authorization gate for an authorized user."""
    gate = Mock()
    gate.has_credential = AsyncMock(return_value=True)
    gate.build_auth_url = Mock(return_value=AUTH_URL)
    gate.get_credential = AsyncMock(return_value=Mock(name="credentials"))
    return gate


@pytest.fixture
def mock_calendar():
    """Create mock calendar client that always succeeds."""
    from meetbot.models import ScheduledEvent

    calendar = Mock()
    calendar.create_event = AsyncMock(
        return_value=ScheduledEvent(
            event_id="evt_1",
            conference_link=MEET_LINK,
            html_link="https://www.google.com/calendar/event?eid=evt_1",
        )
    )
    return calendar


@pytest.fixture
def dialogue_engine(
    sessions, mock_extractor, resolver, mock_auth_gate, mock_calendar, tracker
):
    """Create DialogueEngine with mocked collaborators and a fixed clock."""
    from meetbot.dialogue import DialogueEngine

    return DialogueEngine(
        sessions=sessions,
        extractor=mock_extractor,
        resolver=resolver,
        auth_gate=mock_auth_gate,
        calendar=mock_calendar,
        tracker=tracker,
        clock=lambda: NOW,
    )
