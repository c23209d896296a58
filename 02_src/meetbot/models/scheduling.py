"""Scheduling-related data models."""

from dataclasses import dataclass, field
from datetime import datetime

from .dialogue import Turn


@dataclass(frozen=True)
class SlotSet:
    """Meeting details extracted from a conversation."""

    title: str
    date: str  # loosely formatted, e.g. "tomorrow"
    start_time: str  # loosely formatted, e.g. "3pm"
    duration_minutes: int
    attendees: tuple[str, ...] = ()

    def is_complete(self) -> bool:
        """Title, date, start time and a positive duration are present."""
        return bool(
            self.title.strip()
            and self.date.strip()
            and self.start_time.strip()
            and self.duration_minutes > 0
        )


@dataclass(frozen=True)
class ResolvedSchedule:
    """Absolute start/end for a slot set."""

    start: datetime
    end: datetime
    timezone: str


@dataclass(frozen=True)
class ScheduledEvent:
    """A calendar event that was created."""

    event_id: str
    conference_link: str | None = None
    html_link: str | None = None


@dataclass(frozen=True)
class NeedsClarification:
    """The extractor wants more information from the user."""

    text: str
    turn: Turn


@dataclass(frozen=True)
class SlotsReady:
    """The extractor considers the transcript complete and unambiguous."""

    slots: SlotSet
    turn: Turn


ExtractionOutcome = NeedsClarification | SlotsReady


@dataclass
class CredentialRecord:
    """A stored delegated-authorization token."""

    user_id: str
    refresh_token: str
    updated_at: datetime | None = field(default=None, compare=False)
