"""Core data models for the scheduling assistant."""

from .dialogue import DialogueState, Role, Turn, TurnResult
from .scheduling import (
    CredentialRecord,
    ExtractionOutcome,
    NeedsClarification,
    ResolvedSchedule,
    ScheduledEvent,
    SlotSet,
    SlotsReady,
)
from .tracing import TraceEvent

__all__ = [
    # Dialogue
    "DialogueState",
    "Role",
    "Turn",
    "TurnResult",
    # Scheduling
    "SlotSet",
    "ResolvedSchedule",
    "ScheduledEvent",
    "NeedsClarification",
    "SlotsReady",
    "ExtractionOutcome",
    "CredentialRecord",
    # Tracing
    "TraceEvent",
]
