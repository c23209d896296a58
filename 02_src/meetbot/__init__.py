"""Meeting scheduling assistant."""

from .app import Application, IApplication
from .auth import AuthorizationGate, IAuthorizationGate
from .calendar import GoogleCalendarClient, ICalendarClient
from .config import Settings
from .dialogue import DialogueEngine, IDialogueEngine, SessionStore
from .errors import (
    AuthorizationError,
    ExtractionUnavailable,
    MeetbotError,
    NoActiveSession,
    ResolutionFailure,
    SchedulingError,
)
from .links import LinkShortener
from .llm import ILLMProvider, LLMProvider, SlotExtractor
from .models import (
    CredentialRecord,
    DialogueState,
    NeedsClarification,
    ResolvedSchedule,
    ScheduledEvent,
    SlotSet,
    SlotsReady,
    TraceEvent,
    Turn,
    TurnResult,
)
from .storage import IStorage, Storage
from .temporal import TemporalResolver
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "Turn",
    "TurnResult",
    "DialogueState",
    "SlotSet",
    "ResolvedSchedule",
    "ScheduledEvent",
    "NeedsClarification",
    "SlotsReady",
    "CredentialRecord",
    "TraceEvent",
    # Errors
    "MeetbotError",
    "NoActiveSession",
    "ExtractionUnavailable",
    "ResolutionFailure",
    "SchedulingError",
    "AuthorizationError",
    # Components
    "IStorage",
    "Storage",
    "ITracker",
    "Tracker",
    "ILLMProvider",
    "LLMProvider",
    "SlotExtractor",
    "TemporalResolver",
    "IAuthorizationGate",
    "AuthorizationGate",
    "ICalendarClient",
    "GoogleCalendarClient",
    "LinkShortener",
    "SessionStore",
    "IDialogueEngine",
    "DialogueEngine",
]
