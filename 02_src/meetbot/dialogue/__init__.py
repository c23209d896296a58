"""Dialogue module."""

from .engine import DialogueEngine, IDialogueEngine, ISlotExtractor
from .session_store import ISessionStore, SessionStore

__all__ = [
    "DialogueEngine",
    "IDialogueEngine",
    "ISlotExtractor",
    "ISessionStore",
    "SessionStore",
]
