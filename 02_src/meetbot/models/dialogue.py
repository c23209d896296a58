"""Dialogue-related data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

Role = Literal["system", "user", "assistant"]


class DialogueState(str, Enum):
    """Where a user's conversation stands after a turn."""

    IDLE = "idle"
    AWAITING_AUTH = "awaiting_auth"
    COLLECTING = "collecting"
    RESOLVING = "resolving"
    COMMITTING = "committing"


@dataclass(frozen=True)
class Turn:
    """A single entry in a session transcript."""

    role: Role
    content: str
    # Structured extraction call, present only on assistant turns.
    payload: dict[str, Any] | None = None


@dataclass(frozen=True)
class TurnResult:
    """The one reply produced for an inbound message."""

    reply: str
    state: DialogueState
