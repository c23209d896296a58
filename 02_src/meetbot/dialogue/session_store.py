"""Per-user conversation transcripts."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol

from ..errors import NoActiveSession
from ..logging_config import get_logger
from ..models import Turn

logger = get_logger(__name__)


class ISessionStore(Protocol):
    """Mapping from user identity to an ordered transcript."""

    def get_or_create(self, user_id: str) -> list[Turn]:
        """Return the user's transcript, seeding a new one if absent."""
        ...

    def append_turn(self, user_id: str, turn: Turn) -> None:
        """Append a turn. Raises NoActiveSession if there is no session."""
        ...

    def clear(self, user_id: str) -> None:
        """Drop the user's session. No-op when absent."""
        ...

    def lock(self, user_id: str):
        """Async context manager serializing turns for one user."""
        ...


class SessionStore:
    """In-process session map with per-user locking.

    Every session starts with exactly one system turn. Turns are only ever
    appended; the whole session is dropped with ``clear``. Callers hold
    ``lock(user_id)`` for the duration of a turn so that two messages from
    the same user never interleave, while different users proceed in
    parallel.
    """

    def __init__(self, system_instruction: str):
        self._system_instruction = system_instruction
        self._sessions: dict[str, list[Turn]] = {}
        # user_id -> (lock, holders + waiters); dropped when the count hits zero
        self._locks: dict[str, tuple[asyncio.Lock, int]] = {}

    @asynccontextmanager
    async def lock(self, user_id: str) -> AsyncIterator[None]:
        """Hold the user's lock. Waiters are served in arrival order."""
        user_lock, users = self._locks.get(user_id, (asyncio.Lock(), 0))
        self._locks[user_id] = (user_lock, users + 1)
        try:
            async with user_lock:
                yield
        finally:
            user_lock, users = self._locks[user_id]
            if users == 1:
                del self._locks[user_id]
            else:
                self._locks[user_id] = (user_lock, users - 1)

    @property
    def lock_count(self) -> int:
        """Number of users with a turn running or queued."""
        return len(self._locks)

    def get_or_create(self, user_id: str) -> list[Turn]:
        """Return the user's transcript, seeding a new one if absent."""
        if user_id not in self._sessions:
            self._sessions[user_id] = [
                Turn(role="system", content=self._system_instruction)
            ]
            logger.debug(f"Session created for {user_id}")
        return list(self._sessions[user_id])

    def get(self, user_id: str) -> list[Turn] | None:
        """Return a copy of the transcript, or None if there is no session."""
        session = self._sessions.get(user_id)
        return list(session) if session is not None else None

    def has_session(self, user_id: str) -> bool:
        return user_id in self._sessions

    def append_turn(self, user_id: str, turn: Turn) -> None:
        """Append a turn. Raises NoActiveSession if there is no session."""
        session = self._sessions.get(user_id)
        if session is None:
            raise NoActiveSession(user_id)
        session.append(turn)

    def clear(self, user_id: str) -> None:
        """Drop the user's session. No-op when absent."""
        if self._sessions.pop(user_id, None) is not None:
            logger.debug(f"Session cleared for {user_id}")

    def clear_all(self) -> None:
        """Drop every session."""
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
