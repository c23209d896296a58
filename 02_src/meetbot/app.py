"""Application bootstrap and lifecycle management."""

import os
from typing import Protocol

from .auth import AuthorizationGate
from .calendar import GoogleCalendarClient
from .config import Settings, resolve_db_path
from .dialogue import DialogueEngine, SessionStore
from .links import LinkShortener
from .llm import LLMProvider, SlotExtractor
from .logging_config import get_logger
from .prompts import SYSTEM_INSTRUCTION
from .storage import IStorage, Storage
from .temporal import TemporalResolver
from .tracker import Tracker

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...


class Application:
    """Wires the scheduling assistant together."""

    def __init__(self, settings: Settings | None = None, db_path: str | None = None):
        self.settings = settings or Settings.from_env()
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)

        # Components (initialized in start())
        self._storage: IStorage | None = None
        self._tracker: Tracker | None = None
        self._llm: LLMProvider | None = None
        self._shortener: LinkShortener | None = None
        self._auth_gate: AuthorizationGate | None = None
        self._sessions: SessionStore | None = None
        self._dialogue_engine: DialogueEngine | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")
        settings = self.settings

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Tracker (depends on Storage)
        self._tracker = Tracker(self._storage)

        # 3. LLM provider and extractor
        self._llm = LLMProvider(
            api_key=settings.anthropic_api_key, model=settings.anthropic_model
        )
        extractor = SlotExtractor(self._llm, timeout=settings.extractor_timeout)
        logger.info("LLM provider initialized")

        # 4. External collaborators
        self._shortener = LinkShortener(settings.bitly_access_token)
        self._auth_gate = AuthorizationGate(settings, self._storage)
        calendar = GoogleCalendarClient(
            timezone=settings.timezone, timeout=settings.scheduling_timeout
        )

        # 5. Dialogue engine
        self._sessions = SessionStore(SYSTEM_INSTRUCTION)
        self._dialogue_engine = DialogueEngine(
            sessions=self._sessions,
            extractor=extractor,
            resolver=TemporalResolver(settings.timezone),
            auth_gate=self._auth_gate,
            calendar=calendar,
            tracker=self._tracker,
            shortener=self._shortener,
            resolver_timeout=settings.resolver_timeout,
        )
        logger.info(f"DialogueEngine ready (timezone {settings.timezone})")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._sessions:
            self._sessions.clear_all()
        if self._shortener:
            await self._shortener.close()
        if self._llm:
            await self._llm.close()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def dialogue_engine(self) -> DialogueEngine:
        """Get dialogue engine instance."""
        if not self._dialogue_engine:
            raise RuntimeError("Application not started")
        return self._dialogue_engine

    @property
    def auth_gate(self) -> AuthorizationGate:
        """Get authorization gate instance."""
        if not self._auth_gate:
            raise RuntimeError("Application not started")
        return self._auth_gate
