"""SQLite storage for credentials and trace events."""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..logging_config import get_logger
from ..models import CredentialRecord, TraceEvent

logger = get_logger(__name__)


def _as_utc(value: str) -> datetime:
    ts = datetime.fromisoformat(value)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class IStorage(Protocol):
    """Persistent storage (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # Credentials
    async def get_refresh_token(self, user_id: str) -> str | None:
        """Get the stored refresh token for a user."""
        ...

    async def save_refresh_token(self, user_id: str, refresh_token: str) -> bool:
        """Upsert a refresh token. Returns False if the write failed."""
        ...

    async def get_credential(self, user_id: str) -> CredentialRecord | None:
        """Get the full credential record for a user."""
        ...

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        ...

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters."""
        ...

    async def clear(self) -> None:
        """Clear all data."""
        ...


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        await self._conn.executescript(schema_path.read_text(encoding="utf-8"))
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    def _connection(self) -> aiosqlite.Connection:
        if not self._conn:
            raise RuntimeError("Storage not initialized")
        return self._conn

    # Credentials
    async def get_refresh_token(self, user_id: str) -> str | None:
        """Get the stored refresh token for a user."""
        record = await self.get_credential(user_id)
        return record.refresh_token if record else None

    async def get_credential(self, user_id: str) -> CredentialRecord | None:
        """Get the full credential record for a user."""
        conn = self._connection()

        cursor = await conn.execute(
            """
            SELECT phone_number, refresh_token, updated_at
            FROM user_tokens
            WHERE phone_number = ?
            """,
            (user_id,),
        )
        row = await cursor.fetchone()

        if not row:
            return None

        return CredentialRecord(
            user_id=row[0],
            refresh_token=row[1],
            updated_at=_as_utc(row[2]) if row[2] else None,
        )

    async def save_refresh_token(self, user_id: str, refresh_token: str) -> bool:
        """Upsert a refresh token. Returns False if the write failed."""
        conn = self._connection()

        try:
            await conn.execute(
                """
                INSERT INTO user_tokens (phone_number, refresh_token, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(phone_number) DO UPDATE SET
                    refresh_token = excluded.refresh_token,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (user_id, refresh_token),
            )
            await conn.commit()
        except aiosqlite.Error as e:
            logger.error(f"Failed to save refresh token for {user_id}: {e}")
            return False

        return True

    # TraceEvents
    async def save_trace_event(self, event: TraceEvent) -> None:
        """Save a trace event."""
        conn = self._connection()

        await conn.execute(
            """
            INSERT INTO trace_events (id, event_type, actor, data, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.id or str(uuid.uuid4()),
                event.event_type,
                event.actor,
                json.dumps(event.data),
                event.timestamp.isoformat(),
            ),
        )
        await conn.commit()

    async def get_trace_events(
        self,
        after: datetime | None = None,
        event_types: list[str] | None = None,
        actor: str | None = None,
        limit: int = 100,
    ) -> list[TraceEvent]:
        """Get trace events with optional filters (newest first)."""
        conn = self._connection()

        conditions = []
        params: list = []

        if after:
            conditions.append("timestamp > ?")
            params.append(after.isoformat())
        if event_types:
            placeholders = ",".join("?" * len(event_types))
            conditions.append(f"event_type IN ({placeholders})")
            params.extend(event_types)
        if actor:
            conditions.append("actor = ?")
            params.append(actor)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        params.append(limit)

        cursor = await conn.execute(
            f"""
            SELECT id, event_type, actor, data, timestamp
            FROM trace_events
            {where_clause}
            ORDER BY timestamp DESC, rowid DESC
            LIMIT ?
            """,
            params,
        )
        rows = await cursor.fetchall()

        return [
            TraceEvent(
                id=row[0],
                event_type=row[1],
                actor=row[2],
                data=json.loads(row[3]),
                timestamp=_as_utc(row[4]),
            )
            for row in rows
        ]

    async def clear(self) -> None:
        """Clear all data."""
        conn = self._connection()

        for table in ("user_tokens", "trace_events"):
            await conn.execute(f"DELETE FROM {table}")

        await conn.commit()
