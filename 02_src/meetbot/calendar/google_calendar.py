"""Google Calendar event creation with a Meet link."""

import asyncio
import uuid
from datetime import datetime
from typing import Any, Protocol

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..errors import SchedulingError
from ..logging_config import get_logger
from ..models import ScheduledEvent

logger = get_logger(__name__)


class ICalendarClient(Protocol):
    """The scheduling action the dialogue engine commits to."""

    async def create_event(
        self,
        credential: Credentials,
        title: str,
        start: datetime,
        end: datetime,
        attendees: list[str],
    ) -> ScheduledEvent:
        """Create the event. Raises SchedulingError on failure."""
        ...


def conference_link(event: dict[str, Any]) -> str | None:
    """Meet link from an inserted event, if Google attached one."""
    if event.get("hangoutLink"):
        return event["hangoutLink"]
    for entry in (event.get("conferenceData") or {}).get("entryPoints", []):
        if entry.get("entryPointType") == "video" and entry.get("uri"):
            return entry["uri"]
    return None


class GoogleCalendarClient:
    """Inserts events into the user's primary calendar."""

    def __init__(
        self,
        timezone: str,
        calendar_id: str = "primary",
        timeout: float = 30.0,
    ):
        self._timezone = timezone
        self._calendar_id = calendar_id
        self._timeout = timeout

    def build_event(
        self,
        title: str,
        start: datetime,
        end: datetime,
        attendees: list[str],
    ) -> dict[str, Any]:
        return {
            "summary": title,
            "start": {"dateTime": start.isoformat(), "timeZone": self._timezone},
            "end": {"dateTime": end.isoformat(), "timeZone": self._timezone},
            "attendees": [{"email": email} for email in attendees],
            "conferenceData": {
                "createRequest": {
                    "requestId": uuid.uuid4().hex,
                    "conferenceSolutionKey": {"type": "hangoutsMeet"},
                }
            },
        }

    def _insert(self, credential: Credentials, body: dict[str, Any]) -> dict[str, Any]:
        service = build("calendar", "v3", credentials=credential, cache_discovery=False)
        return (
            service.events()
            .insert(
                calendarId=self._calendar_id,
                body=body,
                conferenceDataVersion=1,
                sendUpdates="all",
            )
            .execute()
        )

    async def create_event(
        self,
        credential: Credentials,
        title: str,
        start: datetime,
        end: datetime,
        attendees: list[str],
    ) -> ScheduledEvent:
        """Create the event and return its Meet link."""
        body = self.build_event(title, start, end, attendees)

        try:
            created = await asyncio.wait_for(
                asyncio.to_thread(self._insert, credential, body),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise SchedulingError(
                f"calendar insert timed out after {self._timeout}s"
            ) from e
        except HttpError as e:
            raise SchedulingError(f"calendar API error: {e}") from e
        except Exception as e:
            raise SchedulingError(f"calendar insert failed: {e}") from e

        logger.info(f"Created event {title!r} at {start.isoformat()}")
        return ScheduledEvent(
            event_id=created.get("id", ""),
            conference_link=conference_link(created),
            html_link=created.get("htmlLink"),
        )
