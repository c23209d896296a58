"""Tests for GoogleCalendarClient."""

from datetime import datetime, timedelta
from unittest.mock import Mock, patch
from zoneinfo import ZoneInfo

import httplib2
import pytest
from googleapiclient.errors import HttpError

from meetbot.calendar import GoogleCalendarClient, conference_link
from meetbot.errors import SchedulingError

from conftest import MEET_LINK, TIMEZONE

START = datetime(2026, 10, 20, 15, 0, tzinfo=ZoneInfo(TIMEZONE))
END = START + timedelta(minutes=30)


@pytest.fixture
def client():
    return GoogleCalendarClient(timezone=TIMEZONE, timeout=1.0)


@pytest.fixture
def service():
    svc = Mock()
    svc.events.return_value.insert.return_value.execute.return_value = {
        "id": "evt_1",
        "hangoutLink": MEET_LINK,
        "htmlLink": "https://www.google.com/calendar/event?eid=evt_1",
    }
    return svc


class TestBuildEvent:
    def test_event_body(self, client):
        body = client.build_event("Standup", START, END, ["bob@x.com"])

        assert body["summary"] == "Standup"
        assert body["start"] == {"dateTime": START.isoformat(), "timeZone": TIMEZONE}
        assert body["end"] == {"dateTime": END.isoformat(), "timeZone": TIMEZONE}
        assert body["attendees"] == [{"email": "bob@x.com"}]
        request = body["conferenceData"]["createRequest"]
        assert request["conferenceSolutionKey"] == {"type": "hangoutsMeet"}
        assert request["requestId"]

    def test_request_ids_are_unique(self, client):
        first = client.build_event("a", START, END, [])
        second = client.build_event("a", START, END, [])

        assert (
            first["conferenceData"]["createRequest"]["requestId"]
            != second["conferenceData"]["createRequest"]["requestId"]
        )


class TestConferenceLink:
    def test_prefers_hangout_link(self):
        assert conference_link({"hangoutLink": MEET_LINK}) == MEET_LINK

    def test_falls_back_to_video_entry_point(self):
        event = {
            "conferenceData": {
                "entryPoints": [
                    {"entryPointType": "phone", "uri": "tel:+1-555"},
                    {"entryPointType": "video", "uri": MEET_LINK},
                ]
            }
        }

        assert conference_link(event) == MEET_LINK

    def test_none_when_absent(self):
        assert conference_link({"id": "evt"}) is None


class TestCreateEvent:
    async def test_inserts_with_conference_data(self, client, service):
        credentials = Mock()

        with patch("meetbot.calendar.google_calendar.build", return_value=service) as build:
            event = await client.create_event(
                credentials, "Standup", START, END, ["bob@x.com"]
            )

        build.assert_called_once_with(
            "calendar", "v3", credentials=credentials, cache_discovery=False
        )
        kwargs = service.events.return_value.insert.call_args.kwargs
        assert kwargs["calendarId"] == "primary"
        assert kwargs["conferenceDataVersion"] == 1
        assert kwargs["sendUpdates"] == "all"
        assert kwargs["body"]["summary"] == "Standup"
        assert event.event_id == "evt_1"
        assert event.conference_link == MEET_LINK

    async def test_http_error_becomes_scheduling_error(self, client, service):
        response = httplib2.Response({"status": 403})
        service.events.return_value.insert.return_value.execute.side_effect = HttpError(
            response, b'{"error": {"message": "quota"}}'
        )

        with patch("meetbot.calendar.google_calendar.build", return_value=service):
            with pytest.raises(SchedulingError):
                await client.create_event(Mock(), "Standup", START, END, [])

    async def test_refresh_failure_becomes_scheduling_error(self, client):
        with patch(
            "meetbot.calendar.google_calendar.build",
            side_effect=Exception("invalid_grant"),
        ):
            with pytest.raises(SchedulingError, match="invalid_grant"):
                await client.create_event(Mock(), "Standup", START, END, [])

    async def test_timeout_becomes_scheduling_error(self, service):
        import time

        client = GoogleCalendarClient(timezone=TIMEZONE, timeout=0.01)
        service.events.return_value.insert.return_value.execute.side_effect = (
            lambda: time.sleep(0.2)
        )

        with patch("meetbot.calendar.google_calendar.build", return_value=service):
            with pytest.raises(SchedulingError, match="timed out"):
                await client.create_event(Mock(), "Standup", START, END, [])
