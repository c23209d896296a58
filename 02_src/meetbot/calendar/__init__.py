"""Calendar module."""

from .google_calendar import GoogleCalendarClient, ICalendarClient, conference_link

__all__ = ["GoogleCalendarClient", "ICalendarClient", "conference_link"]
