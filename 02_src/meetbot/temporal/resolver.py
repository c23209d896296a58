"""Natural-language date/time resolution in a fixed timezone."""

import re
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import dateparser
from dateutil.relativedelta import MO, TU, WE, TH, FR, SA, SU, relativedelta

from ..errors import ResolutionFailure
from ..logging_config import get_logger
from ..models import ResolvedSchedule

logger = get_logger(__name__)

_WEEKDAYS = {
    "monday": MO,
    "tuesday": TU,
    "wednesday": WE,
    "thursday": TH,
    "friday": FR,
    "saturday": SA,
    "sunday": SU,
}

# "this friday", "coming monday", "next tuesday"
_RELATIVE_WEEKDAY_RE = re.compile(
    r"^(this|coming|next)\s+(" + "|".join(_WEEKDAYS) + r")$", re.IGNORECASE
)

# "3pm", "3:30 pm", "15:00". A bare hour is ambiguous and never accepted.
_CLOCK_RE = re.compile(
    r"^(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?\s*(?P<meridiem>[ap]m)$"
    r"|^(?P<hour24>\d{1,2}):(?P<minute24>\d{2})$",
    re.IGNORECASE,
)

_NAMED_TIMES = {"noon": "12:00", "midday": "12:00", "midnight": "00:00"}


class TemporalResolver:
    """Turns loose date and time text into an aware datetime.

    Parsing always happens in a named zone, never the server's local one,
    and relative phrases ("tomorrow", "next monday") are anchored to
    ``reference_now``. The date and the time are resolved separately and
    both must parse; nothing is filled in from the reference clock.
    """

    def __init__(self, timezone: str):
        try:
            self._zone = ZoneInfo(timezone)
        except ZoneInfoNotFoundError as e:
            raise ValueError(f"Unknown timezone: {timezone}") from e
        self.timezone = timezone

    def resolve(
        self,
        date_text: str,
        time_text: str,
        reference_now: datetime | None = None,
        timezone: str | None = None,
    ) -> datetime:
        """Resolve a date and time phrase to an aware datetime.

        Raises:
            ResolutionFailure: the date or the time could not be parsed.
        """
        zone = ZoneInfo(timezone) if timezone else self._zone
        now = reference_now or datetime.now(zone)
        if now.tzinfo is None:
            now = now.replace(tzinfo=zone)
        local_now = now.astimezone(zone)

        date_text = (date_text or "").strip()
        time_text = (time_text or "").strip()
        phrase = f"{date_text} {time_text}".strip()

        day = self._resolve_date(date_text, local_now, zone)
        clock = self._resolve_time(time_text, day) if day else None
        if day is None or clock is None:
            logger.info(f"Could not resolve {phrase!r} in {zone.key}")
            raise ResolutionFailure(phrase)

        return datetime.combine(day, clock, tzinfo=zone)

    def schedule(
        self,
        date_text: str,
        time_text: str,
        duration_minutes: int,
        reference_now: datetime | None = None,
    ) -> ResolvedSchedule:
        """Resolve the start and add the duration to get the end."""
        if duration_minutes <= 0:
            raise ValueError("duration_minutes must be positive")

        start = self.resolve(date_text, time_text, reference_now)
        return ResolvedSchedule(
            start=start,
            end=start + timedelta(seconds=duration_minutes * 60),
            timezone=self.timezone,
        )

    def _resolve_date(
        self, text: str, local_now: datetime, zone: ZoneInfo
    ) -> date | None:
        if not text:
            return None

        today = local_now.date()
        match = _RELATIVE_WEEKDAY_RE.match(text)
        if match:
            modifier, name = match.group(1).lower(), match.group(2).lower()
            weekday = _WEEKDAYS[name]
            if modifier == "next":
                # The named day in the week after this one (weeks start Monday).
                week_start = today + relativedelta(days=1, weekday=MO)
                return week_start + relativedelta(weekday=weekday)
            return today + relativedelta(weekday=weekday)

        parsed = dateparser.parse(
            text,
            languages=["en"],
            settings={
                "TIMEZONE": zone.key,
                "RETURN_AS_TIMEZONE_AWARE": True,
                "RELATIVE_BASE": local_now.replace(tzinfo=None),
                "PREFER_DATES_FROM": "future",
            },
        )
        if parsed is None:
            return None
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(zone)
        return parsed.date()

    def _resolve_time(self, text: str, day: date) -> time | None:
        text = _NAMED_TIMES.get(text.lower(), text).replace(".", "")
        match = _CLOCK_RE.match(text)
        if not match:
            return None

        if match.group("meridiem"):
            hour = int(match.group("hour"))
            minute = int(match.group("minute") or 0)
            if not 1 <= hour <= 12:
                return None
            hour = hour % 12 + (12 if match.group("meridiem").lower() == "pm" else 0)
        else:
            hour = int(match.group("hour24"))
            minute = int(match.group("minute24"))
            if hour > 23:
                return None
        if minute > 59:
            return None

        base = datetime.combine(day, time.min)
        parsed = dateparser.parse(
            text, languages=["en"], settings={"RELATIVE_BASE": base}
        )
        if parsed is None or (parsed.hour, parsed.minute) != (hour, minute):
            return None
        return time(hour, minute)
