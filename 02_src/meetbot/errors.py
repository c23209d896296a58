"""Exceptions raised inside a dialogue turn."""


class MeetbotError(Exception):
    """Base class for scheduling assistant errors."""


class NoActiveSession(MeetbotError):
    """A turn was appended for a user that has no session."""

    def __init__(self, user_id: str):
        super().__init__(f"No active session for {user_id}")
        self.user_id = user_id


class ExtractionUnavailable(MeetbotError):
    """The slot extractor failed or returned a malformed payload."""


class ResolutionFailure(MeetbotError):
    """A date/time phrase could not be turned into a timestamp."""

    def __init__(self, phrase: str):
        super().__init__(f"Could not resolve date/time phrase: {phrase!r}")
        self.phrase = phrase


class SchedulingError(MeetbotError):
    """The calendar provider rejected or failed the event insert."""


class AuthorizationError(MeetbotError):
    """The OAuth callback could not produce a usable credential.

    The message is safe to show to the user.
    """
