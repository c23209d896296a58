"""Tracing and observability data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TraceEvent:
    """A recorded dialogue transition."""

    id: str
    event_type: str  # e.g. "clarification_requested", "event_scheduled"
    actor: str  # component that recorded it
    data: dict
    timestamp: datetime
