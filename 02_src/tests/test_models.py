"""Tests for data models."""

import pytest

from meetbot.models import DialogueState, SlotSet


class TestSlotSet:
    def test_complete(self):
        slots = SlotSet("Standup", "tomorrow", "3pm", 30, ("bob@x.com",))

        assert slots.is_complete() is True

    @pytest.mark.parametrize(
        "title,date,start_time,duration",
        [
            ("", "tomorrow", "3pm", 30),
            ("   ", "tomorrow", "3pm", 30),
            ("Standup", "", "3pm", 30),
            ("Standup", "tomorrow", " ", 30),
            ("Standup", "tomorrow", "3pm", 0),
            ("Standup", "tomorrow", "3pm", -15),
        ],
    )
    def test_incomplete(self, title, date, start_time, duration):
        assert SlotSet(title, date, start_time, duration).is_complete() is False

    def test_attendees_default_empty(self):
        assert SlotSet("Standup", "tomorrow", "3pm", 30).attendees == ()


def test_dialogue_state_serializes_as_string():
    assert DialogueState.AWAITING_AUTH.value == "awaiting_auth"
    assert DialogueState.IDLE == "idle"
