"""LLM module."""

from .llm_provider import ILLMProvider, LLMProvider, LLMReply, ToolCall
from .slot_extractor import CREATE_EVENT_TOOL, SlotExtractor, render_transcript

__all__ = [
    "ILLMProvider",
    "LLMProvider",
    "LLMReply",
    "ToolCall",
    "SlotExtractor",
    "CREATE_EVENT_TOOL",
    "render_transcript",
]
