"""LLM Provider implementation using Anthropic Claude API."""

import os
from dataclasses import dataclass, field
from typing import Any, Protocol

import anthropic

from ..config import DEFAULT_MODEL


@dataclass
class ToolCall:
    """A tool invocation requested by the model."""

    name: str
    arguments: dict[str, Any]


@dataclass
class LLMReply:
    """Text and tool calls from one completion."""

    text: str = ""
    tool_calls: list[ToolCall] = field(default_factory=list)


class ILLMProvider(Protocol):
    """Abstraction for LLM access."""

    async def complete(
        self,
        messages: list[dict],  # [{"role": "user", "content": "..."}]
        system: str | None = None,
        max_tokens: int = 1024,
        tools: list[dict] | None = None,
    ) -> LLMReply:
        """Generate a completion, optionally offering tools."""
        ...


class LLMProvider:
    """Anthropic Claude API provider."""

    def __init__(self, api_key: str | None = None, model: str = DEFAULT_MODEL):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self._model = model
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

    async def complete(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 1024,
        tools: list[dict] | None = None,
    ) -> LLMReply:
        """Generate a completion using Claude API."""
        request: dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "max_tokens": max_tokens,
        }
        if system:
            request["system"] = system
        if tools:
            request["tools"] = tools
            request["tool_choice"] = {"type": "auto"}

        try:
            response = await self._client.messages.create(**request)
        except Exception as e:
            # Re-raise for handling by caller
            raise RuntimeError(f"LLM API error: {e}") from e

        reply = LLMReply()
        texts = []
        for block in response.content:
            if block.type == "text":
                texts.append(block.text)
            elif block.type == "tool_use":
                reply.tool_calls.append(
                    ToolCall(name=block.name, arguments=dict(block.input or {}))
                )
        reply.text = "".join(texts).strip()
        return reply

    async def close(self) -> None:
        await self._client.close()
