"""
Chat contracts: the message and response shapes every chat model shares.

Provider adapters translate these to and from their vendor formats.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ChatMessage:
    """A single chat turn."""

    role: str  # "system", "user", "assistant"
    content: str
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChatMessage:
        return cls(
            role=data["role"],
            content=data.get("content", ""),
            name=data.get("name"),
        )


@dataclass
class ChatCompletionResponse:
    """What a provider call returns: the assistant message plus the raw response."""

    message: ChatMessage
    response: Any = None
