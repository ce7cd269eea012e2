"""Vendor-agnostic value objects shared by requests, responses and sessions."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class Vendor(str, Enum):
    """Supported chat-completion APIs."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"


class Message(BaseModel):
    """Single chat message.

    The role is kept as a free-form string; vendors only understand
    ``"user"``, ``"assistant"`` and ``"system"``.
    """

    model_config = ConfigDict(frozen=True)

    role: str
    content: str

    @classmethod
    def user(cls, content: str) -> Message:
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> Message:
        return cls(role="assistant", content=content)

    @classmethod
    def system(cls, content: str) -> Message:
        return cls(role="system", content=content)


class Usage(BaseModel):
    """Token counts normalized across vendors."""

    model_config = ConfigDict(frozen=True)

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def __add__(self, other: Usage) -> Usage:
        return Usage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )


class ToolResponse(BaseModel):
    """A tool invocation requested by the model."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    # decoded JSON arguments, None when the vendor sent undecodable text
    input: Any = None
