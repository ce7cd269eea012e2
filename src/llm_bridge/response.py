"""Vendor response shapes and the normalized view over them.

Each supported API gets its own pydantic model mirroring the JSON it returns.
Both subclass :class:`ResponseMessage`, which declares the accessors callers
use regardless of vendor. The concrete class of a parsed response is decided
by which model the body validates against, not by which vendor was called.

To support another vendor, add a model subclassing ``ResponseMessage``,
implement the accessors and append it to ``_RESPONSE_SHAPES``. The shapes are
tried in order, so a new one must not validate against an earlier shape's
required fields.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from llm_bridge.errors import ResponseParseError
from llm_bridge.types import ToolResponse, Usage


def _function_call_placeholder(name: str) -> str:
    return f"Function call: {name}"


class ResponseMessage(BaseModel, ABC):
    """Normalized, read-only view of a chat-completion reply."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @abstractmethod
    def first_message(self) -> str:
        """Return the reply text, a tool-call placeholder, or ``""``."""
        raise NotImplementedError

    @abstractmethod
    def role(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def model(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def stop_reason(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def usage(self) -> Usage:
        raise NotImplementedError

    @abstractmethod
    def tools(self) -> list[ToolResponse] | None:
        """Return requested tool invocations in order, or None when there are none."""
        raise NotImplementedError


# Anthropic


class AnthropicTextBlock(BaseModel):
    type: Literal["text"]
    text: str


class AnthropicToolUseBlock(BaseModel):
    type: Literal["tool_use"]
    id: str
    name: str
    input: Any = None


AnthropicContentBlock = Annotated[
    Union[AnthropicTextBlock, AnthropicToolUseBlock],
    Field(discriminator="type"),
]


class AnthropicUsage(BaseModel):
    input_tokens: int
    output_tokens: int


class AnthropicResponse(ResponseMessage):
    """Reply of the Anthropic Messages API."""

    id: str
    sender_role: str = Field(alias="role")
    content: list[AnthropicContentBlock]
    reported_model: str = Field(alias="model")
    native_stop_reason: str | None = Field(default=None, alias="stop_reason")
    stop_sequence: str | None = None
    token_usage: AnthropicUsage = Field(alias="usage")

    def first_message(self) -> str:
        for block in self.content:
            if isinstance(block, AnthropicTextBlock):
                return block.text
        for block in self.content:
            if isinstance(block, AnthropicToolUseBlock):
                return _function_call_placeholder(block.name)
        return ""

    def role(self) -> str:
        return self.sender_role

    def model(self) -> str:
        return self.reported_model

    def stop_reason(self) -> str:
        return self.native_stop_reason or ""

    def usage(self) -> Usage:
        return Usage(
            input_tokens=self.token_usage.input_tokens,
            output_tokens=self.token_usage.output_tokens,
        )

    def tools(self) -> list[ToolResponse] | None:
        calls = [
            ToolResponse(id=block.id, name=block.name, input=block.input)
            for block in self.content
            if isinstance(block, AnthropicToolUseBlock)
        ]
        return calls or None

    def __str__(self) -> str:
        return f"ResponseMessage {{ id: {self.id}, role: {self.sender_role}, content: {self.content!r} }}"


# OpenAI


class OpenAIFunction(BaseModel):
    name: str
    # JSON-encoded string
    arguments: str = ""


class OpenAIToolCall(BaseModel):
    id: str
    type: str = "function"
    function: OpenAIFunction

    def to_tool_response(self) -> ToolResponse:
        try:
            arguments = json.loads(self.function.arguments)
        except json.JSONDecodeError:
            arguments = None
        return ToolResponse(id=self.id, name=self.function.name, input=arguments)


class OpenAIMessage(BaseModel):
    role: str
    content: str | None = None
    tool_calls: list[OpenAIToolCall] | None = None


class OpenAIChoice(BaseModel):
    index: int
    message: OpenAIMessage
    finish_reason: str | None = None


class OpenAIUsage(BaseModel):
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class OpenAIResponse(ResponseMessage):
    """Reply of the OpenAI Chat Completions API."""

    id: str
    object: str
    created: int
    reported_model: str = Field(alias="model")
    choices: list[OpenAIChoice]
    token_usage: OpenAIUsage = Field(alias="usage")

    def first_message(self) -> str:
        if not self.choices:
            return ""
        message = self.choices[0].message
        if message.content is not None:
            return message.content
        if message.tool_calls:
            return _function_call_placeholder(message.tool_calls[0].function.name)
        return ""

    def role(self) -> str:
        return self.choices[0].message.role if self.choices else ""

    def model(self) -> str:
        return self.reported_model

    def stop_reason(self) -> str:
        if not self.choices:
            return ""
        return self.choices[0].finish_reason or ""

    def usage(self) -> Usage:
        return Usage(
            input_tokens=self.token_usage.prompt_tokens,
            output_tokens=self.token_usage.completion_tokens,
        )

    def tools(self) -> list[ToolResponse] | None:
        calls = [
            call.to_tool_response()
            for choice in self.choices
            for call in choice.message.tool_calls or []
        ]
        return calls or None

    def __str__(self) -> str:
        return (
            f"ResponseMessage {{ id: {self.id}, object: {self.object}, "
            f"model: {self.reported_model}, choices: {self.choices!r} }}"
        )


_RESPONSE_SHAPES: tuple[type[ResponseMessage], ...] = (AnthropicResponse, OpenAIResponse)


def parse_response(text: str) -> ResponseMessage:
    """Parse a raw response body into the first vendor shape it matches."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(text, f"Response body is not valid JSON: {exc}") from exc

    last_error: ValidationError | None = None
    for shape in _RESPONSE_SHAPES:
        try:
            return shape.model_validate(data)
        except ValidationError as exc:
            last_error = exc
    raise ResponseParseError(text) from last_error
