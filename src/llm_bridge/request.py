"""Request builder rendering one logical request into a vendor document."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from llm_bridge.errors import InvalidUsage, MissingMessages
from llm_bridge.tool import Tool
from llm_bridge.types import Message

if TYPE_CHECKING:
    from llm_bridge.providers.base import BaseProvider
    from llm_bridge.response import ResponseMessage

DEFAULT_MAX_TOKENS = 100
DEFAULT_TEMPERATURE = 0.0

_logger = logging.getLogger(__name__)


@dataclass
class RequestParameters:
    """Builder state. ``None`` means the caller never set the value."""

    model: str | None = None
    messages: list[Message] | None = None
    max_tokens: int | None = None
    temperature: float | None = None
    system_prompt: str | None = None
    tools: list[Tool] | None = None


@dataclass(frozen=True)
class _Resolved:
    model: str
    messages: tuple[Message, ...]
    max_tokens: int
    temperature: float
    system_prompt: str
    tools: tuple[Tool, ...] = field(default_factory=tuple)


class RequestBuilder:
    """Accumulates request parameters and renders them for one provider.

    Example::

        response = await (
            client.request()
            .model("claude-3-haiku-20240307")
            .user_message("Hello, Claude!")
            .max_tokens(100)
            .temperature(1.0)
            .system_prompt("You are a haiku assistant.")
            .send()
        )
        print(response.first_message())
    """

    def __init__(self, provider: BaseProvider) -> None:
        self._provider = provider
        self._params = RequestParameters()

    @property
    def params(self) -> RequestParameters:
        return self._params

    def model(self, model: str) -> RequestBuilder:
        self._params.model = model
        return self

    def user_message(self, message: str) -> RequestBuilder:
        """Append a user turn to the conversation."""
        return self._append(Message.user(message))

    def assistant_message(self, message: str) -> RequestBuilder:
        """Append an assistant turn, e.g. when replaying a transcript."""
        return self._append(Message.assistant(message))

    def messages(self, messages: Iterable[Message]) -> RequestBuilder:
        """Replace the conversation with a copy of ``messages``."""
        self._params.messages = list(messages)
        return self

    def max_tokens(self, max_tokens: int) -> RequestBuilder:
        self._params.max_tokens = max_tokens
        return self

    def temperature(self, temperature: float) -> RequestBuilder:
        self._params.temperature = temperature
        return self

    def system_prompt(self, system_prompt: str) -> RequestBuilder:
        self._params.system_prompt = system_prompt
        return self

    def add_tool(self, tool: Tool) -> RequestBuilder:
        if self._params.tools is None:
            self._params.tools = []
        self._params.tools.append(tool)
        return self

    def render_request(self) -> dict[str, Any]:
        """Render the vendor document. Pure: builder state is left untouched."""
        resolved = self._resolve()
        return self._provider.build_payload(
            model=resolved.model,
            messages=resolved.messages,
            max_tokens=resolved.max_tokens,
            temperature=resolved.temperature,
            system_prompt=resolved.system_prompt,
            tools=resolved.tools,
        )

    def render_json(self) -> str:
        """Render the vendor document as JSON text."""
        return json.dumps(self.render_request(), allow_nan=False)

    async def send(self) -> ResponseMessage:
        """Render the request and hand it to the provider."""
        document = self.render_request()
        _logger.debug(
            "Sending %s request: model=%s messages=%d",
            self._provider.name,
            document["model"],
            len(document["messages"]),
        )
        return await self._provider.send_message(document)

    def _append(self, message: Message) -> RequestBuilder:
        if self._params.messages is None:
            self._params.messages = []
        self._params.messages.append(message)
        return self

    def _resolve(self) -> _Resolved:
        params = self._params
        model = params.model if params.model is not None else self._provider.default_model
        if not params.messages:
            raise MissingMessages()

        max_tokens = params.max_tokens if params.max_tokens is not None else DEFAULT_MAX_TOKENS
        temperature = params.temperature if params.temperature is not None else DEFAULT_TEMPERATURE

        try:
            temperature = float(temperature)
        except (OverflowError, TypeError, ValueError) as exc:
            raise InvalidUsage(f"temperature must be a finite number, got {temperature!r}") from exc
        if not math.isfinite(temperature):
            raise InvalidUsage(f"temperature must be a finite number, got {temperature!r}")
        if isinstance(max_tokens, bool) or not isinstance(max_tokens, int):
            raise InvalidUsage(f"max_tokens must be an integer, got {max_tokens!r}")
        if max_tokens < 0:
            raise InvalidUsage(f"max_tokens must not be negative, got {max_tokens!r}")

        return _Resolved(
            model=model,
            messages=tuple(params.messages),
            max_tokens=max_tokens,
            temperature=temperature,
            system_prompt=params.system_prompt or "",
            tools=tuple(params.tools or ()),
        )
