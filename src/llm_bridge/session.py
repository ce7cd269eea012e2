"""Multi-turn conversations with accumulated history and token usage."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from llm_bridge.providers.base import BaseProvider
from llm_bridge.request import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, RequestBuilder
from llm_bridge.response import ResponseMessage
from llm_bridge.types import Message, Usage

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatSession:
    """An immutable conversation state.

    Every turn returns a new session; the one it was called on is left as it
    was, including when the turn fails.

    Example::

        session = client.chat(system_prompt="You are terse.")
        session = await session.add("Hello!")
        session, reply = await session.send("And again?")
        print(reply.first_message(), session.usage)
    """

    provider: BaseProvider
    model: str
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE
    system_prompt: str | None = None
    transcript: tuple[Message, ...] = ()
    input_tokens_tally: int = 0
    output_tokens_tally: int = 0

    @property
    def usage(self) -> Usage:
        return Usage(input_tokens=self.input_tokens_tally, output_tokens=self.output_tokens_tally)

    def request(self, user_message: str) -> RequestBuilder:
        """Return a builder carrying the transcript followed by ``user_message``."""
        builder = (
            RequestBuilder(self.provider)
            .model(self.model)
            .messages(self.transcript)
            .user_message(user_message)
            .max_tokens(self.max_tokens)
            .temperature(self.temperature)
        )
        if self.system_prompt is not None:
            builder.system_prompt(self.system_prompt)
        return builder

    async def send(self, user_message: str) -> tuple[ChatSession, ResponseMessage]:
        """Run one turn and return the updated session with the raw reply."""
        response = await self.request(user_message).send()

        tally = self.usage + response.usage()
        reply = Message(role=response.role() or "assistant", content=response.first_message())
        session = replace(
            self,
            transcript=self.transcript + (Message.user(user_message), reply),
            input_tokens_tally=tally.input_tokens,
            output_tokens_tally=tally.output_tokens,
        )
        _logger.debug(
            "Turn %d complete: input_tokens=%d output_tokens=%d",
            len(session.transcript) // 2,
            session.input_tokens_tally,
            session.output_tokens_tally,
        )
        return session, response

    async def add(self, user_message: str) -> ChatSession:
        """Run one turn and return only the updated session."""
        session, _ = await self.send(user_message)
        return session
