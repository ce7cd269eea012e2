"""OpenAI provider implementation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from llm_bridge.providers.base import BaseProvider
from llm_bridge.tool import Tool
from llm_bridge.types import Message, Vendor

_DEFAULT_BASE_URL = "https://api.openai.com"
_CHAT_PATH = "/v1/chat/completions"
_DEFAULT_MODEL = "gpt-4o"


class OpenAIProvider(BaseProvider):
    """Transport for the OpenAI Chat Completions API."""

    name = "openai"
    vendor = Vendor.OPENAI
    default_model = _DEFAULT_MODEL
    default_base_url = _DEFAULT_BASE_URL
    path = _CHAT_PATH

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str | None = None,
        timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url=base_url, timeout_s=timeout_s, transport=transport)
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    @property
    def headers(self) -> dict[str, str]:
        return self._headers

    def build_payload(
        self,
        *,
        model: str,
        messages: Sequence[Message],
        max_tokens: int,
        temperature: float,
        system_prompt: str,
        tools: Sequence[Tool],
    ) -> dict[str, Any]:
        serialized = [self._serialize_message(m) for m in messages]
        # OpenAI places the system prompt in the messages list, after the conversation.
        if system_prompt:
            serialized.append(self._serialize_message(Message.system(system_prompt)))

        payload: dict[str, Any] = {
            "model": model,
            "messages": serialized,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if tools:
            payload["tools"] = [t.to_openai_format() for t in tools]
        return payload

    @staticmethod
    def _serialize_message(message: Message) -> dict[str, Any]:
        return {"role": message.role, "content": message.content}
