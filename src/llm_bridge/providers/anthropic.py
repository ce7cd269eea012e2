"""Anthropic provider implementation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from llm_bridge.providers.base import BaseProvider
from llm_bridge.tool import Tool
from llm_bridge.types import Message, Vendor

_DEFAULT_BASE_URL = "https://api.anthropic.com"
_MESSAGES_PATH = "/v1/messages"
_API_VERSION = "2023-06-01"
_DEFAULT_MODEL = "claude-3-haiku-20240307"


class AnthropicProvider(BaseProvider):
    """Transport for the Anthropic Messages API."""

    name = "anthropic"
    vendor = Vendor.ANTHROPIC
    default_model = _DEFAULT_MODEL
    default_base_url = _DEFAULT_BASE_URL
    path = _MESSAGES_PATH

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
            "x-api-key": api_key,
            "anthropic-version": _API_VERSION,
            "content-type": "application/json",
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
        # The system prompt is a top-level field here, never a message.
        payload: dict[str, Any] = {
            "model": model,
            "messages": [self._serialize_message(m) for m in messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
            "system": system_prompt,
        }
        if tools:
            payload["tools"] = [t.to_anthropic_format() for t in tools]
        return payload

    @staticmethod
    def _serialize_message(message: Message) -> dict[str, Any]:
        return {"role": message.role, "content": message.content}
