"""Provider-agnostic transport interface and HTTP helpers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

import httpx

from llm_bridge.errors import ClientError, RequestError, ServerError
from llm_bridge.response import ResponseMessage, parse_response
from llm_bridge.tool import Tool
from llm_bridge.types import Message, Vendor

_logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """Abstract base class for vendor transports.

    A provider knows how to lay out a request document for its vendor and how
    to POST it. It holds no per-request state, so one instance can back any
    number of builders and sessions.
    """

    name: str
    vendor: Vendor
    default_model: str
    default_base_url: str
    path: str

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_s: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url or self.default_base_url,
            timeout=timeout_s,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    @property
    @abstractmethod
    def headers(self) -> dict[str, str]:
        """Vendor authentication and content headers."""
        raise NotImplementedError

    @abstractmethod
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
        """Lay out resolved request values in the vendor's wire format."""
        raise NotImplementedError

    async def post(self, document: dict[str, Any]) -> httpx.Response:
        """POST a rendered document; status codes are reported, not raised."""
        try:
            return await self._client.post(self.path, headers=self.headers, json=document)
        except httpx.HTTPError as exc:
            _logger.error("%s request failed: %s", self.name, exc)
            raise RequestError(self.name, str(exc) or type(exc).__name__) from exc

    async def send_message(self, document: dict[str, Any]) -> ResponseMessage:
        """Send a rendered document and parse the vendor's reply."""
        response = await self.post(document)
        return self._parse_or_error(response)

    def _parse_or_error(self, response: httpx.Response) -> ResponseMessage:
        status = response.status_code
        text = response.text
        detail = f"Status: {status} - Error: {text}"
        if 400 <= status < 500:
            _logger.error("%s client error [%s]: %s", self.name, status, text)
            raise ClientError(self.name, detail, status_code=status)
        if status >= 500:
            _logger.error("%s server error [%s]: %s", self.name, status, text)
            raise ServerError(self.name, detail, status_code=status)
        _logger.debug("%s response: status[%s]\n%s", self.name, status, text)
        return parse_response(text)
