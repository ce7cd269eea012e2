"""Client entry point handing out request builders and chat sessions."""

from __future__ import annotations

from types import TracebackType

from llm_bridge.errors import InvalidUsage
from llm_bridge.providers.anthropic import AnthropicProvider
from llm_bridge.providers.base import BaseProvider
from llm_bridge.providers.openai import OpenAIProvider
from llm_bridge.request import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, RequestBuilder
from llm_bridge.session import ChatSession
from llm_bridge.settings import BridgeSettings, get_settings
from llm_bridge.types import Vendor


class LLMClient:
    """High-level handle for one configured vendor.

    The client is read-only after construction, so it can be shared to create
    independent builders and sessions.
    """

    def __init__(self, provider: BaseProvider) -> None:
        self._provider = provider

    @classmethod
    def create(
        cls,
        vendor: Vendor | str,
        api_key: str,
        *,
        base_url: str | None = None,
        timeout_s: float = 60.0,
    ) -> LLMClient:
        """Build a client for ``vendor`` with the default transport."""
        vendor = Vendor(vendor)
        provider: BaseProvider
        if vendor is Vendor.ANTHROPIC:
            provider = AnthropicProvider(api_key=api_key, base_url=base_url, timeout_s=timeout_s)
        else:
            provider = OpenAIProvider(api_key=api_key, base_url=base_url, timeout_s=timeout_s)
        return cls(provider)

    @classmethod
    def from_settings(cls, vendor: Vendor | str, settings: BridgeSettings | None = None) -> LLMClient:
        """Build a client from environment configuration."""
        settings = settings or get_settings()
        vendor = Vendor(vendor)
        if vendor is Vendor.ANTHROPIC:
            api_key, base_url = settings.anthropic_api_key, settings.anthropic_base_url
        else:
            api_key, base_url = settings.openai_api_key, settings.openai_base_url
        if not api_key:
            raise InvalidUsage(f"{vendor.name}_API_KEY is not set.")
        return cls.create(vendor, api_key, base_url=base_url, timeout_s=settings.timeout_s)

    @property
    def provider(self) -> BaseProvider:
        return self._provider

    @property
    def vendor(self) -> Vendor:
        return self._provider.vendor

    def request(self) -> RequestBuilder:
        """Return a fresh builder bound to this client's provider."""
        return RequestBuilder(self._provider)

    def chat(
        self,
        *,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
        system_prompt: str | None = None,
    ) -> ChatSession:
        """Start an empty conversation."""
        return ChatSession(
            provider=self._provider,
            model=model or self._provider.default_model,
            max_tokens=max_tokens,
            temperature=temperature,
            system_prompt=system_prompt,
        )

    async def aclose(self) -> None:
        await self._provider.aclose()

    async def __aenter__(self) -> LLMClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
