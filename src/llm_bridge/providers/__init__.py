"""Provider definitions for llm_bridge."""

from .anthropic import AnthropicProvider
from .base import BaseProvider
from .openai import OpenAIProvider

__all__ = [
    "BaseProvider",
    "AnthropicProvider",
    "OpenAIProvider",
]
