"""Compose one chat request, send it to Anthropic or OpenAI, read one normalized reply."""

import logging

from llm_bridge.client import LLMClient
from llm_bridge.errors import (
    ClientError,
    InvalidUsage,
    LLMBridgeError,
    MissingField,
    MissingMessages,
    ProviderError,
    RequestError,
    ResponseParseError,
    ServerError,
)
from llm_bridge.request import RequestBuilder
from llm_bridge.response import AnthropicResponse, OpenAIResponse, ResponseMessage, parse_response
from llm_bridge.session import ChatSession
from llm_bridge.tool import Tool, ToolBuilder, ToolParameter
from llm_bridge.types import Message, ToolResponse, Usage, Vendor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AnthropicResponse",
    "ChatSession",
    "ClientError",
    "InvalidUsage",
    "LLMBridgeError",
    "LLMClient",
    "Message",
    "MissingField",
    "MissingMessages",
    "OpenAIResponse",
    "ProviderError",
    "RequestBuilder",
    "RequestError",
    "ResponseMessage",
    "ResponseParseError",
    "ServerError",
    "Tool",
    "ToolBuilder",
    "ToolParameter",
    "ToolResponse",
    "Usage",
    "Vendor",
    "parse_response",
]
