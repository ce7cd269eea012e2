"""Package specific exception hierarchy."""


class LLMBridgeError(Exception):
    """Base exception for llm_bridge package."""


class MissingMessages(LLMBridgeError):
    """Raised when a request is rendered before any message was added."""

    def __init__(self) -> None:
        super().__init__("At least one message is required to build a request.")


class InvalidUsage(LLMBridgeError):
    """Raised when request parameters cannot be encoded for a vendor."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class MissingField(LLMBridgeError):
    """Raised when a tool is built without one of its mandatory fields."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Tool {field} is required")
        self.field = field


class ProviderError(LLMBridgeError):
    """Represents an HTTP error status returned by a vendor."""

    def __init__(self, provider: str, detail: str, status_code: int | None = None) -> None:
        super().__init__(f"{provider}: {detail}")
        self.provider = provider
        self.detail = detail
        self.status_code = status_code


class ClientError(ProviderError):
    """The vendor rejected the request (4xx)."""


class ServerError(ProviderError):
    """The vendor failed to serve the request (5xx)."""


class RequestError(LLMBridgeError):
    """Raised when the HTTP exchange fails before any status is received."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class ResponseParseError(LLMBridgeError):
    """Raised when a response body matches none of the known vendor shapes."""

    def __init__(self, body: str, message: str = "Response did not match any known vendor shape") -> None:
        super().__init__(message)
        self.body = body
