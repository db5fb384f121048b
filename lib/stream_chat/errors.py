from __future__ import annotations


class StreamChatError(Exception):
    """Base client error."""


class PreconditionError(StreamChatError, ValueError):
    """Required input is missing or invalid; raised before any network activity."""


class URLError(StreamChatError):
    """Base URL or path could not be turned into a request URL."""


class SigningError(StreamChatError):
    """Token could not be signed or verified."""


class EncodeError(StreamChatError):
    """Request payload is not JSON-serializable."""


class NetworkError(StreamChatError):
    """Transport/network layer error."""


class RequestTimeout(NetworkError):
    """Request did not complete within the configured timeout."""


class DecodeError(StreamChatError):
    """Successful response body did not match the expected shape."""


class ApiError(StreamChatError):
    def __init__(self, method: str, url: str, status_code: int, reason: str, body: str = ""):
        super().__init__(f"chat-client: HTTP {method} {url} status {status_code} {reason}: {body}")
        self.method = method
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.body = body


class AuthError(ApiError):
    """Auth-related API error."""
