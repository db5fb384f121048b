from .client import StreamChatClient
from .config_types import ClientConfig, with_base_url, with_http_transport, with_timeout
from .errors import (
    ApiError,
    AuthError,
    DecodeError,
    EncodeError,
    NetworkError,
    PreconditionError,
    RequestTimeout,
    SigningError,
    StreamChatError,
    URLError,
)

__all__ = [
    "StreamChatClient",
    "ClientConfig",
    "with_base_url",
    "with_http_transport",
    "with_timeout",
    "ApiError",
    "AuthError",
    "DecodeError",
    "EncodeError",
    "NetworkError",
    "PreconditionError",
    "RequestTimeout",
    "SigningError",
    "StreamChatError",
    "URLError",
]
