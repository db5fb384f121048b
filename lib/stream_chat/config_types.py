from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Iterable

import httpx

DEFAULT_BASE_URL = "https://chat-us-east-1.stream-io-api.com"
DEFAULT_TIMEOUT_S = 6.0
DEFAULT_CLIENT_ID = "stream-python-client"


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    transport: httpx.BaseTransport | None = None
    client_id: str = DEFAULT_CLIENT_ID


Option = Callable[[ClientConfig], ClientConfig]


def with_timeout(seconds: float) -> Option:
    """Set the per-request timeout."""
    return lambda cfg: replace(cfg, timeout_s=float(seconds))


def with_base_url(url: str) -> Option:
    """Set the API base URL."""
    return lambda cfg: replace(cfg, base_url=url)


def with_http_transport(transport: httpx.BaseTransport) -> Option:
    """Set a custom httpx transport. Useful for proxies, tests etc."""
    return lambda cfg: replace(cfg, transport=transport)


def apply_options(cfg: ClientConfig, options: Iterable[Option]) -> ClientConfig:
    # applied in order, so the last option touching a field wins
    for opt in options:
        cfg = opt(cfg)
    return cfg
