from __future__ import annotations

import os
from datetime import datetime
from typing import Any, TypeVar

from .config_types import ClientConfig, Option, apply_options, with_base_url
from .errors import PreconditionError
from .tokens import server_claims, sign_claims, user_claims
from .transport import Transport
from .urls import Params

T = TypeVar("T")

ENV_API_KEY = "STREAM_API_KEY"
ENV_API_SECRET = "STREAM_API_SECRET"
ENV_HOST = "STREAM_HOST"


class StreamChatClient:
    """
    Client for the chat REST API.

    Every request carries the ``api_key`` query parameter and a server token
    signed once at construction. The instance holds no state that changes after
    ``__init__``, so one client can be shared between threads.
    """

    def __init__(self, api_key: str, api_secret: bytes | str, *options: Option):
        if not api_key:
            raise PreconditionError("API key is empty")
        if not api_secret:
            raise PreconditionError("API secret is empty")

        self._api_key = api_key
        self._api_secret = api_secret.encode("utf-8") if isinstance(api_secret, str) else bytes(api_secret)
        self._cfg = apply_options(ClientConfig(), options)

        token = sign_claims(server_claims(), self._api_secret)
        self._t = Transport(self._cfg, api_key=api_key, auth_token=token.decode("ascii"))

    @classmethod
    def from_env(cls, *options: Option) -> "StreamChatClient":
        host = os.getenv(ENV_HOST, "").strip()
        if host:
            options = (with_base_url(host), *options)
        return cls(os.getenv(ENV_API_KEY, ""), os.getenv(ENV_API_SECRET, ""), *options)

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._cfg.base_url

    @property
    def timeout_s(self) -> float:
        return self._cfg.timeout_s

    @property
    def auth_token(self) -> str:
        return self._t.auth_token

    def close(self) -> None:
        self._t.close()

    def __enter__(self) -> "StreamChatClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def create_token(self, user_id: str, expire: datetime | None = None) -> bytes:
        """Create a token for ``user_id``, optionally expiring at ``expire``."""
        return sign_claims(user_claims(user_id), self._api_secret, expire)

    def request_url(self, path: str, params: Params | None = None) -> str:
        return self._t.build_url(path, params)

    def make_request(
        self,
        method: str,
        path: str,
        params: Params | None = None,
        data: Any = None,
        result_type: type[T] | None = None,
        *,
        token: str | bytes | None = None,
    ) -> T | None:
        if isinstance(token, bytes):
            token = token.decode("ascii")
        return self._t.request(method, path, params=params, data=data, result_type=result_type, token=token)

    def get(self, path: str, params: Params | None = None, result_type: type[T] | None = None) -> T | None:
        return self.make_request("GET", path, params, None, result_type)

    def post(self, path: str, data: Any = None, result_type: type[T] | None = None, params: Params | None = None) -> T | None:
        return self.make_request("POST", path, params, data, result_type)

    def put(self, path: str, data: Any = None, result_type: type[T] | None = None, params: Params | None = None) -> T | None:
        return self.make_request("PUT", path, params, data, result_type)

    def patch(self, path: str, data: Any = None, result_type: type[T] | None = None, params: Params | None = None) -> T | None:
        return self.make_request("PATCH", path, params, data, result_type)

    def delete(self, path: str, params: Params | None = None, result_type: type[T] | None = None) -> T | None:
        return self.make_request("DELETE", path, params, None, result_type)
