from __future__ import annotations

import json
import time
from typing import Any, TypeVar

import httpx

from .config_types import ClientConfig
from .errors import EncodeError, NetworkError, RequestTimeout
from .responses import parse_response
from .urls import Params, request_url

T = TypeVar("T")


def encode_body(data: Any) -> bytes | None:
    if data is None:
        return None
    if hasattr(data, "to_dict"):
        data = data.to_dict()
    try:
        return json.dumps(data, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(f"cannot encode request payload: {e}") from e


class Transport:
    def __init__(self, cfg: ClientConfig, *, api_key: str, auth_token: str):
        self._cfg = cfg
        self._api_key = api_key
        self._auth_token = auth_token
        self._client = httpx.Client(timeout=cfg.timeout_s, transport=cfg.transport)

    @property
    def auth_token(self) -> str:
        return self._auth_token

    def close(self) -> None:
        self._client.close()

    def headers(self, token: str | None = None) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Stream-Client": self._cfg.client_id,
            "Authorization": token or self._auth_token,
            "Stream-Auth-Type": "jwt",
        }

    def build_url(self, path: str, params: Params | None = None) -> str:
        return request_url(self._cfg.base_url, path, params, self._api_key)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Params | None = None,
        data: Any = None,
        result_type: type[T] | None = None,
        token: str | None = None,
    ) -> T | None:
        """Send one request; connect, send and the full body read share one ``timeout_s`` budget."""
        url = self.build_url(path, params)
        body = encode_body(data)
        deadline = time.monotonic() + self._cfg.timeout_s
        request = self._client.build_request(method.upper(), url, content=body, headers=self.headers(token))
        try:
            response = self._client.send(request, stream=True)
        except httpx.TimeoutException as e:
            raise RequestTimeout(f"{method.upper()} {url} timed out after {self._cfg.timeout_s}s") from e
        except httpx.TransportError as e:
            raise NetworkError(f"{method.upper()} {url}: {e}") from e
        if time.monotonic() > deadline:
            response.close()
            raise RequestTimeout(f"{method.upper()} {url} timed out after {self._cfg.timeout_s}s")
        return parse_response(response, result_type, deadline)
