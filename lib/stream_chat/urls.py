from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Union
from urllib.parse import urlencode

import httpx

from .errors import PreconditionError, URLError

ParamValue = Union[str, bytes, Sequence[str]]
Params = Mapping[str, ParamValue]

API_KEY_PARAM = "api_key"


def _text(value: object) -> str:
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PreconditionError(f"query parameter value is not UTF-8: {value!r}") from e
    return str(value)


def _values(value: ParamValue) -> list[str]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return [_text(value)]
    return [_text(v) for v in value]


def encode_params(params: Params | None, api_key: str) -> str:
    """Encode ``params`` plus the mandatory ``api_key``; keys sorted, values in given order."""
    pairs: dict[str, list[str]] = {}
    for key, value in (params or {}).items():
        if key == API_KEY_PARAM:
            raise PreconditionError(f"{API_KEY_PARAM} is set by the client and cannot be passed as a parameter")
        pairs[key] = _values(value)
    pairs[API_KEY_PARAM] = [api_key]
    return urlencode([(k, v) for k in sorted(pairs) for v in pairs[k]])


def request_url(base_url: str, path: str, params: Params | None, api_key: str) -> str:
    raw = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise URLError(f"url.Parse: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise URLError(f"url.Parse: {raw!r} is not an absolute http(s) URL")
    if url.query:
        raise URLError(f"url.Parse: {raw!r} carries a query string; pass it as params")
    query = encode_params(params, api_key)
    return str(url.copy_with(query=query.encode("ascii")))
