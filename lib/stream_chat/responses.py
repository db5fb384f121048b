from __future__ import annotations

import json
import time
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx

from .errors import ApiError, AuthError, DecodeError, NetworkError, RequestTimeout

T = TypeVar("T")

# the service reports failures with any status from 399 up
ERROR_STATUS = 399


def read_body(response: httpx.Response, deadline: float | None = None) -> bytes:
    """Read the whole body, raising :class:`RequestTimeout` once ``deadline`` has passed."""
    chunks: list[bytes] = []
    try:
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if deadline is not None and time.monotonic() > deadline:
                raise RequestTimeout("timed out reading response body")
    except httpx.TimeoutException as e:
        raise RequestTimeout(str(e) or "timed out reading response body") from e
    except (httpx.TransportError, httpx.StreamError) as e:
        raise NetworkError(str(e)) from e
    return b"".join(chunks)


def _read_error_body(response: httpx.Response, deadline: float | None) -> str:
    try:
        body = read_body(response, deadline)
    except NetworkError:
        return ""
    return body.decode(response.encoding or "utf-8", errors="replace")


def _decode(data: Any, result_type: type[T]) -> T:
    from_dict = getattr(result_type, "from_dict", None)
    try:
        if from_dict is not None:
            return from_dict(data)
        if isinstance(data, Mapping) and result_type is not dict:
            return result_type(**data)
        return result_type(data)
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"cannot decode response into {result_type.__name__}: {e}") from e


def parse_response(
    response: httpx.Response,
    result_type: type[T] | None = None,
    deadline: float | None = None,
) -> T | None:
    """
    Turn ``response`` into a decoded value or raise.

    Statuses from 399 up raise :class:`ApiError` carrying the method, URL, status
    and raw body; an unreadable body is reported as empty. On success the body is
    decoded into ``result_type`` when one is given: ``result_type.from_dict(data)``
    if it has one, ``result_type(**data)`` for a JSON object, otherwise
    ``result_type(data)``. Without ``result_type`` ``None`` is returned. Body reads
    stop at ``deadline`` (a ``time.monotonic()`` value). The response is closed
    either way.
    """
    try:
        if response.status_code >= ERROR_STATUS:
            request = response.request
            error_cls = AuthError if response.status_code in (401, 403) else ApiError
            raise error_cls(
                request.method,
                str(request.url),
                response.status_code,
                response.reason_phrase,
                _read_error_body(response, deadline),
            )

        if result_type is None:
            return None

        body = read_body(response, deadline)
        try:
            data = json.loads(body)
        except ValueError as e:
            raise DecodeError(f"invalid JSON response: {e}") from e
        return _decode(data, result_type)
    finally:
        response.close()
