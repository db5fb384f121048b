from __future__ import annotations

import json

from .errors import ApiError


def parse_api_error_detail(error: ApiError) -> dict | None:
    if not error.body:
        return None
    try:
        data = json.loads(error.body)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def api_error_message(error: ApiError) -> str:
    detail = parse_api_error_detail(error)
    if detail and isinstance(detail.get("message"), str):
        return detail["message"]
    return error.body or error.reason
