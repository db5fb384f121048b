from __future__ import annotations

import json
from typing import Any

import typer

from stream_chat import ApiError, StreamChatError
from stream_chat.errors_utils import api_error_message

from .. import console
from ..config import load_config
from ..http import make_client

METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


def parse_params(raw: list[str]) -> dict[str, list[str]]:
    params: dict[str, list[str]] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint="--param")
        params.setdefault(key, []).append(value)
    return params


def request(
        method: str = typer.Argument(..., help="HTTP method."),
        path: str = typer.Argument(..., help="Path relative to the base URL, e.g. channels."),
        param: list[str] | None = typer.Option(None, "-p", "--param", help="Query parameter key=value (repeatable)."),
        data: str | None = typer.Option(None, "--data", "-d", help="JSON request body."),
        base_url: str | None = typer.Option(None, "--base-url", help="Override base URL."),
):
    """Send an authenticated request and print the JSON response."""
    method = method.upper()
    if method not in METHODS:
        raise typer.BadParameter(f"must be one of {', '.join(METHODS)}", param_hint="METHOD")
    params = parse_params(param or [])
    body: Any = None
    if data is not None:
        try:
            body = json.loads(data)
        except ValueError as e:
            raise typer.BadParameter(f"invalid JSON: {e}", param_hint="--data")

    try:
        client = make_client(load_config(), base_url_override=base_url)
    except StreamChatError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    try:
        result = client.make_request(method, path, params, body, dict)
    except ApiError as e:
        console.err(f"HTTP {e.status_code} {e.method} {path}: {api_error_message(e)}")
        raise typer.Exit(code=2)
    except StreamChatError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    finally:
        client.close()
    console.print_json(result)
