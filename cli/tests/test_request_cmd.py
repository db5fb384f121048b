from __future__ import annotations

import json

import httpx
import pytest
import typer
from typer.testing import CliRunner

from stream_chat import StreamChatClient, with_base_url, with_http_transport
from stream_chat_cli import main
from stream_chat_cli.commands import request_cmd

SECRET = b"a-sufficiently-long-secret-for-hs256-signing"


def _install_client(monkeypatch, handler) -> list[httpx.Request]:
    seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    def _make_client(_cfg, *, base_url_override=None):
        return StreamChatClient(
            "key",
            SECRET,
            with_base_url(base_url_override or "https://chat.example.test"),
            with_http_transport(httpx.MockTransport(_handler)),
        )

    monkeypatch.setattr(request_cmd, "make_client", _make_client)
    return seen


def test_parse_params_keeps_repeated_keys() -> None:
    assert request_cmd.parse_params(["id=a", "id=b", "q=x=y"]) == {"id": ["a", "b"], "q": ["x=y"]}


def test_parse_params_rejects_missing_separator() -> None:
    with pytest.raises(typer.BadParameter):
        request_cmd.parse_params(["oops"])


def test_request_prints_json(config_dir, monkeypatch) -> None:
    seen = _install_client(monkeypatch, lambda _r: httpx.Response(200, json={"users": [], "duration": "1ms"}))

    result = CliRunner().invoke(
        main.app,
        ["request", "post", "users", "-p", "limit=10", "--data", '{"users": {}}'],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"users": [], "duration": "1ms"}
    request = seen[0]
    assert request.method == "POST"
    assert request.url.params.get_list("limit") == ["10"]
    assert request.url.params["api_key"] == "key"
    assert json.loads(request.content) == {"users": {}}


def test_request_reports_status_error(config_dir, monkeypatch) -> None:
    _install_client(monkeypatch, lambda _r: httpx.Response(404, text="not found"))

    result = CliRunner().invoke(main.app, ["request", "get", "channels/messaging/missing"])

    assert result.exit_code == 2
    assert "404" in result.output
    assert "not found" in result.output


def test_request_rejects_unknown_method(config_dir, monkeypatch) -> None:
    seen = _install_client(monkeypatch, lambda _r: httpx.Response(200, json={}))

    result = CliRunner().invoke(main.app, ["request", "fetch", "users"])

    assert result.exit_code == 2
    assert not seen


def test_request_rejects_invalid_json_body(config_dir, monkeypatch) -> None:
    seen = _install_client(monkeypatch, lambda _r: httpx.Response(200, json={}))

    result = CliRunner().invoke(main.app, ["request", "post", "users", "--data", "{nope"])

    assert result.exit_code == 2
    assert not seen
