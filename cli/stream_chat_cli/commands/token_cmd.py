from __future__ import annotations

from datetime import datetime, timedelta, timezone

import typer

from stream_chat import StreamChatError
from stream_chat.tokens import decode_token

from .. import console
from ..config import apply_env, load_config
from ..formatting import format_timestamp
from ..http import make_client

app = typer.Typer(help="Create and inspect auth tokens.")


@app.command("create")
def create_token(
        user_id: str = typer.Argument(..., help="User ID the token is issued for."),
        expires_in: int | None = typer.Option(None, "--expires-in", min=1, help="Token lifetime in seconds."),
):
    expire = datetime.now(timezone.utc) + timedelta(seconds=expires_in) if expires_in else None
    try:
        with make_client(load_config()) as client:
            token = client.create_token(user_id, expire)
    except StreamChatError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    console.console.print(token.decode("ascii"), markup=False, soft_wrap=True)


@app.command("server")
def server_token():
    try:
        with make_client(load_config()) as client:
            token = client.auth_token
    except StreamChatError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    console.console.print(token, markup=False, soft_wrap=True)


@app.command("decode")
def decode(
        token: str = typer.Argument(..., help="Token to verify with the configured secret."),
):
    cfg = apply_env(load_config())
    if not cfg.api_secret:
        console.err("API secret is empty")
        raise typer.Exit(code=2)
    try:
        claims = decode_token(token.strip(), cfg.api_secret.encode("utf-8"))
    except StreamChatError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    console.print_json(claims)
    if "exp" in claims:
        console.info(f"expires at {format_timestamp(claims['exp'])}")
