from __future__ import annotations

import os

import typer

from .. import console
from ..config import config_path, default_config, load_config, normalize_base_url, save_config
from ..formatting import mask_secret

app = typer.Typer(help="Manage local CLI settings (~/.config/stream-chat/config.toml).")


@app.command("init")
def init_settings(
        force: bool = typer.Option(False, "--force", help="Overwrite existing config."),
        api_key: str = typer.Option(..., "--api-key", prompt="API key", help="Application API key."),
        api_secret: str = typer.Option(
            ..., "--api-secret", prompt="API secret", hide_input=True, help="Application API secret."
        ),
        base_url: str | None = typer.Option(None, "--base-url", help="API base URL (defaults to the US East region)."),
):
    path = config_path()
    if os.path.exists(path) and not force:
        console.info(f"Config already exists: {path}")
        console.info("Use --force to overwrite.")
        return

    if not api_key.strip() or not api_secret:
        console.err("API key and secret cannot be empty.")
        raise typer.Exit(code=2)

    cfg = default_config()
    cfg.api_key = api_key.strip()
    cfg.api_secret = api_secret
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url)
        if not cfg.base_url:
            console.err("Base URL cannot be empty.")
            raise typer.Exit(code=2)
    saved = save_config(cfg)
    console.ok(f"Config written: {saved}")


@app.command("show")
def show_settings():
    cfg = load_config()
    console.console.print(
        f"base_url={cfg.base_url} api_key={cfg.api_key or '(empty)'} "
        f"api_secret={mask_secret(cfg.api_secret)} timeout_s={cfg.timeout_s}",
        markup=False,
    )


@app.command("set")
def set_setting(
        base_url: str | None = typer.Option(None, "--base-url", help="Set API base URL."),
        api_key: str | None = typer.Option(None, "--api-key", help="Set API key."),
        api_secret: str | None = typer.Option(None, "--api-secret", help="Set API secret."),
        timeout: float | None = typer.Option(None, "--timeout", min=0.1, help="Set request timeout in seconds."),
):
    cfg = load_config()
    if base_url is not None:
        cfg.base_url = normalize_base_url(base_url) or cfg.base_url
    if api_key is not None:
        cfg.api_key = api_key.strip()
    if api_secret is not None:
        cfg.api_secret = api_secret
    if timeout is not None:
        cfg.timeout_s = timeout
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
