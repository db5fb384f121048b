from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from stream_chat.client import ENV_API_KEY, ENV_API_SECRET, ENV_HOST
from stream_chat.config_types import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S

APP_NAME = "stream-chat"
CONFIG_FILENAME = "config.toml"


@dataclass
class AppConfig:
    base_url: str = DEFAULT_BASE_URL
    api_key: str = ""
    api_secret: str = ""
    timeout_s: float = DEFAULT_TIMEOUT_S


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig()


def normalize_base_url(raw: str | None) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        return f"http://{value}"
    return f"https://{value}"


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "base_url": cfg.base_url,
        "api_key": cfg.api_key,
        "api_secret": cfg.api_secret,
        "timeout_s": float(cfg.timeout_s),
    }


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    base_url = normalize_base_url(str(data.get("base_url") or ""))
    if base_url:
        cfg.base_url = base_url
    cfg.api_key = str(data.get("api_key") or "").strip()
    cfg.api_secret = str(data.get("api_secret") or "")
    timeout = data.get("timeout_s")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0:
        cfg.timeout_s = float(timeout)
    return cfg


def apply_env(cfg: AppConfig) -> AppConfig:
    """Environment variables take precedence over the config file."""
    api_key = os.getenv(ENV_API_KEY, "").strip()
    api_secret = os.getenv(ENV_API_SECRET, "")
    host = normalize_base_url(os.getenv(ENV_HOST))
    return AppConfig(
        base_url=host or cfg.base_url,
        api_key=api_key or cfg.api_key,
        api_secret=api_secret or cfg.api_secret,
        timeout_s=cfg.timeout_s,
    )


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return default_config()
    return from_toml(data)


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
