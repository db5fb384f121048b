from __future__ import annotations

from stream_chat import StreamChatClient, with_base_url, with_timeout

from .config import AppConfig, apply_env, normalize_base_url


def make_client(cfg: AppConfig, *, base_url_override: str | None = None) -> StreamChatClient:
    effective_cfg = apply_env(cfg)
    base_url = normalize_base_url(base_url_override or effective_cfg.base_url)
    return StreamChatClient(
        effective_cfg.api_key,
        effective_cfg.api_secret,
        with_base_url(base_url),
        with_timeout(effective_cfg.timeout_s),
    )
