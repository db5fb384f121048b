from __future__ import annotations

import pytest

from stream_chat_cli import config


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    def _config_dir(_: str) -> str:
        return str(tmp_path)

    monkeypatch.setattr(config, "user_config_dir", _config_dir)
    for name in ("STREAM_API_KEY", "STREAM_API_SECRET", "STREAM_HOST"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path
