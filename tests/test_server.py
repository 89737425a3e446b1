from __future__ import annotations

from typing import Any

import pytest

import gemini_relay.relay.server as server_mod
from gemini_relay.common.config import ServerSettings


def test_require_api_key_exits_without_key() -> None:
    settings = ServerSettings(gemini_api_key=None, _env_file=None)
    with pytest.raises(SystemExit) as exc_info:
        server_mod.require_api_key(settings)
    assert exc_info.value.code == 1


def test_main_exits_before_serving(monkeypatch) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setattr(server_mod, "ServerSettings", lambda: ServerSettings(_env_file=None))
    calls: list[Any] = []
    monkeypatch.setattr(server_mod.uvicorn, "run", lambda *a, **kw: calls.append((a, kw)))
    with pytest.raises(SystemExit):
        server_mod.main([])
    assert calls == []


def test_main_runs_uvicorn_with_overrides(monkeypatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setattr(server_mod, "ServerSettings", lambda: ServerSettings(_env_file=None))
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(server_mod.uvicorn, "run", lambda app, **kw: calls.append(kw))
    server_mod.main(["--port", "5050"])
    assert calls[0]["port"] == 5050
    assert calls[0]["host"] == "0.0.0.0"


def test_server_settings_open_cors() -> None:
    settings = ServerSettings(_env_file=None)
    assert settings.cors_allow_origins_list == ["*"]
    assert not settings.models_allowed_origin
