from __future__ import annotations

import asyncio

from gemini_relay.relay.handlers import (
    PROMPT_REQUIRED,
    handle_generate,
    handle_models,
    parse_prompt,
    project_models,
)

from fakes import FakeBackend


def test_parse_prompt() -> None:
    assert parse_prompt({"prompt": "hello"}) == "hello"
    assert parse_prompt({"prompt": "  "}) == "  "
    assert parse_prompt({"prompt": ""}) is None
    assert parse_prompt({"prompt": 5}) is None
    assert parse_prompt({}) is None
    assert parse_prompt(["prompt"]) is None
    assert parse_prompt(None) is None


def test_handle_generate_success() -> None:
    backend = FakeBackend(text="T")
    result = asyncio.run(handle_generate("post", {"prompt": "p"}, backend))
    assert result.status_code == 200
    assert result.body == {"generatedText": "T"}


def test_handle_generate_rejects_before_backend() -> None:
    backend = FakeBackend()
    result = asyncio.run(handle_generate("POST", {"prompt": None}, backend))
    assert result.status_code == 400
    assert result.body == {"error": PROMPT_REQUIRED}
    assert backend.generate_calls == []


def test_handle_models_options_skips_listing() -> None:
    backend = FakeBackend()
    result = asyncio.run(handle_models("OPTIONS", backend))
    assert result.status_code == 200
    assert result.body is None
    assert backend.list_calls == 0


def test_project_models_fills_missing_fields() -> None:
    out = project_models([{"name": "models/x", "other": 1}])
    assert out == [
        {
            "name": "models/x",
            "displayName": None,
            "supportedGenerationMethods": None,
            "inputTokenLimit": None,
            "outputTokenLimit": None,
            "version": None,
        }
    ]


def test_handle_models_bad_record_is_server_error() -> None:
    backend = FakeBackend(records=[{"name": "m", "inputTokenLimit": "lots"}])
    result = asyncio.run(handle_models("GET", backend))
    assert result.status_code == 500
    assert result.body["error"] == "Failed to list models"
