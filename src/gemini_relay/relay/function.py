"""Per-invocation entry point for serverless hosts.

Exposes ``app`` for platforms that import an ASGI application per request.
The credential is not checked here; a missing key fails each request with
the normal upstream error envelope.
"""
from __future__ import annotations

from fastapi import FastAPI

from gemini_relay.common.config import FunctionSettings
from gemini_relay.common.logging_setup import setup_logging
from gemini_relay.relay.backend import GenerationBackend
from gemini_relay.relay.fastapi_app import create_app

def create_function_app(backend: GenerationBackend | None = None) -> FastAPI:
    settings = FunctionSettings()
    setup_logging(settings.log_level)
    return create_app(settings, backend)

app = create_function_app()
