"""FastAPI adapter around the relay handlers.

Endpoints:
- GET /health
- POST /generate  { "prompt": "..." }
- GET|OPTIONS /models
"""
from __future__ import annotations
import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers

from gemini_relay.common.config import Settings
from gemini_relay.relay.backend import GeminiBackend, GenerationBackend
from gemini_relay.relay.handlers import HandlerResult, handle_generate, handle_models

LOGGER = logging.getLogger("gemini_relay.app")

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """CORS middleware whose accepted preflight replies have an empty body."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response
        headers = {
            k: v for k, v in response.headers.items()
            if k not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)


def _to_response(result: HandlerResult, headers: dict[str, str] | None = None) -> Response:
    if result.body is None:
        return Response(status_code=result.status_code, headers=headers)
    return JSONResponse(result.body, status_code=result.status_code, headers=headers)


async def _read_json(request: Request) -> object:
    """Decode the request body; anything that is not JSON reads as None."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        LOGGER.debug("Request body is not valid JSON")
        return None


def _models_cors_headers(origin: str | None) -> dict[str, str] | None:
    if not origin:
        return None
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": "GET, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


def create_app(settings: Settings, backend: GenerationBackend | None = None) -> FastAPI:
    """Build the relay app.

    Args:
        settings: Loaded configuration.
        backend: Generation backend; defaults to a Gemini backend built from settings.
    """
    if backend is None:
        backend = GeminiBackend(settings.gemini_api_key, settings.gemini_model_id)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        LOGGER.info("Gemini API key loaded: %s", "Yes" if settings.has_api_key else "No")
        LOGGER.info("Generation model: %s", settings.gemini_model_id)
        yield

    app = FastAPI(title="Gemini Relay", lifespan=lifespan)
    app.state.backend = backend

    origins = settings.cors_allow_origins_list
    if origins:
        app.add_middleware(
            EmptyPreflightCORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    models_headers = _models_cors_headers(settings.models_allowed_origin)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "model": settings.gemini_model_id}

    @app.api_route("/generate", methods=ALL_METHODS)
    async def generate(request: Request) -> Response:
        body = await _read_json(request) if request.method == "POST" else None
        result = await handle_generate(request.method, body, request.app.state.backend)
        return _to_response(result)

    @app.api_route("/models", methods=ALL_METHODS)
    async def models(request: Request) -> Response:
        result = await handle_models(request.method, request.app.state.backend)
        return _to_response(result, models_headers)

    return app
