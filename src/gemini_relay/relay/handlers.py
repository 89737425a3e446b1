"""Transport-independent handlers for the two relay operations.

Both deployment forms call these; they only differ in how the resulting
:class:`HandlerResult` is written to the wire.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from gemini_relay.common.errors import list_models_error, normalize_error
from gemini_relay.common.schema import (
    GenerationRequest,
    GenerationResult,
    MessageResponse,
    ModelDescriptor,
)
from gemini_relay.relay.backend import GenerationBackend

LOGGER = logging.getLogger("gemini_relay.handlers")

PROMPT_REQUIRED = "Prompt is required in the request body."
METHOD_NOT_ALLOWED = "Method not allowed"


@dataclass(frozen=True)
class HandlerResult:
    status_code: int
    # None means an empty response body.
    body: Any = None


def _method_not_allowed() -> HandlerResult:
    return HandlerResult(405, MessageResponse(error=METHOD_NOT_ALLOWED).model_dump())


def parse_prompt(body: Any) -> str | None:
    """Return the prompt from a decoded JSON body, or None if it is unusable."""
    if not isinstance(body, dict):
        return None
    try:
        return GenerationRequest.model_validate(body).prompt
    except ValidationError:
        return None


async def handle_generate(method: str, body: Any, backend: GenerationBackend) -> HandlerResult:
    if method.upper() != "POST":
        return _method_not_allowed()

    prompt = parse_prompt(body)
    if prompt is None:
        return HandlerResult(400, MessageResponse(error=PROMPT_REQUIRED).model_dump())

    try:
        text = await backend.generate_text(prompt)
    except Exception as e:
        LOGGER.error("Error calling Gemini API: %s", e)
        return HandlerResult(500, normalize_error(e).model_dump())

    return HandlerResult(200, GenerationResult(generatedText=text).model_dump())


def project_models(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep only the descriptor fields of each record, in upstream order."""
    return [ModelDescriptor.model_validate(r).model_dump() for r in records]


async def handle_models(method: str, backend: GenerationBackend) -> HandlerResult:
    method = method.upper()
    if method == "OPTIONS":
        return HandlerResult(200)
    if method != "GET":
        return _method_not_allowed()

    try:
        records = await backend.list_models()
        descriptors = project_models(records)
    except Exception as e:
        LOGGER.error("Error listing models: %s", e)
        return HandlerResult(500, list_models_error(e).model_dump())

    return HandlerResult(200, descriptors)
