"""Generation backends: the upstream capability behind both relays."""
from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Protocol

from google import genai

from gemini_relay.common.errors import UpstreamError

LOGGER = logging.getLogger("gemini_relay.backend")

class GenerationBackend(Protocol):
    async def generate_text(self, prompt: str) -> str: ...

    async def list_models(self) -> list[dict[str, Any]]: ...


def _model_record(model: Any) -> dict[str, Any]:
    """Flatten an SDK ``Model`` into the record keys the catalog exposes."""
    return {
        "name": model.name,
        "displayName": model.display_name,
        "supportedGenerationMethods": model.supported_actions,
        "inputTokenLimit": model.input_token_limit,
        "outputTokenLimit": model.output_token_limit,
        "version": model.version,
    }


def _reason(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _no_text_message(response: Any) -> str:
    """Explain why a generation response carries no text."""
    feedback = response.prompt_feedback
    if feedback is not None and feedback.block_reason:
        return f"Text not available. Response was blocked due to {_reason(feedback.block_reason)}"
    if response.candidates:
        finish_reason = response.candidates[0].finish_reason
        if finish_reason:
            return f"Text not available. Candidate finished with {_reason(finish_reason)}"
    return "Text not available. Response contained no text."


class GeminiBackend:
    """Backend built on the google-genai SDK.

    The SDK client is created on first use, so a missing API key surfaces as a
    failed request rather than an import-time crash.
    """

    def __init__(self, api_key: str | None, model_id: str = "gemini-2.5-flash") -> None:
        self._api_key = api_key
        self.model_id = model_id
        self._client: genai.Client | None = None

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate_text(self, prompt: str) -> str:
        LOGGER.debug("generate_content model=%s prompt_chars=%d", self.model_id, len(prompt))
        response = await self.client.aio.models.generate_content(
            model=self.model_id,
            contents=prompt,
        )
        if response.text is None:
            raise UpstreamError(_no_text_message(response))
        return response.text

    async def list_models(self) -> list[dict[str, Any]]:
        records = []
        async for model in await self.client.aio.models.list():
            records.append(_model_record(model))
        LOGGER.debug("list_models returned %d models", len(records))
        return records
