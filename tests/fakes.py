from __future__ import annotations

from typing import Any


class FakeBackend:
    """In-memory stand-in for the Gemini backend that counts calls."""

    def __init__(
        self,
        text: str = "Hello test",
        records: list[dict[str, Any]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.text = text
        self.records = records or []
        self.error = error
        self.generate_calls: list[str] = []
        self.list_calls = 0

    async def generate_text(self, prompt: str) -> str:
        self.generate_calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text

    async def list_models(self) -> list[dict[str, Any]]:
        self.list_calls += 1
        if self.error is not None:
            raise self.error
        return self.records
