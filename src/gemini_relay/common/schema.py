"""Pydantic models for request/response bodies."""
from __future__ import annotations
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

class GenerationRequest(BaseModel):
    prompt: str = Field(min_length=1)

class GenerationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    generatedText: str

class ModelDescriptor(BaseModel):
    """Reduced view of an upstream model record; unknown fields are dropped."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str | None = None
    displayName: str | None = None
    supportedGenerationMethods: list[str] | None = None
    inputTokenLimit: int | None = None
    outputTokenLimit: int | None = None
    version: str | None = None

class ErrorEnvelope(BaseModel):
    error: str
    details: str
    fullError: Any = Field(default_factory=dict)

class ListModelsError(BaseModel):
    error: str
    details: str

class MessageResponse(BaseModel):
    error: str
