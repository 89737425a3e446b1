"""Normalization of upstream failures into the client-facing error envelope.

Upstream errors arrive in different shapes: SDK API errors that carry the
parsed response body, backend errors raised with an already-decoded payload,
and plain exceptions with nothing but a message. They are first classified
into an :class:`UpstreamFailure`, then mapped onto an :class:`ErrorEnvelope`
with a fixed precedence:

1. response payload with a nested ``error`` object
2. response payload without one
3. plain message
4. nothing usable
"""
from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any

from google.genai import errors as genai_errors

from gemini_relay.common.schema import ErrorEnvelope, ListModelsError

GENERIC_ERROR = "Error processing your request"
UNEXPECTED_DETAILS = "An unexpected server error occurred."
LIST_MODELS_ERROR = "Failed to list models"
LIST_MODELS_UNKNOWN_DETAILS = "An unknown error occurred while listing models."


class UpstreamError(Exception):
    """Raised by a generation backend when the upstream call fails.

    ``payload`` is the decoded response body when the upstream returned one.
    """

    def __init__(self, message: str | None = None, payload: Any = None) -> None:
        super().__init__(message or "")
        self.message = message
        self.payload = payload


@dataclass(frozen=True)
class UpstreamFailure:
    message: str | None = None
    payload: Any = None

    @property
    def has_payload(self) -> bool:
        return self.payload is not None

    @property
    def nested_error(self) -> Any:
        """The ``error`` object inside the payload, or None when absent or a falsy scalar."""
        if isinstance(self.payload, dict):
            nested = self.payload.get("error")
            # Containers count as present even when empty.
            if isinstance(nested, (dict, list)):
                return nested
            return nested or None
        return None


def classify(exc: BaseException) -> UpstreamFailure:
    """Extract message and response payload from a raised exception."""
    if isinstance(exc, genai_errors.APIError):
        return UpstreamFailure(message=exc.message or None, payload=exc.details)
    if isinstance(exc, UpstreamError):
        return UpstreamFailure(message=exc.message or None, payload=exc.payload)
    return UpstreamFailure(message=str(exc) or None)


def normalize_error(exc: BaseException) -> ErrorEnvelope:
    """Map an upstream exception to the generation error envelope."""
    failure = classify(exc)

    if failure.has_payload:
        nested = failure.nested_error
        if nested is not None:
            message = nested.get("message") if isinstance(nested, dict) else None
            return ErrorEnvelope(
                error=GENERIC_ERROR,
                details=str(message) if message else UNEXPECTED_DETAILS,
                fullError=nested,
            )
        return ErrorEnvelope(
            error=GENERIC_ERROR,
            details=json.dumps(failure.payload, separators=(",", ":"), default=str),
            fullError={},
        )

    if failure.message:
        return ErrorEnvelope(error=GENERIC_ERROR, details=failure.message, fullError={})

    return ErrorEnvelope(error=GENERIC_ERROR, details=UNEXPECTED_DETAILS, fullError={})


def list_models_error(exc: BaseException) -> ListModelsError:
    """Map a model-listing failure to its envelope; only the message is kept."""
    failure = classify(exc)
    return ListModelsError(
        error=LIST_MODELS_ERROR,
        details=failure.message or LIST_MODELS_UNKNOWN_DETAILS,
    )
