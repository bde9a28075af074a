"""Utilities for formatting HTTP error bodies and log context."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import status

from core.exceptions import (
    AssemblyError,
    ConfigurationError,
    EncodingError,
    ProviderError,
    ServiceError,
    StorageError,
    SynthesisError,
    UrlResolutionError,
    ValidationError,
)

GENERIC_ERROR_MESSAGE = "Internal server error"

_ERROR_KINDS: tuple[tuple[type[ServiceError], str], ...] = (
    (ValidationError, "validation_error"),
    (ConfigurationError, "configuration_error"),
    (EncodingError, "encoding_error"),
    (SynthesisError, "synthesis_error"),
    (ProviderError, "provider_error"),
    (AssemblyError, "assembly_error"),
    (StorageError, "storage_error"),
    (UrlResolutionError, "url_resolution_error"),
)


def error_kind(exc: ServiceError) -> str:
    """Return the stable identifier logged for ``exc``."""

    for exc_type, kind in _ERROR_KINDS:
        if isinstance(exc, exc_type):
            return kind
    return "service_error"


_PUBLIC_MESSAGES: Dict[str, str] = {
    "configuration_error": "Service is not configured",
    "encoding_error": "Failed to prepare text for narration",
    "synthesis_error": "Speech synthesis failed",
    "provider_error": "Speech synthesis failed",
    "assembly_error": "Failed to assemble narration audio",
    "storage_error": "Failed to store narration audio",
    "url_resolution_error": "Failed to resolve narration audio URL",
}


def public_message(exc: ServiceError) -> str:
    """Return the message safe to show HTTP clients for ``exc``.

    Validation messages describe the caller's input and pass through as is.
    Other failures map to a fixed message per kind; chunk indices and
    provider detail stay in the logs.
    """

    if isinstance(exc, ValidationError):
        return str(exc)
    return _PUBLIC_MESSAGES.get(error_kind(exc), GENERIC_ERROR_MESSAGE)


def status_code_for(exc: ServiceError) -> int:
    """Validation failures are the client's fault; everything else is ours."""

    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def client_error_body(message: str | None) -> Dict[str, str]:
    """Return the JSON body sent to HTTP clients."""

    return {"error": message or GENERIC_ERROR_MESSAGE}


def format_error_context(exc: ServiceError) -> Dict[str, Any]:
    """Collect the internal detail of ``exc`` for structured logging."""

    context: Dict[str, Any] = {
        "field": getattr(exc, "field", None),
        "key": getattr(exc, "key", None),
        "bucket": getattr(exc, "bucket", None),
        "provider": getattr(exc, "provider", None),
        "chunk_index": getattr(exc, "chunk_index", None),
        "returncode": getattr(exc, "returncode", None),
        "stderr": getattr(exc, "stderr", None),
    }
    original = getattr(exc, "original_error", None)
    if original is not None:
        context["original_error"] = str(original)

    payload: Dict[str, Any] = {"error": error_kind(exc), "message": str(exc)}
    details = {key: value for key, value in context.items() if value is not None}
    if details:
        payload["context"] = details
    return payload


__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "client_error_body",
    "error_kind",
    "format_error_context",
    "public_message",
    "status_code_for",
]
