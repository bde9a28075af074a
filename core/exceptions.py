"""Custom Exception Hierarchy for the Storytime narration backend
This module defines a typed exception hierarchy that enables precise error
handling and structured error responses across the application.

Exception Handling Flow:
    1. Pipeline stage raises typed exception
    2. FastAPI exception handler catches it (see main.py)
    3. Handler converts to a JSON ``{"error": message}`` body
    4. Client receives 400 for validation failures, 500 for everything else

Internal detail (chunk index, provider message, ffmpeg stderr) lives on the
exception attributes and is meant for logs only.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception for all service layer errors."""


class ValidationError(ServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(self.message)


class ConfigurationError(ServiceError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(self.message)


class ProviderError(ServiceError):
    """Raised when an external provider (AI API) fails."""

    def __init__(self, message: str, provider: str | None = None, original_error: Exception | None = None):
        self.message = message
        self.provider = provider
        self.original_error = original_error
        super().__init__(self.message)


class EncodingError(ServiceError):
    """Raised when text cannot be tokenized for chunking."""

    def __init__(self, message: str, original_error: Exception | None = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class SynthesisError(ProviderError):
    """Raised when speech synthesis fails for a specific chunk."""

    def __init__(
        self,
        message: str,
        chunk_index: int,
        provider: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, provider=provider, original_error=original_error)
        self.chunk_index = chunk_index


class AssemblyError(ServiceError):
    """Raised when audio segments cannot be merged or transcoded."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str | None = None):
        self.message = message
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(self.message)


class StorageError(ServiceError):
    """Raised when uploading an artifact to object storage fails."""

    def __init__(
        self,
        message: str,
        bucket: str | None = None,
        key: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.bucket = bucket
        self.key = key
        self.original_error = original_error
        super().__init__(self.message)


class UrlResolutionError(ServiceError):
    """Raised when a stored object has no resolvable public URL."""

    def __init__(self, message: str, key: str | None = None):
        self.message = message
        self.key = key
        super().__init__(self.message)


__all__ = [
    "AssemblyError",
    "ConfigurationError",
    "EncodingError",
    "ProviderError",
    "ServiceError",
    "StorageError",
    "SynthesisError",
    "UrlResolutionError",
    "ValidationError",
]
