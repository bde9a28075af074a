import pytest

from core.exceptions import (
    AssemblyError,
    ConfigurationError,
    ServiceError,
    StorageError,
    SynthesisError,
    ValidationError,
)
from core.http.errors import (
    GENERIC_ERROR_MESSAGE,
    client_error_body,
    error_kind,
    format_error_context,
    public_message,
    status_code_for,
)


@pytest.mark.parametrize(
    "exc,kind,status_code",
    [
        (ValidationError("bad voice", field="voice"), "validation_error", 400),
        (ConfigurationError("missing key", key="OPENAI_API_KEY"), "configuration_error", 500),
        (SynthesisError("chunk 2 failed", chunk_index=2), "synthesis_error", 500),
        (AssemblyError("merge failed", returncode=1), "assembly_error", 500),
        (StorageError("upload failed"), "storage_error", 500),
        (ServiceError("other"), "service_error", 500),
    ],
)
def test_error_kind_and_status(exc, kind, status_code):
    assert error_kind(exc) == kind
    assert status_code_for(exc) == status_code


def test_validation_message_passes_through():
    assert public_message(ValidationError("Text input is required", field="text")) == "Text input is required"


def test_internal_detail_not_exposed_to_clients():
    exc = SynthesisError(
        "Speech synthesis failed for chunk 7",
        chunk_index=7,
        provider="openai",
        original_error=RuntimeError("insufficient_quota"),
    )

    message = public_message(exc)

    assert "7" not in message
    assert "insufficient_quota" not in message
    assert client_error_body(message) == {"error": "Speech synthesis failed"}


def test_unknown_service_error_uses_generic_message():
    assert public_message(ServiceError("boom")) == GENERIC_ERROR_MESSAGE
    assert client_error_body(None) == {"error": GENERIC_ERROR_MESSAGE}


def test_format_error_context_collects_attributes():
    exc = SynthesisError("chunk 1 failed", chunk_index=1, provider="openai", original_error=ValueError("bad"))

    payload = format_error_context(exc)

    assert payload["error"] == "synthesis_error"
    assert payload["message"] == "chunk 1 failed"
    assert payload["context"] == {"provider": "openai", "chunk_index": 1, "original_error": "bad"}


def test_format_error_context_omits_empty_context():
    assert format_error_context(ServiceError("plain")) == {"error": "service_error", "message": "plain"}
