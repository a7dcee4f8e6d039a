"""Tests for provider error classification."""

from types import SimpleNamespace

from core.errors import ErrorCode
from translation.errors import (
    GenericTranslationError,
    LanguageDetectionError,
    LLMAuthError,
    RateLimitError,
    ServiceUnavailableError,
    TranslationValidationError,
    classify_llm_error,
    extract_status_code,
)


class _ResponseError(Exception):
    def __init__(self, status: int) -> None:
        super().__init__(f"HTTP {status}")
        self.response = SimpleNamespace(status_code=status)


class _StatusError(Exception):
    def __init__(self, status: int) -> None:
        super().__init__(f"status {status}")
        self.status_code = status


def test_status_read_from_code(provider_error) -> None:
    assert extract_status_code(provider_error("limited", 429)) == 429


def test_status_read_from_status_code_and_response() -> None:
    assert extract_status_code(_StatusError(503)) == 503
    assert extract_status_code(_ResponseError(401)) == 401


def test_status_read_from_wrapped_cause() -> None:
    try:
        try:
            raise _StatusError(429)
        except _StatusError as inner:
            raise RuntimeError("wrapper") from inner
    except RuntimeError as outer:
        assert extract_status_code(outer) == 429


def test_non_http_codes_are_ignored(provider_error) -> None:
    assert extract_status_code(provider_error("grpc", 8)) is None
    assert extract_status_code(ValueError("plain")) is None


def test_classification_categories(provider_error) -> None:
    assert isinstance(classify_llm_error(provider_error("x", 429)), RateLimitError)
    assert isinstance(classify_llm_error(provider_error("x", 401)), LLMAuthError)
    assert isinstance(classify_llm_error(provider_error("x", 403)), LLMAuthError)
    assert isinstance(classify_llm_error(_ResponseError(502)), ServiceUnavailableError)
    assert isinstance(classify_llm_error(provider_error("x", 404)), GenericTranslationError)
    assert isinstance(classify_llm_error(RuntimeError("boom")), GenericTranslationError)


def test_error_categories_have_distinct_statuses() -> None:
    cases = [
        (TranslationValidationError(), 400, ErrorCode.VALIDATION_ERROR),
        (LanguageDetectionError(), 400, ErrorCode.DETECTION_FAILED),
        (RateLimitError(), 429, ErrorCode.RATE_LIMITED),
        (LLMAuthError(), 502, ErrorCode.LLM_AUTH_ERROR),
        (ServiceUnavailableError(), 503, ErrorCode.SERVICE_UNAVAILABLE),
        (GenericTranslationError(), 500, ErrorCode.TRANSLATION_FAILED),
    ]
    for error, status, code in cases:
        assert error.status_code == status
        assert error.code == code
        assert error.message


def test_custom_message_overrides_default() -> None:
    error = TranslationValidationError("Target language is required")

    assert error.message == "Target language is required"
    assert str(error) == "Target language is required"
