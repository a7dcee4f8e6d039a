"""Translation error taxonomy."""

from __future__ import annotations

from typing import Any

from core.errors import AppError, ErrorCode


class TranslationError(AppError):
    """Base class for failures raised by the translation processor."""

    code = ErrorCode.TRANSLATION_FAILED
    status_code = 500
    default_message = "Translation failed. Please try again."

    def __init__(
        self, message: str | None = None, *, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            code=type(self).code,
            message=message or type(self).default_message,
            status_code=type(self).status_code,
            details=details,
        )


class TranslationValidationError(TranslationError):
    """Bad or missing input, raised before any external call."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400
    default_message = "Invalid translation request"


class LanguageDetectionError(TranslationError):
    code = ErrorCode.DETECTION_FAILED
    status_code = 400
    default_message = (
        "Language detection failed. Please specify the source language manually."
    )


class RateLimitError(TranslationError):
    code = ErrorCode.RATE_LIMITED
    status_code = 429
    default_message = "Rate limit exceeded. Please try again later."


class LLMAuthError(TranslationError):
    code = ErrorCode.LLM_AUTH_ERROR
    status_code = 502
    default_message = "Authentication error. Please check your API key."


class ServiceUnavailableError(TranslationError):
    code = ErrorCode.SERVICE_UNAVAILABLE
    status_code = 503
    default_message = "Translation service error. Please try again later."


class GenericTranslationError(TranslationError):
    """Unclassified external failure."""


def extract_status_code(exc: BaseException) -> int | None:
    """
    Reads an HTTP-like status from a provider exception.

    Looks at ``code``, ``status_code`` and ``response.status_code``, then
    walks ``__cause__``/``__context__`` for wrapped SDK errors.
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        for candidate in (
            getattr(current, "status_code", None),
            getattr(current, "code", None),
            getattr(getattr(current, "response", None), "status_code", None),
        ):
            if isinstance(candidate, int) and 100 <= candidate <= 599:
                return int(candidate)
        current = current.__cause__ or current.__context__
    return None


def classify_llm_error(exc: BaseException) -> TranslationError:
    """Maps a provider exception to the user-facing error category."""
    status = extract_status_code(exc)
    details = {"status": status} if status is not None else None
    if status == 429:
        return RateLimitError(details=details)
    if status in (401, 403):
        return LLMAuthError(details=details)
    if status is not None and status >= 500:
        return ServiceUnavailableError(details=details)
    return GenericTranslationError(details=details)
