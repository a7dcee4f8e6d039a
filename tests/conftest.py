"""
Pytest Configuration and Shared Fixtures

Provides common fixtures for translation, accounts and API tests.
"""

# Standard library
import os
import sys
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock, patch

# Third-party
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Never reach real providers from the test suite
os.environ["TEST_MODE"] = "true"
os.environ.pop("DEV_MODE", None)

TEST_USER_ID = "test-user-123"


# ============================================================================
# Fake provider errors
# ============================================================================

class FakeProviderError(Exception):
    """Provider exception carrying an HTTP-like status code."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


@pytest.fixture
def provider_error():
    """Exception class simulating provider SDK failures."""
    return FakeProviderError


# ============================================================================
# Mock Fixtures
# ============================================================================

def _echo(prefix: str) -> Callable[[list], Any]:
    def respond(messages: list) -> MagicMock:
        return MagicMock(content=f"  {prefix}{messages[-1].content}  ")
    return respond


@pytest.fixture
def mock_llm():
    """Mock chat model that echoes the user message with a marker prefix."""
    mock = MagicMock()
    mock.ainvoke = AsyncMock(side_effect=_echo("T:"))
    return mock


@pytest.fixture
def mock_detector():
    """Mock chat model used for language detection."""
    mock = MagicMock()
    mock.ainvoke = AsyncMock(return_value=MagicMock(content=" FR\n"))
    return mock


@pytest.fixture
def patch_processor_llm(mock_llm, mock_detector):
    """Routes processor LLM lookups to the translation/detection mocks."""

    def fake_get_llm(purpose, **kwargs):
        return mock_detector if purpose == "language_detection" else mock_llm

    with patch("translation.processor.get_llm", side_effect=fake_get_llm) as mock_get:
        yield mock_get


@pytest.fixture
def make_paragraph():
    """Builds a paragraph of exactly ``size`` characters."""

    def build(size: int, letter: str = "a") -> str:
        return letter * size

    return build


@pytest.fixture
def long_text(make_paragraph):
    """Text well above the single-call threshold (four 2400-char paragraphs)."""
    return "\n\n".join(make_paragraph(2400, letter) for letter in "abcd")


@pytest.fixture
def translation_row():
    """Factory for translation rows as returned by Supabase."""

    def build(**overrides) -> dict:
        now = datetime.now(timezone.utc).isoformat()
        row = {
            "id": "3f1c1a52-6a0e-4b5e-9a7c-0d2f4b8e1c11",
            "user_id": TEST_USER_ID,
            "source_text": "Hello",
            "translated_text": "Hola",
            "source_lang": "en",
            "target_lang": "es",
            "options": {"tone": "standard", "style": "standard", "preserve_formatting": True},
            "is_favorite": False,
            "created_at": now,
            "updated_at": now,
        }
        row.update(overrides)
        return row

    return build


@pytest.fixture
def profile_row():
    """Profile row of the test user."""
    return {
        "id": TEST_USER_ID,
        "name": "Ada",
        "email": "ada@example.com",
        "preferences": {
            "default_source_language": "en",
            "default_target_language": "es",
            "default_translation_options": {
                "tone": "standard",
                "style": "standard",
                "preserve_formatting": True,
            },
        },
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }


# ============================================================================
# App client helpers
# ============================================================================

@contextmanager
def build_client(*, user_id: str | None = TEST_USER_ID, user: dict | None = None):
    """Builds a TestClient with optional auth overrides and no Supabase."""
    from fastapi.testclient import TestClient

    from core.auth import get_current_user, get_current_user_id
    from main import app

    with patch("supabase_client.init_supabase", return_value=None):
        if user_id is not None:
            app.dependency_overrides[get_current_user_id] = lambda: user_id
        if user is not None:
            app.dependency_overrides[get_current_user] = lambda: user
        try:
            with TestClient(app) as client:
                yield client
        finally:
            app.dependency_overrides = {}
