"""
Unit Tests for LLM Factory Overrides

Tests model, temperature and output budget overrides in get_llm.
"""

import pytest

from core.llm_factory import clear_llm_cache, default_model, get_llm


@pytest.fixture(autouse=True)
def fake_api_key(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    monkeypatch.delenv("TRANSLATION_MODEL", raising=False)
    clear_llm_cache()
    yield
    clear_llm_cache()


def test_get_llm_default_model():
    """Tests that get_llm uses the default model when no override is provided."""
    assert default_model() == "gemini-2.5-flash"

    llm = get_llm("translation")

    assert llm.model.endswith("gemini-2.5-flash")
    assert llm.temperature == 0.3
    assert llm.max_output_tokens == 2000


def test_get_llm_model_from_env(monkeypatch):
    monkeypatch.setenv("TRANSLATION_MODEL", "gemini-2.0-flash")

    assert get_llm("translation").model.endswith("gemini-2.0-flash")


def test_get_llm_override_model():
    """Tests that get_llm returns the overridden model when provided."""
    llm = get_llm("translation", model_name="gemini-2.0-flash-lite")

    assert llm.model.endswith("gemini-2.0-flash-lite")


def test_get_llm_parameter_overrides():
    llm = get_llm("translation", temperature=0.4, max_output_tokens=3000)

    assert llm.temperature == 0.4
    assert llm.max_output_tokens == 3000


def test_language_detection_config():
    llm = get_llm("language_detection")

    assert llm.temperature == 0.1
    assert llm.max_output_tokens == 10


def test_instances_cached_per_parameters():
    assert get_llm("translation", temperature=0.2) is get_llm("translation", temperature=0.2)
    assert get_llm("translation", temperature=0.2) is not get_llm("translation", temperature=0.4)


@pytest.mark.parametrize("purpose", ["translation", "language_detection"])
def test_client_retries_disabled(purpose):
    """Provider errors must reach the caller on the first failure."""
    assert get_llm(purpose).max_retries == 0
    assert get_llm(purpose, temperature=0.3, max_output_tokens=2000).max_retries == 0
