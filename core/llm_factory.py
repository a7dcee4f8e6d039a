"""
LLM Factory Module

Provides cached chat model instances with purpose-specific configurations.
Translation calls may override temperature and output budget per request,
each distinct combination is cached separately.
"""

# Standard library
import logging
import os
from functools import lru_cache
from typing import Literal, Optional

# Third-party
from langchain_google_genai import ChatGoogleGenerativeAI

# Configure logging
logger = logging.getLogger(__name__)

# Purpose type for type safety
LLMPurpose = Literal["translation", "language_detection"]

# Default model for all purposes, overridable with TRANSLATION_MODEL
_DEFAULT_MODEL = "gemini-2.5-flash"

# Configuration for each purpose
_LLM_CONFIGS: dict[str, dict] = {
    "translation": {
        "temperature": 0.3,
        "max_output_tokens": 2000,
    },
    "language_detection": {
        "temperature": 0.1,
        "max_output_tokens": 10,
    },
}


def default_model() -> str:
    """Returns the configured chat model id."""
    return os.getenv("TRANSLATION_MODEL") or _DEFAULT_MODEL


@lru_cache(maxsize=16)
def get_llm(
    purpose: LLMPurpose,
    model_name: Optional[str] = None,
    temperature: Optional[float] = None,
    max_output_tokens: Optional[int] = None,
) -> ChatGoogleGenerativeAI:
    """
    Returns a cached LLM instance for a specific purpose.

    Args:
        purpose: The intended use case for the LLM.
            - "translation": For text translation
            - "language_detection": For ISO 639-1 classification
        model_name: Overrides the configured model id.
        temperature: Overrides the purpose temperature.
        max_output_tokens: Overrides the purpose output budget.

    Returns:
        Configured ChatGoogleGenerativeAI instance.

    Example:
        llm = get_llm("translation", temperature=0.4, max_output_tokens=3000)
        response = await llm.ainvoke(messages)
    """
    config = dict(_LLM_CONFIGS.get(purpose, _LLM_CONFIGS["translation"]))
    if temperature is not None:
        config["temperature"] = temperature
    if max_output_tokens is not None:
        config["max_output_tokens"] = max_output_tokens
    model = model_name or default_model()

    logger.info(f"Initializing LLM for purpose: {purpose} (model: {model}, config: {config})")

    # Failures surface immediately: no client-side retries or backoff
    return ChatGoogleGenerativeAI(
        model=model,
        max_retries=0,
        **config
    )


def clear_llm_cache() -> None:
    """
    Clears the LLM instance cache.

    Useful for testing or when configuration needs to be reloaded.
    """
    get_llm.cache_clear()
    logger.info("LLM cache cleared")
