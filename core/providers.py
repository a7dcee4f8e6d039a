"""
Provider registry for the chat model dependency.

This module centralizes LLM provider selection so tests can run without
touching real external APIs.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from core.llm_factory import LLMPurpose, get_llm as get_real_llm

logger = logging.getLogger(__name__)


def _is_true(name: str, default: str = "false") -> bool:
    """Parse boolean-like env vars."""
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def should_use_fake_providers() -> bool:
    """
    Decide whether the chat model should be faked.

    TEST_MODE=true always fakes (test safety); USE_FAKE_PROVIDERS=true fakes
    for local runs without a Google API key.
    """
    return _is_true("TEST_MODE") or _is_true("USE_FAKE_PROVIDERS")


@runtime_checkable
class LLMProvider(Protocol):
    """LLM provider interface."""

    def get_llm(
        self,
        purpose: LLMPurpose,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> Any:
        """Return an LLM client for the requested purpose."""


class RealLLMProvider:
    """Production LLM provider backed by core.llm_factory."""

    def get_llm(
        self,
        purpose: LLMPurpose,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> Any:
        return get_real_llm(
            purpose,
            model_name=model_name,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )


class _FakeLLMResponse:
    """Simple response object compatible with call sites expecting `.content`."""

    def __init__(self, content: str) -> None:
        self.content = content
        self.usage_metadata = {"total_tokens": 0}


class _FakeLLM:
    """Minimal async LLM used in tests/fake mode."""

    def __init__(self, purpose: LLMPurpose) -> None:
        self.model = f"fake-{purpose}"
        self._purpose = purpose

    async def ainvoke(self, messages: Any) -> _FakeLLMResponse:
        if self._purpose == "language_detection":
            return _FakeLLMResponse("en")
        text = messages[-1].content if messages else ""
        return _FakeLLMResponse(f"[TEST_MODE] {text}")


class FakeLLMProvider:
    """LLM provider that never calls external APIs."""

    def __init__(self) -> None:
        self._instances: dict[str, _FakeLLM] = {}

    def get_llm(
        self,
        purpose: LLMPurpose,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ) -> Any:
        cache_key = f"{purpose}:{model_name or ''}"
        if cache_key not in self._instances:
            self._instances[cache_key] = _FakeLLM(purpose)
        return self._instances[cache_key]


@dataclass
class ProviderRegistry:
    """Container for active providers."""

    llm_provider: LLMProvider


_registry: Optional[ProviderRegistry] = None


def configure_providers(use_fake: Optional[bool] = None) -> ProviderRegistry:
    """
    Configure global provider registry.

    Args:
        use_fake: Force fake/real mode. If omitted, infer from env.
    """
    global _registry

    if use_fake is None:
        use_fake = should_use_fake_providers()

    if use_fake:
        _registry = ProviderRegistry(llm_provider=FakeLLMProvider())
    else:
        _registry = ProviderRegistry(llm_provider=RealLLMProvider())

    logger.info("Provider registry configured (fake=%s)", use_fake)
    return _registry


def _get_registry() -> ProviderRegistry:
    global _registry
    if _registry is None:
        _registry = configure_providers()
    return _registry


def get_llm(
    purpose: LLMPurpose,
    model_name: Optional[str] = None,
    temperature: Optional[float] = None,
    max_output_tokens: Optional[int] = None,
) -> Any:
    """Return LLM client from active provider registry."""
    return _get_registry().llm_provider.get_llm(
        purpose,
        model_name=model_name,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
    )


def using_fake_providers() -> bool:
    """Return whether fake providers are currently active."""
    return isinstance(_get_registry().llm_provider, FakeLLMProvider)
