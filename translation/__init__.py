"""
Translation Module

Chunked LLM translation and per-user translation history.
"""

from translation.processor import TranslationProcessor, get_translation_processor
from translation.router import router

__all__ = ["TranslationProcessor", "get_translation_processor", "router"]
