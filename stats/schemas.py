"""Schemas for translation usage statistics."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class LanguageCount(BaseModel):
    """Usage count for one language code."""

    language: str
    count: int


class TranslationStats(BaseModel):
    """Per-user translation usage statistics."""

    total_translations: int
    favorites_count: int
    total_characters_translated: int
    most_used_source_lang: str = "unknown"
    most_used_target_lang: str = "unknown"
    last_translation_at: datetime | None = None
    top_target_languages: list[LanguageCount] = Field(default_factory=list)
