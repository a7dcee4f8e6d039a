"""
Translation Schemas

Pydantic models for the translation API and the chunked processor.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

Tone = Literal["formal", "informal", "casual", "professional", "standard"]
Style = Literal["standard", "simplified", "detailed"]


class TranslationOptions(BaseModel):
    """
    User-selectable register and verbosity controls.

    Attributes:
        tone: Register of the translation.
        style: Verbosity of the translation.
        preserve_formatting: Keep paragraphs, lists and structure intact.
    """

    model_config = ConfigDict(frozen=True)

    tone: Tone = "standard"
    style: Style = "standard"
    preserve_formatting: bool = True


class TranslationCreate(BaseModel):
    """Request model for creating a translation."""

    source_text: str = Field(..., description="Text to translate")
    source_lang: str | None = Field(
        default=None, description="ISO 639-1 code; detected when omitted"
    )
    target_lang: str | None = Field(default=None, description="ISO 639-1 code")
    options: TranslationOptions | None = None


class TranslationResponse(BaseModel):
    """
    Response model for a translation record.

    ``saved`` is False when the translation succeeded but could not be
    written to history; ``id`` is then absent.
    """

    id: UUID | None = None
    source_text: str
    translated_text: str
    source_lang: str
    target_lang: str
    options: TranslationOptions
    is_favorite: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    saved: bool = True
    warning: str | None = None


class TranslationListResponse(BaseModel):
    """Paginated list of translation records."""

    items: list[TranslationResponse] = Field(default_factory=list)
    count: int
    total: int
    total_pages: int
    current_page: int


class DeleteTranslationResponse(BaseModel):
    """Response model for delete endpoint."""

    status: str
    message: str
