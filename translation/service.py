"""Service layer for translation APIs."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from uuid import UUID

from core.errors import AppError, ErrorCode
from translation.processor import get_translation_processor
from translation.repository import (
    create_translation as repo_create_translation,
    delete_translation as repo_delete_translation,
    get_translation as repo_get_translation,
    list_translations as repo_list_translations,
    update_translation as repo_update_translation,
)
from translation.schemas import (
    DeleteTranslationResponse,
    TranslationCreate,
    TranslationListResponse,
    TranslationOptions,
    TranslationResponse,
)

logger = logging.getLogger(__name__)

UNSAVED_WARNING = "Translation completed but could not be saved to history"


async def create_user_translation(
    *, user_id: str, data: TranslationCreate
) -> TranslationResponse:
    """
    Translates the submitted text and stores it in the user's history.

    A database failure after a successful translation does not discard the
    result; it is returned unsaved with a warning.
    """
    processor = get_translation_processor()
    processor.validate(data.source_text, data.target_lang)
    target_lang = data.target_lang.strip()

    options = data.options or TranslationOptions()
    source_lang = await processor.resolve_source_language(data.source_text, data.source_lang)
    if not data.source_lang:
        logger.info(f"Detected language: {source_lang} for user {user_id}")

    try:
        translated_text = await processor.translate(
            data.source_text, source_lang, target_lang, options
        )
    except AppError as e:
        logger.error(f"Translation error for user {user_id}: {e.message}")
        raise

    try:
        row = await repo_create_translation(
            user_id=user_id,
            source_text=data.source_text,
            translated_text=translated_text,
            source_lang=source_lang,
            target_lang=target_lang,
            options=options.model_dump(),
        )
    except AppError as e:
        logger.error(f"Database error when saving translation: {e.message}")
        row = None

    if not row:
        return TranslationResponse(
            source_text=data.source_text,
            translated_text=translated_text,
            source_lang=source_lang,
            target_lang=target_lang,
            options=options,
            created_at=datetime.now(timezone.utc),
            saved=False,
            warning=UNSAVED_WARNING,
        )
    return TranslationResponse(**row)


async def list_user_translations(
    *, user_id: str, page: int, limit: int, favorites_only: bool = False
) -> TranslationListResponse:
    """Returns one page of the user's translation history."""
    rows, total = await repo_list_translations(
        user_id=user_id,
        offset=(page - 1) * limit,
        limit=limit,
        favorites_only=favorites_only,
    )
    items = [TranslationResponse(**row) for row in rows]
    return TranslationListResponse(
        items=items,
        count=len(items),
        total=total,
        total_pages=math.ceil(total / limit),
        current_page=page,
    )


async def _get_owned_translation(
    *, translation_id: UUID, user_id: str, action: str
) -> dict:
    row = await repo_get_translation(translation_id=str(translation_id))
    if not row:
        raise AppError(
            code=ErrorCode.NOT_FOUND,
            message="Translation not found",
            status_code=404,
        )
    if str(row.get("user_id")) != str(user_id):
        raise AppError(
            code=ErrorCode.FORBIDDEN,
            message=f"Not authorized to {action} this translation",
            status_code=403,
        )
    return row


async def toggle_user_favorite(
    *, translation_id: UUID, user_id: str
) -> TranslationResponse:
    """Flips the favorite flag of a translation owned by the user."""
    row = await _get_owned_translation(
        translation_id=translation_id, user_id=user_id, action="access"
    )
    updated = await repo_update_translation(
        translation_id=str(translation_id),
        user_id=user_id,
        update_payload={
            "is_favorite": not row.get("is_favorite", False),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        },
    )
    if not updated:
        raise AppError(
            code=ErrorCode.NOT_FOUND,
            message="Translation not found",
            status_code=404,
        )
    return TranslationResponse(**updated)


async def delete_user_translation(
    *, translation_id: UUID, user_id: str
) -> DeleteTranslationResponse:
    """Deletes a translation owned by the user."""
    await _get_owned_translation(
        translation_id=translation_id, user_id=user_id, action="delete"
    )
    await repo_delete_translation(translation_id=str(translation_id), user_id=user_id)
    return DeleteTranslationResponse(
        status="deleted", message="Translation deleted successfully"
    )
