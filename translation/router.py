"""
Translations Router

API endpoints for translating text and managing translation history.
"""

# Standard library
import logging
from uuid import UUID

# Third-party
from fastapi import APIRouter, Depends, Query, Response

# Local application
from core.auth import get_current_user_id
from translation.schemas import (
    DeleteTranslationResponse,
    TranslationCreate,
    TranslationListResponse,
    TranslationResponse,
)
from translation.service import (
    create_user_translation,
    delete_user_translation,
    list_user_translations,
    toggle_user_favorite,
)

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=TranslationResponse, status_code=201)
async def create_translation(
    data: TranslationCreate,
    response: Response,
    user_id: str = Depends(get_current_user_id),
) -> TranslationResponse:
    """
    Translates text and saves it to the user's history.

    The source language is detected when omitted. Returns 201 with the saved
    record, or 200 with ``saved=false`` when the result could not be stored.

    Args:
        data: Text, languages and options.
        response: Outgoing response (status adjusted when unsaved).
        user_id: Authenticated user ID (injected).

    Raises:
        AppError: 400 on invalid input or failed detection, 429/502/503/500
            on classified model failures.
    """
    logger.info(
        f"Creating translation for user {user_id}: "
        f"{len(data.source_text)} chars -> {data.target_lang}"
    )
    result = await create_user_translation(user_id=user_id, data=data)
    if not result.saved:
        response.status_code = 200
    return result


@router.get("", response_model=TranslationListResponse)
async def list_translations(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
) -> TranslationListResponse:
    """Lists the user's translations, newest first."""
    return await list_user_translations(user_id=user_id, page=page, limit=limit)


@router.get("/favorites", response_model=TranslationListResponse)
async def list_favorites(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
) -> TranslationListResponse:
    """Lists the user's favorite translations, newest first."""
    return await list_user_translations(
        user_id=user_id, page=page, limit=limit, favorites_only=True
    )


@router.patch("/{translation_id}/favorite", response_model=TranslationResponse)
async def toggle_favorite(
    translation_id: UUID,
    user_id: str = Depends(get_current_user_id),
) -> TranslationResponse:
    """Toggles the favorite flag of a translation."""
    logger.info(f"Toggling favorite on translation {translation_id}")
    return await toggle_user_favorite(translation_id=translation_id, user_id=user_id)


@router.delete("/{translation_id}", response_model=DeleteTranslationResponse)
async def delete_translation(
    translation_id: UUID,
    user_id: str = Depends(get_current_user_id),
) -> DeleteTranslationResponse:
    """Deletes a translation owned by the user."""
    logger.info(f"Deleting translation {translation_id}")
    return await delete_user_translation(translation_id=translation_id, user_id=user_id)
