"""
Translation Statistics Router

Provides usage statistics for the authenticated user.
"""

# Standard library
import logging

# Third-party
from fastapi import APIRouter, Depends

# Local application
from core.auth import get_current_user_id
from stats.schemas import TranslationStats
from stats.service import build_translation_stats

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/translations", response_model=TranslationStats)
async def get_translation_stats(
    user_id: str = Depends(get_current_user_id)
) -> TranslationStats:
    """
    Returns translation usage statistics for the user.

    Args:
        user_id: Authenticated user ID (injected).

    Raises:
        AppError: 500 if the database query fails.
    """
    stats = await build_translation_stats(user_id=user_id)
    logger.info(f"Translation stats for user {user_id}: {stats.total_translations} translations")
    return stats
