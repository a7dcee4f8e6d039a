"""
Intercom Identity Service

Builds the identity payload the support widget needs: an HMAC user hash for
identity verification plus preference and usage attributes.
"""

# Standard library
import hashlib
import hmac
import logging
import os
from datetime import datetime, timezone
from typing import Any, Optional

# Local application
from core.errors import AppError
from stats.service import build_translation_stats, parse_timestamp

# Configure logging
logger = logging.getLogger(__name__)


def generate_user_hash(user_id: str) -> Optional[str]:
    """
    Generates the HMAC-SHA256 used for Intercom identity verification.

    Returns:
        Hex digest, or None when INTERCOM_SECRET_KEY is not set.
    """
    secret = os.getenv("INTERCOM_SECRET_KEY")
    if not secret:
        logger.warning("INTERCOM_SECRET_KEY not set - secure mode disabled")
        return None
    return hmac.new(secret.encode("utf-8"), str(user_id).encode("utf-8"), hashlib.sha256).hexdigest()


def days_since(value: Any, now: Optional[datetime] = None) -> int:
    """Whole days between the given timestamp and now."""
    start = parse_timestamp(value)
    if start is None:
        return 0
    now = now or datetime.now(timezone.utc)
    return abs(now - start).days


def _basic_payload(user: dict) -> dict[str, Any]:
    return {
        "user_id": str(user["id"]),
        "email": user.get("email"),
        "name": user.get("name"),
        "app_id": os.getenv("INTERCOM_APP_ID"),
        "user_hash": generate_user_hash(user["id"]),
    }


async def prepare_intercom_data(user: Optional[dict]) -> Optional[dict[str, Any]]:
    """
    Prepares the Intercom boot payload for a user profile.

    Falls back to the identity fields alone when statistics are unavailable.
    """
    if not user:
        return None

    payload = _basic_payload(user)
    try:
        stats = await build_translation_stats(user_id=str(user["id"]))
    except AppError as e:
        logger.error(f"Error preparing Intercom data: {e.message}")
        return payload

    preferences = user.get("preferences") or {}
    default_options = preferences.get("default_translation_options") or {}
    created_at = parse_timestamp(user.get("created_at"))

    payload["created_at"] = int(created_at.timestamp()) if created_at else None
    payload["custom_attributes"] = {
        "default_source_language": preferences.get("default_source_language", "en"),
        "default_target_language": preferences.get("default_target_language", "es"),
        "translation_tone": default_options.get("tone", "standard"),
        "total_translations": stats.total_translations,
        "total_characters_translated": stats.total_characters_translated,
        "most_used_source_language": stats.most_used_source_lang,
        "most_used_target_language": stats.most_used_target_lang,
        "favorite_translations_count": stats.favorites_count,
        "days_since_signup": days_since(user.get("created_at")),
        "last_translation_at": (
            stats.last_translation_at.isoformat() if stats.last_translation_at else None
        ),
    }
    return payload
