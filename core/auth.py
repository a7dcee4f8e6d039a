"""
Centralized Authentication Module

Provides shared authentication dependencies for all routers.
"""

# Standard library
import logging
import os

# Third-party
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

# Local application
from accounts.repository import get_profile
from core.auth_repository import fetch_user_id_from_token
from core.errors import AppError, ErrorCode

# Configure logging
logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)

DEV_USER_ID = "test-user-id-001"


def _dev_mode() -> bool:
    """Feature flag for local testing (set DEV_MODE=true to bypass auth)."""
    return os.getenv("DEV_MODE", "false").lower() == "true"


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> str:
    """
    Validates the Supabase JWT and extracts the user ID.

    This is the centralized authentication dependency used by all routers.
    Set DEV_MODE=true in environment to bypass authentication for testing.

    Args:
        credentials: Bearer credentials parsed from the Authorization header.

    Returns:
        The authenticated user's ID.

    Raises:
        AppError: 401 if token is missing/invalid, 500 if Supabase unavailable.
    """
    if _dev_mode():
        logger.warning("DEV_MODE enabled - using test user ID")
        return DEV_USER_ID

    if credentials is None or not credentials.credentials:
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            message="Unauthorized. Please log in to access this resource.",
            status_code=401,
        )

    return await fetch_user_id_from_token(credentials.credentials)


async def get_current_user(user_id: str = Depends(get_current_user_id)) -> dict:
    """
    Resolves the authenticated user's profile row.

    Raises:
        AppError: 401 if the token is valid but no profile exists.
    """
    profile = await get_profile(user_id=user_id)
    if not profile:
        logger.warning(f"No profile found for authenticated user {user_id}")
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            message="Unauthorized. Please log in to access this resource.",
            status_code=401,
        )
    return profile
