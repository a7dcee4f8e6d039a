"""Service layer for authentication and user settings."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from accounts.repository import (
    create_profile as repo_create_profile,
    find_profile_by_email as repo_find_profile_by_email,
    get_profile as repo_get_profile,
    update_profile as repo_update_profile,
)
from accounts.schemas import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    PreferencesUpdate,
    ProfileUpdate,
    SignupRequest,
    UserPreferences,
    UserProfile,
)
from core import auth_repository
from core.errors import AppError, ErrorCode
from support.intercom import prepare_intercom_data

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _auth_response(session: auth_repository.AuthSession, profile: dict) -> AuthResponse:
    return AuthResponse(
        token=session.access_token,
        refresh_token=session.refresh_token,
        user=UserProfile(**profile),
        intercom=await prepare_intercom_data(profile),
    )


async def register_user(*, data: SignupRequest) -> AuthResponse:
    """Creates the auth user and its profile with default preferences."""
    session = await auth_repository.sign_up(
        email=data.email, password=data.password, name=data.name
    )
    profile = await repo_create_profile(
        user_id=session.user_id,
        name=data.name,
        email=data.email,
        preferences=UserPreferences().model_dump(),
    )
    if not profile:
        raise AppError(
            code=ErrorCode.PROCESSING_ERROR,
            message="Error creating user account",
            status_code=500,
        )
    logger.info(f"Registered user {session.user_id}")
    return await _auth_response(session, profile)


async def login_user(*, data: LoginRequest) -> AuthResponse:
    """Signs a user in and returns tokens with the profile."""
    session = await auth_repository.sign_in(email=data.email, password=data.password)
    profile = await repo_get_profile(user_id=session.user_id)
    if not profile:
        logger.error(f"Login succeeded but profile {session.user_id} is missing")
        raise AppError(
            code=ErrorCode.PROCESSING_ERROR,
            message="Error logging in",
            status_code=500,
        )
    return await _auth_response(session, profile)


async def refresh_user_token(*, user: dict, refresh_token: str) -> AuthResponse:
    """Issues a fresh session for the authenticated user."""
    session = await auth_repository.refresh_session(refresh_token=refresh_token)
    if session.user_id != str(user["id"]):
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            message="Error refreshing token",
            status_code=401,
        )
    return await _auth_response(session, user)


async def describe_current_user(*, user: dict) -> CurrentUserResponse:
    return CurrentUserResponse(
        user=UserProfile(**user),
        intercom=await prepare_intercom_data(user),
    )


def merge_preferences(current: dict | None, update: PreferencesUpdate) -> dict:
    """
    Merges the provided fields into the stored preferences.

    Fields left out of the update keep their stored (or default) values.
    """
    merged = UserPreferences(**(current or {})).model_dump()

    if update.default_source_language:
        merged["default_source_language"] = update.default_source_language
    if update.default_target_language:
        merged["default_target_language"] = update.default_target_language
    if update.default_translation_options:
        merged["default_translation_options"].update(
            update.default_translation_options.model_dump(exclude_none=True)
        )
    return merged


async def update_user_preferences(*, user: dict, data: PreferencesUpdate) -> UserPreferences:
    preferences = merge_preferences(user.get("preferences"), data)
    row = await repo_update_profile(
        user_id=str(user["id"]),
        update_payload={"preferences": preferences, "updated_at": _now_iso()},
    )
    if not row:
        raise AppError(
            code=ErrorCode.NOT_FOUND,
            message="User not found",
            status_code=404,
        )
    return UserPreferences(**row["preferences"])


async def update_user_profile(*, user: dict, data: ProfileUpdate) -> UserProfile:
    """
    Updates name and/or email, rejecting an email used by someone else.

    A new email is applied to the Supabase auth user first, then the profile.
    """
    update_payload: dict[str, object] = {}
    if data.name:
        update_payload["name"] = data.name
    if data.email:
        existing = await repo_find_profile_by_email(email=data.email)
        if existing and str(existing["id"]) != str(user["id"]):
            raise AppError(
                code=ErrorCode.BAD_REQUEST,
                message="Email already in use",
                status_code=400,
            )
        update_payload["email"] = data.email

    if not update_payload:
        return UserProfile(**user)

    if "email" in update_payload and update_payload["email"] != user.get("email"):
        # Login uses the auth user's email, keep it in step with the profile
        await auth_repository.update_auth_email(
            user_id=str(user["id"]), email=update_payload["email"]
        )

    update_payload["updated_at"] = _now_iso()
    row = await repo_update_profile(user_id=str(user["id"]), update_payload=update_payload)
    if not row:
        raise AppError(
            code=ErrorCode.NOT_FOUND,
            message="User not found",
            status_code=404,
        )
    return UserProfile(**row)
