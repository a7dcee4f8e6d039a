"""Repository helpers for authentication-related Supabase access."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fastapi.concurrency import run_in_threadpool

from core.errors import AppError, ErrorCode
from supabase_client import get_supabase


@dataclass(frozen=True)
class AuthSession:
    """Tokens and user id returned by a successful sign-up/sign-in."""

    user_id: str
    access_token: str | None
    refresh_token: str | None


def _get_auth_client_or_raise():
    client = get_supabase()
    if not client:
        raise AppError(
            code=ErrorCode.AUTH_SERVICE_UNAVAILABLE,
            message="Authentication service unavailable",
            status_code=500,
        )
    return client


def _to_session(response: Any) -> AuthSession:
    session = getattr(response, "session", None)
    return AuthSession(
        user_id=str(response.user.id),
        access_token=getattr(session, "access_token", None),
        refresh_token=getattr(session, "refresh_token", None),
    )


def _is_duplicate_user_error(exc: Exception) -> bool:
    if getattr(exc, "code", None) in {"user_already_exists", "email_exists"}:
        return True
    return "already registered" in str(exc).lower()


async def fetch_user_id_from_token(token: str) -> str:
    """Validates token via Supabase and returns user id."""
    client = _get_auth_client_or_raise()

    try:
        user_response = await run_in_threadpool(lambda: client.auth.get_user(token))
    except Exception as exc:  # noqa: BLE001
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            message="Authentication failed",
            status_code=401,
        ) from exc

    if not user_response or not user_response.user:
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            message="Invalid token",
            status_code=401,
        )

    return str(user_response.user.id)


async def sign_up(*, email: str, password: str, name: str) -> AuthSession:
    """Registers a new auth user and returns its session."""
    client = _get_auth_client_or_raise()
    credentials = {
        "email": email,
        "password": password,
        "options": {"data": {"name": name}},
    }
    try:
        response = await run_in_threadpool(lambda: client.auth.sign_up(credentials))
    except Exception as exc:  # noqa: BLE001
        if _is_duplicate_user_error(exc):
            raise AppError(
                code=ErrorCode.BAD_REQUEST,
                message="User with this email already exists",
                status_code=400,
            ) from exc
        raise AppError(
            code=ErrorCode.PROCESSING_ERROR,
            message="Error creating user account",
            status_code=500,
        ) from exc

    if not response or not response.user:
        raise AppError(
            code=ErrorCode.PROCESSING_ERROR,
            message="Error creating user account",
            status_code=500,
        )
    return _to_session(response)


async def sign_in(*, email: str, password: str) -> AuthSession:
    """Signs a user in with email and password."""
    client = _get_auth_client_or_raise()
    credentials = {"email": email, "password": password}
    try:
        response = await run_in_threadpool(
            lambda: client.auth.sign_in_with_password(credentials)
        )
    except Exception as exc:  # noqa: BLE001
        raise AppError(
            code=ErrorCode.BAD_REQUEST,
            message="Invalid email or password",
            status_code=400,
        ) from exc

    if not response or not response.user:
        raise AppError(
            code=ErrorCode.BAD_REQUEST,
            message="Invalid email or password",
            status_code=400,
        )
    return _to_session(response)


async def update_auth_email(*, user_id: str, email: str) -> None:
    """Changes the login email of an auth user (requires the service-role key)."""
    client = _get_auth_client_or_raise()
    try:
        await run_in_threadpool(
            lambda: client.auth.admin.update_user_by_id(user_id, {"email": email})
        )
    except Exception as exc:  # noqa: BLE001
        if _is_duplicate_user_error(exc):
            raise AppError(
                code=ErrorCode.BAD_REQUEST,
                message="Email already in use",
                status_code=400,
            ) from exc
        raise AppError(
            code=ErrorCode.PROCESSING_ERROR,
            message="Error updating user profile",
            status_code=500,
        ) from exc


async def refresh_session(*, refresh_token: str) -> AuthSession:
    """Exchanges a refresh token for a new session."""
    client = _get_auth_client_or_raise()
    try:
        response = await run_in_threadpool(
            lambda: client.auth.refresh_session(refresh_token)
        )
    except Exception as exc:  # noqa: BLE001
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            message="Error refreshing token",
            status_code=401,
        ) from exc

    if not response or not response.user:
        raise AppError(
            code=ErrorCode.UNAUTHORIZED,
            message="Error refreshing token",
            status_code=401,
        )
    return _to_session(response)
