"""Persistence layer for user profiles stored in Supabase."""

from __future__ import annotations

from fastapi.concurrency import run_in_threadpool
from postgrest.exceptions import APIError as PostgrestAPIError

from core.errors import AppError, ErrorCode
from supabase_client import get_supabase

TABLE = "profiles"


def _get_client_or_raise():
    client = get_supabase()
    if not client:
        raise AppError(
            code=ErrorCode.DATABASE_ERROR,
            message="Database service unavailable",
            status_code=500,
        )
    return client


async def create_profile(
    *, user_id: str, name: str, email: str, preferences: dict
) -> dict | None:
    """Creates the profile row of a newly registered user."""
    client = _get_client_or_raise()
    payload = {
        "id": user_id,
        "name": name,
        "email": email,
        "preferences": preferences,
    }
    try:
        response = await run_in_threadpool(
            lambda: client.table(TABLE).upsert(payload).execute()
        )
        return response.data[0] if response.data else None
    except PostgrestAPIError as exc:
        raise AppError(
            code=ErrorCode.DATABASE_ERROR,
            message="Error creating user account",
            status_code=500,
            details={"operation": "create_profile"},
        ) from exc


async def get_profile(*, user_id: str) -> dict | None:
    """Returns a profile row by user id."""
    client = _get_client_or_raise()
    try:
        response = await run_in_threadpool(
            lambda: client.table(TABLE).select("*").eq("id", user_id).limit(1).execute()
        )
        if not response.data:
            return None
        return response.data[0]
    except PostgrestAPIError as exc:
        raise AppError(
            code=ErrorCode.DATABASE_ERROR,
            message="Error retrieving user data",
            status_code=500,
            details={"operation": "get_profile"},
        ) from exc


async def find_profile_by_email(*, email: str) -> dict | None:
    """Returns the profile row that uses the email, if any."""
    client = _get_client_or_raise()
    try:
        response = await run_in_threadpool(
            lambda: client.table(TABLE).select("id").eq("email", email).limit(1).execute()
        )
        if not response.data:
            return None
        return response.data[0]
    except PostgrestAPIError as exc:
        raise AppError(
            code=ErrorCode.DATABASE_ERROR,
            message="Error retrieving user data",
            status_code=500,
            details={"operation": "find_profile_by_email"},
        ) from exc


async def update_profile(*, user_id: str, update_payload: dict) -> dict | None:
    """Updates a profile row and returns it."""
    client = _get_client_or_raise()
    try:
        response = await run_in_threadpool(
            lambda: client.table(TABLE).update(update_payload).eq("id", user_id).execute()
        )
        return response.data[0] if response.data else None
    except PostgrestAPIError as exc:
        raise AppError(
            code=ErrorCode.DATABASE_ERROR,
            message="Error updating user profile",
            status_code=500,
            details={"operation": "update_profile"},
        ) from exc
