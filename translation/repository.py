"""Persistence layer for translation records stored in Supabase."""

from __future__ import annotations

from typing import Any

from fastapi.concurrency import run_in_threadpool
from postgrest.exceptions import APIError as PostgrestAPIError

from core.errors import AppError, ErrorCode
from supabase_client import get_supabase

TABLE = "translations"


def _get_client_or_raise():
    client = get_supabase()
    if not client:
        raise AppError(
            code=ErrorCode.DATABASE_ERROR,
            message="Database service unavailable",
            status_code=500,
        )
    return client


async def create_translation(
    *,
    user_id: str,
    source_text: str,
    translated_text: str,
    source_lang: str,
    target_lang: str,
    options: dict[str, Any],
) -> dict | None:
    """Inserts a translation record and returns the created row."""
    client = _get_client_or_raise()
    payload = {
        "user_id": user_id,
        "source_text": source_text,
        "translated_text": translated_text,
        "source_lang": source_lang,
        "target_lang": target_lang,
        "options": options,
        "is_favorite": False,
    }
    try:
        response = await run_in_threadpool(
            lambda: client.table(TABLE).insert(payload).execute()
        )
        return response.data[0] if response.data else None
    except PostgrestAPIError as exc:
        raise AppError(
            code=ErrorCode.DATABASE_ERROR,
            message="Failed to save translation",
            status_code=500,
            details={"operation": "create_translation"},
        ) from exc


async def list_translations(
    *,
    user_id: str,
    offset: int,
    limit: int,
    favorites_only: bool = False,
) -> tuple[list[dict], int]:
    """
    Returns one page of a user's translations, newest first, and the total.

    Args:
        user_id: Owner of the records.
        offset: Number of rows to skip.
        limit: Page size.
        favorites_only: Restrict to favorite records.
    """
    client = _get_client_or_raise()

    def _query():
        query = client.table(TABLE).select("*", count="exact").eq("user_id", user_id)
        if favorites_only:
            query = query.eq("is_favorite", True)
        return (
            query.order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )

    try:
        response = await run_in_threadpool(_query)
    except PostgrestAPIError as exc:
        raise AppError(
            code=ErrorCode.DATABASE_ERROR,
            message="Error retrieving translations",
            status_code=500,
            details={"operation": "list_translations"},
        ) from exc

    rows = response.data or []
    total = response.count if response.count is not None else len(rows)
    return rows, total


async def get_translation(*, translation_id: str) -> dict | None:
    """Returns a translation row by id regardless of owner."""
    client = _get_client_or_raise()
    try:
        response = await run_in_threadpool(
            lambda: client.table(TABLE)
            .select("*")
            .eq("id", translation_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]
    except PostgrestAPIError as exc:
        raise AppError(
            code=ErrorCode.DATABASE_ERROR,
            message="Failed to load translation",
            status_code=500,
            details={"operation": "get_translation"},
        ) from exc


async def update_translation(
    *,
    translation_id: str,
    user_id: str,
    update_payload: dict,
) -> dict | None:
    """Updates a translation owned by the user and returns the updated row."""
    client = _get_client_or_raise()
    try:
        response = await run_in_threadpool(
            lambda: client.table(TABLE)
            .update(update_payload)
            .eq("id", translation_id)
            .eq("user_id", user_id)
            .execute()
        )
        return response.data[0] if response.data else None
    except PostgrestAPIError as exc:
        raise AppError(
            code=ErrorCode.DATABASE_ERROR,
            message="Error updating translation",
            status_code=500,
            details={"operation": "update_translation"},
        ) from exc


async def delete_translation(*, translation_id: str, user_id: str) -> None:
    """Deletes a translation owned by the user."""
    client = _get_client_or_raise()
    try:
        await run_in_threadpool(
            lambda: client.table(TABLE)
            .delete()
            .eq("id", translation_id)
            .eq("user_id", user_id)
            .execute()
        )
    except PostgrestAPIError as exc:
        raise AppError(
            code=ErrorCode.DATABASE_ERROR,
            message="Error deleting translation",
            status_code=500,
            details={"operation": "delete_translation"},
        ) from exc
