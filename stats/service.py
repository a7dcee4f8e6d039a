"""Service layer for translation usage statistics."""

from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone

from stats.repository import list_translation_usage
from stats.schemas import LanguageCount, TranslationStats


def parse_timestamp(value) -> datetime | None:
    """
    Parses a stored timestamp into an aware datetime.

    Naive values are taken as UTC; unparseable or empty values give None.
    """
    if isinstance(value, datetime):
        parsed = value
    elif value:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def summarize_usage(rows: list[dict]) -> TranslationStats:
    """Aggregates translation rows into usage statistics."""
    if not rows:
        return TranslationStats(
            total_translations=0,
            favorites_count=0,
            total_characters_translated=0,
        )

    source_counts = Counter(row.get("source_lang") for row in rows if row.get("source_lang"))
    target_counts = Counter(row.get("target_lang") for row in rows if row.get("target_lang"))
    timestamps = [
        ts for ts in (parse_timestamp(row.get("created_at")) for row in rows) if ts
    ]

    return TranslationStats(
        total_translations=len(rows),
        favorites_count=sum(1 for row in rows if row.get("is_favorite")),
        total_characters_translated=sum(len(row.get("source_text") or "") for row in rows),
        most_used_source_lang=source_counts.most_common(1)[0][0] if source_counts else "unknown",
        most_used_target_lang=target_counts.most_common(1)[0][0] if target_counts else "unknown",
        last_translation_at=max(timestamps) if timestamps else None,
        top_target_languages=[
            LanguageCount(language=lang, count=count)
            for lang, count in target_counts.most_common(5)
        ],
    )


async def build_translation_stats(*, user_id: str) -> TranslationStats:
    """Builds usage statistics from the user's translation history."""
    rows = await list_translation_usage(user_id=user_id)
    return summarize_usage(rows)
