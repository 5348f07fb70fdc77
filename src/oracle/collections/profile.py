"""Profile reader: assembles a user's statistics, collection and completion."""

from __future__ import annotations

from typing import TYPE_CHECKING

from oracle.catalog.seed import SR, SSR
from oracle.catalog.service import count_words
from oracle.collections.ledger import list_entries
from oracle.collections.schemas import (
    CollectionItemResponse,
    CollectionsResponse,
    CompletionResponse,
    DivineWordResponse,
    ProfileResponse,
    StatsResponse,
)
from oracle.collections.statistics import get_statistics
from oracle.database import bind_user

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from oracle.auth.dependencies import AuthenticatedUser


def completion_percent(collected: int, total: int) -> int:
    """Floor of ``100 * collected / total``; 0 for an empty catalog."""
    if total <= 0:
        return 0
    return collected * 100 // total


async def build_profile(db: AsyncSession, user: AuthenticatedUser) -> ProfileResponse:
    """Read-only snapshot of the user's progress.

    The SSR/SR counts are derived from the returned item list rather than a
    separate aggregate, so the counts always agree with the items.
    """
    await bind_user(db, user.id)
    stats = await get_statistics(db, user.id)
    entries = await list_entries(db, user.id)
    total_words = await count_words(db)

    items = [
        CollectionItemResponse(
            id=entry.id,
            found_count=entry.found_count,
            first_found_at=entry.first_found_at,
            updated_at=entry.updated_at,
            divine_words=DivineWordResponse(id=word.id, word=word.word, rarity=word.rarity),
        )
        for entry, word in entries
    ]
    collected = len(items)

    if stats is None:
        stats_response = StatsResponse()
    else:
        stats_response = StatsResponse(
            total_spins=stats.total_spins,
            total_points=stats.total_points,
            divine_count=stats.divine_count,
            reality_count=stats.reality_count,
            highest_score=stats.highest_score,
            last_spin_at=stats.last_spin_at,
        )

    return ProfileResponse(
        stats=stats_response,
        collections=CollectionsResponse(
            total=collected,
            ssr=sum(1 for item in items if item.divine_words.rarity == SSR),
            sr=sum(1 for item in items if item.divine_words.rarity == SR),
            items=items,
        ),
        completion=CompletionResponse(
            percent=completion_percent(collected, total_words),
            collected=collected,
            total=total_words,
        ),
    )
