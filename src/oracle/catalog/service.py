"""Read access to the word/rarity catalog."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from oracle.db.models import DivineWord


async def find_word(db: AsyncSession, word: str) -> DivineWord | None:
    """Exact-text lookup of a catalog word."""
    result = await db.execute(select(DivineWord).where(DivineWord.word == word))
    return result.scalar_one_or_none()


async def count_words(db: AsyncSession) -> int:
    """Total number of words in the catalog."""
    result = await db.execute(select(func.count()).select_from(DivineWord))
    return result.scalar_one()


async def mark_found(db: AsyncSession, word_id: str, found_at: datetime) -> None:
    """Refresh ``last_found_at`` on a catalog word."""
    await db.execute(
        update(DivineWord).where(DivineWord.id == word_id).values(last_found_at=found_at)
    )
