"""Collection ledger: per-user, per-word found counts."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from oracle.db.models import DivineWord, UserCollection
from oracle.db.upsert import upsert


async def record_find(
    db: AsyncSession,
    user_id: str,
    word_id: str,
    found_at: datetime,
) -> None:
    """Create the ledger entry or bump its ``found_count`` in one statement.

    ``first_found_at`` is only written on insert, so repeat finds keep the
    original discovery time.
    """
    stmt = upsert(db, UserCollection).values(
        id=str(uuid.uuid4()),
        user_id=user_id,
        divine_word_id=word_id,
        found_count=1,
        first_found_at=found_at,
        updated_at=found_at,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "divine_word_id"],
        set_={
            "found_count": UserCollection.found_count + 1,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    await db.execute(stmt)


async def get_entry(db: AsyncSession, user_id: str, word_id: str) -> UserCollection | None:
    result = await db.execute(
        select(UserCollection)
        .where(UserCollection.user_id == user_id)
        .where(UserCollection.divine_word_id == word_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def count_collected(db: AsyncSession, user_id: str) -> int:
    """Number of distinct catalog words the user has found."""
    result = await db.execute(
        select(func.count()).select_from(UserCollection).where(UserCollection.user_id == user_id)
    )
    return result.scalar_one()


async def list_entries(db: AsyncSession, user_id: str) -> list[tuple[UserCollection, DivineWord]]:
    """All ledger entries for a user joined with their catalog word, most recently updated first."""
    result = await db.execute(
        select(UserCollection, DivineWord)
        .join(DivineWord, UserCollection.divine_word_id == DivineWord.id)
        .where(UserCollection.user_id == user_id)
        .order_by(UserCollection.updated_at.desc())
        .execution_options(populate_existing=True)
    )
    return [(row.UserCollection, row.DivineWord) for row in result]
