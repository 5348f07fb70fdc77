"""Statistics aggregator: per-user running totals."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import case, select
from sqlalchemy.ext.asyncio import AsyncSession

from oracle.collections.schemas import SpinType
from oracle.db.models import UserStatistics
from oracle.db.upsert import upsert

POINTS_BY_TYPE: dict[SpinType, int] = {
    SpinType.DIVINE: 20,
    SpinType.REALITY: 5,
    SpinType.VOID: 1,
}


def points_for(spin_type: SpinType) -> int:
    """Points awarded for a spin of the given tier."""
    return POINTS_BY_TYPE[spin_type]


def increments_for(spin_type: SpinType) -> tuple[int, int]:
    """Return ``(divine_increment, reality_increment)`` for a spin."""
    return (
        1 if spin_type is SpinType.DIVINE else 0,
        1 if spin_type is SpinType.REALITY else 0,
    )


async def record_spin(
    db: AsyncSession,
    user_id: str,
    spin_type: SpinType,
    score: int,
    collection_completion: int,
    spun_at: datetime,
) -> None:
    """Fold one spin into the user's statistics row.

    A first spin inserts the row seeded with that spin's values. Later spins
    apply the increments and the running max on the server side, so concurrent
    spins for one user cannot overwrite each other.
    """
    points = points_for(spin_type)
    divine_increment, reality_increment = increments_for(spin_type)

    stmt = upsert(db, UserStatistics).values(
        id=str(uuid.uuid4()),
        user_id=user_id,
        total_spins=1,
        total_points=points,
        divine_count=divine_increment,
        reality_count=reality_increment,
        collection_completion=collection_completion,
        highest_score=score,
        last_spin_at=spun_at,
        created_at=spun_at,
        updated_at=spun_at,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id"],
        set_={
            "total_spins": UserStatistics.total_spins + 1,
            "total_points": UserStatistics.total_points + stmt.excluded.total_points,
            "divine_count": UserStatistics.divine_count + stmt.excluded.divine_count,
            "reality_count": UserStatistics.reality_count + stmt.excluded.reality_count,
            "collection_completion": stmt.excluded.collection_completion,
            "highest_score": case(
                (stmt.excluded.highest_score > UserStatistics.highest_score, stmt.excluded.highest_score),
                else_=UserStatistics.highest_score,
            ),
            "last_spin_at": stmt.excluded.last_spin_at,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    await db.execute(stmt)


async def get_statistics(db: AsyncSession, user_id: str) -> UserStatistics | None:
    result = await db.execute(
        select(UserStatistics)
        .where(UserStatistics.user_id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()
