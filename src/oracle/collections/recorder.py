"""Result recorder: applies one spin outcome to the ledger and statistics."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy.exc import SQLAlchemyError

from oracle.catalog.service import count_words, find_word, mark_found
from oracle.collections.ledger import count_collected, record_find
from oracle.collections.profile import completion_percent
from oracle.collections.schemas import SpinType, TrackResultRequest
from oracle.collections.statistics import points_for, record_spin
from oracle.database import bind_user
from oracle.errors import InternalError, WordNotFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from oracle.auth.dependencies import AuthenticatedUser

logger = structlog.get_logger()


async def record_result(
    db: AsyncSession,
    user: AuthenticatedUser,
    spin: TrackResultRequest,
) -> None:
    """
    Record a spin for ``user``.

    1. Look up the word; unknown words are only tolerated on VOID spins.
    2. Upsert the ledger entry when the word is in the catalog.
    3. Upsert the statistics row with points, tier counters and best score.

    Both writes share one transaction and are committed together.

    Raises:
        WordNotFoundError: The word is not in the catalog and the spin is not VOID.
        InternalError: A database write failed; nothing was committed.
    """
    now = datetime.now(timezone.utc)

    try:
        await bind_user(db, user.id)
        word = await find_word(db, spin.word)
        if word is None and spin.type is not SpinType.VOID:
            raise WordNotFoundError

        if word is not None:
            await record_find(db, user.id, word.id, now)
            await mark_found(db, word.id, now)

        completion = completion_percent(await count_collected(db, user.id), await count_words(db))
        await record_spin(db, user.id, spin.type, spin.score, completion, now)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            "oracle_result_failed",
            user_id=user.id,
            spin_type=spin.type.value,
            word=spin.word,
            error=str(e),
            exc_info=e,
        )
        raise InternalError from e

    logger.info(
        "oracle_result_tracked",
        user_id=user.id,
        spin_type=spin.type.value,
        word=spin.word,
        in_catalog=word is not None,
        points=points_for(spin.type),
        score=spin.score,
    )
