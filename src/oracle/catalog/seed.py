"""Catalog seed data: the collectible words and their rarity tiers."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from oracle.db.models import DivineWord
from oracle.db.upsert import upsert

logger = logging.getLogger(__name__)

SSR = "SSR"
SR = "SR"

DIVINE_WORD_SEED_DATA: list[dict[str, str]] = [
    # SSR
    {"word": "うんこ", "rarity": SSR},
    {"word": "ちんこ", "rarity": SSR},
    {"word": "まんこ", "rarity": SSR},
    {"word": "ぱんこ", "rarity": SSR},
    {"word": "あんこ", "rarity": SSR},
    {"word": "さんこ", "rarity": SSR},
    {"word": "きんこ", "rarity": SSR},
    {"word": "わんこ", "rarity": SSR},
    {"word": "げんこ", "rarity": SSR},
    # SR
    {"word": "てんき", "rarity": SR},
    {"word": "げんき", "rarity": SR},
    {"word": "りんご", "rarity": SR},
    {"word": "だんご", "rarity": SR},
    {"word": "きんご", "rarity": SR},
    {"word": "ぶんこ", "rarity": SR},
    {"word": "はんこ", "rarity": SR},
    {"word": "さんご", "rarity": SR},
]


async def seed_catalog(db: AsyncSession) -> None:
    """Insert the seed words. Existing words are left untouched (idempotent)."""
    for entry in DIVINE_WORD_SEED_DATA:
        stmt = upsert(db, DivineWord).values(word=entry["word"], rarity=entry["rarity"])
        stmt = stmt.on_conflict_do_nothing(index_elements=["word"])
        await db.execute(stmt)

    await db.commit()
    logger.info("Catalog seeded: %d words", len(DIVINE_WORD_SEED_DATA))
