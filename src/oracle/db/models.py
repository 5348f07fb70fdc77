"""ORM models for the Oracle collections schema.

These models map to tables created by the Alembic migration
``001_oracle_collections``. User ids are the identity provider's subject
claim; the provider's own user table lives outside this database.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from oracle.db.base import Base


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class DivineWord(Base):
    """Catalog entry: one collectible word and its rarity tier."""

    __tablename__ = "divine_words"
    __table_args__ = (
        CheckConstraint("rarity IN ('SSR', 'SR')", name="ck_divine_words_rarity"),
    )

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    word: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    rarity: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    last_found_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=True
    )

    collections: Mapped[list[UserCollection]] = relationship("UserCollection", back_populates="divine_word")


# ---------------------------------------------------------------------------
# Collection ledger
# ---------------------------------------------------------------------------


class UserCollection(Base):
    """A user's record of having found a catalog word, with a repeat count."""

    __tablename__ = "user_collections"
    __table_args__ = (
        UniqueConstraint("user_id", "divine_word_id", name="uq_user_collections_user_word"),
        CheckConstraint("found_count > 0", name="ck_user_collections_found_count"),
    )

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(Uuid(as_uuid=False), nullable=False, index=True)
    divine_word_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), ForeignKey("divine_words.id", ondelete="CASCADE"), nullable=False, index=True
    )
    found_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    first_found_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    divine_word: Mapped[DivineWord] = relationship("DivineWord", back_populates="collections")


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


class UserStatistics(Base):
    """Per-user running totals. Exactly one row per user."""

    __tablename__ = "user_statistics"

    id: Mapped[str] = mapped_column(Uuid(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(Uuid(as_uuid=False), unique=True, nullable=False, index=True)
    total_spins: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    divine_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    reality_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    collection_completion: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    highest_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    last_spin_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
