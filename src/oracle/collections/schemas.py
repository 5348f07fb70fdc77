"""Request/response models for the Oracle collection endpoints."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

# Scores are stored in 32-bit INTEGER columns.
SCORE_MIN = -(2**31)
SCORE_MAX = 2**31 - 1


class SpinType(str, Enum):
    """Outcome tier of a single spin."""

    DIVINE = "DIVINE"
    REALITY = "REALITY"
    VOID = "VOID"


# --- Write path ---


class TrackResultRequest(BaseModel):
    type: SpinType
    word: str = Field(min_length=1)
    score: int = Field(default=0, ge=SCORE_MIN, le=SCORE_MAX)


class TrackResultResponse(BaseModel):
    success: bool = True
    message: str = "Oracle result tracked successfully"


# --- Read path ---


class StatsResponse(BaseModel):
    total_spins: int = 0
    total_points: int = 0
    divine_count: int = 0
    reality_count: int = 0
    highest_score: int = 0
    last_spin_at: datetime | None = None


class DivineWordResponse(BaseModel):
    id: str
    word: str
    rarity: str


class CollectionItemResponse(BaseModel):
    id: str
    found_count: int
    first_found_at: datetime
    updated_at: datetime
    # Key name matches the payload existing clients already consume.
    divine_words: DivineWordResponse


class CollectionsResponse(BaseModel):
    total: int
    ssr: int
    sr: int
    items: list[CollectionItemResponse]


class CompletionResponse(BaseModel):
    percent: int
    collected: int
    total: int


class ProfileResponse(BaseModel):
    stats: StatsResponse
    collections: CollectionsResponse
    completion: CompletionResponse
