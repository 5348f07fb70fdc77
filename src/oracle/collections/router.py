"""Oracle collection endpoints: record a spin, read the profile snapshot."""

from __future__ import annotations

from typing import Any

import pydantic
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from oracle.auth.dependencies import AuthenticatedUser, get_current_user
from oracle.collections.profile import build_profile
from oracle.collections.recorder import record_result
from oracle.collections.schemas import ProfileResponse, TrackResultRequest, TrackResultResponse
from oracle.database import get_session
from oracle.errors import ValidationFailedError

router = APIRouter(tags=["Oracle"])


async def _parse_track_request(request: Request) -> TrackResultRequest:
    """Parse the spin body after authentication has already passed."""
    try:
        raw: Any = await request.json()
    except ValueError as e:
        raise ValidationFailedError("Invalid request body") from e

    if not isinstance(raw, dict):
        raise ValidationFailedError("Invalid request body")
    if not raw.get("type") or not raw.get("word"):
        raise ValidationFailedError("Missing required fields")

    try:
        return TrackResultRequest.model_validate(raw)
    except pydantic.ValidationError as e:
        raise ValidationFailedError("Invalid request body") from e


# The body is parsed inside the handler instead of as a typed parameter so
# that a missing credential is reported before anything about the payload.
@router.post("/track-result", response_model=TrackResultResponse)
@router.post("/track-oracle-result", response_model=TrackResultResponse, include_in_schema=False)
async def track_result(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> TrackResultResponse:
    """Record the outcome of one spin against the caller's collection and statistics."""
    spin = await _parse_track_request(request)
    await record_result(db, user, spin)
    return TrackResultResponse()


@router.get("/profile", response_model=ProfileResponse)
@router.get("/get-oracle-stats", response_model=ProfileResponse, include_in_schema=False)
async def get_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    """Statistics, collected words and completion for the caller."""
    return await build_profile(db, user)
