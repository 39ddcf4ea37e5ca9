"""
Matchmaker — Swipe API

Records a LIKE or PASS from the authenticated user.  A LIKE that completes a
mutual pair returns the match; when two reciprocal likes race, both callers
get ``matched: true`` and only one of them reports ``sideEffectsApplied``.
"""

from __future__ import annotations

import uuid

import structlog
from fastapi import APIRouter, Depends, status

from matchmaker.api.deps import get_current_user_id, get_swipe_service
from matchmaker.schemas.common import Envelope
from matchmaker.schemas.swipe import SwipeCreate, SwipeResult
from matchmaker.services.swipe_service import SwipeService

logger = structlog.get_logger("matchmaker.api.swipe")

router = APIRouter()


# ──────────────────────────────────────────────────────────────────────────────
# POST / — Swipe on a user
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=Envelope[SwipeResult],
    status_code=status.HTTP_201_CREATED,
    summary="Like or pass on a user",
)
async def swipe(
    payload: SwipeCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: SwipeService = Depends(get_swipe_service),
) -> Envelope[SwipeResult]:
    """Record a swipe.

    Errors: 400 self-swipe, 404 missing or inactive profile, 403 blocked,
    409 duplicate swipe.
    """
    outcome = await service.swipe(user_id, payload.target_user_id, payload.action)

    result = SwipeResult.model_validate(outcome)
    message = "Match created" if outcome.matched else "Swipe recorded"
    return Envelope[SwipeResult](message=message, data=result)
