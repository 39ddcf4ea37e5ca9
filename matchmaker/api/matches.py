"""
Matchmaker — Matches API

Lists the caller's matches and returns a single match the caller belongs
to.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from matchmaker.api.deps import get_current_user_id, get_match_service
from matchmaker.database import get_db
from matchmaker.schemas.common import Envelope, Paginated
from matchmaker.schemas.match import MatchListItem
from matchmaker.services.match_service import MatchService

router = APIRouter()


# ──────────────────────────────────────────────────────────────────────────────
# GET / — List my matches
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=Envelope[Paginated[MatchListItem]],
    summary="List the caller's matches",
)
async def list_matches(
    page: int | None = Query(None, ge=1),
    limit: int | None = Query(None, ge=1),
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: MatchService = Depends(get_match_service),
    db: AsyncSession = Depends(get_db),
) -> Envelope[Paginated[MatchListItem]]:
    """Newest first; each item carries the other participant."""
    result = await service.list_matches(user_id, db, page=page, limit=limit)
    return Envelope[Paginated[MatchListItem]](data=Paginated[MatchListItem](**result))


# ──────────────────────────────────────────────────────────────────────────────
# GET /{match_id} — Match detail
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/{match_id}",
    response_model=Envelope[MatchListItem],
    summary="Get one of the caller's matches",
)
async def get_match(
    match_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: MatchService = Depends(get_match_service),
    db: AsyncSession = Depends(get_db),
) -> Envelope[MatchListItem]:
    """404 if the match does not exist, 403 if the caller is not in it."""
    item = await service.get_match_detail(user_id, match_id, db)
    return Envelope[MatchListItem](data=item)
