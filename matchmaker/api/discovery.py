"""
Matchmaker — Discovery API
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from matchmaker.api.deps import get_current_user_id, get_discovery_service
from matchmaker.database import get_db
from matchmaker.schemas.common import Envelope, Paginated
from matchmaker.schemas.discovery import CandidateCard
from matchmaker.services.discovery_service import DiscoveryService

router = APIRouter()


@router.get(
    "",
    response_model=Envelope[Paginated[CandidateCard]],
    summary="Get a page of swipeable candidates",
)
async def get_candidates(
    page: int | None = Query(None, ge=1),
    limit: int | None = Query(None, ge=1),
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: DiscoveryService = Depends(get_discovery_service),
    db: AsyncSession = Depends(get_db),
) -> Envelope[Paginated[CandidateCard]]:
    """Candidates exclude yourself, anyone already swiped, and blocked users.
    The returned page is shuffled; ``pagination.total`` is the full count."""
    result = await service.get_candidates(user_id, db, page=page, limit=limit)
    return Envelope[Paginated[CandidateCard]](data=Paginated[CandidateCard](**result))
