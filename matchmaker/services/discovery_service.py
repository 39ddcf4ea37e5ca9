"""
Matchmaker — Candidate Selector (discovery feed)

Builds one page of swipeable candidates for a user:

  * active profiles with at least one photo,
  * never the requester, anyone the requester already swiped on, or anyone
    in a block relationship with the requester (either direction),
  * optionally restricted to the requester's preferred gender.

The page is fetched in a stable order and then shuffled locally.  Only the
page is shuffled, not the whole candidate pool, so early pages keep
surfacing the oldest eligible profiles.
"""

from __future__ import annotations

import random
import uuid

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from matchmaker.errors import ProfileNotFoundError
from matchmaker.models.block import UserBlock
from matchmaker.models.match import Swipe
from matchmaker.models.profile import DatingPhoto, DatingProfile
from matchmaker.models.user import User
from matchmaker.schemas.common import UserSummary
from matchmaker.schemas.discovery import CandidateCard
from matchmaker.utils.pagination import paginate, parse_pagination

logger = structlog.get_logger("matchmaker.discovery_service")


class DiscoveryService:
    """Read-only discovery queries.  Results may be slightly stale."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    async def get_candidates(
        self,
        user_id: uuid.UUID,
        db_session: AsyncSession,
        page: int | None = None,
        limit: int | None = None,
    ) -> dict:
        """Return a shuffled page of candidate cards for ``user_id``.

        Parameters
        ----------
        user_id:
            The requesting user; must own a dating profile (active or not).
        db_session:
            Active SQLAlchemy async session.
        page, limit:
            Raw pagination values; normalised by ``parse_pagination``.

        Returns
        -------
        dict
            ``{"data": [CandidateCard, ...], "pagination": {...}}`` where
            ``total`` counts every eligible candidate before shuffling.
        """
        log = logger.bind(user_id=str(user_id))
        request = parse_pagination(page, limit)

        profile = await db_session.scalar(
            select(DatingProfile).where(DatingProfile.user_id == user_id)
        )
        if profile is None:
            log.info("discovery_rejected", reason="profile_not_found")
            raise ProfileNotFoundError()

        conditions = self._eligibility_conditions(user_id)
        preferred_gender = profile.preferences.gender if profile.preferences else None
        if preferred_gender:
            conditions.append(User.gender == preferred_gender)

        total = await db_session.scalar(
            select(func.count(DatingProfile.id))
            .join(User, User.id == DatingProfile.user_id)
            .where(*conditions)
        )

        result = await db_session.execute(
            select(DatingProfile)
            .join(User, User.id == DatingProfile.user_id)
            .where(*conditions)
            .order_by(DatingProfile.created_at, DatingProfile.id)
            .offset(request.offset)
            .limit(request.limit)
        )
        cards = [self._to_card(candidate) for candidate in result.scalars().all()]

        # Page-local only: see module docstring.
        self._rng.shuffle(cards)

        log.info(
            "discovery_page_built",
            page=request.page,
            limit=request.limit,
            returned=len(cards),
            total=total,
            gender_filter=preferred_gender,
        )
        return paginate(cards, total or 0, request)

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _eligibility_conditions(user_id: uuid.UUID) -> list:
        swiped = select(Swipe.to_user_id).where(Swipe.from_user_id == user_id)
        blocked_by_me = select(UserBlock.blocked_user_id).where(UserBlock.blocker_id == user_id)
        blocked_me = select(UserBlock.blocker_id).where(UserBlock.blocked_user_id == user_id)
        has_photo = (
            select(DatingPhoto.id)
            .where(DatingPhoto.profile_id == DatingProfile.id)
            .exists()
        )
        return [
            DatingProfile.user_id != user_id,
            DatingProfile.user_id.not_in(swiped),
            DatingProfile.user_id.not_in(blocked_by_me),
            DatingProfile.user_id.not_in(blocked_me),
            DatingProfile.is_active.is_(True),
            has_photo,
        ]

    @staticmethod
    def _to_card(profile: DatingProfile) -> CandidateCard:
        first_photo = profile.photos[0].url if profile.photos else None
        return CandidateCard(
            user_id=profile.user_id,
            bio=profile.bio,
            photo_url=first_photo,
            user=UserSummary.model_validate(profile.user),
        )
