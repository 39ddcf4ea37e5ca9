"""
Matchmaker — Match Reader

Lists a user's matches and returns a single match, always from the point of
view of the caller: each item carries the *other* participant.
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from matchmaker.errors import MatchNotFoundError, NotParticipantError
from matchmaker.models.match import Match
from matchmaker.schemas.common import UserSummary
from matchmaker.schemas.match import MatchListItem
from matchmaker.utils.pagination import paginate, parse_pagination

logger = structlog.get_logger("matchmaker.match_service")


class MatchService:

    async def list_matches(
        self,
        user_id: uuid.UUID,
        db_session: AsyncSession,
        page: int | None = None,
        limit: int | None = None,
    ) -> dict:
        """Return the caller's matches, newest first, paginated."""
        log = logger.bind(user_id=str(user_id))
        request = parse_pagination(page, limit)

        involves_user = or_(Match.user_a_id == user_id, Match.user_b_id == user_id)

        total = await db_session.scalar(
            select(func.count(Match.id)).where(involves_user)
        )
        result = await db_session.execute(
            select(Match)
            .where(involves_user)
            .order_by(Match.created_at.desc(), Match.id)
            .offset(request.offset)
            .limit(request.limit)
        )
        items = [self._to_item(match, user_id) for match in result.scalars().all()]

        log.info("list_matches_complete", count=len(items), total=total)
        return paginate(items, total or 0, request)

    async def get_match_detail(
        self,
        user_id: uuid.UUID,
        match_id: uuid.UUID,
        db_session: AsyncSession,
    ) -> MatchListItem:
        """Return one match if the caller is one of its two users.

        Raises ``MatchNotFoundError`` for an unknown id and
        ``NotParticipantError`` when the caller is not in the pair.
        """
        log = logger.bind(user_id=str(user_id), match_id=str(match_id))

        match = await db_session.scalar(select(Match).where(Match.id == match_id))
        if match is None:
            log.info("match_not_found")
            raise MatchNotFoundError()

        if not match.involves(user_id):
            log.warning("match_access_denied")
            raise NotParticipantError()

        return self._to_item(match, user_id)

    @staticmethod
    def _to_item(match: Match, user_id: uuid.UUID) -> MatchListItem:
        other = match.user_b if match.user_a_id == user_id else match.user_a
        return MatchListItem(
            id=match.id,
            matched_user=UserSummary.model_validate(other),
            created_at=match.created_at,
        )
