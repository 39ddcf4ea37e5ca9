"""
Matchmaker — Swipe Recorder

Validates a single directed swipe and persists it.  PASS swipes are written
here; LIKE swipes are handed to the ``MatchCoordinator`` which writes the
swipe and resolves a match in one transaction.

Validation order (each check short-circuits):
  1. self-swipe            -> CANNOT_SWIPE_SELF
  2. swipe already exists  -> ALREADY_SWIPED
  3. swiper profile        -> DATING_PROFILE_NOT_FOUND (missing or inactive)
  4. target profile        -> DATING_PROFILE_NOT_FOUND (missing or inactive)
  5. block either way      -> BLOCKED_USER
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from matchmaker.config import get_settings
from matchmaker.errors import (
    AlreadySwipedError,
    BlockedUserError,
    CannotSwipeSelfError,
    InternalError,
    ProfileNotFoundError,
)
from matchmaker.models.block import UserBlock
from matchmaker.models.enums import SwipeAction
from matchmaker.models.match import Swipe
from matchmaker.models.profile import DatingProfile
from matchmaker.services.match_coordinator import (
    MatchCoordinator,
    SwipeOutcome,
    insert_swipe,
)

logger = structlog.get_logger("matchmaker.swipe_service")


class SwipeService:
    """Entry point for ``POST /dating/swipe``."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        coordinator: MatchCoordinator | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.coordinator = coordinator or MatchCoordinator(session_factory)

    # ── Public API ────────────────────────────────────────────────────────

    async def swipe(
        self,
        from_user_id: uuid.UUID,
        to_user_id: uuid.UUID,
        action: SwipeAction,
    ) -> SwipeOutcome:
        """Validate and record one swipe.

        Parameters
        ----------
        from_user_id:
            The authenticated user.
        to_user_id:
            The user being swiped on.
        action:
            ``LIKE`` or ``PASS``.

        Returns
        -------
        SwipeOutcome
            For PASS, always ``matched=False``.  For LIKE, whatever the
            coordinator resolved.
        """
        log = logger.bind(
            from_user_id=str(from_user_id),
            to_user_id=str(to_user_id),
            action=action.value,
        )

        if from_user_id == to_user_id:
            log.info("swipe_rejected", reason="self")
            raise CannotSwipeSelfError()

        async with self.session_factory() as session:
            await self._validate(session, from_user_id, to_user_id, log)

        if action is SwipeAction.LIKE:
            return await self.coordinator.like(from_user_id, to_user_id)

        return await self._record_pass(from_user_id, to_user_id, log)

    # ── Internals ─────────────────────────────────────────────────────────

    async def _validate(
        self,
        db_session: AsyncSession,
        from_user_id: uuid.UUID,
        to_user_id: uuid.UUID,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        existing = await db_session.scalar(
            select(Swipe.id).where(
                Swipe.from_user_id == from_user_id,
                Swipe.to_user_id == to_user_id,
            )
        )
        if existing is not None:
            log.info("swipe_rejected", reason="already_swiped")
            raise AlreadySwipedError()

        for user_id in (from_user_id, to_user_id):
            if not await self._has_active_profile(db_session, user_id):
                log.info("swipe_rejected", reason="profile_not_found", user_id=str(user_id))
                raise ProfileNotFoundError()

        if await self._is_blocked(db_session, from_user_id, to_user_id):
            log.info("swipe_rejected", reason="blocked")
            raise BlockedUserError()

    async def _has_active_profile(self, db_session: AsyncSession, user_id: uuid.UUID) -> bool:
        is_active = await db_session.scalar(
            select(DatingProfile.is_active).where(DatingProfile.user_id == user_id)
        )
        return bool(is_active)

    async def _is_blocked(
        self,
        db_session: AsyncSession,
        user_id: uuid.UUID,
        other_user_id: uuid.UUID,
    ) -> bool:
        block_id = await db_session.scalar(
            select(UserBlock.id)
            .where(
                or_(
                    and_(
                        UserBlock.blocker_id == user_id,
                        UserBlock.blocked_user_id == other_user_id,
                    ),
                    and_(
                        UserBlock.blocker_id == other_user_id,
                        UserBlock.blocked_user_id == user_id,
                    ),
                )
            )
            .limit(1)
        )
        return block_id is not None

    async def _record_pass(
        self,
        from_user_id: uuid.UUID,
        to_user_id: uuid.UUID,
        log: structlog.stdlib.BoundLogger,
    ) -> SwipeOutcome:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    swipe = await insert_swipe(
                        session, from_user_id, to_user_id, SwipeAction.PASS
                    )
        except SQLAlchemyError as exc:
            log.exception("pass_transaction_failed")
            message = None if get_settings().is_production else str(exc)
            raise InternalError(message) from exc

        log.info("pass_recorded", swipe_id=str(swipe.id))
        return SwipeOutcome(swipe=swipe, matched=False)
