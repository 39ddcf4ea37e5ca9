"""
Matchmaker — Match Coordinator

Turns a validated LIKE into a swipe row and, when the reverse LIKE already
exists, into a match.  Everything happens in one transaction:

  Recorded            LIKE swipe inserted (duplicate -> ALREADY_SWIPED)
  ReciprocityChecked  reverse LIKE looked up under a lock on both profiles
  NoMatch             no reverse LIKE; commit the swipe
  MatchCreated        canonical Match insert won; side effects emitted
  MatchAlreadyExists  canonical Match insert lost to a concurrent request;
                      the winner's row is read back, side effects skipped

The unique constraint on ``(user_a_id, user_b_id)`` is the only arbiter of
the creation race.  The loser never retries the insert: the conflict itself
says the match exists.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from typing import Awaitable, Callable

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from matchmaker.config import get_settings
from matchmaker.errors import AlreadySwipedError, InternalError, MatchConflictError
from matchmaker.models.enums import SwipeAction
from matchmaker.models.match import Match, Swipe
from matchmaker.models.profile import DatingProfile
from matchmaker.services.side_effects import emit_match_side_effects
from matchmaker.utils.pairing import canonical_pair

logger = structlog.get_logger("matchmaker.match_coordinator")

SideEffectEmitter = Callable[
    [AsyncSession, uuid.UUID, uuid.UUID, uuid.UUID], Awaitable[object]
]


class MatchState(str, enum.Enum):
    NO_MATCH = "no_match"
    MATCH_CREATED = "match_created"
    MATCH_ALREADY_EXISTS = "match_already_exists"


@dataclass
class SwipeOutcome:
    swipe: Swipe
    matched: bool
    match: Match | None = None
    side_effects_applied: bool = False
    state: MatchState = MatchState.NO_MATCH


async def insert_swipe(
    db_session: AsyncSession,
    from_user_id: uuid.UUID,
    to_user_id: uuid.UUID,
    action: SwipeAction,
) -> Swipe:
    """Insert one directed swipe inside a SAVEPOINT.

    A uniqueness conflict on ``(from_user_id, to_user_id)`` means a
    concurrent request for the same edge committed first; it is reported as
    ``AlreadySwipedError``.  Any other integrity failure propagates.
    """
    swipe = Swipe(from_user_id=from_user_id, to_user_id=to_user_id, action=action.value)
    try:
        async with db_session.begin_nested():
            db_session.add(swipe)
            await db_session.flush()
    except IntegrityError:
        existing = await db_session.scalar(
            select(Swipe.id).where(
                Swipe.from_user_id == from_user_id,
                Swipe.to_user_id == to_user_id,
            )
        )
        if existing is None:
            raise
        raise AlreadySwipedError() from None
    return swipe


class MatchCoordinator:
    """Atomic LIKE -> reciprocity check -> match creation.

    The coordinator owns its transaction, so it takes a session factory
    rather than a session.  The side-effect emitter is injectable for tests.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        emit_side_effects: SideEffectEmitter = emit_match_side_effects,
    ) -> None:
        self.session_factory = session_factory
        self.emit_side_effects = emit_side_effects

    # ── Public API ────────────────────────────────────────────────────────

    async def like(self, from_user_id: uuid.UUID, to_user_id: uuid.UUID) -> SwipeOutcome:
        """Record ``from_user_id`` liking ``to_user_id`` and resolve a match.

        Parameters
        ----------
        from_user_id:
            The swiping user.  Validation (self-swipe, profiles, blocks) has
            already been done by the swipe recorder.
        to_user_id:
            The liked user.

        Returns
        -------
        SwipeOutcome
            ``matched`` is True whenever the reverse like exists, whether
            this call created the match or adopted a concurrent one;
            ``side_effects_applied`` is True only for the creator.

        Raises
        ------
        AlreadySwipedError
            A concurrent identical like committed first.
        InternalError
            Any other persistence failure.  Nothing from the attempt is
            committed, so the request can be retried as-is.
        """
        log = logger.bind(from_user_id=str(from_user_id), to_user_id=str(to_user_id))

        try:
            async with self.session_factory() as session:
                async with session.begin():
                    outcome = await self._like_in_transaction(
                        session, from_user_id, to_user_id
                    )
        except AlreadySwipedError:
            log.info("like_duplicate_rejected")
            raise
        except SQLAlchemyError as exc:
            log.exception("like_transaction_failed")
            message = None if get_settings().is_production else str(exc)
            raise InternalError(message) from exc

        log.info(
            "like_recorded",
            state=outcome.state.value,
            match_id=str(outcome.match.id) if outcome.match else None,
        )
        return outcome

    # ── Transaction body ──────────────────────────────────────────────────

    async def _like_in_transaction(
        self,
        db_session: AsyncSession,
        from_user_id: uuid.UUID,
        to_user_id: uuid.UUID,
    ) -> SwipeOutcome:
        swipe = await insert_swipe(db_session, from_user_id, to_user_id, SwipeAction.LIKE)

        user_a_id, user_b_id = canonical_pair(from_user_id, to_user_id)
        await self._lock_pair(db_session, user_a_id, user_b_id)

        if not await self._has_reciprocal_like(db_session, from_user_id, to_user_id):
            return SwipeOutcome(swipe=swipe, matched=False)

        try:
            match = await self._insert_match(db_session, user_a_id, user_b_id)
        except MatchConflictError:
            logger.info(
                "match_race_lost",
                user_a_id=str(user_a_id),
                user_b_id=str(user_b_id),
            )
            match = await self._get_match_by_pair(db_session, user_a_id, user_b_id)
            return SwipeOutcome(
                swipe=swipe,
                matched=True,
                match=match,
                side_effects_applied=False,
                state=MatchState.MATCH_ALREADY_EXISTS,
            )

        await self.emit_side_effects(db_session, match.id, from_user_id, to_user_id)
        logger.info("match_created", match_id=str(match.id))
        return SwipeOutcome(
            swipe=swipe,
            matched=True,
            match=match,
            side_effects_applied=True,
            state=MatchState.MATCH_CREATED,
        )

    async def _lock_pair(
        self,
        db_session: AsyncSession,
        user_a_id: uuid.UUID,
        user_b_id: uuid.UUID,
    ) -> None:
        """Row-lock both profiles in canonical order.

        Two opposite likes for the same pair queue here, so the second one
        always sees the first one's committed swipe.  SQLite ignores
        ``FOR UPDATE``; its writers are already serialised.
        """
        await db_session.execute(
            select(DatingProfile.id)
            .where(DatingProfile.user_id.in_([user_a_id, user_b_id]))
            .order_by(DatingProfile.user_id)
            .with_for_update()
        )

    async def _has_reciprocal_like(
        self,
        db_session: AsyncSession,
        from_user_id: uuid.UUID,
        to_user_id: uuid.UUID,
    ) -> bool:
        reciprocal = await db_session.scalar(
            select(Swipe.id).where(
                Swipe.from_user_id == to_user_id,
                Swipe.to_user_id == from_user_id,
                Swipe.action == SwipeAction.LIKE.value,
            )
        )
        return reciprocal is not None

    async def _insert_match(
        self,
        db_session: AsyncSession,
        user_a_id: uuid.UUID,
        user_b_id: uuid.UUID,
    ) -> Match:
        """Try to insert the canonical match row inside a SAVEPOINT.

        Only the SAVEPOINT is rolled back on conflict; the swipe inserted
        earlier in the transaction survives.
        """
        match = Match(user_a_id=user_a_id, user_b_id=user_b_id)
        try:
            async with db_session.begin_nested():
                db_session.add(match)
                await db_session.flush()
        except IntegrityError as exc:
            raise MatchConflictError(
                user_a_id=str(user_a_id), user_b_id=str(user_b_id)
            ) from exc
        return match

    async def _get_match_by_pair(
        self,
        db_session: AsyncSession,
        user_a_id: uuid.UUID,
        user_b_id: uuid.UUID,
    ) -> Match:
        match = await db_session.scalar(
            select(Match).where(
                Match.user_a_id == user_a_id,
                Match.user_b_id == user_b_id,
            )
        )
        if match is None:
            # The conflict was not on the pair key (e.g. a foreign key).
            raise InternalError("Match insert failed without an existing match")
        return match
