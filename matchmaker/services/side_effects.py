"""
Matchmaker — post-match side effects.

Runs inside the match coordinator's transaction, and only on the branch
whose ``Match`` insert succeeded, so every match gets exactly one private
conversation and one ``MATCH_CREATED`` notification per participant.
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from matchmaker.config import get_settings
from matchmaker.models.conversation import Conversation, ConversationParticipant
from matchmaker.models.enums import ConversationType, NotificationType
from matchmaker.models.notification import Notification

logger = structlog.get_logger("matchmaker.side_effects")


async def emit_match_side_effects(
    db_session: AsyncSession,
    match_id: uuid.UUID,
    user_id: uuid.UUID,
    target_user_id: uuid.UUID,
) -> Conversation:
    """Create the conversation and notifications for a freshly won match.

    Parameters
    ----------
    db_session:
        Session whose transaction inserted the match.  Nothing is committed
        here; the caller owns the transaction.
    match_id:
        Id of the match row just inserted.
    user_id:
        The user whose like completed the match.
    target_user_id:
        The user who liked first.

    Returns
    -------
    Conversation
        The new ``PRIVATE`` conversation (already flushed).
    """
    content = get_settings().MATCH_NOTIFICATION_CONTENT

    conversation = Conversation(type=ConversationType.PRIVATE.value)
    db_session.add(conversation)
    await db_session.flush()

    db_session.add_all(
        [
            ConversationParticipant(conversation_id=conversation.id, user_id=user_id),
            ConversationParticipant(conversation_id=conversation.id, user_id=target_user_id),
            Notification(
                type=NotificationType.MATCH_CREATED.value,
                sender_id=target_user_id,
                receiver_id=user_id,
                reference_id=match_id,
                content=content,
            ),
            Notification(
                type=NotificationType.MATCH_CREATED.value,
                sender_id=user_id,
                receiver_id=target_user_id,
                reference_id=match_id,
                content=content,
            ),
        ]
    )
    await db_session.flush()

    logger.info(
        "match_side_effects_emitted",
        match_id=str(match_id),
        conversation_id=str(conversation.id),
    )
    return conversation
