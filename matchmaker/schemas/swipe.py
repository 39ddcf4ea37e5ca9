from datetime import datetime
from typing import Optional
from uuid import UUID

from matchmaker.models.enums import SwipeAction
from matchmaker.schemas.common import CamelModel


class SwipeCreate(CamelModel):
    target_user_id: UUID
    action: SwipeAction


class SwipeRead(CamelModel):
    id: UUID
    from_user_id: UUID
    to_user_id: UUID
    action: SwipeAction
    created_at: datetime


class MatchRead(CamelModel):
    id: UUID
    user_a_id: UUID
    user_b_id: UUID
    created_at: datetime


class SwipeResult(CamelModel):
    swipe: SwipeRead
    matched: bool
    match: Optional[MatchRead] = None
    side_effects_applied: bool = False
