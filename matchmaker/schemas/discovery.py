from typing import Optional
from uuid import UUID

from matchmaker.schemas.common import CamelModel, UserSummary


class CandidateCard(CamelModel):
    """Card summary only; the full profile lives in the profile module."""

    user_id: UUID
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    user: UserSummary
