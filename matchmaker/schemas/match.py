from datetime import datetime
from uuid import UUID

from matchmaker.schemas.common import CamelModel, UserSummary


class MatchListItem(CamelModel):
    id: UUID
    matched_user: UserSummary
    created_at: datetime
