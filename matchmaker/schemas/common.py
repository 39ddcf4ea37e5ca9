from datetime import date, datetime
from typing import Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for every wire schema: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserSummary(CamelModel):
    id: UUID
    full_name: str
    avatar: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class Paginated(CamelModel, Generic[T]):
    data: list[T]
    pagination: Pagination


class Envelope(CamelModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: T


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    code: str
    details: Optional[list[dict]] = None
    timestamp: Optional[datetime] = None
