"""
Matchmaker — page/limit parsing and the paginated response envelope.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

from matchmaker.config import get_settings


@dataclass(frozen=True)
class PageRequest:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_pagination(page: int | None = None, limit: int | None = None) -> PageRequest:
    """Normalise raw query values.

    ``page`` is floored at 1; ``limit`` is clamped to
    ``[1, PAGINATION_MAX_LIMIT]``.  Missing values take the configured
    defaults.
    """
    settings = get_settings()
    page = settings.PAGINATION_DEFAULT_PAGE if page is None else page
    limit = settings.PAGINATION_DEFAULT_LIMIT if limit is None else limit
    return PageRequest(
        page=max(1, page),
        limit=min(settings.PAGINATION_MAX_LIMIT, max(1, limit)),
    )


def paginate(data: Sequence[Any], total: int, request: PageRequest) -> dict:
    total_pages = math.ceil(total / request.limit)
    return {
        "data": list(data),
        "pagination": {
            "page": request.page,
            "limit": request.limit,
            "total": total,
            "total_pages": total_pages,
            "has_next": request.page < total_pages,
            "has_prev": request.page > 1,
        },
    }
