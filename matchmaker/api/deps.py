"""
Matchmaker — shared FastAPI dependencies.

Authentication happens upstream; the gateway forwards the authenticated
user's id in a trusted header (``X-User-Id`` by default).
"""

from __future__ import annotations

import uuid

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from matchmaker.config import get_settings
from matchmaker.database import get_session_factory
from matchmaker.services.discovery_service import DiscoveryService
from matchmaker.services.match_service import MatchService
from matchmaker.services.swipe_service import SwipeService


def get_current_user_id(request: Request) -> uuid.UUID:
    header = get_settings().USER_ID_HEADER
    raw = request.headers.get(header)
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required.",
        )
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Malformed {header} header.",
        )


# ── Service providers ─────────────────────────────────────────────────────────

_discovery_service: DiscoveryService | None = None
_match_service: MatchService | None = None


def get_swipe_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SwipeService:
    return SwipeService(session_factory)


def get_discovery_service() -> DiscoveryService:
    global _discovery_service
    if _discovery_service is None:
        _discovery_service = DiscoveryService()
    return _discovery_service


def get_match_service() -> MatchService:
    global _match_service
    if _match_service is None:
        _match_service = MatchService()
    return _match_service
