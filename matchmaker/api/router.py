"""
Matchmaker — Main API Router

Aggregates all sub-routers under a single prefix so that ``matchmaker.main``
can mount the entire API surface with one ``include_router`` call.
"""

from fastapi import APIRouter

from matchmaker.api import discovery, matches, swipe

router = APIRouter()

router.include_router(swipe.router, prefix="/dating/swipe", tags=["Swipe"])
router.include_router(discovery.router, prefix="/dating/discovery", tags=["Discovery"])
router.include_router(matches.router, prefix="/dating/matches", tags=["Matches"])
