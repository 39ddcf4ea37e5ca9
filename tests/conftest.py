"""Shared pytest fixtures for matchmaker tests.

Database tests run against a throwaway SQLite file per test (real
transactions, real unique constraints), through the same engine builder the
application uses.  Helpers open and close their own short sessions so they
never hold the database lock while a service is running.
"""
import os
import tempfile
import uuid
from pathlib import Path

os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{Path(tempfile.gettempdir()) / 'matchmaker-import.db'}",
)

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from matchmaker.database import Base, create_engine_from_url, get_db, get_session_factory
from matchmaker.models import (
    DatingPhoto,
    DatingPreference,
    DatingProfile,
    Match,
    Swipe,
    User,
    UserBlock,
)
from matchmaker.models.enums import SwipeAction
from matchmaker.utils.pairing import canonical_pair


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    engine = create_engine_from_url(f"sqlite+aiosqlite:///{tmp_path / 'matchmaker.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, expire_on_commit=False)


@pytest.fixture
def make_user(session_factory):
    """Create a user (with an active, photographed profile by default)."""

    async def _make(
        *,
        user_id=None,
        full_name=None,
        gender="FEMALE",
        profile=True,
        active=True,
        photos=1,
        preferred_gender=None,
    ) -> uuid.UUID:
        user = User(
            id=user_id or uuid.uuid4(),
            full_name=full_name or f"User {uuid.uuid4().hex[:6]}",
            gender=gender,
        )
        async with session_factory() as session, session.begin():
            session.add(user)
            if profile:
                session.add(
                    DatingProfile(
                        user_id=user.id,
                        bio="Coffee, hiking, and bad puns.",
                        is_active=active,
                        photos=[
                            DatingPhoto(url=f"https://cdn.example.com/{user.id}/{i}.jpg", order=i)
                            for i in range(photos)
                        ],
                        preferences=DatingPreference(
                            gender=preferred_gender, age_min=18, age_max=99
                        ),
                    )
                )
        return user.id

    return _make


@pytest.fixture
def make_swipe(session_factory):
    async def _make(from_user_id, to_user_id, action=SwipeAction.LIKE) -> uuid.UUID:
        swipe = Swipe(from_user_id=from_user_id, to_user_id=to_user_id, action=action.value)
        async with session_factory() as session, session.begin():
            session.add(swipe)
        return swipe.id

    return _make


@pytest.fixture
def make_block(session_factory):
    async def _make(blocker_id, blocked_user_id) -> None:
        async with session_factory() as session, session.begin():
            session.add(UserBlock(blocker_id=blocker_id, blocked_user_id=blocked_user_id))

    return _make


@pytest.fixture
def make_match(session_factory):
    async def _make(user_id, other_user_id) -> uuid.UUID:
        user_a_id, user_b_id = canonical_pair(user_id, other_user_id)
        match = Match(user_a_id=user_a_id, user_b_id=user_b_id)
        async with session_factory() as session, session.begin():
            session.add(match)
        return match.id

    return _make


@pytest.fixture
def count_rows(session_factory):
    """Count rows of ``model`` matching optional criteria."""

    async def _count(model, *criteria) -> int:
        async with session_factory() as session:
            stmt = select(func.count()).select_from(model)
            if criteria:
                stmt = stmt.where(*criteria)
            return await session.scalar(stmt)

    return _count


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client bound to the app, with DB dependencies pointed at the
    per-test database."""
    from matchmaker.main import app

    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_db] = _get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http

    app.dependency_overrides.clear()
