"""Tests for DiscoveryService — candidate eligibility, gender filter and
page-local shuffling."""
import random

import pytest

from matchmaker.errors import ProfileNotFoundError
from matchmaker.models.enums import SwipeAction
from matchmaker.services.discovery_service import DiscoveryService


@pytest.fixture
def discovery_service():
    return DiscoveryService(rng=random.Random(7))


async def candidate_ids(service, user_id, session_factory, **kwargs):
    async with session_factory() as session:
        result = await service.get_candidates(user_id, session, **kwargs)
    return {card.user_id for card in result["data"]}, result["pagination"]


class TestEligibility:

    @pytest.mark.asyncio
    async def test_returns_other_active_profiles(
        self, discovery_service, make_user, session_factory
    ):
        me = await make_user()
        others = {await make_user() for _ in range(3)}

        ids, pagination = await candidate_ids(discovery_service, me, session_factory)

        assert ids == others
        assert me not in ids
        assert pagination["total"] == 3

    @pytest.mark.asyncio
    async def test_excludes_swiped_users(
        self, discovery_service, make_user, make_swipe, session_factory
    ):
        me = await make_user()
        liked, passed, fresh = await make_user(), await make_user(), await make_user()
        await make_swipe(me, liked, SwipeAction.LIKE)
        await make_swipe(me, passed, SwipeAction.PASS)

        ids, _ = await candidate_ids(discovery_service, me, session_factory)

        assert ids == {fresh}

    @pytest.mark.asyncio
    async def test_being_swiped_does_not_exclude(
        self, discovery_service, make_user, make_swipe, session_factory
    ):
        """Only the requester's own swipes hide a candidate."""
        me = await make_user()
        admirer = await make_user()
        await make_swipe(admirer, me, SwipeAction.LIKE)

        ids, _ = await candidate_ids(discovery_service, me, session_factory)

        assert ids == {admirer}

    @pytest.mark.asyncio
    async def test_excludes_blocks_in_both_directions(
        self, discovery_service, make_user, make_block, session_factory
    ):
        me = await make_user()
        blocked_by_me, blocked_me, fresh = await make_user(), await make_user(), await make_user()
        await make_block(me, blocked_by_me)
        await make_block(blocked_me, me)

        ids, _ = await candidate_ids(discovery_service, me, session_factory)

        assert ids == {fresh}

    @pytest.mark.asyncio
    async def test_excludes_inactive_and_photoless_profiles(
        self, discovery_service, make_user, session_factory
    ):
        me = await make_user()
        await make_user(active=False)
        await make_user(photos=0)
        await make_user(profile=False)
        visible = await make_user(photos=3)

        ids, pagination = await candidate_ids(discovery_service, me, session_factory)

        assert ids == {visible}
        assert pagination["total"] == 1

    @pytest.mark.asyncio
    async def test_inactive_requester_can_browse(
        self, discovery_service, make_user, session_factory
    ):
        me = await make_user(active=False)
        other = await make_user()

        ids, _ = await candidate_ids(discovery_service, me, session_factory)

        assert ids == {other}

    @pytest.mark.asyncio
    async def test_requires_profile(self, discovery_service, make_user, session_factory):
        me = await make_user(profile=False)
        async with session_factory() as session:
            with pytest.raises(ProfileNotFoundError):
                await discovery_service.get_candidates(me, session)

    @pytest.mark.asyncio
    async def test_gender_preference_filters(
        self, discovery_service, make_user, session_factory
    ):
        me = await make_user(gender="MALE", preferred_gender="FEMALE")
        woman = await make_user(gender="FEMALE")
        await make_user(gender="MALE")

        ids, pagination = await candidate_ids(discovery_service, me, session_factory)

        assert ids == {woman}
        assert pagination["total"] == 1

    @pytest.mark.asyncio
    async def test_no_preference_means_any_gender(
        self, discovery_service, make_user, session_factory
    ):
        me = await make_user(preferred_gender=None)
        expected = {await make_user(gender="FEMALE"), await make_user(gender="MALE")}

        ids, _ = await candidate_ids(discovery_service, me, session_factory)

        assert ids == expected


class TestCandidateCard:

    @pytest.mark.asyncio
    async def test_card_uses_first_photo(self, discovery_service, make_user, session_factory):
        me = await make_user()
        other = await make_user(full_name="Ada Lovelace", photos=3)

        async with session_factory() as session:
            result = await discovery_service.get_candidates(me, session)

        card = result["data"][0]
        assert card.user_id == other
        assert card.photo_url == f"https://cdn.example.com/{other}/0.jpg"
        assert card.user.full_name == "Ada Lovelace"
        assert card.bio


class TestPagination:

    @pytest.mark.asyncio
    async def test_total_counts_all_candidates(
        self, discovery_service, make_user, session_factory
    ):
        me = await make_user()
        for _ in range(5):
            await make_user()

        ids, pagination = await candidate_ids(discovery_service, me, session_factory, limit=2)

        assert len(ids) == 2
        assert pagination["total"] == 5
        assert pagination["total_pages"] == 3
        assert pagination["has_next"] is True

    @pytest.mark.asyncio
    async def test_pages_do_not_overlap(self, discovery_service, make_user, session_factory):
        me = await make_user()
        everyone = {await make_user() for _ in range(5)}

        seen = set()
        for page in (1, 2, 3):
            ids, _ = await candidate_ids(
                discovery_service, me, session_factory, page=page, limit=2
            )
            assert not ids & seen
            seen |= ids

        assert seen == everyone

    @pytest.mark.asyncio
    async def test_shuffle_is_page_local(self, make_user, session_factory):
        """Shuffling reorders a page but never changes which users are on it."""
        me = await make_user()
        for _ in range(6):
            await make_user()

        pages = []
        for seed in (1, 2, 3):
            service = DiscoveryService(rng=random.Random(seed))
            async with session_factory() as session:
                result = await service.get_candidates(me, session, page=1, limit=3)
            pages.append([card.user_id for card in result["data"]])

        assert all(set(p) == set(pages[0]) for p in pages)

    @pytest.mark.asyncio
    async def test_page_beyond_end_is_empty(
        self, discovery_service, make_user, session_factory
    ):
        me = await make_user()
        await make_user()

        ids, pagination = await candidate_ids(
            discovery_service, me, session_factory, page=5, limit=10
        )

        assert ids == set()
        assert pagination["total"] == 1
        assert pagination["has_next"] is False
