"""Unit tests for canonical pair ordering."""
import uuid

import pytest

from matchmaker.utils.pairing import canonical_pair


class TestCanonicalPair:
    """The smaller id always comes first, whoever swiped."""

    def test_orders_smaller_first(self):
        low = uuid.UUID(int=1)
        high = uuid.UUID(int=2)
        assert canonical_pair(high, low) == (low, high)
        assert canonical_pair(low, high) == (low, high)

    def test_symmetric_for_random_ids(self):
        for _ in range(50):
            u, v = uuid.uuid4(), uuid.uuid4()
            assert canonical_pair(u, v) == canonical_pair(v, u)

    def test_matches_string_order(self):
        """Integer order and lowercase hex order agree."""
        u = uuid.UUID("f0000000-0000-4000-8000-000000000000")
        v = uuid.UUID("0fffffff-ffff-4fff-bfff-ffffffffffff")
        first, second = canonical_pair(u, v)
        assert str(first) < str(second)
        assert first == v

    def test_same_user_rejected(self):
        u = uuid.uuid4()
        with pytest.raises(ValueError):
            canonical_pair(u, u)
