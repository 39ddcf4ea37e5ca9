"""
Matchmaker — canonical ordering of a symmetric user pair.
"""

from __future__ import annotations

import uuid


def canonical_pair(
    user_id: uuid.UUID, other_user_id: uuid.UUID
) -> tuple[uuid.UUID, uuid.UUID]:
    """Return ``(smaller, larger)`` for two distinct user ids.

    UUIDs order by their 128-bit integer value, which is the same order as
    their canonical lowercase hex strings, so the result does not depend on
    which of the two users is passed first.

    >>> a = uuid.UUID(int=1); b = uuid.UUID(int=2)
    >>> canonical_pair(b, a) == canonical_pair(a, b) == (a, b)
    True
    """
    if user_id == other_user_id:
        raise ValueError("A pair needs two distinct users")
    if user_id < other_user_id:
        return user_id, other_user_id
    return other_user_id, user_id
