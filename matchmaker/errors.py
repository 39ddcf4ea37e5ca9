"""
Matchmaker — domain exceptions.

Services raise these; ``matchmaker.main`` renders them into the platform
error envelope.  Each class carries a stable machine-readable ``code`` and
the HTTP status the API maps it to.
"""

from __future__ import annotations

from typing import Any


class DatingError(Exception):
    """Base exception for swipe / match / discovery errors."""

    code: str = "DATING_ERROR"
    status_code: int = 400
    default_message: str = "Dating operation failed"

    def __init__(self, message: str | None = None, **context: Any) -> None:
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)


# ── Validation ────────────────────────────────────────────────────────────────

class ValidationError(DatingError):
    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Invalid request"


class CannotSwipeSelfError(ValidationError):
    code = "CANNOT_SWIPE_SELF"
    default_message = "You cannot swipe on yourself"


class AlreadySwipedError(ValidationError):
    code = "ALREADY_SWIPED"
    status_code = 409
    default_message = "You have already swiped on this user"


# ── Not found ─────────────────────────────────────────────────────────────────

class NotFoundError(DatingError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"


class ProfileNotFoundError(NotFoundError):
    code = "DATING_PROFILE_NOT_FOUND"
    default_message = "Dating profile not found"


class MatchNotFoundError(NotFoundError):
    code = "MATCH_NOT_FOUND"
    default_message = "Match not found"


# ── Forbidden ─────────────────────────────────────────────────────────────────

class ForbiddenError(DatingError):
    code = "FORBIDDEN"
    status_code = 403
    default_message = "You are not allowed to perform this action"


class BlockedUserError(ForbiddenError):
    code = "BLOCKED_USER"
    default_message = "This user is not available"


class NotParticipantError(ForbiddenError):
    default_message = "You are not a participant of this match"


# ── Conflict (resolved internally) ────────────────────────────────────────────

class ConflictError(DatingError):
    code = "CONFLICT"
    status_code = 409
    default_message = "Conflicting write"


class MatchConflictError(ConflictError):
    """The canonical match row was inserted by a concurrent transaction.

    Raised and caught inside the match coordinator only; callers never see
    it.
    """

    code = "MATCH_CONFLICT"
    default_message = "Match already created by a concurrent request"


# ── Internal ──────────────────────────────────────────────────────────────────

class InternalError(DatingError):
    code = "INTERNAL_ERROR"
    status_code = 500
    default_message = "Something went wrong, please try again later"
