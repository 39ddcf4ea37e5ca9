"""
Matchmaker — User model (read-only view of the platform account).
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from matchmaker.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    avatar: Mapped[str | None] = mapped_column(String, nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[str | None] = mapped_column(
        String(16), nullable=True, comment="MALE / FEMALE / OTHER"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )

    # ── Relationships ──────────────────────────────────────────────
    dating_profile: Mapped["DatingProfile"] = relationship(
        "DatingProfile", back_populates="user", uselist=False
    )

    def __repr__(self) -> str:
        return f"<User {self.full_name!r} id={self.id}>"
