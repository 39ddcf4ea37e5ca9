"""
Matchmaker — Dating profile, photos and discovery preferences.

Profiles are owned by the profile module of the platform; this service only
reads them (activity flag, photos, gender preference).
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    true,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from matchmaker.database import Base
from matchmaker.models.user import _utcnow


class DatingProfile(Base):
    __tablename__ = "dating_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False
    )

    # ── Relationships ──────────────────────────────────────────────
    user: Mapped["User"] = relationship(
        "User", back_populates="dating_profile", lazy="selectin"
    )
    photos: Mapped[list["DatingPhoto"]] = relationship(
        "DatingPhoto",
        back_populates="profile",
        order_by="DatingPhoto.order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    preferences: Mapped["DatingPreference"] = relationship(
        "DatingPreference",
        back_populates="profile",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<DatingProfile user={self.user_id} active={self.is_active}>"


class DatingPhoto(Base):
    __tablename__ = "dating_photos"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("dating_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url: Mapped[str] = mapped_column(String, nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False, comment="0-5")

    profile: Mapped["DatingProfile"] = relationship("DatingProfile", back_populates="photos")


class DatingPreference(Base):
    __tablename__ = "dating_preferences"
    __table_args__ = (
        UniqueConstraint("profile_id", name="uq_dating_preference_profile"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    profile_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("dating_profiles.id", ondelete="CASCADE"), nullable=False
    )
    gender: Mapped[str | None] = mapped_column(
        String(16), nullable=True, comment="Preferred gender; NULL means any"
    )
    age_min: Mapped[int] = mapped_column(Integer, default=18, nullable=False)
    age_max: Mapped[int] = mapped_column(Integer, default=99, nullable=False)
    max_distance: Mapped[int | None] = mapped_column(Integer, nullable=True, comment="km")

    profile: Mapped["DatingProfile"] = relationship("DatingProfile", back_populates="preferences")
