"""SQLAlchemy ORM models."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """User profile model."""

    __tablename__ = "profiles"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(100))
    image: Mapped[str | None] = mapped_column(String(500))
    bio: Mapped[str | None] = mapped_column(Text)
    location: Mapped[str | None] = mapped_column(String(100))
    website: Mapped[str | None] = mapped_column(String(500))
    # Written by GitHub sync only
    github_url: Mapped[str | None] = mapped_column(String(500))
    linkedin_url: Mapped[str | None] = mapped_column(String(500))
    twitter_url: Mapped[str | None] = mapped_column(String(500))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    preferences: Mapped[Optional["UserPreferencesModel"]] = relationship(
        "UserPreferencesModel",
        back_populates="user",
        cascade="all, delete-orphan",
        uselist=False,
    )
    favorites: Mapped[list["UserSmellModel"]] = relationship(
        "UserSmellModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )


class UserPreferencesModel(Base):
    """Per-user preferences (one-to-one with profiles)."""

    __tablename__ = "user_preferences"

    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    theme: Mapped[str] = mapped_column(
        String(10),
        CheckConstraint("theme IN ('light', 'dark', 'auto')"),
        nullable=False,
        default="auto",
    )
    default_difficulty: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "default_difficulty IN ('beginner', 'intermediate', 'advanced')"
        ),
        nullable=False,
        default="beginner",
    )
    email_updates: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    progress_reminders: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    new_smells: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    weekly_digest: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    profile_visibility: Mapped[str] = mapped_column(
        String(10),
        CheckConstraint("profile_visibility IN ('public', 'private')"),
        nullable=False,
        default="public",
    )
    show_progress: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    allow_analytics: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    user: Mapped["ProfileModel"] = relationship(
        "ProfileModel",
        back_populates="preferences",
    )


class SmellModel(Base):
    """Catalog smell. Owned by the catalog service; read-only here."""

    __tablename__ = "smells"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    difficulty: Mapped[str] = mapped_column(String(20), nullable=False, default="beginner")
    tags: Mapped[list[str]] = mapped_column(JSONB, default=list)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class UserSmellModel(Base):
    """Favorite edge between a profile and a smell."""

    __tablename__ = "user_smells"
    __table_args__ = (
        UniqueConstraint("user_id", "smell_id", name="uq_user_smells_user_smell"),
    )

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    smell_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("smells.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    # Relationships
    user: Mapped["ProfileModel"] = relationship(
        "ProfileModel",
        back_populates="favorites",
    )
    smell: Mapped["SmellModel"] = relationship("SmellModel")
