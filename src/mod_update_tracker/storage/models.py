"""SQLAlchemy models for persistent storage.

This module defines the database schema for tracked projects, the
guild/channel subscriptions to them, and per-guild notification settings.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

NOTIFICATION_STYLE_NORMAL = "normal"
NOTIFICATION_STYLE_COMPACT = "compact"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class ProjectModel(Base):
    """SQLAlchemy model for projects known to the bot.

    ``id`` is the upstream platform's project id (CurseForge mod id or
    Modrinth project id), stored as text so both platforms fit.
    """

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    platform: Mapped[str] = mapped_column(String(20), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    date_updated: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )


class GuildModel(Base):
    """SQLAlchemy model for per-guild notification settings."""

    __tablename__ = "guilds"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    notification_style: Mapped[str] = mapped_column(
        String(20), nullable=False, default=NOTIFICATION_STYLE_NORMAL
    )
    changelog_max_length: Mapped[int] = mapped_column(Integer, nullable=False, default=4000)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )


class TrackedProjectModel(Base):
    """SQLAlchemy model for a guild channel subscribed to a project."""

    __tablename__ = "tracked_projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    guild_id: Mapped[str] = mapped_column(
        String(20), ForeignKey("guilds.id", ondelete="CASCADE"), nullable=False
    )
    channel_id: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    __table_args__ = (
        UniqueConstraint(
            "project_id", "guild_id", "channel_id", name="uq_tracked_project_destination"
        ),
        Index("idx_tracked_projects_project", "project_id"),
    )
