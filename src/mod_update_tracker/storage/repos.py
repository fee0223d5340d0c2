"""Repository pattern implementations for data access.

This module provides read access to projects, tracked-project
subscriptions, and guild notification settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import select

from mod_update_tracker.storage.models import (
    GuildModel,
    ProjectModel,
    TrackedProjectModel,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


@dataclass
class ProjectDTO:
    """Data transfer object for projects."""

    id: str
    platform: str
    name: str
    date_updated: datetime | None = None

    @classmethod
    def from_model(cls, model: ProjectModel) -> ProjectDTO:
        """Create DTO from SQLAlchemy model."""
        return cls(
            id=model.id,
            platform=model.platform,
            name=model.name,
            date_updated=model.date_updated,
        )


@dataclass
class TrackedProjectDTO:
    """Data transfer object for a project subscription."""

    project_id: str
    guild_id: str
    channel_id: str

    @classmethod
    def from_model(cls, model: TrackedProjectModel) -> TrackedProjectDTO:
        """Create DTO from SQLAlchemy model."""
        return cls(
            project_id=model.project_id,
            guild_id=model.guild_id,
            channel_id=model.channel_id,
        )


@dataclass
class GuildSettingsDTO:
    """Data transfer object for guild notification settings."""

    guild_id: str
    notification_style: str
    changelog_max_length: int

    @classmethod
    def from_model(cls, model: GuildModel) -> GuildSettingsDTO:
        """Create DTO from SQLAlchemy model."""
        return cls(
            guild_id=model.id,
            notification_style=model.notification_style,
            changelog_max_length=model.changelog_max_length,
        )


class ProjectRepository:
    """Repository for project data access."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_by_id(self, project_id: str) -> ProjectDTO | None:
        """Get a project by its upstream id.

        Args:
            project_id: Platform project id.

        Returns:
            ProjectDTO if found, None otherwise.
        """
        model = await self.session.get(ProjectModel, str(project_id))
        return ProjectDTO.from_model(model) if model else None


class TrackedProjectRepository:
    """Repository for tracked project subscriptions."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_project_id(self, project_id: str) -> list[TrackedProjectDTO]:
        """Get every guild channel subscribed to a project.

        Args:
            project_id: Platform project id.

        Returns:
            List of TrackedProjectDTOs, possibly empty.
        """
        result = await self.session.execute(
            select(TrackedProjectModel).where(TrackedProjectModel.project_id == str(project_id))
        )
        return [TrackedProjectDTO.from_model(m) for m in result.scalars().all()]


class GuildRepository:
    """Repository for guild notification settings."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_by_id(self, guild_id: str) -> GuildSettingsDTO | None:
        """Get a guild's notification settings.

        Args:
            guild_id: Discord guild id.

        Returns:
            GuildSettingsDTO if found, None otherwise.
        """
        model = await self.session.get(GuildModel, str(guild_id))
        return GuildSettingsDTO.from_model(model) if model else None
