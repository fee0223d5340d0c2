"""Update notification dispatcher.

Resolves a project's latest version once, then delivers a message to
every guild channel tracking the project.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from mod_update_tracker.notifier.formatter import UpdateMessageFormatter
from mod_update_tracker.storage.models import NOTIFICATION_STYLE_NORMAL
from mod_update_tracker.storage.repos import (
    GuildRepository,
    GuildSettingsDTO,
    TrackedProjectRepository,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    import discord
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from mod_update_tracker.notifier.resolvers import VersionResolver
    from mod_update_tracker.storage.repos import ProjectDTO

logger = logging.getLogger(__name__)

DEFAULT_CHANGELOG_MAX_LENGTH = 4000


@dataclass
class DispatchResult:
    """Result of dispatching one project update to its subscribers."""

    sent_count: int = 0
    skipped_count: int = 0
    channel_results: dict[str, bool] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def all_succeeded(self) -> bool:
        """Return True if every subscribed channel received the update."""
        return self.skipped_count == 0 and self.sent_count > 0


class UpdateNotifier:
    """Sends project update notifications to tracking guild channels.

    Guilds and channels are looked up in the Discord client's cache;
    destinations missing from the cache are skipped. Send errors are not
    caught.
    """

    def __init__(
        self,
        client: discord.Client,
        session_factory: async_sessionmaker[AsyncSession],
        resolvers: Mapping[str, VersionResolver],
        *,
        formatter: UpdateMessageFormatter | None = None,
        default_changelog_max_length: int = DEFAULT_CHANGELOG_MAX_LENGTH,
    ) -> None:
        """Initialize the notifier.

        Args:
            client: Logged in Discord client.
            session_factory: Factory for database sessions.
            resolvers: Version resolvers keyed by platform tag.
            formatter: Message formatter.
            default_changelog_max_length: Changelog limit for guilds
                without a settings row.
        """
        self.client = client
        self.session_factory = session_factory
        self.resolvers = dict(resolvers)
        self.formatter = formatter or UpdateMessageFormatter()
        self.default_changelog_max_length = default_changelog_max_length

    def _default_settings(self, guild_id: str) -> GuildSettingsDTO:
        return GuildSettingsDTO(
            guild_id=guild_id,
            notification_style=NOTIFICATION_STYLE_NORMAL,
            changelog_max_length=self.default_changelog_max_length,
        )

    async def send_update_embed(
        self, project_data: dict[str, Any], project: ProjectDTO
    ) -> DispatchResult | None:
        """Notify every guild channel tracking a project of its new version.

        Args:
            project_data: The project's upstream API data.
            project: The project's database record.

        Returns:
            DispatchResult, or None if the version could not be resolved.
        """
        resolver = self.resolvers.get(project.platform)
        if resolver is None:
            logger.warning(
                "Update notification functionality has not been implemented "
                f"for this platform yet ({project.platform})."
            )
            return None

        version = await resolver.resolve(project_data)
        if version is None:
            return None

        result = DispatchResult()
        async with self.session_factory() as session:
            tracked_projects = await TrackedProjectRepository(session).find_by_project_id(
                project.id
            )
            guilds = GuildRepository(session)

            for tracked in tracked_projects:
                guild = self.client.get_guild(int(tracked.guild_id))
                if guild is None:
                    logger.warning(
                        f"Could not find guild with ID {tracked.guild_id} in cache. "
                        "Update notification not sent."
                    )
                    result.skipped_count += 1
                    result.channel_results[tracked.channel_id] = False
                    continue

                channel = guild.get_channel(int(tracked.channel_id))
                if channel is None:
                    logger.warning(
                        f"Could not find channel with ID {tracked.channel_id} in cache. "
                        "Update notification not sent."
                    )
                    result.skipped_count += 1
                    result.channel_results[tracked.channel_id] = False
                    continue

                settings = await guilds.get_by_id(tracked.guild_id)
                if settings is None:
                    logger.warning(
                        f"No settings found for guild {tracked.guild_id}, using defaults"
                    )
                    settings = self._default_settings(tracked.guild_id)

                message = self.formatter.format(version, project.name, project.platform, settings)
                await channel.send(**message.to_send_kwargs())  # type: ignore[union-attr]
                result.sent_count += 1
                result.channel_results[tracked.channel_id] = True

        logger.info(
            f"Update for {project.name} sent to {result.sent_count}/"
            f"{len(result.channel_results)} channels"
        )
        return result
