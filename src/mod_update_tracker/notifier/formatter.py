"""Update notification formatter.

This module turns a resolved VersionInfo into a Discord message, styled
per guild as either a compact one-line embed or a full embed with the
changelog, version fields and a link button.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from mod_update_tracker.notifier.formatting import (
    capitalize,
    code_block,
    format_compact_date,
    get_platform_author,
    get_platform_color,
    trim_changelog,
)
from mod_update_tracker.notifier.models import LinkButton, UpdateMessage
from mod_update_tracker.storage.models import NOTIFICATION_STYLE_COMPACT

if TYPE_CHECKING:
    from mod_update_tracker.notifier.models import VersionInfo
    from mod_update_tracker.storage.repos import GuildSettingsDTO


class UpdateMessageFormatter:
    """Formats VersionInfo records into Discord update messages.

    Supports two styles:
    - compact: version number, release type and date only
    - full (any other style): changelog excerpt, version fields and a
      button linking to the version page
    """

    def format(
        self,
        version: VersionInfo,
        project_name: str,
        platform: str,
        settings: GuildSettingsDTO,
    ) -> UpdateMessage:
        """Format a version update for one guild.

        Args:
            version: The resolved version.
            project_name: Display name of the tracked project.
            platform: Platform tag of the tracked project.
            settings: The receiving guild's notification settings.

        Returns:
            UpdateMessage ready to be sent.
        """
        if settings.notification_style == NOTIFICATION_STYLE_COMPACT:
            return self._build_compact(version, project_name, platform)
        return self._build_full(version, project_name, platform, settings.changelog_max_length)

    def _build_compact(
        self, version: VersionInfo, project_name: str, platform: str
    ) -> UpdateMessage:
        embed = discord.Embed(
            title=f"{project_name} {version.name}",
            url=version.url,
            description=f"{version.number} ({version.type})",
            color=get_platform_color(platform),
        )
        embed.set_footer(
            text=format_compact_date(version.date),
            icon_url=get_platform_author(platform).icon_url,
        )
        return UpdateMessage(embed=embed)

    def _build_full(
        self,
        version: VersionInfo,
        project_name: str,
        platform: str,
        changelog_max_length: int,
    ) -> UpdateMessage:
        author = get_platform_author(platform)
        changelog = trim_changelog(version.changelog, changelog_max_length)

        embed = discord.Embed(
            title=f"{project_name} has been updated",
            description=f"**Changelog**: {code_block(changelog)}",
            color=get_platform_color(platform),
            timestamp=discord.utils.utcnow(),
        )
        embed.set_author(name=author.name, url=author.url, icon_url=author.icon_url)
        embed.add_field(name="Version Name", value=version.name, inline=False)
        embed.add_field(name="Version Number", value=version.number, inline=False)
        embed.add_field(name="Release Type", value=version.type, inline=False)
        embed.add_field(
            name="Date Published",
            value=discord.utils.format_dt(version.date, style="f"),
            inline=False,
        )
        if version.icon_url:
            embed.set_thumbnail(url=version.icon_url)

        return UpdateMessage(
            embed=embed,
            link_button=LinkButton(label=f"View on {capitalize(platform)}", url=version.url),
        )
