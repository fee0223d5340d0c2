"""Data models for the notifier module."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

import discord


@dataclass(frozen=True)
class VersionInfo:
    """Platform-independent description of a newly published version.

    Attributes:
        changelog: Raw changelog markup as supplied by the platform.
        date: Publish timestamp.
        icon_url: Project icon, used as the embed thumbnail.
        name: Version display name.
        number: Version number or file name.
        type: Capitalized release type (Release, Beta, Alpha...).
        url: Web page of the version.
    """

    changelog: str
    date: datetime
    icon_url: str | None
    name: str
    number: str
    type: str
    url: str


@dataclass(frozen=True)
class PlatformAuthor:
    """Embed author block identifying the source platform."""

    name: str
    icon_url: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class LinkButton:
    """A link-style message button."""

    label: str
    url: str


@dataclass
class UpdateMessage:
    """A rendered update notification ready for ``channel.send``."""

    embed: discord.Embed
    link_button: LinkButton | None = None

    def build_view(self) -> discord.ui.View | None:
        """Build the component view holding the link button.

        Must be called while an event loop is running.
        """
        if self.link_button is None:
            return None

        view = discord.ui.View(timeout=None)
        view.add_item(
            discord.ui.Button(
                label=self.link_button.label,
                style=discord.ButtonStyle.link,
                url=self.link_button.url,
            )
        )
        return view

    def to_send_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``discord.abc.Messageable.send``."""
        kwargs: dict[str, Any] = {"embed": self.embed}
        view = self.build_view()
        if view is not None:
            kwargs["view"] = view
        return kwargs
