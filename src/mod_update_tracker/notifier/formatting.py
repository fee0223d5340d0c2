"""Pure formatting helpers and platform lookup tables."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from types import MappingProxyType

import discord

from mod_update_tracker.notifier.models import PlatformAuthor

PLATFORM_CURSEFORGE = "curseforge"
PLATFORM_MODRINTH = "modrinth"

CURSEFORGE_FILE_URL = "https://www.curseforge.com/minecraft/{segment}/{slug}/files/{file_id}"
MODRINTH_VERSION_URL = "https://modrinth.com/{project_type}/{slug}/version/{version_number}"

UNKNOWN_CLASS_ID = "unknownClassIdValue"
UNKNOWN_RELEASE_TYPE = "unknownReleaseType"

# CurseForge class ids to the URL segment of the project's section
CLASS_ID_URL_SEGMENTS = MappingProxyType(
    {
        5: "bukkit-plugins",
        6: "mc-mods",
        12: "texture-packs",
        17: "worlds",
        4471: "modpacks",
        4546: "customization",
        4559: "mc-addons",
    }
)

RELEASE_TYPES = MappingProxyType(
    {
        1: "release",
        2: "beta",
        3: "alpha",
    }
)

PLATFORM_AUTHORS = MappingProxyType(
    {
        PLATFORM_CURSEFORGE: PlatformAuthor(
            name="From curseforge.com",
            icon_url="https://i.imgur.com/uA9lFcz.png",
            url="https://curseforge.com",
        ),
        PLATFORM_MODRINTH: PlatformAuthor(
            name="From modrinth.com",
            icon_url="https://i.imgur.com/2XDguyk.png",
            url="https://modrinth.com",
        ),
    }
)
UNKNOWN_PLATFORM_AUTHOR = PlatformAuthor(name="From unknown source")

# Embed colors (decimal values)
PLATFORM_COLORS = MappingProxyType(
    {
        PLATFORM_CURSEFORGE: 0xF87A1B,
        PLATFORM_MODRINTH: 0x1BD96A,
    }
)
COLOR_UNKNOWN_PLATFORM = discord.Colour.dark_green().value

_LINE_BREAK_RE = re.compile(r"<br>")
_TAG_RE = re.compile(r"<.*?>")
_ENTITY_RE = re.compile(r"&\w*?;")


def class_id_to_url_segment(class_id: int | None) -> str:
    """Get the curseforge.com URL segment for a CurseForge class id."""
    return CLASS_ID_URL_SEGMENTS.get(class_id, UNKNOWN_CLASS_ID)


def release_type_to_string(release_type: int | None) -> str:
    """Get the release channel name for a CurseForge release type code."""
    return RELEASE_TYPES.get(release_type, UNKNOWN_RELEASE_TYPE)


def capitalize(text: str) -> str:
    """Uppercase the first character and leave the rest untouched.

    Unlike ``str.capitalize`` the remaining characters keep their case.
    An empty string is returned unchanged.
    """
    if not text:
        return text
    return text[0].upper() + text[1:]


def strip_html(text: str) -> str:
    """Turn an HTML changelog into plain text.

    ``<br>`` becomes a newline, every other tag and every named
    character reference is removed.
    """
    text = _LINE_BREAK_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    return _ENTITY_RE.sub("", text)


def truncate(text: str, max_length: int) -> str:
    """Cut text to ``max_length`` characters, ending with an ellipsis."""
    if len(text) > max_length:
        return f"{text[: max(max_length - 3, 0)]}..."
    return text


def trim_changelog(changelog: str, max_length: int) -> str:
    """Strip HTML from a changelog and truncate it to the guild's limit."""
    return truncate(strip_html(changelog), max_length)


def get_platform_author(platform: str) -> PlatformAuthor:
    """Get the embed author block for a platform."""
    return PLATFORM_AUTHORS.get(platform, UNKNOWN_PLATFORM_AUTHOR)


def get_platform_color(platform: str) -> int:
    """Get the embed color for a platform."""
    return PLATFORM_COLORS.get(platform, COLOR_UNKNOWN_PLATFORM)


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an upstream ISO-8601 timestamp into an aware datetime.

    Naive values are assumed to be UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def format_compact_date(value: datetime) -> str:
    """Format a date as ``Jan 5, 2024``."""
    return f"{value:%b} {value.day}, {value.year}"


def code_block(text: str) -> str:
    """Wrap text in a Discord markdown code block."""
    return f"```\n{text}\n```"
