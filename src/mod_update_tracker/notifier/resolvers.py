"""Per-platform resolution of a project's latest version.

Each resolver calls its platform's API, checks the response and
normalizes the payload into a ``VersionInfo``. Timeouts, unexpected
status codes and empty version lists are logged and reported as None.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from mod_update_tracker.api.models import ApiResponse, parse_json
from mod_update_tracker.notifier.formatting import (
    CURSEFORGE_FILE_URL,
    MODRINTH_VERSION_URL,
    PLATFORM_CURSEFORGE,
    PLATFORM_MODRINTH,
    capitalize,
    class_id_to_url_segment,
    parse_timestamp,
    release_type_to_string,
)
from mod_update_tracker.notifier.models import VersionInfo

if TYPE_CHECKING:
    from mod_update_tracker.api.curseforge import CurseForgeClient
    from mod_update_tracker.api.modrinth import ModrinthClient

logger = logging.getLogger(__name__)


class UnsupportedPlatformError(Exception):
    """Raised when no resolver is registered for a platform."""

    def __init__(self, platform: str) -> None:
        super().__init__(f"Unsupported platform: {platform}")
        self.platform = platform


class VersionResolver(Protocol):
    """Protocol for platform version resolvers."""

    platform: str

    async def resolve(self, project_data: dict[str, Any]) -> VersionInfo | None:
        """Resolve the latest version of a project. Returns None on failure."""
        ...

    async def fetch_project(self, project_id: str) -> dict[str, Any] | None:
        """Fetch a project's upstream metadata. Returns None on failure."""
        ...


def _accept(response: ApiResponse | None, platform: str, action: str) -> ApiResponse | None:
    """Log and drop a timed out or non-200 response."""
    if response is None:
        logger.warning(f"A request to {platform} timed out while getting {action}")
        return None
    if not response.ok:
        logger.warning(f"Unexpected {response.status_code} status code while getting {action}.")
        return None
    return response


class CurseForgeResolver:
    """Resolves CurseForge project updates.

    The newest file is the last entry of the project's ``latestFiles``;
    its changelog needs a second request.
    """

    platform = PLATFORM_CURSEFORGE

    def __init__(self, client: CurseForgeClient) -> None:
        self.client = client

    async def fetch_project(self, project_id: str) -> dict[str, Any] | None:
        response = _accept(
            await self.client.get_mod(project_id), "CurseForge", "a project's information"
        )
        if response is None:
            return None
        project: dict[str, Any] = parse_json(response.body)["data"]
        return project

    async def resolve(self, project_data: dict[str, Any]) -> VersionInfo | None:
        latest_files = project_data.get("latestFiles") or []
        if not latest_files:
            logger.warning(
                f"No files found for CurseForge project {project_data.get('id')}. "
                "Update notification not sent."
            )
            return None
        latest_file = latest_files[-1]

        response = _accept(
            await self.client.get_mod_file_changelog(project_data["id"], latest_file["id"]),
            "CurseForge",
            "a project file's changelog",
        )
        if response is None:
            return None

        raw_data = parse_json(response.body)
        logo = project_data.get("logo") or {}
        url = CURSEFORGE_FILE_URL.format(
            segment=class_id_to_url_segment(project_data.get("classId")),
            slug=project_data["slug"],
            file_id=project_data["latestFilesIndexes"][0]["fileId"],
        )

        version = VersionInfo(
            changelog=raw_data.get("data") or "",
            date=parse_timestamp(latest_file["fileDate"]),
            icon_url=logo.get("url"),
            name=latest_file["displayName"],
            number=latest_file["fileName"],
            type=capitalize(release_type_to_string(latest_file.get("releaseType"))),
            url=url,
        )
        logger.debug(f"Resolved CurseForge version: {version}")
        return version


class ModrinthResolver:
    """Resolves Modrinth project updates.

    The version list is returned newest first, so its first entry is
    the update being announced.
    """

    platform = PLATFORM_MODRINTH

    def __init__(self, client: ModrinthClient) -> None:
        self.client = client

    async def fetch_project(self, project_id: str) -> dict[str, Any] | None:
        response = _accept(
            await self.client.get_project(project_id), "Modrinth", "a project's information"
        )
        if response is None:
            return None
        project: dict[str, Any] = parse_json(response.body)
        return project

    async def resolve(self, project_data: dict[str, Any]) -> VersionInfo | None:
        response = _accept(
            await self.client.list_project_versions(project_data["id"]),
            "Modrinth",
            "a project's version information",
        )
        if response is None:
            return None

        versions = parse_json(response.body)
        if not versions:
            logger.warning(
                f"No versions found for Modrinth project {project_data['id']}. "
                "Update notification not sent."
            )
            return None
        latest = versions[0]

        version = VersionInfo(
            changelog=latest.get("changelog") or "",
            date=parse_timestamp(latest["date_published"]),
            icon_url=project_data.get("icon_url"),
            name=latest["name"],
            number=latest["version_number"],
            type=capitalize(latest["version_type"]),
            url=MODRINTH_VERSION_URL.format(
                project_type=project_data["project_type"],
                slug=project_data["slug"],
                version_number=latest["version_number"],
            ),
        )
        logger.debug(f"Resolved Modrinth version: {version}")
        return version


def build_resolvers(
    curseforge: CurseForgeClient, modrinth: ModrinthClient
) -> dict[str, VersionResolver]:
    """Create the resolver registry keyed by platform tag."""
    resolvers: list[VersionResolver] = [
        CurseForgeResolver(curseforge),
        ModrinthResolver(modrinth),
    ]
    return {resolver.platform: resolver for resolver in resolvers}
