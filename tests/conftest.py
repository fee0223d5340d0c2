"""Shared fixtures: an in-memory database and sample upstream payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from mod_update_tracker.storage.models import GuildModel, ProjectModel, TrackedProjectModel
from mod_update_tracker.storage.session import (
    create_engine,
    create_session_factory,
    init_models,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


@pytest_asyncio.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Session factory over a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(engine)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def seeded_session_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> async_sessionmaker[AsyncSession]:
    """Database with one Modrinth project tracked by a compact and a full guild."""
    async with session_factory() as session:
        session.add_all(
            [
                ProjectModel(id="AANobbMI", platform="modrinth", name="Sodium"),
                ProjectModel(id="238222", platform="curseforge", name="JEI"),
                GuildModel(id="111", notification_style="compact", changelog_max_length=4000),
                GuildModel(id="222", notification_style="normal", changelog_max_length=20),
            ]
        )
        await session.flush()
        session.add_all(
            [
                TrackedProjectModel(project_id="AANobbMI", guild_id="111", channel_id="1001"),
                TrackedProjectModel(project_id="AANobbMI", guild_id="222", channel_id="2002"),
            ]
        )
        await session.commit()
    return session_factory


@pytest.fixture
def curseforge_project() -> dict[str, Any]:
    """CurseForge mod payload as returned by /v1/mods/{id}."""
    return {
        "id": 238222,
        "name": "Just Enough Items (JEI)",
        "slug": "jei",
        "classId": 6,
        "logo": {"url": "https://media.forgecdn.net/avatars/jei.png"},
        "latestFiles": [
            {
                "id": 4500000,
                "displayName": "jei-1.20.1-15.2.0.26",
                "fileName": "jei-1.20.1-forge-15.2.0.26.jar",
                "fileDate": "2023-09-01T10:00:00.000Z",
                "releaseType": 2,
            },
            {
                "id": 4600000,
                "displayName": "jei-1.20.1-15.2.0.27",
                "fileName": "jei-1.20.1-forge-15.2.0.27.jar",
                "fileDate": "2023-10-05T14:30:00.123Z",
                "releaseType": 1,
            },
        ],
        "latestFilesIndexes": [{"fileId": 4600000, "gameVersion": "1.20.1"}],
    }


@pytest.fixture
def modrinth_project() -> dict[str, Any]:
    """Modrinth project payload as returned by /v2/project/{id}."""
    return {
        "id": "AANobbMI",
        "slug": "sodium",
        "title": "Sodium",
        "project_type": "mod",
        "icon_url": "https://cdn.modrinth.com/data/AANobbMI/icon.png",
    }


@pytest.fixture
def modrinth_versions() -> list[dict[str, Any]]:
    """Modrinth version list, newest first."""
    return [
        {
            "id": "v2",
            "name": "Sodium 0.5.3",
            "version_number": "mc1.20.1-0.5.3",
            "version_type": "release",
            "changelog": "Fixed crash<br>Improved <b>chunk</b> meshing &amp; culling",
            "date_published": "2023-09-20T18:00:00.000000Z",
        },
        {
            "id": "v1",
            "name": "Sodium 0.5.2",
            "version_number": "mc1.20.1-0.5.2",
            "version_type": "beta",
            "changelog": "Old",
            "date_published": "2023-08-01T18:00:00.000000Z",
        },
    ]
