"""Persistence layer - projects, subscriptions and guild settings."""

from mod_update_tracker.storage.repos import (
    GuildRepository,
    GuildSettingsDTO,
    ProjectDTO,
    ProjectRepository,
    TrackedProjectDTO,
    TrackedProjectRepository,
)
from mod_update_tracker.storage.session import (
    create_engine,
    create_session_factory,
    init_models,
)

__all__ = [
    "GuildRepository",
    "GuildSettingsDTO",
    "ProjectDTO",
    "ProjectRepository",
    "TrackedProjectDTO",
    "TrackedProjectRepository",
    "create_engine",
    "create_session_factory",
    "init_models",
]
