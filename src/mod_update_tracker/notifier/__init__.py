"""Notification layer - version resolution, formatting and delivery."""

from mod_update_tracker.notifier.dispatcher import DispatchResult, UpdateNotifier
from mod_update_tracker.notifier.formatter import UpdateMessageFormatter
from mod_update_tracker.notifier.models import (
    LinkButton,
    PlatformAuthor,
    UpdateMessage,
    VersionInfo,
)
from mod_update_tracker.notifier.resolvers import (
    CurseForgeResolver,
    ModrinthResolver,
    UnsupportedPlatformError,
    VersionResolver,
    build_resolvers,
)

__all__ = [
    "CurseForgeResolver",
    "DispatchResult",
    "LinkButton",
    "ModrinthResolver",
    "PlatformAuthor",
    "UnsupportedPlatformError",
    "UpdateMessage",
    "UpdateMessageFormatter",
    "UpdateNotifier",
    "VersionInfo",
    "VersionResolver",
    "build_resolvers",
]
