"""Upstream platform API clients."""

from mod_update_tracker.api.curseforge import CurseForgeClient
from mod_update_tracker.api.models import ApiResponse, parse_json
from mod_update_tracker.api.modrinth import ModrinthClient

__all__ = [
    "ApiResponse",
    "CurseForgeClient",
    "ModrinthClient",
    "parse_json",
]
