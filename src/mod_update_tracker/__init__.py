"""Mod Update Tracker - Discord update notifications for CurseForge and Modrinth projects."""

__version__ = "0.1.0"
