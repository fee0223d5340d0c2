"""CLI entry point for Mod Update Tracker.

This module provides the main entry point for validating configuration
and sending a project's update notification from the command line.

Usage:
    python -m mod_update_tracker [options]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import logging.config
import sys
from typing import NoReturn

import discord
from pydantic import ValidationError

from mod_update_tracker import __version__
from mod_update_tracker.api import CurseForgeClient, ModrinthClient
from mod_update_tracker.config import Settings, clear_settings_cache, get_settings
from mod_update_tracker.notifier import UnsupportedPlatformError, UpdateNotifier, build_resolvers
from mod_update_tracker.notifier.resolvers import VersionResolver
from mod_update_tracker.storage import (
    ProjectRepository,
    create_engine,
    create_session_factory,
)

# Application info
APP_NAME = "Mod Update Tracker"
APP_VERSION = __version__

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="mod-update-tracker",
        description="Send CurseForge and Modrinth project update notifications to Discord.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m mod_update_tracker --config-check         Validate config and exit
  python -m mod_update_tracker --notify 238222        Announce a project's latest version
  python -m mod_update_tracker --notify AANobbMI --log-level DEBUG
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    parser.add_argument(
        "--config-check",
        action="store_true",
        help="Validate configuration and exit",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level (default: from settings)",
    )

    parser.add_argument(
        "--notify",
        metavar="PROJECT_ID",
        default=None,
        help="Send the latest version of a tracked project to its subscribed channels",
    )

    return parser


def configure_logging(level: str) -> None:
    """Configure logging for the application.

    Args:
        level: Logging level string (DEBUG, INFO, etc.)
    """
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "detailed" if level == "DEBUG" else "standard",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        # Quieter logging for noisy libraries
        "loggers": {
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
            "discord": {"level": "WARNING"},
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    }
    logging.config.dictConfig(config)


def print_banner() -> None:
    """Print the application startup banner."""
    banner = f"""
╔══════════════════════════════════════════════════════════════╗
║                                                              ║
║   {APP_NAME:^56}   ║
║   {"v" + APP_VERSION:^56}   ║
║                                                              ║
╚══════════════════════════════════════════════════════════════╝
"""
    print(banner)


def print_config_summary(settings: Settings) -> None:
    """Print a summary of the configuration.

    Args:
        settings: Application settings.
    """
    summary = settings.redacted_summary()
    api_key = "(set)" if settings.curseforge.api_key else "(not set)"
    print("Configuration:")
    print(f"  Database: {summary['database_url']}")
    print(f"  Log Level: {summary['log_level']}")
    print(f"  CurseForge: {settings.curseforge.base_url} (API key {api_key})")
    print(f"  Modrinth: {settings.modrinth.base_url}")
    print(f"  Discord: {'enabled' if summary['discord_enabled'] == 'True' else 'disabled'}")
    print(f"  Default Changelog Length: {summary['default_changelog_max_length']}")
    print()


def validate_config() -> Settings | None:
    """Validate and load configuration.

    Returns:
        Settings instance if valid, None if invalid.
    """
    try:
        # Clear cache to force reload
        clear_settings_cache()
        return get_settings()
    except ValidationError as e:
        print("Configuration validation failed:", file=sys.stderr)
        for error in e.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            msg = error["msg"]
            print(f"  {field}: {msg}", file=sys.stderr)
        return None


def run_config_check(settings: Settings) -> int:
    """Run configuration check and exit.

    Args:
        settings: Validated settings.

    Returns:
        Exit code (0 for success).
    """
    print("Configuration is valid!")
    print()
    print_config_summary(settings)

    print("Checking component availability...")

    if settings.discord.enabled:
        print("  Discord: configured")
    else:
        print("  Discord: not configured")

    if settings.curseforge.api_key:
        print("  CurseForge: configured")
    else:
        print("  CurseForge: no API key, requests will be rejected")

    print()
    print("All checks passed. Ready to run.")
    return EXIT_SUCCESS


def create_resolvers(settings: Settings) -> dict[str, VersionResolver]:
    """Create the platform resolvers from settings."""
    api_key = settings.curseforge.api_key
    curseforge = CurseForgeClient(
        api_key.get_secret_value() if api_key else None,
        base_url=settings.curseforge.base_url,
        timeout=settings.curseforge.timeout,
    )
    modrinth = ModrinthClient(
        base_url=settings.modrinth.base_url,
        user_agent=settings.modrinth.user_agent,
        timeout=settings.modrinth.timeout,
    )
    return build_resolvers(curseforge, modrinth)


async def run_notify(settings: Settings, project_id: str) -> int:
    """Send a tracked project's latest version to its subscribers.

    Args:
        settings: Application settings.
        project_id: Platform project id of a tracked project.

    Returns:
        Exit code.
    """
    logger = logging.getLogger(__name__)

    if settings.discord.token is None:
        print("DISCORD_TOKEN is required to send notifications", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    engine = create_engine(settings.database.url)
    session_factory = create_session_factory(engine)
    resolvers = create_resolvers(settings)

    try:
        async with session_factory() as session:
            project = await ProjectRepository(session).get_by_id(project_id)
        if project is None:
            logger.error(f"Project {project_id} is not tracked")
            return EXIT_ERROR

        resolver = resolvers.get(project.platform)
        if resolver is None:
            raise UnsupportedPlatformError(project.platform)

        project_data = await resolver.fetch_project(project.id)
        if project_data is None:
            return EXIT_ERROR

        client = discord.Client(intents=discord.Intents.default())
        async with client:
            await client.login(settings.discord.token.get_secret_value())
            connect_task = asyncio.create_task(client.connect())
            ready_task = asyncio.create_task(client.wait_until_ready())
            await asyncio.wait({connect_task, ready_task}, return_when=asyncio.FIRST_COMPLETED)
            if not ready_task.done():
                ready_task.cancel()
                # Re-raises the gateway error, if any
                connect_task.result()
                raise ConnectionError("Discord connection closed before the client was ready")

            notifier = UpdateNotifier(
                client,
                session_factory,
                resolvers,
                default_changelog_max_length=settings.default_changelog_max_length,
            )
            result = await notifier.send_update_embed(project_data, project)
        await connect_task

        return EXIT_SUCCESS if result is not None else EXIT_ERROR
    except UnsupportedPlatformError as e:
        logger.error(str(e))
        return EXIT_ERROR
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except Exception as e:
        logger.exception("Notification failed: %s", e)
        return EXIT_ERROR
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:]).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Validate configuration first
    settings = validate_config()
    if settings is None:
        sys.exit(EXIT_CONFIG_ERROR)

    log_level = args.log_level or settings.log_level
    configure_logging(log_level)

    print_banner()

    if args.config_check:
        sys.exit(run_config_check(settings))

    if args.notify is None:
        parser.print_usage(sys.stderr)
        print("Nothing to do: pass --notify PROJECT_ID or --config-check", file=sys.stderr)
        sys.exit(EXIT_ERROR)

    print_config_summary(settings)

    exit_code = asyncio.run(run_notify(settings, args.notify))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
