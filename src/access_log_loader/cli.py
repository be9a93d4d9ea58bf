"""
Command-line entry point for access log transfers.

Usage:
    # Transfer using config.yaml in the working directory
    access-log-transfer

    # Explicit config file (YAML, JSON or SOPS-encrypted YAML)
    access-log-transfer --config /etc/access-log-loader/config.enc.yaml

    # Dry run: parse and report, leave the source log and the store alone
    access-log-transfer --no-truncate --no-insert
"""

import argparse
import asyncio
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from .config import ConfigError, Settings, get_settings
from .notifications import DiscordWebhookNotifier, Notifier, NullNotifier, Reporter
from .pipeline import LogTransfer, TransferFailed, TransferResult, setup_logging

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def build_notifier(settings: Settings) -> Notifier:
    """Create the notifier configured in settings."""
    if settings.discord_webhook_url:
        return DiscordWebhookNotifier(settings.discord_webhook_url)
    logger.warning("No Discord webhook configured, notifications are disabled")
    return NullNotifier()


async def run_transfer(
    settings: Settings,
    truncate: bool = True,
    insert: bool = True,
    notifier: Optional[Notifier] = None,
) -> TransferResult:
    """
    Run one transfer with the given settings.

    Raises:
        TransferFailed: If the transfer fails
    """
    notifier = notifier or build_notifier(settings)
    async with notifier:
        transfer = LogTransfer(settings, Reporter(notifier))
        return await transfer.run(truncate=truncate, insert=insert)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Validate an access log and load it into the database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Transfer using config.yaml
  access-log-transfer

  # Keep the source log intact
  access-log-transfer --no-truncate

  # Only validate and report
  access-log-transfer --no-truncate --no-insert
        """,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Config file (YAML, JSON or *.enc.yaml). "
        "Default: config.yaml, falling back to environment variables",
    )
    parser.add_argument(
        "--no-truncate",
        dest="truncate",
        action="store_false",
        help="Do not back up and truncate the source log",
    )
    parser.add_argument(
        "--no-insert",
        dest="insert",
        action="store_false",
        help="Do not insert entries into the database",
    )
    parser.add_argument(
        "--db-path",
        type=Path,
        help="Path to SQLite database (default: from settings)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging, including every rejected entry",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    args = parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        settings = get_settings(args.config)
    except ConfigError as e:
        logger.error(f"Failed to load configuration: {e}")
        return EXIT_FAILURE

    if args.db_path:
        settings = replace(settings, sqlite_db_path=str(args.db_path))

    errors = settings.validate(truncate=args.truncate)
    if errors:
        for error in errors:
            logger.error(f"Invalid configuration: {error}")
        return EXIT_FAILURE

    logger.debug(f"Settings: {settings.to_dict()}")

    try:
        asyncio.run(run_transfer(settings, truncate=args.truncate, insert=args.insert))
    except TransferFailed:
        return EXIT_FAILURE

    return EXIT_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
