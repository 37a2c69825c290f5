"""Command-line entry point for the quest tracker."""

from __future__ import annotations

import argparse
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import httpx

from . import __version__
from .api import DiscordApiError, DiscordClient
from .config import (
    DEFAULT_ENV_FILE,
    ConfigInvalidError,
    ConfigMissingError,
    ConfigTokenError,
    load_settings,
    write_example_env,
)
from .quests import categorize_quests
from .render import QuestReport

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def configure_logging(level: str) -> None:
    """Configure root logging; log records go to stderr, the report to stdout."""

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def track_quests(
    args: argparse.Namespace,
    *,
    report: QuestReport | None = None,
    transport: httpx.BaseTransport | None = None,
    clock: Callable[[], datetime] | None = None,
) -> int:
    """Load configuration, fetch quests and print the report. Returns the exit code."""

    report = report or QuestReport()
    clock = clock or (lambda: datetime.now(timezone.utc))
    env_path = Path(args.env_file)

    report.loading_config()
    try:
        settings = load_settings(env_path)
    except ConfigMissingError:
        example_path = write_example_env(env_path.parent)
        report.setup_instructions(env_path, example_path)
        return EXIT_FAILURE
    except ConfigTokenError as exc:
        report.invalid_token(str(exc))
        return EXIT_FAILURE
    except ConfigInvalidError as exc:
        report.invalid_setting(str(exc))
        return EXIT_FAILURE

    configure_logging(settings.log_level)
    report.config_loaded()
    report.header()
    report.fetching()

    try:
        with DiscordClient(settings, transport=transport) as client:
            user = client.fetch_current_user()
            report.connected(user)
            quests = client.fetch_quests()
    except DiscordApiError as exc:
        logger.error("Quest fetch failed: %s", type(exc).__name__)
        report.troubleshooting(exc)
        return EXIT_FAILURE

    now = clock()
    categories = categorize_quests(quests, now)
    logger.info(
        "Categorized %d quests",
        categories.total,
        extra={"counts": {status.value: count for status, count in categories.counts().items()}},
    )
    report.render(categories, now)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quest-tracker",
        description="Show the status of your Discord quests.",
    )
    parser.add_argument(
        "--env-file",
        default=str(DEFAULT_ENV_FILE),
        help="Path to the configuration file (default: .env)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    exit_code = track_quests(args)
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
