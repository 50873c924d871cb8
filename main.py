#!/usr/bin/env python3

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from errors import AdventureClientError, DecodeError
from game_interface.client import ProtocolClient
from logger import setup_logging
from session import ClientConfiguration, GameSession, handle_input

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "pyproject.toml"


def load_configuration(args) -> ClientConfiguration:
    """Build the configuration from pyproject.toml (if present) and CLI flags.

    A default pyproject.toml that belongs to some other project (no
    [tool.adventure] table) is ignored; an explicit --config must have one.
    """
    explicit = args.config is not None
    config_file = Path(args.config or DEFAULT_CONFIG_FILE)
    if config_file.exists():
        try:
            config = ClientConfiguration.from_toml(config_file)
        except KeyError as e:
            if explicit:
                raise
            logger.warning(
                f"Ignoring {config_file}: {e}; using default configuration",
                extra={"event_type": "config_section_missing", "config_file": str(config_file)},
            )
            config = ClientConfiguration()
    else:
        config = ClientConfiguration()

    overrides = {}
    if args.base_url:
        overrides["api_base_url"] = args.base_url
    if args.screen_id:
        overrides["initial_screen_id"] = args.screen_id
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        config = ClientConfiguration(**{**config.model_dump(), **overrides})
    return config


def print_lines(lines):
    for line in lines:
        print(line)


def run(session: GameSession) -> None:
    """Read commands until /quit, EOF or Ctrl-C."""
    while True:
        try:
            user_input = input("\n> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        try:
            result = handle_input(session, user_input)
        except DecodeError as e:
            print(f"Could not read the game state sent by the server ({e}). Try again.")
            continue
        except AdventureClientError as e:
            print(f"Error: {e}")
            continue

        if result.quit:
            break
        print_lines(result.lines)


def main():
    parser = argparse.ArgumentParser(description="Play the Winsauce text adventure")
    parser.add_argument(
        "--config", help=f"Path to configuration TOML file (default: {DEFAULT_CONFIG_FILE})"
    )
    parser.add_argument("--base-url", help="Override the API base URL")
    parser.add_argument("--screen-id", help="Override the starting screen id")
    parser.add_argument(
        "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    args = parser.parse_args()

    try:
        config = load_configuration(args)
    except (KeyError, ValidationError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(config.log_file, config.json_log_file, config.log_level_number)

    client = ProtocolClient(config.api_base_url, timeout=config.request_timeout_seconds)
    session = GameSession(client, initial_screen_id=config.initial_screen_id)

    try:
        screen = session.start_session()
    except AdventureClientError as e:
        logger.critical(
            f"Could not start session: {e}", extra={"event_type": "session_start_failed"}
        )
        sys.exit(1)

    print_lines(screen.body)
    run(session)


if __name__ == "__main__":
    main()
