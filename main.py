"""Application entry point for the PromptHero client.

Updates:
  v0.2.0 - 2026-10-09 - Dispatch subcommands through COMMAND_SPECS and default to the listing.
  v0.1.0 - 2026-09-29 - Wire settings, logging, and client services for the CLI.
"""

from __future__ import annotations

import logging
import sys

from cli.commands import COMMAND_SPECS, run_prompts
from cli.parser import parse_args
from cli.runtime import configure_http_logging, setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import build_client


def main(argv: list[str] | None = None) -> int:
    """Entrypoint that wires settings, services, and CLI commands."""
    args = parse_args(argv)
    setup_logging(args.logging_config)

    logger = logging.getLogger("prompt_hero.main")
    configure_http_logging(logger.isEnabledFor(logging.DEBUG))
    try:
        settings = load_settings()
    except SettingsError as exc:
        cause = exc.__cause__
        logger.error("Failed to load settings: %s%s", exc, f" ({cause})" if cause else "")
        return 2

    if args.print_settings:
        print_settings_summary(settings)
        return 0

    client = build_client(settings)
    command = getattr(args, "command", None)
    spec = COMMAND_SPECS.get(command)
    if spec is None:
        return run_prompts(client, args, logger)
    return spec.handler(client, args, logger)


if __name__ == "__main__":
    sys.exit(main())
