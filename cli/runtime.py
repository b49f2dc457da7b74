"""Runtime boot helpers for the PromptHero CLI.

Updates:
  v0.1.1 - 2026-10-09 - Quieten HTTPX request logs unless debugging.
  v0.1.0 - 2026-09-29 - Extract logging configuration helpers.
"""

from __future__ import annotations

import configparser
import logging
import logging.config
from pathlib import Path


def setup_logging(logging_conf_path: Path | None) -> None:
    """Configure logging using *logging_conf_path* when available."""
    path = logging_conf_path or Path("config/logging.conf")
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except (OSError, KeyError, ValueError, configparser.Error) as exc:  # pragma: no cover
            print(f"Ignoring invalid logging configuration {path}: {exc}")
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def configure_http_logging(debug: bool) -> None:
    """Show or hide per-request logs emitted by HTTPX and httpcore."""
    level = logging.DEBUG if debug else logging.WARNING
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(level)


__all__ = ["configure_http_logging", "setup_logging"]
