"""Argument parser for the PromptHero CLI.

Updates:
  v0.2.1 - 2026-10-16 - Add repeatable --tag filter.
  v0.2.0 - 2026-10-09 - Add render and events-report commands.
  v0.1.0 - 2026-09-29 - Add prompts, favorites, and collections commands.
"""

from __future__ import annotations

import argparse
from pathlib import Path

SORT_CHOICES = ("rating", "popular", "recent", "trending", "featured")


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--category", default=None, help="Only show prompts in this category.")
    parser.add_argument(
        "--featured",
        dest="featured",
        action="store_true",
        default=None,
        help="Only show featured prompts.",
    )
    parser.add_argument(
        "--not-featured",
        dest="featured",
        action="store_false",
        help="Only show prompts that are not featured.",
    )
    parser.add_argument("--difficulty", default=None, help="Exact difficulty level to match.")
    parser.add_argument(
        "--query",
        default=None,
        help="Case-insensitive text matched against titles and descriptions.",
    )
    parser.add_argument("--sort", choices=SORT_CHOICES, default=None, help="Sort order.")
    parser.add_argument(
        "--trending",
        action="store_true",
        help="Only show prompts used often during the last seven days.",
    )
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=None,
        help="Only show prompts carrying this tag (repeatable; all tags must match).",
    )
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the listing request and use the packaged sample prompts.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(description="PromptHero client")
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    prompts_parser = subparsers.add_parser(
        "prompts",
        help="Load the prompt listing and print the prompts matching the filters.",
    )
    _add_filter_arguments(prompts_parser)

    favorites_parser = subparsers.add_parser("favorites", help="Inspect or edit favorites.")
    favorites_actions = favorites_parser.add_subparsers(dest="action", required=True)
    favorites_actions.add_parser("list", help="List favorited prompt ids.")
    for action, help_text in (
        ("add", "Add a prompt to favorites."),
        ("remove", "Remove a prompt from favorites."),
        ("toggle", "Toggle the favorite state of a prompt."),
    ):
        action_parser = favorites_actions.add_parser(action, help=help_text)
        action_parser.add_argument("prompt_id", help="Prompt identifier.")
    favorites_actions.add_parser("clear", help="Remove every favorite.")

    collections_parser = subparsers.add_parser(
        "collections",
        help="Inspect or edit prompt collections.",
    )
    collection_actions = collections_parser.add_subparsers(dest="action", required=True)
    collection_actions.add_parser("list", help="List collections.")
    create_parser = collection_actions.add_parser("create", help="Create a collection.")
    create_parser.add_argument("name", help="Collection name.")
    create_parser.add_argument("--description", default=None, help="Optional description.")
    for action, help_text in (
        ("add", "Add a prompt to a collection."),
        ("remove", "Remove a prompt from a collection."),
    ):
        action_parser = collection_actions.add_parser(action, help=help_text)
        action_parser.add_argument("collection_id", help="Collection identifier.")
        action_parser.add_argument("prompt_id", help="Prompt identifier.")
    for action, help_text in (
        ("show", "Show one collection."),
        ("delete", "Delete a collection."),
    ):
        action_parser = collection_actions.add_parser(action, help=help_text)
        action_parser.add_argument("collection_id", help="Collection identifier.")

    render_parser = subparsers.add_parser(
        "render",
        help="Render the prompt listing and collections into an HTML page.",
    )
    render_parser.add_argument("path", type=Path, help="Destination HTML file.")
    _add_filter_arguments(render_parser)

    events_parser = subparsers.add_parser(
        "events-report",
        help="Summarise favorite, rating, and copy events from the analytics log.",
    )
    events_parser.add_argument(
        "--path",
        type=Path,
        default=None,
        help="Path to the analytics log (defaults to the configured analytics path).",
    )

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the PromptHero client."""
    return build_parser().parse_args(argv)


__all__ = ["SORT_CHOICES", "build_parser", "parse_args"]
