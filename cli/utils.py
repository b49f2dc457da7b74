"""Shared CLI utility functions for PromptHero commands.

Updates:
  v0.1.0 - 2026-09-29 - Extract stdout logging, path description, and prompt formatting.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from core import generate_stars

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from logging import Logger

    from models import Collection, Prompt


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def describe_path(
    path_value: object,
    *,
    expect_directory: bool,
    allow_missing_file: bool = False,
) -> str:
    """Return a human-friendly description of *path_value* suitability."""
    try:
        path = Path(path_value) if path_value is not None else None
    except TypeError:
        path = None
    if path is None:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if expect_directory and not resolved.is_dir():
            return f"{resolved} (exists but is not a directory)"
        if not expect_directory and resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"

    message = f"{resolved} (missing)"
    if not expect_directory and allow_missing_file:
        message = f"{resolved} (missing - created on demand)"
    parent = resolved.parent
    if not parent.exists():
        message += f", parent missing: {parent}"
    return message


def format_prompt_line(index: int, prompt: Prompt, *, favorited: bool) -> str:
    """Return a one-line summary of *prompt* for listings."""
    marker = "*" if favorited else " "
    featured = " [featured]" if prompt.is_featured else ""
    category = prompt.category or "uncategorised"
    return (
        f"{marker} {index}. {prompt.title} ({prompt.id}) [{category}]{featured} "
        f"{generate_stars(prompt.average_rating)} ({prompt.total_ratings})"
    )


def format_collection_line(collection: Collection) -> str:
    count = collection.prompt_count
    noun = "prompt" if count == 1 else "prompts"
    return f"{collection.id}  {collection.name}  ({count} {noun})"


__all__ = [
    "describe_path",
    "format_collection_line",
    "format_prompt_line",
    "print_and_log",
]
