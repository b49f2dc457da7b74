"""CLI command handlers for the PromptHero client.

Updates:
  v0.2.1 - 2026-10-16 - Pass tag filters through to the catalog.
  v0.2.0 - 2026-10-09 - Add render and events-report commands.
  v0.1.0 - 2026-09-29 - Add prompts, favorites, and collections handlers.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from catalog import load_sample_prompts
from core import EventTracker, NotFoundError, PromptFilters, ValidationError

from .utils import format_collection_line, format_prompt_line, print_and_log

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from core import PromptHeroClient
    from models import Prompt

CommandHandler = Callable[["PromptHeroClient", argparse.Namespace, logging.Logger], int]


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler


def _filters_from_args(args: argparse.Namespace) -> PromptFilters:
    return PromptFilters(
        category=getattr(args, "category", None),
        featured=getattr(args, "featured", None),
        difficulty=getattr(args, "difficulty", None),
        query=getattr(args, "query", None),
        sort=getattr(args, "sort", None),
        trending=bool(getattr(args, "trending", False)),
        tags=tuple(getattr(args, "tags", None) or ()),
    )


def _load_listing(client: PromptHeroClient, args: argparse.Namespace) -> list[Prompt]:
    if getattr(args, "offline", False):
        return client.catalog.set_prompts(load_sample_prompts())
    return asyncio.run(client.catalog.load_prompts())


def run_prompts(
    client: PromptHeroClient,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    _load_listing(client, args)
    prompts = client.catalog.filter_prompts(_filters_from_args(args))
    if not prompts:
        print_and_log(logger, logging.INFO, "No prompts found")
        return 0
    print(f"Found {len(prompts)} prompts:\n")
    for index, prompt in enumerate(prompts, start=1):
        favorited = client.store.is_favorited(prompt.id)
        print(format_prompt_line(index, prompt, favorited=favorited))
    return 0


def run_favorites(
    client: PromptHeroClient,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    store = client.store
    action = args.action
    if action == "list":
        favorites = store.get_favorites()
        if not favorites:
            print("No favorites yet.")
            return 0
        print(f"Favorites ({store.get_favorites_count()}):")
        for prompt_id in favorites:
            print(f"  {prompt_id}")
        return 0
    if action == "add":
        store.add_to_favorites(args.prompt_id)
        print_and_log(logger, logging.INFO, f"Added {args.prompt_id} to favorites")
        return 0
    if action == "remove":
        store.remove_from_favorites(args.prompt_id)
        print_and_log(logger, logging.INFO, f"Removed {args.prompt_id} from favorites")
        return 0
    if action == "toggle":
        favorited = store.toggle_favorite(args.prompt_id)
        state = "favorited" if favorited else "not favorited"
        print_and_log(logger, logging.INFO, f"{args.prompt_id} is now {state}")
        return 0
    if action == "clear":
        store.clear_favorites()
        print_and_log(logger, logging.INFO, "Cleared all favorites")
        return 0
    logger.error("Unknown favorites action: %s", action)
    return 2


def run_collections(
    client: PromptHeroClient,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    store = client.store
    action = args.action
    try:
        if action == "list":
            collections = store.get_all_collections()
            if not collections:
                print("No collections yet.")
                return 0
            for collection in collections:
                print(format_collection_line(collection))
            return 0
        if action == "create":
            collection = store.create_collection(args.name, args.description)
            print_and_log(
                logger,
                logging.INFO,
                f"Created collection '{collection.name}' ({collection.id})",
            )
            return 0
        if action == "add":
            store.add_to_collection(args.collection_id, args.prompt_id)
            print_and_log(logger, logging.INFO, f"Added {args.prompt_id} to {args.collection_id}")
            return 0
        if action == "remove":
            store.remove_from_collection(args.collection_id, args.prompt_id)
            print_and_log(
                logger,
                logging.INFO,
                f"Removed {args.prompt_id} from {args.collection_id}",
            )
            return 0
        if action == "show":
            collection = store.get_collection(args.collection_id)
            if collection is None:
                raise NotFoundError("Collection not found")
            print(format_collection_line(collection))
            if collection.description:
                print(f"  {collection.description}")
            for prompt_id in collection.prompts:
                print(f"  - {prompt_id}")
            return 0
        if action == "delete":
            store.delete_collection(args.collection_id)
            print_and_log(logger, logging.INFO, f"Deleted collection {args.collection_id}")
            return 0
    except NotFoundError as exc:
        logger.error("%s: %s", exc, args.collection_id)
        return 4
    except ValidationError as exc:
        logger.error("%s", exc)
        return 4
    logger.error("Unknown collections action: %s", action)
    return 2


def run_render(
    client: PromptHeroClient,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    _load_listing(client, args)
    prompts = client.catalog.filter_prompts(_filters_from_args(args))
    client.binder.refresh(prompts)
    client.binder.update_favorite_buttons()
    try:
        destination = client.document.write(args.path)
    except OSError as exc:
        logger.error("Unable to write %s: %s", args.path, exc)
        return 5
    print_and_log(logger, logging.INFO, f"Rendered {len(prompts)} prompts to {destination}")
    return 0


def run_events_report(
    client: PromptHeroClient,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    path_value = getattr(args, "path", None)
    tracker = EventTracker(path_value) if path_value else client.tracker
    log_path = Path(tracker.log_path).expanduser()
    if not log_path.exists():
        logger.info("Analytics log not found at %s", log_path)
        return 0
    try:
        events = tracker.read_events()
    except OSError as exc:
        logger.error("Unable to read analytics log: %s", exc)
        return 5
    if not events:
        print(f"No events recorded in {log_path}")
        return 0

    by_event = Counter(str(event.get("event", "unknown")) for event in events)
    by_prompt = Counter(str(event.get("prompt_id", "unknown")) for event in events)
    print(f"Event summary from {log_path}:\n")
    print(f"Total events: {len(events)}")
    for event_type, count in sorted(by_event.items()):
        print(f"  {event_type}: {count}")
    print("\nMost active prompts:")
    for prompt_id, count in by_prompt.most_common(5):
        print(f"  {prompt_id}: {count}")
    return 0


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    "prompts": CommandSpec(run_prompts),
    "favorites": CommandSpec(run_favorites),
    "collections": CommandSpec(run_collections),
    "render": CommandSpec(run_render),
    "events-report": CommandSpec(run_events_report),
}


__all__ = ["CommandSpec", "COMMAND_SPECS"]
