"""Built-in prompt catalog resources for the PromptHero client.

Updates: v0.2.0 - 2026-10-01 - Parse the packaged sample listing used as fetch fallback.
Updates: v0.1.0 - 2026-09-24 - Provide packaged sample prompts.
"""

from __future__ import annotations

import json
from importlib.resources import files
from typing import Any

from models.prompt_model import Prompt


def builtin_catalog_resource() -> Any:
    """Return a Traversable pointing to the packaged sample prompts JSON file."""
    return files(__name__).joinpath("sample_prompts.json")


def load_sample_prompts() -> list[Prompt]:
    """Return a fresh list of the packaged sample prompts."""
    payload = json.loads(builtin_catalog_resource().read_text(encoding="utf-8"))
    return [Prompt.from_record(record) for record in payload["prompts"]]


__all__ = ["builtin_catalog_resource", "load_sample_prompts"]
