"""Data models for the PromptHero client.

Updates: v0.2.0 - 2026-10-05 - Export Collection dataclass.
Updates: v0.1.0 - 2026-09-24 - Export Prompt dataclass.
"""

from .collection_model import MAX_COLLECTION_NAME_LENGTH, Collection, generate_collection_id
from .prompt_model import Prompt, coerce_prompt

__all__ = [
    "Collection",
    "MAX_COLLECTION_NAME_LENGTH",
    "Prompt",
    "coerce_prompt",
    "generate_collection_id",
]
