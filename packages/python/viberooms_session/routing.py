from __future__ import annotations

import random
from datetime import datetime

from viberooms_core.contexts import Category, contexts_in
from viberooms_core.types import ContextId


def _keywords(table: dict[ContextId, tuple[str, ...]]) -> dict[str, ContextId]:
    return {kw: cid for cid, kws in table.items() for kw in kws}


# ---- keyword maps per category; first match in insertion order wins ----
CATEGORY_KEYWORDS: dict[Category, dict[str, ContextId]] = {
    Category.TRAVEL: _keywords(
        {
            "the-departure": (
                "departure", "airport", "gate", "flight", "leaving", "packing",
                "nervous", "anxious", "waiting", "early", "morning", "boarding",
            ),
            "the-transit": (
                "transit", "train", "window", "between", "journey", "moving",
                "floating", "night", "alone", "hours", "long", "clouds",
            ),
        }
    ),
    Category.MOVIES: _keywords(
        {
            "the-last-row": (
                "cinema", "theatre", "watching", "alone", "silence", "credits",
                "absorbed", "dark", "stayed",
            ),
            "the-projector": (
                "memory", "nostalgic", "remember", "film", "scene", "feeling",
                "old", "grain", "warmth",
            ),
        }
    ),
    Category.MUSIC: _keywords(
        {
            "the-rehearsal": (
                "practice", "playing", "writing", "making", "restless", "stuck",
                "loop", "repeat", "bars",
            ),
            "the-vinyl": (
                "album", "record", "familiar", "always", "comfort", "favourite",
                "memory", "worn", "know",
            ),
        }
    ),
}

LATE_NIGHT_HOURS = range(0, 6)


def match_keyword(prompt: str, category: Category) -> ContextId | None:
    lower = prompt.lower()
    for kw, cid in CATEGORY_KEYWORDS[Category(category)].items():
        if kw in lower:
            return cid
    return None


def route_prompt(
    prompt: str,
    category: Category,
    *,
    hour: int | None = None,
    rng: random.Random | None = None,
) -> ContextId:
    """
    Pick the entry room for a free-text prompt within a category.

    Keyword hits win. Otherwise late night (00-06h) goes to the category's
    second room, and any other hour picks with `rng` (pass a seeded
    `random.Random` for reproducible routing).
    """
    hit = match_keyword(prompt, category)
    if hit is not None:
        return hit

    rooms = contexts_in(Category(category))
    if not rooms:
        raise ValueError(f"no rooms in category {category!r}")
    h = datetime.now().hour if hour is None else hour
    if h in LATE_NIGHT_HOURS and len(rooms) > 1:
        return rooms[1]
    return (rng or random.Random()).choice(rooms)
