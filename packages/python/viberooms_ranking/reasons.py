from __future__ import annotations

from viberooms_core.contexts import context_label
from viberooms_core.numeric import round_half_up
from viberooms_core.types import ContextId, SchemeVector, VectorScheme

AXIS_LABELS: dict[str, str] = {
    # vibe8
    "melancholy": "melancholic depth",
    "wonder": "sense of wonder",
    "nostalgia": "nostalgic warmth",
    "tension": "edge-of-seat tension",
    "energy": "restless energy",
    "serenity": "quiet serenity",
    "romance": "romantic longing",
    "rebellion": "rebellious streak",
    # mood5
    "longing": "sense of longing",
    "peace": "peaceful atmosphere",
    "awe": "sense of awe",
    # emotion4
    "intensity": "intensity",
    "darkness": "darkness",
    "complexity": "layered complexity",
    "sociality": "sociability",
}


def mood_tags(state: SchemeVector) -> list[str]:
    """Emotion4 state -> display tags, in a fixed order."""
    if state.scheme != VectorScheme.EMOTION4:
        raise ValueError("mood tags need an emotion4 vector")
    s = state.as_dict()
    tags: list[str] = []

    if s["intensity"] < 0.3:
        tags += ["slow-cinema", "meditative"]
    if s["intensity"] > 0.7:
        tags += ["kinetic", "visceral"]

    if s["darkness"] < 0.3:
        tags += ["hopeful", "warm"]
    if s["darkness"] > 0.6:
        tags += ["melancholy", "noir"]

    if s["complexity"] > 0.7:
        tags += ["nonlinear", "layered"]
    if s["complexity"] < 0.3:
        tags.append("straightforward")

    if s["sociality"] < 0.3:
        tags.append("solitary")
    if s["sociality"] > 0.6:
        tags.append("ensemble")

    if not tags:
        tags.append("contemplative")
    return tags


def shared_axes(query: SchemeVector, item: SchemeVector, k: int = 2) -> list[str]:
    """
    Strongest axes both sides share (min of the two), best first.
    Ties keep axis order; axes with nothing shared are dropped.
    """
    shared = [
        (min(q, v), i, axis)
        for i, (axis, q, v) in enumerate(zip(query.axes, query.values, item.values))
    ]
    shared = [t for t in shared if t[0] > 0]
    shared.sort(key=lambda t: (-t[0], t[1]))
    return [axis for _, _, axis in shared[:k]]


def _footer(context_id: ContextId, score: float) -> list[str]:
    return [f"{context_label(context_id)} vibe", f"{round_half_up(score * 100)}% match"]


def shared_axis_reason(
    query: SchemeVector, item: SchemeVector, context_id: ContextId, score: float
) -> str:
    axes = shared_axes(query, item)
    if axes:
        head = "Matches your " + " + ".join(AXIS_LABELS.get(a, a) for a in axes)
    else:
        head = "Closest overall mood"
    return " · ".join([head, *_footer(context_id, score)])


def mood_tag_reason(tags: list[str], context_id: ContextId, score: float) -> str:
    parts: list[str] = []
    if tags:
        parts.append(" + ".join(tags[:2]))
    return " · ".join([*parts, *_footer(context_id, score)])
