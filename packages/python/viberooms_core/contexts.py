from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .types import ContentType, ContextId, VibeAxis

V = VibeAxis


class Category(str, Enum):
    TRAVEL = "travel"
    MOVIES = "movies"
    MUSIC = "music"


@dataclass(frozen=True)
class ContextAxes:
    """Primary axis plus weighted secondaries for one room."""

    primary: VibeAxis
    secondary: tuple[tuple[VibeAxis, float], ...]
    category: Category | None = None
    sociality: float | None = None


# ---- room -> emotion axes ----
CONTEXT_AXES: dict[ContextId, ContextAxes] = {
    # legacy rooms
    "echo-chamber": ContextAxes(V.MELANCHOLY, ((V.SERENITY, 0.3), (V.ROMANCE, 0.2))),
    "neon-solitude": ContextAxes(V.ROMANCE, ((V.MELANCHOLY, 0.3), (V.TENSION, 0.2))),
    "overgrown-library": ContextAxes(V.SERENITY, ((V.WONDER, 0.3), (V.NOSTALGIA, 0.2))),
    "midnight-diner": ContextAxes(V.NOSTALGIA, ((V.ROMANCE, 0.3), (V.SERENITY, 0.2))),
    "glass-observatory": ContextAxes(V.WONDER, ((V.SERENITY, 0.3), (V.ENERGY, 0.2))),
    # travel
    "the-departure": ContextAxes(
        V.ENERGY,
        ((V.WONDER, 0.4), (V.TENSION, 0.2)),
        category=Category.TRAVEL,
        sociality=0.25,
    ),
    "the-transit": ContextAxes(
        V.SERENITY,
        ((V.MELANCHOLY, 0.3), (V.ROMANCE, 0.2)),
        category=Category.TRAVEL,
        sociality=0.1,
    ),
    # movies
    "the-last-row": ContextAxes(
        V.MELANCHOLY,
        ((V.TENSION, 0.4), (V.ROMANCE, 0.2)),
        category=Category.MOVIES,
        sociality=0.15,
    ),
    "the-projector": ContextAxes(
        V.NOSTALGIA,
        ((V.ROMANCE, 0.3), (V.SERENITY, 0.2)),
        category=Category.MOVIES,
        sociality=0.1,
    ),
    "the-chase": ContextAxes(V.TENSION, ((V.ENERGY, 0.5), (V.REBELLION, 0.3))),
    "the-neon-marquee": ContextAxes(V.ENERGY, ((V.WONDER, 0.4), (V.REBELLION, 0.2))),
    "the-rewind": ContextAxes(V.NOSTALGIA, ((V.MELANCHOLY, 0.3), (V.ROMANCE, 0.3))),
    "the-fever-dream": ContextAxes(V.REBELLION, ((V.WONDER, 0.4), (V.TENSION, 0.3))),
    # showcase rooms
    "last-summer": ContextAxes(V.NOSTALGIA, ((V.ROMANCE, 0.4), (V.WONDER, 0.3))),
    "neo-noir": ContextAxes(V.TENSION, ((V.REBELLION, 0.4), (V.ENERGY, 0.3))),
    "the-signal": ContextAxes(V.WONDER, ((V.MELANCHOLY, 0.4), (V.SERENITY, 0.3))),
    # music
    "the-rehearsal": ContextAxes(
        V.WONDER,
        ((V.ENERGY, 0.3), (V.REBELLION, 0.2)),
        category=Category.MUSIC,
        sociality=0.35,
    ),
    "the-vinyl": ContextAxes(
        V.NOSTALGIA,
        ((V.ROMANCE, 0.4), (V.SERENITY, 0.2)),
        category=Category.MUSIC,
        sociality=0.15,
    ),
}

# What accepting a content type says about the vibe
CONTENT_TYPE_SIGNALS: dict[ContentType, dict[VibeAxis, float]] = {
    ContentType.IMAGE: {V.WONDER: 0.06, V.SERENITY: 0.04},
    ContentType.SOUND: {V.ROMANCE: 0.05, V.NOSTALGIA: 0.04, V.MELANCHOLY: 0.03},
    ContentType.VIDEO: {V.ENERGY: 0.05, V.TENSION: 0.04, V.WONDER: 0.03},
    ContentType.TEXT: {V.MELANCHOLY: 0.06, V.NOSTALGIA: 0.04},
    ContentType.RECOMMENDATION: {V.WONDER: 0.04, V.REBELLION: 0.03},
}

# Rejecting X nudges its counter-axis
OPPOSITE_AXES: dict[VibeAxis, VibeAxis] = {
    V.TENSION: V.SERENITY,
    V.ENERGY: V.MELANCHOLY,
    V.REBELLION: V.NOSTALGIA,
    V.MELANCHOLY: V.ENERGY,
    V.SERENITY: V.TENSION,
    V.ROMANCE: V.REBELLION,
    V.NOSTALGIA: V.ENERGY,
    V.WONDER: V.NOSTALGIA,
}

DEFAULT_SOCIALITY = 0.3


def context_axes(context_id: ContextId) -> ContextAxes | None:
    return CONTEXT_AXES.get(context_id)


def context_label(context_id: ContextId) -> str:
    """
    Short lowercase room label for explanations, e.g. 'the-last-row' -> 'last row'.
    """
    return context_id.replace("the-", "", 1).replace("-", " ")


def context_sociality(context_id: ContextId) -> float:
    axes = CONTEXT_AXES.get(context_id)
    if axes is None or axes.sociality is None:
        return DEFAULT_SOCIALITY
    return axes.sociality


def contexts_in(category: Category) -> list[ContextId]:
    return [cid for cid, ax in CONTEXT_AXES.items() if ax.category == category]
