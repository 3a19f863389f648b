from collections import defaultdict
from typing import Iterable, Sequence

from viberooms_core.types import Action, ContentType, EnrichedEvent


def mean(xs: Iterable[float]) -> float:
    vals = list(xs)
    return sum(vals) / len(vals) if vals else 0.0


def action_rate(events: Sequence[EnrichedEvent], action: Action) -> float:
    """Share of events with the given action; 0 for an empty window."""
    if not events:
        return 0.0
    return sum(1 for e in events if e.action == action) / len(events)


def tail(events: Sequence[EnrichedEvent], n: int) -> list[EnrichedEvent]:
    if n <= 0:
        return []
    return list(events[-n:])


def group_by_content_type(
    events: Iterable[EnrichedEvent],
) -> dict[ContentType, list[EnrichedEvent]]:
    by_type: dict[ContentType, list[EnrichedEvent]] = defaultdict(list)
    for e in events:
        by_type[e.content_type].append(e)
    return by_type
