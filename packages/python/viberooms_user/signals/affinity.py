from __future__ import annotations

from typing import Sequence

from viberooms_core.config import ACTION_SIGNS, DEFAULT_PARAMS, BehaviorParams
from viberooms_core.types import ContentType, EnrichedEvent

from .reducers import group_by_content_type, mean


def affinity_score(
    events: Sequence[EnrichedEvent], params: BehaviorParams = DEFAULT_PARAMS
) -> float:
    """
    Signed net preference for one content type.

    Mean of dwell_ratio * action sign * confidence weight, so confident
    decisions count for more. Not bounded to [0, 1].
    """
    return mean(
        e.dwell_ratio * ACTION_SIGNS[e.action] * params.confidence_weights[e.confidence]
        for e in events
    )


def compute_affinities(
    events: Sequence[EnrichedEvent], params: BehaviorParams = DEFAULT_PARAMS
) -> dict[ContentType, float]:
    by_type = group_by_content_type(events)
    return {ct: affinity_score(by_type.get(ct, []), params) for ct in ContentType}
