from __future__ import annotations

from viberooms_core.config import DEFAULT_PARAMS, BehaviorParams
from viberooms_core.errors import InvalidContentType, InvalidEvent
from viberooms_core.types import (
    Action,
    Confidence,
    ContentType,
    EngagementLevel,
    EnrichedEvent,
    InteractionEvent,
)


def coerce_content_type(value: ContentType | str) -> ContentType:
    try:
        return ContentType(value)
    except ValueError:
        raise InvalidContentType(f"unknown content type: {value!r}") from None


def coerce_action(value: Action | str) -> Action:
    try:
        return Action(value)
    except ValueError:
        raise InvalidEvent(f"unknown action: {value!r}") from None


def dwell_ratio(
    dwell_ms: int,
    content_type: ContentType | str,
    params: BehaviorParams = DEFAULT_PARAMS,
) -> float:
    """
    Normalize actual dwell against the content-type expectation.
    """
    ct = coerce_content_type(content_type)
    expected = params.expected_dwell_ms.get(ct)
    if not expected:
        raise InvalidContentType(f"no expected dwell for content type: {ct.value}")
    return dwell_ms / expected


# Fast or very slow = decisive; the hesitant middle band gets discounted downstream
def decision_confidence(
    ratio: float, params: BehaviorParams = DEFAULT_PARAMS
) -> Confidence:
    if ratio < params.fast_ratio or ratio > params.slow_ratio:
        return Confidence.HIGH
    if ratio < params.hesitant_low or ratio > params.hesitant_high:
        return Confidence.MEDIUM
    return Confidence.LOW


def engagement_depth(
    ratio: float, action: Action, params: BehaviorParams = DEFAULT_PARAMS
) -> float:
    return ratio * params.action_weights[Action(action)]


def engagement_level(
    depth: float, params: BehaviorParams = DEFAULT_PARAMS
) -> EngagementLevel:
    if depth > params.absorbed_depth:
        return EngagementLevel.ABSORBED
    if depth >= params.present_depth:
        return EngagementLevel.PRESENT
    return EngagementLevel.GLANCING


def enrich_event(
    event: InteractionEvent, params: BehaviorParams = DEFAULT_PARAMS
) -> EnrichedEvent:
    """
    Attach the per-event derived fields. Pure in (event, params); never
    looks at other events. An already-enriched event is re-derived from
    its raw fields, so stale or foreign derived values never survive.
    """
    if event.dwell_ms < 0:
        raise InvalidEvent(f"negative dwell: {event.dwell_ms}")
    ct = coerce_content_type(event.content_type)
    action = coerce_action(event.action)
    ratio = dwell_ratio(event.dwell_ms, ct, params)
    depth = engagement_depth(ratio, action, params)
    return EnrichedEvent(
        content_type=ct,
        context_id=event.context_id,
        action=action,
        dwell_ms=event.dwell_ms,
        timestamp=event.timestamp,
        sequence_index=event.sequence_index,
        dwell_ratio=ratio,
        confidence=decision_confidence(ratio, params),
        engagement_depth=depth,
        engagement_level=engagement_level(depth, params),
    )


def enrich_all(
    events: list[InteractionEvent], params: BehaviorParams = DEFAULT_PARAMS
) -> list[EnrichedEvent]:
    return [enrich_event(e, params) for e in events]
