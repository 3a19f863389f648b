from __future__ import annotations

import logging
from typing import Sequence

from viberooms_core.config import DEFAULT_PARAMS, BehaviorParams
from viberooms_core.numeric import clamp01
from viberooms_core.types import (
    Action,
    BehavioralProfile,
    Confidence,
    ContentType,
    ContextId,
    DecisionStyle,
    EnrichedEvent,
    InteractionEvent,
    SchemeVector,
    Trajectory,
    VectorScheme,
)
from viberooms_user.signals.affinity import compute_affinities
from viberooms_user.signals.anomalies import scan_anomalies
from viberooms_user.signals.dwell import enrich_all
from viberooms_user.signals.reducers import action_rate, mean, tail
from viberooms_user.signals.trajectory import compute_trajectory

from .vibe_builder import build_vibe_vector, dominant_axis

log = logging.getLogger(__name__)


def energy_level(
    events: Sequence[EnrichedEvent], params: BehaviorParams = DEFAULT_PARAMS
) -> float:
    # centered at 0.5, shifted by last-minus-first dwell over the recent window
    recent = [e.dwell_ratio for e in tail(events, params.energy_window)]
    trend = recent[-1] - recent[0] if len(recent) > 1 else 0.0
    return clamp01(0.5 + trend * 0.25)


def raw_context_fit(events: Sequence[EnrichedEvent]) -> float:
    """
    > 1.0 good fit | 0.5–1.0 partial | < 0.5 wrong room. Unclamped.
    """
    if not events:
        return 0.0
    accepted = sum(1 for e in events if e.action == Action.ACCEPT)
    skipped = sum(1 for e in events if e.action == Action.SKIP)
    avg_ratio = mean(e.dwell_ratio for e in events)
    return (accepted * 2 + avg_ratio - skipped * 1.5) / len(events)


def routing_confidence(raw_fit: float) -> float:
    return clamp01(abs(raw_fit - 0.5) * 2)


def decision_style(
    events: Sequence[EnrichedEvent], params: BehaviorParams = DEFAULT_PARAMS
) -> DecisionStyle:
    if not events:
        return DecisionStyle.AMBIGUOUS
    n = len(events)
    high = sum(1 for e in events if e.confidence == Confidence.HIGH)
    low = sum(1 for e in events if e.confidence == Confidence.LOW)

    if high / n > 0.55:
        fast = sum(1 for e in events if e.dwell_ratio < params.fast_ratio)
        slow = sum(1 for e in events if e.dwell_ratio > params.slow_ratio)
        return DecisionStyle.REFLEXIVE if fast > slow else DecisionStyle.DELIBERATE
    if low / n > 0.5:
        return DecisionStyle.AMBIGUOUS
    return DecisionStyle.DELIBERATE


def neutral_profile(context_id: ContextId) -> BehavioralProfile:
    return BehavioralProfile(
        context_id=context_id,
        event_count=0,
        energy_level=0.5,
        present_depth=0.5,
        selectivity=0.5,
        content_affinities={ct: 0.0 for ct in ContentType},
        context_fit=0.0,
        routing_confidence=0.0,
        trajectory=Trajectory.SEARCHING,
        decision_style=DecisionStyle.AMBIGUOUS,
        anomalies=(),
        vibe=SchemeVector.zeros(VectorScheme.VIBE8),
        dominant_axis=None,
    )


def build_behavioral_profile(
    log_events: Sequence[InteractionEvent],
    context_id: ContextId,
    *,
    params: BehaviorParams = DEFAULT_PARAMS,
) -> BehavioralProfile:
    """
    Recompute the full session profile from the event log.

    Accepts raw or already-enriched events; derived fields are always
    recomputed. Raises InvalidEvent on negative dwell or an unknown action.
    Nothing is cached between calls, so calling this after every event
    gives the same answer as one call on the finished log.
    """
    events = enrich_all(list(log_events), params)
    if not events:
        return neutral_profile(context_id)

    avg_depth = mean(e.engagement_depth for e in events)
    like_rate = action_rate(events, Action.ACCEPT)
    skip_rate = action_rate(events, Action.SKIP)
    fit = raw_context_fit(events)
    vibe, debug = build_vibe_vector(events, context_id, params=params)
    if debug["skipped"]:
        log.debug(
            "vibe build ignored %d events with unknown contexts", debug["skipped"]
        )

    return BehavioralProfile(
        context_id=context_id,
        event_count=len(events),
        energy_level=energy_level(events, params),
        present_depth=clamp01(avg_depth * 0.55),
        selectivity=clamp01(skip_rate * 0.65 + (1 - like_rate) * 0.35),
        content_affinities=compute_affinities(events, params),
        context_fit=max(0.0, fit),
        routing_confidence=routing_confidence(fit),
        trajectory=compute_trajectory(events, params),
        decision_style=decision_style(events, params),
        anomalies=tuple(scan_anomalies(events, params)),
        vibe=vibe,
        dominant_axis=dominant_axis(vibe),
    )
