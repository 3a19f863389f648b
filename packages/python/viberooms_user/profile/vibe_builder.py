from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from viberooms_core.config import DEFAULT_PARAMS, BehaviorParams
from viberooms_core.contexts import CONTENT_TYPE_SIGNALS, OPPOSITE_AXES, context_axes
from viberooms_core.types import (
    Action,
    Confidence,
    ContextId,
    EnrichedEvent,
    SchemeVector,
    VectorScheme,
    VibeAxis,
)

AXES: list[VibeAxis] = list(VibeAxis)
_IDX = {axis: i for i, axis in enumerate(AXES)}


# ---- small utils ----
def _bump(v: np.ndarray, axis: VibeAxis, delta: float) -> None:
    i = _IDX[axis]
    v[i] = min(1.0, max(0.0, v[i] + delta))


# scale so the dominant axis lands at 1.0
def _max_norm(v: np.ndarray, eps: float, digits: int) -> np.ndarray:
    denom = max(float(v.max()) if v.size else 0.0, eps)
    return np.round(v / denom, digits)


def _confidence_scale(conf: Confidence, params: BehaviorParams) -> float:
    base = params.confidence_weights[Confidence.MEDIUM] or 1.0
    return params.confidence_weights[conf] / base


# ---- main builder ----
def build_vibe_vector(
    events: Sequence[EnrichedEvent],
    context_id: ContextId,
    *,
    params: BehaviorParams = DEFAULT_PARAMS,
) -> tuple[SchemeVector, dict[str, Any]]:
    """
    Context-seeded accumulation over the 8 vibe axes:

    - Seeded from the session room's primary/secondary axes.
    - Accept amplifies the event room's axes plus content-type cross-signals.
    - Reject dampens the primary axis and nudges its opposite.
    - Accept/reject moves are scaled by decision confidence.
    - Dwell length adds a small bonus / penalty to the primary axis.
    - Max-normalized, rounded.

    An empty log yields the all-zero vector.
    """
    v = np.zeros((len(AXES),), dtype=np.float64)
    if not events:
        return SchemeVector.zeros(VectorScheme.VIBE8), {"skipped": 0, "seeded": False}

    # 1) seed from the session room
    seed = context_axes(context_id)
    if seed is not None:
        _bump(v, seed.primary, params.seed_primary)
        for axis, weight in seed.secondary:
            _bump(v, axis, params.seed_primary * weight)

    # 2) fold events in log order
    skipped = 0
    for e in events:
        axes = context_axes(e.context_id)
        if axes is None:
            skipped += 1
            continue
        primary = axes.primary
        scale = _confidence_scale(e.confidence, params)

        if e.action == Action.ACCEPT:
            _bump(v, primary, params.accept_boost * scale)
            for axis, weight in axes.secondary:
                _bump(v, axis, params.accept_boost * weight * scale)
            for axis, boost in CONTENT_TYPE_SIGNALS.get(e.content_type, {}).items():
                _bump(v, axis, boost * scale)
        elif e.action == Action.REJECT:
            _bump(v, primary, -params.reject_penalty * scale)
            opp = OPPOSITE_AXES.get(primary)
            if opp is not None:
                _bump(v, opp, params.opposite_boost * scale)

        if e.dwell_ms > params.long_dwell_ms:
            _bump(v, primary, params.long_dwell_bonus)
        elif e.dwell_ms < params.quick_skip_ms and e.action == Action.SKIP:
            _bump(v, primary, -params.quick_skip_penalty)

    # 3) normalize
    v = np.round(v, params.raw_digits)
    raw_max = float(v.max())
    out = _max_norm(v, params.norm_epsilon, params.round_digits)
    vec = SchemeVector(
        scheme=VectorScheme.VIBE8,
        values=tuple(float(min(1.0, max(0.0, x))) for x in out),
    )
    debug = {
        "seeded": seed is not None,
        "skipped": skipped,
        "raw_max": raw_max,
    }
    return vec, debug


def dominant_axis(vec: SchemeVector) -> VibeAxis | None:
    """Highest axis; ties go to the earlier axis. None for an all-zero vector."""
    if vec.scheme != VectorScheme.VIBE8 or vec.is_zero():
        return None
    i = int(np.argmax(np.asarray(vec.values)))
    return AXES[i]
