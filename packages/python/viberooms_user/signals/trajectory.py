from __future__ import annotations

from typing import Sequence

from viberooms_core.config import DEFAULT_PARAMS, BehaviorParams
from viberooms_core.types import Action, EnrichedEvent, Trajectory

from .reducers import action_rate, mean, tail


def dwell_trend(window: Sequence[EnrichedEvent]) -> float:
    """Mean dwell ratio of the second half minus the first half."""
    mid = len(window) // 2
    ratios = [e.dwell_ratio for e in window]
    return mean(ratios[mid:]) - mean(ratios[:mid])


def compute_trajectory(
    events: Sequence[EnrichedEvent], params: BehaviorParams = DEFAULT_PARAMS
) -> Trajectory:
    if len(events) < params.trajectory_min_events:
        return Trajectory.SEARCHING

    recent = tail(events, min(params.trajectory_window, len(events)))
    trend = dwell_trend(recent)
    like_rate = action_rate(recent, Action.ACCEPT)
    skip_rate = action_rate(recent, Action.SKIP)

    # order matters: absorbing before the weaker settling check
    if trend > 0.3 and like_rate > 0.3:
        return Trajectory.ABSORBING
    if trend > 0.2:
        return Trajectory.SETTLING
    if skip_rate > 0.5 or (trend < -0.3 and like_rate < 0.2):
        return Trajectory.DISENGAGING
    return Trajectory.SEARCHING
