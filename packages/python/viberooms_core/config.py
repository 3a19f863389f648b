from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .types import Action, Confidence, ContentType

# Expected dwell per content type; ratio < 0.5 = rushed, 0.5–1.5 = normal, > 1.5 = absorbed
EXPECTED_DWELL_MS: dict[ContentType, int] = {
    ContentType.TEXT: 8_000,
    ContentType.IMAGE: 5_000,
    ContentType.VIDEO: 12_000,
    ContentType.SOUND: 10_000,
    ContentType.RECOMMENDATION: 15_000,
}

ACTION_WEIGHTS: dict[Action, float] = {
    Action.ACCEPT: 1.0,
    Action.REJECT: 0.6,
    Action.SKIP: 0.2,  # often reflexive
}

ACTION_SIGNS: dict[Action, float] = {
    Action.ACCEPT: 1.0,
    Action.REJECT: -1.0,
    Action.SKIP: 0.0,
}

CONFIDENCE_WEIGHTS: dict[Confidence, float] = {
    Confidence.HIGH: 1.5,
    Confidence.MEDIUM: 1.0,
    Confidence.LOW: 0.5,
}

DEFAULT_RECOMMENDATION_COUNT = 5

SAMPLE_CATALOG_PATH = (
    Path(__file__).resolve().parent.parent / "viberooms_catalog" / "data" / "films.json"
)


@dataclass
class BehaviorParams:
    expected_dwell_ms: dict[ContentType, int] = field(
        default_factory=lambda: dict(EXPECTED_DWELL_MS)
    )
    # confidence bands on dwell ratio
    fast_ratio: float = 0.2
    slow_ratio: float = 2.0
    hesitant_low: float = 0.5
    hesitant_high: float = 1.5
    action_weights: dict[Action, float] = field(
        default_factory=lambda: dict(ACTION_WEIGHTS)
    )
    confidence_weights: dict[Confidence, float] = field(
        default_factory=lambda: dict(CONFIDENCE_WEIGHTS)
    )
    absorbed_depth: float = 1.2
    present_depth: float = 0.6
    # anomaly thresholds
    pause_ratio: float = 3.0
    stall_ratio: float = 5.0
    rush_window: int = 3
    rush_span_ms: int = 5_000
    drop_off_window: int = 4
    drop_off_skip_rate: float = 0.75
    # trajectory
    trajectory_window: int = 6
    trajectory_min_events: int = 3
    energy_window: int = 5
    # vibe accumulation
    seed_primary: float = 0.4
    accept_boost: float = 0.12
    reject_penalty: float = 0.08
    opposite_boost: float = 0.04
    long_dwell_ms: int = 5_000
    long_dwell_bonus: float = 0.06
    quick_skip_ms: int = 1_500
    quick_skip_penalty: float = 0.04
    norm_epsilon: float = 1e-6
    raw_digits: int = 6  # drops float noise before normalizing
    round_digits: int = 2


DEFAULT_PARAMS = BehaviorParams()
