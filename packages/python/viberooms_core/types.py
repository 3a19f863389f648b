from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

ContextId = str
ItemId = str


class ContentType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    SOUND = "sound"
    RECOMMENDATION = "recommendation"


class Action(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    SKIP = "skip"


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EngagementLevel(str, Enum):
    ABSORBED = "absorbed"
    PRESENT = "present"
    GLANCING = "glancing"


class Trajectory(str, Enum):
    ABSORBING = "absorbing"
    SETTLING = "settling"
    SEARCHING = "searching"
    DISENGAGING = "disengaging"


class DecisionStyle(str, Enum):
    REFLEXIVE = "reflexive"
    DELIBERATE = "deliberate"
    AMBIGUOUS = "ambiguous"


class AnomalyType(str, Enum):
    PAUSE = "pause"  # long look, then reject
    STALL = "stall"  # extreme dwell on any action
    RUSH = "rush"  # burst of fast skips
    DROP_OFF = "drop-off"  # sustained skipping


class VibeAxis(str, Enum):
    MELANCHOLY = "melancholy"  # sadness, depth, introspection
    WONDER = "wonder"  # awe, discovery, curiosity
    NOSTALGIA = "nostalgia"  # warmth, memory, comfort
    TENSION = "tension"  # suspense, edge, intensity
    ENERGY = "energy"  # excitement, adventure, rhythm
    SERENITY = "serenity"  # peace, calm, stillness
    ROMANCE = "romance"  # longing, love, intimacy
    REBELLION = "rebellion"  # defiance, rawness, independence


class VectorScheme(str, Enum):
    VIBE8 = "vibe8"
    MOOD5 = "mood5"
    EMOTION4 = "emotion4"


SCHEME_AXES: dict[VectorScheme, tuple[str, ...]] = {
    VectorScheme.VIBE8: tuple(a.value for a in VibeAxis),
    VectorScheme.MOOD5: ("melancholy", "longing", "peace", "nostalgia", "awe"),
    VectorScheme.EMOTION4: ("intensity", "darkness", "complexity", "sociality"),
}


@dataclass(frozen=True)
class SchemeVector:
    """
    A vector tagged with the axis scheme it lives in.

    Values are ordered like SCHEME_AXES[scheme] and always within [0, 1].
    Vectors of different schemes are never compared directly; go through
    viberooms_ranking.projection instead.
    """

    scheme: VectorScheme
    values: tuple[float, ...]

    def __post_init__(self) -> None:
        axes = SCHEME_AXES[self.scheme]
        if len(self.values) != len(axes):
            raise ValueError(
                f"{self.scheme.value} expects {len(axes)} values, got {len(self.values)}"
            )
        for axis, v in zip(axes, self.values):
            if not 0.0 <= v <= 1.0:
                raise ValueError(f"{self.scheme.value}.{axis}={v} is outside [0, 1]")

    @property
    def axes(self) -> tuple[str, ...]:
        return SCHEME_AXES[self.scheme]

    @classmethod
    def from_mapping(
        cls, scheme: VectorScheme | str, values: Mapping[str, float]
    ) -> SchemeVector:
        scheme = VectorScheme(scheme)
        axes = SCHEME_AXES[scheme]
        missing = [a for a in axes if a not in values]
        extra = [k for k in values if k not in axes]
        if missing or extra:
            raise ValueError(
                f"{scheme.value} mapping mismatch: missing={missing} unexpected={extra}"
            )
        return cls(scheme=scheme, values=tuple(float(values[a]) for a in axes))

    @classmethod
    def zeros(cls, scheme: VectorScheme) -> SchemeVector:
        return cls(scheme=scheme, values=(0.0,) * len(SCHEME_AXES[scheme]))

    def as_dict(self) -> dict[str, float]:
        return dict(zip(self.axes, self.values))

    def get(self, axis: str | Enum) -> float:
        key = axis.value if isinstance(axis, Enum) else axis
        return self.values[self.axes.index(key)]

    def is_zero(self) -> bool:
        return not any(self.values)


@dataclass(frozen=True)
class InteractionEvent:
    content_type: ContentType
    context_id: ContextId  # room the card belonged to
    action: Action
    dwell_ms: int
    timestamp: int  # epoch ms, non-decreasing within a session
    sequence_index: int  # 0-based position within the session


@dataclass(frozen=True)
class EnrichedEvent(InteractionEvent):
    dwell_ratio: float
    confidence: Confidence
    engagement_depth: float
    engagement_level: EngagementLevel

    def raw(self) -> InteractionEvent:
        return InteractionEvent(
            content_type=self.content_type,
            context_id=self.context_id,
            action=self.action,
            dwell_ms=self.dwell_ms,
            timestamp=self.timestamp,
            sequence_index=self.sequence_index,
        )


@dataclass(frozen=True)
class Anomaly:
    type: AnomalyType
    event_index: int
    timestamp: int
    description: str

    @property
    def key(self) -> tuple[AnomalyType, int]:
        return (self.type, self.event_index)


@dataclass(frozen=True)
class BehavioralProfile:
    context_id: ContextId
    event_count: int
    energy_level: float  # 0 = drained / distracted, 1 = activated
    present_depth: float  # 0 = glancing, 1 = absorbed
    selectivity: float  # 0 = accepting everything, 1 = rejecting most
    content_affinities: dict[ContentType, float]
    context_fit: float  # clamped to >= 0
    routing_confidence: float
    trajectory: Trajectory
    decision_style: DecisionStyle
    anomalies: tuple[Anomaly, ...]
    vibe: SchemeVector
    dominant_axis: VibeAxis | None = None


@dataclass(frozen=True)
class CatalogItem:
    id: ItemId
    title: str
    vector: SchemeVector
    year: int | None = None
    rating: float | None = None
    votes: int | None = None
    runtime: int | None = None
    genres: tuple[str, ...] = ()
