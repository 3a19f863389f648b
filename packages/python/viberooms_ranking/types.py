from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from viberooms_core.types import CatalogItem


class Metric(str, Enum):
    COSINE = "cosine"
    DISTANCE = "distance"


@dataclass(frozen=True)
class FeatureContribution:
    feature: str  # "similarity", "quality"
    value: float  # feature value (pre-weight)
    weight: float  # weight used in this run
    contribution: float  # weight * value


@dataclass(frozen=True)
class ScoreBreakdown:
    features: Dict[str, FeatureContribution] = field(default_factory=dict)  # keyed by feature name

    @property
    def total(self) -> float:
        return sum(fc.contribution for fc in self.features.values())


@dataclass(frozen=True)
class Recommendation:
    item: CatalogItem
    score: float  # 0–1
    reason: str
    breakdown: ScoreBreakdown | None = None
