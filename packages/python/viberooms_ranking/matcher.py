from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from viberooms_catalog.catalog import Catalog
from viberooms_core.config import DEFAULT_RECOMMENDATION_COUNT
from viberooms_core.numeric import clamp01
from viberooms_core.types import (
    BehavioralProfile,
    CatalogItem,
    ContextId,
    SchemeVector,
    VectorScheme,
)

from .projection import project_query
from .reasons import mood_tag_reason, mood_tags, shared_axis_reason
from .similarity import cosine, proximity, rating_bonus
from .types import FeatureContribution, Metric, Recommendation, ScoreBreakdown

log = logging.getLogger(__name__)

DEFAULT_METRICS: Dict[VectorScheme, Metric] = {
    VectorScheme.VIBE8: Metric.COSINE,
    VectorScheme.MOOD5: Metric.COSINE,
    VectorScheme.EMOTION4: Metric.DISTANCE,
}


def _feature(name: str, value: float, weight: float) -> FeatureContribution:
    return FeatureContribution(
        feature=name, value=value, weight=weight, contribution=weight * value
    )


def score_item(
    query: SchemeVector, item: CatalogItem, metric: Metric
) -> tuple[float, ScoreBreakdown]:
    """
    Score one item against a query already projected into the item's scheme.
    """
    if metric == Metric.COSINE:
        feats = {"similarity": _feature("similarity", clamp01(cosine(query, item.vector)), 1.0)}
    else:
        feats = {
            "similarity": _feature("similarity", proximity(query, item.vector), 1.0),
            "quality": _feature("quality", rating_bonus(item.rating), 1.0),
        }
    breakdown = ScoreBreakdown(features=feats)
    return clamp01(breakdown.total), breakdown


def _items(catalog: Catalog | Iterable[CatalogItem]) -> tuple[CatalogItem, ...]:
    # one snapshot per call; a concurrent reload never shows up half-applied
    if isinstance(catalog, Catalog):
        return catalog.snapshot()
    return tuple(catalog)


def recommend(
    query: BehavioralProfile | SchemeVector,
    context_id: ContextId,
    catalog: Catalog | Iterable[CatalogItem],
    count: int = DEFAULT_RECOMMENDATION_COUNT,
    *,
    genre: str | None = None,
    metric: Metric | None = None,
) -> List[Recommendation]:
    """
    Rank the catalog against a profile or vector.

    1) project the query into each item's scheme (explicit mapping)
    2) score: cosine for vibe8/mood5, distance + rating bonus for emotion4
    3) stable sort, descending; ties keep catalog order
    4) top `count`, each with a deterministic reason
    """
    items = _items(catalog)
    if count <= 0 or not items:
        return []
    if genre:
        g = genre.lower()
        items = tuple(it for it in items if any(x.lower() == g for x in it.genres))

    projected: Dict[VectorScheme, SchemeVector] = {}
    scored: List[tuple[CatalogItem, float, ScoreBreakdown]] = []
    for it in items:
        scheme = it.vector.scheme
        if scheme not in projected:
            projected[scheme] = project_query(query, scheme, context_id)
        m = metric or DEFAULT_METRICS[scheme]
        score, breakdown = score_item(projected[scheme], it, m)
        scored.append((it, score, breakdown))

    scored.sort(key=lambda t: t[1], reverse=True)
    top = scored[:count]
    log.debug(
        "ranked %d items for %s, top=%s",
        len(scored),
        context_id,
        [(it.id, round(s, 3)) for it, s, _ in top],
    )

    out: List[Recommendation] = []
    for it, score, breakdown in top:
        q = projected[it.vector.scheme]
        if q.scheme == VectorScheme.EMOTION4:
            reason = mood_tag_reason(mood_tags(q), context_id, score)
        else:
            reason = shared_axis_reason(q, it.vector, context_id, score)
        out.append(Recommendation(item=it, score=score, reason=reason, breakdown=breakdown))
    return out
