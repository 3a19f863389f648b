from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Sequence

from viberooms_catalog.catalog import Catalog
from viberooms_catalog.loader import load_catalog
from viberooms_core.config import (
    DEFAULT_PARAMS,
    DEFAULT_RECOMMENDATION_COUNT,
    SAMPLE_CATALOG_PATH,
    BehaviorParams,
)
from viberooms_core.errors import EngineError
from viberooms_core.types import (
    BehavioralProfile,
    CatalogItem,
    ContextId,
    InteractionEvent,
    SchemeVector,
)
from viberooms_logging.events import EventEmitter, LoggingEmitter, NoopEmitter
from viberooms_ranking.matcher import recommend
from viberooms_ranking.types import Recommendation
from viberooms_user.interactions.schemas import parse_interaction
from viberooms_user.profile.profile_builder import build_behavioral_profile

from .session import RecordResult, Session, record_event
from .settings import EngineSettings

log = logging.getLogger(__name__)


class VibeEngine:
    """
    Stateless facade over ingestion, profiling and matching.

    Holds only the catalog, tunables and an event sink; sessions belong to
    the caller and are passed in on every call.
    """

    def __init__(
        self,
        catalog: Catalog,
        events: EventEmitter | None = None,
        params: BehaviorParams | None = None,
        default_count: int = DEFAULT_RECOMMENDATION_COUNT,
    ):
        self.catalog = catalog
        self.events = events or NoopEmitter()
        self.params = params or DEFAULT_PARAMS
        self.default_count = default_count

    @classmethod
    def from_settings(cls, settings: EngineSettings | None = None) -> VibeEngine:
        settings = settings or EngineSettings()
        path = settings.catalog_path or SAMPLE_CATALOG_PATH
        catalog = Catalog(load_catalog(path))
        events: EventEmitter = LoggingEmitter() if settings.log_events else NoopEmitter()
        log.info("%s ready with %d catalog items", settings.app_name, len(catalog))
        return cls(catalog, events=events, default_count=settings.default_count)

    # ---- ingestion ----
    def record_event(self, session: Session, event: InteractionEvent) -> RecordResult:
        try:
            result = record_event(session, event, self.params)
        except EngineError as e:
            self.events.emit(
                "event_rejected",
                {
                    "session_id": session.session_id,
                    "code": e.code,
                    "message": str(e),
                },
            )
            raise

        ev = result.enriched
        self.events.emit(
            "event_recorded",
            {
                "session_id": session.session_id,
                "sequence_index": ev.sequence_index,
                "content_type": ev.content_type.value,
                "action": ev.action.value,
                "dwell_ratio": round(ev.dwell_ratio, 3),
                "confidence": ev.confidence.value,
                "engagement_level": ev.engagement_level.value,
            },
        )
        for a in result.anomalies:
            self.events.emit(
                "anomaly_detected",
                {
                    "session_id": session.session_id,
                    "type": a.type.value,
                    "event_index": a.event_index,
                    "description": a.description,
                },
            )
        return result

    def record_payload(
        self, session: Session, payload: Mapping[str, Any]
    ) -> RecordResult:
        """Same as record_event, from a wire-shaped dict (camelCase or snake_case)."""
        try:
            event = parse_interaction(payload)
        except EngineError as e:
            self.events.emit(
                "event_rejected",
                {"session_id": session.session_id, "code": e.code, "message": str(e)},
            )
            raise
        return self.record_event(session, event)

    # ---- profiling ----
    def build_profile(
        self, events: Sequence[InteractionEvent], context_id: ContextId
    ) -> BehavioralProfile:
        profile = build_behavioral_profile(events, context_id, params=self.params)
        self.events.emit(
            "profile_built",
            {
                "context_id": context_id,
                "event_count": profile.event_count,
                "trajectory": profile.trajectory.value,
                "decision_style": profile.decision_style.value,
                "dominant_axis": profile.dominant_axis.value if profile.dominant_axis else None,
            },
        )
        return profile

    def profile_session(self, session: Session) -> BehavioralProfile:
        return self.build_profile(session.events, session.context_id)

    # ---- matching ----
    def recommend(
        self,
        query: BehavioralProfile | SchemeVector,
        context_id: ContextId,
        count: int | None = None,
        *,
        genre: str | None = None,
    ) -> List[Recommendation]:
        n = self.default_count if count is None else count
        items, version = self.catalog.versioned_snapshot()
        recs = recommend(query, context_id, items, n, genre=genre)
        self.events.emit(
            "recommendations_ranked",
            {
                "context_id": context_id,
                "requested": n,
                "returned": len(recs),
                "catalog_version": version,
                "items": [r.item.id for r in recs],
            },
        )
        return recs

    def reload_catalog(self, items: Iterable[CatalogItem]) -> int:
        version = self.catalog.reload(items)
        self.events.emit(
            "catalog_reloaded", {"version": version, "size": len(self.catalog)}
        )
        return version
