from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from viberooms_core.config import DEFAULT_PARAMS, BehaviorParams
from viberooms_core.contexts import Category
from viberooms_core.errors import InvalidEvent, InvalidEventOrdering
from viberooms_core.types import (
    Anomaly,
    AnomalyType,
    ContextId,
    EnrichedEvent,
    InteractionEvent,
)
from viberooms_user.signals.anomalies import detect_anomalies
from viberooms_user.signals.dwell import coerce_action, enrich_event


@dataclass
class Session:
    """
    State for one visitor session, owned by the caller.

    The event log is append-only; the engine never keeps a reference to a
    session between calls.
    """

    context_id: ContextId
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    category: Category | None = None
    entry_prompt: str = ""
    events: list[EnrichedEvent] = field(default_factory=list)
    anomalies: list[Anomaly] = field(default_factory=list)
    completed_contexts: set[ContextId] = field(default_factory=set)
    _anomaly_keys: set[tuple[AnomalyType, int]] = field(
        default_factory=set, repr=False
    )

    @property
    def next_index(self) -> int:
        return len(self.events)

    def contexts_visited(self) -> list[ContextId]:
        seen: dict[ContextId, None] = {self.context_id: None}
        for e in self.events:
            seen.setdefault(e.context_id, None)
        return list(seen)

    def mark_completed(self, context_id: ContextId) -> None:
        self.completed_contexts.add(context_id)


@dataclass(frozen=True)
class RecordResult:
    enriched: EnrichedEvent
    anomalies: tuple[Anomaly, ...]


def validate_event(session: Session, event: InteractionEvent) -> None:
    coerce_action(event.action)
    if event.dwell_ms < 0:
        raise InvalidEvent(f"negative dwell: {event.dwell_ms}")
    if event.sequence_index != session.next_index:
        raise InvalidEventOrdering(
            f"expected sequence_index {session.next_index}, got {event.sequence_index}"
        )
    if session.events and event.timestamp < session.events[-1].timestamp:
        raise InvalidEventOrdering(
            f"timestamp {event.timestamp} precedes {session.events[-1].timestamp}"
        )


def record_event(
    session: Session,
    event: InteractionEvent,
    params: BehaviorParams = DEFAULT_PARAMS,
) -> RecordResult:
    """
    Validate, enrich and append one event, then run the causal anomaly
    check on the new tail. Any validation error leaves the log untouched.
    """
    validate_event(session, event)
    enriched = enrich_event(event, params)

    session.events.append(enriched)
    fresh: list[Anomaly] = []
    for a in detect_anomalies(session.events, params):
        if a.key in session._anomaly_keys:
            continue
        session._anomaly_keys.add(a.key)
        session.anomalies.append(a)
        fresh.append(a)
    return RecordResult(enriched=enriched, anomalies=tuple(fresh))
