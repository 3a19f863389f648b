from __future__ import annotations

from dataclasses import dataclass

from viberooms_core.config import DEFAULT_PARAMS, BehaviorParams
from viberooms_core.contexts import Category
from viberooms_core.numeric import round_half_up
from viberooms_core.types import (
    Action,
    BehavioralProfile,
    ContentType,
    ContextId,
    EnrichedEvent,
)
from viberooms_user.profile.profile_builder import build_behavioral_profile
from viberooms_user.signals.reducers import action_rate, group_by_content_type, mean

from .session import Session


@dataclass(frozen=True)
class SessionSummary:
    session_id: str
    context_id: ContextId
    category: Category | None
    entry_prompt: str
    contexts_visited: list[ContextId]
    cards_seen: int
    cards_accepted: int
    cards_rejected: int
    cards_skipped: int
    avg_dwell_ms: int
    preferred_content_types: list[ContentType]
    avoided_content_types: list[ContentType]
    completion_rate: float
    behavior: BehavioralProfile


def _count(events: list[EnrichedEvent], action: Action) -> int:
    return sum(1 for e in events if e.action == action)


def summarize_session(
    session: Session, params: BehaviorParams = DEFAULT_PARAMS
) -> SessionSummary:
    """
    End-of-session rollup.

    Preferred types: accept rate > 0.5, or above-average dwell with at least
    one accept. Avoided types: skip rate > 0.5. Types never shown are neither.
    """
    events = session.events
    avg_dwell = mean(e.dwell_ms for e in events)

    preferred: list[ContentType] = []
    avoided: list[ContentType] = []
    by_type = group_by_content_type(events)
    for ct in ContentType:
        te = by_type.get(ct, [])
        if not te:
            continue
        accept_rate = action_rate(te, Action.ACCEPT)
        if accept_rate > 0.5 or (mean(e.dwell_ms for e in te) > avg_dwell and accept_rate > 0):
            preferred.append(ct)
        if action_rate(te, Action.SKIP) > 0.5:
            avoided.append(ct)

    visited = session.contexts_visited()
    completed = [c for c in visited if c in session.completed_contexts]

    return SessionSummary(
        session_id=session.session_id,
        context_id=session.context_id,
        category=session.category,
        entry_prompt=session.entry_prompt,
        contexts_visited=visited,
        cards_seen=len(events),
        cards_accepted=_count(events, Action.ACCEPT),
        cards_rejected=_count(events, Action.REJECT),
        cards_skipped=_count(events, Action.SKIP),
        avg_dwell_ms=round_half_up(avg_dwell),
        preferred_content_types=preferred,
        avoided_content_types=avoided,
        completion_rate=len(completed) / len(visited) if visited else 0.0,
        behavior=build_behavioral_profile(events, session.context_id, params=params),
    )
