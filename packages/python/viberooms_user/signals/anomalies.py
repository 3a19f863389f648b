from __future__ import annotations

from typing import Iterable, Sequence

from viberooms_core.config import DEFAULT_PARAMS, BehaviorParams
from viberooms_core.numeric import round_half_up
from viberooms_core.types import Action, Anomaly, AnomalyType, EnrichedEvent

from .reducers import action_rate, tail


def _sec(ms: int) -> int:
    return round_half_up(ms / 1000)


def detect_anomalies(
    prefix: Sequence[EnrichedEvent], params: BehaviorParams = DEFAULT_PARAMS
) -> list[Anomaly]:
    """
    Inspect the tail of the log after its newest event was appended.

    `prefix` is the log up to and including the new event; the detector is
    causal and never looks past it. Each rule fires at most once per call.
    """
    if not prefix:
        return []
    event = prefix[-1]
    idx = len(prefix) - 1
    found: list[Anomaly] = []

    def add(kind: AnomalyType, description: str) -> None:
        found.append(
            Anomaly(
                type=kind,
                event_index=idx,
                timestamp=event.timestamp,
                description=description,
            )
        )

    # pause: long look, then rejected
    if event.action == Action.REJECT and event.dwell_ratio > params.pause_ratio:
        add(
            AnomalyType.PAUSE,
            f"{_sec(event.dwell_ms)}s on {event.content_type.value} then rejected: ambivalent",
        )

    # stall: extreme dwell on any action
    if event.dwell_ratio > params.stall_ratio:
        add(
            AnomalyType.STALL,
            f"{_sec(event.dwell_ms)}s on {event.content_type.value}: absorbed or distracted",
        )

    # rush: N skips inside a short wall-clock span
    if len(prefix) >= params.rush_window:
        window = tail(prefix, params.rush_window)
        span = window[-1].timestamp - window[0].timestamp
        if all(e.action == Action.SKIP for e in window) and span < params.rush_span_ms:
            add(
                AnomalyType.RUSH,
                f"{params.rush_window} skips in {span / 1000:.1f}s: searching, not finding it",
            )

    # drop-off: sustained skip rate over the recent window
    if len(prefix) >= params.drop_off_window:
        window = tail(prefix, params.drop_off_window)
        if action_rate(window, Action.SKIP) >= params.drop_off_skip_rate:
            add(
                AnomalyType.DROP_OFF,
                f"{action_rate(window, Action.SKIP):.0%} skip rate over last "
                f"{params.drop_off_window} cards: disengaging",
            )

    return found


def dedupe_anomalies(anomalies: Iterable[Anomaly]) -> list[Anomaly]:
    seen: set[tuple[AnomalyType, int]] = set()
    out: list[Anomaly] = []
    for a in anomalies:
        if a.key in seen:
            continue
        seen.add(a.key)
        out.append(a)
    return out


def scan_anomalies(
    events: Sequence[EnrichedEvent], params: BehaviorParams = DEFAULT_PARAMS
) -> list[Anomaly]:
    """Batch scan of every prefix, including the first event."""
    found: list[Anomaly] = []
    for i in range(len(events)):
        found.extend(detect_anomalies(events[: i + 1], params))
    return dedupe_anomalies(found)
