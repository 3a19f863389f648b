import logging

import pytest

from viberooms_catalog.catalog import Catalog
from viberooms_core.errors import InvalidContentType
from viberooms_core.types import Action, ContentType, InteractionEvent
from viberooms_logging.events import LoggingEmitter, NoopEmitter
from viberooms_session.engine import VibeEngine
from viberooms_session.session import Session
from viberooms_session.settings import EngineSettings


def _skip(i):
    return InteractionEvent(
        content_type=ContentType.IMAGE,
        context_id="the-last-row",
        action=Action.SKIP,
        dwell_ms=200,
        timestamp=i * 1_000,
        sequence_index=i,
    )


def test_record_event_emits_recorded_and_anomalies(engine, emitter):
    s = Session(context_id="the-last-row")
    for i in range(3):
        engine.record_event(s, _skip(i))
    assert emitter.names() == [
        "event_recorded",
        "event_recorded",
        "event_recorded",
        "anomaly_detected",
    ]
    (anomaly,) = emitter.of("anomaly_detected")
    assert anomaly["type"] == "rush"
    assert anomaly["session_id"] == s.session_id


def test_rejected_event_is_emitted_then_raised(engine, emitter):
    s = Session(context_id="the-last-row")
    payload = {
        "contentType": "gif",
        "contextId": "the-last-row",
        "action": "accept",
        "dwellMs": 100,
        "timestamp": 0,
        "sequenceIndex": 0,
    }
    with pytest.raises(InvalidContentType):
        engine.record_payload(s, payload)
    assert emitter.names() == ["event_rejected"]
    assert emitter.of("event_rejected")[0]["code"] == "invalid_content_type"
    assert s.events == []


def test_profile_and_recommend_round(engine, emitter):
    s = Session(context_id="the-last-row")
    for i in range(3):
        engine.record_event(s, _skip(i))
    profile = engine.profile_session(s)
    recs = engine.recommend(profile, s.context_id)

    assert len(recs) == 5  # engine default
    assert emitter.of("profile_built")[0]["trajectory"] == "disengaging"
    ranked = emitter.of("recommendations_ranked")[0]
    assert ranked["returned"] == 5
    assert ranked["items"] == [r.item.id for r in recs]


def test_explicit_count_and_empty_after_reload(engine, emitter, vibe8):
    assert len(engine.recommend(vibe8(energy=1.0), "the-chase", count=2)) == 2
    assert engine.reload_catalog([]) == 1
    assert engine.recommend(vibe8(energy=1.0), "the-chase") == []
    assert emitter.of("catalog_reloaded") == [{"version": 1, "size": 0}]


def test_from_settings_loads_sample_catalog(monkeypatch):
    monkeypatch.setenv("VIBEROOMS_DEFAULT_COUNT", "3")
    engine = VibeEngine.from_settings(EngineSettings())
    assert len(engine.catalog) == 11
    assert engine.default_count == 3
    assert isinstance(engine.events, NoopEmitter)

    recs = engine.recommend(engine.build_profile([], "the-projector"), "the-projector", genre="Romance")
    assert 0 < len(recs) <= 3
    assert all("Romance" in r.item.genres for r in recs)


def test_logging_emitter_writes_records(caplog, monkeypatch):
    monkeypatch.setenv("VIBEROOMS_LOG_EVENTS", "true")
    engine = VibeEngine.from_settings()
    assert isinstance(engine.events, LoggingEmitter)
    with caplog.at_level(logging.INFO, logger="viberooms_logging.events"):
        engine.reload_catalog([])
    (record,) = [r for r in caplog.records if getattr(r, "event_name", None)]
    assert record.event_name == "catalog_reloaded"
    assert record.event_payload == {"version": 1, "size": 0}


class _ReloadingCatalog(Catalog):
    """Bumps the live version right after the ranking snapshot is taken."""

    def versioned_snapshot(self):
        pair = super().versioned_snapshot()
        self.reload(self.snapshot())
        return pair


def test_ranked_event_reports_the_snapshot_version(ten_items, emitter, vibe8):
    engine = VibeEngine(_ReloadingCatalog(ten_items), events=emitter)
    engine.recommend(vibe8(energy=1.0), "the-chase", count=1)
    assert engine.catalog.version == 1
    assert emitter.of("recommendations_ranked")[0]["catalog_version"] == 0
