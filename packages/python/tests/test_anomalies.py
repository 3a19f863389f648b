from viberooms_core.types import Action, AnomalyType, ContentType
from viberooms_session.session import Session, record_event
from viberooms_user.signals.anomalies import detect_anomalies, scan_anomalies


def _types(anomalies):
    return [a.type for a in anomalies]


def test_rush_fires_on_three_fast_skips(make_enriched, rush_steps):
    events = make_enriched(rush_steps)
    found = scan_anomalies(events)
    assert _types(found) == [AnomalyType.RUSH]
    assert found[0].event_index == 2
    assert found[0].description.startswith("3 skips in 2.0s")


def test_rush_needs_a_short_span(make_enriched):
    events = make_enriched(
        [
            (ContentType.IMAGE, Action.SKIP, 200, 0),
            (ContentType.IMAGE, Action.SKIP, 200, 3_000),
            (ContentType.IMAGE, Action.SKIP, 200, 6_000),
        ]
    )
    assert AnomalyType.RUSH not in _types(scan_anomalies(events))


def test_stall_on_first_event(make_enriched):
    events = make_enriched([(ContentType.IMAGE, Action.ACCEPT, 50_000, 0)])
    found = scan_anomalies(events)
    assert _types(found) == [AnomalyType.STALL]
    assert found[0].event_index == 0
    assert found[0].description == "50s on image: absorbed or distracted"


def test_pause_on_long_look_then_reject(make_enriched):
    events = make_enriched([(ContentType.IMAGE, Action.REJECT, 20_000, 0)])
    found = detect_anomalies(events)
    assert _types(found) == [AnomalyType.PAUSE]
    assert found[0].description == "20s on image then rejected: ambivalent"


def test_drop_off_over_last_four(make_enriched):
    events = make_enriched(
        [
            (ContentType.TEXT, Action.ACCEPT, 8_000, 0),
            (ContentType.TEXT, Action.SKIP, 2_000, 10_000),
            (ContentType.TEXT, Action.SKIP, 2_000, 20_000),
            (ContentType.TEXT, Action.SKIP, 2_000, 30_000),
        ]
    )
    found = detect_anomalies(events)
    assert _types(found) == [AnomalyType.DROP_OFF]
    assert "75% skip rate" in found[0].description


def test_incremental_matches_batch(make_events):
    steps = [
        (ContentType.IMAGE, Action.ACCEPT, 50_000, 0),
        (ContentType.TEXT, Action.REJECT, 30_000, 60_000),
        (ContentType.IMAGE, Action.SKIP, 300, 61_000),
        (ContentType.IMAGE, Action.SKIP, 300, 62_000),
        (ContentType.IMAGE, Action.SKIP, 300, 63_000),
        (ContentType.SOUND, Action.SKIP, 300, 64_000),
    ]
    session = Session(context_id="the-last-row")
    for e in make_events(steps):
        record_event(session, e)

    assert session.anomalies == scan_anomalies(session.events)
    assert len({a.key for a in session.anomalies}) == len(session.anomalies)


def test_seconds_round_half_up(make_enriched):
    events = make_enriched([(ContentType.IMAGE, Action.REJECT, 17_500, 0)])
    (pause,) = detect_anomalies(events)
    assert pause.description == "18s on image then rejected: ambivalent"
