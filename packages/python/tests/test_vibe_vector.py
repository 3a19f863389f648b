import pytest

from viberooms_core.config import BehaviorParams
from viberooms_core.types import Action, ContentType, VectorScheme, VibeAxis
from viberooms_user.profile.vibe_builder import build_vibe_vector, dominant_axis


def test_empty_log_is_all_zero():
    vec, debug = build_vibe_vector([], "the-last-row")
    assert vec.scheme == VectorScheme.VIBE8
    assert vec.is_zero()
    assert dominant_axis(vec) is None


def test_non_empty_log_is_max_normalized(make_enriched):
    events = make_enriched([(ContentType.TEXT, Action.ACCEPT, 16_000, 0)])
    vec, debug = build_vibe_vector(events, "the-last-row")
    assert max(vec.values) == 1.0
    assert all(0.0 <= v <= 1.0 for v in vec.values)
    assert dominant_axis(vec) == VibeAxis.MELANCHOLY
    assert debug["seeded"] is True


def test_reject_nudges_the_opposite_axis(make_enriched):
    accepted, _ = build_vibe_vector(
        make_enriched([(ContentType.TEXT, Action.ACCEPT, 8_000, 0)]), "the-last-row"
    )
    rejected, _ = build_vibe_vector(
        make_enriched([(ContentType.TEXT, Action.REJECT, 8_000, 0)]), "the-last-row"
    )
    assert rejected.get("energy") > accepted.get("energy")


def test_confident_accepts_move_the_vector_further(make_enriched):
    # same room, same card type; only the dwell (and so the confidence) differs
    high, _ = build_vibe_vector(
        make_enriched(
            [(ContentType.RECOMMENDATION, Action.ACCEPT, 1_500, 0)], "the-chase"
        ),
        "the-last-row",
    )
    low, _ = build_vibe_vector(
        make_enriched(
            [(ContentType.RECOMMENDATION, Action.ACCEPT, 15_000, 0)], "the-chase"
        ),
        "the-last-row",
    )
    assert high.get(VibeAxis.TENSION) > low.get(VibeAxis.TENSION)


def test_unknown_contexts_are_skipped(make_enriched):
    events = make_enriched([(ContentType.TEXT, Action.ACCEPT, 8_000, 0)], "nowhere")
    vec, debug = build_vibe_vector(events, "nowhere")
    assert debug == {"seeded": False, "skipped": 1, "raw_max": 0.0}
    assert vec.is_zero()


def test_tiny_raw_vector_still_reaches_one(make_enriched):
    # only the seed contributes; the event's room is unknown
    params = BehaviorParams(seed_primary=0.002)
    events = make_enriched([(ContentType.TEXT, Action.SKIP, 8_000, 0)], "nowhere")
    vec, debug = build_vibe_vector(events, "the-last-row", params=params)
    assert debug["raw_max"] == pytest.approx(0.002)
    assert max(vec.values) == 1.0
    assert dominant_axis(vec) == VibeAxis.MELANCHOLY
