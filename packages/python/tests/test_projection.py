import pytest

from viberooms_core.errors import SchemeMismatch
from viberooms_core.types import SchemeVector, VectorScheme
from viberooms_ranking.projection import (
    PROJECTIONS,
    derive_emotional_state,
    project,
    project_query,
)
from viberooms_ranking.similarity import cosine, proximity, rating_bonus
from viberooms_user.profile.profile_builder import neutral_profile


def test_every_scheme_pair_has_a_mapping():
    assert len(PROJECTIONS) == len(VectorScheme) ** 2


def test_identity_projection_returns_input(vibe8):
    v = vibe8(melancholy=0.7, wonder=0.2)
    assert project(v, VectorScheme.VIBE8) is v


def test_vibe8_to_mood5(vibe8):
    v = vibe8(melancholy=0.8, romance=1.0, nostalgia=0.5, serenity=0.4, wonder=0.5)
    m = project(v, VectorScheme.MOOD5).as_dict()
    assert m["melancholy"] == pytest.approx(0.8)
    assert m["longing"] == pytest.approx(0.85)
    assert m["peace"] == pytest.approx(0.4)
    assert m["nostalgia"] == pytest.approx(0.5)
    assert m["awe"] == pytest.approx(0.4)


@pytest.mark.parametrize("src", list(VectorScheme))
@pytest.mark.parametrize("dst", list(VectorScheme))
def test_projection_stays_in_unit_range(src, dst):
    ones = SchemeVector(src, (1.0,) * len(SchemeVector.zeros(src).values))
    for vec in (ones, SchemeVector.zeros(src)):
        out = project(vec, dst)
        assert out.scheme == dst
        assert all(0.0 <= x <= 1.0 for x in out.values)


def test_emotional_state_from_neutral_profile():
    state = derive_emotional_state(neutral_profile("the-last-row"), "the-last-row")
    assert state.as_dict() == {
        "intensity": 0.5,
        "darkness": 0.5,
        "complexity": 0.5,
        "sociality": 0.15,
    }


def test_profile_query_uses_vibe_for_cosine_schemes():
    p = neutral_profile("the-vinyl")
    q = project_query(p, VectorScheme.MOOD5, "the-vinyl")
    assert q.scheme == VectorScheme.MOOD5
    assert q.is_zero()


def test_cross_scheme_comparison_raises(vibe8):
    mood = SchemeVector.zeros(VectorScheme.MOOD5)
    with pytest.raises(SchemeMismatch):
        cosine(vibe8(melancholy=1.0), mood)
    with pytest.raises(SchemeMismatch):
        proximity(vibe8(melancholy=1.0), mood)


def test_similarity_helpers(vibe8):
    a = vibe8(melancholy=1.0)
    assert cosine(a, a) == pytest.approx(1.0)
    assert cosine(a, SchemeVector.zeros(VectorScheme.VIBE8)) == 0.0
    e = SchemeVector(VectorScheme.EMOTION4, (0.0, 0.0, 0.0, 0.0))
    f = SchemeVector(VectorScheme.EMOTION4, (1.0, 1.0, 1.0, 1.0))
    assert proximity(e, f) == pytest.approx(0.0)
    assert proximity(e, e) == pytest.approx(1.0)
    assert rating_bonus(8.5) == pytest.approx(0.1)
    assert rating_bonus(None) == 0.0
