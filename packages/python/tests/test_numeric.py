import pytest

from viberooms_core.numeric import clamp01, round_half_up


@pytest.mark.parametrize("x,expected", [(0.5, 1), (2.5, 3), (62.5, 63), (2.49, 2), (0.0, 0)])
def test_round_half_up(x, expected):
    assert round_half_up(x) == expected


def test_clamp01():
    assert clamp01(-0.2) == 0.0
    assert clamp01(0.4) == 0.4
    assert clamp01(1.7) == 1.0
