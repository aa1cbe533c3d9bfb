import pytest

from examprep.application.utils.numbers import mean, percent, round_half_up, round_int


@pytest.mark.parametrize(
    "value,digits,expected",
    [
        (62.5, 0, 63),
        (2.5, 0, 3),
        (1.25, 1, 1.3),
        (-45.5, 0, -45),
        (0.9623, 2, 0.96),
    ],
)
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == pytest.approx(expected)


def test_round_int():
    assert round_int(0.5) == 1
    assert round_int(66.666) == 67
    assert isinstance(round_int(3.2), int)


def test_percent():
    assert percent(7, 10) == 70
    assert percent(1, 3) == 33
    assert percent(5, 0) == 0


def test_mean():
    assert mean([]) == 0
    assert mean([1, 2, 3, 4]) == 2.5
