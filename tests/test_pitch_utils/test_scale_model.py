import pytest

from chorale_solver.pitch_utils.scale import degree_of, interval_to_degree, is_in_scale
from chorale_solver.pitch_utils.types import Key, Mode


@pytest.mark.parametrize(
    "mode, forbidden", (("major", {1, 3, 6, 8, 10}), ("minor", {1, 4, 6, 9}))
)
@pytest.mark.parametrize("tonic", (0, 5, 11, 23))
def test_is_in_scale(mode, forbidden, tonic):
    for distance in range(-24, 25):
        assert is_in_scale(tonic + distance, tonic, mode) == (
            distance % 12 not in forbidden
        )


@pytest.mark.parametrize("mode", ("major", "minor"))
def test_interval_to_degree_matches_scale(mode):
    for distance in range(12):
        degree = interval_to_degree(distance, mode)
        if is_in_scale(distance, 0, mode):
            assert degree != 0
        else:
            assert degree == 0


def test_interval_to_degree():
    assert interval_to_degree(10, "minor") == 8
    assert interval_to_degree(10, "major") == 0
    assert interval_to_degree(11, "minor") == 7
    assert interval_to_degree(-5, "major") == 5
    assert interval_to_degree(36, "minor") == 1


def test_degree_of():
    a_minor = Key(9, "minor")
    assert degree_of(9, a_minor) == 1
    assert degree_of(12, a_minor) == 3
    assert degree_of(7, a_minor) == 8
    assert degree_of(8, a_minor) == 7
    assert degree_of(10, a_minor) == 0


def test_key():
    key = Key(14, "minor")
    assert key.tonic == 2
    assert key.mode is Mode.MINOR
    assert key.is_minor and not key.is_major
    assert Key(0) == Key(12, "major")
    with pytest.raises(ValueError):
        Key(0, "dorian")
