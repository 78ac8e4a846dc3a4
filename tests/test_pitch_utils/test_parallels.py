import pytest

from chorale_solver.pitch_utils.parts import succession_has_forbidden_parallels


@pytest.mark.parametrize(
    "src, dst, expected",
    [
        # parallel octaves, bass and soprano
        ((0, 28, 31, 36), (2, 29, 33, 38), True),
        # parallel fifths, tenor and alto
        ((0, 24, 31, 40), (2, 26, 33, 38), True),
        # compound fifth
        ((0, 19, 28, 36), (2, 21, 29, 36), True),
        # fifths in contrary motion
        ((0, 28, 31, 36), (5, 29, 33, 33), False),
        # fifth to octave
        ((0, 7), (2, 14), False),
        # common tones
        ((0, 28, 31, 36), (0, 28, 31, 36), False),
        # I IV V I
        ((0, 28, 31, 36), (5, 29, 33, 36), False),
        ((5, 29, 33, 36), (7, 26, 31, 35), False),
        ((7, 26, 31, 35), (0, 28, 31, 36), False),
    ],
)
def test_succession_has_forbidden_parallels(src, dst, expected):
    assert succession_has_forbidden_parallels(src, dst) == expected


def test_only_given_intervals_are_forbidden():
    src, dst = (0, 36), (2, 38)
    assert succession_has_forbidden_parallels(src, dst, forbidden_parallels=(0,))
    assert not succession_has_forbidden_parallels(src, dst, forbidden_parallels=(7,))
    assert succession_has_forbidden_parallels(src, dst, forbidden_parallels=(12,))
