import pytest

from chorale_solver.chord_transitions import (
    get_chord_transitions,
    is_legal_progression,
    is_legal_transition,
)
from chorale_solver.pitch_utils.types import Mode


@pytest.mark.parametrize("mode", (Mode.MAJOR, Mode.MINOR))
def test_transitions_are_shared_between_modes(mode):
    transitions = get_chord_transitions(mode)
    assert transitions[2] == (5, 7)
    assert transitions[3] == (4, 6)
    assert transitions[4] == (1, 2, 5)
    assert transitions[5] == (1, 6)
    assert transitions[6] == (2, 4)
    assert transitions[7] == (1, 5)


def test_major_subtonic():
    assert 8 not in get_chord_transitions(Mode.MAJOR)
    assert 8 not in get_chord_transitions(Mode.MAJOR)[1]
    minor = get_chord_transitions(Mode.MINOR)
    assert minor[1] == (1, 2, 3, 4, 5, 6, 7, 8)
    assert minor[8] == (3,)
    # only the tonic leads to degree 8
    assert [degree for degree, nexts in minor.items() if 8 in nexts] == [1]


def test_transitions_accept_strings():
    assert get_chord_transitions("minor") == get_chord_transitions(Mode.MINOR)


@pytest.mark.parametrize(
    "chords, mode, expected",
    [
        ((1, 4, 5, 1), Mode.MAJOR, True),
        ((1, 5, 6, 4, 5, 1), Mode.MAJOR, True),
        ((1, 8, 3, 4, 5, 1), Mode.MINOR, True),
        ((1, 8, 3, 4, 5, 1), Mode.MAJOR, False),
        ((1, 5, 4, 1), Mode.MAJOR, False),
        ((1, 3, 5, 1), Mode.MAJOR, False),
    ],
)
def test_is_legal_progression(chords, mode, expected):
    assert is_legal_progression(chords, mode) == expected


def test_unknown_degrees_have_no_successors():
    for degree in (0, 9, 10, 11):
        assert not any(is_legal_transition(degree, d, Mode.MINOR) for d in range(12))
