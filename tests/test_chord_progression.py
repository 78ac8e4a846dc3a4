import itertools as it
import logging

import pytest

from chorale_solver.chord_progression import (
    create_chord_progression,
    first_inversion_degree,
    iter_chord_progressions,
    root_position_degree,
)
from chorale_solver.chord_transitions import is_legal_progression
from chorale_solver.pitch_utils.scale import is_in_scale
from chorale_solver.pitch_utils.triads import build_triad_table
from chorale_solver.pitch_utils.types import Key, Mode


@pytest.mark.parametrize(
    "bass_line, mode, expected",
    [
        ((0, 5, 7, 0), Mode.MAJOR, (1, 4, 5, 1)),
        ((0, 7, 9, 5, 7, 0), Mode.MAJOR, (1, 5, 6, 4, 5, 1)),
        ((0, 11, 0), Mode.MAJOR, (1, 5, 1)),
        ((0, 4, 0), Mode.MAJOR, None),
        ((0, 2, 4, 5, 7, 0), Mode.MAJOR, (1, 7, 1, 4, 5, 1)),
        ((0, 5, 7, 0), Mode.MINOR, (1, 4, 5, 1)),
        ((0, 2, 3, 5, 7, 0), Mode.MINOR, (1, 8, 3, 4, 5, 1)),
        # transposed
        ((7, 12, 14, 7), Mode.MAJOR, (1, 4, 5, 1)),
        ((9, 14, 16, 21), Mode.MINOR, (1, 4, 5, 1)),
    ],
)
def test_create_chord_progression(bass_line, mode, expected):
    key = Key(bass_line[0], mode)
    assert create_chord_progression(bass_line, key) == expected


def test_root_position_degree():
    key = Key(0)
    assert [root_position_degree(p, key) for p in (0, 2, 4, 5, 7, 9, 11)] == [
        1,
        2,
        3,
        4,
        5,
        6,
        5,
    ]


def test_first_inversion_degree():
    key = Key(0)
    assert [first_inversion_degree(d, key, 0) for d in (3, 4, 5, 6)] == [1, 2, 3, 4]
    assert first_inversion_degree(2, key, lookahead_pitch=4) == 7
    minor = Key(0, Mode.MINOR)
    assert first_inversion_degree(2, minor, lookahead_pitch=15) == 8
    assert first_inversion_degree(2, minor, lookahead_pitch=5) == 7


def test_iter_chord_progressions_is_lazy_and_ordered():
    bass_line = (0, 7, 9, 5, 7, 0)
    progressions = list(iter_chord_progressions(bass_line, Key(0)))
    assert progressions[0] == create_chord_progression(bass_line, Key(0))
    assert len(set(progressions)) == len(progressions)


def _bass_lines(mode, length):
    notes = [p for p in range(25) if is_in_scale(p, 0, mode)]
    for middle in it.product(notes, repeat=length - 2):
        for last in (0, 12):
            yield (0,) + middle + (last,)


@pytest.mark.parametrize("mode", (Mode.MAJOR, Mode.MINOR))
@pytest.mark.parametrize("length", (3, 4))
def test_chord_progression_properties(mode, length):
    key = Key(0, mode)
    triads = build_triad_table(key)
    n_found = 0
    for bass_line in _bass_lines(mode, length):
        chords = create_chord_progression(bass_line, key)
        if chords is None:
            continue
        n_found += 1
        assert len(chords) == len(bass_line)
        assert chords[0] == 1
        assert chords[-2:] == (5, 1)
        assert is_legal_progression(chords, mode)
        for progression in iter_chord_progressions(bass_line, key):
            assert len(progression) == len(bass_line)
            assert is_legal_progression(progression, mode)
        if mode is Mode.MAJOR:
            # every bass note is a member of its chord
            for bass, chord in zip(bass_line, chords):
                assert bass in triads[chord]
    assert n_found > 0


def test_chord_progression_is_deterministic():
    bass_line = (0, 7, 9, 5, 7, 0)
    results = {create_chord_progression(bass_line, Key(0)) for _ in range(3)}
    assert len(results) == 1


@pytest.mark.parametrize("mode", (Mode.MAJOR, Mode.MINOR))
def test_long_bass_line(mode):
    n_cadences = 1000
    bass_line = (0,) + (7, 0) * n_cadences
    expected = (1,) + (5, 1) * n_cadences
    assert create_chord_progression(bass_line, Key(0, mode)) == expected


def test_long_bass_line_without_progression():
    # Fails only at the last chord, so the search backs out of every frame
    bass_line = (0,) + (7, 0) * 999 + (4, 0)
    assert create_chord_progression(bass_line, Key(0)) is None
    assert list(iter_chord_progressions(bass_line, Key(0))) == []


def test_illegal_transitions_are_skipped(caplog):
    caplog.set_level(logging.DEBUG, logger="chorale_solver.chord_progression")
    # V cannot move to IV or ii, so the search backs up and takes iii6 instead of V
    assert create_chord_progression((0, 7, 5, 7, 0), Key(0)) == (1, 3, 4, 5, 1)
    assert "5 -> 4 is not a legal transition" in caplog.text
    assert "5 -> 2 is not a legal transition" in caplog.text
