import pytest

from chorale_solver.constants import HI_KEY
from chorale_solver.pitch_utils.triads import (
    build_triad_table,
    chord_factor,
    get_triad_root,
    next_higher_note,
    next_lower_note,
)
from chorale_solver.pitch_utils.types import Key, Mode

TRIAD_QUALITY_STEPS = {
    "major": (4, 3),
    "minor": (3, 4),
    "diminished": (3, 3),
}


@pytest.mark.parametrize("tonic", range(12))
@pytest.mark.parametrize("mode", (Mode.MAJOR, Mode.MINOR))
def test_build_triad_table(tonic, mode):
    key = Key(tonic, mode)
    table = build_triad_table(key)
    expected_degrees = {1, 2, 3, 4, 5, 6, 7} | ({8} if mode is Mode.MINOR else set())
    assert set(table) == expected_degrees
    for degree, triad in table.items():
        root = get_triad_root(degree, key)
        assert 0 <= root < 12
        assert triad[0] == root
        assert list(triad) == sorted(triad)
        assert triad[-1] <= HI_KEY
        # the table reaches up to the top of the keyboard
        assert triad[-1] + 6 > HI_KEY
        for i, pitch in enumerate(triad):
            # roots, thirds, and fifths alternate
            assert (pitch - triad[i % 3]) % 12 == 0


def test_triad_qualities():
    c_major = build_triad_table(Key(0))
    assert c_major[1][:3] == (0, 4, 7)
    assert c_major[2][:3] == (2, 5, 9)
    assert c_major[7][:3] == (11, 14, 17)
    c_minor = build_triad_table(Key(0, Mode.MINOR))
    assert c_minor[1][:3] == (0, 3, 7)
    assert c_minor[3][:3] == (3, 7, 10)
    assert c_minor[5][:3] == (7, 11, 14)
    assert c_minor[6][:3] == (8, 12, 15)
    assert c_minor[8][:3] == (10, 14, 17)


def test_triad_roots_in_other_keys():
    assert get_triad_root(5, Key(7)) == 2
    assert get_triad_root(7, Key(7)) == 6
    assert get_triad_root(8, Key(9, Mode.MINOR)) == 7
    assert get_triad_root(6, Key(9, Mode.MINOR)) == 5


def test_chord_factor():
    g_major = build_triad_table(Key(0))[5]
    assert [chord_factor(g_major, p) for p in (7, 11, 14, 19, 35, 38)] == [
        0,
        1,
        2,
        0,
        1,
        2,
    ]
    with pytest.raises(ValueError):
        chord_factor(g_major, 12)


@pytest.mark.parametrize("tonic", (0, 4, 9))
def test_next_notes(tonic):
    for triad in build_triad_table(Key(tonic)).values():
        for note in range(-2, HI_KEY + 3):
            lower = next_lower_note(triad, note)
            higher = next_higher_note(triad, note)
            if note in triad:
                assert lower == higher == note
                continue
            if lower is None:
                assert note < triad[0]
            else:
                assert lower < note
                assert not any(lower < p < note for p in triad)
            if higher is None:
                assert note > triad[-1]
            else:
                assert higher > note
                assert not any(note < p < higher for p in triad)
