"""Pitches of each diatonic triad across the whole four-voice range.

Every triad is stacked upwards from its root in the lowest octave, so that in
each table entry the items at indices congruent to 0, 1, and 2 (mod 3) are
respectively roots, thirds, and fifths.
"""
from __future__ import annotations

import itertools as it
import logging
import typing as t
from bisect import bisect_left, bisect_right
from types import MappingProxyType

from chorale_solver.constants import (
    DEGREE_TO_ROOT_OFFSET,
    HI_KEY,
    TET,
    TRIAD_QUALITIES,
    TRIAD_STEPS,
)
from chorale_solver.pitch_utils.types import (
    ChordFactor,
    Key,
    Pitch,
    ScaleDegree,
    TriadTable,
)

LOGGER = logging.getLogger(__name__)


def stack_triad(
    root: Pitch, steps: t.Sequence[int], max_pitch: Pitch = HI_KEY
) -> t.Tuple[Pitch, ...]:
    """
    >>> stack_triad(0, (4, 3, 5), max_pitch=24)
    (0, 4, 7, 12, 16, 19, 24)
    >>> stack_triad(11, (3, 3, 6), max_pitch=30)
    (11, 14, 17, 23, 26, 29)
    """
    out = []
    for step in it.cycle(steps):
        if root > max_pitch:
            break
        out.append(root)
        root += step
    return tuple(out)


def get_triad_root(degree: ScaleDegree, key: Key) -> Pitch:
    """The root of the triad on `degree`, in the lowest octave.

    >>> get_triad_root(5, Key(9))  # E in A major
    4
    >>> get_triad_root(8, Key(0, "minor"))  # Bb in C minor
    10
    """
    return (key.tonic + DEGREE_TO_ROOT_OFFSET[key.mode][degree]) % TET


def build_triad_table(key: Key, max_pitch: Pitch = HI_KEY) -> TriadTable:
    """
    >>> table = build_triad_table(Key(0))
    >>> sorted(table)
    [1, 2, 3, 4, 5, 6, 7]
    >>> table[1]
    (0, 4, 7, 12, 16, 19, 24, 28, 31, 36, 40, 43)
    >>> table[7][:6]
    (11, 14, 17, 23, 26, 29)

    Minor keys also have the major triad on the lowered seventh (degree 8):
    >>> table = build_triad_table(Key(0, "minor"))
    >>> table[8][:3], table[5][:3], table[2][:3]
    ((10, 14, 17), (7, 11, 14), (2, 5, 8))
    """
    qualities = TRIAD_QUALITIES[key.mode]
    table = {}
    for degree, quality in qualities.items():
        root = get_triad_root(degree, key)
        table[degree] = stack_triad(root, TRIAD_STEPS[quality], max_pitch)
    LOGGER.debug(f"built triad table for {key}")
    return MappingProxyType(table)


def chord_factor(triad: t.Sequence[Pitch], pitch: Pitch) -> ChordFactor:
    """Returns 0 for the root, 1 for the third, 2 for the fifth.

    >>> c_major = build_triad_table(Key(0))[1]
    >>> chord_factor(c_major, 28), chord_factor(c_major, 31), chord_factor(c_major, 36)
    (1, 2, 0)
    >>> chord_factor(c_major, 29)
    Traceback (most recent call last):
    ValueError: 29 is not in triad
    """
    i = bisect_left(triad, pitch)
    if i == len(triad) or triad[i] != pitch:
        raise ValueError(f"{pitch} is not in triad")
    return i % 3


def next_lower_note(triad: t.Sequence[Pitch], note: Pitch) -> Pitch | None:
    """Returns the highest pitch of `triad` that is lower than or equal to `note`,
    or None if there is no such pitch.

    `triad` must be sorted in ascending order.

    >>> g_major = (7, 11, 14, 19, 23, 26, 31, 35, 38, 43)
    >>> next_lower_note(g_major, 36)
    35
    >>> next_lower_note(g_major, 35)
    35
    >>> next_lower_note(g_major, 6) is None
    True
    """
    i = bisect_right(triad, note)
    if i == 0:
        return None
    return triad[i - 1]


def next_higher_note(triad: t.Sequence[Pitch], note: Pitch) -> Pitch | None:
    """Returns the lowest pitch of `triad` that is higher than or equal to `note`,
    or None if there is no such pitch.

    >>> f_major = (5, 9, 12, 17, 21, 24, 29, 33, 36, 41)
    >>> next_higher_note(f_major, 31)
    33
    >>> next_higher_note(f_major, 36)
    36
    >>> next_higher_note(f_major, 42) is None
    True
    """
    i = bisect_left(triad, note)
    if i == len(triad):
        return None
    return triad[i]
