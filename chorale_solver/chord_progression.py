"""Chooses a chord for every note of a bass line.

The search runs left to right. At each note it first tries to treat the bass note
as the root of the next chord and then as the third of a first-inversion chord,
keeping whichever candidate is a legal successor of the current chord. The
progression must begin with I and end with V I.
"""
from __future__ import annotations

import logging
import typing as t

from chorale_solver.chord_transitions import is_legal_transition
from chorale_solver.constants import (
    DOMINANT,
    LEADING_TONE,
    MAJOR_SUBTONIC,
    MEDIANT,
    SUPERTONIC,
    TONIC,
)
from chorale_solver.pitch_utils.scale import degree_of
from chorale_solver.pitch_utils.types import ChordSequence, Key, Pitch, ScaleDegree

LOGGER = logging.getLogger(__name__)


def root_position_degree(bass_pitch: Pitch, key: Key) -> ScaleDegree:
    """The degree of the chord with `bass_pitch` as its root.

    The leading-tone triad is never used in root position; a bass note on the leading
    tone is instead harmonized with V (in first inversion).

    >>> root_position_degree(5, Key(0))
    4
    >>> root_position_degree(11, Key(0))
    5
    >>> root_position_degree(10, Key(0, "minor"))
    8
    """
    degree = degree_of(bass_pitch, key)
    if degree == LEADING_TONE:
        return DOMINANT
    return degree


def first_inversion_degree(
    root_degree: ScaleDegree,
    key: Key,
    lookahead_pitch: Pitch | None = None,
) -> ScaleDegree:
    """The degree of the chord whose third is the bass note of the chord on
    `root_degree`.

    >>> first_inversion_degree(3, Key(0))
    1
    >>> first_inversion_degree(5, Key(0))
    3

    A bass note on the supertonic is the third of the leading-tone triad:
    >>> first_inversion_degree(2, Key(0))
    7

    In minor keys it is instead the third of the major triad on the lowered seventh
    if the bass then moves to the mediant:
    >>> first_inversion_degree(2, Key(0, "minor"), lookahead_pitch=3)
    8
    >>> first_inversion_degree(2, Key(0, "minor"), lookahead_pitch=7)
    7

    Other degrees yield values with no successors in the transition graph:
    >>> first_inversion_degree(1, Key(0))
    11
    """
    if root_degree != SUPERTONIC:
        return (root_degree - 2) % 12
    if key.is_major:
        return LEADING_TONE
    assert lookahead_pitch is not None
    if degree_of(lookahead_pitch, key) == MEDIANT:
        return MAJOR_SUBTONIC
    return LEADING_TONE


def _candidate_degrees(
    bass_line: t.Sequence[Pitch], i: int, key: Key
) -> t.Iterator[ScaleDegree]:
    # Candidates for the chord at i + 1, root position first. The lookahead note at
    #   i + 2 always exists because the search stops at the second-last note.
    root_degree = root_position_degree(bass_line[i + 1], key)
    yield root_degree
    yield first_inversion_degree(root_degree, key, lookahead_pitch=bass_line[i + 2])


def _legal_candidates(
    bass_line: t.Sequence[Pitch], key: Key, chords: ChordSequence
) -> t.Iterator[ScaleDegree]:
    i = len(chords) - 1
    current = chords[-1]
    for candidate in _candidate_degrees(bass_line, i, key):
        if not is_legal_transition(current, candidate, key.mode):
            LOGGER.debug(f"{current} -> {candidate} is not a legal transition")
            continue
        LOGGER.debug(f"trying chord {candidate} at index {i + 1}")
        yield candidate


def iter_chord_progressions(
    bass_line: t.Sequence[Pitch], key: Key
) -> t.Iterator[ChordSequence]:
    """Yields every chord progression the search can find, in the order the search
    finds them.

    >>> list(iter_chord_progressions([0, 5, 7, 0], Key(0)))
    [(1, 4, 5, 1)]
    >>> list(iter_chord_progressions([0, 4, 0], Key(0)))
    []

    Assumes a well-formed bass line (see `chorale_solver.bass_line`).
    """
    if len(bass_line) < 3:
        return
    penultimate = len(bass_line) - 2

    # Each frame holds a partial progression and the candidates for its next chord
    #   that have not been tried yet.
    start = (TONIC,)
    stack = [(start, _legal_candidates(bass_line, key, start))]
    while stack:
        chords, candidates = stack[-1]
        candidate = next(candidates, None)
        if candidate is None:
            stack.pop()
            continue
        extended = chords + (candidate,)
        if len(extended) - 1 == penultimate:
            if candidate == DOMINANT:
                yield extended + (TONIC,)
            else:
                LOGGER.debug(f"dead end: penultimate chord {candidate} is not V")
            continue
        stack.append((extended, _legal_candidates(bass_line, key, extended)))


def create_chord_progression(
    bass_line: t.Sequence[Pitch], key: Key
) -> ChordSequence | None:
    """Returns the first chord progression found, or None if there is none.

    >>> create_chord_progression([0, 7, 9, 5, 7, 0], Key(0))
    (1, 5, 6, 4, 5, 1)
    >>> create_chord_progression([0, 11, 0], Key(0))
    (1, 5, 1)
    >>> create_chord_progression([0, 4, 0], Key(0)) is None
    True
    """
    out = next(iter_chord_progressions(bass_line, key), None)
    if out is None:
        LOGGER.info(f"no chord progression found for {list(bass_line)}")
    else:
        LOGGER.info(f"chord progression found: {out}")
    return out
