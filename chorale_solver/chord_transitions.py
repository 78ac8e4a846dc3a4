"""Which chords may follow which.

Chords are identified by scale degree. Degree 8 is the major triad on the lowered
seventh degree, which exists only in minor keys, may only follow the tonic, and
only leads to the mediant.
"""
import typing as t
from functools import lru_cache
from types import MappingProxyType

from chorale_solver.constants import MAJOR_SUBTONIC, MEDIANT, TONIC
from chorale_solver.pitch_utils.types import Mode, ScaleDegree

ChordTransitions = t.Mapping[ScaleDegree, t.Tuple[ScaleDegree, ...]]

BASE_CHORD_TRANSITIONS: ChordTransitions = MappingProxyType(
    {
        1: (1, 2, 3, 4, 5, 6, 7),
        2: (5, 7),
        3: (4, 6),
        4: (1, 2, 5),
        5: (1, 6),
        6: (2, 4),
        7: (1, 5),
    }
)


@lru_cache(maxsize=None)
def get_chord_transitions(mode: Mode) -> ChordTransitions:
    """
    >>> get_chord_transitions(Mode.MAJOR)[1]
    (1, 2, 3, 4, 5, 6, 7)
    >>> 8 in get_chord_transitions(Mode.MAJOR)
    False
    >>> minor = get_chord_transitions(Mode.MINOR)
    >>> minor[1], minor[8]
    ((1, 2, 3, 4, 5, 6, 7, 8), (3,))
    """
    if Mode.from_string(mode) is Mode.MAJOR:
        return BASE_CHORD_TRANSITIONS
    transitions = dict(BASE_CHORD_TRANSITIONS)
    transitions[TONIC] = transitions[TONIC] + (MAJOR_SUBTONIC,)
    transitions[MAJOR_SUBTONIC] = (MEDIANT,)
    return MappingProxyType(transitions)


def is_legal_transition(
    prev_degree: ScaleDegree, next_degree: ScaleDegree, mode: Mode
) -> bool:
    """
    >>> is_legal_transition(5, 1, Mode.MAJOR), is_legal_transition(5, 4, Mode.MAJOR)
    (True, False)
    >>> is_legal_transition(1, 8, Mode.MAJOR), is_legal_transition(1, 8, Mode.MINOR)
    (False, True)
    >>> is_legal_transition(11, 1, Mode.MAJOR)
    False
    """
    return next_degree in get_chord_transitions(mode).get(prev_degree, ())


def is_legal_progression(chords: t.Sequence[ScaleDegree], mode: Mode) -> bool:
    """
    >>> is_legal_progression((1, 4, 5, 1), Mode.MAJOR)
    True
    >>> is_legal_progression((1, 5, 4, 1), Mode.MAJOR)
    False
    """
    return all(
        is_legal_transition(prev, next_, mode) for prev, next_ in zip(chords, chords[1:])
    )
