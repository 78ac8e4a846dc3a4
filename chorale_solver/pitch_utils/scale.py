from __future__ import annotations

from chorale_solver.constants import (
    FORBIDDEN_DISTANCES,
    INTERVAL_TO_DEGREE,
    NO_DEGREE,
    TET,
)
from chorale_solver.pitch_utils.types import (
    ChromaticInterval,
    Key,
    Mode,
    Pitch,
    ScaleDegree,
)


def normalize_distance(distance: ChromaticInterval) -> ChromaticInterval:
    """
    >>> normalize_distance(-1)
    11
    >>> normalize_distance(26)
    2
    """
    return distance % TET


def is_in_scale(candidate: Pitch, tonic: Pitch, mode: Mode | str) -> bool:
    """Returns True unless the distance from `tonic` to `candidate` is one of
    the chromatic distances forbidden in `mode`.

    The tonic need not be in the same octave as the candidate:
    >>> is_in_scale(16, 0, "major")  # E above C
    True
    >>> is_in_scale(3, 12, "major")  # Eb in C major
    False
    >>> is_in_scale(3, 12, "minor")  # Eb in C minor
    True
    >>> is_in_scale(4, 0, "minor")  # E in C minor
    False

    Both the lowered and the raised seventh belong to minor keys:
    >>> is_in_scale(10, 0, "minor"), is_in_scale(11, 0, "minor")
    (True, True)
    """
    distance = normalize_distance(candidate - tonic)
    return distance not in FORBIDDEN_DISTANCES[Mode.from_string(mode)]


def interval_to_degree(distance: ChromaticInterval, mode: Mode | str) -> ScaleDegree:
    """Classifies a distance above the tonic as the degree of the chord whose
    root lies at that distance. Returns 0 if there is no such chord.

    >>> [interval_to_degree(d, "major") for d in range(12)]
    [1, 0, 2, 0, 3, 4, 0, 5, 0, 6, 0, 7]
    >>> [interval_to_degree(d, "minor") for d in range(12)]
    [1, 0, 2, 3, 0, 4, 0, 5, 6, 0, 8, 7]

    Negative and compound distances are normalized first:
    >>> interval_to_degree(-1, "major"), interval_to_degree(19, "major")
    (7, 5)
    """
    return INTERVAL_TO_DEGREE[Mode.from_string(mode)].get(
        normalize_distance(distance), NO_DEGREE
    )


def degree_of(pitch: Pitch, key: Key) -> ScaleDegree:
    """
    >>> degree_of(23, Key(0))
    7
    >>> degree_of(22, Key(0, Mode.MINOR))
    8
    """
    return interval_to_degree(pitch - key.tonic, key.mode)
