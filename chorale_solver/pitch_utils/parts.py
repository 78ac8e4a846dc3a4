import typing as t
from itertools import combinations

from chorale_solver.pitch_utils.types import ChromaticInterval, Pitch


def succession_has_forbidden_parallels(
    src_pitches: t.Sequence[Pitch],
    dst_pitches: t.Sequence[Pitch],
    forbidden_parallels: t.Sequence[ChromaticInterval] = (0, 7),
) -> bool:
    """
    `src_pitches` and `dst_pitches` must have the same length; the pitches at each
    index are understood to belong to the same voice.

    Intervals in `forbidden_parallels` are reduced mod 12, so 0 forbids unisons,
    octaves, and compound octaves alike.

    ------------------------------------------------------------------------------------
    Octaves
    ------------------------------------------------------------------------------------
    >>> succession_has_forbidden_parallels([0, 12], [2, 14])
    True
    >>> succession_has_forbidden_parallels([0, 12], [0, 12])
    False
    >>> succession_has_forbidden_parallels([0, 24], [2, 14])
    True
    >>> succession_has_forbidden_parallels([12, 12], [14, 14])
    True

    ------------------------------------------------------------------------------------
    Fifths
    ------------------------------------------------------------------------------------
    >>> succession_has_forbidden_parallels([0, 7], [2, 9])
    True
    >>> succession_has_forbidden_parallels([0, 7, 16], [2, 21, 16])
    True
    >>> succession_has_forbidden_parallels([0, 5], [2, 7])
    False

    Contrary and oblique motion are always allowed:
    >>> succession_has_forbidden_parallels([7, 14], [5, 17])
    False
    >>> succession_has_forbidden_parallels([0, 7], [0, 7])
    False

    An empty `forbidden_parallels` disables the check:
    >>> succession_has_forbidden_parallels([0, 7], [2, 9], forbidden_parallels=())
    False
    """
    assert len(src_pitches) == len(dst_pitches)
    if not forbidden_parallels:
        return False
    forbidden = {interval % 12 for interval in forbidden_parallels}

    melodic_atoms = list(zip(src_pitches, dst_pitches))
    for (atom1_p1, atom1_p2), (atom2_p1, atom2_p2) in combinations(melodic_atoms, r=2):
        melodic_interval1 = atom1_p2 - atom1_p1
        melodic_interval2 = atom2_p2 - atom2_p1

        # If either voice has a melodic unison, continue
        if melodic_interval1 == 0 or melodic_interval2 == 0:
            continue

        if (melodic_interval1 > 0) != (melodic_interval2 > 0):
            continue

        harmonic_interval1 = abs(atom2_p1 - atom1_p1) % 12
        harmonic_interval2 = abs(atom2_p2 - atom1_p2) % 12

        if harmonic_interval1 == harmonic_interval2 and harmonic_interval1 in forbidden:
            return True

    return False
