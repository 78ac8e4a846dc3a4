"""Reading and checking bass lines before they are harmonized.

A well-formed bass line
    - has at least 3 notes
    - has every note within the bass range
    - has every note in the scale of its first note
    - ends on the same pitch-class as it begins
"""
from __future__ import annotations

import logging
import typing as t

from chorale_solver.constants import BASS_RANGE, MIN_BASS_LINE_LEN, TET
from chorale_solver.keyboard import key_number_from_name
from chorale_solver.pitch_utils.scale import is_in_scale
from chorale_solver.pitch_utils.types import Mode, Pitch

LOGGER = logging.getLogger(__name__)


class BassLineError(ValueError):
    pass


def parse_bass_note(token: str) -> Pitch:
    """Bass notes may be given as key numbers or as note names.

    >>> parse_bass_note("7"), parse_bass_note("G2"), parse_bass_note("C3")
    (7, 7, 12)
    >>> parse_bass_note("H2")
    Traceback (most recent call last):
    chorale_solver.bass_line.BassLineError: 'H2' is neither a key number nor a note name
    """
    token = token.strip()
    try:
        return int(token)
    except ValueError:
        pass
    try:
        return key_number_from_name(token)
    except ValueError:
        raise BassLineError(f"{token!r} is neither a key number nor a note name")


def parse_bass_line(tokens: str | t.Iterable[str]) -> t.List[Pitch]:
    """
    >>> parse_bass_line("0 5 7 0")
    [0, 5, 7, 0]
    >>> parse_bass_line(["C2", "F2", "G2", "C2"])
    [0, 5, 7, 0]
    """
    if isinstance(tokens, str):
        tokens = tokens.split()
    return [parse_bass_note(token) for token in tokens]


def validate_bass_line(bass_line: t.Sequence[Pitch], mode: Mode | str) -> None:
    """Raises BassLineError if the bass line is malformed.

    >>> validate_bass_line([0, 5, 7, 0], "major")
    >>> validate_bass_line([0, 5, 0], "major")
    >>> validate_bass_line([0, 7], "major")
    Traceback (most recent call last):
    chorale_solver.bass_line.BassLineError: Bass line must have at least 3 notes (got 2)
    >>> validate_bass_line([0, 4, 7, 0], "minor")
    Traceback (most recent call last):
    chorale_solver.bass_line.BassLineError: Note 4 at position 1 is not in the scale of 0 minor
    """
    mode = Mode.from_string(mode)
    if len(bass_line) < MIN_BASS_LINE_LEN:
        raise BassLineError(
            f"Bass line must have at least {MIN_BASS_LINE_LEN} notes "
            f"(got {len(bass_line)})"
        )
    start_note = bass_line[0]
    for i, note in enumerate(bass_line):
        if not BASS_RANGE[0] <= note <= BASS_RANGE[1]:
            raise BassLineError(
                f"Note {note} at position {i} must be between "
                f"{BASS_RANGE[0]} and {BASS_RANGE[1]}"
            )
        if not is_in_scale(note, start_note, mode):
            raise BassLineError(
                f"Note {note} at position {i} is not in the scale of "
                f"{start_note} {mode.value}"
            )
    if (bass_line[-1] - start_note) % TET != 0:
        raise BassLineError(
            f"Bass line must end on the same scale degree as it starts "
            f"(started on {start_note}, ended on {bass_line[-1]})"
        )
    LOGGER.debug(f"bass line {list(bass_line)} is well-formed")
