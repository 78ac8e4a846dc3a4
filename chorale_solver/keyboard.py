"""Key numbers and the keys they stand for.

The solver only knows pitches as key numbers on a 44-key keyboard starting on C2.
Anything that wants to show them (names, colors) should go through `describe_key`.
"""
from __future__ import annotations

import re
import typing as t
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType

from music21 import pitch as m21_pitch

from chorale_solver.constants import HI_KEY, LOW_KEY, MIDI_OFFSET, TET, WHITE_KEY_PCS
from chorale_solver.pitch_utils.types import Pitch

NOTE_NAME_RE = re.compile(r"^([A-Ga-g])([#b-]*)(-?\d+)$")

# Black keys named with a flat: Eb, Ab and Bb. The other two are C# and F#.
FLAT_SPELLED_PCS = frozenset({3, 8, 10})


class KeyColor(Enum):
    WHITE = "white"
    BLACK = "black"


@dataclass(frozen=True)
class KeyInfo:
    number: Pitch
    name: str
    color: KeyColor

    @property
    def midi_number(self) -> int:
        return self.number + MIDI_OFFSET


def key_color(number: Pitch) -> KeyColor:
    """
    >>> key_color(0), key_color(13)
    (<KeyColor.WHITE: 'white'>, <KeyColor.BLACK: 'black'>)
    """
    return KeyColor.WHITE if number % TET in WHITE_KEY_PCS else KeyColor.BLACK


def key_name(number: Pitch) -> str:
    """
    >>> key_name(0), key_name(12), key_name(43)
    ('C2', 'C3', 'G5')
    >>> key_name(8), key_name(13)
    ('Ab2', 'C#3')
    """
    m21 = m21_pitch.Pitch(midi=number + MIDI_OFFSET)
    if number % TET in FLAT_SPELLED_PCS and m21.accidental.alter > 0:
        m21 = m21.getEnharmonic()
    return m21.nameWithOctave.replace("-", "b")


@lru_cache(maxsize=None)
def _keyboard() -> t.Mapping[Pitch, KeyInfo]:
    return MappingProxyType(
        {
            number: KeyInfo(number, key_name(number), key_color(number))
            for number in range(LOW_KEY, HI_KEY + 1)
        }
    )


def describe_key(number: Pitch) -> KeyInfo:
    """
    >>> describe_key(7)
    KeyInfo(number=7, name='G2', color=<KeyColor.WHITE: 'white'>)
    >>> describe_key(44)
    Traceback (most recent call last):
    ValueError: Key number 44 must be between 0 and 43
    """
    try:
        return _keyboard()[number]
    except KeyError:
        raise ValueError(f"Key number {number} must be between {LOW_KEY} and {HI_KEY}")


def key_number_from_name(name: str) -> Pitch:
    """
    Flats can be written either with "b" or with "-" (as in music21).

    >>> key_number_from_name("C2"), key_number_from_name("Bb2"), key_number_from_name("E-3")
    (0, 10, 15)
    >>> key_number_from_name("F#5")
    42
    >>> key_number_from_name("C7")
    Traceback (most recent call last):
    ValueError: 'C7' is not on the keyboard
    """
    m = NOTE_NAME_RE.match(name.strip())
    if m is None:
        raise ValueError(f"{name!r} is not a note name")
    step, accidentals, octave = m.groups()
    m21 = m21_pitch.Pitch(f"{step.upper()}{accidentals.replace('b', '-')}{octave}")
    number = int(m21.midi) - MIDI_OFFSET
    if not LOW_KEY <= number <= HI_KEY:
        raise ValueError(f"{name!r} is not on the keyboard")
    return number
