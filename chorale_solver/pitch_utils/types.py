import typing as t
from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType

from chorale_solver.constants import (
    ALTO_RANGE,
    BASS_RANGE,
    SOPRANO_RANGE,
    TENOR_RANGE,
    TET,
)

Pitch = int
PitchClass = int
ChromaticInterval = int
ScaleDegree = int
ChordFactor = int

ChordSequence = t.Tuple[ScaleDegree, ...]
TriadTable = t.Mapping[ScaleDegree, t.Tuple[Pitch, ...]]


class Mode(str, Enum):
    MAJOR = "major"
    MINOR = "minor"

    @classmethod
    def from_string(cls, mode: t.Union[str, "Mode"]) -> "Mode":
        """
        >>> Mode.from_string("Minor")
        <Mode.MINOR: 'minor'>
        >>> Mode.from_string("")
        <Mode.MAJOR: 'major'>
        """
        if isinstance(mode, Mode):
            return mode
        if not mode:
            return cls.MAJOR
        try:
            return cls(mode.strip().lower())
        except ValueError:
            raise ValueError(f"{mode=} is neither 'major' nor 'minor'")


@dataclass(frozen=True)
class Key:
    """The tonic is always stored as a pitch-class.

    >>> Key(14, Mode.MINOR)
    Key(tonic=2, mode=<Mode.MINOR: 'minor'>)
    >>> Key(7).is_major
    True
    """

    tonic: PitchClass
    mode: Mode = Mode.MAJOR

    def __post_init__(self):
        object.__setattr__(self, "tonic", self.tonic % TET)
        object.__setattr__(self, "mode", Mode.from_string(self.mode))

    @property
    def is_major(self) -> bool:
        return self.mode is Mode.MAJOR

    @property
    def is_minor(self) -> bool:
        return self.mode is Mode.MINOR


class Voice(IntEnum):
    BASS = 0
    TENOR = 1
    ALTO = 2
    SOPRANO = 3


UPPER_VOICES = (Voice.SOPRANO, Voice.ALTO, Voice.TENOR)

voice_enum_to_string: t.Dict[Voice, str] = {
    Voice.BASS: "bass",
    Voice.TENOR: "tenor",
    Voice.ALTO: "alto",
    Voice.SOPRANO: "soprano",
}

VOICE_RANGES: t.Mapping[Voice, t.Tuple[Pitch, Pitch]] = MappingProxyType(
    {
        Voice.BASS: BASS_RANGE,
        Voice.TENOR: TENOR_RANGE,
        Voice.ALTO: ALTO_RANGE,
        Voice.SOPRANO: SOPRANO_RANGE,
    }
)


class UpperVoicePitches(t.NamedTuple):
    soprano: Pitch
    alto: Pitch
    tenor: Pitch


class FourPartPitches(t.NamedTuple):
    """Pitches of one chord, ordered from the bass up."""

    bass: Pitch
    tenor: Pitch
    alto: Pitch
    soprano: Pitch


@dataclass
class SettingsBase:
    pass
