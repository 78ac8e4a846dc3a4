from __future__ import annotations

import logging
import textwrap
import typing as t
from dataclasses import dataclass
from enum import Enum

import pandas as pd

from chorale_solver.bass_line import validate_bass_line
from chorale_solver.chord_progression import create_chord_progression
from chorale_solver.chord_transitions import is_legal_progression
from chorale_solver.pitch_utils.triads import build_triad_table
from chorale_solver.pitch_utils.types import ChordSequence, Key, Mode, Pitch
from chorale_solver.utils.recursion import RecursionFailed
from chorale_solver.voice_leader import VoiceLeader, VoiceLeaderSettings

LOGGER = logging.getLogger(__name__)

RULES = (
    "There must be at least 3 chords in the sequence",
    "Each note in the bass line must be in the scale of the starting note",
    "The sequence must begin and end on the same chord",
    "The chord preceding the last one must be a V chord",
    "If possible, use root-position chords, and 1st inversion only when necessary",
    "There are limits to how low and high each voice can go, since the parts are "
    "meant to be sung by humans",
    "The top and second-to-top voice should never be more than an octave apart, and "
    "the two middle voices should never be more than an octave apart",
    "Parallel octaves and 5ths are not allowed",
    "Between the four voices, two should play the root of the chord, one should play "
    "the third tone, and one should play the fifth tone",
)


def format_rules() -> str:
    return "\n".join(
        textwrap.fill(rule, initial_indent="    ", subsequent_indent="        ")
        for rule in RULES
    )


class Outcome(Enum):
    SUCCESS = "success"
    NO_PROGRESSION = "no suitable chord progression found"
    NO_VOICING = "no solutions were found for that chord progression"


@dataclass
class ChoraleComposerSettings(VoiceLeaderSettings):
    pass


@dataclass(frozen=True)
class ChoraleResult:
    key: Key
    bass: t.Tuple[Pitch, ...]
    outcome: Outcome
    chords: ChordSequence | None = None
    soprano: t.Tuple[Pitch, ...] | None = None
    alto: t.Tuple[Pitch, ...] | None = None
    tenor: t.Tuple[Pitch, ...] | None = None

    @property
    def success(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    def voices(self) -> t.Dict[str, t.Tuple[Pitch, ...]]:
        assert self.success
        return {
            "bass": self.bass,
            "tenor": self.tenor,  # type:ignore
            "alto": self.alto,  # type:ignore
            "soprano": self.soprano,  # type:ignore
        }

    def get_df(self, note_dur: float = 1.0) -> pd.DataFrame:
        """Returns a "homophonic" dataframe with one row per chord."""
        assert self.success
        n = len(self.bass)
        out_dict = {
            "onset": [i * note_dur for i in range(n)],
            "release": [(i + 1) * note_dur for i in range(n)],
            "chord": list(self.chords),  # type:ignore
        }
        out_dict.update({voice: list(pitches) for voice, pitches in self.voices().items()})
        return pd.DataFrame(out_dict)


class ChoraleComposer:
    def __init__(self, settings: ChoraleComposerSettings | None = None):
        if settings is None:
            settings = ChoraleComposerSettings()
        self.settings = settings
        LOGGER.debug(
            textwrap.fill(f"settings: {self.settings}", subsequent_indent=" " * 4)
        )

    def __call__(
        self, bass_line: t.Sequence[Pitch], mode: Mode | str = Mode.MAJOR
    ) -> ChoraleResult:
        """
        Raises chorale_solver.bass_line.BassLineError if the bass line is malformed.

        >>> composer = ChoraleComposer()
        >>> composer([0, 4, 0]).outcome
        <Outcome.NO_PROGRESSION: 'no suitable chord progression found'>
        >>> result = composer([0, 5, 7, 0])
        >>> result.chords, result.soprano
        ((1, 4, 5, 1), (36, 36, 35, 36))
        """
        bass_line = tuple(bass_line)
        validate_bass_line(bass_line, mode)
        # A new key for every request, so nothing carries over between runs
        key = Key(bass_line[0], Mode.from_string(mode))
        LOGGER.info(f"harmonizing {list(bass_line)} in {key.tonic} {key.mode.value}")

        chords = create_chord_progression(bass_line, key)
        if chords is None:
            return ChoraleResult(key, bass_line, Outcome.NO_PROGRESSION)
        assert is_legal_progression(chords, key.mode)

        triads = build_triad_table(key)
        voice_leader = VoiceLeader(
            chords, bass_line, key, triads=triads, settings=self.settings
        )
        try:
            voicing = voice_leader()
        except RecursionFailed as exc:
            LOGGER.warning(f"giving up on voicing {chords}: {exc}")
            voicing = None

        if voicing is None:
            return ChoraleResult(key, bass_line, Outcome.NO_VOICING, chords=chords)

        LOGGER.info(f"voicing found for {chords}")
        return ChoraleResult(
            key,
            bass_line,
            Outcome.SUCCESS,
            chords=chords,
            soprano=voicing.soprano,
            alto=voicing.alto,
            tenor=voicing.tenor,
        )


def harmonize(
    bass_line: t.Sequence[Pitch],
    mode: Mode | str = Mode.MAJOR,
    settings: ChoraleComposerSettings | None = None,
) -> ChoraleResult:
    return ChoraleComposer(settings)(bass_line, mode)
