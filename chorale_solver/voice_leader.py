"""Realizes a chord progression in four parts.

Once the first chord is voiced, each upper voice simply moves to the nearest member of
the next chord, in the direction contrary to the bass: if the bass descends (or
ascends by a fourth) the upper voices take the nearest chord member at or above their
previous pitch, otherwise the nearest chord member at or below it. The one exception
is the leading tone in the soprano, which rises to the tonic when V moves to a chord
over a rising bass.

Since every continuation is deterministic, the only thing that is searched is the
initial voicing ("seed").
"""
from __future__ import annotations

import itertools as it
import logging
import typing as t
from dataclasses import dataclass, field

from chorale_solver.constants import (
    ALTO_RANGE,
    DOMINANT,
    LEADING_TONE,
    SOPRANO_RANGE,
    TENOR_RANGE,
    TONIC,
)
from chorale_solver.pitch_utils.parts import succession_has_forbidden_parallels
from chorale_solver.pitch_utils.scale import degree_of
from chorale_solver.pitch_utils.spacings import (
    SpacingConstraints,
    pitch_in_range,
    validate_spacing,
)
from chorale_solver.pitch_utils.triads import (
    build_triad_table,
    chord_factor,
    next_higher_note,
    next_lower_note,
)
from chorale_solver.pitch_utils.types import (
    UPPER_VOICES,
    FourPartPitches,
    Key,
    Pitch,
    ScaleDegree,
    SettingsBase,
    TriadTable,
    UpperVoicePitches,
    voice_enum_to_string,
)
from chorale_solver.utils.recursion import DeadEnd, RecursionFailed

LOGGER = logging.getLogger(__name__)

SEED_STRATEGIES = ("heuristic", "exhaustive")

# After the soprano resolves a leading tone upwards, its next move is calculated
#   from this far below, as if it had not risen.
LEADING_TONE_CORRECTION = 3


class Voicing(t.NamedTuple):
    soprano: t.Tuple[Pitch, ...]
    alto: t.Tuple[Pitch, ...]
    tenor: t.Tuple[Pitch, ...]


@dataclass
class VoiceLeaderSettings(SettingsBase):
    # "heuristic" only tries a few standard voicings of the first chord; "exhaustive"
    #   tries those first and then every other complete voicing of the first chord.
    seed_strategy: str = "heuristic"
    forbidden_parallels: t.Sequence[int] = (0, 7)
    spacing_constraints: SpacingConstraints = field(default_factory=SpacingConstraints)
    max_recurse_calls: t.Optional[int] = None
    save_deadends: bool = False

    def __post_init__(self):
        if self.seed_strategy not in SEED_STRATEGIES:
            raise ValueError(
                f"{self.seed_strategy=} must be one of {', '.join(SEED_STRATEGIES)}"
            )
        if isinstance(self.spacing_constraints, dict):
            self.spacing_constraints = SpacingConstraints(**self.spacing_constraints)
        self.forbidden_parallels = tuple(self.forbidden_parallels)


def find_voicing_violation(
    pitches: FourPartPitches,
    prev_pitches: FourPartPitches | None = None,
    next_bass_pitch: Pitch | None = None,
    settings: VoiceLeaderSettings | None = None,
) -> str | None:
    """Returns a description of the first rule that `pitches` break, or None.

    >>> find_voicing_violation(FourPartPitches(0, 28, 31, 36)) is None
    True
    >>> find_voicing_violation(FourPartPitches(0, 28, 31, 44))
    'soprano out of range'
    >>> find_voicing_violation(FourPartPitches(0, 31, 28, 36))
    'bad spacing'
    >>> find_voicing_violation(FourPartPitches(0, 28, 31, 36), next_bass_pitch=29)
    'tenor below next bass note'

    C-G in the bass and soprano followed by D-A:
    >>> find_voicing_violation(
    ...     FourPartPitches(2, 30, 33, 33), prev_pitches=FourPartPitches(0, 28, 31, 31)
    ... )
    'forbidden parallels'
    """
    if settings is None:
        settings = VoiceLeaderSettings()
    for voice in UPPER_VOICES:
        if not pitch_in_range(pitches[voice], voice):
            return f"{voice_enum_to_string[voice]} out of range"
    if not validate_spacing(pitches, settings.spacing_constraints):
        return "bad spacing"
    if next_bass_pitch is not None and pitches.tenor < next_bass_pitch:
        return "tenor below next bass note"
    if prev_pitches is not None and succession_has_forbidden_parallels(
        prev_pitches, pitches, settings.forbidden_parallels
    ):
        return "forbidden parallels"
    return None


class VoiceLeader:
    def __init__(
        self,
        chords: t.Sequence[ScaleDegree],
        bass_line: t.Sequence[Pitch],
        key: Key,
        triads: TriadTable | None = None,
        settings: VoiceLeaderSettings | None = None,
    ):
        assert len(chords) == len(bass_line)
        if settings is None:
            settings = VoiceLeaderSettings()
        self.settings = settings
        self.chords = tuple(chords)
        self.bass_line = tuple(bass_line)
        self.key = key
        self._triads = build_triad_table(key) if triads is None else triads
        assert all(chord in self._triads for chord in self.chords)

        self._soprano: t.List[Pitch] = []
        self._alto: t.List[Pitch] = []
        self._tenor: t.List[Pitch] = []
        self._n_recurse_calls = 0

        # For debugging
        self.deadends: t.List[t.Dict[str, t.Any]] = []

    @property
    def _voices(self) -> t.Tuple[t.List[Pitch], t.List[Pitch], t.List[Pitch]]:
        return self._soprano, self._alto, self._tenor

    def _pitches_at(self, i: int) -> FourPartPitches:
        return FourPartPitches(
            self.bass_line[i], self._tenor[i], self._alto[i], self._soprano[i]
        )

    def _next_bass_pitch(self, i: int) -> Pitch | None:
        if i + 1 < len(self.bass_line):
            return self.bass_line[i + 1]
        return None

    def _check_n_recurse_calls(self):
        if (
            self.settings.max_recurse_calls is not None
            and self._n_recurse_calls > self.settings.max_recurse_calls
        ):
            LOGGER.warning(
                f"Max recursion calls {self.settings.max_recurse_calls} reached"
            )
            raise RecursionFailed(
                f"Max recursion calls {self.settings.max_recurse_calls} reached"
            )

    def _dead_end(self, msg: str, i: int, **kwargs) -> DeadEnd:
        LOGGER.debug(f"dead end at index {i}: {msg}")
        return DeadEnd(
            msg,
            save_deadends_to=self.deadends if self.settings.save_deadends else None,
            i=i,
            **kwargs,
        )

    # -----------------------------------------------------------------------------------
    # Seeds
    # -----------------------------------------------------------------------------------

    def _heuristic_seeds(self) -> t.Iterator[UpperVoicePitches]:
        tonic = self._triads[TONIC]
        n = len(tonic)

        def _get(j: int) -> Pitch | None:
            return tonic[j] if 0 <= j < n else None

        # Highest root of the tonic triad. If the alto or tenor below it would be too
        #   high, we start an octave lower.
        h = ((n - 1) // 3) * 3
        if (tonic[h - 1] > ALTO_RANGE[1] or tonic[h - 2] > TENOR_RANGE[1]) and tonic[
            h - 3
        ] > SOPRANO_RANGE[0]:
            h -= 3

        # root in soprano, fifth in alto, third in tenor
        yield UpperVoicePitches(tonic[h], tonic[h - 1], tonic[h - 2])

        if (pitch := _get(h + 3)) is not None and pitch <= SOPRANO_RANGE[1]:
            h += 3

        # root in soprano, third in alto, fifth in tenor
        low_fifth = _get(h - 4)
        if (
            low_fifth is not None
            and low_fifth > self.bass_line[0]
            and low_fifth > TENOR_RANGE[0]
        ):
            yield UpperVoicePitches(tonic[h], tonic[h - 2], low_fifth)

        if (pitch := _get(h + 1)) is not None and pitch <= SOPRANO_RANGE[1]:
            # third in soprano, root in alto, fifth in tenor
            yield UpperVoicePitches(pitch, tonic[h], tonic[h - 1])
        elif low_fifth is not None and low_fifth > self.bass_line[0]:
            # third in soprano an octave lower, in close position
            yield UpperVoicePitches(tonic[h - 2], tonic[h - 3], low_fifth)

    def _exhaustive_seeds(self) -> t.Iterator[UpperVoicePitches]:
        tonic = self._triads[TONIC]

        def _in_range(voice_range):
            return [p for p in reversed(tonic) if voice_range[0] <= p <= voice_range[1]]

        for soprano, alto, tenor in it.product(
            _in_range(SOPRANO_RANGE), _in_range(ALTO_RANGE), _in_range(TENOR_RANGE)
        ):
            if not tenor <= alto <= soprano:
                continue
            factors = {chord_factor(tonic, p) for p in (soprano, alto, tenor)}
            # the bass has the root so the upper voices need the third and the fifth
            if {1, 2} <= factors:
                yield UpperVoicePitches(soprano, alto, tenor)

    def _seeds(self) -> t.Iterator[UpperVoicePitches]:
        tried = set()
        for seed in self._heuristic_seeds():
            tried.add(seed)
            yield seed
        if self.settings.seed_strategy == "exhaustive":
            for seed in self._exhaustive_seeds():
                if seed not in tried:
                    yield seed

    # -----------------------------------------------------------------------------------
    # Continuation
    # -----------------------------------------------------------------------------------

    def _step(
        self, i: int, leading_tone_corrected: bool
    ) -> t.Tuple[UpperVoicePitches, bool]:
        self._n_recurse_calls += 1
        self._check_n_recurse_calls()
        chord = self._triads[self.chords[i]]
        prev_bass, bass = self.bass_line[i - 1], self.bass_line[i]
        soprano, alto, tenor = self._soprano[-1], self._alto[-1], self._tenor[-1]

        if leading_tone_corrected:
            soprano_ref = soprano - LEADING_TONE_CORRECTION
        else:
            soprano_ref = soprano
        leading_tone_corrected = False

        if bass < prev_bass or bass - prev_bass == 5:
            new_soprano = next_higher_note(chord, soprano_ref)
            new_alto = next_higher_note(chord, alto)
            new_tenor = next_higher_note(chord, tenor)
        else:
            if (
                self.chords[i - 1] == DOMINANT
                and degree_of(soprano, self.key) == LEADING_TONE
            ):
                LOGGER.debug(f"resolving leading tone {soprano} in soprano")
                new_soprano = soprano + 1
                leading_tone_corrected = True
            else:
                new_soprano = next_lower_note(chord, soprano_ref)
            new_alto = next_lower_note(chord, alto)
            new_tenor = next_lower_note(chord, tenor)

        pitches = FourPartPitches(bass, new_tenor, new_alto, new_soprano)  # type:ignore
        violation = find_voicing_violation(
            pitches,
            prev_pitches=self._pitches_at(i - 1),
            next_bass_pitch=self._next_bass_pitch(i),
            settings=self.settings,
        )
        if violation is not None:
            raise self._dead_end(violation, i, pitches=tuple(pitches))
        return (
            UpperVoicePitches(new_soprano, new_alto, new_tenor),  # type:ignore
            leading_tone_corrected,
        )

    def _continue_from_seed(self, seed: UpperVoicePitches) -> Voicing:
        """Raises DeadEnd if the voicing that follows from `seed` breaks a rule."""
        self._soprano[:] = [seed.soprano]
        self._alto[:] = [seed.alto]
        self._tenor[:] = [seed.tenor]
        leading_tone_corrected = False
        for i in range(1, len(self.chords)):
            pitches, leading_tone_corrected = self._step(i, leading_tone_corrected)
            LOGGER.debug(f"index {i}: chord {self.chords[i]}, {pitches}")
            for voice, pitch in zip(self._voices, pitches):
                voice.append(pitch)
        return Voicing(tuple(self._soprano), tuple(self._alto), tuple(self._tenor))

    def __call__(self) -> Voicing | None:
        """Returns None if no seed leads to a complete voicing.

        >>> VoiceLeader((1, 4, 5, 1), (0, 5, 7, 0), Key(0))()
        Voicing(soprano=(36, 36, 35, 36), alto=(31, 33, 31, 31), tenor=(28, 29, 26, 28))
        """
        for seed in self._seeds():
            LOGGER.debug(f"trying seed {seed}")
            first_pitches = FourPartPitches(
                self.bass_line[0], seed.tenor, seed.alto, seed.soprano
            )
            violation = find_voicing_violation(
                first_pitches,
                next_bass_pitch=self._next_bass_pitch(0),
                settings=self.settings,
            )
            if violation is not None:
                LOGGER.debug(f"rejecting seed {seed}: {violation}")
                continue
            try:
                return self._continue_from_seed(seed)
            except DeadEnd as exc:
                LOGGER.debug(f"seed {seed} failed: {exc}")

        LOGGER.info(f"no voicing found for chords {self.chords}")
        return None
