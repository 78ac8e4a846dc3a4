import typing as t
from dataclasses import dataclass

from chorale_solver.pitch_utils.types import VOICE_RANGES, Pitch, Voice


@dataclass
class SpacingConstraints:
    """
    Spacings are sequences of pitches ordered from the bass up. Intervals between
    consecutive voices above the bass are "adjacent intervals".

    Args:
        max_adjacent_interval: maximum interval between adjacent upper voices. If None,
            any distance is allowed. Default 12.

        >>> validate_spacing([0, 28, 31, 36], SpacingConstraints())
        True
        >>> validate_spacing([0, 16, 31, 36], SpacingConstraints())
        False
        >>> validate_spacing(
        ...     [0, 16, 31, 36], SpacingConstraints(max_adjacent_interval=None)
        ... )
        True

        min_adjacent_interval: minimum interval between adjacent upper voices. The
            default of 0 forbids crossings but allows unisons.

        >>> validate_spacing([0, 28, 28, 36], SpacingConstraints())
        True
        >>> validate_spacing([0, 28, 26, 36], SpacingConstraints())
        False

        avoid_bass_crossing: if True (default), the voice above the bass may not be
            lower than the bass.

        >>> validate_spacing([14, 12, 19, 24], SpacingConstraints())
        False
        >>> validate_spacing(
        ...     [14, 12, 19, 24], SpacingConstraints(avoid_bass_crossing=False)
        ... )
        True
    """

    max_adjacent_interval: t.Optional[int] = 12
    min_adjacent_interval: int = 0
    avoid_bass_crossing: bool = True


def validate_spacing(
    spacing: t.Sequence[Pitch],
    spacing_constraints: SpacingConstraints,
) -> bool:
    """
    >>> validate_spacing([0], SpacingConstraints(max_adjacent_interval=1))
    True
    >>> validate_spacing([0, 12], SpacingConstraints(max_adjacent_interval=1))
    True
    """
    if len(spacing) < 2:
        return True

    bass_interval = spacing[1] - spacing[0]
    if spacing_constraints.avoid_bass_crossing and bass_interval < 0:
        return False

    for p1, p2 in zip(spacing[1:-1], spacing[2:]):
        if p2 - p1 < spacing_constraints.min_adjacent_interval:
            return False
        if (
            spacing_constraints.max_adjacent_interval is not None
            and p2 - p1 > spacing_constraints.max_adjacent_interval
        ):
            return False
    return True


def pitch_in_range(pitch: Pitch | None, voice: Voice) -> bool:
    """
    >>> pitch_in_range(31, Voice.TENOR), pitch_in_range(32, Voice.TENOR)
    (True, False)
    >>> pitch_in_range(None, Voice.SOPRANO)
    False
    """
    if pitch is None:
        return False
    low, high = VOICE_RANGES[voice]
    return low <= pitch <= high
