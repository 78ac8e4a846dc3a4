from types import MappingProxyType

TET = 12

# Pitches are key numbers on a 44-key keyboard whose lowest key is C2.
LOW_KEY = 0
HI_KEY = 43
MIDI_OFFSET = 36

BASS_RANGE = (0, 24)
TENOR_RANGE = (12, 31)
ALTO_RANGE = (19, 36)
SOPRANO_RANGE = (24, 43)

MIN_BASS_LINE_LEN = 3

# Successive intervals used to stack a triad upwards (root, third, fifth, root...)
MAJOR_TRIAD_STEPS = (4, 3, 5)
MINOR_TRIAD_STEPS = (3, 4, 5)
DIM_TRIAD_STEPS = (3, 3, 6)

MAJOR = "major"
MINOR = "minor"
DIMINISHED = "diminished"

TRIAD_STEPS = MappingProxyType(
    {
        MAJOR: MAJOR_TRIAD_STEPS,
        MINOR: MINOR_TRIAD_STEPS,
        DIMINISHED: DIM_TRIAD_STEPS,
    }
)

NO_DEGREE = 0
TONIC = 1
SUPERTONIC = 2
MEDIANT = 3
DOMINANT = 5
LEADING_TONE = 7
# Major triad on the lowered seventh degree; minor keys only.
MAJOR_SUBTONIC = 8

WHITE_KEY_PCS = frozenset({0, 2, 4, 5, 7, 9, 11})

##################
# per-mode tables #
##################

FORBIDDEN_DISTANCES = MappingProxyType(
    {
        "major": frozenset({1, 3, 6, 8, 10}),
        "minor": frozenset({1, 4, 6, 9}),
    }
)

INTERVAL_TO_DEGREE = MappingProxyType(
    {
        "major": MappingProxyType({0: 1, 2: 2, 4: 3, 5: 4, 7: 5, 9: 6, 11: 7}),
        "minor": MappingProxyType(
            {0: 1, 2: 2, 3: 3, 5: 4, 7: 5, 8: 6, 10: 8, 11: 7}
        ),
    }
)

DEGREE_TO_ROOT_OFFSET = MappingProxyType(
    {
        mode: MappingProxyType({degree: dist for dist, degree in table.items()})
        for mode, table in INTERVAL_TO_DEGREE.items()
    }
)

TRIAD_QUALITIES = MappingProxyType(
    {
        "major": MappingProxyType(
            {
                1: MAJOR,
                2: MINOR,
                3: MINOR,
                4: MAJOR,
                5: MAJOR,
                6: MINOR,
                7: DIMINISHED,
            }
        ),
        "minor": MappingProxyType(
            {
                1: MINOR,
                2: DIMINISHED,
                3: MAJOR,
                4: MINOR,
                5: MAJOR,
                6: MAJOR,
                7: DIMINISHED,
                8: MAJOR,
            }
        ),
    }
)
