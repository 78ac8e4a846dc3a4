"""Takes a "homophonic" dataframe and converts it to a "midi" dataframe.

"Homophonic" dataframe has columns "onset" and "release" (and optionally "chord");
the remaining columns are understood to be voices, lowest first.

"Midi_df" has columns "onset", "type", "pitch", "release", and "track". Track 1 is the
highest voice.
"""
import typing as t

import pandas as pd

NON_VOICE_COLS = ("onset", "release", "chord")


def homodf_to_mididf(
    homodf: pd.DataFrame,
    pitch_offset: int = 0,
    non_voice_cols: t.Sequence[str] = NON_VOICE_COLS,
) -> pd.DataFrame:
    """
    >>> homodf = pd.DataFrame(
    ...     {"onset": [0.0], "release": [1.0], "chord": [1], "bass": [0], "soprano": [36]}
    ... )
    >>> homodf_to_mididf(homodf, pitch_offset=36)
       onset  type  pitch  release  track
    0    0.0  note     72      1.0      1
    1    0.0  note     36      1.0      2
    """
    out = []
    voice_cols = list(
        reversed([col for col in homodf.columns if col not in non_voice_cols])
    )
    for _, row in homodf.iterrows():
        for i, voice_col in enumerate(voice_cols):
            out.append(
                {
                    "onset": row.onset,
                    "type": "note",
                    "pitch": int(row[voice_col]) + pitch_offset,
                    "release": row.release,
                    "track": i + 1,
                }
            )
    return pd.DataFrame(out, columns=["onset", "type", "pitch", "release", "track"])
