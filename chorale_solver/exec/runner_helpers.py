import os
from pathlib import Path

import pandas as pd
from music21 import note as m21_note
from music21 import pitch as m21_pitch
from music21 import stream

from chorale_solver.chorale_composer import ChoraleResult
from chorale_solver.constants import MIDI_OFFSET
from chorale_solver.exec.runner_settings_base import RunnerSettings
from chorale_solver.keyboard import key_name
from chorale_solver.utils.homodf_to_mididf import homodf_to_mididf


def path_formatter(
    bass_line: tuple[int, ...],
    i: int | None = None,
    prefix: str | None = None,
) -> str:
    """
    >>> path_formatter((0, 5, 7, 0))
    'chorale_0-5-7-0'
    >>> path_formatter((0, 5, 7, 0), i=1, prefix="test")
    'test_chorale_0-5-7-0_002'
    """
    out = "chorale_" + "-".join(str(p) for p in bass_line)
    if prefix is not None:
        out = f"{prefix}_{out}"
    if i is not None:
        out += f"_{i+1:03d}"
    return out


def mididf_to_score(mididf: pd.DataFrame) -> stream.Score:
    score = stream.Score()
    for _, track_df in mididf.groupby("track", sort=True):
        part = stream.Part()
        for _, row in track_df.iterrows():
            note = m21_note.Note(
                pitch=m21_pitch.Pitch(midi=int(row.pitch)),
                quarterLength=row.release - row.onset,
            )
            part.insert(row.onset, note)
        score.insert(0, part)
    return score


def format_result(result: ChoraleResult) -> str:
    lines = [f"Key: {key_name(result.key.tonic)[:-1]} {result.key.mode.value}"]
    if not result.success:
        lines.append(f"{result.outcome.value[0].upper()}{result.outcome.value[1:]}.")
        if result.chords is not None:
            lines.append(f"Chords: {' '.join(str(c) for c in result.chords)}")
        return "\n".join(lines)
    lines.append(f"Chords: {' '.join(str(c) for c in result.chords)}")  # type:ignore
    for voice in ("soprano", "alto", "tenor", "bass"):
        pitches = getattr(result, voice)
        names = " ".join(f"{key_name(p):>4}" for p in pitches)
        lines.append(f"{voice.capitalize():>8}: {names}")
    return "\n".join(lines)


def write_output(
    output_folder: str | Path,
    result: ChoraleResult,
    settings: RunnerSettings,
    basename_prefix: str | None = None,
    i: int | None = None,
) -> list[str]:
    assert result.success
    os.makedirs(output_folder, exist_ok=True)
    output_path_wo_ext = os.path.join(
        output_folder, path_formatter(result.bass, i=i, prefix=basename_prefix)
    )
    out_df = homodf_to_mididf(
        result.get_df(note_dur=settings.note_dur), pitch_offset=MIDI_OFFSET
    )
    written = []

    if settings.write_midi:
        mid_path = f"{output_path_wo_ext}.mid"
        mididf_to_score(out_df).write("midi", fp=mid_path)
        print(f"Wrote {mid_path}")
        written.append(mid_path)

    if settings.write_csv:
        csv_path = f"{output_path_wo_ext}.csv"
        out_df.to_csv(csv_path)
        print(f"Wrote {csv_path}")
        written.append(csv_path)

    return written
