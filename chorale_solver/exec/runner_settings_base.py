from dataclasses import dataclass

from chorale_solver.pitch_utils.types import SettingsBase


@dataclass
class RunnerSettings(SettingsBase):
    write_midi: bool = True
    write_csv: bool = True
    # quarter-note length of each chord in the written files
    note_dur: float = 1.0

    def __post_init__(self):
        if self.note_dur <= 0:
            raise ValueError(f"{self.note_dur=} must be positive")
