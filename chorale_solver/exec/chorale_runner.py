import argparse
import logging
import sys
import typing as t
from pathlib import Path

from chorale_solver.bass_line import (
    BassLineError,
    parse_bass_line,
    validate_bass_line,
)
from chorale_solver.chorale_composer import (
    ChoraleComposer,
    ChoraleComposerSettings,
    ChoraleResult,
    format_rules,
)
from chorale_solver.config.read_config import load_config_from_yaml
from chorale_solver.exec.runner_helpers import format_result, write_output
from chorale_solver.exec.runner_settings_base import RunnerSettings
from chorale_solver.exec.script_helpers import get_base_parser, setup_logging
from chorale_solver.keyboard import describe_key
from chorale_solver.pitch_utils.types import Pitch
from chorale_solver.utils.logs import configure_logging

LOGGER = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_NO_CHORALE = 1
EXIT_BAD_INPUT = 2


def read_bass_file(path: str | Path) -> t.List[t.List[Pitch]]:
    out = []
    with open(path) as inf:
        for line in inf:
            line = line.split("#", maxsplit=1)[0].strip()
            if not line:
                continue
            out.append(parse_bass_line(line))
    return out


def run_chorale(
    bass_lines: t.Sequence[t.Sequence[Pitch]],
    mode: str = "major",
    composer_settings_path: str | Path | None = None,
    runner_settings_path: str | Path | None = None,
    output_folder: str | Path | None = None,
    basename_prefix: str | None = None,
) -> t.List[ChoraleResult]:
    """Harmonizes every bass line, printing (and optionally writing) the results.

    Raises BassLineError on the first malformed bass line, before anything is
    harmonized.
    """
    settings: RunnerSettings = load_config_from_yaml(
        RunnerSettings, runner_settings_path
    )
    composer_settings: ChoraleComposerSettings = load_config_from_yaml(
        ChoraleComposerSettings, composer_settings_path
    )
    LOGGER.info(f"runner settings: {settings}")

    for bass_line in bass_lines:
        validate_bass_line(bass_line, mode)

    composer = ChoraleComposer(composer_settings)
    results = []
    for bass_line in bass_lines:
        results.append(composer(bass_line, mode))

    for i, result in enumerate(results):
        print(format_result(result))
        print()
        if result.success and output_folder is not None:
            write_output(
                output_folder,
                result,
                settings,
                basename_prefix=basename_prefix,
                i=i if len(results) > 1 else None,
            )
    return results


def _get_bass_lines(args: argparse.Namespace) -> t.List[t.List[Pitch]]:
    bass_lines = []
    if args.bass_notes:
        bass_lines.append(parse_bass_line(args.bass_notes))
    if args.bass_file is not None:
        bass_lines.extend(read_bass_file(args.bass_file))
    return bass_lines


def main(argv: t.Sequence[str] | None = None) -> int:
    parser = get_base_parser()
    args = parser.parse_args(argv)

    if args.rules:
        print("Here are the rules I am using to generate harmonies:")
        print(format_rules())
        return EXIT_SUCCESS

    if args.lookup_key is not None:
        try:
            info = describe_key(args.lookup_key)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_BAD_INPUT
        print(f"{info.number}: {info.name} ({info.color.value} key)")
        return EXIT_SUCCESS

    setup_logging(args.log_level)
    configure_logging(args.log_file, args.log_level, args.append_to_log)

    try:
        bass_lines = _get_bass_lines(args)
        if not bass_lines:
            parser.error("no bass line given")
        results = run_chorale(
            bass_lines,
            mode=args.mode,
            composer_settings_path=args.composer_config,
            runner_settings_path=args.runner_config,
            output_folder=args.output_folder,
            basename_prefix=args.basename_prefix,
        )
    except BassLineError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if all(result.success for result in results):
        return EXIT_SUCCESS
    return EXIT_NO_CHORALE
