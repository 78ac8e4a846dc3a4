import pytest

from chorale_solver.bass_line import (
    BassLineError,
    parse_bass_line,
    parse_bass_note,
    validate_bass_line,
)


@pytest.mark.parametrize(
    "token, expected",
    [("0", 0), (" 24 ", 24), ("C2", 0), ("G2", 7), ("Bb2", 10), ("F#3", 18)],
)
def test_parse_bass_note(token, expected):
    assert parse_bass_note(token) == expected


@pytest.mark.parametrize("token", ("H2", "C", "five", "C9"))
def test_parse_bad_bass_note(token):
    with pytest.raises(BassLineError):
        parse_bass_note(token)


def test_parse_bass_line():
    assert parse_bass_line("0 5 7 0") == [0, 5, 7, 0]
    assert parse_bass_line(["C2", "5", "G2", "C3"]) == [0, 5, 7, 12]


@pytest.mark.parametrize(
    "bass_line, mode",
    [
        ([0, 5, 7, 0], "major"),
        ([0, 5, 7, 24], "major"),
        ([9, 14, 16, 21], "minor"),
        ([0, 10, 11, 0], "minor"),
        ([24, 19, 12], "major"),
    ],
)
def test_valid_bass_lines(bass_line, mode):
    validate_bass_line(bass_line, mode)


@pytest.mark.parametrize(
    "bass_line, mode, message",
    [
        ([0, 7], "major", "at least 3 notes"),
        ([0, 25, 0], "major", "Note 25 at position 1 must be between 0 and 24"),
        ([-1, 4, 11], "major", "Note -1 at position 0"),
        ([0, 3, 0], "major", "Note 3 at position 1 is not in the scale of 0 major"),
        ([0, 4, 0], "minor", "not in the scale"),
        ([0, 7, 5], "major", "must end on the same scale degree"),
    ],
)
def test_invalid_bass_lines(bass_line, mode, message):
    with pytest.raises(BassLineError, match=message):
        validate_bass_line(bass_line, mode)


def test_bass_line_error_is_value_error():
    with pytest.raises(ValueError):
        validate_bass_line([0, 7], "major")
