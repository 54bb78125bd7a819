import re
from datetime import datetime, timedelta

import pytest

from taskwarrior_tui.timefmt import (
    format_date,
    format_date_time,
    format_duration,
    vague_format_date_time,
)


@pytest.mark.parametrize(
    "seconds, with_remainder, expected",
    [
        (0, False, "0s"),
        (30, False, "30s"),
        (60, False, "1min"),
        (90, False, "1min"),
        (90, True, "1min30s"),
        (3600, False, "1h"),
        (3661, False, "1h"),
        (3661, True, "1h1min"),
        (1255, False, "20min"),
        (1255, True, "20min55s"),
    ],
)
def test_format_duration_basic_cases(seconds, with_remainder, expected):
    assert format_duration(seconds, with_remainder) == expected


@pytest.mark.parametrize(
    "seconds, with_remainder, expected",
    [
        (-300, False, "-5min"),
        (-3661, True, "-1h1min"),
        (86400, False, "1d"),
        (604800, False, "7d"),
        (1209600, False, "2w"),
        (2592000, False, "4w"),
        (7776000, False, "3mo"),
        (31536000, False, "1y"),
        (90061, True, "1d1h"),
    ],
)
def test_format_duration_edge_cases(seconds, with_remainder, expected):
    assert format_duration(seconds, with_remainder) == expected


def test_vague_format_forward():
    start = datetime(2024, 1, 15, 10, 0, 0)
    end = start + timedelta(seconds=1255)
    assert vague_format_date_time(start, end, False) == "20min"
    assert vague_format_date_time(start, end, True) == "20min55s"


def test_vague_format_backward_is_negative():
    start = datetime(2024, 1, 15, 10, 0, 0)
    end = start + timedelta(seconds=300)
    assert vague_format_date_time(end, start, False) == "-5min"


def test_vague_format_truncates_fractions():
    start = datetime(2024, 1, 15, 10, 0, 0)
    end = start + timedelta(seconds=30, microseconds=900000)
    assert vague_format_date_time(start, end, False) == "30s"


def test_vague_format_two_weeks():
    start = datetime(2024, 1, 1, 0, 0, 0)
    end = datetime(2024, 1, 15, 0, 0, 0)
    assert vague_format_date_time(start, end, False) == "2w"


def test_format_date_time():
    assert format_date_time(datetime(2024, 1, 15, 10, 20, 30)) == "2024-01-15 10:20:30"


def test_format_date_shape_and_nearby_day():
    result = format_date(datetime(2024, 1, 15, 12, 0, 0))
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", result)
    assert result in {"2024-01-14", "2024-01-15", "2024-01-16"}