"""
Unit tests for day window arithmetic.
"""

import pytest

from timebox.models.schedule import CoreTimeWindow, DayWindow
from timebox.services.time_window import (
    clamp_core_time,
    clamp_to_window,
    format_clock,
    is_within_window,
    normalize_day_window,
    normalized_end_hour,
    parse_clock,
    start_hour,
)


def test_parse_and_format_clock():
    assert parse_clock("09:30") == (9, 30)
    assert format_clock(9 * 60 + 30) == "09:30"
    assert format_clock(24 * 60) == "00:00"


def test_midnight_end_is_hour_24():
    window = DayWindow(start="05:00", end="00:00")

    assert start_hour(window) == 5
    assert normalized_end_hour(window) == 24


def test_end_hour_uses_hour_component():
    assert normalized_end_hour(DayWindow(start="05:00", end="21:00")) == 21
    assert normalized_end_hour(DayWindow(start="05:00", end="21:30")) == 21


@pytest.mark.parametrize(
    "hour,expected",
    [(3, 5.0), (5, 5.0), (12.5, 12.5), (20.5, 20.5), (22, 20.5)],
)
def test_clamp_to_window(hour, expected):
    window = DayWindow(start="05:00", end="21:00")

    assert clamp_to_window(hour, window) == expected


def test_is_within_window():
    window = DayWindow(start="05:00", end="21:00")

    assert is_within_window(5, 1, window)
    assert is_within_window(19, 2, window)
    assert not is_within_window(4.5, 1, window)
    assert not is_within_window(20.5, 1, window)


def test_normalize_keeps_valid_window():
    window = DayWindow(start="08:00", end="18:00")

    assert normalize_day_window(window) == window


def test_normalize_pushes_short_window_end():
    window = normalize_day_window(DayWindow(start="10:00", end="10:30"))

    assert window == DayWindow(start="10:00", end="11:00")


def test_normalize_inverted_window():
    window = normalize_day_window(DayWindow(start="18:00", end="08:00"))

    assert window == DayWindow(start="18:00", end="19:00")


def test_normalize_late_start_pulled_back_to_2300():
    window = normalize_day_window(DayWindow(start="23:30", end="23:45"))

    assert window == DayWindow(start="23:00", end="00:00")
    assert normalized_end_hour(window) == 24


def test_midnight_end_counts_as_full_hour():
    window = DayWindow(start="23:00", end="00:00")

    assert normalize_day_window(window) == window


def test_clamp_core_time_inside_window():
    core = clamp_core_time(
        CoreTimeWindow(start="09:00", end="12:00"),
        DayWindow(start="05:00", end="21:00"),
    )

    assert core == CoreTimeWindow(start="09:00", end="12:00")


def test_clamp_core_time_outside_window():
    core = clamp_core_time(
        CoreTimeWindow(start="06:00", end="07:00"),
        DayWindow(start="08:00", end="18:00"),
    )

    assert core == CoreTimeWindow(start="08:00", end="09:00")


def test_clamp_core_time_past_window_end():
    core = clamp_core_time(
        CoreTimeWindow(start="19:00", end="22:00"),
        DayWindow(start="08:00", end="18:00"),
    )

    assert core == CoreTimeWindow(start="17:00", end="18:00")
