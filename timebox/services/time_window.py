"""
Day window arithmetic.

Clock times are "HH:MM" strings. An end time of 00:00 means midnight at the
end of the day (hour 24), never hour 0.
"""

from __future__ import annotations

from timebox.models.schedule import ClockWindow, CoreTimeWindow, DayWindow

MINUTES_PER_DAY = 24 * 60
MIN_WINDOW_MINUTES = 60


def parse_clock(value: str) -> tuple[int, int]:
    """Split a HH:MM clock time into (hours, minutes)."""
    hours, minutes = value.split(":")
    return int(hours), int(minutes)


def format_clock(total_minutes: int) -> str:
    """Format minutes since midnight as HH:MM. 24:00 is written as 00:00."""
    total_minutes %= MINUTES_PER_DAY
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def start_hour(window: ClockWindow) -> int:
    """Hour component of the window start."""
    return parse_clock(window.start)[0]


def normalized_end_hour(window: ClockWindow) -> int:
    """Hour component of the window end, with midnight read as 24."""
    hours, _ = parse_clock(window.end)
    return 24 if hours == 0 else hours


def clamp_to_window(hour: float, window: ClockWindow) -> float:
    """Bound an hour to [start_hour, normalized_end_hour - 0.5]."""
    return max(float(start_hour(window)), min(normalized_end_hour(window) - 0.5, hour))


def is_within_window(start_time: float, duration: float, window: ClockWindow) -> bool:
    return start_time >= start_hour(window) and start_time + duration <= normalized_end_hour(window)


def _start_minutes(window: ClockWindow) -> int:
    hours, minutes = parse_clock(window.start)
    return hours * 60 + minutes


def _end_minutes(window: ClockWindow) -> int:
    if window.end == "00:00":
        return MINUTES_PER_DAY
    hours, minutes = parse_clock(window.end)
    return hours * 60 + minutes


def normalize_day_window(window: DayWindow) -> DayWindow:
    """
    Enforce a window of at least one hour.

    A too-short window keeps its start and has its end pushed to start + 1h.
    A start later than 23:00 cannot fit an hour before midnight, so it is
    pulled back to 23:00 with the end at midnight.
    """
    start = _start_minutes(window)
    end = _end_minutes(window)
    if end - start >= MIN_WINDOW_MINUTES:
        return window
    start = min(start, MINUTES_PER_DAY - MIN_WINDOW_MINUTES)
    return DayWindow(start=format_clock(start), end=format_clock(start + MIN_WINDOW_MINUTES))


def clamp_core_time(core: CoreTimeWindow, day: DayWindow) -> CoreTimeWindow:
    """Clamp core time into the day window, keeping it at least one hour long."""
    day = normalize_day_window(day)
    day_start = _start_minutes(day)
    day_end = _end_minutes(day)

    start = max(day_start, min(_start_minutes(core), day_end - MIN_WINDOW_MINUTES))
    end = max(start + MIN_WINDOW_MINUTES, min(_end_minutes(core), day_end))
    return CoreTimeWindow(start=format_clock(start), end=format_clock(end))
