"""
Placement rules for schedule items.

A candidate (start_time, duration) is legal when it is long enough, sits on
the half-hour grid, fits inside the day window and does not overlap any other
item. Intervals are half-open, so an item ending exactly when another starts
does not overlap it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from timebox.models.enums import PlacementRejection
from timebox.models.schedule import DayWindow, ScheduleItem, is_half_hour
from timebox.services.time_window import is_within_window

MIN_DURATION_HOURS = 0.5


@dataclass(frozen=True)
class PlacementDecision:
    accepted: bool
    reason: Optional[PlacementRejection] = None

    def __bool__(self) -> bool:
        return self.accepted


ACCEPTED = PlacementDecision(accepted=True)


def intervals_overlap(a_start: float, a_end: float, b_start: float, b_end: float) -> bool:
    """Half-open interval overlap: [a, b) and [c, d) overlap iff a < d and c < b."""
    return a_start < b_end and b_start < a_end


def find_overlap(
    items: Iterable[ScheduleItem],
    start_time: float,
    duration: float,
    exclude_id: Optional[str] = None,
) -> Optional[ScheduleItem]:
    """First item other than exclude_id overlapping the candidate interval."""
    end_time = start_time + duration
    for item in items:
        if item.id == exclude_id:
            continue
        if intervals_overlap(start_time, end_time, item.start_time, item.end_time):
            return item
    return None


def validate_placement(
    items: Iterable[ScheduleItem],
    window: DayWindow,
    start_time: float,
    duration: float,
    exclude_id: Optional[str] = None,
    min_duration: float = MIN_DURATION_HOURS,
) -> PlacementDecision:
    """Decide whether a candidate placement is legal. Never mutates anything."""
    if duration < min_duration:
        return PlacementDecision(False, PlacementRejection.TOO_SHORT)
    if not (is_half_hour(start_time) and is_half_hour(duration)):
        return PlacementDecision(False, PlacementRejection.OFF_GRID)
    if not is_within_window(start_time, duration, window):
        return PlacementDecision(False, PlacementRejection.OUTSIDE_WINDOW)
    if find_overlap(items, start_time, duration, exclude_id) is not None:
        return PlacementDecision(False, PlacementRejection.OVERLAP)
    return ACCEPTED


def has_overlaps(items: Iterable[ScheduleItem]) -> bool:
    """True when any two items overlap."""
    ordered = sorted(items, key=lambda item: item.start_time)
    return any(
        intervals_overlap(prev.start_time, prev.end_time, nxt.start_time, nxt.end_time)
        for prev, nxt in zip(ordered, ordered[1:])
    )
