"""
Calendar interaction adapter.

Translates calendar gestures (drop, resize, slot selection) carrying raw clock
datetimes into single calls on the mutation service, and renders schedule
items as time spans for a calendar grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from timebox.core.logger import setup_logger
from timebox.models.enums import ActivityType
from timebox.models.schedule import (
    CalendarBounds,
    CalendarEvent,
    DayWindow,
    ScheduleItem,
)
from timebox.services.schedule_mutation_service import ScheduleMutationService
from timebox.services.time_window import (
    clamp_to_window,
    normalized_end_hour,
    parse_clock,
    start_hour,
)

logger = setup_logger(__name__)

ClockValue = Union[datetime, time]

UNTITLED_EVENT = "Untitled Event"

EVENT_STYLES: dict[ActivityType, dict[str, str]] = {
    ActivityType.TOP_GOAL: {
        "backgroundColor": "#fecaca",
        "borderLeft": "4px solid #ef4444",
        "color": "#991b1b",
    },
    ActivityType.LEISURE: {
        "backgroundColor": "#e9d5ff",
        "borderLeft": "4px solid #a855f7",
        "color": "#6b21a8",
    },
    ActivityType.PHYSICAL: {
        "backgroundColor": "#bbf7d0",
        "borderLeft": "4px solid #22c55e",
        "color": "#166534",
    },
    ActivityType.DEFAULT: {
        "backgroundColor": "#bfdbfe",
        "borderLeft": "4px solid #3b82f6",
        "color": "#1e40af",
    },
}


def quantize_hour(value: ClockValue) -> float:
    """Round a clock time to the half-hour grid: minutes >= 30 count as +0.5."""
    return value.hour + (0.5 if value.minute >= 30 else 0.0)


def quantize_end_hour(value: ClockValue) -> float:
    """
    Quantize a gesture end time.

    An end landing on hour 0 is midnight (24) when its minutes are exactly
    zero, otherwise it is read as 0.5.
    """
    end_hour = quantize_hour(value)
    if end_hour == 0:
        return 24.0 if value.minute == 0 else 0.5
    return end_hour


@dataclass(frozen=True)
class GestureSpan:
    start_time: float
    duration: float


def gesture_span(
    start: ClockValue,
    end: ClockValue,
    min_duration: float,
) -> Optional[GestureSpan]:
    """Quantized (start, duration) of a gesture, or None for a degenerate one."""
    start_time = quantize_hour(start)
    end_time = quantize_end_hour(end)
    if start_time == end_time:
        return None
    return GestureSpan(start_time=start_time, duration=max(min_duration, end_time - start_time))


def to_calendar_events(
    items: list[ScheduleItem],
    window: DayWindow,
    day: date,
) -> list[CalendarEvent]:
    """Render items as spans on day, kept visually inside the window."""
    base = datetime.combine(day, time.min)
    last_hour = normalized_end_hour(window)

    events = []
    for item in items:
        adjusted_start = clamp_to_window(item.start_time, window)
        adjusted_duration = min(last_hour - adjusted_start, max(0.5, item.duration))
        start = base + timedelta(hours=adjusted_start)
        events.append(
            CalendarEvent(
                id=item.id,
                title=item.activity or UNTITLED_EVENT,
                start=start,
                end=start + timedelta(hours=adjusted_duration),
                activity_type=item.activity_type,
                style=dict(EVENT_STYLES[item.activity_type]),
            )
        )
    return events


def calendar_bounds(window: DayWindow, day: date) -> CalendarBounds:
    """
    Visible min/max of the calendar grid.

    A midnight end is shown up to 23:59:59. A max not after min is pushed to
    min + 1h.
    """
    start_h, start_m = parse_clock(window.start)
    end_h, end_m = parse_clock(window.end)
    minimum = datetime.combine(day, time(start_h, start_m))
    if end_h == 0 and end_m == 0:
        maximum = datetime.combine(day, time(23, 59, 59))
    else:
        maximum = datetime.combine(day, time(end_h, end_m))
    if maximum <= minimum:
        maximum = minimum + timedelta(hours=1)
    return CalendarBounds(min=minimum, max=maximum)


class CalendarAdapter:
    """Gesture handlers for the day calendar."""

    def __init__(self, mutations: ScheduleMutationService):
        self.mutations = mutations

    def _span(self, start: ClockValue, end: ClockValue) -> Optional[GestureSpan]:
        span = gesture_span(start, end, self.mutations.min_duration)
        if span is None:
            logger.debug(f"Ignoring zero-length gesture {start} -> {end}")
        return span

    def on_event_drop(self, item_id: str, start: ClockValue, end: ClockValue) -> Optional[ScheduleItem]:
        """Dragging keeps the item's length, so a drop is a move."""
        span = self._span(start, end)
        if span is None:
            return None
        return self.mutations.move(item_id, span.start_time)

    def on_event_resize(self, item_id: str, start: ClockValue, end: ClockValue) -> Optional[ScheduleItem]:
        span = self._span(start, end)
        if span is None:
            return None
        item = self.mutations.day.store.get(item_id)
        if item is None:
            return None
        if span.start_time == item.start_time:
            return self.mutations.resize(item_id, span.duration)
        return self.mutations.reschedule(item_id, span.start_time, span.duration)

    def on_select_slot(
        self,
        start: ClockValue,
        end: ClockValue,
        activity_type: ActivityType = ActivityType.DEFAULT,
    ) -> Optional[ScheduleItem]:
        span = self._span(start, end)
        if span is None:
            return None
        return self.mutations.create(span.start_time, span.duration, activity_type)

    def on_label_saved(self, item_id: str, activity: str) -> Optional[ScheduleItem]:
        return self.mutations.relabel(item_id, activity)

    def on_delete_key(self, item_id: str) -> bool:
        return self.mutations.delete(item_id)

    def events(self, day: date) -> list[CalendarEvent]:
        return to_calendar_events(self.mutations.items, self.mutations.window, day)

    def bounds(self, day: date) -> CalendarBounds:
        return calendar_bounds(self.mutations.window, day)


@dataclass(frozen=True)
class ListRow:
    """One visible half-hour slot of the list view."""

    hour: float
    item: Optional[ScheduleItem] = None

    @property
    def span_slots(self) -> int:
        return int(self.item.duration * 2) if self.item else 1


class ListViewAdapter:
    """Slot list rendering of the schedule, one row per free or starting slot."""

    SLOT_HOURS = 0.5

    def __init__(self, mutations: ScheduleMutationService):
        self.mutations = mutations

    def rows(self) -> list[ListRow]:
        store = self.mutations.day.store
        window = self.mutations.window
        rows = []
        hour = float(start_hour(window))
        last_hour = normalized_end_hour(window)
        while hour < last_hour:
            if store.item_covering(hour) is None:
                rows.append(ListRow(hour=hour, item=store.item_at(hour)))
            hour += self.SLOT_HOURS
        return rows

    def drop_on_slot(self, item_id: str, hour: float) -> Optional[ScheduleItem]:
        return self.mutations.move(item_id, hour)

    def extend(self, item_id: str, delta_hours: float) -> Optional[ScheduleItem]:
        item = self.mutations.day.store.get(item_id)
        if item is None or delta_hours == 0:
            return None
        return self.mutations.resize(item_id, item.duration + delta_hours)

    def create_at_slot(self, hour: float, duration: float = 1.0) -> Optional[ScheduleItem]:
        return self.mutations.create(hour, duration)
