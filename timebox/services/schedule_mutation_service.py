"""
Schedule mutation service.

Every geometry change (create, move, resize, reschedule) goes through the
placement validator and is applied atomically. A refused placement is a
silent no-op: the operation returns None and the schedule is unchanged.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Union
from uuid import uuid4

from timebox.core.exceptions import ValidationError
from timebox.core.logger import setup_logger
from timebox.models.enums import ActivityType
from timebox.models.schedule import DayWindow, ScheduleItem
from timebox.services.placement_validator import (
    MIN_DURATION_HOURS,
    has_overlaps,
    validate_placement,
)
from timebox.services.schedule_store import DaySchedule
from timebox.services.time_window import (
    clamp_to_window,
    normalize_day_window,
    normalized_end_hour,
)

logger = setup_logger(__name__)


def _default_id_factory() -> str:
    return f"event-{uuid4().hex[:12]}"


class ScheduleMutationService:
    """
    Applies user edits to a day's schedule.

    Provides:
    - create / move / resize / reschedule (validated, no-op when refused)
    - relabel / recategorize / delete (always succeed for existing items)
    - reconcile_window (auto-repair after the day window changes)
    - replace_all (bulk replacement after generation)
    """

    def __init__(
        self,
        day: DaySchedule,
        min_duration: float = MIN_DURATION_HOURS,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.day = day
        self.min_duration = min_duration
        self._id_factory = id_factory or _default_id_factory

    @property
    def items(self) -> list[ScheduleItem]:
        return self.day.store.items

    @property
    def window(self) -> DayWindow:
        return self.day.window

    def _new_id(self) -> str:
        item_id = self._id_factory()
        while item_id in self.day.store:
            item_id = self._id_factory()
        return item_id

    def _check(self, start_time: float, duration: float, exclude_id: Optional[str] = None) -> bool:
        decision = validate_placement(
            self.day.store,
            self.day.window,
            start_time,
            duration,
            exclude_id=exclude_id,
            min_duration=self.min_duration,
        )
        if not decision:
            logger.debug(
                f"Placement rejected ({decision.reason.value}): "
                f"start={start_time} duration={duration} exclude={exclude_id}"
            )
        return decision.accepted

    def create(
        self,
        start_time: float,
        duration: float,
        activity_type: ActivityType = ActivityType.DEFAULT,
    ) -> Optional[ScheduleItem]:
        """Create an empty-label item. Returns None if the placement is refused."""
        if not self._check(start_time, duration):
            return None
        item = ScheduleItem(
            id=self._new_id(),
            start_time=start_time,
            duration=duration,
            activity="",
            activity_type=activity_type,
        )
        self.day.store.append(item)
        logger.info(f"Created item {item.id} at {start_time} for {duration}h")
        return item

    def move(self, item_id: str, new_start_time: float) -> Optional[ScheduleItem]:
        """Move an item, keeping its duration."""
        item = self.day.store.get(item_id)
        if item is None:
            return None
        return self.reschedule(item_id, new_start_time, item.duration)

    def resize(self, item_id: str, new_duration: float) -> Optional[ScheduleItem]:
        """Resize an item, keeping its start time."""
        item = self.day.store.get(item_id)
        if item is None:
            return None
        return self.reschedule(item_id, item.start_time, new_duration)

    def reschedule(self, item_id: str, start_time: float, duration: float) -> Optional[ScheduleItem]:
        """Set both start time and duration in one validated step."""
        item = self.day.store.get(item_id)
        if item is None:
            return None
        if not self._check(start_time, duration, exclude_id=item_id):
            return None
        updated = item.model_copy(update={"start_time": float(start_time), "duration": float(duration)})
        self.day.store.replace(updated)
        logger.info(f"Placed item {item_id} at {start_time} for {duration}h")
        return updated

    def relabel(self, item_id: str, activity: str) -> Optional[ScheduleItem]:
        item = self.day.store.get(item_id)
        if item is None:
            return None
        updated = item.model_copy(update={"activity": activity})
        self.day.store.replace(updated)
        return updated

    def recategorize(
        self,
        item_id: str,
        activity_type: Union[ActivityType, str],
    ) -> Optional[ScheduleItem]:
        try:
            activity_type = ActivityType(activity_type)
        except ValueError as exc:
            raise ValidationError(f"Unknown activity type: {activity_type}") from exc
        item = self.day.store.get(item_id)
        if item is None:
            return None
        updated = item.model_copy(update={"activity_type": activity_type})
        self.day.store.replace(updated)
        return updated

    def delete(self, item_id: str) -> bool:
        if item_id not in self.day.store:
            return False
        self.day.store.remove(item_id)
        logger.info(f"Deleted item {item_id}")
        return True

    def reconcile_window(self, window: DayWindow) -> list[ScheduleItem]:
        """
        Adopt a new day window and pull items back inside it.

        Starts are clamped into [window start, window end - 0.5]. Items running
        past the window end are shortened to max(min_duration, end - start).
        Overlaps are not re-checked. Returns the items that were adjusted.
        """
        window = normalize_day_window(window)
        self.day.window = window
        last_hour = normalized_end_hour(window)

        adjusted: list[ScheduleItem] = []
        reconciled: list[ScheduleItem] = []
        for item in self.day.store:
            start_time = item.start_time
            duration = item.duration
            start_time = clamp_to_window(item.start_time, window)
            if start_time + duration > last_hour:
                duration = max(self.min_duration, last_hour - start_time)
            if start_time != item.start_time or duration != item.duration:
                item = item.model_copy(update={"start_time": start_time, "duration": duration})
                adjusted.append(item)
            reconciled.append(item)

        if adjusted:
            logger.warning(
                f"{len(adjusted)} item(s) fell outside the day window "
                f"{window.start}-{window.end} and were adjusted"
            )
            self.day.store.replace_all(reconciled)
            if has_overlaps(reconciled):
                logger.warning("Window reconciliation left overlapping items")
        return adjusted

    def replace_all(self, items: Iterable[ScheduleItem]) -> list[ScheduleItem]:
        """Bulk replacement, followed by reconciliation against the current window."""
        self.day.store.replace_all(items)
        self.reconcile_window(self.day.window)
        logger.info(f"Schedule replaced with {len(self.day.store)} item(s)")
        return self.day.store.items
