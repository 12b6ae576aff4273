"""In-memory day schedule repository implementation."""

from datetime import date
from typing import Optional

from timebox.interfaces.schedule_repository import IScheduleRepository
from timebox.models.schedule import DayWindow
from timebox.services.schedule_store import DaySchedule
from timebox.services.time_window import normalize_day_window


class InMemoryScheduleRepository(IScheduleRepository):
    """In-memory implementation of schedule repository.

    Schedules are session state and are lost on restart.
    """

    def __init__(self):
        self._schedules: dict[tuple[str, date], DaySchedule] = {}

    async def get_or_create(
        self,
        user_id: str,
        day: date,
        window: Optional[DayWindow] = None,
    ) -> DaySchedule:
        key = (user_id, day)
        schedule = self._schedules.get(key)
        if schedule is None:
            schedule = DaySchedule(window=normalize_day_window(window or DayWindow()))
            self._schedules[key] = schedule
        return schedule

    async def delete(self, user_id: str, day: date) -> bool:
        return self._schedules.pop((user_id, day), None) is not None
