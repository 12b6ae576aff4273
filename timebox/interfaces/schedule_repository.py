"""
Interface for day schedule ownership.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from timebox.models.schedule import DayWindow
from timebox.services.schedule_store import DaySchedule


class IScheduleRepository(ABC):
    """Holds the current schedule of each (user, day) planning session."""

    @abstractmethod
    async def get_or_create(
        self,
        user_id: str,
        day: date,
        window: Optional[DayWindow] = None,
    ) -> DaySchedule:
        """Get the day's schedule, creating an empty one with window if missing.

        Args:
            user_id: The user ID
            day: Calendar day of the schedule
            window: Day window for a newly created schedule

        Returns:
            The live DaySchedule object
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str, day: date) -> bool:
        """Drop a day's schedule."""
        pass
