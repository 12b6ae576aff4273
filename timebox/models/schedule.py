"""
Schedule models for the timeboxed day.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from timebox.models.enums import ActivityType

_CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def is_half_hour(value: float) -> bool:
    """True when value is a finite whole or half hour."""
    return math.isfinite(value) and (value * 2) == int(value * 2)


def _require_number(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    return value


class ScheduleItem(BaseModel):
    """A single timeboxed activity."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    start_time: float = Field(..., ge=0, lt=24, allow_inf_nan=False, alias="startTime")
    duration: float = Field(..., gt=0, allow_inf_nan=False)
    activity: str = ""
    activity_type: ActivityType = Field(ActivityType.DEFAULT, alias="activityType")

    @field_validator("start_time", "duration", mode="before")
    @classmethod
    def _numeric(cls, value: Any) -> Any:
        return _require_number(value)

    @field_validator("start_time", "duration")
    @classmethod
    def _half_hour_grid(cls, value: float) -> float:
        if not is_half_hour(value):
            raise ValueError("must be a whole or half hour")
        return float(value)

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


class ClockWindow(BaseModel):
    """A pair of HH:MM clock times."""

    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def _clock_format(cls, value: str) -> str:
        if not _CLOCK_PATTERN.match(value):
            raise ValueError("must be a HH:MM clock time")
        return value


class DayWindow(ClockWindow):
    """Clock bounds within which scheduling is permitted. An end of 00:00 means midnight."""

    start: str = "05:00"
    end: str = "21:00"


class CoreTimeWindow(ClockWindow):
    """Peak-productivity hours. Advisory, only used when prompting for a schedule."""

    start: str = "09:00"
    end: str = "12:00"


class ScheduleItemCreate(BaseModel):
    """Create request for an interactive schedule item."""

    model_config = ConfigDict(populate_by_name=True)

    start_time: float = Field(..., allow_inf_nan=False, alias="startTime")
    duration: float = Field(1.0, allow_inf_nan=False)
    activity_type: ActivityType = Field(ActivityType.DEFAULT, alias="activityType")


class ScheduleItemUpdate(BaseModel):
    """Partial update for a schedule item. Geometry and text are applied independently."""

    model_config = ConfigDict(populate_by_name=True)

    start_time: Optional[float] = Field(None, allow_inf_nan=False, alias="startTime")
    duration: Optional[float] = Field(None, allow_inf_nan=False)
    activity: Optional[str] = None
    activity_type: Optional[ActivityType] = Field(None, alias="activityType")


class CalendarEvent(BaseModel):
    """Renderable time span for a schedule item."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    start: datetime
    end: datetime
    activity_type: ActivityType = Field(..., alias="activityType")
    style: dict[str, str] = Field(default_factory=dict)


class CalendarBounds(BaseModel):
    """Visible time range of the calendar grid."""

    min: datetime
    max: datetime


class MutationResult(BaseModel):
    """Outcome of a schedule mutation. Rejected placements are not errors."""

    applied: bool
    item: Optional[ScheduleItem] = None


class ScheduleView(BaseModel):
    """Current state of a day's schedule."""

    model_config = ConfigDict(populate_by_name=True)

    date: str
    day_window: DayWindow = Field(..., alias="dayWindow")
    items: list[ScheduleItem] = Field(default_factory=list)
    events: list[CalendarEvent] = Field(default_factory=list)
    bounds: Optional[CalendarBounds] = None


class EventGesture(BaseModel):
    """A drop or resize of an existing event, with raw clock times."""

    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(..., alias="itemId")
    start: datetime
    end: datetime


class SlotSelection(BaseModel):
    """A drag across empty calendar slots."""

    model_config = ConfigDict(populate_by_name=True)

    start: datetime
    end: datetime
    activity_type: ActivityType = Field(ActivityType.DEFAULT, alias="activityType")
