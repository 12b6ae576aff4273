"""Pydantic models (schemas) for the application."""

from timebox.models.enums import ActivityType, PlacementRejection, SettingKey
from timebox.models.schedule import (
    CalendarBounds,
    CalendarEvent,
    CoreTimeWindow,
    DayWindow,
    EventGesture,
    MutationResult,
    ScheduleItem,
    ScheduleItemCreate,
    ScheduleItemUpdate,
    ScheduleView,
    SlotSelection,
)
from timebox.models.settings import UserSettings, UserSettingsUpdate
from timebox.models.generation import (
    ActivityCategoryResponse,
    CategorizeActivityRequest,
    GeneratedSchedule,
    GenerateScheduleRequest,
    GenerateTopGoalsRequest,
    ModelListResponse,
    ModelOption,
    ScheduleGenerationResponse,
    TopGoalsResponse,
)

__all__ = [
    # Enums
    "ActivityType",
    "PlacementRejection",
    "SettingKey",
    # Schedule
    "ScheduleItem",
    "ScheduleItemCreate",
    "ScheduleItemUpdate",
    "DayWindow",
    "CoreTimeWindow",
    "CalendarEvent",
    "CalendarBounds",
    "EventGesture",
    "SlotSelection",
    "MutationResult",
    "ScheduleView",
    # Settings
    "UserSettings",
    "UserSettingsUpdate",
    # Generation
    "GenerateTopGoalsRequest",
    "TopGoalsResponse",
    "GenerateScheduleRequest",
    "GeneratedSchedule",
    "CategorizeActivityRequest",
    "ActivityCategoryResponse",
    "ScheduleGenerationResponse",
    "ModelOption",
    "ModelListResponse",
]
