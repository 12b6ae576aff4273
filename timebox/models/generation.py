"""
Request/response models for the generation collaborator.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from timebox.models.enums import ActivityType
from timebox.models.schedule import CoreTimeWindow, DayWindow, ScheduleItem, ScheduleView


class GenerateTopGoalsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    north_star: str = Field(..., alias="northStar")
    brain_dump: str = Field(..., alias="brainDump")
    profile: Optional[str] = None
    hobbies: Optional[str] = None
    model: Optional[str] = None


class TopGoalsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    top_goals: list[str] = Field(..., alias="topGoals")


class GenerateScheduleRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    north_star: str = Field(..., alias="northStar")
    brain_dump: str = Field(..., alias="brainDump")
    top_goals: list[str] = Field(..., alias="topGoals")
    day_duration: DayWindow = Field(..., alias="dayDuration")
    core_time: Optional[CoreTimeWindow] = Field(None, alias="coreTime")
    working_duration: Optional[int] = Field(None, ge=15, le=120, alias="workingDuration")
    profile: Optional[str] = None
    hobbies: Optional[str] = None
    intermittent_fasting: Optional[bool] = Field(None, alias="intermittentFasting")
    date: Optional[str] = None
    model: Optional[str] = None


class GeneratedSchedule(BaseModel):
    """Schema the model output must satisfy before it may replace a schedule."""

    schedule: list[ScheduleItem]


class CategorizeActivityRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    activity: str = Field(..., min_length=1)
    top_goals: list[str] = Field(default_factory=list, alias="topGoals")
    model: Optional[str] = None


class ActivityCategoryResponse(BaseModel):
    category: ActivityType


class ScheduleGenerationResponse(BaseModel):
    """Result of generating a schedule for a day.

    applied is False when a newer generation for the same day was issued
    while this one was in flight.
    """

    applied: bool
    schedule: ScheduleView


class ModelOption(BaseModel):
    """A generation model a request may select."""

    id: str
    name: str


class ModelListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider: str
    default_model_id: str = Field(..., alias="defaultModelId")
    models: list[ModelOption]
