"""
User settings models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from timebox.models.schedule import CoreTimeWindow, DayWindow


class UserSettings(BaseModel):
    """Planning context saved per user."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    north_star: str = Field("", alias="northStar")
    day_duration: DayWindow = Field(default_factory=DayWindow, alias="dayDuration")
    core_time: CoreTimeWindow = Field(default_factory=CoreTimeWindow, alias="coreTime")
    profile: str = ""
    hobbies: str = ""
    intermittent_fasting: bool = Field(False, alias="intermittentFasting")


class UserSettingsUpdate(BaseModel):
    """Partial settings update. Only provided fields are saved."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    north_star: Optional[str] = Field(None, alias="northStar")
    day_duration: Optional[DayWindow] = Field(None, alias="dayDuration")
    core_time: Optional[CoreTimeWindow] = Field(None, alias="coreTime")
    profile: Optional[str] = None
    hobbies: Optional[str] = None
    intermittent_fasting: Optional[bool] = Field(None, alias="intermittentFasting")
