"""
Enum definitions for the application.

These enums are used across models and provide type-safe category values.
"""

from enum import Enum


class ActivityType(str, Enum):
    """
    Category tag of a schedule item.

    TOP_GOAL = Directly advances one of the day's top goals
    LEISURE = Relaxation, entertainment, breaks or hobbies
    PHYSICAL = Exercise, physical activity or movement
    DEFAULT = Anything else
    """

    TOP_GOAL = "top-goal"
    LEISURE = "leisure"
    PHYSICAL = "physical"
    DEFAULT = "default"


class PlacementRejection(str, Enum):
    """Why a candidate placement was refused."""

    TOO_SHORT = "too_short"
    OFF_GRID = "off_grid"
    OUTSIDE_WINDOW = "outside_window"
    OVERLAP = "overlap"


class SettingKey(str, Enum):
    """Keys of the per-user settings key-value store."""

    NAME = "name"
    NORTH_STAR = "northStar"
    DAY_DURATION = "dayDuration"
    CORE_TIME = "coreTime"
    PROFILE = "profile"
    HOBBIES = "hobbies"
    INTERMITTENT_FASTING = "intermittentFasting"
