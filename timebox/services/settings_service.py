"""
Settings Service.

Loads and saves the typed per-user planning context on top of the string
key-value settings repository.
"""

from __future__ import annotations

import json
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from timebox.core.exceptions import ValidationError
from timebox.core.logger import setup_logger
from timebox.interfaces.settings_repository import IUserSettingsRepository
from timebox.models.enums import SettingKey
from timebox.models.schedule import CoreTimeWindow, DayWindow
from timebox.models.settings import UserSettings, UserSettingsUpdate
from timebox.services.time_window import clamp_core_time, normalize_day_window

logger = setup_logger(__name__)

_TEXT_KEYS = {
    SettingKey.NAME: "name",
    SettingKey.NORTH_STAR: "north_star",
    SettingKey.PROFILE: "profile",
    SettingKey.HOBBIES: "hobbies",
}


class SettingsService:
    """Typed access to a user's saved settings."""

    def __init__(
        self,
        repo: IUserSettingsRepository,
        default_day_window: Optional[DayWindow] = None,
        default_core_time: Optional[CoreTimeWindow] = None,
    ):
        self._repo = repo
        self._default_day_window = default_day_window or DayWindow()
        self._default_core_time = default_core_time or CoreTimeWindow()

    async def load(self, user_id: str) -> UserSettings:
        """Load settings, using defaults for keys that are absent or unreadable."""
        stored = await self._repo.get_all(user_id)

        values: dict = {}
        for key, field_name in _TEXT_KEYS.items():
            if key.value in stored:
                values[field_name] = stored[key.value]

        day_window = self._load_window(
            stored.get(SettingKey.DAY_DURATION.value), DayWindow, self._default_day_window
        )
        core_time = self._load_window(
            stored.get(SettingKey.CORE_TIME.value), CoreTimeWindow, self._default_core_time
        )
        values["day_duration"] = normalize_day_window(day_window)
        values["core_time"] = clamp_core_time(core_time, values["day_duration"])
        values["intermittent_fasting"] = (
            stored.get(SettingKey.INTERMITTENT_FASTING.value, "false").lower() == "true"
        )
        return UserSettings(**values)

    async def save(self, user_id: str, update: UserSettingsUpdate) -> UserSettings:
        """
        Save the provided fields and return the resulting settings.

        The day window is widened to at least one hour and the core time is
        clamped into it before anything is written.
        """
        fields = update.model_dump(exclude_unset=True, exclude_none=True)

        for key, field_name in _TEXT_KEYS.items():
            if field_name in fields:
                await self._repo.set(user_id, key.value, fields[field_name])

        if update.day_duration is not None or update.core_time is not None:
            current = await self.load(user_id)
            day_window = normalize_day_window(update.day_duration or current.day_duration)
            core_time = clamp_core_time(update.core_time or current.core_time, day_window)
            if update.day_duration is not None:
                await self._repo.set(
                    user_id, SettingKey.DAY_DURATION.value, day_window.model_dump_json()
                )
            # Core time is rewritten whenever the day window moves.
            await self._repo.set(user_id, SettingKey.CORE_TIME.value, core_time.model_dump_json())

        if update.intermittent_fasting is not None:
            await self._repo.set(
                user_id,
                SettingKey.INTERMITTENT_FASTING.value,
                "true" if update.intermittent_fasting else "false",
            )

        logger.info(f"Saved settings for {user_id}: {sorted(fields)}")
        return await self.load(user_id)

    async def remove(self, user_id: str, key: str) -> bool:
        """
        Remove a single setting.

        Raises:
            ValidationError: If key is not a known setting key
        """
        try:
            setting_key = SettingKey(key)
        except ValueError as e:
            raise ValidationError(f"Unknown setting key: {key}") from e
        return await self._repo.remove(user_id, setting_key.value)

    def _load_window(self, raw: Optional[str], model, default):
        if raw is None:
            return default
        try:
            return model.model_validate(json.loads(raw))
        except (ValueError, PydanticValidationError) as e:
            logger.warning(f"Ignoring invalid stored {model.__name__}: {e}")
            return default
