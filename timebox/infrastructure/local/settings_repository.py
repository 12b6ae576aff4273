"""
SQLite implementation of the user settings repository.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, select

from timebox.infrastructure.local.database import UserSettingORM, get_session_factory
from timebox.interfaces.settings_repository import IUserSettingsRepository
from timebox.utils.datetime_utils import now_utc


class SqliteUserSettingsRepository(IUserSettingsRepository):
    """SQLite implementation of user settings repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    async def get(self, user_id: str, key: str) -> Optional[str]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserSettingORM).where(
                    UserSettingORM.user_id == user_id,
                    UserSettingORM.key == key,
                )
            )
            orm = result.scalar_one_or_none()
            return orm.value if orm else None

    async def get_all(self, user_id: str) -> dict[str, str]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserSettingORM).where(UserSettingORM.user_id == user_id)
            )
            return {orm.key: orm.value for orm in result.scalars().all()}

    async def set(self, user_id: str, key: str, value: str) -> None:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserSettingORM).where(
                    UserSettingORM.user_id == user_id,
                    UserSettingORM.key == key,
                )
            )
            orm = result.scalar_one_or_none()
            now = now_utc()
            if orm:
                orm.value = value
                orm.updated_at = now
            else:
                session.add(UserSettingORM(user_id=user_id, key=key, value=value, updated_at=now))
            await session.commit()

    async def remove(self, user_id: str, key: str) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(UserSettingORM).where(
                    UserSettingORM.user_id == user_id,
                    UserSettingORM.key == key,
                )
            )
            await session.commit()
            return result.rowcount > 0


class InMemoryUserSettingsRepository(IUserSettingsRepository):
    """In-memory implementation of user settings repository.

    Suitable for development and testing.
    """

    def __init__(self):
        self._values: dict[str, dict[str, str]] = {}

    async def get(self, user_id: str, key: str) -> Optional[str]:
        return self._values.get(user_id, {}).get(key)

    async def get_all(self, user_id: str) -> dict[str, str]:
        return dict(self._values.get(user_id, {}))

    async def set(self, user_id: str, key: str, value: str) -> None:
        self._values.setdefault(user_id, {})[key] = value

    async def remove(self, user_id: str, key: str) -> bool:
        return self._values.get(user_id, {}).pop(key, None) is not None
