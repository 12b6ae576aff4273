"""
User settings repository interface.

A per-user string key-value store. Structured values are stored as JSON text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class IUserSettingsRepository(ABC):
    @abstractmethod
    async def get(self, user_id: str, key: str) -> Optional[str]:
        pass

    @abstractmethod
    async def get_all(self, user_id: str) -> dict[str, str]:
        pass

    @abstractmethod
    async def set(self, user_id: str, key: str, value: str) -> None:
        pass

    @abstractmethod
    async def remove(self, user_id: str, key: str) -> bool:
        """Remove a key. Returns False when it was not set."""
        pass
