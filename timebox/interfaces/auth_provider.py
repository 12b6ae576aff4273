"""
Auth provider interface.

Identity only scopes per-user state (settings, day schedules, rate limits).
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class User(BaseModel):
    """Authenticated user."""

    id: str
    display_name: Optional[str] = None


class IAuthProvider(ABC):
    """Abstract interface for authentication providers."""

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """Resolve a bearer token to a user, raising on an unusable token."""
        pass

    @abstractmethod
    def default_user(self) -> User:
        """User every request runs as while authentication is disabled."""
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        pass
