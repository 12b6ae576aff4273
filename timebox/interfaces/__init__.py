"""Abstract interfaces for infrastructure abstraction."""

from timebox.interfaces.auth_provider import IAuthProvider
from timebox.interfaces.llm_provider import ILLMProvider
from timebox.interfaces.rate_limiter import IRateLimiter
from timebox.interfaces.schedule_repository import IScheduleRepository
from timebox.interfaces.settings_repository import IUserSettingsRepository

__all__ = [
    "IAuthProvider",
    "ILLMProvider",
    "IRateLimiter",
    "IScheduleRepository",
    "IUserSettingsRepository",
]
