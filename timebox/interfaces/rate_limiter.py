"""
Rate limiter interface.

Gates generation requests per caller identity and action name.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class RateLimitDecision(BaseModel):
    allowed: bool
    reason: Optional[str] = None


class IRateLimiter(ABC):
    """Abstract interface for request rate limiting."""

    @abstractmethod
    async def check(self, identifier: str, action_name: str) -> RateLimitDecision:
        """
        Record an attempt and decide whether it may proceed.

        Args:
            identifier: Caller identity (user ID)
            action_name: Name of the gated action

        Returns:
            RateLimitDecision with the denial reason when not allowed
        """
        pass
