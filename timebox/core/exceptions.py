"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class TimeboxError(Exception):
    """Base exception for timebox."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(TimeboxError):
    """Resource not found."""

    pass


class ValidationError(TimeboxError):
    """Validation error."""

    pass


class RateLimitedError(TimeboxError):
    """Request denied by the rate limiter."""

    pass


class ExternalServiceError(TimeboxError):
    """Failure of an external collaborator (generation service, etc.)."""

    pass


class LLMError(ExternalServiceError):
    """LLM-related error."""

    pass


class LLMValidationError(LLMError):
    """LLM output validation failed."""

    def __init__(self, message: str, raw_output: str, attempts: int = 1):
        super().__init__(message, details={"raw_output": raw_output, "attempts": attempts})
        self.raw_output = raw_output
        self.attempts = attempts
