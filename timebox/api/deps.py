"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from timebox.core.config import get_settings
from timebox.interfaces.auth_provider import IAuthProvider, User
from timebox.interfaces.llm_provider import ILLMProvider
from timebox.interfaces.rate_limiter import IRateLimiter
from timebox.interfaces.schedule_repository import IScheduleRepository
from timebox.interfaces.settings_repository import IUserSettingsRepository
from timebox.models.schedule import CoreTimeWindow, DayWindow
from timebox.services.generation_service import GenerationService
from timebox.services.planner_service import PlannerService
from timebox.services.settings_service import SettingsService


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_settings_repository() -> IUserSettingsRepository:
    """Get user settings repository instance."""
    from timebox.infrastructure.local.settings_repository import SqliteUserSettingsRepository
    return SqliteUserSettingsRepository()


@lru_cache()
def get_schedule_repository() -> IScheduleRepository:
    """Get day schedule repository instance."""
    from timebox.infrastructure.local.schedule_repository import InMemoryScheduleRepository
    return InMemoryScheduleRepository()


@lru_cache()
def get_rate_limiter() -> IRateLimiter:
    """Get rate limiter instance."""
    settings = get_settings()
    from timebox.infrastructure.local.rate_limiter import InMemoryRateLimiter
    return InMemoryRateLimiter(
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        enabled=settings.RATE_LIMIT_ENABLED,
    )


# ===========================================
# Provider Dependencies
# ===========================================


@lru_cache()
def get_llm_provider() -> ILLMProvider:
    """
    Get LLM provider instance based on LLM_PROVIDER setting.

    Supports:
    - gemini-api: Gemini API (API Key)
    - litellm: LiteLLM (OpenAI, Bedrock, etc. with optional custom endpoint)
    """
    settings = get_settings()

    if settings.LLM_PROVIDER == "gemini-api":
        from timebox.infrastructure.local.gemini_api_provider import GeminiAPIProvider
        return GeminiAPIProvider(settings.GEMINI_MODEL)

    elif settings.LLM_PROVIDER == "litellm":
        from timebox.infrastructure.local.litellm_provider import LiteLLMProvider
        return LiteLLMProvider(settings.LITELLM_MODEL)

    else:
        raise ValueError(f"Unknown LLM_PROVIDER: {settings.LLM_PROVIDER}")


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    settings = get_settings()
    from timebox.infrastructure.local.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=settings.AUTH_REQUIRED)


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current user.

    When auth is disabled every request runs as the development user.
    """
    if not auth_provider.is_enabled():
        return auth_provider.default_user()

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header required",
        )

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
        )

    try:
        return await auth_provider.verify_token(token)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


# ===========================================
# Service Dependencies
# ===========================================


def get_settings_service(
    repo: IUserSettingsRepository = Depends(get_settings_repository),
) -> SettingsService:
    settings = get_settings()
    return SettingsService(
        repo,
        default_day_window=DayWindow(start=settings.DEFAULT_DAY_START, end=settings.DEFAULT_DAY_END),
        default_core_time=CoreTimeWindow(
            start=settings.DEFAULT_CORE_START, end=settings.DEFAULT_CORE_END
        ),
    )


def get_generation_service(
    llm_provider: ILLMProvider = Depends(get_llm_provider),
) -> GenerationService:
    settings = get_settings()
    return GenerationService(
        llm_provider,
        temperature=settings.LLM_TEMPERATURE,
        max_output_tokens=settings.LLM_MAX_OUTPUT_TOKENS,
    )


def get_planner_service(
    schedule_repo: IScheduleRepository = Depends(get_schedule_repository),
    settings_service: SettingsService = Depends(get_settings_service),
    rate_limiter: IRateLimiter = Depends(get_rate_limiter),
) -> PlannerService:
    """Planner for schedule edits. Does not touch the LLM provider."""
    return PlannerService(
        schedule_repo,
        settings_service,
        rate_limiter=rate_limiter,
        min_duration=get_settings().MIN_ITEM_DURATION_HOURS,
    )


def get_generation_planner_service(
    schedule_repo: IScheduleRepository = Depends(get_schedule_repository),
    settings_service: SettingsService = Depends(get_settings_service),
    rate_limiter: IRateLimiter = Depends(get_rate_limiter),
    generation_service: GenerationService = Depends(get_generation_service),
) -> PlannerService:
    return PlannerService(
        schedule_repo,
        settings_service,
        generation_service=generation_service,
        rate_limiter=rate_limiter,
        min_duration=get_settings().MIN_ITEM_DURATION_HOURS,
    )


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

SettingsRepo = Annotated[IUserSettingsRepository, Depends(get_settings_repository)]
ScheduleRepo = Annotated[IScheduleRepository, Depends(get_schedule_repository)]
RateLimiter = Annotated[IRateLimiter, Depends(get_rate_limiter)]
LLMProvider = Annotated[ILLMProvider, Depends(get_llm_provider)]
CurrentUser = Annotated[User, Depends(get_current_user)]
SettingsSvc = Annotated[SettingsService, Depends(get_settings_service)]
Planner = Annotated[PlannerService, Depends(get_planner_service)]
GenerationPlanner = Annotated[PlannerService, Depends(get_generation_planner_service)]
