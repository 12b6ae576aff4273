"""
Generation API endpoints.

Top goals, schedule generation and activity categorization, gated by the
rate limiter.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from timebox.api.deps import CurrentUser, GenerationPlanner
from timebox.core.exceptions import (
    ExternalServiceError,
    RateLimitedError,
    ValidationError,
)
from timebox.core.logger import setup_logger
from timebox.models.generation import (
    ActivityCategoryResponse,
    CategorizeActivityRequest,
    GenerateScheduleRequest,
    GenerateTopGoalsRequest,
    ScheduleGenerationResponse,
    TopGoalsResponse,
)

logger = setup_logger(__name__)

router = APIRouter()

GENERATION_FAILED_DETAIL = "Generation failed. Please try again."


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, RateLimitedError):
        return HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    logger.warning(f"Generation request failed: {exc}")
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=GENERATION_FAILED_DETAIL)


@router.post("/top-goals", response_model=TopGoalsResponse)
async def generate_top_goals(
    payload: GenerateTopGoalsRequest,
    user: CurrentUser,
    planner: GenerationPlanner,
):
    try:
        return await planner.generate_top_goals(user.id, payload)
    except (RateLimitedError, ValidationError, ExternalServiceError) as exc:
        raise _to_http(exc) from exc


@router.post("/schedule", response_model=ScheduleGenerationResponse)
async def generate_schedule(
    payload: GenerateScheduleRequest,
    user: CurrentUser,
    planner: GenerationPlanner,
):
    """Generate a schedule and commit it to the requested day."""
    try:
        return await planner.generate_and_apply_schedule(user.id, payload)
    except (RateLimitedError, ValidationError, ExternalServiceError) as exc:
        raise _to_http(exc) from exc


@router.post("/categorize", response_model=ActivityCategoryResponse)
async def categorize_activity(
    payload: CategorizeActivityRequest,
    user: CurrentUser,
    planner: GenerationPlanner,
):
    try:
        category = await planner.categorize_activity(user.id, payload)
    except (RateLimitedError, ValidationError, ExternalServiceError) as exc:
        raise _to_http(exc) from exc
    return ActivityCategoryResponse(category=category)
