"""
Generation Service.

Wraps the LLM provider for top goal generation, schedule generation and
activity categorization. Model output is validated before it is returned;
a result that fails the schema is rejected as a whole.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from timebox.core.exceptions import LLMError, LLMValidationError, ValidationError
from timebox.core.logger import setup_logger
from timebox.interfaces.llm_provider import ILLMProvider
from timebox.models.enums import ActivityType
from timebox.models.generation import (
    ActivityCategoryResponse,
    CategorizeActivityRequest,
    GeneratedSchedule,
    GenerateScheduleRequest,
    GenerateTopGoalsRequest,
    TopGoalsResponse,
)
from timebox.models.schedule import ScheduleItem
from timebox.prompts.planner_prompts import (
    CATEGORY_SCHEMA,
    PLANNER_SYSTEM_PROMPT,
    SCHEDULE_SCHEMA,
    TOP_GOALS_SCHEMA,
    build_categorize_prompt,
    build_schedule_prompt,
    build_top_goals_prompt,
)
from timebox.services.llm_utils import extract_json, generate_text_with_status

logger = setup_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def build_request(model: type[ModelT], data: Any) -> ModelT:
    """Validate raw request data, raising the domain ValidationError."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {model.__name__}", details=e.errors()) from e


class GenerationService:
    """Service for LLM-backed planning content."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        temperature: float = 0.2,
        max_output_tokens: int = 2000,
    ):
        self._llm_provider = llm_provider
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens

    async def generate_top_goals(self, request: GenerateTopGoalsRequest) -> TopGoalsResponse:
        """
        Generate focused goals for the day.

        Raises:
            ValidationError: If the request is malformed
            LLMError: If the provider call fails
            LLMValidationError: If the output is not a non-empty goal list
        """
        request = build_request(GenerateTopGoalsRequest, request)
        raw_output = await self._generate(
            build_top_goals_prompt(request), TOP_GOALS_SCHEMA, request.model
        )
        result = self._parse(TopGoalsResponse, raw_output)

        goals = [goal.strip() for goal in result.top_goals if goal and goal.strip()]
        if not goals:
            raise LLMValidationError(message="Model returned no top goals", raw_output=raw_output)
        logger.info(f"Generated {len(goals)} top goals")
        return TopGoalsResponse(top_goals=goals)

    async def generate_schedule(self, request: GenerateScheduleRequest) -> list[ScheduleItem]:
        """
        Generate a timeboxed schedule.

        Returns the validated items. Nothing is written to any schedule here.

        Raises:
            ValidationError: If the request is malformed
            LLMError: If the provider call fails
            LLMValidationError: If any generated item violates the item schema
        """
        request = build_request(GenerateScheduleRequest, request)
        raw_output = await self._generate(
            build_schedule_prompt(request), SCHEDULE_SCHEMA, request.model
        )
        result = self._parse(GeneratedSchedule, raw_output)

        seen: set[str] = set()
        for item in result.schedule:
            if item.id in seen:
                raise LLMValidationError(
                    message=f"Duplicate schedule item id: {item.id}",
                    raw_output=raw_output,
                )
            seen.add(item.id)

        logger.info(
            f"Generated schedule with {len(result.schedule)} items "
            f"for window {request.day_duration.start}-{request.day_duration.end}"
        )
        return result.schedule

    async def classify_activity(
        self,
        activity: str,
        top_goals: Optional[list[str]] = None,
        model: Optional[str] = None,
    ) -> ActivityType:
        """
        Categorize an activity into one of the four activity types.

        Raises:
            ValidationError: If the activity is empty
            LLMError: If the provider call fails
            LLMValidationError: If the model returns an unknown category
        """
        if not activity or not activity.strip():
            raise ValidationError("Activity is required")
        request = build_request(
            CategorizeActivityRequest,
            {"activity": activity.strip(), "top_goals": top_goals or []},
        )
        raw_output = await self._generate(
            build_categorize_prompt(request), CATEGORY_SCHEMA, model
        )
        result = self._parse(ActivityCategoryResponse, raw_output)
        logger.debug(f"Categorized '{request.activity}' as {result.category.value}")
        return result.category

    def _provider(self, model: Optional[str]) -> ILLMProvider:
        if model:
            return self._llm_provider.with_model(model)
        return self._llm_provider

    async def _generate(
        self,
        prompt: str,
        response_schema: dict,
        model: Optional[str] = None,
    ) -> str:
        text, error_code, error_detail = await asyncio.to_thread(
            generate_text_with_status,
            self._provider(model),
            prompt,
            temperature=self._temperature,
            max_output_tokens=self._max_output_tokens,
            response_schema=response_schema,
            system_instruction=PLANNER_SYSTEM_PROMPT,
        )
        if not text:
            logger.warning(f"Generation failed: {error_code} {error_detail or ''}".rstrip())
            raise LLMError(
                f"Generation failed ({error_code or 'empty_response'})",
                details=error_detail,
            )
        return text

    def _parse(self, model: type[ModelT], raw_output: str) -> ModelT:
        try:
            return model.model_validate(extract_json(raw_output))
        except (ValueError, PydanticValidationError) as e:
            logger.warning(f"{model.__name__} validation failed: {e}")
            raise LLMValidationError(
                message=f"Model output did not match {model.__name__}",
                raw_output=raw_output,
            ) from e
