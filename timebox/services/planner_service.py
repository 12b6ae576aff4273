"""
Planner Service.

Owns the day planning session: resolves the schedule for (user, day), routes
edits through the mutation service and calendar adapter, and commits generated
schedules.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from timebox.core.exceptions import NotFoundError, RateLimitedError, ValidationError
from timebox.core.logger import setup_logger
from timebox.interfaces.rate_limiter import IRateLimiter
from timebox.interfaces.schedule_repository import IScheduleRepository
from timebox.models.enums import ActivityType
from timebox.models.generation import (
    CategorizeActivityRequest,
    GenerateScheduleRequest,
    GenerateTopGoalsRequest,
    ScheduleGenerationResponse,
    TopGoalsResponse,
)
from timebox.models.schedule import (
    DayWindow,
    MutationResult,
    ScheduleItem,
    ScheduleItemCreate,
    ScheduleItemUpdate,
    ScheduleView,
)
from timebox.services.calendar_adapter import CalendarAdapter, ClockValue
from timebox.services.generation_service import GenerationService, build_request
from timebox.services.placement_validator import MIN_DURATION_HOURS
from timebox.services.schedule_mutation_service import ScheduleMutationService
from timebox.services.settings_service import SettingsService
from timebox.services.time_window import normalize_day_window
from timebox.utils.datetime_utils import parse_day

logger = setup_logger(__name__)

ACTION_TOP_GOALS = "generate_top_goals"
ACTION_SCHEDULE = "generate_schedule"
ACTION_CATEGORIZE = "categorize_activity"


class PlannerService:
    """Service for editing and generating a user's day schedule."""

    def __init__(
        self,
        schedule_repo: IScheduleRepository,
        settings_service: SettingsService,
        generation_service: Optional[GenerationService] = None,
        rate_limiter: Optional[IRateLimiter] = None,
        min_duration: float = MIN_DURATION_HOURS,
    ):
        self._schedule_repo = schedule_repo
        self._settings_service = settings_service
        self._generation_service = generation_service
        self._rate_limiter = rate_limiter
        self._min_duration = min_duration

    # =========================================================================
    # Session
    # =========================================================================

    async def _mutations(self, user_id: str, day: date) -> ScheduleMutationService:
        settings = await self._settings_service.load(user_id)
        schedule = await self._schedule_repo.get_or_create(user_id, day, settings.day_duration)
        return ScheduleMutationService(schedule, min_duration=self._min_duration)

    async def _mutations_for_item(
        self,
        user_id: str,
        day: date,
        item_id: str,
    ) -> ScheduleMutationService:
        mutations = await self._mutations(user_id, day)
        if item_id not in mutations.day.store:
            raise NotFoundError(f"Schedule item {item_id} not found")
        return mutations

    def _view(self, mutations: ScheduleMutationService, day: date) -> ScheduleView:
        adapter = CalendarAdapter(mutations)
        return ScheduleView(
            date=day.isoformat(),
            day_window=mutations.window,
            items=mutations.items,
            events=adapter.events(day),
            bounds=adapter.bounds(day),
        )

    async def get_schedule(self, user_id: str, day: date) -> ScheduleView:
        mutations = await self._mutations(user_id, day)
        return self._view(mutations, day)

    # =========================================================================
    # Item edits
    # =========================================================================

    async def create_item(self, user_id: str, day: date, data: ScheduleItemCreate) -> MutationResult:
        mutations = await self._mutations(user_id, day)
        item = mutations.create(data.start_time, data.duration, data.activity_type)
        return MutationResult(applied=item is not None, item=item)

    async def move_item(self, user_id: str, day: date, item_id: str, start_time: float) -> MutationResult:
        mutations = await self._mutations_for_item(user_id, day, item_id)
        return self._result(mutations, item_id, mutations.move(item_id, start_time))

    async def resize_item(self, user_id: str, day: date, item_id: str, duration: float) -> MutationResult:
        mutations = await self._mutations_for_item(user_id, day, item_id)
        return self._result(mutations, item_id, mutations.resize(item_id, duration))

    async def reschedule_item(
        self,
        user_id: str,
        day: date,
        item_id: str,
        start_time: float,
        duration: float,
    ) -> MutationResult:
        mutations = await self._mutations_for_item(user_id, day, item_id)
        return self._result(mutations, item_id, mutations.reschedule(item_id, start_time, duration))

    async def relabel_item(self, user_id: str, day: date, item_id: str, activity: str) -> MutationResult:
        mutations = await self._mutations_for_item(user_id, day, item_id)
        return MutationResult(applied=True, item=mutations.relabel(item_id, activity))

    async def recategorize_item(
        self,
        user_id: str,
        day: date,
        item_id: str,
        activity_type: ActivityType,
    ) -> MutationResult:
        mutations = await self._mutations_for_item(user_id, day, item_id)
        return MutationResult(applied=True, item=mutations.recategorize(item_id, activity_type))

    async def update_item(
        self,
        user_id: str,
        day: date,
        item_id: str,
        update: ScheduleItemUpdate,
    ) -> MutationResult:
        """
        Apply a partial update.

        Label and category always apply. A start time and/or duration goes
        through placement validation; applied is False when it was refused.
        """
        mutations = await self._mutations_for_item(user_id, day, item_id)
        if update.activity is not None:
            mutations.relabel(item_id, update.activity)
        if update.activity_type is not None:
            mutations.recategorize(item_id, update.activity_type)

        applied = True
        if update.start_time is not None and update.duration is not None:
            applied = mutations.reschedule(item_id, update.start_time, update.duration) is not None
        elif update.start_time is not None:
            applied = mutations.move(item_id, update.start_time) is not None
        elif update.duration is not None:
            applied = mutations.resize(item_id, update.duration) is not None
        return MutationResult(applied=applied, item=mutations.day.store.get(item_id))

    async def delete_item(self, user_id: str, day: date, item_id: str) -> bool:
        mutations = await self._mutations_for_item(user_id, day, item_id)
        return mutations.delete(item_id)

    async def replace_items(self, user_id: str, day: date, items: list[ScheduleItem]) -> ScheduleView:
        """
        Replace the whole schedule, then reconcile it with the day window.

        Raises:
            ValidationError: If two items share an id
        """
        ids = [item.id for item in items]
        if len(ids) != len(set(ids)):
            raise ValidationError("Schedule item ids must be unique")
        mutations = await self._mutations(user_id, day)
        mutations.replace_all(items)
        return self._view(mutations, day)

    async def apply_day_window(self, user_id: str, day: date, window: DayWindow) -> ScheduleView:
        """Change the day's window and pull existing items back inside it."""
        mutations = await self._mutations(user_id, day)
        mutations.reconcile_window(window)
        return self._view(mutations, day)

    async def clear_schedule(self, user_id: str, day: date) -> bool:
        """Drop the day's session; the next read starts from the saved window."""
        cleared = await self._schedule_repo.delete(user_id, day)
        if cleared:
            logger.info(f"Cleared schedule for {user_id} on {day.isoformat()}")
        return cleared

    def _result(
        self,
        mutations: ScheduleMutationService,
        item_id: str,
        item: Optional[ScheduleItem],
    ) -> MutationResult:
        if item is not None:
            return MutationResult(applied=True, item=item)
        return MutationResult(applied=False, item=mutations.day.store.get(item_id))

    # =========================================================================
    # Calendar gestures
    # =========================================================================

    async def drop_gesture(
        self,
        user_id: str,
        day: date,
        item_id: str,
        start: ClockValue,
        end: ClockValue,
    ) -> MutationResult:
        mutations = await self._mutations_for_item(user_id, day, item_id)
        item = CalendarAdapter(mutations).on_event_drop(item_id, start, end)
        return self._result(mutations, item_id, item)

    async def resize_gesture(
        self,
        user_id: str,
        day: date,
        item_id: str,
        start: ClockValue,
        end: ClockValue,
    ) -> MutationResult:
        mutations = await self._mutations_for_item(user_id, day, item_id)
        item = CalendarAdapter(mutations).on_event_resize(item_id, start, end)
        return self._result(mutations, item_id, item)

    async def select_gesture(
        self,
        user_id: str,
        day: date,
        start: ClockValue,
        end: ClockValue,
        activity_type: ActivityType = ActivityType.DEFAULT,
    ) -> MutationResult:
        mutations = await self._mutations(user_id, day)
        item = CalendarAdapter(mutations).on_select_slot(start, end, activity_type)
        return MutationResult(applied=item is not None, item=item)

    # =========================================================================
    # Generation
    # =========================================================================

    def _generator(self) -> GenerationService:
        if self._generation_service is None:
            raise ValidationError("Generation is not configured")
        return self._generation_service

    async def check_rate_limit(self, user_id: str, action_name: str) -> None:
        """
        Raises:
            RateLimitedError: If the limiter denies the request
        """
        if self._rate_limiter is None:
            return
        decision = await self._rate_limiter.check(user_id, action_name)
        if not decision.allowed:
            logger.info(f"Rate limited {action_name} for {user_id}")
            raise RateLimitedError(decision.reason or "Rate limit exceeded")

    async def generate_top_goals(self, user_id: str, request: GenerateTopGoalsRequest) -> TopGoalsResponse:
        generator = self._generator()
        await self.check_rate_limit(user_id, ACTION_TOP_GOALS)
        return await generator.generate_top_goals(request)

    async def categorize_activity(self, user_id: str, request: CategorizeActivityRequest) -> ActivityType:
        generator = self._generator()
        await self.check_rate_limit(user_id, ACTION_CATEGORIZE)
        return await generator.classify_activity(request.activity, request.top_goals, request.model)

    async def generate_and_apply_schedule(
        self,
        user_id: str,
        request: GenerateScheduleRequest,
    ) -> ScheduleGenerationResponse:
        """
        Generate a schedule and commit it to the day.

        Each call takes a new sequence number for the day. When a later call
        was issued while this one was in flight, the result is discarded and
        applied is False. A failed generation leaves the schedule untouched.

        Raises:
            ValidationError: If the request or its date is malformed
            RateLimitedError: If the limiter denies the request
            ExternalServiceError: If generation fails
        """
        generator = self._generator()
        request = build_request(GenerateScheduleRequest, request)
        try:
            day = parse_day(request.date)
        except ValueError as e:
            raise ValidationError(f"Invalid date: {request.date}") from e
        await self.check_rate_limit(user_id, ACTION_SCHEDULE)

        mutations = await self._mutations(user_id, day)
        mutations.day.generation_seq += 1
        sequence = mutations.day.generation_seq
        logger.info(f"Generating schedule for {user_id} on {day} (seq {sequence})")

        items = await generator.generate_schedule(request)

        if mutations.day.generation_seq != sequence:
            logger.info(
                f"Discarding stale schedule for {user_id} on {day} "
                f"(seq {sequence}, latest {mutations.day.generation_seq})"
            )
            return ScheduleGenerationResponse(applied=False, schedule=self._view(mutations, day))

        mutations.day.window = normalize_day_window(request.day_duration)
        mutations.replace_all(items)
        return ScheduleGenerationResponse(applied=True, schedule=self._view(mutations, day))
