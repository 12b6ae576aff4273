"""
Day schedule API endpoints.

Refused placements are not errors: they return 200 with applied=False and
leave the schedule unchanged.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, HTTPException, status

from timebox.api.deps import CurrentUser, Planner
from timebox.core.exceptions import NotFoundError, ValidationError
from timebox.models.schedule import (
    DayWindow,
    EventGesture,
    MutationResult,
    ScheduleItem,
    ScheduleItemCreate,
    ScheduleItemUpdate,
    ScheduleView,
    SlotSelection,
)
from timebox.utils.datetime_utils import parse_day

router = APIRouter()


def _day(value: str) -> date:
    try:
        return parse_day(value)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid date: {value}",
        ) from exc


def _not_found(exc: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/{day}", response_model=ScheduleView)
async def get_schedule(
    day: str,
    user: CurrentUser,
    planner: Planner,
):
    return await planner.get_schedule(user.id, _day(day))


@router.delete("/{day}", status_code=status.HTTP_204_NO_CONTENT)
async def clear_schedule(
    day: str,
    user: CurrentUser,
    planner: Planner,
):
    await planner.clear_schedule(user.id, _day(day))


@router.post("/{day}/items", response_model=MutationResult)
async def create_item(
    day: str,
    payload: ScheduleItemCreate,
    user: CurrentUser,
    planner: Planner,
):
    return await planner.create_item(user.id, _day(day), payload)


@router.patch("/{day}/items/{item_id}", response_model=MutationResult)
async def update_item(
    day: str,
    item_id: str,
    payload: ScheduleItemUpdate,
    user: CurrentUser,
    planner: Planner,
):
    try:
        return await planner.update_item(user.id, _day(day), item_id, payload)
    except NotFoundError as exc:
        raise _not_found(exc) from exc


@router.delete("/{day}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    day: str,
    item_id: str,
    user: CurrentUser,
    planner: Planner,
):
    try:
        await planner.delete_item(user.id, _day(day), item_id)
    except NotFoundError as exc:
        raise _not_found(exc) from exc


@router.put("/{day}/items", response_model=ScheduleView)
async def replace_items(
    day: str,
    payload: list[ScheduleItem],
    user: CurrentUser,
    planner: Planner,
):
    try:
        return await planner.replace_items(user.id, _day(day), payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


@router.put("/{day}/window", response_model=ScheduleView)
async def update_window(
    day: str,
    payload: DayWindow,
    user: CurrentUser,
    planner: Planner,
):
    return await planner.apply_day_window(user.id, _day(day), payload)


# ===========================================
# Calendar gestures
# ===========================================


@router.post("/{day}/gestures/drop", response_model=MutationResult)
async def drop_event(
    day: str,
    payload: EventGesture,
    user: CurrentUser,
    planner: Planner,
):
    try:
        return await planner.drop_gesture(
            user.id, _day(day), payload.item_id, payload.start, payload.end
        )
    except NotFoundError as exc:
        raise _not_found(exc) from exc


@router.post("/{day}/gestures/resize", response_model=MutationResult)
async def resize_event(
    day: str,
    payload: EventGesture,
    user: CurrentUser,
    planner: Planner,
):
    try:
        return await planner.resize_gesture(
            user.id, _day(day), payload.item_id, payload.start, payload.end
        )
    except NotFoundError as exc:
        raise _not_found(exc) from exc


@router.post("/{day}/gestures/select", response_model=MutationResult)
async def select_slot(
    day: str,
    payload: SlotSelection,
    user: CurrentUser,
    planner: Planner,
):
    return await planner.select_gesture(
        user.id, _day(day), payload.start, payload.end, payload.activity_type
    )
