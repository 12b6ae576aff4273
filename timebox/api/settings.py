"""
User settings API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from timebox.api.deps import CurrentUser, SettingsSvc
from timebox.core.exceptions import ValidationError
from timebox.models.settings import UserSettings, UserSettingsUpdate

router = APIRouter()


@router.get("", response_model=UserSettings)
async def get_user_settings(
    user: CurrentUser,
    service: SettingsSvc,
):
    return await service.load(user.id)


@router.put("", response_model=UserSettings)
async def update_user_settings(
    payload: UserSettingsUpdate,
    user: CurrentUser,
    service: SettingsSvc,
):
    return await service.save(user.id, payload)


@router.delete("/{key}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_setting(
    key: str,
    user: CurrentUser,
    service: SettingsSvc,
):
    try:
        removed = await service.remove(user.id, key)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Setting {key} not found",
        )
