"""
Unit tests for user settings repositories.
"""

import pytest

from timebox.infrastructure.local.settings_repository import (
    InMemoryUserSettingsRepository,
    SqliteUserSettingsRepository,
)


@pytest.fixture(params=["sqlite", "memory"])
def repo(request, session_factory):
    if request.param == "sqlite":
        return SqliteUserSettingsRepository(session_factory=session_factory)
    return InMemoryUserSettingsRepository()


@pytest.mark.asyncio
async def test_set_and_get(repo, test_user_id):
    await repo.set(test_user_id, "name", "Ada")

    assert await repo.get(test_user_id, "name") == "Ada"
    assert await repo.get(test_user_id, "profile") is None


@pytest.mark.asyncio
async def test_set_overwrites(repo, test_user_id):
    await repo.set(test_user_id, "northStar", "Ship it")
    await repo.set(test_user_id, "northStar", "Ship it well")

    assert await repo.get(test_user_id, "northStar") == "Ship it well"
    assert await repo.get_all(test_user_id) == {"northStar": "Ship it well"}


@pytest.mark.asyncio
async def test_values_are_scoped_per_user(repo, test_user_id):
    await repo.set(test_user_id, "name", "Ada")
    await repo.set("other_user", "name", "Grace")

    assert await repo.get_all(test_user_id) == {"name": "Ada"}
    assert await repo.get_all("other_user") == {"name": "Grace"}


@pytest.mark.asyncio
async def test_remove(repo, test_user_id):
    await repo.set(test_user_id, "hobbies", "chess")

    assert await repo.remove(test_user_id, "hobbies") is True
    assert await repo.remove(test_user_id, "hobbies") is False
    assert await repo.get(test_user_id, "hobbies") is None
