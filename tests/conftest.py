"""
Shared pytest fixtures.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from timebox.infrastructure.local.database import Base
from timebox.models.schedule import DayWindow, ScheduleItem
from timebox.services.schedule_mutation_service import ScheduleMutationService
from timebox.services.schedule_store import DaySchedule, ScheduleStore


@pytest.fixture
def test_user_id():
    return "test_user"


@pytest.fixture
async def session_factory():
    """In-memory SQLite session factory with tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


def make_item(
    item_id: str,
    start_time: float,
    duration: float,
    activity: str = "",
    activity_type: str = "default",
) -> ScheduleItem:
    """Helper to create a schedule item."""
    return ScheduleItem(
        id=item_id,
        start_time=start_time,
        duration=duration,
        activity=activity,
        activity_type=activity_type,
    )


@pytest.fixture
def day_schedule():
    """Default window 05:00-21:00 with one item from 9 to 11."""
    return DaySchedule(
        store=ScheduleStore([make_item("focus", 9, 2, "Deep work", "top-goal")]),
        window=DayWindow(start="05:00", end="21:00"),
    )


@pytest.fixture
def mutations(day_schedule):
    counter = iter(range(1, 1000))
    return ScheduleMutationService(day_schedule, id_factory=lambda: f"new-{next(counter)}")
