"""
In-memory container for one day's schedule items.

The store performs no validation. Placement rules live in the placement
validator and are applied by the mutation service.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from timebox.models.schedule import DayWindow, ScheduleItem


class ScheduleStore:
    """Ordered collection of schedule items for a single day."""

    def __init__(self, items: Optional[Iterable[ScheduleItem]] = None):
        self._items: list[ScheduleItem] = list(items or [])

    def __iter__(self) -> Iterator[ScheduleItem]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return any(item.id == item_id for item in self._items)

    @property
    def items(self) -> list[ScheduleItem]:
        return list(self._items)

    def get(self, item_id: str) -> Optional[ScheduleItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def item_at(self, hour: float) -> Optional[ScheduleItem]:
        """Item starting exactly at hour."""
        return next((item for item in self._items if item.start_time == hour), None)

    def item_covering(self, hour: float) -> Optional[ScheduleItem]:
        """Item whose interval strictly contains hour (start < hour < end)."""
        return next(
            (item for item in self._items if item.start_time < hour < item.end_time),
            None,
        )

    def append(self, item: ScheduleItem) -> None:
        self._items.append(item)

    def replace(self, item: ScheduleItem) -> None:
        """Swap in a new version of an existing item, keeping its position."""
        self._items = [item if existing.id == item.id else existing for existing in self._items]

    def remove(self, item_id: str) -> None:
        self._items = [item for item in self._items if item.id != item_id]

    def replace_all(self, items: Iterable[ScheduleItem]) -> None:
        self._items = list(items)


@dataclass
class DaySchedule:
    """Schedule state owned by one planning session for one calendar day."""

    store: ScheduleStore = field(default_factory=ScheduleStore)
    window: DayWindow = field(default_factory=DayWindow)
    generation_seq: int = 0
