"""
Unit tests for ScheduleMutationService.
"""

import pytest

from timebox.core.exceptions import ValidationError
from timebox.models.enums import ActivityType
from timebox.models.schedule import DayWindow, ScheduleItem
from timebox.services.placement_validator import has_overlaps
from timebox.services.schedule_mutation_service import ScheduleMutationService
from timebox.services.schedule_store import DaySchedule, ScheduleStore


def _service(items=None, window=None) -> ScheduleMutationService:
    day = DaySchedule(
        store=ScheduleStore(items or []),
        window=window or DayWindow(start="05:00", end="21:00"),
    )
    return ScheduleMutationService(day)


# =========================================================================
# Placement scenarios
# =========================================================================


def test_create_rejected_on_overlap(mutations):
    assert mutations.create(10, 1) is None
    assert len(mutations.items) == 1


def test_create_accepted_when_touching(mutations):
    item = mutations.create(11, 1)

    assert item is not None
    assert item.id == "new-1"
    assert item.start_time == 11
    assert item.activity == ""
    assert item.activity_type == ActivityType.DEFAULT
    assert len(mutations.items) == 2


def test_create_rejected_before_window(mutations):
    assert mutations.create(4, 1) is None


def test_move_rejected_past_window_end(mutations):
    assert mutations.move("focus", 20.5) is None
    assert mutations.day.store.get("focus").start_time == 9


def test_move_accepted(mutations):
    item = mutations.move("focus", 18)

    assert item.start_time == 18
    assert item.end_time == 20
    assert item.duration == 2
    assert item.activity == "Deep work"


def test_move_may_overlap_its_own_old_position(mutations):
    item = mutations.move("focus", 10)

    assert item is not None
    assert item.start_time == 10


def test_create_last_hour_before_midnight():
    service = _service(window=DayWindow(start="05:00", end="00:00"))

    item = service.create(23, 1)

    assert item is not None
    assert item.end_time == 24


def test_create_generates_unique_ids():
    ids = iter(["dup", "dup", "fresh"])
    day = DaySchedule(store=ScheduleStore([ScheduleItem(id="dup", start_time=6, duration=1)]))
    service = ScheduleMutationService(day, id_factory=lambda: next(ids))

    item = service.create(12, 1)

    assert item.id == "fresh"


def test_resize_keeps_start(mutations):
    item = mutations.resize("focus", 3)

    assert item.start_time == 9
    assert item.duration == 3


def test_resize_rejected_below_minimum(mutations):
    assert mutations.resize("focus", 0.25) is None
    assert mutations.resize("focus", 0) is None
    assert mutations.day.store.get("focus").duration == 2


def test_resize_rejected_into_neighbor():
    service = _service(
        [
            ScheduleItem(id="a", start_time=9, duration=1),
            ScheduleItem(id="b", start_time=10, duration=1),
        ]
    )

    assert service.resize("a", 1.5) is None
    assert service.resize("a", 1) is not None


def test_reschedule_sets_start_and_duration(mutations):
    item = mutations.reschedule("focus", 6, 1.5)

    assert item.start_time == 6
    assert item.duration == 1.5


def test_operations_on_missing_item_return_none(mutations):
    assert mutations.move("missing", 12) is None
    assert mutations.resize("missing", 1) is None
    assert mutations.relabel("missing", "x") is None
    assert mutations.recategorize("missing", "leisure") is None
    assert mutations.delete("missing") is False


def test_accepted_edits_never_overlap(mutations):
    operations = [
        lambda: mutations.create(10, 1),
        lambda: mutations.create(11, 2),
        lambda: mutations.create(12, 1),
        lambda: mutations.move("focus", 11.5),
        lambda: mutations.resize("new-1", 4),
        lambda: mutations.create(5, 4),
        lambda: mutations.move("new-2", 13),
        lambda: mutations.resize("focus", 0.5),
        lambda: mutations.create(19, 2),
        lambda: mutations.create(20.5, 1),
    ]
    for operation in operations:
        operation()
        assert not has_overlaps(mutations.items)
        for item in mutations.items:
            assert item.start_time >= 5
            assert item.end_time <= 21


# =========================================================================
# Label, category, delete
# =========================================================================


def test_relabel(mutations):
    item = mutations.relabel("focus", "Write report")

    assert item.activity == "Write report"
    assert item.start_time == 9


def test_recategorize(mutations):
    item = mutations.recategorize("focus", "physical")

    assert item.activity_type == ActivityType.PHYSICAL


def test_recategorize_rejects_unknown_type(mutations):
    with pytest.raises(ValidationError):
        mutations.recategorize("focus", "chores")


def test_delete(mutations):
    assert mutations.delete("focus") is True
    assert mutations.items == []


# =========================================================================
# Window reconciliation
# =========================================================================


def test_reconcile_shrunk_window():
    service = _service([ScheduleItem(id="early", start_time=6, duration=2)])

    adjusted = service.reconcile_window(DayWindow(start="08:00", end="18:00"))

    item = service.day.store.get("early")
    assert item.start_time == 8
    assert item.duration == 2
    assert [a.id for a in adjusted] == ["early"]
    assert service.window == DayWindow(start="08:00", end="18:00")


def test_reconcile_clamps_duration_at_window_end():
    service = _service([ScheduleItem(id="late", start_time=16, duration=4)])

    service.reconcile_window(DayWindow(start="08:00", end="18:00"))

    item = service.day.store.get("late")
    assert item.start_time == 16
    assert item.duration == 2


def test_reconcile_pulls_item_past_window_end_back_inside():
    service = _service([ScheduleItem(id="late", start_time=19, duration=2)])

    service.reconcile_window(DayWindow(start="08:00", end="18:00"))

    item = service.day.store.get("late")
    assert (item.start_time, item.duration) == (17.5, 0.5)
    assert item.end_time <= 18


def test_reconcile_item_starting_at_window_end():
    service = _service([ScheduleItem(id="edge", start_time=18, duration=1)])

    service.reconcile_window(DayWindow(start="08:00", end="18:00"))

    item = service.day.store.get("edge")
    assert (item.start_time, item.duration) == (17.5, 0.5)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_geometry_is_a_silent_noop(mutations, value):
    assert mutations.create(value, 1) is None
    assert mutations.create(9, value) is None
    assert mutations.move("focus", value) is None
    assert mutations.resize("focus", value) is None

    focus = mutations.day.store.get("focus")
    assert (focus.start_time, focus.duration) == (9, 2)
    assert len(mutations.items) == 1


def test_reconcile_is_idempotent():
    service = _service(
        [
            ScheduleItem(id="a", start_time=6, duration=2),
            ScheduleItem(id="b", start_time=12, duration=1),
            ScheduleItem(id="c", start_time=17, duration=3),
        ]
    )
    window = DayWindow(start="08:00", end="18:00")

    service.reconcile_window(window)
    once = service.items
    adjusted = service.reconcile_window(window)

    assert service.items == once
    assert adjusted == []


def test_reconcile_untouched_items_unchanged(mutations):
    adjusted = mutations.reconcile_window(DayWindow(start="06:00", end="20:00"))

    assert adjusted == []
    assert mutations.day.store.get("focus").start_time == 9


def test_reconcile_normalizes_short_window(mutations):
    mutations.reconcile_window(DayWindow(start="10:00", end="10:30"))

    assert mutations.window == DayWindow(start="10:00", end="11:00")


def test_replace_all_reconciles_with_window(mutations):
    items = mutations.replace_all(
        [
            ScheduleItem(id="g1", start_time=4, duration=2),
            ScheduleItem(id="g2", start_time=20, duration=2),
        ]
    )

    assert [(i.id, i.start_time, i.duration) for i in items] == [
        ("g1", 5.0, 2.0),
        ("g2", 20.0, 1.0),
    ]
