import random
from datetime import date, datetime, timedelta

from timebox.engine.free_slots import day_schedule, get_free_slots, tasks_on_day
from timebox.models.slots import FreeSlot
from timebox.models.task import Task

DAY = date(2025, 3, 10)


def make_task(task_id, start, end, day=DAY):
    base = datetime(day.year, day.month, day.day)
    return Task(
        task_id=task_id,
        title=f"Task {task_id}",
        start_time=base + timedelta(minutes=start),
        end_time=base + timedelta(minutes=end),
    )


def test_two_tasks_leave_three_gaps():
    tasks = [make_task("a", 540, 600), make_task("b", 660, 720)]
    assert get_free_slots(tasks, DAY) == [
        FreeSlot(480, 540),
        FreeSlot(600, 660),
        FreeSlot(720, 1320),
    ]


def test_empty_day_is_one_window_slot():
    assert get_free_slots([], DAY) == [FreeSlot(480, 1320)]


def test_unsorted_and_nested_tasks():
    tasks = [make_task("inner", 600, 660), make_task("outer", 540, 720)]
    assert get_free_slots(tasks, DAY) == [FreeSlot(480, 540), FreeSlot(720, 1320)]


def test_touching_tasks_leave_no_empty_slot():
    tasks = [make_task("a", 540, 600), make_task("b", 600, 660)]
    slots = get_free_slots(tasks, DAY)
    assert slots == [FreeSlot(480, 540), FreeSlot(660, 1320)]
    assert all(slot.duration > 0 for slot in slots)


def test_tasks_on_other_days_are_ignored():
    tasks = [make_task("a", 540, 600, day=DAY + timedelta(days=1))]
    assert get_free_slots(tasks, DAY) == [FreeSlot(480, 1320)]


def test_task_covering_whole_window():
    tasks = [make_task("a", 420, 1380)]
    assert get_free_slots(tasks, DAY) == []


def test_slots_are_clipped_to_window():
    tasks = [make_task("early", 360, 510), make_task("late", 1380, 1410)]
    assert get_free_slots(tasks, DAY) == [FreeSlot(510, 1320)]


def test_task_running_past_midnight():
    tasks = [make_task("night", 1260, 1500)]
    assert get_free_slots(tasks, DAY) == [FreeSlot(480, 1260)]


def test_custom_window():
    tasks = [make_task("a", 540, 600)]
    assert get_free_slots(tasks, DAY, window_start=540, window_end=720) == [FreeSlot(600, 720)]


def test_slots_and_tasks_cover_window_exactly():
    rng = random.Random(7)
    window = set(range(480, 1320))

    for _ in range(50):
        tasks = []
        for i in range(rng.randint(0, 8)):
            start = rng.randint(360, 1380)
            tasks.append(make_task(str(i), start, start + rng.randint(15, 180)))

        slots = get_free_slots(tasks, DAY)

        free = set()
        for slot in slots:
            minutes = set(range(slot.start, slot.end))
            assert slot.duration > 0
            assert not free & minutes
            free |= minutes

        busy = set()
        for task in tasks:
            start = task.start_time.hour * 60 + task.start_time.minute
            busy |= set(range(start, start + task.duration_minutes))

        assert not free & busy
        assert free | (busy & window) == window
        assert [slot.start for slot in slots] == sorted(slot.start for slot in slots)


def test_repeated_calls_are_identical():
    tasks = [make_task("a", 540, 600)]
    assert get_free_slots(tasks, DAY) == get_free_slots(tasks, DAY)


def test_tasks_on_day_sorted_by_start():
    tasks = [make_task("b", 700, 760), make_task("a", 540, 600)]
    assert [task.task_id for task in tasks_on_day(tasks, DAY)] == ["a", "b"]


def test_day_schedule_reports_busy_and_free():
    tasks = [make_task("a", 540, 600), make_task("b", 1290, 1380)]
    schedule = day_schedule(tasks, DAY)
    assert schedule.busy_slots == [FreeSlot(540, 600), FreeSlot(1290, 1320)]
    assert schedule.free_slots == [FreeSlot(480, 540), FreeSlot(600, 1290)]
    assert schedule.free_minutes == 60 + 690
    assert schedule.to_dict()['free_slots'][0] == {'start': '08:00', 'end': '09:00'}


def test_slot_label_and_clip():
    slot = FreeSlot(600, 720)
    assert slot.label == "10:00 – 12:00"
    assert slot.clip(60) == FreeSlot(600, 660)
    assert slot.clip(180) == slot
