"""Tests for break scheduling (state transitions and full walks)."""

from energyplanner.engine.breaks import (
    BREAK_SEQUENCE,
    SchedulerState,
    advance_clock,
    next_break,
    schedule_step,
    insert_breaks,
)
from energyplanner.models.plan import BreakItem
from energyplanner.models.task import TaskStatus, TaskType


def _ids(items):
    return [item.id if isinstance(item, BreakItem) else item.title for item in items]


class TestAdvanceClock:
    """Test advance_clock() minute/hour normalization."""

    def test_rolls_minutes_into_hours(self):
        state = advance_clock(SchedulerState(hour=9, minute=50), 25)

        assert (state.hour, state.minute) == (10, 15)

    def test_rolls_multiple_hours(self):
        state = advance_clock(SchedulerState(hour=9, minute=50), 130)

        assert (state.hour, state.minute) == (12, 0)

    def test_does_not_touch_counters(self):
        before = SchedulerState(hour=9, tasks_since_break=2, minutes_since_reset=40, stage_index=1)
        after = advance_clock(before, 10)

        assert after.tasks_since_break == 2
        assert after.minutes_since_reset == 40
        assert after.stage_index == 1


class TestNextBreak:
    """Test next_break() rule selection for individual states."""

    def test_morning_coffee_after_two_tasks(self):
        state = SchedulerState(hour=10, minute=0, tasks_since_break=2, minutes_since_reset=60, stage_index=0)

        item, after = next_break(state)

        assert item.id == "break-coffee-morning"
        assert (after.hour, after.minute) == (10, 15)
        assert after.tasks_since_break == 0
        assert after.minutes_since_reset == 60
        assert after.stage_index == 1

    def test_morning_coffee_after_two_hours_of_work(self):
        state = SchedulerState(hour=10, tasks_since_break=1, minutes_since_reset=120, stage_index=0)

        item, _ = next_break(state)

        assert item.id == "break-coffee-morning"

    def test_no_morning_coffee_from_eleven(self):
        state = SchedulerState(hour=11, tasks_since_break=2, minutes_since_reset=60, stage_index=0)

        assert next_break(state) is None

    def test_short_break_not_taken_when_next_stage_is_lunch(self):
        state = SchedulerState(hour=11, tasks_since_break=4, minutes_since_reset=150, stage_index=0)

        assert next_break(state) is None

    def test_lunch_in_the_noon_hour(self):
        state = SchedulerState(hour=12, minute=10, tasks_since_break=1, minutes_since_reset=50, stage_index=1)

        item, after = next_break(state)

        assert item.id == "break-lunch"
        assert (after.hour, after.minute) == (12, 55)
        assert after.tasks_since_break == 0
        assert after.minutes_since_reset == 0
        assert after.stage_index == 2

    def test_no_lunch_outside_noon_hour(self):
        assert next_break(SchedulerState(hour=11, minute=59, tasks_since_break=1, stage_index=1)) is None
        assert next_break(SchedulerState(hour=13, minute=0, tasks_since_break=1, stage_index=1)) is None

    def test_afternoon_coffee(self):
        state = SchedulerState(hour=14, minute=5, tasks_since_break=2, minutes_since_reset=70, stage_index=2)

        item, after = next_break(state)

        assert item.id == "break-coffee-afternoon"
        assert after.tasks_since_break == 0
        assert after.minutes_since_reset == 70
        assert after.stage_index == 3

    def test_short_break_before_afternoon_coffee_hour(self):
        state = SchedulerState(hour=13, minute=30, tasks_since_break=3, minutes_since_reset=60, stage_index=2)

        item, after = next_break(state)

        assert item.id == "break-short-1"
        assert after.stage_index == 3
        assert after.minutes_since_reset == 0

    def test_second_short_break(self):
        state = SchedulerState(hour=15, tasks_since_break=1, minutes_since_reset=95, stage_index=3)

        item, after = next_break(state)

        assert item.id == "break-short-2"
        assert after.stage_index == 4

    def test_sequence_exhausted(self):
        state = SchedulerState(hour=16, tasks_since_break=5, minutes_since_reset=200, stage_index=4)

        assert next_break(state) is None

    def test_only_first_matching_rule_fires(self):
        """Lunch and the short-break threshold both match; only lunch is taken."""
        state = SchedulerState(hour=12, tasks_since_break=3, minutes_since_reset=100, stage_index=1)

        item, after = next_break(state)

        assert item.id == "break-lunch"
        assert after.stage_index == 2


class TestScheduleStep:
    """Test schedule_step() single-task transitions."""

    def test_advances_clock_and_counters(self, make_task):
        task = make_task(estimated_minutes=40)

        state, emitted = schedule_step(SchedulerState(hour=9), task)

        assert emitted == [task]
        assert (state.hour, state.minute) == (9, 40)
        assert state.tasks_since_break == 1
        assert state.minutes_since_reset == 40

    def test_default_duration_is_thirty_minutes(self, make_task):
        state, _ = schedule_step(SchedulerState(hour=9), make_task(estimated_minutes=None))

        assert (state.hour, state.minute) == (9, 30)

    def test_emits_break_after_task(self, make_task):
        task = make_task(estimated_minutes=20)
        state = SchedulerState(hour=9, minute=30, tasks_since_break=1, minutes_since_reset=30)

        state, emitted = schedule_step(state, task)

        assert emitted[0] is task
        assert emitted[1].id == "break-coffee-morning"
        assert state.stage_index == 1

    def test_terminal_task_passes_through(self, make_task):
        done = make_task(status=TaskStatus.DONE, completed=True, estimated_minutes=300)
        before = SchedulerState(hour=10, minute=5, tasks_since_break=1, minutes_since_reset=35)

        after, emitted = schedule_step(before, done)

        assert after == before
        assert emitted == [done]


class TestInsertBreaks:
    """Test insert_breaks() over whole task sequences."""

    def test_five_forty_minute_focus_tasks(self, make_task):
        tasks = [make_task(title=f"T{i}", type=TaskType.FOCUS, estimated_minutes=40) for i in range(1, 6)]

        items = insert_breaks(tasks, start_hour=9)

        assert _ids(items) == ["T1", "T2", "break-coffee-morning", "T3", "T4", "T5", "break-lunch"]

    def test_full_day_break_sequence(self, make_task):
        """After the afternoon coffee the next short break is the last one in the sequence."""
        tasks = [make_task(title=f"T{i}", estimated_minutes=45) for i in range(1, 11)]

        items = insert_breaks(tasks, start_hour=9)

        break_ids = [item.id for item in items if isinstance(item, BreakItem)]
        assert break_ids == ["break-coffee-morning", "break-lunch", "break-coffee-afternoon", "break-short-2"]
        assert [item.title for item in items if not isinstance(item, BreakItem)] == [t.title for t in tasks]

    def test_late_start_skips_morning_coffee_and_gets_stuck(self, make_task):
        """Starting after 11 means the morning coffee stage never completes."""
        tasks = [make_task(estimated_minutes=30) for _ in range(6)]

        items = insert_breaks(tasks, start_hour=11)

        assert not any(isinstance(item, BreakItem) for item in items)

    def test_completed_tasks_trail_without_breaks(self, make_task):
        open_tasks = [make_task(title=f"Open {i}", estimated_minutes=45) for i in range(2)]
        done = [make_task(title=f"Done {i}", status=TaskStatus.DONE, completed=True) for i in range(3)]

        items = insert_breaks(open_tasks + done, start_hour=9)

        assert _ids(items) == ["Open 0", "Open 1", "break-coffee-morning", "Done 0", "Done 1", "Done 2"]

    def test_default_start_hour_is_nine(self, make_task):
        tasks = [make_task(title=f"T{i}", type=TaskType.FOCUS, estimated_minutes=40) for i in range(1, 6)]

        assert _ids(insert_breaks(tasks)) == _ids(insert_breaks(tasks, start_hour=9))

    def test_breaks_are_fresh_copies(self, make_task):
        tasks = [make_task(estimated_minutes=45) for _ in range(2)]

        first = [i for i in insert_breaks(tasks) if isinstance(i, BreakItem)][0]
        second = [i for i in insert_breaks(tasks) if isinstance(i, BreakItem)][0]

        assert first == second
        assert first is not second
        assert first is not BREAK_SEQUENCE[0]
