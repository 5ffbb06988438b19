"""Break scheduling for energyplanner.

Walks the ranked task list on a simulated clock and inserts rest and meal
breaks. The walk is a fold: ``schedule_step`` takes the current
``SchedulerState`` and one task and returns the next state plus the items to
emit, so every transition can be tested on its own.

Breaks come from a fixed five-stage sequence (morning coffee, lunch,
afternoon coffee, two short breaks). At most one break rule fires per task;
rules are tried in the order listed in ``next_break``.
"""

from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

from energyplanner.models.task import Task
from energyplanner.models.plan import BreakItem, BreakKind, PlanItem
from energyplanner.models.constants import DEFAULT_ESTIMATED_MINUTES, DEFAULT_START_HOUR
from energyplanner.engine.filtering import is_terminal


# Fixed break sequence; ids are stable so the same break always has the same id
BREAK_SEQUENCE: Tuple[BreakItem, ...] = (
    BreakItem(id="break-coffee-morning", kind=BreakKind.COFFEE, title="Coffee Break", duration=15),
    BreakItem(id="break-lunch", kind=BreakKind.LUNCH, title="Lunch Break", duration=45),
    BreakItem(id="break-coffee-afternoon", kind=BreakKind.COFFEE, title="Afternoon Coffee", duration=15),
    BreakItem(id="break-short-1", kind=BreakKind.SHORT_BREAK, title="Short Break", duration=10),
    BreakItem(id="break-short-2", kind=BreakKind.SHORT_BREAK, title="Short Break", duration=10),
)

STAGE_MORNING_COFFEE = 0
STAGE_LUNCH = 1
STAGE_AFTERNOON_COFFEE = 2

MORNING_COFFEE_BEFORE_HOUR = 11
LUNCH_WINDOW = (12, 13)
AFTERNOON_COFFEE_FROM_HOUR = 14

COFFEE_AFTER_TASKS = 2
COFFEE_AFTER_MINUTES = 120
SHORT_BREAK_AFTER_TASKS = 3
SHORT_BREAK_AFTER_MINUTES = 90


@dataclass(frozen=True)
class SchedulerState:
    """Simulated clock and break counters threaded through the walk."""

    hour: int = DEFAULT_START_HOUR
    minute: int = 0
    tasks_since_break: int = 0
    minutes_since_reset: int = 0
    stage_index: int = 0


def advance_clock(state: SchedulerState, minutes: int) -> SchedulerState:
    """Move the simulated clock forward, rolling minutes into hours."""
    hour, minute = divmod(state.minute + minutes, 60)
    return replace(state, hour=state.hour + hour, minute=minute)


def _task_minutes(task: Task) -> int:
    return task.estimated_minutes or DEFAULT_ESTIMATED_MINUTES


def _take_break(
    state: SchedulerState,
    stage: int,
    reset_minutes: bool,
) -> Tuple[BreakItem, SchedulerState]:
    item = BREAK_SEQUENCE[stage].model_copy()
    state = advance_clock(state, item.duration)
    state = replace(
        state,
        tasks_since_break=0,
        minutes_since_reset=0 if reset_minutes else state.minutes_since_reset,
        stage_index=state.stage_index + 1,
    )
    return item, state


def next_break(state: SchedulerState) -> Optional[Tuple[BreakItem, SchedulerState]]:
    """Pick the break (if any) due right after a task.

    Rules, first match wins:

    1. Morning coffee: 2+ tasks or 120+ minutes since the last break, before 11:00.
    2. Lunch: the clock is in the 12:00 hour.
    3. Afternoon coffee: 2+ tasks since the last break, from 14:00.
    4. Short break: 3+ tasks or 90+ minutes, when the next break in the
       sequence is a short break.

    Returns:
        (break, state after the break), or None if no rule matches
    """
    stage = state.stage_index

    if stage == STAGE_MORNING_COFFEE:
        worked_enough = (
            state.tasks_since_break >= COFFEE_AFTER_TASKS
            or state.minutes_since_reset >= COFFEE_AFTER_MINUTES
        )
        if worked_enough and state.hour < MORNING_COFFEE_BEFORE_HOUR:
            return _take_break(state, stage, reset_minutes=False)

    if stage == STAGE_LUNCH and LUNCH_WINDOW[0] <= state.hour < LUNCH_WINDOW[1]:
        return _take_break(state, stage, reset_minutes=True)

    if (
        stage == STAGE_AFTERNOON_COFFEE
        and state.tasks_since_break >= COFFEE_AFTER_TASKS
        and state.hour >= AFTERNOON_COFFEE_FROM_HOUR
    ):
        return _take_break(state, stage, reset_minutes=False)

    needs_short_break = (
        state.tasks_since_break >= SHORT_BREAK_AFTER_TASKS
        or state.minutes_since_reset >= SHORT_BREAK_AFTER_MINUTES
    )
    if needs_short_break and stage + 1 < len(BREAK_SEQUENCE):
        if BREAK_SEQUENCE[stage + 1].kind == BreakKind.SHORT_BREAK.value:
            return _take_break(state, stage + 1, reset_minutes=True)

    return None


def schedule_step(state: SchedulerState, task: Task) -> Tuple[SchedulerState, List[PlanItem]]:
    """Place one task on the clock and emit it, followed by a break if one is due.

    Finished tasks pass through without touching the clock or counters.
    """
    if is_terminal(task):
        return state, [task]

    minutes = _task_minutes(task)
    state = advance_clock(state, minutes)
    state = replace(
        state,
        tasks_since_break=state.tasks_since_break + 1,
        minutes_since_reset=state.minutes_since_reset + minutes,
    )

    due = next_break(state)
    if due is None:
        return state, [task]
    item, state = due
    return state, [task, item]


def insert_breaks(tasks: Iterable[Task], start_hour: Optional[int] = None) -> List[PlanItem]:
    """Interleave breaks into a ranked task list.

    Args:
        tasks: Tasks in plan order (finished tasks may trail)
        start_hour: Hour of day the plan starts (defaults to 9)

    Returns:
        New list of tasks and breaks
    """
    state = SchedulerState(hour=DEFAULT_START_HOUR if start_hour is None else start_hour)
    result: List[PlanItem] = []
    for task in tasks:
        state, emitted = schedule_step(state, task)
        result.extend(emitted)
    return result
