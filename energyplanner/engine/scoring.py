"""Task scoring and ranking for energyplanner.

Each open task gets an additive integer score from how well it fits the
current energy tier, its priority, status and deadline. Tasks are then
ordered by score, highest first. Energy fit carries the largest weights.
"""

import math
from datetime import date, datetime, time
from typing import Iterable, List, Optional

from energyplanner.models.task import Task, TaskType, TaskPriority, TaskStatus, EnergyLevel, enum_to_value
from energyplanner.models.constants import (
    ENERGY_MATCH_BONUS,
    AFFORDABLE_COST_BONUS,
    UNAFFORDABLE_COST_PENALTY,
    PRIORITY_WEIGHT,
    IN_PROGRESS_BONUS,
    BLOCKED_PENALTY,
    TERMINAL_PENALTY,
)
from energyplanner.engine.energy import energy_level_to_number
from energyplanner.engine.filtering import is_terminal


# Task types that suit each energy tier
ENERGY_TYPE_MATCHES = {
    EnergyLevel.HIGH.value: (TaskType.FOCUS.value, TaskType.CREATIVE.value, TaskType.PHYSICAL.value),
    EnergyLevel.MEDIUM.value: (TaskType.ADMIN.value, TaskType.CREATIVE.value),
    EnergyLevel.LOW.value: (TaskType.ADMIN.value,),
}

PRIORITY_NUMBERS = {
    TaskPriority.CRITICAL.value: 4,
    TaskPriority.HIGH.value: 3,
    TaskPriority.MEDIUM.value: 2,
    TaskPriority.LOW.value: 1,
}

SECONDS_PER_DAY = 24 * 60 * 60


def task_type_matches_energy(task_type, energy: EnergyLevel) -> bool:
    """Check if a task type suits the given energy tier."""
    return enum_to_value(task_type) in ENERGY_TYPE_MATCHES.get(enum_to_value(energy), ())


def priority_to_number(priority) -> int:
    """Map a priority to 1-4 (unknown values count as medium)."""
    return PRIORITY_NUMBERS.get(enum_to_value(priority), 2)


def parse_deadline(value) -> Optional[datetime]:
    """Parse a deadline into a naive datetime.

    Accepts ISO date or datetime strings (a trailing ``Z`` is allowed) as well
    as date/datetime objects. Time zones are dropped.

    Returns:
        Parsed deadline, or None if the value is empty or unparseable
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time.min)

    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).replace(tzinfo=None)
    except ValueError:
        return None


def days_until_deadline(deadline, today: date) -> Optional[int]:
    """Whole calendar days from the start of ``today`` until the deadline.

    Partial days round up, so a deadline later today counts as 1 day away
    and one at midnight today counts as 0.

    Returns:
        Day count (negative when overdue), or None if the deadline is unusable
    """
    deadline_dt = parse_deadline(deadline)
    if deadline_dt is None:
        return None
    delta = deadline_dt - datetime.combine(today, time.min)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def deadline_urgency_score(deadline, today: date) -> int:
    """Score boost for an approaching deadline."""
    days = days_until_deadline(deadline, today)
    if days is None:
        return 0
    if days <= 0:
        return 40  # Due today or overdue
    if days == 1:
        return 20
    if days <= 3:
        return 10
    return 0


def calculate_task_score(
    task: Task,
    current_energy: EnergyLevel,
    has_deadline: bool,
    today: Optional[date] = None,
) -> int:
    """Calculate a task's desirability score (higher = earlier in the day).

    Args:
        task: Task to score
        current_energy: Current energy tier
        has_deadline: Whether any task being ranked has a deadline
        today: Reference date for deadline urgency (defaults to today)

    Returns:
        Integer score
    """
    score = 0

    if task_type_matches_energy(task.type, current_energy):
        score += ENERGY_MATCH_BONUS

    if energy_level_to_number(task.energy_cost) <= energy_level_to_number(current_energy):
        score += AFFORDABLE_COST_BONUS
    else:
        score += UNAFFORDABLE_COST_PENALTY

    score += priority_to_number(task.priority) * PRIORITY_WEIGHT

    status = enum_to_value(task.status)
    if status == TaskStatus.IN_PROGRESS.value:
        score += IN_PROGRESS_BONUS
    elif status == TaskStatus.BLOCKED.value:
        score += BLOCKED_PENALTY

    if has_deadline and task.deadline:
        score += deadline_urgency_score(task.deadline, today or date.today())

    # Finished tasks are normally split off before ranking
    if is_terminal(task):
        score += TERMINAL_PENALTY

    return score


def rank_tasks(tasks: Iterable[Task], current_energy: EnergyLevel, today: Optional[date] = None) -> List[Task]:
    """Rank tasks by score, highest first.

    The sort is stable: tasks with equal scores keep their input order.
    This function is deterministic - same inputs always produce same outputs.

    Args:
        tasks: Tasks to rank
        current_energy: Current energy tier
        today: Reference date for deadline urgency

    Returns:
        New list of tasks sorted by score (highest first)
    """
    tasks = list(tasks)
    today = today or date.today()
    has_deadline = any(task.deadline for task in tasks)

    scored = [(calculate_task_score(task, current_energy, has_deadline, today), task) for task in tasks]
    scored.sort(key=lambda x: -x[0])

    return [task for _, task in scored]
