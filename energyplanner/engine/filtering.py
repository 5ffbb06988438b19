"""Task filtering for energyplanner."""

from typing import Iterable, List, Optional, Tuple

from energyplanner.models.task import Task, TaskStatus, enum_to_value
from energyplanner.models.plan import PlanOptions


def is_terminal(task: Task) -> bool:
    """Check if a task is finished (completed flag or done status)."""
    return task.completed or enum_to_value(task.status) == TaskStatus.DONE.value


def filter_tasks(tasks: Iterable[Task], options: Optional[PlanOptions] = None) -> List[Task]:
    """Apply the plan filters to a task collection.

    A task is kept only if it passes every filter that is set. Empty tag or
    status lists count as "no filter". Returns a new list; tasks are not
    modified.

    Args:
        tasks: Tasks to filter
        options: Planning options carrying the filters

    Returns:
        Tasks that pass all filters, in input order
    """
    options = options or PlanOptions()
    filter_tags = set(options.filter_tags or [])
    filter_status = {enum_to_value(s) for s in options.filter_status or []}

    kept = []
    for task in tasks:
        status = enum_to_value(task.status)
        if filter_tags and not filter_tags.intersection(task.tags):
            continue
        if options.filter_project and task.project != options.filter_project:
            continue
        if filter_status and status not in filter_status:
            continue
        if options.exclude_blocked and status == TaskStatus.BLOCKED.value:
            continue
        kept.append(task)
    return kept


def split_completed(tasks: Iterable[Task]) -> Tuple[List[Task], List[Task]]:
    """Split tasks into (incomplete, completed), preserving order in both."""
    incomplete: List[Task] = []
    completed: List[Task] = []
    for task in tasks:
        (completed if is_terminal(task) else incomplete).append(task)
    return incomplete, completed
