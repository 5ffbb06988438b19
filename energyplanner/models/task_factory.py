"""Task creation factory for energyplanner.

This module centralizes task creation and update logic so that defaults and
the ``completed``/``status`` pairing stay consistent across the application.
"""

import uuid
from datetime import datetime
from typing import Optional, Dict, Any, List

from energyplanner.models.task import (
    Task,
    TaskStatus,
    TaskType,
    TaskPriority,
    EnergyLevel,
    enum_to_value,
)
from energyplanner.models.constants import DEFAULT_PRIORITY, DEFAULT_STATUS


def is_done_status(status: Any) -> bool:
    """Return True if the status value means the task is done."""
    return enum_to_value(status) == TaskStatus.DONE.value


def create_task_defaults() -> Dict[str, Any]:
    """Get default task values as a dictionary.

    Returns:
        Dictionary with default task field values using constants
    """
    return {
        "description": None,
        "priority": DEFAULT_PRIORITY,
        "status": DEFAULT_STATUS,
        "tags": [],
        "assignee": None,
        "project": None,
        "deadline": None,
        "estimated_minutes": None,
        "subtasks": [],
        "notes": None,
    }


def create_task_base(
    title: str,
    energy_cost: EnergyLevel,
    type: TaskType,
    description: Optional[str] = None,
    priority: Optional[TaskPriority] = None,
    status: Optional[TaskStatus] = None,
    tags: Optional[List[str]] = None,
    assignee: Optional[str] = None,
    project: Optional[str] = None,
    deadline: Optional[str] = None,
    estimated_minutes: Optional[int] = None,
    subtasks: Optional[List[str]] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Task:
    """Create a task with defaults, allowing overrides.

    Empty strings for optional text fields are stored as None, and
    ``completed`` is derived from the status.

    Args:
        title: Task title (required)
        energy_cost: How much energy the task takes (required)
        type: Kind of work (required)
        description: Longer description
        priority: Task priority (defaults to medium)
        status: Task status (defaults to todo)
        tags: Tags, duplicates dropped
        assignee: Who the task is assigned to
        project: Project label
        deadline: ISO date string
        estimated_minutes: Estimated duration in minutes
        subtasks: Subtask titles
        notes: Free-form notes
        now: Timestamp to use for created_at/updated_at (defaults to utcnow)

    Returns:
        Task object with defaults applied
    """
    now = now or datetime.utcnow()
    defaults = create_task_defaults()
    task_status = status if status is not None else defaults["status"]

    return Task(
        id=str(uuid.uuid4()),
        title=title,
        description=description or defaults["description"],
        energy_cost=energy_cost,
        type=type,
        priority=priority if priority is not None else defaults["priority"],
        status=task_status,
        tags=tags if tags is not None else defaults["tags"],
        assignee=assignee or defaults["assignee"],
        project=project or defaults["project"],
        deadline=deadline or defaults["deadline"],
        estimated_minutes=estimated_minutes or defaults["estimated_minutes"],
        subtasks=subtasks if subtasks is not None else defaults["subtasks"],
        notes=notes or defaults["notes"],
        created_at=now,
        updated_at=now,
        completed=is_done_status(task_status),
    )


def apply_task_updates(task: Task, updates: Dict[str, Any], now: Optional[datetime] = None) -> Task:
    """Return a copy of ``task`` with ``updates`` applied.

    ``updated_at`` is always refreshed. When the update carries a status,
    ``completed`` is synced to it; the immutable ``id`` and ``created_at``
    are never overwritten.
    """
    changes = {k: v for k, v in updates.items() if k not in ("id", "created_at", "item_type")}
    changes["updated_at"] = now or datetime.utcnow()

    if changes.get("status") is not None:
        changes["status"] = enum_to_value(changes["status"])
        changes["completed"] = is_done_status(changes["status"])

    # Re-validate so tag de-duplication and enum coercion apply to the update
    return Task(**{**task.model_dump(), **changes})


def mark_task_complete(task: Task, now: Optional[datetime] = None) -> Task:
    """Mark a task as done."""
    return apply_task_updates(task, {"status": TaskStatus.DONE}, now=now)
