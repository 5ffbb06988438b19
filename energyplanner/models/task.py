"""Task data model for energyplanner."""

from datetime import datetime
from typing import List, Literal, Optional, TypeVar, Union
from enum import Enum
from pydantic import BaseModel, Field, field_validator

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).

    Models use ``use_enum_values`` so validated fields hold plain strings while
    defaults keep their enum members; lookups keyed by value need both to match.
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


class EnergyLevel(str, Enum):
    """Energy level enumeration (used for both task cost and current tier)."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskType(str, Enum):
    """Kind of work a task demands."""
    FOCUS = "focus"
    ADMIN = "admin"
    CREATIVE = "creative"
    PHYSICAL = "physical"


class TaskPriority(str, Enum):
    """Task priority enumeration."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TaskStatus(str, Enum):
    """Task status enumeration."""
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    BLOCKED = "blocked"
    DONE = "done"


class Task(BaseModel):
    """Canonical Task model."""

    item_type: Literal["task"] = Field("task", description="Plan item discriminant")
    id: str = Field(..., description="Unique task identifier (UUID v4)")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Longer task description")
    energy_cost: EnergyLevel = Field(..., description="How much energy the task takes")
    type: TaskType = Field(..., description="Kind of work")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    status: TaskStatus = Field(TaskStatus.TODO, description="Task status")
    tags: List[str] = Field(default_factory=list, description="Tags (ordered, unique)")
    assignee: Optional[str] = Field(None, description="Who the task is assigned to")
    project: Optional[str] = Field(None, description="Project label")
    deadline: Optional[str] = Field(
        None,
        description="Deadline as an ISO date string (kept raw; unparseable values are ignored when planning)",
    )
    estimated_minutes: Optional[int] = Field(None, ge=0, description="Estimated duration in minutes")
    subtasks: List[str] = Field(default_factory=list, description="Subtask titles")
    notes: Optional[str] = Field(None, description="Free-form notes")
    created_at: datetime = Field(..., description="Task creation timestamp")
    updated_at: datetime = Field(..., description="Task last update timestamp")
    completed: bool = Field(False, description="Legacy flag, mirrors status == done")

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, v):
        # Deduplicate but preserve order
        seen = set()
        out: List[str] = []
        for tag in v:
            if tag not in seen:
                seen.add(tag)
                out.append(tag)
        return out

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
