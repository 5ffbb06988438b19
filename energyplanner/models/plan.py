"""Day plan data models for energyplanner.

A DayPlan mixes tasks and synthesized breaks in a single ordered list. Both
carry an ``item_type`` discriminant so the list can be serialized and parsed
back without guessing which entries are breaks.
"""

from typing import Annotated, List, Literal, Optional, Union
from enum import Enum
from pydantic import BaseModel, Field

from energyplanner.models.task import Task, TaskStatus


class BreakKind(str, Enum):
    """Break kind enumeration."""
    COFFEE = "coffee"
    LUNCH = "lunch"
    SHORT_BREAK = "short-break"
    LONG_BREAK = "long-break"


class BreakItem(BaseModel):
    """A rest break inserted between tasks."""

    item_type: Literal["break"] = Field("break", description="Plan item discriminant")
    id: str = Field(..., description="Stable break identifier")
    kind: BreakKind = Field(..., description="Break kind")
    title: str = Field(..., description="Display title")
    duration: int = Field(..., ge=0, description="Break length in minutes")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


PlanItem = Annotated[Union[Task, BreakItem], Field(discriminator="item_type")]


class PlanOptions(BaseModel):
    """Optional filters and knobs for a planning run."""

    filter_tags: Optional[List[str]] = Field(None, description="Keep tasks sharing at least one tag")
    filter_project: Optional[str] = Field(None, description="Keep tasks in this project")
    filter_status: Optional[List[TaskStatus]] = Field(None, description="Keep tasks with one of these statuses")
    exclude_blocked: bool = Field(False, description="Drop blocked tasks")
    sleep_hours: Optional[float] = Field(None, ge=0, le=24, description="Hours slept, adjusts energy")
    start_hour: Optional[int] = Field(None, ge=0, le=23, description="Hour of day the plan starts")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class DayPlan(BaseModel):
    """Ordered agenda for a single day."""

    date: str = Field(..., description="Plan date (ISO format)")
    ordered_tasks: List[PlanItem] = Field(default_factory=list, description="Tasks and breaks in order")
    explanation: str = Field(..., description="Why the plan is ordered this way")
