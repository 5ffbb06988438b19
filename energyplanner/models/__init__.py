"""Data models for energyplanner."""

from energyplanner.models.task import Task, TaskStatus, TaskType, TaskPriority, EnergyLevel
from energyplanner.models.energy import EnergyEntry
from energyplanner.models.plan import BreakItem, BreakKind, PlanItem, PlanOptions, DayPlan

__all__ = [
    "Task",
    "TaskStatus",
    "TaskType",
    "TaskPriority",
    "EnergyLevel",
    "EnergyEntry",
    "BreakItem",
    "BreakKind",
    "PlanItem",
    "PlanOptions",
    "DayPlan",
]
