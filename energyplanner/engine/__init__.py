"""Day-planning engine for energyplanner."""

from energyplanner.engine.energy import (
    EnergyReading,
    adjust_energy_for_sleep,
    get_energy_level,
    energy_level_to_number,
    normalize_energy,
)
from energyplanner.engine.filtering import filter_tasks, split_completed, is_terminal
from energyplanner.engine.scoring import calculate_task_score, rank_tasks, task_type_matches_energy
from energyplanner.engine.breaks import BREAK_SEQUENCE, SchedulerState, schedule_step, insert_breaks
from energyplanner.engine.explanation import generate_explanation, NO_TASKS_MESSAGE, ALL_COMPLETE_MESSAGE
from energyplanner.engine.planner import plan_day

__all__ = [
    "EnergyReading",
    "adjust_energy_for_sleep",
    "get_energy_level",
    "energy_level_to_number",
    "normalize_energy",
    "filter_tasks",
    "split_completed",
    "is_terminal",
    "calculate_task_score",
    "rank_tasks",
    "task_type_matches_energy",
    "BREAK_SEQUENCE",
    "SchedulerState",
    "schedule_step",
    "insert_breaks",
    "generate_explanation",
    "NO_TASKS_MESSAGE",
    "ALL_COMPLETE_MESSAGE",
    "plan_day",
]
