"""Plan explanation text for energyplanner."""

from typing import Optional, Sequence

from energyplanner.models.task import EnergyLevel, enum_to_value
from energyplanner.models.plan import BreakItem, PlanItem
from energyplanner.engine.filtering import is_terminal
from energyplanner.engine.scoring import task_type_matches_energy


NO_TASKS_MESSAGE = "No tasks to plan today. Take a moment to rest."
ALL_COMPLETE_MESSAGE = "All tasks are complete. Well done."

ENERGY_DESCRIPTIONS = {
    EnergyLevel.LOW.value: "lower energy",
    EnergyLevel.MEDIUM.value: "moderate energy",
    EnergyLevel.HIGH.value: "higher energy",
}


def _format_hours(hours: float) -> str:
    return f"{hours:g}"


def _sleep_prefix(sleep_hours: float) -> str:
    hours = _format_hours(sleep_hours)
    if sleep_hours < 6:
        return f"With {hours} hours of sleep, we've adjusted your plan for lower energy. "
    if 7 <= sleep_hours <= 9:
        return f"With {hours} hours of restful sleep, "
    return f"With {hours} hours of sleep, "


def generate_explanation(
    ordered_items: Sequence[PlanItem],
    current_energy: EnergyLevel,
    sleep_hours: Optional[float] = None,
) -> str:
    """Describe why the plan is ordered the way it is.

    Args:
        ordered_items: Final plan items (tasks and breaks)
        current_energy: Energy tier the plan was built for
        sleep_hours: Hours slept, if reported

    Returns:
        Explanation text
    """
    tasks = [item for item in ordered_items if not isinstance(item, BreakItem)]
    if not tasks:
        return NO_TASKS_MESSAGE

    open_tasks = [task for task in tasks if not is_terminal(task)]
    if not open_tasks:
        return ALL_COMPLETE_MESSAGE

    explanation = ""
    if sleep_hours is not None:
        explanation += _sleep_prefix(sleep_hours)

    lead = "Based on" if not explanation or explanation.endswith(". ") else "based on"
    explanation += f"{lead} your {ENERGY_DESCRIPTIONS[enum_to_value(current_energy)]} right now, "

    first_task = open_tasks[0]
    if any(task_type_matches_energy(task.type, current_energy) for task in open_tasks):
        explanation += "we've prioritized tasks that align with your current energy level. "
        explanation += f'Starting with "{first_task.title}" which matches your energy.'
    else:
        explanation += "we've arranged lighter tasks first. "
        explanation += f'Starting with "{first_task.title}" which fits your current capacity.'

    break_count = sum(1 for item in ordered_items if isinstance(item, BreakItem))
    if break_count > 0:
        plural = "s" if break_count > 1 else ""
        explanation += (
            f" We've also scheduled {break_count} break{plural} throughout your day"
            " to help maintain your energy."
        )

    if any(task.deadline for task in open_tasks):
        explanation += " Tasks with deadlines have been considered while keeping your energy in mind."

    return explanation
