"""Day planning entry point for energyplanner.

Runs the full pipeline: normalize energy, filter, rank, insert breaks,
explain. Pure and deterministic for a given ``plan_date``.
"""

import logging
from datetime import date
from typing import Iterable, Optional

from energyplanner.models.task import Task
from energyplanner.models.plan import DayPlan, PlanOptions
from energyplanner.engine.energy import normalize_energy
from energyplanner.engine.filtering import filter_tasks, split_completed
from energyplanner.engine.scoring import rank_tasks
from energyplanner.engine.breaks import insert_breaks
from energyplanner.engine.explanation import generate_explanation

logger = logging.getLogger(__name__)


def plan_day(
    tasks: Iterable[Task],
    current_energy_value: int,
    plan_date: Optional[date] = None,
    options: Optional[PlanOptions] = None,
) -> DayPlan:
    """Build an ordered day plan for the current energy level.

    Open tasks are ranked by score, finished tasks trail in their filtered
    order, and breaks are interleaved along a simulated clock.

    Args:
        tasks: Task collection (not modified)
        current_energy_value: Self-reported energy (1-5)
        plan_date: Day being planned, also the reference for deadline urgency
            (defaults to today)
        options: Filters, sleep hours and start hour

    Returns:
        A new DayPlan
    """
    options = options or PlanOptions()
    plan_date = plan_date or date.today()

    reading = normalize_energy(current_energy_value, options.sleep_hours)

    filtered = filter_tasks(tasks, options)
    incomplete, completed = split_completed(filtered)
    ordered = rank_tasks(incomplete, reading.level, today=plan_date) + completed

    items = insert_breaks(ordered, options.start_hour) if ordered else []
    explanation = generate_explanation(items, reading.level, options.sleep_hours)

    logger.debug(
        f"Planned {plan_date.isoformat()}: energy {reading.adjusted} ({reading.level.value}), "
        f"{len(incomplete)} open, {len(completed)} completed, {len(items) - len(ordered)} breaks"
    )

    return DayPlan(
        date=plan_date.isoformat(),
        ordered_tasks=items,
        explanation=explanation,
    )
