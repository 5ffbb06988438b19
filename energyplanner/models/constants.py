"""Constants for energyplanner.

This module centralizes the magic numbers and default values used throughout the application.
"""

import os

from dotenv import load_dotenv

from energyplanner.models.task import TaskPriority, TaskStatus

load_dotenv()


# Task defaults
DEFAULT_PRIORITY = TaskPriority.MEDIUM
DEFAULT_STATUS = TaskStatus.TODO
DEFAULT_ESTIMATED_MINUTES = 30

# Planning defaults (overridable from the environment)
DEFAULT_ENERGY_VALUE = int(os.getenv("DEFAULT_ENERGY_VALUE", "3"))
DEFAULT_START_HOUR = int(os.getenv("DEFAULT_START_HOUR", "9"))

# Energy input bounds
MIN_ENERGY_VALUE = 1
MAX_ENERGY_VALUE = 5
MAX_SLEEP_HOURS = 24

# Scoring weights
ENERGY_MATCH_BONUS = 100
AFFORDABLE_COST_BONUS = 50
UNAFFORDABLE_COST_PENALTY = -30
PRIORITY_WEIGHT = 15
IN_PROGRESS_BONUS = 25
BLOCKED_PENALTY = -50
TERMINAL_PENALTY = -1000
