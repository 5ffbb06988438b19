"""Energy normalization for energyplanner.

Turns a raw 1-5 energy check-in, optionally adjusted for last night's sleep,
into the coarse tier that drives task matching.
"""

import math
from dataclasses import dataclass
from typing import Optional

from energyplanner.models.task import EnergyLevel, enum_to_value
from energyplanner.models.constants import MIN_ENERGY_VALUE, MAX_ENERGY_VALUE


# Numeric levels used when comparing task cost with available energy
ENERGY_LEVEL_NUMBERS = {
    EnergyLevel.LOW.value: 1,
    EnergyLevel.MEDIUM.value: 3,
    EnergyLevel.HIGH.value: 5,
}


@dataclass(frozen=True)
class EnergyReading:
    """Normalized energy signal."""

    raw: int
    adjusted: float
    level: EnergyLevel


def adjust_energy_for_sleep(base_energy: float, sleep_hours: Optional[float] = None) -> float:
    """Adjust an energy value for hours slept.

    Optimal sleep (7-9 hours) gives a slight boost; short or excessive
    sleep reduces energy. The result is clamped to 1-5 and rounded to the
    nearest 0.5.

    Args:
        base_energy: Self-reported energy (1-5)
        sleep_hours: Hours slept, or None if not reported

    Returns:
        Adjusted energy value
    """
    if sleep_hours is None:
        return base_energy

    if sleep_hours < 6:
        adjusted = max(MIN_ENERGY_VALUE, base_energy - 2)
    elif sleep_hours < 7:
        adjusted = max(MIN_ENERGY_VALUE, base_energy - 1)
    elif sleep_hours <= 9:
        adjusted = min(MAX_ENERGY_VALUE, base_energy + 0.5)
    elif sleep_hours <= 11:
        adjusted = max(MIN_ENERGY_VALUE, base_energy - 0.5)
    else:
        adjusted = max(MIN_ENERGY_VALUE, base_energy - 1)

    # Halves round up
    return math.floor(adjusted * 2 + 0.5) / 2


def get_energy_level(value: float) -> EnergyLevel:
    """Bucket an energy value into a tier.

    1-2 is low, exactly 3 is medium, everything else (including the
    half-steps 2.5 and 3.5 produced by sleep adjustment) is high.
    """
    if value <= 2:
        return EnergyLevel.LOW
    if value == 3:
        return EnergyLevel.MEDIUM
    return EnergyLevel.HIGH


def energy_level_to_number(level) -> int:
    """Map an energy level (enum or string) to its numeric weight."""
    return ENERGY_LEVEL_NUMBERS.get(enum_to_value(level), ENERGY_LEVEL_NUMBERS[EnergyLevel.MEDIUM.value])


def normalize_energy(value: int, sleep_hours: Optional[float] = None) -> EnergyReading:
    """Normalize a check-in into an EnergyReading.

    Args:
        value: Self-reported energy (1-5)
        sleep_hours: Hours slept, or None

    Returns:
        EnergyReading with the adjusted scalar and its tier
    """
    adjusted = adjust_energy_for_sleep(value, sleep_hours)
    return EnergyReading(raw=value, adjusted=adjusted, level=get_energy_level(adjusted))
