"""EnergyEntry data model for energyplanner."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class EnergyEntry(BaseModel):
    """A single energy check-in."""

    id: str = Field(..., description="Unique energy entry identifier")
    value: int = Field(..., ge=1, le=5, description="Self-reported energy (1-5)")
    sleep_hours: Optional[float] = Field(None, ge=0, le=24, description="Hours slept the previous night")
    timestamp: datetime = Field(..., description="When the check-in was recorded")
