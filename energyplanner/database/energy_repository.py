"""Repository layer for energy check-ins."""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc, func

from energyplanner.models.energy import EnergyEntry
from energyplanner.database.models import EnergyEntryDB

logger = logging.getLogger(__name__)


class EnergyRepository:
    """Repository for EnergyEntry database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, entry: EnergyEntry) -> EnergyEntry:
        """Record a new energy check-in."""
        try:
            current = self.db.query(func.max(EnergyEntryDB.sequence)).scalar()
            entry_db = EnergyEntryDB.from_pydantic(entry, sequence=(current or 0) + 1)
            self.db.add(entry_db)
            self.db.commit()
            self.db.refresh(entry_db)
            logger.debug(f"Recorded energy {entry.value} (sleep={entry.sleep_hours}) as {entry.id}")
            return entry_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to record energy entry {entry.id}: {type(e).__name__}: {str(e)}")
            raise

    def get_all(self) -> List[EnergyEntry]:
        """Get all check-ins, oldest first."""
        entries_db = self.db.query(EnergyEntryDB).order_by(EnergyEntryDB.sequence).all()
        return [entry_db.to_pydantic() for entry_db in entries_db]

    def get_latest(self) -> Optional[EnergyEntry]:
        """Get the most recently recorded check-in."""
        entry_db = self.db.query(EnergyEntryDB).order_by(desc(EnergyEntryDB.sequence)).first()
        return entry_db.to_pydantic() if entry_db else None
