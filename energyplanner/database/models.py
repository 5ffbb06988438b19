"""SQLAlchemy database models for energyplanner."""

from datetime import datetime
from typing import Type, TypeVar
import uuid
from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, JSON

from energyplanner.database.database import Base
from energyplanner.models.task import TaskStatus, TaskType, TaskPriority, EnergyLevel, enum_to_value

T = TypeVar('T')


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        return default


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Insertion order; the planner breaks score ties by it
    sequence = Column(Integer, nullable=False, index=True)

    # Basic fields
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    assignee = Column(String, nullable=True)
    project = Column(String, nullable=True, index=True)

    # Classification fields
    energy_cost = Column(String, nullable=False, default=EnergyLevel.MEDIUM.value)
    type = Column(String, nullable=False, default=TaskType.FOCUS.value)
    priority = Column(String, nullable=False, default=TaskPriority.MEDIUM.value)
    status = Column(String, nullable=False, default=TaskStatus.TODO.value)
    completed = Column(Boolean, nullable=False, default=False)

    # Planning fields (deadline kept as the raw ISO string the client sent)
    deadline = Column(String, nullable=True)
    estimated_minutes = Column(Integer, nullable=True)

    # Lists (stored as JSON arrays)
    tags = Column(JSON, nullable=False, default=list)
    subtasks = Column(JSON, nullable=False, default=list)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from energyplanner.models.task import Task

        return Task(
            id=self.id,
            title=self.title,
            description=self.description,
            energy_cost=value_to_enum(self.energy_cost, EnergyLevel, EnergyLevel.MEDIUM),
            type=value_to_enum(self.type, TaskType, TaskType.FOCUS),
            priority=value_to_enum(self.priority, TaskPriority, TaskPriority.MEDIUM),
            status=value_to_enum(self.status, TaskStatus, TaskStatus.TODO),
            tags=self.tags or [],
            assignee=self.assignee,
            project=self.project,
            deadline=self.deadline,
            estimated_minutes=self.estimated_minutes,
            subtasks=self.subtasks or [],
            notes=self.notes,
            created_at=self.created_at,
            updated_at=self.updated_at,
            completed=bool(self.completed),
        )

    def apply_pydantic(self, task) -> None:
        """Copy every mutable field from a Pydantic task onto this row."""
        # Handle enum values (Pydantic with use_enum_values=True returns strings)
        self.title = task.title
        self.description = task.description
        self.notes = task.notes
        self.assignee = task.assignee
        self.project = task.project
        self.energy_cost = enum_to_value(task.energy_cost)
        self.type = enum_to_value(task.type)
        self.priority = enum_to_value(task.priority)
        self.status = enum_to_value(task.status)
        self.completed = task.completed
        self.deadline = task.deadline
        self.estimated_minutes = task.estimated_minutes
        self.tags = list(task.tags)
        self.subtasks = list(task.subtasks)
        self.updated_at = task.updated_at

    @classmethod
    def from_pydantic(cls, task, sequence: int):
        """Create database model from Pydantic model."""
        task_db = cls(id=task.id, sequence=sequence, created_at=task.created_at)
        task_db.apply_pydantic(task)
        return task_db


class EnergyEntryDB(Base):
    """Database model for EnergyEntry."""

    __tablename__ = "energy_entries"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    sequence = Column(Integer, nullable=False, index=True)
    value = Column(Integer, nullable=False)
    sleep_hours = Column(Float, nullable=True)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from energyplanner.models.energy import EnergyEntry

        return EnergyEntry(
            id=self.id,
            value=self.value,
            sleep_hours=self.sleep_hours,
            timestamp=self.timestamp,
        )

    @classmethod
    def from_pydantic(cls, entry, sequence: int):
        """Create database model from Pydantic model."""
        return cls(
            id=entry.id,
            sequence=sequence,
            value=entry.value,
            sleep_hours=entry.sleep_hours,
            timestamp=entry.timestamp,
        )
