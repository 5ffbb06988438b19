"""Pytest fixtures and configuration for energyplanner tests."""

import pytest
from datetime import date, datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
import uuid

from energyplanner.database.database import Base
from energyplanner.database import models  # noqa: F401  (registers tables)
from energyplanner.database.repository import TaskRepository
from energyplanner.database.energy_repository import EnergyRepository
from energyplanner.models.task import Task, TaskStatus, TaskType, TaskPriority, EnergyLevel


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def task_repository(db_session: Session):
    """Create a TaskRepository instance for testing."""
    return TaskRepository(db_session)


@pytest.fixture
def energy_repository(db_session: Session):
    """Create an EnergyRepository instance for testing."""
    return EnergyRepository(db_session)


@pytest.fixture
def plan_date():
    """Fixed planning date so deadline urgency is deterministic."""
    return date(2024, 6, 3)


@pytest.fixture
def sample_task_base():
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    now = datetime(2024, 6, 1, 8, 0, 0)
    return {
        "id": str(uuid.uuid4()),
        "title": "Test Task",
        "description": "Test description",
        "energy_cost": EnergyLevel.LOW,
        "type": TaskType.ADMIN,
        "priority": TaskPriority.MEDIUM,
        "status": TaskStatus.TODO,
        "tags": [],
        "project": None,
        "deadline": None,
        "estimated_minutes": None,
        "subtasks": [],
        "created_at": now,
        "updated_at": now,
        "completed": False,
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def make_task(sample_task_base):
    """Factory for tasks with a fresh id and overridden fields."""
    def _make(**overrides):
        return Task(**{**sample_task_base, "id": str(uuid.uuid4()), **overrides})
    return _make


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from energyplanner.api.app import app
    from energyplanner.database.database import get_db

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
