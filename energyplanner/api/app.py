"""FastAPI web application for energyplanner."""

import logging
import uuid
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from fastapi import FastAPI, HTTPException, Depends, Query, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from energyplanner.database.database import get_db, init_db
from energyplanner.database.repository import TaskRepository
from energyplanner.database.energy_repository import EnergyRepository
from energyplanner.models.task import Task, TaskStatus, TaskType, TaskPriority, EnergyLevel, enum_to_value
from energyplanner.models.energy import EnergyEntry
from energyplanner.models.plan import DayPlan, PlanOptions
from energyplanner.models.task_factory import create_task_base, apply_task_updates, mark_task_complete
from energyplanner.models.constants import DEFAULT_ENERGY_VALUE
from energyplanner.engine.planner import plan_day
from energyplanner.engine.scoring import priority_to_number

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="energyplanner API",
    description="Plans your day around how much energy you actually have",
    version="0.1.0"
)


@app.on_event("startup")
def on_startup():
    """Create tables on startup."""
    init_db()


# Request models
class TaskCreateRequest(BaseModel):
    """Request body for creating a task."""
    title: str = Field(..., min_length=1)
    energy_cost: EnergyLevel
    type: TaskType
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    tags: List[str] = Field(default_factory=list)
    assignee: Optional[str] = None
    project: Optional[str] = None
    deadline: Optional[str] = None
    estimated_minutes: Optional[int] = Field(None, ge=0)
    subtasks: List[str] = Field(default_factory=list)
    notes: Optional[str] = None


class TaskUpdateRequest(BaseModel):
    """Request body for updating a task (all fields optional)."""
    title: Optional[str] = Field(None, min_length=1)
    energy_cost: Optional[EnergyLevel] = None
    type: Optional[TaskType] = None
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    tags: Optional[List[str]] = None
    assignee: Optional[str] = None
    project: Optional[str] = None
    deadline: Optional[str] = None
    estimated_minutes: Optional[int] = Field(None, ge=0)
    subtasks: Optional[List[str]] = None
    notes: Optional[str] = None


# Fields a client may reset to null through PATCH
CLEARABLE_FIELDS = {"description", "assignee", "project", "deadline", "estimated_minutes", "notes"}


class EnergyCheckInRequest(BaseModel):
    """Request body for an energy check-in."""
    value: int = Field(..., ge=1, le=5, description="Energy (1-5)")
    sleep_hours: Optional[float] = Field(None, ge=0, le=24, description="Hours slept")


class TaskSortField(str, Enum):
    """Fields GET /tasks can sort by."""
    UPDATED_AT = "updated_at"
    CREATED_AT = "created_at"
    TITLE = "title"
    PRIORITY = "priority"
    DEADLINE = "deadline"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Response models
class TaskResponse(BaseModel):
    """Response wrapping a single task."""
    task: Task


class TaskListResponse(BaseModel):
    """Response for task listing."""
    tasks: List[Task]
    count: int


class EnergyEntryResponse(BaseModel):
    """Response wrapping a single energy entry."""
    entry: EnergyEntry


class EnergyEntryListResponse(BaseModel):
    """Response for energy history."""
    entries: List[EnergyEntry]
    count: int


def _sort_key(sort_by: TaskSortField):
    if sort_by == TaskSortField.PRIORITY:
        return lambda t: priority_to_number(t.priority)
    if sort_by == TaskSortField.TITLE:
        return lambda t: t.title.lower()
    if sort_by == TaskSortField.DEADLINE:
        return lambda t: t.deadline or ""
    if sort_by == TaskSortField.CREATED_AT:
        return lambda t: t.created_at
    return lambda t: t.updated_at


def _get_task_or_404(repo: TaskRepository, task_id: str) -> Task:
    task = repo.get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.post("/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(request: TaskCreateRequest, db: Session = Depends(get_db)):
    """Create a task."""
    task = create_task_base(**request.model_dump())
    try:
        created = TaskRepository(db).create(task)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create task: {str(e)}")
    return TaskResponse(task=created)


@app.get("/tasks", response_model=TaskListResponse)
def list_tasks(
    tags: Optional[List[str]] = Query(None),
    project: Optional[str] = None,
    status_filter: Optional[List[TaskStatus]] = Query(None, alias="status"),
    priority: Optional[TaskPriority] = None,
    type: Optional[TaskType] = None,
    search: Optional[str] = None,
    sort_by: TaskSortField = TaskSortField.UPDATED_AT,
    sort_order: SortOrder = SortOrder.DESC,
    db: Session = Depends(get_db),
):
    """List tasks with optional filtering, search and sorting."""
    tasks = TaskRepository(db).get_all()

    if tags:
        tasks = [t for t in tasks if set(tags).intersection(t.tags)]
    if project:
        tasks = [t for t in tasks if t.project == project]
    if status_filter:
        wanted = {enum_to_value(s) for s in status_filter}
        tasks = [t for t in tasks if enum_to_value(t.status) in wanted]
    if priority:
        tasks = [t for t in tasks if enum_to_value(t.priority) == priority.value]
    if type:
        tasks = [t for t in tasks if enum_to_value(t.type) == type.value]
    if search:
        term = search.lower()
        tasks = [
            t for t in tasks
            if term in t.title.lower() or (t.description and term in t.description.lower())
        ]

    tasks = sorted(tasks, key=_sort_key(sort_by), reverse=(sort_order == SortOrder.DESC))
    return TaskListResponse(tasks=tasks, count=len(tasks))


# These fixed paths must be registered before /tasks/{task_id}
@app.get("/tasks/projects/list", response_model=List[str])
def list_projects(db: Session = Depends(get_db)):
    """List distinct project labels."""
    return TaskRepository(db).list_projects()


@app.get("/tasks/tags/list", response_model=List[str])
def list_tags(db: Session = Depends(get_db)):
    """List distinct tags."""
    return TaskRepository(db).list_tags()


@app.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, db: Session = Depends(get_db)):
    """Get a single task."""
    return TaskResponse(task=_get_task_or_404(TaskRepository(db), task_id))


@app.patch("/tasks/{task_id}", response_model=TaskResponse)
def update_task(task_id: str, request: TaskUpdateRequest, db: Session = Depends(get_db)):
    """Update a task. Setting a status keeps `completed` in sync."""
    repo = TaskRepository(db)
    task = _get_task_or_404(repo, task_id)

    updates = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key in CLEARABLE_FIELDS
    }
    try:
        updated = repo.update(apply_task_updates(task, updates))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update task: {str(e)}")
    return TaskResponse(task=updated)


@app.patch("/tasks/{task_id}/complete", response_model=TaskResponse)
def complete_task(task_id: str, db: Session = Depends(get_db)):
    """Mark a task as done."""
    repo = TaskRepository(db)
    task = _get_task_or_404(repo, task_id)
    return TaskResponse(task=repo.update(mark_task_complete(task)))


@app.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, db: Session = Depends(get_db)):
    """Delete a task."""
    if not TaskRepository(db).delete(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post("/energy", response_model=EnergyEntryResponse, status_code=status.HTTP_201_CREATED)
def record_energy(request: EnergyCheckInRequest, db: Session = Depends(get_db)):
    """Store an energy check-in."""
    entry = EnergyEntry(
        id=str(uuid.uuid4()),
        value=request.value,
        sleep_hours=request.sleep_hours,
        timestamp=datetime.utcnow(),
    )
    return EnergyEntryResponse(entry=EnergyRepository(db).create(entry))


@app.get("/energy", response_model=EnergyEntryListResponse)
def list_energy(db: Session = Depends(get_db)):
    """List all energy check-ins, oldest first."""
    entries = EnergyRepository(db).get_all()
    return EnergyEntryListResponse(entries=entries, count=len(entries))


@app.get("/energy/latest", response_model=EnergyEntryResponse)
def latest_energy(db: Session = Depends(get_db)):
    """Get the most recent energy check-in."""
    entry = EnergyRepository(db).get_latest()
    if entry is None:
        raise HTTPException(status_code=404, detail="No energy entries found")
    return EnergyEntryResponse(entry=entry)


@app.get("/plan/today", response_model=DayPlan)
def plan_today(
    tags: Optional[List[str]] = Query(None),
    project: Optional[str] = None,
    status_filter: Optional[List[TaskStatus]] = Query(None, alias="status"),
    exclude_blocked: bool = False,
    start_hour: Optional[int] = Query(None, ge=0, le=23),
    db: Session = Depends(get_db),
):
    """Generate today's plan from stored tasks and the latest energy check-in."""
    tasks = TaskRepository(db).get_all()
    latest = EnergyRepository(db).get_latest()
    logger.info(f"Planning with {len(tasks)} stored tasks")

    options = PlanOptions(
        filter_tags=tags,
        filter_project=project,
        filter_status=status_filter,
        exclude_blocked=exclude_blocked,
        sleep_hours=latest.sleep_hours if latest else None,
        start_hour=start_hour,
    )
    current_energy = latest.value if latest else DEFAULT_ENERGY_VALUE

    try:
        plan = plan_day(tasks, current_energy, plan_date=date.today(), options=options)
    except Exception as e:
        logger.error(f"Failed to generate plan: {type(e).__name__}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to generate plan: {str(e)}")

    task_count = sum(1 for item in plan.ordered_tasks if isinstance(item, Task))
    logger.info(f"Generated plan with {len(plan.ordered_tasks)} items ({task_count} tasks)")
    return plan


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
