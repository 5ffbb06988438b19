"""Repository layer for task database operations."""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func

from energyplanner.models.task import Task
from energyplanner.database.models import TaskDB

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _next_sequence(self) -> int:
        current = self.db.query(func.max(TaskDB.sequence)).scalar()
        return (current or 0) + 1

    def create(self, task: Task) -> Task:
        """Create a new task."""
        try:
            task_db = TaskDB.from_pydantic(task, sequence=self._next_sequence())
            self.db.add(task_db)
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Created task {task.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        return task_db.to_pydantic() if task_db else None

    def get_all(self) -> List[Task]:
        """Get all tasks in the order they were created."""
        tasks_db = self.db.query(TaskDB).order_by(TaskDB.sequence).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def update(self, task: Task) -> Task:
        """Update an existing task."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task.id).first()
        if not task_db:
            raise ValueError(f"Task {task.id} not found")

        task_db.apply_pydantic(task)

        try:
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Updated task {task.id}: {task.title[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, task_id: str) -> bool:
        """Permanently delete a task by ID."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        if not task_db:
            return False

        try:
            self.db.delete(task_db)
            self.db.commit()
            logger.debug(f"Deleted task {task_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise

    def list_projects(self) -> List[str]:
        """Distinct non-empty project labels, in first-seen order."""
        projects: List[str] = []
        for (project,) in self.db.query(TaskDB.project).order_by(TaskDB.sequence).all():
            if project and project not in projects:
                projects.append(project)
        return projects

    def list_tags(self) -> List[str]:
        """Distinct tags across all tasks, in first-seen order."""
        tags: List[str] = []
        for (task_tags,) in self.db.query(TaskDB.tags).order_by(TaskDB.sequence).all():
            for tag in task_tags or []:
                if tag not in tags:
                    tags.append(tag)
        return tags
