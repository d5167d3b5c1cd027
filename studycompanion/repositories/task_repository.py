"""Task repository for database operations."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from studycompanion import models
from studycompanion.domain.subject import Subject

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: Session) -> None:
        """Initialize repository with database session."""
        self.db = db

    def get_by_id(self, task_id: int) -> models.Task | None:
        """Get a task with its time entries."""
        stmt = (
            select(models.Task)
            .options(selectinload(models.Task.time_entries))
            .where(models.Task.id == task_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_all(self) -> list[models.Task]:
        """Get all tasks, newest first, with their time entries."""
        stmt = (
            select(models.Task)
            .options(selectinload(models.Task.time_entries))
            .order_by(models.Task.created_at.desc(), models.Task.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(self, title: str, subject: Subject, description: str | None = None) -> models.Task:
        """Create a new task."""
        task = models.Task(title=title, description=description, subject=subject, completed=False)
        self.db.add(task)
        self.db.flush()
        self.db.refresh(task)
        logger.info(f"Created task: id={task.id}, subject={subject}")
        return task

    def update(self, task: models.Task, **changes: object) -> models.Task:
        """Apply the given column changes to a task.

        Only keys present in ``changes`` are written.
        """
        for name, value in changes.items():
            setattr(task, name, value)

        self.db.flush()
        self.db.refresh(task)
        logger.info(f"Updated task: id={task.id}, fields={sorted(changes)}")
        return task

    def delete(self, task: models.Task) -> None:
        """Delete a task and, by cascade, its time entries."""
        task_id = task.id
        self.db.delete(task)
        self.db.flush()
        logger.info(f"Deleted task: id={task_id}")
