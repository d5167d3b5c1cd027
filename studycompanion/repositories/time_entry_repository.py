"""Time entry repository for database operations."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from studycompanion import models

logger = logging.getLogger(__name__)


class TimeEntryRepository:
    """Repository for TimeEntry database operations."""

    def __init__(self, db: Session) -> None:
        """Initialize repository with database session."""
        self.db = db

    def get_by_task_id(self, task_id: int) -> list[models.TimeEntry]:
        """Get all time entries of a task, most recent start first."""
        stmt = (
            select(models.TimeEntry)
            .where(models.TimeEntry.task_id == task_id)
            .order_by(models.TimeEntry.start_time.desc(), models.TimeEntry.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(
        self, task_id: int, start_time: datetime, end_time: datetime | None = None
    ) -> models.TimeEntry:
        """Create a time entry for a task.

        The task is not looked up first; an unknown ``task_id`` fails at flush
        with a foreign key violation.
        """
        entry = models.TimeEntry(task_id=task_id, start_time=start_time, end_time=end_time)
        self.db.add(entry)
        self.db.flush()
        self.db.refresh(entry)
        logger.info(f"Created time entry: id={entry.id}, task_id={task_id}")
        return entry

    def update(self, entry_id: int, **changes: datetime | None) -> models.TimeEntry:
        """Apply start/end time changes to a time entry.

        Raises:
            sqlalchemy.exc.NoResultFound: If no time entry has this ID
        """
        entry = self.db.get_one(models.TimeEntry, entry_id)
        for name, value in changes.items():
            setattr(entry, name, value)

        self.db.flush()
        self.db.refresh(entry)
        logger.info(f"Updated time entry: id={entry_id}, fields={sorted(changes)}")
        return entry

    def delete(self, entry_id: int) -> None:
        """Delete a time entry.

        Raises:
            sqlalchemy.exc.NoResultFound: If no time entry has this ID
        """
        entry = self.db.get_one(models.TimeEntry, entry_id)
        self.db.delete(entry)
        self.db.flush()
        logger.info(f"Deleted time entry: id={entry_id}")
