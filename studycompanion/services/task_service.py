"""Service layer for tasks and their time entries."""

import structlog
from sqlalchemy.orm import Session

from studycompanion import schemas
from studycompanion.domain.subject import parse_subject, require_fields
from studycompanion.exceptions import TaskNotFoundError
from studycompanion.repositories import TaskRepository, TimeEntryRepository

logger = structlog.get_logger(__name__)

_TASK_UPDATE_FIELDS = ("title", "description", "subject", "completed")


class TaskService:
    """Service for task CRUD operations."""

    def __init__(self, db: Session, task_repository: TaskRepository) -> None:
        """Initialize service with database session and repository."""
        self.db = db
        self.task_repo = task_repository

    def get_tasks(self) -> list[schemas.Task]:
        """Get all tasks newest first, each with its time entries."""
        return [schemas.Task.model_validate(t) for t in self.task_repo.get_all()]

    def get_task(self, task_id: int) -> schemas.Task:
        """
        Get a task with its time entries.

        Raises:
            TaskNotFoundError: If task is not found
        """
        task = self.task_repo.get_by_id(task_id)
        if not task:
            raise TaskNotFoundError(task_id)
        return schemas.Task.model_validate(task)

    def create_task(self, request: schemas.TaskCreateRequest) -> schemas.Task:
        """
        Create a task. Title and subject are required, description is optional.

        Raises:
            MissingFieldsError: If title or subject is absent or empty
            InvalidSubjectError: If subject is not a known value
        """
        require_fields(
            request.model_dump(), "title", "subject", message="Title and subject are required"
        )
        subject = parse_subject(request.subject)

        task = self.task_repo.create(
            title=str(request.title),
            subject=subject,
            description=request.description or None,
        )
        self.db.commit()

        logger.info("task_created", task_id=task.id, subject=subject.value)
        return schemas.Task.model_validate(task)

    def update_task(self, task_id: int, request: schemas.TaskUpdateRequest) -> schemas.Task:
        """
        Partially update a task.

        Only fields present in the request body are written; a present
        ``subject`` must be a known value.

        Raises:
            InvalidSubjectError: If a provided subject is not a known value
            TaskNotFoundError: If task is not found
        """
        changes = {
            name: getattr(request, name)
            for name in _TASK_UPDATE_FIELDS
            if name in request.model_fields_set
        }
        if "subject" in changes:
            changes["subject"] = parse_subject(changes["subject"])
        if changes.get("title") is None:
            changes.pop("title", None)
        if changes.get("completed") is None:
            changes.pop("completed", None)

        task = self.task_repo.get_by_id(task_id)
        if not task:
            raise TaskNotFoundError(task_id)

        task = self.task_repo.update(task, **changes)
        self.db.commit()

        logger.info("task_updated", task_id=task_id, fields=sorted(changes))
        return schemas.Task.model_validate(task)

    def delete_task(self, task_id: int) -> None:
        """
        Delete a task and its time entries.

        A running timer on the task is not stopped first; its open entry is
        removed along with the others.

        Raises:
            TaskNotFoundError: If task is not found
        """
        task = self.task_repo.get_by_id(task_id)
        if not task:
            raise TaskNotFoundError(task_id)

        self.task_repo.delete(task)
        self.db.commit()
        logger.info("task_deleted", task_id=task_id)


class TimeEntryService:
    """Service for time entry operations."""

    def __init__(self, db: Session, time_entry_repository: TimeEntryRepository) -> None:
        """Initialize service with database session and repository."""
        self.db = db
        self.time_entry_repo = time_entry_repository

    def get_time_entries(self, task_id: int) -> list[schemas.TimeEntry]:
        """Get the time entries of a task, most recent start first."""
        entries = self.time_entry_repo.get_by_task_id(task_id)
        return [schemas.TimeEntry.model_validate(e) for e in entries]

    def create_time_entry(
        self, task_id: int, request: schemas.TimeEntryCreateRequest
    ) -> schemas.TimeEntry:
        """
        Create a time entry for a task.

        Raises:
            MissingFieldsError: If start time is absent
        """
        require_fields(request.model_dump(), "start_time", message="Start time is required")

        entry = self.time_entry_repo.create(
            task_id=task_id,
            start_time=request.start_time,  # type: ignore[arg-type]
            end_time=request.end_time,
        )
        self.db.commit()

        logger.info(
            "time_entry_created", time_entry_id=entry.id, task_id=task_id, open=entry.end_time is None
        )
        return schemas.TimeEntry.model_validate(entry)

    def update_time_entry(
        self, entry_id: int, request: schemas.TimeEntryUpdateRequest
    ) -> schemas.TimeEntry:
        """
        Update a time entry's start and/or end time.

        Fields omitted from the body keep their stored value. An explicit
        null end time reopens the entry; a null start time is ignored since
        the column is required. No existence check is made: an unknown entry
        fails in the store.
        """
        changes = {}
        if "start_time" in request.model_fields_set and request.start_time is not None:
            changes["start_time"] = request.start_time
        if "end_time" in request.model_fields_set:
            changes["end_time"] = request.end_time

        entry = self.time_entry_repo.update(entry_id, **changes)
        self.db.commit()

        logger.info("time_entry_updated", time_entry_id=entry_id, fields=sorted(changes))
        return schemas.TimeEntry.model_validate(entry)

    def delete_time_entry(self, entry_id: int) -> None:
        """Delete a time entry. An unknown entry fails in the store."""
        self.time_entry_repo.delete(entry_id)
        self.db.commit()
        logger.info("time_entry_deleted", time_entry_id=entry_id)
