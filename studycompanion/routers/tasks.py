"""API routes for tasks and the time entries recorded against them."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from studycompanion import schemas
from studycompanion.core import container
from studycompanion.di import inject_service
from studycompanion.exceptions import StudyCompanionError
from studycompanion.services import TaskService, TimeEntryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[schemas.Task], status_code=status.HTTP_200_OK)
def get_tasks(
    service: TaskService = Depends(inject_service(container.task_service)),
) -> list[schemas.Task]:
    """Get all tasks newest first, with their time entries."""
    try:
        return service.get_tasks()
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch tasks: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch tasks",
        ) from e


@router.post("", response_model=schemas.Task, status_code=status.HTTP_201_CREATED)
def create_task(
    request: schemas.TaskCreateRequest,
    service: TaskService = Depends(inject_service(container.task_service)),
) -> schemas.Task:
    """
    Create a task.

    Args:
        request: Title, subject and an optional description

    Returns:
        Created task with an empty list of time entries
    """
    try:
        return service.create_task(request)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to create task: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create task",
        ) from e


@router.get("/{task_id}", response_model=schemas.Task, status_code=status.HTTP_200_OK)
def get_task(
    task_id: int,
    service: TaskService = Depends(inject_service(container.task_service)),
) -> schemas.Task:
    """Get a task with its time entries."""
    try:
        return service.get_task(task_id)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch task {task_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch task",
        ) from e


@router.patch("/{task_id}", response_model=schemas.Task, status_code=status.HTTP_200_OK)
def update_task(
    task_id: int,
    request: schemas.TaskUpdateRequest,
    service: TaskService = Depends(inject_service(container.task_service)),
) -> schemas.Task:
    """
    Partially update a task.

    Args:
        task_id: ID of the task to update
        request: Any of title, description, subject and completed

    Returns:
        Updated task

    Raises:
        HTTPException: If task not found or update fails
    """
    try:
        return service.update_task(task_id, request)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to update task {task_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update task",
        ) from e


@router.delete("/{task_id}", response_model=schemas.MessageResponse, status_code=status.HTTP_200_OK)
def delete_task(
    task_id: int,
    service: TaskService = Depends(inject_service(container.task_service)),
) -> schemas.MessageResponse:
    """Delete a task and its time entries."""
    try:
        service.delete_task(task_id)
        return schemas.MessageResponse(message="Task deleted successfully")
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete task {task_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete task",
        ) from e


@router.get(
    "/{task_id}/time-entries",
    response_model=list[schemas.TimeEntry],
    status_code=status.HTTP_200_OK,
)
def get_time_entries(
    task_id: int,
    service: TimeEntryService = Depends(inject_service(container.time_entry_service)),
) -> list[schemas.TimeEntry]:
    """Get the time entries of a task, most recent start first."""
    try:
        return service.get_time_entries(task_id)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch time entries for task {task_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch time entries",
        ) from e


@router.post(
    "/{task_id}/time-entries",
    response_model=schemas.TimeEntry,
    status_code=status.HTTP_201_CREATED,
)
def create_time_entry(
    task_id: int,
    request: schemas.TimeEntryCreateRequest,
    service: TimeEntryService = Depends(inject_service(container.time_entry_service)),
) -> schemas.TimeEntry:
    """
    Start a time entry for a task.

    An entry without ``endTime`` is an open, running timer.

    Raises:
        HTTPException: If start time is missing or the task does not exist
    """
    try:
        return service.create_time_entry(task_id, request)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to create time entry for task {task_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create time entry",
        ) from e
