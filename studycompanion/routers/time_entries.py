"""API routes for individual time entries."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from studycompanion import schemas
from studycompanion.core import container
from studycompanion.di import inject_service
from studycompanion.exceptions import StudyCompanionError
from studycompanion.services import TimeEntryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/time-entries", tags=["time-entries"])


@router.patch("/{entry_id}", response_model=schemas.TimeEntry, status_code=status.HTTP_200_OK)
def update_time_entry(
    entry_id: int,
    request: schemas.TimeEntryUpdateRequest,
    service: TimeEntryService = Depends(inject_service(container.time_entry_service)),
) -> schemas.TimeEntry:
    """
    Update a time entry's start and/or end time.

    Args:
        entry_id: ID of the time entry
        request: startTime and/or endTime; an explicit null endTime reopens it

    Returns:
        Updated time entry

    Raises:
        HTTPException: If the update fails, including when the entry does not exist
    """
    try:
        return service.update_time_entry(entry_id, request)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to update time entry {entry_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update time entry",
        ) from e


@router.delete(
    "/{entry_id}", response_model=schemas.MessageResponse, status_code=status.HTTP_200_OK
)
def delete_time_entry(
    entry_id: int,
    service: TimeEntryService = Depends(inject_service(container.time_entry_service)),
) -> schemas.MessageResponse:
    """Delete a time entry."""
    try:
        service.delete_time_entry(entry_id)
        return schemas.MessageResponse(message="Time entry deleted successfully")
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete time entry {entry_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete time entry",
        ) from e
