"""API routes for flashcard management."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from studycompanion import schemas
from studycompanion.core import container
from studycompanion.di import inject_service
from studycompanion.exceptions import StudyCompanionError
from studycompanion.services import FlashcardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flashcards", tags=["flashcards"])


@router.get("", response_model=list[schemas.Flashcard], status_code=status.HTTP_200_OK)
def get_flashcards(
    subject: str | None = None,
    service: FlashcardService = Depends(inject_service(container.flashcard_service)),
) -> list[schemas.Flashcard]:
    """
    Get all flashcards, newest first.

    Args:
        subject: Optional exact subject value to filter by

    Returns:
        List of flashcards
    """
    try:
        return service.get_flashcards(subject=subject)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch flashcards: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch flashcards",
        ) from e


@router.get("/counts", response_model=schemas.FlashcardCounts, status_code=status.HTTP_200_OK)
def get_flashcard_counts(
    service: FlashcardService = Depends(inject_service(container.flashcard_service)),
) -> schemas.FlashcardCounts:
    """Get the number of flashcards per subject."""
    try:
        return service.count_by_subject()
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to count flashcards: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch flashcard counts",
        ) from e


@router.get(
    "/subject/{subject}",
    response_model=list[schemas.Flashcard],
    status_code=status.HTTP_200_OK,
)
def get_flashcards_by_subject(
    subject: str,
    service: FlashcardService = Depends(inject_service(container.flashcard_service)),
) -> list[schemas.Flashcard]:
    """
    Get the flashcards of one subject, newest first.

    The subject segment is matched case-insensitively.
    """
    try:
        return service.get_flashcards_by_subject(subject)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch flashcards for subject {subject}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch flashcards",
        ) from e


@router.get("/{flashcard_id}", response_model=schemas.Flashcard, status_code=status.HTTP_200_OK)
def get_flashcard(
    flashcard_id: int,
    service: FlashcardService = Depends(inject_service(container.flashcard_service)),
) -> schemas.Flashcard:
    """Get a single flashcard."""
    try:
        return service.get_flashcard(flashcard_id)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch flashcard {flashcard_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch flashcard",
        ) from e


@router.post("", response_model=schemas.Flashcard, status_code=status.HTTP_201_CREATED)
def create_flashcard(
    request: schemas.FlashcardRequest,
    service: FlashcardService = Depends(inject_service(container.flashcard_service)),
) -> schemas.Flashcard:
    """
    Create a flashcard.

    Args:
        request: Question, answer and subject

    Returns:
        Created flashcard

    Raises:
        HTTPException: If a field is missing, the subject is invalid or creation fails
    """
    try:
        return service.create_flashcard(request)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to create flashcard: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create flashcard",
        ) from e


@router.put("/{flashcard_id}", response_model=schemas.Flashcard, status_code=status.HTTP_200_OK)
def update_flashcard(
    flashcard_id: int,
    request: schemas.FlashcardRequest,
    service: FlashcardService = Depends(inject_service(container.flashcard_service)),
) -> schemas.Flashcard:
    """
    Replace a flashcard's question, answer and subject.

    Args:
        flashcard_id: ID of the flashcard to update
        request: Question, answer and subject

    Returns:
        Updated flashcard

    Raises:
        HTTPException: If flashcard not found or update fails
    """
    try:
        return service.update_flashcard(flashcard_id, request)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to update flashcard {flashcard_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update flashcard",
        ) from e


@router.delete(
    "/{flashcard_id}", response_model=schemas.MessageResponse, status_code=status.HTTP_200_OK
)
def delete_flashcard(
    flashcard_id: int,
    service: FlashcardService = Depends(inject_service(container.flashcard_service)),
) -> schemas.MessageResponse:
    """
    Delete a flashcard.

    Raises:
        HTTPException: If flashcard not found or deletion fails
    """
    try:
        service.delete_flashcard(flashcard_id)
        return schemas.MessageResponse(message="Flashcard deleted successfully")
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete flashcard {flashcard_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete flashcard",
        ) from e
