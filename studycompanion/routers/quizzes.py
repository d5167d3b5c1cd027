"""API routes for quiz management."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from studycompanion import schemas
from studycompanion.core import container
from studycompanion.di import inject_service
from studycompanion.exceptions import StudyCompanionError
from studycompanion.services import QuizService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.get("", response_model=schemas.QuizzesBySubject, status_code=status.HTTP_200_OK)
def get_quizzes(
    service: QuizService = Depends(inject_service(container.quiz_service)),
) -> schemas.QuizzesBySubject:
    """
    Get all quizzes grouped by subject.

    Returns:
        Mapping of subject to its quizzes, each with nested questions and options
    """
    try:
        return service.get_quizzes_grouped_by_subject()
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch quizzes: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch quizzes",
        ) from e


@router.get("/subject/{subject}", response_model=list[schemas.Quiz], status_code=status.HTTP_200_OK)
def get_quizzes_by_subject(
    subject: str,
    service: QuizService = Depends(inject_service(container.quiz_service)),
) -> list[schemas.Quiz]:
    """Get the quizzes of one subject; the segment is matched case-insensitively."""
    try:
        return service.get_quizzes_by_subject(subject)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch quizzes for subject {subject}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch quizzes",
        ) from e


@router.get("/{quiz_id}", response_model=schemas.Quiz, status_code=status.HTTP_200_OK)
def get_quiz(
    quiz_id: int,
    service: QuizService = Depends(inject_service(container.quiz_service)),
) -> schemas.Quiz:
    """Get a quiz with its questions and options."""
    try:
        return service.get_quiz(quiz_id)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch quiz {quiz_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch quiz",
        ) from e


@router.post("", response_model=schemas.Quiz, status_code=status.HTTP_200_OK)
def create_quiz(
    request: schemas.QuizCreateRequest,
    service: QuizService = Depends(inject_service(container.quiz_service)),
) -> schemas.Quiz:
    """
    Create a quiz together with its questions and options.

    Args:
        request: Subject and ordered questions, each with ordered options

    Returns:
        Created quiz with the ids assigned to every question and option

    Raises:
        HTTPException: If the payload is invalid or creation fails
    """
    try:
        return service.create_quiz(request)
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to create quiz: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create quiz",
        ) from e


@router.delete("/{quiz_id}", response_model=schemas.MessageResponse, status_code=status.HTTP_200_OK)
def delete_quiz(
    quiz_id: int,
    service: QuizService = Depends(inject_service(container.quiz_service)),
) -> schemas.MessageResponse:
    """
    Delete a quiz and, by cascade, its questions and options.

    Raises:
        HTTPException: If deletion fails, including when the quiz does not exist
    """
    try:
        service.delete_quiz(quiz_id)
        return schemas.MessageResponse(message="Quiz deleted successfully")
    except StudyCompanionError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete quiz {quiz_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete quiz",
        ) from e
