"""Service layer for flashcard-related business logic."""

import structlog
from sqlalchemy.orm import Session

from studycompanion import schemas
from studycompanion.domain.subject import SUBJECTS, Subject, parse_subject, require_fields
from studycompanion.exceptions import FlashcardNotFoundError
from studycompanion.repositories import FlashcardRepository

logger = structlog.get_logger(__name__)


class FlashcardService:
    """Service for handling flashcard-related operations."""

    def __init__(self, db: Session, flashcard_repository: FlashcardRepository) -> None:
        """Initialize service with database session and repository."""
        self.db = db
        self.flashcard_repo = flashcard_repository

    def get_flashcards(self, subject: str | None = None) -> list[schemas.Flashcard]:
        """
        Get flashcards newest first, optionally filtered by subject.

        Args:
            subject: Exact subject value from the query string; None or empty for all

        Raises:
            InvalidSubjectError: If subject is given but not a known value
        """
        subject_filter = parse_subject(subject) if subject else None
        flashcards = self.flashcard_repo.get_all(subject=subject_filter)
        return [schemas.Flashcard.model_validate(f) for f in flashcards]

    def get_flashcards_by_subject(self, subject: str) -> list[schemas.Flashcard]:
        """
        Get flashcards for a subject path segment, matched case-insensitively.

        Raises:
            InvalidSubjectError: If the upper-cased segment is not a known subject
        """
        parsed = parse_subject(subject, case_insensitive=True)
        flashcards = self.flashcard_repo.get_all(subject=parsed)
        return [schemas.Flashcard.model_validate(f) for f in flashcards]

    def get_flashcard(self, flashcard_id: int) -> schemas.Flashcard:
        """
        Get a single flashcard.

        Raises:
            FlashcardNotFoundError: If flashcard is not found
        """
        flashcard = self.flashcard_repo.get_by_id(flashcard_id)
        if not flashcard:
            raise FlashcardNotFoundError(flashcard_id)
        return schemas.Flashcard.model_validate(flashcard)

    def count_by_subject(self) -> dict[Subject, int]:
        """Number of flashcards per subject, including subjects with none."""
        counts = self.flashcard_repo.count_by_subject()
        return {subject: counts.get(subject, 0) for subject in SUBJECTS}

    def create_flashcard(self, request: schemas.FlashcardRequest) -> schemas.Flashcard:
        """
        Create a new flashcard.

        Args:
            request: Question, answer and subject; all three are required

        Returns:
            Created flashcard

        Raises:
            MissingFieldsError: If any field is absent or empty
            InvalidSubjectError: If subject is not a known value
        """
        question, answer, subject = self._validate(request)

        flashcard = self.flashcard_repo.create(question=question, answer=answer, subject=subject)
        self.db.commit()

        logger.info("flashcard_created", flashcard_id=flashcard.id, subject=subject.value)
        return schemas.Flashcard.model_validate(flashcard)

    def update_flashcard(
        self, flashcard_id: int, request: schemas.FlashcardRequest
    ) -> schemas.Flashcard:
        """
        Replace a flashcard's question, answer and subject.

        Validation runs before the existence check, matching create.

        Raises:
            MissingFieldsError: If any field is absent or empty
            InvalidSubjectError: If subject is not a known value
            FlashcardNotFoundError: If flashcard is not found
        """
        question, answer, subject = self._validate(request)

        flashcard = self.flashcard_repo.get_by_id(flashcard_id)
        if not flashcard:
            raise FlashcardNotFoundError(flashcard_id)

        flashcard = self.flashcard_repo.update(
            flashcard, question=question, answer=answer, subject=subject
        )
        self.db.commit()

        logger.info("flashcard_updated", flashcard_id=flashcard_id)
        return schemas.Flashcard.model_validate(flashcard)

    def delete_flashcard(self, flashcard_id: int) -> None:
        """
        Delete a flashcard.

        Raises:
            FlashcardNotFoundError: If flashcard is not found
        """
        flashcard = self.flashcard_repo.get_by_id(flashcard_id)
        if not flashcard:
            raise FlashcardNotFoundError(flashcard_id)

        self.flashcard_repo.delete(flashcard)
        self.db.commit()
        logger.info("flashcard_deleted", flashcard_id=flashcard_id)

    @staticmethod
    def _validate(request: schemas.FlashcardRequest) -> tuple[str, str, Subject]:
        require_fields(request.model_dump(), "question", "answer", "subject")
        subject = parse_subject(request.subject)
        # require_fields guarantees both are non-empty strings
        return str(request.question), str(request.answer), subject
