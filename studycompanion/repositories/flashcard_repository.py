"""Flashcard repository for database operations."""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from studycompanion import models
from studycompanion.domain.subject import Subject

logger = logging.getLogger(__name__)


class FlashcardRepository:
    """Repository for Flashcard database operations."""

    def __init__(self, db: Session) -> None:
        """Initialize repository with database session."""
        self.db = db

    def get_by_id(self, flashcard_id: int) -> models.Flashcard | None:
        """Get a flashcard by its ID."""
        return self.db.get(models.Flashcard, flashcard_id)

    def get_all(self, subject: Subject | None = None) -> list[models.Flashcard]:
        """Get flashcards, newest first, optionally restricted to one subject."""
        stmt = select(models.Flashcard)
        if subject is not None:
            stmt = stmt.where(models.Flashcard.subject == subject)
        stmt = stmt.order_by(models.Flashcard.created_at.desc(), models.Flashcard.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def count_by_subject(self) -> dict[Subject, int]:
        """Count flashcards per subject; subjects without cards are omitted."""
        stmt = select(models.Flashcard.subject, func.count(models.Flashcard.id)).group_by(
            models.Flashcard.subject
        )
        return {subject: count for subject, count in self.db.execute(stmt).all()}

    def create(self, question: str, answer: str, subject: Subject) -> models.Flashcard:
        """Create a new flashcard."""
        flashcard = models.Flashcard(question=question, answer=answer, subject=subject)
        self.db.add(flashcard)
        self.db.flush()
        self.db.refresh(flashcard)
        logger.info(f"Created flashcard: id={flashcard.id}, subject={subject}")
        return flashcard

    def update(
        self,
        flashcard: models.Flashcard,
        question: str,
        answer: str,
        subject: Subject,
    ) -> models.Flashcard:
        """Replace a flashcard's question, answer and subject."""
        flashcard.question = question
        flashcard.answer = answer
        flashcard.subject = subject

        self.db.flush()
        self.db.refresh(flashcard)
        logger.info(f"Updated flashcard: id={flashcard.id}")
        return flashcard

    def delete(self, flashcard: models.Flashcard) -> None:
        """Delete a flashcard."""
        flashcard_id = flashcard.id
        self.db.delete(flashcard)
        self.db.flush()
        logger.info(f"Deleted flashcard: id={flashcard_id}")
