"""Quiz repository for database operations."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import Select, select
from sqlalchemy.orm import Session, selectinload

from studycompanion import models
from studycompanion.domain.subject import Subject

logger = logging.getLogger(__name__)


@dataclass
class OptionData:
    """DTO for an option in a nested quiz write."""

    content: str
    is_correct: bool


@dataclass
class QuestionData:
    """DTO for a question in a nested quiz write."""

    content: str
    points: int
    options: list[OptionData] = field(default_factory=list)


class QuizRepository:
    """Repository for Quiz aggregate (quiz, questions, options) operations."""

    def __init__(self, db: Session) -> None:
        """Initialize repository with database session."""
        self.db = db

    def _with_questions(self) -> Select[tuple[models.Quiz]]:
        return select(models.Quiz).options(
            selectinload(models.Quiz.questions).selectinload(models.Question.options)
        )

    def get_by_id(self, quiz_id: int) -> models.Quiz | None:
        """Get a quiz with its questions and options."""
        stmt = self._with_questions().where(models.Quiz.id == quiz_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_all(self, subject: Subject | None = None) -> list[models.Quiz]:
        """Get quizzes in creation order with their questions and options."""
        stmt = self._with_questions()
        if subject is not None:
            stmt = stmt.where(models.Quiz.subject == subject)
        stmt = stmt.order_by(models.Quiz.id)
        return list(self.db.execute(stmt).scalars().all())

    def create_with_questions(
        self, subject: Subject, questions: Sequence[QuestionData]
    ) -> models.Quiz:
        """Create a quiz together with its questions and their options.

        The whole graph is added to the session and flushed at once, so it is
        committed or rolled back as one unit by the caller.
        """
        quiz = models.Quiz(
            subject=subject,
            questions=[
                models.Question(
                    content=question.content,
                    points=question.points,
                    options=[
                        models.Option(content=option.content, is_correct=option.is_correct)
                        for option in question.options
                    ],
                )
                for question in questions
            ],
        )
        self.db.add(quiz)
        self.db.flush()
        logger.info(f"Created quiz: id={quiz.id}, subject={subject}, questions={len(questions)}")
        return quiz

    def delete(self, quiz_id: int) -> None:
        """Delete a quiz and, by cascade, its questions and options.

        Raises:
            sqlalchemy.exc.NoResultFound: If no quiz has this ID
        """
        quiz = self.db.get_one(models.Quiz, quiz_id)
        self.db.delete(quiz)
        self.db.flush()
        logger.info(f"Deleted quiz: id={quiz_id}")
