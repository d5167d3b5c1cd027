"""Service layer for quiz-related business logic."""

import structlog
from sqlalchemy.orm import Session

from studycompanion import schemas
from studycompanion.domain.subject import Subject, parse_subject, require_fields
from studycompanion.exceptions import QuizNotFoundError
from studycompanion.repositories import OptionData, QuestionData, QuizRepository

logger = structlog.get_logger(__name__)


class QuizService:
    """Service for handling quiz-related operations."""

    def __init__(self, db: Session, quiz_repository: QuizRepository) -> None:
        """Initialize service with database session and repository."""
        self.db = db
        self.quiz_repo = quiz_repository

    def get_quizzes_grouped_by_subject(self) -> dict[Subject, list[schemas.Quiz]]:
        """
        Get every quiz grouped by subject.

        Subjects appear in the order their first quiz was created; subjects
        without quizzes are absent.
        """
        grouped: dict[Subject, list[schemas.Quiz]] = {}
        for quiz in self.quiz_repo.get_all():
            grouped.setdefault(quiz.subject, []).append(schemas.Quiz.model_validate(quiz))
        return grouped

    def get_quiz(self, quiz_id: int) -> schemas.Quiz:
        """
        Get a quiz with its questions and options.

        Raises:
            QuizNotFoundError: If quiz is not found
        """
        quiz = self.quiz_repo.get_by_id(quiz_id)
        if not quiz:
            raise QuizNotFoundError(quiz_id)
        return schemas.Quiz.model_validate(quiz)

    def get_quizzes_by_subject(self, subject: str) -> list[schemas.Quiz]:
        """
        Get quizzes for a subject path segment, matched case-insensitively.

        Raises:
            InvalidSubjectError: If the upper-cased segment is not a known subject
        """
        parsed = parse_subject(subject, case_insensitive=True)
        return [schemas.Quiz.model_validate(q) for q in self.quiz_repo.get_all(subject=parsed)]

    def create_quiz(self, request: schemas.QuizCreateRequest) -> schemas.Quiz:
        """
        Create a quiz with its questions and options in a single transaction.

        Either the quiz and its whole question/option tree are stored, or
        nothing is.

        Raises:
            MissingFieldsError: If subject or questions are absent
            InvalidSubjectError: If subject is not a known value
        """
        require_fields(request.model_dump(), "subject", "questions")
        subject = parse_subject(request.subject)

        questions = [
            QuestionData(
                content=question.content,
                points=question.points,
                options=[
                    OptionData(content=option.content, is_correct=option.is_correct)
                    for option in question.options
                ],
            )
            for question in request.questions or []
        ]

        try:
            quiz = self.quiz_repo.create_with_questions(subject=subject, questions=questions)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "quiz_created",
            quiz_id=quiz.id,
            subject=subject.value,
            question_count=len(questions),
        )
        return schemas.Quiz.model_validate(quiz)

    def delete_quiz(self, quiz_id: int) -> None:
        """
        Delete a quiz together with its questions and options.

        No existence check is made: deleting an unknown quiz fails in the
        store and surfaces as a server error.
        """
        self.quiz_repo.delete(quiz_id)
        self.db.commit()
        logger.info("quiz_deleted", quiz_id=quiz_id)
