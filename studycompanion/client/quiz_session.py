"""Quiz session: question progression, scoring and answer review."""

import random
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol

import httpx
import structlog

from studycompanion import schemas
from studycompanion.client.notifications import Notifier
from studycompanion.domain.subject import Subject
from studycompanion.utils import percentage

logger = structlog.get_logger(__name__)

QUESTIONS_PER_QUIZ = 5


class QuizApi(Protocol):
    async def get_quizzes(self) -> dict[Subject, list[schemas.Quiz]]: ...


class QuizPhase(StrEnum):
    SUBJECT_SELECT = "subject-select"
    QUESTIONS = "questions"
    COMPLETED = "completed"
    REVIEWING = "reviewing"


class FeedbackTier(StrEnum):
    EXCELLENT = "excellent"
    GOOD = "good"
    KEEP_PRACTICING = "keep practicing"


@dataclass(frozen=True)
class AnswerFeedback:
    """Outcome revealed after answering a question."""

    correct: bool
    points: int
    correct_answer: str | None


@dataclass(frozen=True)
class AnswerReview:
    question: schemas.Question
    selected: schemas.Option | None
    correct: schemas.Option | None


@dataclass
class QuizSessionState:
    phase: QuizPhase = QuizPhase.SUBJECT_SELECT
    quizzes_by_subject: dict[Subject, list[schemas.Quiz]] = field(default_factory=dict)
    subject: Subject | None = None
    quiz: schemas.Quiz | None = None
    questions: list[schemas.Question] = field(default_factory=list)
    index: int = 0
    # question id -> option id
    selections: dict[int, int] = field(default_factory=dict)
    score: int = 0
    last_feedback: AnswerFeedback | None = None
    error: str | None = None

    @property
    def available_subjects(self) -> list[Subject]:
        return list(self.quizzes_by_subject)

    @property
    def current_question(self) -> schemas.Question | None:
        if self.phase != QuizPhase.QUESTIONS or not self.questions:
            return None
        return self.questions[self.index]

    @property
    def total_points(self) -> int:
        return sum(question.points for question in self.questions)

    @property
    def percentage(self) -> int:
        return percentage(self.score, self.total_points)

    @property
    def feedback_tier(self) -> FeedbackTier:
        if self.percentage >= 80:
            return FeedbackTier.EXCELLENT
        if self.percentage >= 60:
            return FeedbackTier.GOOD
        return FeedbackTier.KEEP_PRACTICING


class QuizSessionController:
    """Drives a quiz attempt of up to five randomly ordered questions."""

    def __init__(
        self,
        api: QuizApi,
        rng: random.Random | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self.api = api
        self.rng = rng or random.Random()
        self.notifier = notifier or Notifier()
        self.state = QuizSessionState()

    async def load(self) -> None:
        """Fetch every quiz; the subjects that have quizzes become selectable."""
        try:
            quizzes = await self.api.get_quizzes()
        except httpx.HTTPError as e:
            logger.warning("quiz_fetch_failed", error=str(e))
            self.state.error = "Failed to load quizzes"
            self.notifier.error(self.state.error, "Please try again later.")
            return
        self.state.quizzes_by_subject = quizzes
        self.state.error = None

    def select_subject(self, subject: Subject) -> None:
        """Start an attempt on a random quiz of ``subject``."""
        quizzes = self.state.quizzes_by_subject.get(subject, [])
        if not quizzes:
            self.state.error = f"No quizzes found for {subject.value.lower()}"
            self.notifier.error("No quizzes", self.state.error)
            return

        quiz = self.rng.choice(quizzes)
        questions = list(quiz.questions)
        self.rng.shuffle(questions)

        self.state.phase = QuizPhase.QUESTIONS
        self.state.subject = subject
        self.state.quiz = quiz
        self.state.questions = questions[:QUESTIONS_PER_QUIZ]
        self.state.index = 0
        self.state.selections = {}
        self.state.score = 0
        self.state.last_feedback = None
        self.state.error = None
        logger.info(
            "quiz_attempt_started",
            subject=subject.value,
            quiz_id=quiz.id,
            question_count=len(self.state.questions),
        )

    def select_option(self, question_id: int, option_id: int) -> None:
        """Record the chosen option, replacing any earlier choice for the question."""
        self.state.selections[question_id] = option_id

    def advance(self) -> AnswerFeedback | None:
        """
        Score the current question and move on.

        Returns:
            Feedback for the answered question, or None when no option was
            selected (the user is prompted and nothing changes)
        """
        question = self.state.current_question
        if question is None:
            return None

        option_id = self.state.selections.get(question.id)
        if option_id is None:
            self.notifier.notify("Please select an answer")
            return None

        selected = question.find_option(option_id)
        correct_option = question.correct_option()
        is_correct = bool(selected and selected.is_correct)
        if is_correct:
            self.state.score += question.points

        feedback = AnswerFeedback(
            correct=is_correct,
            points=question.points if is_correct else 0,
            correct_answer=correct_option.content if correct_option else None,
        )
        self.state.last_feedback = feedback

        if self.state.index + 1 < len(self.state.questions):
            self.state.index += 1
        else:
            self.state.phase = QuizPhase.COMPLETED
            logger.info(
                "quiz_attempt_completed",
                quiz_id=self.state.quiz.id if self.state.quiz else None,
                score=self.state.score,
                total_points=self.state.total_points,
            )
        return feedback

    def view_answers(self) -> list[AnswerReview]:
        """List each question with the chosen and the correct option."""
        if self.state.phase not in (QuizPhase.COMPLETED, QuizPhase.REVIEWING):
            return []
        self.state.phase = QuizPhase.REVIEWING
        return [
            AnswerReview(
                question=question,
                selected=(
                    question.find_option(self.state.selections[question.id])
                    if question.id in self.state.selections
                    else None
                ),
                correct=question.correct_option(),
            )
            for question in self.state.questions
        ]

    def try_again(self) -> None:
        """Start a new attempt on a random quiz of the same subject."""
        if self.state.subject is not None:
            self.select_subject(self.state.subject)

    def reset(self) -> None:
        self.state = QuizSessionState(quizzes_by_subject=self.state.quizzes_by_subject)
