"""Pydantic schemas for Quiz API request/response validation."""

from datetime import datetime as dt

from pydantic import Field

from studycompanion.domain.subject import Subject
from studycompanion.schemas.common_schemas import CamelModel


class OptionCreate(CamelModel):
    """Answer choice inside a quiz creation payload."""

    content: str = Field(..., description="Option text")
    is_correct: bool = Field(False, description="Whether this option is the right answer")


class QuestionCreate(CamelModel):
    """Question inside a quiz creation payload."""

    content: str = Field(..., description="Question text")
    points: int = Field(1, ge=0, description="Points awarded for a correct answer")
    options: list[OptionCreate] = Field(default_factory=list, description="Ordered options")


class QuizCreateRequest(CamelModel):
    """Schema for creating a quiz with its questions and options in one write."""

    subject: str | None = Field(None, description="One of PHYSICS, CHEMISTRY, MATHEMATICS")
    questions: list[QuestionCreate] | None = Field(None, description="Ordered questions")


class Option(CamelModel):
    """Schema for Option response."""

    id: int
    content: str
    is_correct: bool
    question_id: int


class Question(CamelModel):
    """Schema for Question response with its options."""

    id: int
    content: str
    points: int
    quiz_id: int
    options: list[Option] = Field(default_factory=list)

    def correct_option(self) -> Option | None:
        """First option flagged as correct, if any."""
        return next((option for option in self.options if option.is_correct), None)

    def find_option(self, option_id: int) -> Option | None:
        """Option with the given id, if it belongs to this question."""
        return next((option for option in self.options if option.id == option_id), None)


class Quiz(CamelModel):
    """Schema for Quiz response with nested questions and options."""

    id: int
    subject: Subject
    created_at: dt
    updated_at: dt
    questions: list[Question] = Field(default_factory=list)


QuizzesBySubject = dict[Subject, list[Quiz]]
