"""Pydantic schemas for request/response validation."""

from studycompanion.schemas.common_schemas import (
    CamelModel,
    ErrorResponse,
    MessageResponse,
)
from studycompanion.schemas.flashcard_schemas import Flashcard, FlashcardCounts, FlashcardRequest
from studycompanion.schemas.quiz_schemas import (
    Option,
    OptionCreate,
    Question,
    QuestionCreate,
    Quiz,
    QuizCreateRequest,
    QuizzesBySubject,
)
from studycompanion.schemas.task_schemas import (
    Task,
    TaskCreateRequest,
    TaskUpdateRequest,
    TimeEntry,
    TimeEntryCreateRequest,
    TimeEntryUpdateRequest,
)

__all__ = [
    "CamelModel",
    "ErrorResponse",
    "Flashcard",
    "FlashcardCounts",
    "FlashcardRequest",
    "MessageResponse",
    "Option",
    "OptionCreate",
    "Question",
    "QuestionCreate",
    "Quiz",
    "QuizCreateRequest",
    "QuizzesBySubject",
    "Task",
    "TaskCreateRequest",
    "TaskUpdateRequest",
    "TimeEntry",
    "TimeEntryCreateRequest",
    "TimeEntryUpdateRequest",
]
