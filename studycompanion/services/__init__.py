"""Service layer for business logic."""

from studycompanion.services.flashcard_service import FlashcardService
from studycompanion.services.quiz_service import QuizService
from studycompanion.services.task_service import TaskService, TimeEntryService

__all__ = [
    "FlashcardService",
    "QuizService",
    "TaskService",
    "TimeEntryService",
]
