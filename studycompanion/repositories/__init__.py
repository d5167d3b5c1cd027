"""Repository layer for database operations using repository pattern."""

from studycompanion.repositories.flashcard_repository import FlashcardRepository
from studycompanion.repositories.quiz_repository import OptionData, QuestionData, QuizRepository
from studycompanion.repositories.task_repository import TaskRepository
from studycompanion.repositories.time_entry_repository import TimeEntryRepository

__all__ = [
    "FlashcardRepository",
    "OptionData",
    "QuestionData",
    "QuizRepository",
    "TaskRepository",
    "TimeEntryRepository",
]
