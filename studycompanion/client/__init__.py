"""Async API client and the view-state controllers built on it."""

from studycompanion.client.api_client import StudyCompanionClient
from studycompanion.client.flashcard_session import (
    FlashcardPhase,
    FlashcardSessionController,
    FlashcardSessionState,
)
from studycompanion.client.notifications import Notification, NotificationVariant, Notifier
from studycompanion.client.quiz_session import (
    AnswerFeedback,
    AnswerReview,
    FeedbackTier,
    QuizPhase,
    QuizSessionController,
    QuizSessionState,
)
from studycompanion.client.task_tracker import (
    TaskFilter,
    TaskTrackerController,
    TaskTrackerState,
)

__all__ = [
    "AnswerFeedback",
    "AnswerReview",
    "FeedbackTier",
    "FlashcardPhase",
    "FlashcardSessionController",
    "FlashcardSessionState",
    "Notification",
    "NotificationVariant",
    "Notifier",
    "QuizPhase",
    "QuizSessionController",
    "QuizSessionState",
    "StudyCompanionClient",
    "TaskFilter",
    "TaskTrackerController",
    "TaskTrackerState",
]
