"""Custom exception hierarchy for the Study Companion application."""


class StudyCompanionError(Exception):
    """Base exception for all Study Companion errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(StudyCompanionError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class FlashcardNotFoundError(NotFoundError):
    """Flashcard not found error."""

    def __init__(self, flashcard_id: int | None = None) -> None:
        self.flashcard_id = flashcard_id
        super().__init__("Flashcard not found")


class QuizNotFoundError(NotFoundError):
    """Quiz not found error."""

    def __init__(self, quiz_id: int | None = None) -> None:
        self.quiz_id = quiz_id
        super().__init__("Quiz not found")


class TaskNotFoundError(NotFoundError):
    """Task not found error."""

    def __init__(self, task_id: int | None = None) -> None:
        self.task_id = task_id
        super().__init__("Task not found")


class ValidationError(StudyCompanionError):
    """Validation error, reported to the caller as a 400."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message, the offending field and 400 status code."""
        self.field = field
        super().__init__(message, status_code=400)


class InvalidSubjectError(ValidationError):
    """Subject outside the supported enum."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__("Invalid subject", field="subject")


class MissingFieldsError(ValidationError):
    """One or more required fields were absent or empty."""

    def __init__(self, fields: list[str], message: str = "Missing required fields") -> None:
        self.fields = fields
        super().__init__(message, field=fields[0] if fields else None)
