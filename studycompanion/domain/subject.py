"""
Study subjects and the validation shared by every handler.

Flashcards, quizzes and tasks are all tagged with one of the subjects below.
Request bodies must use the exact enum value, while subject path segments
(``/flashcards/subject/physics``) are upper-cased before matching.
"""

from collections.abc import Mapping
from enum import StrEnum

from studycompanion.exceptions import InvalidSubjectError, MissingFieldsError


class Subject(StrEnum):
    """Study domain a flashcard, quiz or task belongs to."""

    PHYSICS = "PHYSICS"
    CHEMISTRY = "CHEMISTRY"
    MATHEMATICS = "MATHEMATICS"


SUBJECTS: tuple[Subject, ...] = tuple(Subject)


def parse_subject(value: object, *, case_insensitive: bool = False) -> Subject:
    """
    Parse a raw value into a Subject.

    Args:
        value: Raw value from a request body, query string or path segment
        case_insensitive: Upper-case string input before matching

    Returns:
        The matching Subject

    Raises:
        InvalidSubjectError: If the value is not one of the subject values
    """
    if isinstance(value, Subject):
        return value
    if not isinstance(value, str):
        raise InvalidSubjectError(value)

    candidate = value.upper() if case_insensitive else value
    try:
        return Subject(candidate)
    except ValueError as e:
        raise InvalidSubjectError(value) from e


def require_fields(
    payload: Mapping[str, object],
    *names: str,
    message: str = "Missing required fields",
) -> None:
    """
    Check that every named field is present and non-empty.

    Raises:
        MissingFieldsError: Listing the missing fields in declaration order
    """
    missing = [name for name in names if _is_blank(payload.get(name))]
    if missing:
        raise MissingFieldsError(missing, message=message)


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    return False
