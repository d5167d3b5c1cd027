"""Pydantic schemas for Flashcard API request/response validation."""

from datetime import datetime as dt

from pydantic import Field

from studycompanion.domain.subject import Subject
from studycompanion.schemas.common_schemas import CamelModel


class FlashcardRequest(CamelModel):
    """Schema for creating or replacing a flashcard.

    Fields are optional here so that presence and subject membership are
    reported by the service as 400 errors.
    """

    question: str | None = Field(None, description="Question text for the flashcard")
    answer: str | None = Field(None, description="Answer text for the flashcard")
    subject: str | None = Field(None, description="One of PHYSICS, CHEMISTRY, MATHEMATICS")


class Flashcard(CamelModel):
    """Schema for Flashcard response."""

    id: int
    question: str
    answer: str
    subject: Subject
    created_at: dt
    updated_at: dt


FlashcardCounts = dict[Subject, int]
