"""Pydantic schemas for Task and TimeEntry API request/response validation."""

from datetime import datetime as dt

from pydantic import Field

from studycompanion.domain.subject import Subject
from studycompanion.schemas.common_schemas import CamelModel


class TaskCreateRequest(CamelModel):
    """Schema for creating a task."""

    title: str | None = Field(None, description="Task title")
    description: str | None = Field(None, description="Optional task description")
    subject: str | None = Field(None, description="One of PHYSICS, CHEMISTRY, MATHEMATICS")


class TaskUpdateRequest(CamelModel):
    """Schema for a partial task update; omitted fields are left unchanged."""

    title: str | None = Field(None, description="New task title")
    description: str | None = Field(None, description="New description, null clears it")
    subject: str | None = Field(None, description="New subject")
    completed: bool | None = Field(None, description="Completion flag")


class TimeEntryCreateRequest(CamelModel):
    """Schema for creating a time entry."""

    start_time: dt | None = Field(None, description="When the timer started")
    end_time: dt | None = Field(None, description="When the timer stopped, null while running")


class TimeEntryUpdateRequest(CamelModel):
    """Schema for updating a time entry.

    Omitted fields are left unchanged; an explicit ``endTime: null`` reopens
    the entry.
    """

    start_time: dt | None = Field(None, description="New start time")
    end_time: dt | None = Field(None, description="New end time")


class TimeEntry(CamelModel):
    """Schema for TimeEntry response."""

    id: int
    start_time: dt
    end_time: dt | None
    task_id: int
    created_at: dt
    updated_at: dt

    @property
    def is_open(self) -> bool:
        """Whether the timer for this entry is still running."""
        return self.end_time is None


class Task(CamelModel):
    """Schema for Task response with its time entries."""

    id: int
    title: str
    description: str | None
    subject: Subject
    completed: bool
    created_at: dt
    updated_at: dt
    time_entries: list[TimeEntry] = Field(default_factory=list)
