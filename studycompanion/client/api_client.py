"""Study Companion REST API client."""

import logging
from types import TracebackType
from typing import Any, Self

import httpx
from pydantic import TypeAdapter

from studycompanion import schemas
from studycompanion.domain.subject import Subject

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"

_flashcard_list = TypeAdapter(list[schemas.Flashcard])
_flashcard_counts = TypeAdapter(schemas.FlashcardCounts)
_quiz_list = TypeAdapter(list[schemas.Quiz])
_quizzes_by_subject = TypeAdapter(schemas.QuizzesBySubject)
_task_list = TypeAdapter(list[schemas.Task])
_time_entry_list = TypeAdapter(list[schemas.TimeEntry])


def _body(request: schemas.CamelModel) -> dict[str, Any]:
    """Serialize a request schema with camelCase keys, leaving out unset fields."""
    return request.model_dump(mode="json", by_alias=True, exclude_unset=True)


class StudyCompanionClient:
    """HTTP client for the Study Companion REST API.

    Every call raises ``httpx.HTTPStatusError`` for non-2xx responses and
    returns parsed response schemas otherwise.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            logger.warning(f"{method} {path} failed with status {response.status_code}")
        response.raise_for_status()
        return response

    # --- Flashcard endpoints ---

    async def get_flashcards(self, subject: Subject | None = None) -> list[schemas.Flashcard]:
        """List flashcards newest first, optionally filtered by subject."""
        params = {"subject": subject.value} if subject else None
        response = await self._request("GET", "/flashcards", params=params)
        return _flashcard_list.validate_python(response.json())

    async def get_flashcard_counts(self) -> dict[Subject, int]:
        response = await self._request("GET", "/flashcards/counts")
        return _flashcard_counts.validate_python(response.json())

    async def get_flashcards_by_subject(self, subject: str) -> list[schemas.Flashcard]:
        response = await self._request("GET", f"/flashcards/subject/{subject}")
        return _flashcard_list.validate_python(response.json())

    async def get_flashcard(self, flashcard_id: int) -> schemas.Flashcard:
        response = await self._request("GET", f"/flashcards/{flashcard_id}")
        return schemas.Flashcard.model_validate(response.json())

    async def create_flashcard(
        self, question: str, answer: str, subject: Subject
    ) -> schemas.Flashcard:
        request = schemas.FlashcardRequest(question=question, answer=answer, subject=subject)
        response = await self._request("POST", "/flashcards", json=_body(request))
        return schemas.Flashcard.model_validate(response.json())

    async def update_flashcard(
        self, flashcard_id: int, question: str, answer: str, subject: Subject
    ) -> schemas.Flashcard:
        request = schemas.FlashcardRequest(question=question, answer=answer, subject=subject)
        response = await self._request("PUT", f"/flashcards/{flashcard_id}", json=_body(request))
        return schemas.Flashcard.model_validate(response.json())

    async def delete_flashcard(self, flashcard_id: int) -> None:
        await self._request("DELETE", f"/flashcards/{flashcard_id}")

    # --- Quiz endpoints ---

    async def get_quizzes(self) -> dict[Subject, list[schemas.Quiz]]:
        """Get every quiz grouped by subject."""
        response = await self._request("GET", "/quizzes")
        return _quizzes_by_subject.validate_python(response.json())

    async def get_quiz(self, quiz_id: int) -> schemas.Quiz:
        response = await self._request("GET", f"/quizzes/{quiz_id}")
        return schemas.Quiz.model_validate(response.json())

    async def get_quizzes_by_subject(self, subject: str) -> list[schemas.Quiz]:
        response = await self._request("GET", f"/quizzes/subject/{subject}")
        return _quiz_list.validate_python(response.json())

    async def create_quiz(self, request: schemas.QuizCreateRequest) -> schemas.Quiz:
        response = await self._request("POST", "/quizzes", json=_body(request))
        return schemas.Quiz.model_validate(response.json())

    async def delete_quiz(self, quiz_id: int) -> None:
        await self._request("DELETE", f"/quizzes/{quiz_id}")

    # --- Task endpoints ---

    async def get_tasks(self) -> list[schemas.Task]:
        response = await self._request("GET", "/tasks")
        return _task_list.validate_python(response.json())

    async def get_task(self, task_id: int) -> schemas.Task:
        response = await self._request("GET", f"/tasks/{task_id}")
        return schemas.Task.model_validate(response.json())

    async def create_task(self, request: schemas.TaskCreateRequest) -> schemas.Task:
        response = await self._request("POST", "/tasks", json=_body(request))
        return schemas.Task.model_validate(response.json())

    async def update_task(self, task_id: int, request: schemas.TaskUpdateRequest) -> schemas.Task:
        """Partially update a task; only fields set on ``request`` are sent."""
        response = await self._request("PATCH", f"/tasks/{task_id}", json=_body(request))
        return schemas.Task.model_validate(response.json())

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", f"/tasks/{task_id}")

    # --- Time entry endpoints ---

    async def get_time_entries(self, task_id: int) -> list[schemas.TimeEntry]:
        response = await self._request("GET", f"/tasks/{task_id}/time-entries")
        return _time_entry_list.validate_python(response.json())

    async def create_time_entry(
        self, task_id: int, request: schemas.TimeEntryCreateRequest
    ) -> schemas.TimeEntry:
        response = await self._request(
            "POST", f"/tasks/{task_id}/time-entries", json=_body(request)
        )
        return schemas.TimeEntry.model_validate(response.json())

    async def update_time_entry(
        self, entry_id: int, request: schemas.TimeEntryUpdateRequest
    ) -> schemas.TimeEntry:
        """Update a time entry; only fields set on ``request`` are sent."""
        response = await self._request("PATCH", f"/time-entries/{entry_id}", json=_body(request))
        return schemas.TimeEntry.model_validate(response.json())

    async def delete_time_entry(self, entry_id: int) -> None:
        await self._request("DELETE", f"/time-entries/{entry_id}")
