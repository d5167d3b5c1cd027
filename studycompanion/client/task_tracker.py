"""Task list with a single running timer and derived study-time metrics."""

import asyncio
import contextlib
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Protocol

import httpx
import structlog

from studycompanion import schemas
from studycompanion.client.notifications import Notifier
from studycompanion.domain.services import (
    DailyTime,
    TimeBreakdownItem,
    TimeTrackingMetrics,
)
from studycompanion.domain.subject import Subject

logger = structlog.get_logger(__name__)

TICK_INTERVAL_SECONDS = 1.0


class TaskApi(Protocol):
    async def get_tasks(self) -> list[schemas.Task]: ...

    async def create_task(self, request: schemas.TaskCreateRequest) -> schemas.Task: ...

    async def update_task(
        self, task_id: int, request: schemas.TaskUpdateRequest
    ) -> schemas.Task: ...

    async def delete_task(self, task_id: int) -> None: ...

    async def create_time_entry(
        self, task_id: int, request: schemas.TimeEntryCreateRequest
    ) -> schemas.TimeEntry: ...

    async def update_time_entry(
        self, entry_id: int, request: schemas.TimeEntryUpdateRequest
    ) -> schemas.TimeEntry: ...

    async def delete_time_entry(self, entry_id: int) -> None: ...


class TaskFilter(StrEnum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass
class TaskTrackerState:
    tasks: list[schemas.Task] = field(default_factory=list)
    active_task_id: int | None = None
    elapsed_seconds: int = 0
    loading: bool = False
    error: str | None = None

    @property
    def active_task(self) -> schemas.Task | None:
        if self.active_task_id is None:
            return None
        return self.find_task(self.active_task_id)

    def find_task(self, task_id: int) -> schemas.Task | None:
        return next((task for task in self.tasks if task.id == task_id), None)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TaskTrackerController:
    """
    Keeps the task list in sync with the API and times study sessions.

    At most one task is active at a time in this controller. Local state is
    only changed after the API confirms a write; a failed call leaves it as
    it was and raises a notification.

    Args:
        api: API client
        clock: Returns the current time; timer start and stop use it
        auto_tick: Run an asyncio task calling ``tick`` every second while a
            timer is running
        notifier: Receives user-facing notifications
    """

    def __init__(
        self,
        api: TaskApi,
        clock: Callable[[], datetime] = _utc_now,
        auto_tick: bool = False,
        notifier: Notifier | None = None,
    ) -> None:
        self.api = api
        self.clock = clock
        self.auto_tick = auto_tick
        self.notifier = notifier or Notifier()
        self.state = TaskTrackerState()
        self._ticker: asyncio.Task[None] | None = None

    async def load_tasks(self) -> None:
        self.state.loading = True
        try:
            self.state.tasks = await self.api.get_tasks()
            self.state.error = None
        except httpx.HTTPError as e:
            self._fail("Failed to load tasks", e)
        finally:
            self.state.loading = False

    async def create_task(
        self, title: str, subject: Subject, description: str | None = None
    ) -> schemas.Task | None:
        """Create a task and put it at the top of the list."""
        if not title.strip():
            self.notifier.error("Title is required")
            return None

        request = schemas.TaskCreateRequest(
            title=title.strip(), subject=subject, description=description or None
        )
        try:
            task = await self.api.create_task(request)
        except httpx.HTTPError as e:
            self._fail("Failed to create task", e)
            return None

        self.state.tasks.insert(0, task)
        self.notifier.notify("Task created", task.title)
        return task

    async def start_timer(self, task_id: int) -> bool:
        """
        Start timing ``task_id``, stopping the currently active task first.

        Returns:
            True when the timer is running on ``task_id`` afterwards
        """
        task = self.state.find_task(task_id)
        if task is None:
            return False
        if self.state.active_task_id == task_id:
            return True
        if self.state.active_task_id is not None and not await self.stop_timer():
            return False

        request = schemas.TimeEntryCreateRequest(start_time=self.clock())
        try:
            entry = await self.api.create_time_entry(task_id, request)
        except httpx.HTTPError as e:
            self._fail("Failed to start timer", e)
            return False

        task.time_entries.append(entry)
        self.state.active_task_id = task_id
        self.state.elapsed_seconds = 0
        self._start_ticking()
        logger.info("timer_started", task_id=task_id, time_entry_id=entry.id)
        return True

    async def stop_timer(self) -> bool:
        """
        Close the active task's most recent entry if it is still open.

        Returns:
            True when no timer is running afterwards
        """
        task = self.state.active_task
        if task is None:
            self._clear_active()
            return True

        entry = task.time_entries[-1] if task.time_entries else None
        if entry is not None and entry.is_open:
            request = schemas.TimeEntryUpdateRequest(end_time=self.clock())
            try:
                updated = await self.api.update_time_entry(entry.id, request)
            except httpx.HTTPError as e:
                self._fail("Failed to stop timer", e)
                return False
            task.time_entries[-1] = updated
            logger.info(
                "timer_stopped",
                task_id=task.id,
                time_entry_id=entry.id,
                elapsed_seconds=self.state.elapsed_seconds,
            )

        self._clear_active()
        return True

    async def toggle_complete(self, task_id: int) -> None:
        """Flip a task's completed flag, stopping its timer first if it is running."""
        task = self.state.find_task(task_id)
        if task is None:
            return
        if self.state.active_task_id == task_id and not await self.stop_timer():
            return

        try:
            updated = await self.api.update_task(
                task_id, schemas.TaskUpdateRequest(completed=not task.completed)
            )
        except httpx.HTTPError as e:
            self._fail("Failed to update task", e)
            return
        self._replace_task(updated)

    async def delete_task(self, task_id: int) -> None:
        if self.state.find_task(task_id) is None:
            return
        if self.state.active_task_id == task_id and not await self.stop_timer():
            return

        try:
            await self.api.delete_task(task_id)
        except httpx.HTTPError as e:
            self._fail("Failed to delete task", e)
            return
        self.state.tasks = [task for task in self.state.tasks if task.id != task_id]
        self.notifier.notify("Task deleted")

    async def delete_time_entry(self, task_id: int, entry_id: int) -> None:
        """Delete one time entry; deleting the running entry also stops the timer locally."""
        task = self.state.find_task(task_id)
        if task is None:
            return

        try:
            await self.api.delete_time_entry(entry_id)
        except httpx.HTTPError as e:
            self._fail("Failed to delete time entry", e)
            return

        removed = next((e for e in task.time_entries if e.id == entry_id), None)
        task.time_entries = [e for e in task.time_entries if e.id != entry_id]
        if removed is not None and removed.is_open and self.state.active_task_id == task_id:
            self._clear_active()

    def tick(self) -> None:
        if self.state.active_task_id is not None:
            self.state.elapsed_seconds += 1

    def filtered_tasks(self, tab: TaskFilter = TaskFilter.ALL) -> list[schemas.Task]:
        if tab == TaskFilter.ACTIVE:
            return [task for task in self.state.tasks if not task.completed]
        if tab == TaskFilter.COMPLETED:
            return [task for task in self.state.tasks if task.completed]
        return list(self.state.tasks)

    # --- Derived metrics ---

    @property
    def total_seconds(self) -> int:
        return TimeTrackingMetrics.total_seconds(self.state.tasks)

    @property
    def task_breakdown(self) -> list[TimeBreakdownItem]:
        return TimeTrackingMetrics.task_breakdown(self.state.tasks)

    @property
    def subject_breakdown(self) -> list[TimeBreakdownItem]:
        return TimeTrackingMetrics.subject_breakdown(self.state.tasks)

    @property
    def completion_rate(self) -> float:
        return TimeTrackingMetrics.completion_rate(self.state.tasks)

    def last_seven_days(self) -> list[DailyTime]:
        return TimeTrackingMetrics.last_seven_days(self.state.tasks, now=self.clock())

    async def aclose(self) -> None:
        """Stop the background ticker, if any. The running timer is left open."""
        await self._stop_ticking()

    def _start_ticking(self) -> None:
        if not self.auto_tick or self._ticker is not None:
            return
        self._ticker = asyncio.create_task(self._run_ticker())

    async def _run_ticker(self) -> None:
        while True:
            await asyncio.sleep(TICK_INTERVAL_SECONDS)
            self.tick()

    async def _stop_ticking(self) -> None:
        ticker, self._ticker = self._ticker, None
        if ticker is None:
            return
        ticker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await ticker

    def _clear_active(self) -> None:
        self.state.active_task_id = None
        self.state.elapsed_seconds = 0
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def _replace_task(self, updated: schemas.Task) -> None:
        self.state.tasks = [updated if task.id == updated.id else task for task in self.state.tasks]

    def _fail(self, title: str, error: httpx.HTTPError) -> None:
        logger.warning("task_request_failed", action=title, error=str(error))
        self.state.error = title
        self.notifier.error(title, "Please try again later.")
