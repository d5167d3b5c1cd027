"""Domain service for deriving study-time statistics from tasks."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from typing import Protocol

from studycompanion.domain.subject import Subject
from studycompanion.utils import round_half_up

HISTOGRAM_DAYS = 7


class TimeEntryLike(Protocol):
    start_time: datetime
    end_time: datetime | None


class TaskLike(Protocol):
    title: str
    subject: Subject
    completed: bool

    @property
    def time_entries(self) -> Sequence[TimeEntryLike]: ...


@dataclass
class TimeBreakdownItem:
    """Tracked time attributed to one task or subject."""

    name: str
    seconds: int


@dataclass
class DailyTime:
    """Tracked time falling inside one calendar day."""

    date: date
    label: str
    seconds: int

    @property
    def hours(self) -> float:
        """Hours rounded to two decimals."""
        return round_half_up(self.seconds / 36) / 100


def format_duration(seconds: int) -> str:
    """Render a duration as HH:MM:SS; hours are not wrapped at 24."""
    seconds = max(int(seconds), 0)
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _midnight(day: date, tz: tzinfo | None) -> datetime:
    if tz is None:
        # Naive local midnight resolved with that date's own offset
        return datetime(day.year, day.month, day.day).astimezone()
    return datetime(day.year, day.month, day.day, tzinfo=tz)


def _closed_intervals(entries: Iterable[TimeEntryLike]) -> list[tuple[datetime, datetime]]:
    return [
        (_as_utc(entry.start_time), _as_utc(entry.end_time))
        for entry in entries
        if entry.end_time is not None
    ]


class TimeTrackingMetrics:
    """
    Stateless calculations over tasks and their time entries.

    Only closed entries (with an end time) count towards any total; an
    entry whose timer is still running contributes nothing until stopped.
    """

    @staticmethod
    def total_seconds_for_task(task: TaskLike) -> int:
        """Sum of end minus start over the task's closed entries, in whole seconds."""
        total = sum(
            (end - start).total_seconds() for start, end in _closed_intervals(task.time_entries)
        )
        return int(total)

    @classmethod
    def total_seconds(cls, tasks: Iterable[TaskLike]) -> int:
        return sum(cls.total_seconds_for_task(task) for task in tasks)

    @classmethod
    def task_breakdown(cls, tasks: Iterable[TaskLike]) -> list[TimeBreakdownItem]:
        """Per-task totals, keeping only tasks with tracked time."""
        items = [TimeBreakdownItem(task.title, cls.total_seconds_for_task(task)) for task in tasks]
        return [item for item in items if item.seconds > 0]

    @classmethod
    def subject_breakdown(cls, tasks: Iterable[TaskLike]) -> list[TimeBreakdownItem]:
        """
        Per-subject totals, ordered by the first task with tracked time in each subject.

        Subjects whose tasks have no tracked time are omitted.
        """
        totals: dict[Subject, int] = {}
        for task in tasks:
            seconds = cls.total_seconds_for_task(task)
            if seconds > 0:
                totals[task.subject] = totals.get(task.subject, 0) + seconds
        return [TimeBreakdownItem(subject.value, seconds) for subject, seconds in totals.items()]

    @staticmethod
    def last_seven_days(
        tasks: Iterable[TaskLike],
        now: datetime | None = None,
        tz: tzinfo | None = None,
    ) -> list[DailyTime]:
        """
        Histogram of tracked time over the last seven calendar days, oldest first.

        Each closed entry is clipped to every day window it overlaps, so an
        entry spanning midnight is split between both days.

        Args:
            tasks: Tasks with their time entries
            now: Reference time, defaults to the current time
            tz: Timezone whose midnights delimit the days, defaults to the system
                local time with the UTC offset in effect on each day
        """
        current = _as_utc(now) if now else datetime.now(UTC)
        today = current.astimezone(tz).date()

        intervals = [
            interval for task in tasks for interval in _closed_intervals(task.time_entries)
        ]

        days = []
        for offset in range(HISTOGRAM_DAYS - 1, -1, -1):
            day = today - timedelta(days=offset)
            window_start = _midnight(day, tz)
            window_end = _midnight(day + timedelta(days=1), tz)

            overlap = 0.0
            for start, end in intervals:
                clipped = (min(end, window_end) - max(start, window_start)).total_seconds()
                if clipped > 0:
                    overlap += clipped

            days.append(DailyTime(date=day, label=day.strftime("%a"), seconds=int(overlap)))
        return days

    @staticmethod
    def completion_rate(tasks: Sequence[TaskLike]) -> float:
        """Fraction of tasks marked completed, 0.0 when there are none."""
        if not tasks:
            return 0.0
        return sum(1 for task in tasks if task.completed) / len(tasks)
