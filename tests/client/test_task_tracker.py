"""Tests for the task/timer controller."""

import asyncio

import pytest
from fakes import FakeApi, FakeClock

from studycompanion import schemas
from studycompanion.client import TaskFilter, TaskTrackerController
from studycompanion.client import task_tracker as task_tracker_module
from studycompanion.domain.subject import Subject


def _duration(entry: schemas.TimeEntry) -> float:
    assert entry.end_time is not None
    return (entry.end_time - entry.start_time).total_seconds()


async def _loaded(api: FakeApi, clock: FakeClock) -> TaskTrackerController:
    controller = TaskTrackerController(api, clock=clock)
    await controller.load_tasks()
    return controller


class TestTimer:
    @pytest.mark.asyncio
    async def test_start_then_stop_records_elapsed_time(
        self, fake_api: FakeApi, clock: FakeClock
    ) -> None:
        task = fake_api.add_task("Derivatives")
        controller = await _loaded(fake_api, clock)

        assert await controller.start_timer(task.id) is True
        assert controller.state.active_task_id == task.id
        clock.advance(1500)
        assert await controller.stop_timer() is True

        entries = controller.state.tasks[0].time_entries
        assert len(entries) == 1
        assert entries[0].end_time is not None
        assert (entries[0].end_time - entries[0].start_time).total_seconds() == 1500
        assert controller.state.active_task_id is None
        assert controller.total_seconds == 1500

    @pytest.mark.asyncio
    async def test_starting_second_task_stops_the_first(
        self, fake_api: FakeApi, clock: FakeClock
    ) -> None:
        first = fake_api.add_task("First")
        second = fake_api.add_task("Second")
        controller = await _loaded(fake_api, clock)

        await controller.start_timer(first.id)
        clock.advance(60)
        await controller.start_timer(second.id)
        clock.advance(30)
        await controller.stop_timer()

        first_task = controller.state.find_task(first.id)
        second_task = controller.state.find_task(second.id)
        assert first_task is not None
        assert second_task is not None
        assert [_duration(e) for e in first_task.time_entries] == [60]
        assert [_duration(e) for e in second_task.time_entries] == [30]
        assert fake_api.open_entries() == []
        calls = [name for name, _ in fake_api.calls]
        assert calls.index("update_time_entry") < calls.index("create_time_entry", 2)

    @pytest.mark.asyncio
    async def test_tick_only_while_active(self, fake_api: FakeApi, clock: FakeClock) -> None:
        task = fake_api.add_task("Ticking")
        controller = await _loaded(fake_api, clock)

        controller.tick()
        assert controller.state.elapsed_seconds == 0

        await controller.start_timer(task.id)
        controller.tick()
        controller.tick()
        assert controller.state.elapsed_seconds == 2

        await controller.stop_timer()
        assert controller.state.elapsed_seconds == 0

    @pytest.mark.asyncio
    async def test_auto_tick(
        self, fake_api: FakeApi, clock: FakeClock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(task_tracker_module, "TICK_INTERVAL_SECONDS", 0.01)
        task = fake_api.add_task("Background")
        controller = TaskTrackerController(fake_api, clock=clock, auto_tick=True)
        await controller.load_tasks()

        await controller.start_timer(task.id)
        await asyncio.sleep(0.1)

        assert controller.state.elapsed_seconds >= 1
        await controller.aclose()

    @pytest.mark.asyncio
    async def test_failed_start_leaves_state(self, fake_api: FakeApi, clock: FakeClock) -> None:
        task = fake_api.add_task("Unlucky")
        controller = await _loaded(fake_api, clock)
        fake_api.failing.add("create_time_entry")

        assert await controller.start_timer(task.id) is False

        assert controller.state.active_task_id is None
        assert controller.state.tasks[0].time_entries == []
        assert controller.state.error == "Failed to start timer"

    @pytest.mark.asyncio
    async def test_failed_stop_keeps_timer_running(
        self, fake_api: FakeApi, clock: FakeClock
    ) -> None:
        task = fake_api.add_task("Sticky")
        controller = await _loaded(fake_api, clock)
        await controller.start_timer(task.id)
        fake_api.failing.add("update_time_entry")

        assert await controller.stop_timer() is False

        assert controller.state.active_task_id == task.id
        assert controller.state.tasks[0].time_entries[-1].end_time is None


class TestTaskActions:
    @pytest.mark.asyncio
    async def test_create_task_prepends(self, fake_api: FakeApi, clock: FakeClock) -> None:
        fake_api.add_task("Existing")
        controller = await _loaded(fake_api, clock)

        created = await controller.create_task("  New  ", Subject.PHYSICS, "notes")

        assert created is not None
        assert controller.state.tasks[0].title == "New"
        assert controller.state.tasks[0].subject == Subject.PHYSICS

    @pytest.mark.asyncio
    async def test_create_task_requires_title(self, fake_api: FakeApi, clock: FakeClock) -> None:
        controller = await _loaded(fake_api, clock)

        assert await controller.create_task("   ", Subject.PHYSICS) is None

        assert controller.state.tasks == []
        assert "create_task" not in [name for name, _ in fake_api.calls]

    @pytest.mark.asyncio
    async def test_toggle_complete_stops_active_timer(
        self, fake_api: FakeApi, clock: FakeClock
    ) -> None:
        task = fake_api.add_task("Finish me")
        controller = await _loaded(fake_api, clock)
        await controller.start_timer(task.id)
        clock.advance(90)

        await controller.toggle_complete(task.id)

        updated = controller.state.find_task(task.id)
        assert updated is not None
        assert updated.completed is True
        assert controller.state.active_task_id is None
        assert fake_api.open_entries() == []
        assert controller.filtered_tasks(TaskFilter.COMPLETED) == [updated]
        assert controller.filtered_tasks(TaskFilter.ACTIVE) == []
        assert controller.completion_rate == 1.0

    @pytest.mark.asyncio
    async def test_delete_active_task_stops_timer_first(
        self, fake_api: FakeApi, clock: FakeClock
    ) -> None:
        task = fake_api.add_task("Doomed")
        controller = await _loaded(fake_api, clock)
        await controller.start_timer(task.id)

        await controller.delete_task(task.id)

        calls = [name for name, _ in fake_api.calls]
        assert calls[-2:] == ["update_time_entry", "delete_task"]
        assert controller.state.tasks == []
        assert controller.state.active_task_id is None

    @pytest.mark.asyncio
    async def test_delete_running_time_entry_clears_active(
        self, fake_api: FakeApi, clock: FakeClock
    ) -> None:
        task = fake_api.add_task("Oops")
        controller = await _loaded(fake_api, clock)
        await controller.start_timer(task.id)
        entry_id = controller.state.tasks[0].time_entries[-1].id

        await controller.delete_time_entry(task.id, entry_id)

        assert controller.state.tasks[0].time_entries == []
        assert controller.state.active_task_id is None

    @pytest.mark.asyncio
    async def test_breakdowns(self, fake_api: FakeApi, clock: FakeClock) -> None:
        physics = fake_api.add_task("Optics", Subject.PHYSICS)
        fake_api.add_task("Untouched", Subject.CHEMISTRY)
        controller = await _loaded(fake_api, clock)
        await controller.start_timer(physics.id)
        clock.advance(600)
        await controller.stop_timer()

        assert [(i.name, i.seconds) for i in controller.task_breakdown] == [("Optics", 600)]
        assert [(i.name, i.seconds) for i in controller.subject_breakdown] == [("PHYSICS", 600)]
        assert controller.last_seven_days()[-1].seconds == 600
