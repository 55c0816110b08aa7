"""Tests for the deferred-task facilities."""

import asyncio

import pytest

from gencont import AsyncioScheduler, Scheduler, SchedulerStepLimitError, TaskQueue


class TestTaskQueue:
    def test_is_a_scheduler(self):
        assert isinstance(TaskQueue(), Scheduler)

    def test_schedule_does_not_run_immediately(self):
        queue = TaskQueue()
        ran = []
        queue.schedule(lambda: ran.append(1))

        assert ran == []
        assert queue.pending == 1
        queue.run()
        assert ran == [1]
        assert queue.pending == 0

    def test_tasks_run_in_fifo_order(self):
        queue = TaskQueue()
        ran = []
        for i in range(5):
            queue.schedule(lambda i=i: ran.append(i))

        queue.run()

        assert ran == [0, 1, 2, 3, 4]

    def test_run_once_only_runs_the_current_turn(self):
        queue = TaskQueue()
        ran = []

        def first():
            ran.append("first")
            queue.schedule(lambda: ran.append("next turn"))

        queue.schedule(first)
        queue.schedule(lambda: ran.append("second"))

        assert queue.run_once() == 2
        assert ran == ["first", "second"]
        assert queue.run_once() == 1
        assert ran == ["first", "second", "next turn"]

    def test_timers_fire_by_due_tick_then_registration(self):
        queue = TaskQueue()
        ran = []
        queue.call_later(5, lambda: ran.append(("b", queue.now)))
        queue.call_later(2, lambda: ran.append(("a", queue.now)))
        queue.call_later(5, lambda: ran.append(("c", queue.now)))

        queue.run()

        assert ran == [("a", 2), ("b", 5), ("c", 5)]
        assert queue.now == 5

    def test_clock_only_moves_when_nothing_is_ready(self):
        queue = TaskQueue()
        ran = []
        queue.call_later(0, lambda: ran.append("timer"))
        queue.schedule(lambda: ran.append("ready"))

        queue.run()

        assert ran == ["ready", "timer"]

    def test_timers_are_relative_to_the_current_tick(self):
        queue = TaskQueue()
        seen = []

        def later():
            seen.append(queue.now)
            queue.call_later(3, lambda: seen.append(queue.now))

        queue.call_later(4, later)
        queue.run()

        assert seen == [4, 7]

    def test_negative_ticks_are_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            TaskQueue().call_later(-1, lambda: None)

    def test_run_until_stops_early(self):
        queue = TaskQueue()
        ran = []
        for i in range(3):
            queue.call_later(i + 1, lambda i=i: ran.append(i))

        queue.run_until(lambda: len(ran) == 2)

        assert ran == [0, 1]
        assert queue.pending == 1

    def test_step_limit(self):
        queue = TaskQueue(max_steps=10)

        def forever():
            queue.schedule(forever)

        queue.schedule(forever)
        with pytest.raises(SchedulerStepLimitError) as exc_info:
            queue.run()
        assert exc_info.value.max_steps == 10
        assert queue.steps == 10

    def test_step_limit_applies_per_run(self):
        queue = TaskQueue(max_steps=5)
        ran = []
        for i in range(3):
            queue.schedule(lambda i=i: ran.append(i))
        queue.run()
        for i in range(3, 6):
            queue.schedule(lambda i=i: ran.append(i))
        queue.run()

        assert ran == [0, 1, 2, 3, 4, 5]
        assert queue.steps == 3

    def test_step_limit_keeps_the_unrun_task_queued(self):
        queue = TaskQueue(max_steps=1)
        ran = []
        queue.schedule(lambda: ran.append("first"))
        queue.schedule(lambda: ran.append("second"))

        with pytest.raises(SchedulerStepLimitError):
            queue.run()
        assert ran == ["first"]
        assert queue.pending == 1

        queue.run()
        assert ran == ["first", "second"]

    def test_delay_requires_call_later(self):
        from gencont.scheduler import _DelayMixin

        class NoTimers(_DelayMixin):
            pass

        with pytest.raises(TypeError):
            NoTimers()

    def test_failing_task_propagates_and_is_logged(self, log_records):
        queue = TaskQueue()
        ran = []

        def broken():
            raise RuntimeError("task failed")

        queue.schedule(broken)
        queue.schedule(lambda: ran.append("after"))

        with pytest.raises(RuntimeError, match="task failed"):
            queue.run()
        assert any(r["level"].name == "ERROR" for r in log_records)

        queue.run()
        assert ran == ["after"]

    def test_delay_completes_with_value_after_ticks(self, recorder):
        queue = TaskQueue()
        queue.delay(7, "late")(recorder)

        queue.run()

        assert recorder.calls == [(None, "late")]
        assert queue.now == 7


class TestAsyncioScheduler:
    @pytest.mark.asyncio
    async def test_schedule_runs_on_a_later_loop_iteration(self):
        scheduler = AsyncioScheduler()
        ran = []
        scheduler.schedule(lambda: ran.append(1))
        scheduler.schedule(lambda: ran.append(2))

        assert ran == []
        await asyncio.sleep(0)
        assert ran == [1, 2]

    @pytest.mark.asyncio
    async def test_delay_uses_tick_seconds(self, recorder):
        scheduler = AsyncioScheduler(tick_seconds=0.001)
        scheduler.delay(5, "done")(recorder)

        await asyncio.sleep(0.05)

        assert recorder.calls == [(None, "done")]

    @pytest.mark.asyncio
    async def test_explicit_loop_is_used(self):
        loop = asyncio.get_running_loop()
        scheduler = AsyncioScheduler(loop=loop)
        assert scheduler.loop is loop

    def test_without_running_loop_schedule_fails(self):
        with pytest.raises(RuntimeError):
            AsyncioScheduler().schedule(lambda: None)
