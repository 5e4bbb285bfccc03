"""Scheduler tests."""

from __future__ import annotations

from backend.engine.scheduler import ManualScheduler, PollingScheduler


def test_manual_runs_in_due_order() -> None:
    scheduler = ManualScheduler()
    fired: list[str] = []
    scheduler.schedule(300, lambda: fired.append("c"))
    scheduler.schedule(100, lambda: fired.append("a"))
    scheduler.schedule(200, lambda: fired.append("b"))

    assert scheduler.advance(150) == 1
    assert fired == ["a"]
    assert scheduler.advance(1000) == 2
    assert fired == ["a", "b", "c"]
    assert scheduler.now_ms == 1150


def test_manual_cancel() -> None:
    scheduler = ManualScheduler()
    fired: list[int] = []
    token = scheduler.schedule(100, lambda: fired.append(1))
    token.cancel()
    assert token.cancelled
    assert scheduler.pending == 0
    scheduler.advance(500)
    assert fired == []


def test_manual_reschedule_from_callback() -> None:
    scheduler = ManualScheduler()
    times: list[float] = []

    def tick() -> None:
        times.append(scheduler.now_ms)
        scheduler.schedule(1000, tick)

    scheduler.schedule(1000, tick)
    scheduler.advance(3500)
    assert times == [1000, 2000, 3000]
    assert scheduler.pending == 1


def test_polling_uses_clock() -> None:
    now = [10.0]
    scheduler = PollingScheduler(clock=lambda: now[0])
    fired: list[int] = []
    scheduler.schedule(500, lambda: fired.append(1))

    assert scheduler.run_pending() == 0
    now[0] = 10.6
    assert scheduler.run_pending() == 1
    assert fired == [1]
    assert scheduler.run_pending() == 0
