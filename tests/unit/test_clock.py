"""
Unit tests for the game clock.

A fake scheduler stands in for the event loop so time is advanced by hand.
"""
import asyncio

from conftest import FakeScheduler
from minesweeper import Clock


class Counter:
    """Tick target with a switchable running flag."""

    def __init__(self) -> None:
        self.ticks = 0
        self.running = True

    def tick(self) -> None:
        self.ticks += 1


def make_clock(scheduler: FakeScheduler, counter: Counter) -> Clock:
    return Clock(
        on_tick=counter.tick,
        is_running=lambda: counter.running,
        scheduler=scheduler,
    )


class TestClock:
    """Test tick scheduling and cancellation."""

    def test_ticks_once_per_second(self, scheduler: FakeScheduler) -> None:
        counter = Counter()
        clock = make_clock(scheduler, counter)
        clock.start()
        scheduler.advance(3.5)
        assert counter.ticks == 3
        assert clock.active is True

    def test_no_tick_before_interval(self, scheduler: FakeScheduler) -> None:
        counter = Counter()
        make_clock(scheduler, counter).start()
        scheduler.advance(0.9)
        assert counter.ticks == 0

    def test_stop_cancels_pending_tick(self, scheduler: FakeScheduler) -> None:
        counter = Counter()
        clock = make_clock(scheduler, counter)
        clock.start()
        scheduler.advance(1)
        clock.stop()
        scheduler.advance(5)
        assert counter.ticks == 1
        assert clock.active is False
        assert scheduler.pending == []

    def test_tick_stops_when_not_running(
        self, scheduler: FakeScheduler
    ) -> None:
        """The running flag is checked when the tick fires."""
        counter = Counter()
        clock = make_clock(scheduler, counter)
        clock.start()
        scheduler.advance(2)
        counter.running = False
        scheduler.advance(5)
        assert counter.ticks == 2
        assert clock.active is False

    def test_restart_keeps_single_chain(
        self, scheduler: FakeScheduler
    ) -> None:
        """Starting twice never doubles the tick rate."""
        counter = Counter()
        clock = make_clock(scheduler, counter)
        clock.start()
        scheduler.advance(0.5)
        clock.start()
        assert len(scheduler.pending) == 1
        scheduler.advance(3)
        assert counter.ticks == 3

    def test_stale_tick_is_dropped(self, scheduler: FakeScheduler) -> None:
        """A tick from a replaced chain does nothing even if it fires."""
        counter = Counter()
        clock = make_clock(scheduler, counter)
        clock.start()
        stale = scheduler.pending[0]
        clock.stop()
        clock.start()
        scheduler.fire_stale(stale)
        assert counter.ticks == 0
        assert len(scheduler.pending) == 1

    def test_defaults_to_running_event_loop(self) -> None:
        """Without a scheduler the clock uses the running asyncio loop."""
        counter = Counter()
        clock = Clock(
            on_tick=counter.tick,
            is_running=lambda: counter.running,
            interval=0.01,
        )

        async def run() -> None:
            clock.start()
            await asyncio.sleep(0.055)
            clock.stop()

        asyncio.run(run())
        assert 1 <= counter.ticks <= 5
