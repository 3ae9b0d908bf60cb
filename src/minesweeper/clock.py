"""
Game clock.

Counts whole seconds while a game is running. Ticks are deferred
callbacks on a scheduler; an asyncio event loop is the default. Only
one tick chain exists per clock: starting again cancels the previous
handle, and a tick from a cancelled chain is dropped when it fires.
"""
import asyncio
import logging
from functools import partial
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay, like an event loop."""

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> TimerHandle:
        ...


class Clock:
    """
    One-second ticker with a single-flight timer handle.

    Args:
        on_tick: Called once per elapsed interval.
        is_running: Checked at fire time; a tick only counts and
            reschedules while this returns True.
        scheduler: Deferred-callback facility. Defaults to the running
            asyncio event loop at start time.
        interval: Seconds between ticks.
    """

    def __init__(
        self,
        on_tick: Callable[[], None],
        is_running: Callable[[], bool],
        scheduler: Optional[Scheduler] = None,
        interval: float = 1.0,
    ) -> None:
        self._on_tick = on_tick
        self._is_running = is_running
        self._scheduler = scheduler
        self._interval = interval
        self._handle: Optional[TimerHandle] = None
        self._generation = 0

    @property
    def active(self) -> bool:
        """Whether a tick is currently scheduled."""
        return self._handle is not None

    def start(self) -> None:
        """Start a fresh tick chain, replacing any existing one."""
        self.stop()
        self._schedule(self._generation)

    def stop(self) -> None:
        """Cancel the pending tick and invalidate its chain."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._generation += 1

    def _schedule(self, generation: int) -> None:
        scheduler = self._scheduler or asyncio.get_running_loop()
        self._handle = scheduler.call_later(
            self._interval, partial(self._fire, generation)
        )
        logger.debug("Clock tick scheduled (chain %d)", generation)

    def _fire(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._handle = None
        if not self._is_running():
            return
        self._on_tick()
        if generation == self._generation and self._is_running():
            self._schedule(generation)
