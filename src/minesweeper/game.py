"""
Game controller.

Owns the one mutable reference in the system: the current Session. All
board and phase changes come from the pure transitions in
``minesweeper.session``; the controller swaps in their result, keeps the
clock in step with the phase and notifies listeners.
"""
import logging
import random
from typing import Callable, List, Optional

from .board import Board, Level
from .clock import Clock, Scheduler
from . import session as transitions
from .session import GamePhase, Session

logger = logging.getLogger(__name__)

Listener = Callable[[Session], None]


class Game:
    """
    Stateful front for one player's game.

    Args:
        level: Initial difficulty level.
        scheduler: Deferred-callback facility for the clock.
        rng: Random source for bomb placement.
    """

    def __init__(
        self,
        level: Level = Level.MEDIUM,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._rng = rng
        self._session = transitions.new_session(level, rng)
        self._listeners: List[Listener] = []
        self._clock = Clock(
            on_tick=self._on_tick,
            is_running=lambda: self._session.phase is GamePhase.RUNNING,
            scheduler=scheduler,
        )

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def session(self) -> Session:
        return self._session

    @property
    def board(self) -> Board:
        return self._session.board

    @property
    def phase(self) -> GamePhase:
        return self._session.phase

    @property
    def elapsed_seconds(self) -> int:
        return self._session.elapsed_seconds

    @property
    def bombs_remaining(self) -> int:
        return self._session.bombs_remaining

    @property
    def clock(self) -> Clock:
        return self._clock

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callable that receives every new session.

        Returns:
            Function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ========================================================================
    # Actions
    # ========================================================================

    def click(self, row: int, col: int) -> Session:
        return self._apply(transitions.click(self._session, row, col))

    def toggle_flag(self, row: int, col: int) -> Session:
        return self._apply(transitions.toggle_flag(self._session, row, col))

    def select_level(self, level: Level) -> Session:
        return self._apply(
            transitions.select_level(self._session, level, self._rng)
        )

    def reset(self) -> Session:
        return self._apply(transitions.reset(self._session, self._rng))

    # ========================================================================
    # Internals
    # ========================================================================

    def _apply(self, new_session: Session) -> Session:
        old_session = self._session
        if new_session is old_session:
            return old_session

        # Clock first: a scheduler error must leave the held session as is.
        was_running = old_session.phase is GamePhase.RUNNING
        is_running = new_session.phase is GamePhase.RUNNING
        if is_running and not was_running:
            self._clock.start()
        elif was_running and not is_running:
            self._clock.stop()
        self._session = new_session
        if new_session.phase is not old_session.phase:
            logger.debug("Phase %s -> %s",
                         old_session.phase.name, new_session.phase.name)

        self._publish()
        return new_session

    def _on_tick(self) -> None:
        self._session = transitions.tick(self._session)
        self._publish()

    def _publish(self) -> None:
        for listener in list(self._listeners):
            listener(self._session)
