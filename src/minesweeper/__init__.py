"""
Minesweeper game module.

Provides the board engine, the session state machine, the game clock
and a gymnasium environment over the same rules.
"""
from .cell import Cell
from .board import (
    Board,
    BoardConfig,
    Level,
    LEVEL_CONFIGS,
    bombs_remaining,
    flag_neighbor_count,
    is_won,
    neighbors,
    new_board,
    new_game,
    place_bomb,
    place_bombs,
    reveal,
    reveal_all,
    toggle_flag_at,
)
from .session import (
    GamePhase,
    GameStateError,
    Session,
    click,
    new_session,
    reset,
    select_level,
    tick,
    toggle_flag,
)
from .clock import Clock, Scheduler
from .game import Game
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "Board",
    "BoardConfig",
    "Level",
    "LEVEL_CONFIGS",
    "bombs_remaining",
    "flag_neighbor_count",
    "is_won",
    "neighbors",
    "new_board",
    "new_game",
    "place_bomb",
    "place_bombs",
    "reveal",
    "reveal_all",
    "toggle_flag_at",
    "GamePhase",
    "GameStateError",
    "Session",
    "click",
    "new_session",
    "reset",
    "select_level",
    "tick",
    "toggle_flag",
    "Clock",
    "Scheduler",
    "Game",
    "MinesweeperEnv",
]
