from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import FrozenSet, Optional, Union

import numpy as np

from .errors import is_illegal
from .grid import COLS, ROWS, Coordinate, Grid
from .pieces import (
    Block,
    TetrominoType,
    copy_onto_grid,
    detect_collision_in_grid,
    get_random,
    ghost_of,
    move_on,
    move_y_on,
    rotate_on,
)
from .rng import Seed, initial_seed
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    ROTATE = 2
    BOOST_ON = 3
    BOOST_OFF = 4
    TOGGLE_PLAY = 5
    RESET = 6


@dataclass(frozen=True)
class Tick:
    """Animation frame carrying the host clock value in milliseconds."""

    now: float


Msg = Union[Command, Tick]


@dataclass
class GameConfig:
    width: int = COLS
    height: int = ROWS
    drop_interval_ms: float = 800
    boost_interval_ms: float = 30
    rules: ScoringRules = field(default_factory=ScoringRules)

    def interval(self, boost: bool) -> float:
        return self.boost_interval_ms if boost else self.drop_interval_ms


@dataclass(frozen=True)
class GameState:
    playing: bool
    game_over: bool
    grid: Grid
    active: Block
    next_block: Block
    seed: Seed
    next_drop_time: Optional[float] = None
    boost: bool = False
    score: int = 0
    lines: int = 0


def init(seed: int, config: Optional[GameConfig] = None) -> GameState:
    """Fresh, paused game: empty grid, zero score, two pieces drawn from ``seed``."""
    config = config or GameConfig()
    grid = Grid.empty(config.width, config.height)
    seed = initial_seed(seed)
    seed, active = get_random(seed, config.width)
    seed, upcoming = get_random(seed, config.width)
    return GameState(
        playing=False,
        game_over=False,
        grid=grid,
        active=active,
        next_block=upcoming,
        seed=seed,
    )


def reset(state: GameState, config: Optional[GameConfig] = None) -> GameState:
    logger.debug("reset (score was %d)", state.score)
    return init(state.seed, config)


def _lock(state: GameState, now: float, config: GameConfig) -> GameState:
    grid = copy_onto_grid(state.active, state.grid)
    removed, grid = grid.remove_full_rows()
    score = state.score + config.rules.score_for_lines(removed)
    seed, upcoming = get_random(state.seed, config.width)
    active = state.next_block
    logger.debug("locked %s, cleared %d rows, score %d", state.active.kind.name, removed, score)

    locked = replace(
        state,
        grid=grid,
        active=active,
        next_block=upcoming,
        seed=seed,
        score=score,
        lines=state.lines + removed,
        next_drop_time=now + config.interval(state.boost),
    )
    if detect_collision_in_grid(active, grid):
        logger.debug("game over at score %d", score)
        return replace(locked, playing=False, game_over=True)
    return locked


def tick(state: GameState, now: float, config: Optional[GameConfig] = None) -> GameState:
    """Advance gravity to clock value ``now``.

    Drops the active block one row once ``now`` reaches the scheduled drop
    time, locking it when it cannot descend. Paused and finished games are
    left untouched.
    """
    config = config or GameConfig()
    if not state.playing or state.game_over:
        return state
    if state.next_drop_time is None:
        return replace(state, next_drop_time=now + config.interval(state.boost))
    if now < state.next_drop_time:
        return state

    moved = move_y_on(1, state.grid, state.active)
    if is_illegal(moved):
        return _lock(state, now, config)
    return replace(state, active=moved, next_drop_time=now + config.interval(state.boost))


def _apply_move(state: GameState, command: Command) -> GameState:
    if not state.playing or state.game_over:
        return state
    if command == Command.MOVE_LEFT:
        result = move_on(-1, state.grid, state.active)
    elif command == Command.MOVE_RIGHT:
        result = move_on(1, state.grid, state.active)
    else:
        result = rotate_on(state.grid, state.active)
    if is_illegal(result):
        return state
    return replace(state, active=result)


def update(state: GameState, msg: Msg, config: Optional[GameConfig] = None) -> GameState:
    config = config or GameConfig()
    if isinstance(msg, Tick):
        return tick(state, msg.now, config)
    if not isinstance(msg, Command):
        raise TypeError(f"unsupported message: {msg!r}")

    if msg in (Command.MOVE_LEFT, Command.MOVE_RIGHT, Command.ROTATE):
        return _apply_move(state, msg)
    if msg == Command.BOOST_ON:
        return replace(state, boost=True)
    if msg == Command.BOOST_OFF:
        return replace(state, boost=False)
    if msg == Command.TOGGLE_PLAY:
        if state.game_over:
            return replace(reset(state, config), playing=True)
        return replace(state, playing=not state.playing, next_drop_time=None)
    return reset(state, config)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a game for renderers."""

    grid: np.ndarray
    active_cells: FrozenSet[Coordinate]
    active_kind: TetrominoType
    ghost_cells: FrozenSet[Coordinate]
    next_kind: TetrominoType
    score: int
    lines: int
    playing: bool
    game_over: bool

    def board(self) -> np.ndarray:
        # Negative tags mark the falling piece.
        state = self.grid.copy()
        if not self.game_over:
            h, w = state.shape
            for x, y in self.active_cells:
                if 0 <= y < h and 0 <= x < w:
                    state[y, x] = -int(self.active_kind)
        return state


def snapshot(state: GameState) -> Snapshot:
    return Snapshot(
        grid=np.array(state.grid.cells, dtype=np.int8),
        active_cells=state.active.cells(),
        active_kind=state.active.kind,
        ghost_cells=ghost_of(state.active, state.grid).cells(),
        next_kind=state.next_block.kind,
        score=state.score,
        lines=state.lines,
        playing=state.playing,
        game_over=state.game_over,
    )
