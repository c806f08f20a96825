"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Grid: playfield of landed cells and row clearing
- Block: the falling tetromino with translation and rotation
- TetrominoType: Enum of available piece types
- ScoringRules: Simple scoring configuration and helpers
- GameState / update / tick: the time-stepped game loop
"""

from .errors import IllegalMove, InvalidDimensions, is_illegal
from .grid import COLS, ROWS, Grid
from .pieces import (
    Block,
    TetrominoType,
    cells_of,
    copy_onto_grid,
    detect_collision_in_grid,
    drop_distance,
    get_random,
    ghost_of,
    move_on,
    move_y_on,
    rotate_on,
)
from .rules import ScoringRules
from .core import Command, GameConfig, GameState, Snapshot, Tick, init, reset, snapshot, tick, update

__all__ = [
    "COLS",
    "ROWS",
    "Grid",
    "Block",
    "TetrominoType",
    "IllegalMove",
    "InvalidDimensions",
    "is_illegal",
    "cells_of",
    "copy_onto_grid",
    "detect_collision_in_grid",
    "drop_distance",
    "get_random",
    "ghost_of",
    "move_on",
    "move_y_on",
    "rotate_on",
    "ScoringRules",
    "Command",
    "GameConfig",
    "GameState",
    "Snapshot",
    "Tick",
    "init",
    "reset",
    "snapshot",
    "tick",
    "update",
]
