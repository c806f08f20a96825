from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, FrozenSet, List, Tuple, Union

import numpy as np

from .errors import IllegalMove
from .grid import COLS, Coordinate, Grid
from .rng import Seed, randint


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}


def _unique_rotations(kind: TetrominoType) -> List[Shape]:
    rotations: List[Shape] = []
    for r in range(4):
        shape = _rot90(BASE_SHAPES[kind], r)
        if not any(np.array_equal(shape, existing) for existing in rotations):
            rotations.append(shape)
    return rotations


# O has one orientation, I/S/Z two, T/J/L four.
ROTATIONS: Dict[TetrominoType, List[Shape]] = {kind: _unique_rotations(kind) for kind in TetrominoType}


def rotation_count(kind: TetrominoType) -> int:
    return len(ROTATIONS[kind])


@dataclass(frozen=True)
class Block:
    """The falling piece: shape, orientation and the grid position of its
    bounding box's top-left corner."""

    kind: TetrominoType
    rotation: int = 0
    col: int = 0
    row: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", self.rotation % rotation_count(self.kind))

    def shape(self) -> Shape:
        return ROTATIONS[self.kind][self.rotation]

    def cells(self) -> FrozenSet[Coordinate]:
        s = self.shape()
        h, w = s.shape
        return frozenset(
            (self.col + dx, self.row + dy) for dy in range(h) for dx in range(w) if s[dy, dx]
        )

    def translated(self, d_col: int, d_row: int) -> "Block":
        return replace(self, col=self.col + d_col, row=self.row + d_row)

    def rotated(self) -> "Block":
        return replace(self, rotation=(self.rotation + 1) % rotation_count(self.kind))


MoveResult = Union[Block, IllegalMove]


def cells_of(block: Block) -> FrozenSet[Coordinate]:
    return block.cells()


def spawn(kind: TetrominoType, cols: int = COLS) -> Block:
    """Block of ``kind`` centred horizontally on the top row."""
    _, w = ROTATIONS[kind][0].shape
    return Block(kind=kind, rotation=0, col=(cols - w) // 2, row=0)


def get_random(seed: Seed, cols: int = COLS) -> Tuple[Seed, Block]:
    index, new_seed = randint(seed, 0, len(TetrominoType) - 1)
    return new_seed, spawn(list(TetrominoType)[index], cols)


def detect_collision_in_grid(block: Block, grid: Grid) -> bool:
    return any(grid.is_occupied(col, row) for col, row in block.cells())


def _checked(candidate: Block, grid: Grid) -> MoveResult:
    if detect_collision_in_grid(candidate, grid):
        return IllegalMove()
    return candidate


def move_on(d_col: int, grid: Grid, block: Block) -> MoveResult:
    return _checked(block.translated(d_col, 0), grid)


def move_y_on(d_row: int, grid: Grid, block: Block) -> MoveResult:
    return _checked(block.translated(0, d_row), grid)


def rotate_on(grid: Grid, block: Block) -> MoveResult:
    # No wall kicks: a rotation that collides is rejected outright.
    return _checked(block.rotated(), grid)


def copy_onto_grid(block: Block, grid: Grid) -> Grid:
    return grid.merge(block.cells(), int(block.kind))


def drop_distance(block: Block, grid: Grid) -> int:
    """Number of rows ``block`` can still fall before landing."""
    distance = 0
    while not detect_collision_in_grid(block.translated(0, distance + 1), grid):
        distance += 1
    return distance


def ghost_of(block: Block, grid: Grid) -> Block:
    return block.translated(0, drop_distance(block, grid))
