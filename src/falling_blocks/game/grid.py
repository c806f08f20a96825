from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .errors import InvalidDimensions


Coordinate = Tuple[int, int]

COLS, ROWS = 10, 20


class Grid:
    """Playfield of landed cells.

    Cells hold 0 when empty and a positive tetromino tag when occupied.
    Row 0 is the top of the field. Grids are never modified in place:
    ``merge`` and ``remove_full_rows`` return new instances.
    """

    __slots__ = ("cells",)

    def __init__(self, cells: np.ndarray) -> None:
        cells = np.array(cells, dtype=np.int8)
        if cells.ndim != 2 or cells.size == 0:
            rows, cols = (cells.shape + (0, 0))[:2]
            raise InvalidDimensions(cols, rows)
        cells.setflags(write=False)
        self.cells = cells

    @classmethod
    def empty(cls, cols: int = COLS, rows: int = ROWS) -> "Grid":
        if cols <= 0 or rows <= 0:
            raise InvalidDimensions(cols, rows)
        return cls(np.zeros((rows, cols), dtype=np.int8))

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    def is_inside(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def is_occupied(self, col: int, row: int) -> bool:
        # Out of bounds counts as occupied so walls and floor collide like cells.
        if not self.is_inside(col, row):
            return True
        return bool(self.cells[row, col] != 0)

    def occupied(self) -> frozenset:
        rows, cols = np.nonzero(self.cells)
        return frozenset((int(c), int(r)) for r, c in zip(rows, cols))

    def merge(self, cells: Iterable[Coordinate], value: int = 1) -> "Grid":
        """Return a grid with ``cells`` marked with ``value``.

        Every cell must lie inside the grid; callers only merge blocks that
        already passed a collision check.
        """
        merged = self.cells.copy()
        for col, row in cells:
            if not self.is_inside(col, row):
                raise ValueError(f"cell ({col}, {row}) outside {self.width}x{self.height} grid")
            merged[row, col] = value
        return Grid(merged)

    def full_rows(self) -> np.ndarray:
        return np.where(np.all(self.cells != 0, axis=1))[0]

    def remove_full_rows(self) -> Tuple[int, "Grid"]:
        full = self.full_rows()
        if full.size == 0:
            return 0, self
        count = int(full.size)
        kept = np.delete(self.cells, full, axis=0)
        padding = np.zeros((count, self.width), dtype=np.int8)
        return count, Grid(np.vstack((padding, kept)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.cells, other.cells)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, occupied={int(np.count_nonzero(self.cells))})"
