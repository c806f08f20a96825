from __future__ import annotations

from dataclasses import dataclass


class InvalidDimensions(ValueError):
    """Raised when a grid is built with a non-positive width or height."""

    def __init__(self, cols: int, rows: int) -> None:
        super().__init__(f"grid dimensions must be positive, got cols={cols} rows={rows}")
        self.cols = cols
        self.rows = rows


@dataclass(frozen=True)
class IllegalMove:
    """Returned instead of a block when a move or rotation would collide."""

    reason: str = "collision"


def is_illegal(result: object) -> bool:
    return isinstance(result, IllegalMove)
