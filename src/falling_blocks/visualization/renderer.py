from __future__ import annotations

from typing import Tuple

import pygame

from falling_blocks.game import Snapshot


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (240, 240, 0),  # O
        3: (160, 0, 240),  # T
        4: (0, 240, 0),    # S
        5: (240, 0, 0),    # Z
        6: (0, 0, 240),    # J
        7: (240, 160, 0),  # L
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 160) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size + self.margin * 3 + self.panel_width,
            height * self.cell_size + self.margin * 2,
        )

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(
            x * self.cell_size,
            y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _grid_surface(self, snap: Snapshot) -> pygame.Surface:
        board = snap.board()
        h, w = board.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(surf, _color_for_value(int(board[y, x])), self._cell_rect(x, y))
        if not snap.game_over:
            outline = _color_for_value(int(snap.active_kind))
            for x, y in snap.ghost_cells - snap.active_cells:
                pygame.draw.rect(surf, outline, self._cell_rect(x, y), width=1)
        return surf

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int]) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        screen.blit(self._font.render(text, True, (230, 230, 230)), pos)

    def draw(self, screen: pygame.Surface, snap: Snapshot) -> None:
        grid_surf = self._grid_surface(snap)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))

        panel_x = self.margin * 2 + grid_surf.get_width()
        self._text(screen, f"Score: {snap.score}", (panel_x, self.margin))
        self._text(screen, f"Lines: {snap.lines}", (panel_x, self.margin + 30))
        self._text(screen, f"Next: {snap.next_kind.name}", (panel_x, self.margin + 60))
        if snap.game_over:
            self._text(screen, "Game over", (panel_x, self.margin + 110))
            self._text(screen, "Space: new game", (panel_x, self.margin + 140))
        elif not snap.playing:
            self._text(screen, "Paused", (panel_x, self.margin + 110))
            self._text(screen, "Space: play", (panel_x, self.margin + 140))
        pygame.display.flip()
