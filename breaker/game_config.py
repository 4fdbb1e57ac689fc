# breaker/game_config.py
from dataclasses import dataclass

import pygame


@dataclass(frozen=True)
class GameConfig:
    tile_width: int = 60
    tile_height: int = 30
    rows: int = 15
    columns: int = 20
    side_size: int = 130         # margin around the block field

    tick_ms: int = 25            # fixed simulation step

    # lose a life when the ball falls below the paddle, not only on speed decay
    drop_out_below_paddle: bool = False

    def __post_init__(self):
        for name in ("tile_width", "tile_height", "rows", "columns", "tick_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.side_size < 0:
            raise ValueError(f"side_size must not be negative, got {self.side_size}")

    @property
    def screen_width(self) -> int:
        return self.tile_width * self.columns + 2 * self.side_size

    @property
    def screen_height(self) -> int:
        return self.tile_height * self.rows + 4 * self.side_size

    @property
    def field_right(self) -> int:
        return self.side_size + self.columns * self.tile_width

    @property
    def field_bottom(self) -> int:
        return self.side_size + self.rows * self.tile_height

    def field_rect(self) -> pygame.Rect:
        return pygame.Rect(self.side_size, self.side_size,
                           self.columns * self.tile_width, self.rows * self.tile_height)

    def cell_rect(self, col: int, row: int) -> pygame.Rect:
        return pygame.Rect(self.side_size + col * self.tile_width,
                           self.side_size + row * self.tile_height,
                           self.tile_width, self.tile_height)


CFG = GameConfig()
