# breaker/grid.py
"""
Block field: a fixed rows x columns arrangement of destructible cells.

Removal is two-phase. `apply_damage` only lowers health (and reports the
reward on the tick health crosses zero); the cell stays in place so the
collision that destroyed it can still read it. `sweep` runs at the start of
the next tick and excises every cell at or below zero health.
"""
import enum
import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

import pygame

from breaker.constants import (
    BLOCK_POINTS_STEP, BLOCK_REROLL_ODDS, COMMON_COLOR, RESISTANT_COLOR, STICKY_COLOR, WHITE,
)
from breaker.game_config import GameConfig
from breaker.geometry import brighter

logger = logging.getLogger(__name__)


class BlockCategory(enum.Enum):
    COMMON = 0
    STICKY = 1
    RESISTANT = 2

    @property
    def reward(self) -> int:
        return (self.value + 1) * BLOCK_POINTS_STEP


# category -> (health, drag, colour)
BLOCK_STATS = {
    BlockCategory.COMMON: (1, 1, COMMON_COLOR),
    BlockCategory.STICKY: (1, -2, STICKY_COLOR),
    BlockCategory.RESISTANT: (2, 0, RESISTANT_COLOR),
}


@dataclass
class Block:
    col: int
    row: int
    category: BlockCategory
    health: int
    drag: int        # added to the ball's speed on every hit
    color: Tuple[int, int, int]

    @classmethod
    def create(cls, category: BlockCategory, col: int, row: int) -> "Block":
        health, drag, color = BLOCK_STATS[category]
        return cls(col, row, category, health, drag, color)

    @property
    def destroyed(self) -> bool:
        return self.health <= 0

    def draw(self, surf: pygame.Surface, cfg: GameConfig):
        rect = cfg.cell_rect(self.col, self.row)
        pygame.draw.rect(surf, self.color, rect)
        pygame.draw.rect(surf, WHITE, rect, 1)


class Grid:
    def __init__(self, cfg: GameConfig):
        self.cfg = cfg
        self._cells: Dict[Tuple[int, int], Block] = {}

    @classmethod
    def generate(cls, cfg: GameConfig, rng: Optional[random.Random] = None) -> "Grid":
        """
        Fill every cell. Rows are banded top-down (first quarter resistant,
        second quarter sticky, the rest common), then each cell has a
        1 in 4 chance of being re-rolled to any category.
        """
        rng = rng or random.Random()
        grid = cls(cfg)
        categories = list(BlockCategory)
        for col in range(cfg.columns):
            for row in range(cfg.rows):
                if row < cfg.rows // 4:
                    category = BlockCategory.RESISTANT
                elif row < cfg.rows // 2:
                    category = BlockCategory.STICKY
                else:
                    category = BlockCategory.COMMON

                if rng.randrange(BLOCK_REROLL_ODDS) == 0:
                    category = rng.choice(categories)

                grid.place(Block.create(category, col, row))
        return grid

    # ---------------- Lookup ----------------
    def place(self, block: Block):
        self._cells[(block.col, block.row)] = block

    def get(self, col: int, row: int) -> Optional[Block]:
        return self._cells.get((col, row))

    def cell_at(self, x: int, y: int) -> Optional[Block]:
        """Block under a screen point, None outside the field or on an empty cell."""
        col = (x - self.cfg.side_size) // self.cfg.tile_width
        row = (y - self.cfg.side_size) // self.cfg.tile_height
        if not (0 <= col < self.cfg.columns and 0 <= row < self.cfg.rows):
            return None
        return self.get(col, row)

    def __iter__(self) -> Iterator[Block]:
        return iter(list(self._cells.values()))

    def __len__(self) -> int:
        return len(self._cells)

    # ---------------- Damage / removal ----------------
    def apply_damage(self, block: Block, amount: int) -> int:
        was_alive = not block.destroyed
        block.health -= amount
        block.color = brighter(block.color)
        if was_alive and block.destroyed:
            logger.debug("block (%d,%d) %s destroyed", block.col, block.row, block.category.name)
            return block.category.reward
        return 0

    def sweep(self) -> List[Block]:
        removed = [b for b in self._cells.values() if b.destroyed]
        for b in removed:
            del self._cells[(b.col, b.row)]
        return removed

    def draw(self, surf: pygame.Surface):
        for block in self._cells.values():
            block.draw(surf, self.cfg)
