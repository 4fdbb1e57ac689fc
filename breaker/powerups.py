# breaker/powerups.py
"""
Collectibles dropped by destroyed blocks.

A power-up falls toward the paddle row, then docks there and blinks until
its fall timer runs out. Touching the paddle catches it: every sibling still
in flight is discarded on the spot, so at most one power-up is ever active.
"""
import enum
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

import pygame

from breaker.constants import (
    POWERUP_BLINK_MS, POWERUP_DOCKED_MS, POWERUP_FALL_MS, POWERUP_FALL_STEP, POWERUP_SIZE,
)
from breaker.game_config import GameConfig
from breaker.game_entities import Paddle
from breaker.geometry import brighter, centered_rect

logger = logging.getLogger(__name__)


class PowerupKind(enum.Enum):
    PACMAN = "pacman"
    SPACE_INVADERS = "space invaders"


POWERUP_COLORS = {
    PowerupKind.PACMAN: (250, 200, 0),
    PowerupKind.SPACE_INVADERS: (200, 200, 200),
}


@dataclass
class Powerup:
    x: int
    y: int
    kind: PowerupKind
    dock_y: int
    fall_ms: int = POWERUP_FALL_MS
    docked_ms: int = POWERUP_DOCKED_MS
    caught: bool = False
    size: int = POWERUP_SIZE

    @property
    def rect(self) -> pygame.Rect:
        return centered_rect(self.x, self.y, self.size, self.size)

    @property
    def docked(self) -> bool:
        return self.y >= self.dock_y

    def draw(self, surf: pygame.Surface):
        if self.caught:
            return
        color = POWERUP_COLORS[self.kind]
        if self.docked and (self.fall_ms // POWERUP_BLINK_MS) % 2 == 0:
            color = brighter(color)
        pygame.draw.circle(surf, color, (self.x, self.y), self.size // 2)


@dataclass
class PowerupTickResult:
    caught: Optional[Powerup] = None
    removed: List[Powerup] = field(default_factory=list)


class PowerupManager:
    def __init__(self, cfg: GameConfig, rng: Optional[random.Random] = None):
        self.cfg = cfg
        self.rng = rng or random.Random()
        self.items: List[Powerup] = []

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def try_spawn(self, x: int, y: int) -> Powerup:
        dock_y = self.cfg.screen_height - self.cfg.side_size // 2 - POWERUP_SIZE // 2
        pw = Powerup(x, y, self.rng.choice(list(PowerupKind)), dock_y)
        self.items.append(pw)
        logger.debug("power-up %s spawned at (%d,%d)", pw.kind.value, x, y)
        return pw

    def tick(self, dt_ms: int, paddle: Paddle) -> PowerupTickResult:
        result = PowerupTickResult()
        kept: List[Powerup] = []

        paddle_rect = paddle.rect
        for i, pw in enumerate(self.items):
            if pw.caught:
                pw.docked_ms -= dt_ms
                if pw.docked_ms <= 0:
                    result.removed.append(pw)
                else:
                    kept.append(pw)
                continue

            if pw.rect.colliderect(paddle_rect):
                pw.caught = True
                # siblings already dropped this pass are in removed once
                result.removed.extend(kept)
                result.removed.extend(self.items[i + 1:])
                self.items = [pw]
                result.caught = pw
                logger.info("power-up %s caught", pw.kind.value)
                return result

            if pw.fall_ms <= 0:
                logger.debug("power-up %s missed", pw.kind.value)
                result.removed.append(pw)
                continue

            if pw.docked:
                pw.fall_ms -= dt_ms
            else:
                pw.y = min(pw.y + POWERUP_FALL_STEP, pw.dock_y)
            kept.append(pw)

        self.items = kept
        return result

    def draw(self, surf: pygame.Surface):
        for pw in self.items:
            pw.draw(surf)
