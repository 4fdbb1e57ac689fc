# breaker/game_entities.py
import enum
from dataclasses import dataclass, field

import pygame

from breaker.constants import (
    BALL_BASE_SPEED, BALL_ENLARGE_STEP, BALL_SIZE, FLOATING_TEXT_DRIFT, FLOATING_TEXT_MS,
    PADDLE_HEIGHT, PADDLE_LIVES, PADDLE_QUICKEN_STEP, PADDLE_SPEED, PADDLE_WIDEN_STEP,
    PADDLE_WIDTH, RED, WHITE,
)
from breaker.game_config import GameConfig
from breaker.geometry import centered_rect, step


# ---------------- Paddle ----------------
@dataclass
class Paddle:
    cfg: GameConfig
    x: int = 0
    y: int = 0
    width: int = PADDLE_WIDTH
    height: int = PADDLE_HEIGHT
    speed: int = PADDLE_SPEED
    lives: int = PADDLE_LIVES
    vx: int = 0
    left: bool = False
    right: bool = False

    def __post_init__(self):
        self.reset()

    def reset(self):
        self.x = self.cfg.screen_width // 2
        self.y = self.cfg.screen_height - self.cfg.side_size // 2

    def set_direction(self, left: bool, right: bool):
        self.left, self.right = left, right
        if left == right:
            self.vx = 0
        else:
            self.vx = -self.speed if left else self.speed

    def hold(self, direction: int, held: bool):
        if direction < 0:
            self.set_direction(held, self.right)
        else:
            self.set_direction(self.left, held)

    @property
    def rect(self) -> pygame.Rect:
        return centered_rect(self.x, self.y, self.width, self.height)

    def _clamp(self):
        self.x = max(self.cfg.side_size, min(self.x, self.cfg.field_right))

    def advance(self):
        # snap first so a bound that moved since last tick is honoured before moving
        self._clamp()
        self.x += self.vx
        self._clamp()

    def widen(self):
        self.width += PADDLE_WIDEN_STEP

    def quicken(self):
        self.speed += PADDLE_QUICKEN_STEP
        self.set_direction(self.left, self.right)

    def lose_life(self):
        self.lives -= 1

    def draw(self, surf: pygame.Surface):
        rect = pygame.Rect(self.x - self.width // 2, self.y - self.height // 2, self.width, self.height)
        pygame.draw.rect(surf, RED, rect)
        pygame.draw.rect(surf, WHITE, rect, 1)


# ---------------- Ball ----------------
class BallKind(enum.Enum):
    PRIMARY = "primary"
    TEMPORARY = "temporary"


@dataclass
class Ball:
    """
    One record for both ball roles. `launched` means "in play" for the
    primary ball and "active" for a temporary one.
    """
    kind: BallKind = BallKind.PRIMARY
    x: int = 0
    y: int = 0
    angle: int = 0           # degrees, [0, 360)
    speed: int = 0           # signed, along angle
    size: int = BALL_SIZE
    damage: int = 1
    score: int = 0
    launched: bool = False

    @property
    def is_primary(self) -> bool:
        return self.kind is BallKind.PRIMARY

    @property
    def rect(self) -> pygame.Rect:
        return centered_rect(self.x, self.y, self.size, self.size)

    def reset(self, cfg: GameConfig):
        self.x = cfg.screen_width // 2
        self.y = cfg.screen_height - cfg.side_size // 2 - self.size - 10
        self.speed = 0
        self.launched = False

    def move(self):
        self.x, self.y = step(self.x, self.y, self.angle, self.speed)

    def launch(self, direction: int):
        """Serve the primary ball up-left (direction < 0) or up-right."""
        if self.launched:
            return
        self.angle = 135 if direction < 0 else 45
        self.speed = BALL_BASE_SPEED
        self.launched = True
        self.move()

    def enlarge(self):
        self.size += BALL_ENLARGE_STEP

    def add_damage(self):
        self.damage += 1

    def draw(self, surf: pygame.Surface, color):
        if not self.launched and not self.is_primary:
            return
        pygame.draw.circle(surf, color, (self.x, self.y), self.size // 2)


# ---------------- Floating score ----------------
@dataclass
class FloatingText:
    x: int
    y: int
    points: int
    remaining_ms: int = field(default=FLOATING_TEXT_MS)

    def tick(self, dt_ms: int) -> bool:
        """Returns True once the text has run out."""
        self.remaining_ms -= dt_ms
        self.y -= FLOATING_TEXT_DRIFT
        return self.remaining_ms <= 0

    def draw(self, surf: pygame.Surface, font: pygame.font.Font, color):
        surf.blit(font.render(str(self.points), True, color), (self.x, self.y))


def tick_texts(texts, dt_ms: int):
    texts[:] = [t for t in texts if not t.tick(dt_ms)]
