# breaker/balls.py
"""
Ball motion and collision response.

Each tick a ball moves one step along (angle, speed), then resolves either
a block hit (while inside the block field's vertical extent) or a paddle
hit (below it), then the screen borders. Speed is capped at the end.

Temporary balls share the same physics; they are dispatched by kind and
hand their score to the primary ball every tick.
"""
import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, List

from breaker.combo import Combo
from breaker.constants import (
    BALL_PADDLE_BOOST, BALL_SPEED_CAP, POWERUP_SPAWN_ODDS, TEMP_BALL_ACTIVE_MS,
    TEMP_BALL_COOLDOWN_MS, TEMP_BALL_SPEED,
)
from breaker.game_config import GameConfig
from breaker.game_entities import Ball, BallKind, FloatingText, Paddle
from breaker.geometry import (
    normalize_angle, reflect_diagonal, reflect_horizontal, reflect_vertical, step,
)
from breaker.grid import Grid
from breaker.powerups import PowerupManager

logger = logging.getLogger(__name__)


@dataclass
class Playfield:
    """Everything a ball reads or mutates while it moves."""
    cfg: GameConfig
    grid: Grid
    paddle: Paddle
    combo: Combo
    texts: List[FloatingText]
    powerups: PowerupManager
    rng: random.Random


# ---------------- Collisions ----------------
def collide_block(ball: Ball, field: Playfield) -> int:
    """Bounce off the block under the ball's centre. Returns points scored."""
    cfg = field.cfg
    block = field.grid.cell_at(ball.x, ball.y)
    if block is None:
        return 0

    cell = cfg.cell_rect(block.col, block.row)
    half = ball.size // 2
    ball_left, ball_right = ball.x - half, ball.x + half
    ball_top, ball_bottom = ball.y - half, ball.y + half

    # overlap alone is ambiguous when the ball is deep inside the cell;
    # the side of the edge the centre was on one step back picks the face
    prev_x, prev_y = step(ball.x, ball.y, ball.angle, -ball.speed)
    from_left = ball_right > cell.left and prev_x < cell.left
    from_right = ball_left < cell.right and prev_x >= cell.right
    from_top = ball_bottom > cell.top and prev_y < cell.top
    from_bottom = ball_top < cell.bottom and prev_y >= cell.bottom

    horizontal = from_left or from_right
    vertical = from_top or from_bottom
    if horizontal and vertical:
        ball.angle = reflect_diagonal(ball.angle)
    elif horizontal:
        ball.angle = reflect_horizontal(ball.angle)
    else:
        ball.angle = reflect_vertical(ball.angle)

    ball.speed += block.drag

    reward = field.grid.apply_damage(block, ball.damage)
    if not reward:
        return 0

    field.combo.on_destroy()
    points = reward + field.combo.bonus
    ball.score += points
    field.texts.append(FloatingText(ball.x, ball.y, points))

    if field.rng.randrange(POWERUP_SPAWN_ODDS) == 0:
        field.powerups.try_spawn(ball.x, ball.y)
    return points


def collide_paddle(ball: Ball, paddle: Paddle) -> bool:
    if not ball.rect.colliderect(paddle.rect):
        return False
    ball.angle = reflect_vertical(ball.angle)
    ball.speed += BALL_PADDLE_BOOST
    # step out right away so the next tick doesn't bounce again
    ball.move()
    return True


def _clamp_to_border(ball: Ball, cfg: GameConfig):
    ball.x = max(cfg.side_size, min(ball.x, cfg.screen_width - cfg.side_size))
    ball.y = max(cfg.side_size, min(ball.y, cfg.screen_height))


def collide_border(ball: Ball, cfg: GameConfig) -> bool:
    left, right = cfg.side_size, cfg.screen_width - cfg.side_size
    top, bottom = cfg.side_size, cfg.screen_height

    bounced = False
    if ball.x <= left or ball.x >= right:
        ball.angle = 180 - ball.angle
        bounced = True
    if ball.y <= top or ball.y >= bottom:
        ball.angle = 360 - ball.angle
        bounced = True

    if bounced:
        _clamp_to_border(ball, cfg)
        ball.angle = normalize_angle(ball.angle)
        ball.move()
        _clamp_to_border(ball, cfg)
    return bounced


def advance(ball: Ball, field: Playfield):
    ball.move()
    if ball.y < field.cfg.field_bottom:
        collide_block(ball, field)
    else:
        collide_paddle(ball, field.paddle)

    collide_border(ball, field.cfg)

    if ball.speed > BALL_SPEED_CAP:
        ball.speed = BALL_SPEED_CAP


# ---------------- Per-kind tick ----------------
def _tick_primary(ball: Ball, field: Playfield) -> int:
    advance(ball, field)
    return 0


def _tick_temporary(ball: Ball, field: Playfield) -> int:
    if not ball.launched:
        return 0
    advance(ball, field)
    donated, ball.score = ball.score, 0
    return donated


TICK_BY_KIND: Dict[BallKind, Callable[[Ball, Playfield], int]] = {
    BallKind.PRIMARY: _tick_primary,
    BallKind.TEMPORARY: _tick_temporary,
}


def tick_ball(ball: Ball, field: Playfield) -> int:
    """Advance one ball; returns score it hands over to the primary ball."""
    return TICK_BY_KIND[ball.kind](ball, field)


# ---------------- Temporary balls ----------------
class TemporaryBalls:
    """
    Balls granted by the explosive upgrade. They wait inactive until fired,
    fly together for a shared time budget, then go dark and a cooldown
    starts before they can be fired again.
    """

    def __init__(self):
        self.balls: List[Ball] = []
        self.active_ms = 0
        self.cooldown_ms = 0

    def __len__(self):
        return len(self.balls)

    def __iter__(self):
        return iter(self.balls)

    def add(self):
        self.balls.append(Ball(kind=BallKind.TEMPORARY))

    @property
    def active(self) -> bool:
        return self.active_ms > 0

    @property
    def ready(self) -> bool:
        return bool(self.balls) and not self.active and self.cooldown_ms <= 0

    def launch(self, primary: Ball) -> bool:
        if not self.ready:
            return False
        n = len(self.balls)
        for i, temp in enumerate(self.balls):
            temp.angle = normalize_angle(primary.angle + 360 * i // n)
            temp.speed = TEMP_BALL_SPEED
            temp.x, temp.y = primary.x, primary.y
            temp.score = 0
            temp.launched = True
        self.active_ms = TEMP_BALL_ACTIVE_MS
        logger.info("launched %d temporary balls", n)
        return True

    def deactivate(self):
        for temp in self.balls:
            temp.launched = False
            temp.speed = 0
        self.active_ms = 0
        self.cooldown_ms = TEMP_BALL_COOLDOWN_MS

    def tick(self, primary: Ball, field: Playfield, dt_ms: int):
        if self.active:
            for temp in self.balls:
                primary.score += tick_ball(temp, field)
            self.active_ms -= dt_ms
            if self.active_ms <= 0:
                self.deactivate()
                logger.info("temporary balls expired, cooldown %d ms", self.cooldown_ms)
        elif self.cooldown_ms > 0:
            self.cooldown_ms -= dt_ms

    def cooldown_seconds(self) -> int:
        if self.cooldown_ms <= 0:
            return 0
        return self.cooldown_ms // 1000 + 1
