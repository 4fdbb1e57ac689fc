# breaker/game_world.py
import enum
import logging
import random
from typing import Callable, List, Optional

import pygame

from breaker.balls import Playfield, TemporaryBalls, tick_ball
from breaker.combo import Combo
from breaker.constants import (
    BALL_COLOR_PERIOD_MS, DARK_GRAY, FLOATING_TEXT_MS, GAME_OVER_DELAY_MS, TEMP_BALL_COLOR,
)
from breaker.game_config import CFG, GameConfig
from breaker.game_entities import Ball, FloatingText, Paddle, tick_texts
from breaker.grid import Grid
from breaker.powerups import Powerup, PowerupManager
from breaker.upgrades import UpgradeOffer, apply_upgrade

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    UPGRADE = "upgrade"
    GAME_OVER = "game_over"


class Action(enum.Enum):
    MOVE_LEFT = "move_left"      # also "previous" in the upgrade menu
    MOVE_RIGHT = "move_right"    # also "next" in the upgrade menu
    FIRE = "fire"
    PAUSE = "pause"
    SELECT = "select"
    QUIT = "quit"


# ---------------- World ----------------
class GameWorld:
    """
    Fixed-tick simulation.
    The platform calls on_tick() every cfg.tick_ms, forwards key edges to
    on_key_down/on_key_up, and calls draw() once per frame.

    Per tick while playing: paddle -> power-ups -> block sweep -> balls ->
    combo decay -> floating texts -> upgrade / life / game-over checks.
    """

    def __init__(self, cfg: GameConfig = CFG, rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = pygame.time.get_ticks):
        self.cfg = cfg
        self.rng = rng or random.Random()
        self.clock = clock

        self.phase = Phase.PLAYING
        self.exit_at_ms: Optional[float] = None

        self.grid = Grid.generate(cfg, self.rng)
        self.paddle = Paddle(cfg)
        self.ball = Ball()
        self.ball.reset(cfg)
        self.temporaries = TemporaryBalls()

        self.combo = Combo()
        self.texts: List[FloatingText] = []
        self.powerups = PowerupManager(cfg, self.rng)
        self.active_powerup: Optional[Powerup] = None
        self.upgrade = UpgradeOffer(self.rng)

    @property
    def score(self) -> int:
        return self.ball.score

    def playfield(self) -> Playfield:
        return Playfield(self.cfg, self.grid, self.paddle, self.combo, self.texts, self.powerups, self.rng)

    # ---------------- Tick ----------------
    def on_tick(self):
        if self.phase is not Phase.PLAYING:
            return
        dt = self.cfg.tick_ms

        self.paddle.advance()

        if self.powerups:
            result = self.powerups.tick(dt, self.paddle)
            if result.caught is not None:
                self.active_powerup = result.caught
            elif self.active_powerup is not None and self.active_powerup in result.removed:
                self.active_powerup = None

        self.grid.sweep()

        field = self.playfield()
        old_score = self.ball.score
        tick_ball(self.ball, field)
        self.temporaries.tick(self.ball, field, dt)

        self.combo.tick(dt)
        tick_texts(self.texts, dt)

        if self._ball_lost():
            self.lose_life()

        if self.paddle.lives <= 0:
            self.trigger_game_over()
        elif self.upgrade.crossed(old_score, self.ball.score):
            self.open_upgrade()

    def _ball_lost(self) -> bool:
        b = self.ball
        if not b.launched:
            return False
        if b.speed <= 0:
            return True
        if self.cfg.drop_out_below_paddle:
            return b.y - b.size // 2 > self.paddle.y + self.paddle.height // 2
        return False

    def lose_life(self):
        self.ball.reset(self.cfg)
        self.paddle.reset()
        self.paddle.lose_life()
        logger.info("ball lost, %d lives left", self.paddle.lives)

    # ---------------- Phases ----------------
    def pause(self):
        if self.phase is Phase.PLAYING:
            self.phase = Phase.PAUSED
            logger.info("paused")

    def resume(self):
        if self.phase in (Phase.PAUSED, Phase.UPGRADE):
            self.phase = Phase.PLAYING
            logger.info("resumed")

    def open_upgrade(self):
        self.phase = Phase.UPGRADE
        logger.info("upgrade offered at score %d: %s / %s",
                    self.score, self.upgrade.choices[0].name, self.upgrade.choices[1].name)

    def confirm_upgrade(self):
        kind = self.upgrade.confirm()
        apply_upgrade(kind, self.paddle, self.ball, self.temporaries)
        self.resume()

    def trigger_game_over(self):
        if self.phase is Phase.GAME_OVER:
            return
        self.phase = Phase.GAME_OVER
        self.exit_at_ms = self.clock() + GAME_OVER_DELAY_MS
        logger.info("game over, final score %d", self.score)

    def exit_due(self) -> bool:
        return self.exit_at_ms is not None and self.clock() >= self.exit_at_ms

    # ---------------- Input ----------------
    def on_key_down(self, action: Action):
        if self.phase is Phase.PLAYING:
            if action is Action.PAUSE:
                self.pause()
            elif action in (Action.MOVE_LEFT, Action.MOVE_RIGHT):
                direction = -1 if action is Action.MOVE_LEFT else 1
                self.paddle.hold(direction, True)
                if not self.ball.launched:
                    self.ball.launch(direction)
            elif action is Action.FIRE and self.ball.launched:
                self.temporaries.launch(self.ball)

        elif self.phase is Phase.UPGRADE:
            if not self.upgrade.accept_press(self.clock()):
                return
            if action is Action.MOVE_LEFT:
                self.upgrade.step(-1)
            elif action is Action.MOVE_RIGHT:
                self.upgrade.step(1)
            elif action is Action.SELECT:
                self.confirm_upgrade()

        elif self.phase is Phase.PAUSED:
            if action is Action.PAUSE:
                self.resume()
            elif action is Action.QUIT:
                self.trigger_game_over()

    def on_key_up(self, action: Action):
        if action is Action.MOVE_LEFT:
            self.paddle.hold(-1, False)
        elif action is Action.MOVE_RIGHT:
            self.paddle.hold(1, False)

    # ---------------- Draw ----------------
    def _draw_background(self, surface: pygame.Surface):
        cfg = self.cfg
        for row in range(cfg.rows + 1):
            for col in range(cfg.columns + 1):
                x = cfg.side_size + col * cfg.tile_width
                y = cfg.side_size + row * cfg.tile_height
                left = x if col == 0 else x - 4
                right = x if col == cfg.columns else x + 4
                top = y if row == 0 else y - 4
                bottom = y if row == cfg.rows else y + 4
                pygame.draw.line(surface, DARK_GRAY, (left, y), (right, y))
                pygame.draw.line(surface, DARK_GRAY, (x, top), (x, bottom))
        pygame.draw.rect(surface, DARK_GRAY, cfg.field_rect(), 1)

    def draw(self, surface: pygame.Surface, font: pygame.font.Font):
        surface.fill((0, 0, 0))
        self._draw_background(surface)

        self.paddle.draw(surface)
        self.grid.draw(surface)
        self.ball.draw(surface, self.combo.color(BALL_COLOR_PERIOD_MS))
        for temp in self.temporaries:
            temp.draw(surface, TEMP_BALL_COLOR)
        self.powerups.draw(surface)

        text_color = self.combo.color(FLOATING_TEXT_MS // 7)
        for t in self.texts:
            t.draw(surface, font, text_color)
