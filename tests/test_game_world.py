import random

import pygame
import pytest

from breaker.balls import collide_block
from breaker.game_config import GameConfig
from breaker.game_world import Action, GameWorld, Phase
from breaker.grid import Block, BlockCategory, Grid
from breaker.powerups import Powerup, PowerupKind
from breaker.upgrades import UpgradeKind


@pytest.fixture
def world(cfg, clock, fixed_rng):
    w = GameWorld(cfg, rng=random.Random(5), clock=clock)
    w.grid = Grid(cfg)
    w.rng = fixed_rng(1)        # no power-up drops
    return w


def serve(world, x, y, angle, speed):
    b = world.ball
    b.x, b.y, b.angle, b.speed, b.launched = x, y, angle, speed, True


def test_starts_playing(cfg, clock):
    w = GameWorld(cfg, rng=random.Random(1), clock=clock)
    assert w.phase is Phase.PLAYING
    assert w.paddle.lives == 3
    assert not w.ball.launched
    assert len(w.grid) == cfg.rows * cfg.columns
    assert w.score == 0


def test_default_clock_is_pygame_ticks(cfg):
    w = GameWorld(cfg, rng=random.Random(1))
    assert w.clock is pygame.time.get_ticks


def test_direction_key_serves_ball(world):
    world.on_key_down(Action.MOVE_LEFT)
    assert world.ball.launched
    assert world.ball.angle == 135
    assert world.ball.speed == 15
    assert (world.ball.x, world.ball.y) == (720, 870)
    assert world.paddle.vx == -15

    world.on_key_up(Action.MOVE_LEFT)
    assert world.paddle.vx == 0


def test_block_destroy_then_removed_next_tick(world):
    block = Block.create(BlockCategory.COMMON, 5, 5)
    world.grid.place(block)
    serve(world, 460, 310, 90, 15)

    world.on_tick()

    assert world.score == 30
    assert world.grid.get(5, 5) is block
    [text] = world.texts
    assert (text.x, text.points) == (460, 30)
    assert world.combo.streak == 1

    world.on_tick()
    assert world.grid.get(5, 5) is None


def test_sticky_drag_costs_a_life(world):
    serve(world, 460, 295, 45, 15)
    for _ in range(8):
        world.grid.place(Block.create(BlockCategory.STICKY, 5, 5))
        world.ball.x, world.ball.y = 460, 295
        collide_block(world.ball, world.playfield())
    assert world.ball.speed <= 0
    score = world.score

    world.ball.x, world.ball.y = 730, 400
    world.on_tick()

    assert world.paddle.lives == 2
    assert world.phase is Phase.PLAYING
    assert not world.ball.launched
    assert world.ball.speed == 0
    assert (world.ball.x, world.ball.y) == (730, 880)
    assert world.score == score


def test_last_life_ends_game(world, clock):
    world.paddle.lives = 1
    serve(world, 730, 400, 90, 0)
    clock.now = 1000

    world.on_tick()

    assert world.paddle.lives == 0
    assert world.phase is Phase.GAME_OVER
    assert not world.exit_due()
    clock.now = 2999
    assert not world.exit_due()
    clock.now = 3000
    assert world.exit_due()


def test_game_over_ignores_input_and_ticks(world):
    world.trigger_game_over()
    x = world.paddle.x
    world.on_key_down(Action.MOVE_LEFT)
    world.on_key_down(Action.PAUSE)
    world.on_tick()
    assert world.phase is Phase.GAME_OVER
    assert world.paddle.x == x
    assert not world.ball.launched


def test_pause_freezes_and_resumes(world):
    serve(world, 700, 400, 45, 15)
    world.on_key_down(Action.PAUSE)
    assert world.phase is Phase.PAUSED

    world.on_tick()
    assert (world.ball.x, world.ball.y) == (700, 400)

    world.on_key_down(Action.PAUSE)
    assert world.phase is Phase.PLAYING
    world.on_tick()
    assert (world.ball.x, world.ball.y) != (700, 400)


def test_quit_only_from_pause(world):
    world.on_key_down(Action.QUIT)
    assert world.phase is Phase.PLAYING
    world.on_key_down(Action.PAUSE)
    world.on_key_down(Action.QUIT)
    assert world.phase is Phase.GAME_OVER


def test_score_threshold_opens_upgrade(world, clock):
    world.grid.place(Block.create(BlockCategory.COMMON, 5, 5))
    serve(world, 460, 310, 90, 15)
    world.ball.score = 990

    world.on_tick()
    assert world.score == 1020
    assert world.phase is Phase.UPGRADE

    world.upgrade.choices = (UpgradeKind.WIDEN_PADDLE, UpgradeKind.MORE_DAMAGE)
    pos = (world.ball.x, world.ball.y)
    world.on_tick()
    assert (world.ball.x, world.ball.y) == pos

    clock.now = 0
    world.on_key_down(Action.MOVE_RIGHT)
    assert world.upgrade.selected == 1
    assert world.paddle.vx == 0

    clock.now = 100
    world.on_key_down(Action.SELECT)
    assert world.phase is Phase.UPGRADE

    clock.now = 500
    world.on_key_down(Action.SELECT)
    assert world.phase is Phase.PLAYING
    assert world.ball.damage == 2
    assert world.paddle.width == 70
    assert world.upgrade.applied_count == 1
    assert world.upgrade.window == 3000


def test_caught_powerup_becomes_active_until_expiry(world, cfg):
    pw = Powerup(world.paddle.x, 895, PowerupKind.PACMAN, dock_y=900)
    other = Powerup(300, 300, PowerupKind.SPACE_INVADERS, dock_y=900)
    world.powerups.items = [pw, other]

    world.on_tick()
    assert world.active_powerup is pw
    assert list(world.powerups) == [pw]

    for _ in range(5000 // cfg.tick_ms - 1):
        world.on_tick()
    assert world.active_powerup is pw
    world.on_tick()
    assert world.active_powerup is None
    assert len(world.powerups) == 0


def test_fire_needs_a_served_ball(world):
    world.temporaries.add()
    world.temporaries.add()
    world.on_key_down(Action.FIRE)
    assert not world.temporaries.active

    world.on_key_down(Action.MOVE_RIGHT)
    world.on_key_down(Action.FIRE)
    assert world.temporaries.active
    assert all(t.launched for t in world.temporaries)


@pytest.mark.parametrize("drop_out, lives", [(False, 3), (True, 2)])
def test_drop_out_rule(clock, fixed_rng, drop_out, lives):
    cfg = GameConfig(drop_out_below_paddle=drop_out)
    w = GameWorld(cfg, rng=random.Random(5), clock=clock)
    w.grid = Grid(cfg)
    w.rng = fixed_rng(1)
    serve(w, 200, 950, 270, 15)

    w.on_tick()
    assert w.paddle.lives == lives


def test_config_rejects_bad_dimensions():
    with pytest.raises(ValueError):
        GameConfig(rows=0)
    with pytest.raises(ValueError):
        GameConfig(tick_ms=-25)


def test_config_geometry(cfg):
    assert cfg.screen_width == 1460
    assert cfg.screen_height == 970
    assert cfg.field_bottom == 580
    assert cfg.field_rect().right == cfg.field_right == 1330
