import random

from breaker.game_entities import Paddle
from breaker.powerups import Powerup, PowerupKind, PowerupManager


def make(cfg, x, y):
    dock_y = cfg.screen_height - cfg.side_size // 2 - 5
    return Powerup(x, y, PowerupKind.PACMAN, dock_y)


def test_spawn_picks_a_kind(cfg):
    mgr = PowerupManager(cfg, random.Random(3))
    pw = mgr.try_spawn(300, 200)
    assert len(mgr) == 1
    assert pw.kind in PowerupKind
    assert (pw.x, pw.y) == (300, 200)
    assert pw.dock_y == 900


def test_catch_clears_siblings(cfg):
    paddle = Paddle(cfg)
    mgr = PowerupManager(cfg)
    first, caught, third = make(cfg, 200, 300), make(cfg, paddle.x, 895), make(cfg, 300, 300)
    mgr.items = [first, caught, third]

    result = mgr.tick(cfg.tick_ms, paddle)

    assert result.caught is caught
    assert caught.caught
    assert list(mgr) == [caught]
    assert first in result.removed and third in result.removed


def test_catch_replaces_previously_active(cfg):
    paddle = Paddle(cfg)
    mgr = PowerupManager(cfg)
    old = make(cfg, paddle.x, 900)
    old.caught = True
    new = make(cfg, paddle.x, 898)
    mgr.items = [old, new]

    result = mgr.tick(cfg.tick_ms, paddle)
    assert result.caught is new
    assert list(mgr) == [new]
    assert old in result.removed


def test_falls_then_docks_then_expires(cfg):
    paddle = Paddle(cfg)
    mgr = PowerupManager(cfg)
    pw = make(cfg, 200, 880)
    mgr.items = [pw]

    mgr.tick(cfg.tick_ms, paddle)
    assert pw.y == 890
    mgr.tick(cfg.tick_ms, paddle)
    assert pw.y == 900 and pw.docked
    assert pw.fall_ms == 3000

    for _ in range(3000 // cfg.tick_ms):
        result = mgr.tick(cfg.tick_ms, paddle)
        assert result.removed == []
    assert pw.fall_ms == 0
    assert pw.y == 900

    result = mgr.tick(cfg.tick_ms, paddle)
    assert result.removed == [pw]
    assert len(mgr) == 0


def test_fall_stops_at_dock_row(cfg):
    paddle = Paddle(cfg)
    mgr = PowerupManager(cfg)
    pw = make(cfg, 200, 895)
    mgr.items = [pw]
    mgr.tick(cfg.tick_ms, paddle)
    assert pw.y == pw.dock_y


def test_caught_expires_after_docked_duration(cfg):
    paddle = Paddle(cfg)
    mgr = PowerupManager(cfg)
    pw = make(cfg, paddle.x, 900)
    mgr.items = [pw]
    assert mgr.tick(cfg.tick_ms, paddle).caught is pw

    for _ in range(5000 // cfg.tick_ms - 1):
        assert mgr.tick(cfg.tick_ms, paddle).removed == []
    result = mgr.tick(cfg.tick_ms, paddle)
    assert result.removed == [pw]
    assert len(mgr) == 0


def test_empty_manager_is_noop(cfg):
    mgr = PowerupManager(cfg)
    result = mgr.tick(cfg.tick_ms, Paddle(cfg))
    assert result.caught is None
    assert result.removed == []


def test_catch_reports_already_missed_sibling_once(cfg):
    paddle = Paddle(cfg)
    mgr = PowerupManager(cfg)
    missed = make(cfg, 200, 300)
    missed.fall_ms = 0
    hit = make(cfg, paddle.x, 895)
    mgr.items = [missed, hit]

    result = mgr.tick(cfg.tick_ms, paddle)

    assert result.caught is hit
    assert result.removed.count(missed) == 1
    assert hit not in result.removed
    assert list(mgr) == [hit]
