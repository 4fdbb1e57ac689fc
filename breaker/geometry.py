# breaker/geometry.py
"""
Pure helpers shared by the actors: angle math, integer motion steps,
hit boxes and a couple of colour tweaks.

Angles are degrees, counter-clockwise, with screen y growing downward.
"""
import math
from typing import Tuple

import pygame

from breaker.constants import BLACK, COMBO_RAINBOW_THRESHOLD, RAINBOW, WHITE

Color = Tuple[int, int, int]


def normalize_angle(angle):
    return angle % 360


def reflect_horizontal(angle):
    """Bounce off a left/right face."""
    return normalize_angle(180 - angle)


def reflect_vertical(angle):
    """Bounce off a top/bottom face."""
    return normalize_angle(360 - angle)


def reflect_diagonal(angle):
    """Bounce off a corner: straight back where it came from."""
    return normalize_angle(180 + angle)


def step(x: int, y: int, angle, speed) -> Tuple[int, int]:
    rad = math.radians(angle)
    # truncate toward zero, screen y is inverted
    return x + int(math.cos(rad) * speed), y - int(math.sin(rad) * speed)


def centered_rect(cx: int, cy: int, width: int, height: int) -> pygame.Rect:
    """
    Hit box around a centre point, spanning cx - width//2 .. cx + width//2
    inclusive. The extra pixel on the right and bottom makes boxes whose
    edges only touch collide under colliderect.
    """
    half_w, half_h = width // 2, height // 2
    return pygame.Rect(cx - half_w, cy - half_h, 2 * half_w + 1, 2 * half_h + 1)


def brighter(color: Color, factor: float = 0.7) -> Color:
    r, g, b = color[:3]
    floor = int(1.0 / (1.0 - factor))
    if (r, g, b) == BLACK:
        return floor, floor, floor
    # dark channels are lifted first so they can grow at all
    lifted = (c if c == 0 else max(c, floor) for c in (r, g, b))
    return tuple(min(int(c / factor), 255) for c in lifted)


def rainbow_color(streak: int, remaining_ms: int, period_ms: int) -> Color:
    if streak <= COMBO_RAINBOW_THRESHOLD:
        return WHITE
    return RAINBOW[(remaining_ms // max(1, int(period_ms))) % len(RAINBOW)]
