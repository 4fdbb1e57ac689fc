# breaker/combo.py
from dataclasses import dataclass

from breaker.constants import COMBO_BONUS_STEP, COMBO_RESET_MS
from breaker.geometry import rainbow_color


@dataclass
class Combo:
    """Consecutive destroys inside a rolling window. Owned by the world."""
    streak: int = 0
    decay_ms: int = 0

    def on_destroy(self):
        self.streak += 1
        self.decay_ms = COMBO_RESET_MS

    @property
    def bonus(self) -> int:
        return (self.streak - 1) * COMBO_BONUS_STEP if self.streak > 1 else 0

    def tick(self, dt_ms: int):
        if self.decay_ms > 0:
            self.decay_ms = max(0, self.decay_ms - dt_ms)
        else:
            self.streak = 0
            self.decay_ms = 0

    def color(self, period_ms: int):
        return rainbow_color(self.streak, self.decay_ms, period_ms)
