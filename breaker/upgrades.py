# breaker/upgrades.py
import enum
import logging
import random
from typing import Callable, Dict, Optional, Tuple

from breaker.constants import UPGRADE_KEY_DELAY_MS, UPGRADE_WINDOW
from breaker.game_entities import Ball, Paddle

logger = logging.getLogger(__name__)


class UpgradeKind(enum.Enum):
    WIDEN_PADDLE = "Wider paddle"
    ENLARGE_BALL = "Bigger ball"
    QUICKER_PADDLE = "Quicker paddle"
    EXPLOSIVE_BALL = "Explosive ball"
    MORE_DAMAGE = "More damage"


class UpgradeOffer:
    """
    Two distinct upgrades on offer. The next offer opens whenever the score
    wraps past a multiple of a window that widens with every upgrade taken.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.applied_count = 0
        self.selected = 0
        self.choices: Tuple[UpgradeKind, UpgradeKind] = self._roll()
        self._last_press_ms: Optional[float] = None

    def _roll(self) -> Tuple[UpgradeKind, UpgradeKind]:
        kinds = list(UpgradeKind)
        if len(kinds) < 2:
            raise ValueError("an offer needs at least two upgrade kinds")
        first = self.rng.randrange(len(kinds))
        second = first
        while second == first:
            second = self.rng.randrange(len(kinds))
        return kinds[first], kinds[second]

    @property
    def window(self) -> int:
        return UPGRADE_WINDOW * (2 * self.applied_count + 1)

    def crossed(self, old_score: int, new_score: int) -> bool:
        if old_score == new_score:
            return False
        return old_score % self.window > new_score % self.window

    def accept_press(self, now_ms: float) -> bool:
        """Debounce: presses closer than the key delay to the last one are dropped."""
        if self._last_press_ms is not None and now_ms - self._last_press_ms <= UPGRADE_KEY_DELAY_MS:
            return False
        self._last_press_ms = now_ms
        return True

    def step(self, direction: int):
        # two slots, so either direction toggles
        if direction:
            self.selected = 1 - self.selected

    @property
    def current(self) -> UpgradeKind:
        return self.choices[self.selected]

    def confirm(self) -> UpgradeKind:
        chosen = self.current
        self.applied_count += 1
        self.selected = 0
        self.choices = self._roll()
        logger.info("upgrade %s applied (%d total)", chosen.name, self.applied_count)
        return chosen


UPGRADE_EFFECTS: Dict[UpgradeKind, Callable] = {
    UpgradeKind.WIDEN_PADDLE: lambda paddle, ball, temporaries: paddle.widen(),
    UpgradeKind.ENLARGE_BALL: lambda paddle, ball, temporaries: ball.enlarge(),
    UpgradeKind.QUICKER_PADDLE: lambda paddle, ball, temporaries: paddle.quicken(),
    UpgradeKind.MORE_DAMAGE: lambda paddle, ball, temporaries: ball.add_damage(),
    UpgradeKind.EXPLOSIVE_BALL: lambda paddle, ball, temporaries: temporaries.add(),
}


def apply_upgrade(kind: UpgradeKind, paddle: Paddle, ball: Ball, temporaries):
    UPGRADE_EFFECTS[kind](paddle, ball, temporaries)
