# breaker_client/main.py
import logging
import os
import random
import sys

import pygame

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from breaker.constants import APP_TITLE
from breaker.game_config import CFG
from breaker_client.screens import GameScreen

logger = logging.getLogger(__name__)

FPS = 60


class App:
    def __init__(self, cfg=CFG):
        self.cfg = cfg
        pygame.init()
        pygame.display.set_caption(APP_TITLE)
        self.screen = pygame.display.set_mode((cfg.screen_width, cfg.screen_height))
        self.clock = pygame.time.Clock()

        # Reproducible run:
        #   BREAKER_SEED=42 python breaker_client/main.py
        seed = os.getenv("BREAKER_SEED")
        self.rng = random.Random(int(seed)) if seed else random.Random()

        self.screens = {
            "game": GameScreen(self),
        }

        self.current = None
        self.running = True
        self.change_screen("game", rng=self.rng)

    def change_screen(self, name, **kwargs):
        if self.current:
            self.current.on_exit()
        self.current = self.screens[name]
        self.current.on_enter(**kwargs)

    def handle_global_keys(self, event):
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False

    def run(self):
        try:
            while self.running:
                dt = self.clock.tick(FPS) / 1000.0

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    self.handle_global_keys(event)
                    self.current.handle_event(event)

                self.current.update(dt)
                self.current.draw(self.screen)
                pygame.display.flip()
        finally:
            logger.info("shutting down")
            pygame.quit()


def main():
    logging.basicConfig(
        level=os.getenv("BREAKER_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    App().run()


if __name__ == "__main__":
    main()
