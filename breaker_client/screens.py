import pygame

from breaker.constants import BLACK, WHITE
from breaker.game_world import Action, GameWorld, Phase
from breaker_client.ui import ChoiceBox, Panel

KEYMAP = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_SPACE: Action.FIRE,
    pygame.K_p: Action.PAUSE,
    pygame.K_RETURN: Action.SELECT,
    pygame.K_KP_ENTER: Action.SELECT,
    pygame.K_e: Action.QUIT,
}


class Screen:
    name = "base"
    def __init__(self, app): self.app = app
    def on_enter(self, **kwargs): pass
    def on_exit(self): pass
    def handle_event(self, event): pass
    def update(self, dt): pass
    def draw(self, surface): pass


# -------------------- Game --------------------
class GameScreen(Screen):
    name = "game"
    def __init__(self, app):
        super().__init__(app)
        self.font = pygame.font.SysFont(None, 24)
        self.world: GameWorld = None
        self.acc_ms = 0.0

        w, h = app.cfg.screen_width, app.cfg.screen_height
        self.overlay = Panel((w // 4, h // 4, w // 2, h // 2))

        box_w, box_h = self.overlay.rect.w // 3, self.overlay.rect.h // 5
        box_y = self.overlay.rect.y + self.overlay.rect.h // 2
        self.choice_boxes = [
            ChoiceBox((self.overlay.rect.x + 10, box_y, box_w, box_h), self.font),
            ChoiceBox((self.overlay.rect.right - box_w - 10, box_y, box_w, box_h), self.font),
        ]

    def on_enter(self, **kwargs):
        self.world = GameWorld(self.app.cfg, rng=kwargs.get("rng"))
        self.acc_ms = 0.0

    def handle_event(self, event):
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return
        action = KEYMAP.get(event.key)
        if action is None:
            return
        if event.type == pygame.KEYDOWN:
            self.world.on_key_down(action)
        else:
            self.world.on_key_up(action)

    def update(self, dt):
        # fixed ticks out of variable frame time
        tick = self.app.cfg.tick_ms
        self.acc_ms += dt * 1000.0
        while self.acc_ms >= tick:
            self.acc_ms -= tick
            self.world.on_tick()

        if self.world.exit_due():
            self.app.running = False

    # -------------------- Draw --------------------
    def _draw_hud(self, surface):
        w, y = self.app.cfg.screen_width, self.app.cfg.side_size // 2
        temps = self.world.temporaries
        cooldown = f"Cooldown: {temps.cooldown_seconds()}" if len(temps) else "Cooldown: --"
        items = [f"Lives: {self.world.paddle.lives}", f"Score: {self.world.score}", cooldown]
        for i, text in enumerate(items):
            img = self.font.render(text, True, WHITE)
            surface.blit(img, img.get_rect(center=(w * (i + 1) // 4, y)))

        pw = self.world.active_powerup
        if pw is not None:
            img = self.font.render(f"Power-up: {pw.kind.value} ({pw.docked_ms // 1000 + 1}s)", True, WHITE)
            surface.blit(img, img.get_rect(center=(w // 2, y + 24)))

    def _draw_pause(self, surface):
        self.overlay.draw(surface)
        h = self.overlay.rect.h
        self.overlay.text(surface, self.font, "Paused", h // 4)
        self.overlay.text(surface, self.font, "Press 'P' to continue playing", h * 3 // 5)
        self.overlay.text(surface, self.font, "Press 'E' to leave the game", h * 4 // 5)

    def _draw_upgrade(self, surface):
        offer = self.world.upgrade
        self.overlay.draw(surface)
        self.overlay.text(surface, self.font, "Choose one upgrade", self.overlay.rect.h // 5)
        for i, box in enumerate(self.choice_boxes):
            box.label = offer.choices[i].value
            box.highlighted = i == offer.selected
            box.draw(surface)

    def _draw_game_over(self, surface):
        surface.fill(BLACK)
        img = self.font.render("Game over!", True, WHITE)
        surface.blit(img, img.get_rect(center=surface.get_rect().center))

    def draw(self, surface):
        phase = self.world.phase
        if phase is Phase.GAME_OVER:
            self._draw_game_over(surface)
            return

        self.world.draw(surface, self.font)
        self._draw_hud(surface)
        if phase is Phase.PAUSED:
            self._draw_pause(surface)
        elif phase is Phase.UPGRADE:
            self._draw_upgrade(surface)
