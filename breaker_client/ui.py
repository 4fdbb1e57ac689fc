import pygame

from breaker.constants import BLACK, OVERLAY, WHITE


class Panel:
    """Translucent box drawn over the playfield."""
    def __init__(self, rect, color=OVERLAY):
        self.rect = pygame.Rect(rect)
        self.color = color

    def draw(self, surface):
        layer = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        layer.fill(self.color)
        surface.blit(layer, self.rect.topleft)

    def text(self, surface, font, text, rel_y, fg=WHITE):
        img = font.render(text, True, fg)
        surface.blit(img, img.get_rect(center=(self.rect.centerx, self.rect.y + rel_y)))


class ChoiceBox:
    def __init__(self, rect, font, bg=BLACK, fg=WHITE):
        self.rect = pygame.Rect(rect)
        self.font = font
        self.bg = bg
        self.fg = fg
        self.label = ""
        self.highlighted = False

    def draw(self, surface):
        pygame.draw.rect(surface, self.bg, self.rect)
        if self.highlighted:
            pygame.draw.rect(surface, self.fg, self.rect, width=2)
        txt = self.font.render(self.label, True, self.fg)
        surface.blit(txt, txt.get_rect(center=self.rect.center))
