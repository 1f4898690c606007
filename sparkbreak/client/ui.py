import pygame

from sparkbreak.shared.constants import BLACK, WHITE


class Button:
    """
    Rounded button with a hover highlight.

    A disabled button is drawn greyed out and ignores clicks; screens use it to
    hold a button back until it should be pressable.
    """

    def __init__(self, rect, text, font, bg, fg, enabled=True):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.fg = fg
        self.enabled = enabled
        self.hovered = False

    def handle_event(self, event):
        if event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)

    def fill_color(self):
        if not self.enabled:
            return (90, 90, 100)
        if self.hovered:
            return tuple(min(255, c + 40) for c in self.bg)
        return self.bg

    def draw(self, surface):
        pygame.draw.rect(surface, self.fill_color(), self.rect, border_radius=10)
        border = WHITE if self.hovered and self.enabled else BLACK
        pygame.draw.rect(surface, border, self.rect, width=2, border_radius=10)
        fg = self.fg if self.enabled else (160, 160, 170)
        txt = self.font.render(self.text, True, fg)
        surface.blit(txt, txt.get_rect(center=self.rect.center))

    def is_clicked(self, event):
        if not self.enabled:
            return False
        return event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and self.rect.collidepoint(event.pos)


class Banner:
    """Centered message that disappears after ``duration`` seconds."""

    def __init__(self, font, color, duration=2.0):
        self.font = font
        self.color = color
        self.duration = duration
        self.text = ""
        self.left = 0.0

    def show(self, text):
        self.text = text
        self.left = self.duration

    def update(self, dt):
        if self.left > 0:
            self.left = max(0.0, self.left - dt)

    @property
    def visible(self):
        return self.left > 0 and bool(self.text)

    def draw(self, surface, center):
        if not self.visible:
            return
        img = self.font.render(self.text, True, self.color)
        rect = img.get_rect(center=center)
        bg = rect.inflate(24, 16)
        pygame.draw.rect(surface, (0, 0, 0), bg, border_radius=8)
        surface.blit(img, rect)
