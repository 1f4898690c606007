import pygame

from sparkbreak.client.renderer import Renderer
from sparkbreak.client.ui import Banner, Button
from sparkbreak.engine.round_controller import RoundController
from sparkbreak.shared.constants import WIDTH, HEIGHT, WHITE, GRAY, CYAN, GREEN, ORANGE, YELLOW, FIELD


class Screen:
    name = "base"
    def __init__(self, app): self.app = app
    def on_enter(self, **kwargs): pass
    def on_exit(self): pass
    def handle_event(self, event): pass
    def update(self, dt): pass
    def draw(self, surface): pass


# -------------------- Start --------------------
class StartScreen(Screen):
    name = "start"
    def __init__(self, app):
        super().__init__(app)
        self.title_font = pygame.font.SysFont(None, 72)
        self.small_font = pygame.font.SysFont(None, 26)
        self.start_btn = Button((WIDTH//2 - 120, HEIGHT//2 + 40, 240, 55), "Start", self.small_font, CYAN, (10, 10, 10))

    def handle_event(self, event):
        self.start_btn.handle_event(event)
        if self.start_btn.is_clicked(event):
            self.app.controller.start_session()
            self.app.change_screen("game")

    def draw(self, surface):
        surface.fill(FIELD)
        title = self.title_font.render("SPARK BREAK", True, WHITE)
        surface.blit(title, title.get_rect(center=(WIDTH//2, HEIGHT//2 - 80)))

        hint = self.small_font.render("Drag to aim, release to shoot", True, GRAY)
        surface.blit(hint, hint.get_rect(center=(WIDTH//2, HEIGHT//2 - 20)))

        self.start_btn.draw(surface)


# -------------------- Game --------------------
class GameScreen(Screen):
    name = "game"
    def __init__(self, app):
        super().__init__(app)
        self.renderer = Renderer(app.controller.cfg)
        self.banner = Banner(pygame.font.SysFont(None, 40), YELLOW)

    @property
    def controller(self) -> RoundController:
        return self.app.controller

    def on_enter(self, **kwargs):
        self.banner.left = 0.0

    def handle_event(self, event):
        c = self.controller
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            c.begin_aim(*event.pos)
        elif event.type == pygame.MOUSEMOTION:
            c.update_aim(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            c.release_aim()

    def update(self, dt):
        self.app.driver.tick()
        self.banner.update(dt)

        for m in self.controller.poll():
            t = m.get("type")
            if t == "HUD":
                self.app.hud = m
            elif t == "STAGE_CLEAR":
                self.banner.show(f"Stage clear! Score: {m.get('score')}")
            elif t == "GAME_OVER":
                self.app.change_screen("game_over", score=m.get("score", 0))
                return

    def draw(self, surface):
        self.renderer.draw(surface, self.controller.make_snapshot())
        self.banner.draw(surface, (WIDTH//2, HEIGHT//2 - 80))


# -------------------- Game over --------------------
class GameOverScreen(Screen):
    name = "game_over"
    ARM_DELAY = 0.6

    def __init__(self, app):
        super().__init__(app)
        self.title_font = pygame.font.SysFont(None, 64)
        self.small_font = pygame.font.SysFont(None, 28)
        self.restart_btn = Button((WIDTH//2 - 120, HEIGHT//2 + 40, 240, 55), "Play again", self.small_font, GREEN, WHITE)
        self.score = 0
        self.arm_left = 0.0

    def on_enter(self, **kwargs):
        self.score = int(kwargs.get("score", 0))
        # the click that ended the round must not also restart it
        self.restart_btn.enabled = False
        self.arm_left = self.ARM_DELAY

    def handle_event(self, event):
        self.restart_btn.handle_event(event)
        if self.restart_btn.is_clicked(event):
            self.app.controller.restart_session()
            self.app.change_screen("game")

    def update(self, dt):
        if self.arm_left > 0:
            self.arm_left -= dt
            if self.arm_left <= 0:
                self.restart_btn.enabled = True

    def draw(self, surface):
        surface.fill((40, 20, 30))
        title = self.title_font.render("GAME OVER", True, ORANGE)
        surface.blit(title, title.get_rect(center=(WIDTH//2, HEIGHT//2 - 80)))

        sc = self.small_font.render(f"Final score: {self.score}", True, WHITE)
        surface.blit(sc, sc.get_rect(center=(WIDTH//2, HEIGHT//2 - 20)))

        self.restart_btn.draw(surface)
