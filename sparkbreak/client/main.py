# sparkbreak/client/main.py
import logging
import os

import pygame

from sparkbreak.client.screens import StartScreen, GameScreen, GameOverScreen
from sparkbreak.engine.round_controller import RoundController
from sparkbreak.engine.tick_driver import TickDriver
from sparkbreak.shared.constants import APP_TITLE, WIDTH, HEIGHT, FPS, BLACK, WHITE

logger = logging.getLogger(__name__)


class App:
    def __init__(self, seed=None):
        pygame.init()
        pygame.display.set_caption(APP_TITLE)
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont(None, 22)

        self.controller = RoundController(seed=seed)
        self.driver = TickDriver(self.controller, FPS)
        self.hud = None

        self.screens = {
            "start": StartScreen(self),
            "game": GameScreen(self),
            "game_over": GameOverScreen(self),
        }

        self.current = None
        self.running = True
        self.change_screen("start")

    def change_screen(self, name, **kwargs):
        if self.current:
            self.current.on_exit()
        self.current = self.screens[name]
        self.current.on_enter(**kwargs)
        logger.debug("screen -> %s", name)

    def handle_global_keys(self, event):
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False

    def draw_footer(self):
        text = "ESC: Quit"
        if self.hud and self.current is self.screens["game"]:
            text = f"Level {self.hud['level']} | Balls {self.hud['balls']} | Score {self.hud['score']} | " + text
        img = self.font.render(text, True, WHITE)
        rect = img.get_rect(midbottom=(WIDTH // 2, HEIGHT - 8))
        shadow = self.font.render(text, True, BLACK)
        self.screen.blit(shadow, (rect.x + 1, rect.y + 1))
        self.screen.blit(img, rect)

    def run(self):
        try:
            while self.running:
                self.clock.tick(FPS)
                dt = 1.0 / FPS

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    self.handle_global_keys(event)
                    self.current.handle_event(event)

                self.current.update(dt)

                self.current.draw(self.screen)
                self.draw_footer()
                pygame.display.flip()
        finally:
            pygame.quit()


def main():
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Fixed layouts for debugging:
    #   SPARK_SEED=42 spark-break
    seed = os.getenv("SPARK_SEED")
    App(seed=int(seed) if seed else None).run()


if __name__ == "__main__":
    main()
