# sparkbreak/client/renderer.py
import math
from typing import Any, Dict, Tuple

import pygame
from pygame.math import Vector2 as Vec2

from sparkbreak.engine.entities import BlockType
from sparkbreak.shared.constants import (
    BLACK, CYAN, FIELD, ORANGE, RED, TRAY, WALL_BLUE, WHITE, YELLOW,
)
from sparkbreak.shared.game_config import CFG, GameConfig

AIM_LEN = 100
ICON_Y = 700


def block_color(kind: str, hp: int, max_hp: int) -> Tuple[int, int, int]:
    if kind == BlockType.WALL.value:
        return WALL_BLUE
    if kind == BlockType.BALL_BONUS.value:
        return ORANGE
    # green fades with remaining hp
    intensity = 100 + int((hp / max_hp) * 155) if max_hp > 0 else 100
    return (0, min(255, intensity), 0)


def _glow(surface, color, center, radius, alpha):
    r = int(radius)
    if r <= 0:
        return
    glow = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
    pygame.draw.circle(glow, (*color, alpha), (r, r), r)
    surface.blit(glow, (int(center[0]) - r, int(center[1]) - r))


def _dashed_line(surface, color, start: Vec2, end: Vec2, width=3, dash=10, gap=5):
    delta = end - start
    length = delta.length()
    if length == 0:
        return
    step = delta / length
    pos = 0.0
    while pos < length:
        seg_end = min(pos + dash, length)
        pygame.draw.line(surface, color, start + step * pos, start + step * seg_end, width)
        pos = seg_end + gap


class Renderer:
    def __init__(self, cfg: GameConfig = CFG):
        self.cfg = cfg
        self.small_font = pygame.font.Font(None, 22)
        self.icon_font = pygame.font.Font(None, 26)
        self.banner_font = pygame.font.Font(None, 64)

    def draw(self, surface: pygame.Surface, snap: Dict[str, Any]):
        cfg = self.cfg
        line = int(cfg.collect_y)
        surface.fill(FIELD, pygame.Rect(0, 0, cfg.width, line))
        surface.fill(TRAY, pygame.Rect(0, line, cfg.width, cfg.height - line))

        for b in snap["blocks"]:
            rect = pygame.Rect(b["x"], b["y"], b["size"], b["size"])
            pygame.draw.rect(surface, block_color(b["kind"], b["hp"], b["max_hp"]), rect)
            pygame.draw.rect(surface, BLACK, rect, 1)

        for ball in snap["balls"]:
            _glow(surface, CYAN, (ball["x"], ball["y"]), ball["r"] * 1.5, 50)
            pygame.draw.circle(surface, CYAN, (int(ball["x"]), int(ball["y"])), int(ball["r"]))
            pygame.draw.circle(surface, WHITE, (int(ball["x"]), int(ball["y"])), int(ball["r"]), 2)

        for f in snap["falling"]:
            _glow(surface, YELLOW, (f["x"], f["y"]), 15, 76)
            pygame.draw.circle(surface, YELLOW, (int(f["x"]), int(f["y"])), 8)
            pygame.draw.circle(surface, WHITE, (int(f["x"]), int(f["y"])), 8, 2)

        for p in snap["particles"]:
            alpha = max(0, min(255, int(p["life"] * 255)))
            _glow(surface, p["color"], (p["x"], p["y"]), p["size"], alpha)

        self._draw_turret(surface, snap)
        self._draw_hud(surface, snap)

        if snap["combo"] > cfg.combo_banner:
            center = (cfg.width // 2, cfg.height // 2)
            outline = self.banner_font.render("SPARK BREAK!!", True, RED)
            text = self.banner_font.render("SPARK BREAK!!", True, YELLOW)
            for dx, dy in ((-2, 0), (2, 0), (0, -2), (0, 2)):
                surface.blit(outline, outline.get_rect(center=(center[0] + dx, center[1] + dy)))
            surface.blit(text, text.get_rect(center=center))

    def _draw_turret(self, surface, snap):
        if snap["phase"] == "shooting":
            return
        ox, oy = snap["launch_origin"]
        origin = Vec2(ox, oy)
        pygame.draw.circle(surface, CYAN, (int(ox), int(oy)), 10)

        if snap["phase"] != "aiming":
            return
        angle = snap["angle"]
        end = origin + Vec2(math.cos(angle), math.sin(angle)) * AIM_LEN
        _dashed_line(surface, (230, 230, 230), origin, end)

        degrees = round(math.degrees(angle))
        img = self.small_font.render(f"{degrees}°", True, WHITE)
        surface.blit(img, img.get_rect(center=(int(ox), int(oy) - 30)))

    def _draw_hud(self, surface, snap):
        pygame.draw.circle(surface, CYAN, (30, ICON_Y), 15)
        pygame.draw.circle(surface, WHITE, (30, ICON_Y), 15, 2)
        img = self.icon_font.render(f"x{snap['ball_count']}", True, WHITE)
        surface.blit(img, (55, ICON_Y - 8))
