# sparkbreak/engine/entities.py
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from pygame.math import Vector2 as Vec2

from sparkbreak.engine.physics import bounce_off_bounds, intersects_block, resolve_collision
from sparkbreak.shared.game_config import GameConfig


class BlockType(str, Enum):
    NORMAL = "normal"
    WALL = "wall"
    BALL_BONUS = "ballplus"


# ---------------- Entities ----------------
@dataclass
class Block:
    x: int
    y: int
    kind: BlockType
    hp: int = 1
    max_hp: int = 0
    size: int = 10

    def __post_init__(self):
        if not self.max_hp:
            self.max_hp = self.hp

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def center(self) -> Vec2:
        return Vec2(self.x + self.size / 2, self.y + self.size / 2)

    def move_down(self):
        self.y += self.size


@dataclass
class Ball:
    pos: Vec2
    vel: Vec2
    r: float
    active: bool = True
    launched_at: float = 0.0   # simulation clock, seconds; debug only


@dataclass
class FallingBonus:
    pos: Vec2
    vy: float
    collected: bool = False


@dataclass
class Particle:
    pos: Vec2
    vel: Vec2
    life: float
    size: float
    color: Tuple[int, int, int]


# ---------------- Update rules ----------------
def hit_block(block: Block, state, cfg: GameConfig) -> bool:
    """
    Apply one ball hit to ``block`` and credit ``state``.
    Returns True when this hit destroyed the block.
    """
    if block.kind is BlockType.WALL:
        return False

    if block.kind is BlockType.BALL_BONUS:
        block.hp = 0
        state.score += cfg.bonus_score
        state.combo += 1
        return True

    block.hp -= 1
    state.score += cfg.normal_score
    if block.hp > 0:
        state.combo += 1
        return False
    return True


def step_ball(ball: Ball, blocks: List[Block], state, cfg: GameConfig) -> List[Block]:
    """
    Advance one ball by one tick.

    A ball in the collection area that is not rising counts as returned and
    moves the launch origin to its x. Otherwise every live block it overlaps
    is hit and reflected off, in board order. Returns the blocks it destroyed.
    """
    broken: List[Block] = []
    if not ball.active:
        return broken

    ball.pos += ball.vel
    bounce_off_bounds(ball, cfg.width)

    if ball.vel.y >= 0 and ball.pos.y >= cfg.collect_y:
        ball.active = False
        state.returned += 1
        state.launch_origin.x = ball.pos.x
        return broken

    for block in blocks:
        if not block.alive:
            continue
        if not intersects_block(ball, block):
            continue
        if hit_block(block, state, cfg):
            broken.append(block)
        resolve_collision(ball, block)

    return broken


def step_falling_bonus(bonus: FallingBonus, state, cfg: GameConfig):
    if bonus.collected:
        return
    bonus.pos.y += bonus.vy
    bonus.vy += cfg.bonus_fall_accel

    if bonus.pos.y >= cfg.collect_y:
        bonus.collected = True
        state.ball_count += 1


def step_particle(p: Particle, cfg: GameConfig):
    p.pos += p.vel
    p.vel.y += cfg.particle_gravity
    p.life -= cfg.particle_decay


def burst(center: Vec2, color, rng: random.Random, cfg: GameConfig) -> List[Particle]:
    out = []
    for _ in range(cfg.particles_per_burst):
        vel = Vec2((rng.random() - 0.5) * 8, (rng.random() - 0.5) * 8)
        out.append(Particle(Vec2(center), vel, 1.0, rng.random() * 4 + 2, color))
    return out
