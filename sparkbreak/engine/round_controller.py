# sparkbreak/engine/round_controller.py
"""
Round state machine: aim, staggered launch, return counting, board descent,
game over and stage clear.

``state_hash()`` and ``Ball.launched_at`` are not read by the game loop.
They are replay/debug hooks: two controllers built with the same seed and fed
the same commands produce the same hash tick for tick, and launch times show
the volley spacing.
"""
import hashlib
import logging
import math
import queue
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pygame.math import Vector2 as Vec2

from sparkbreak.engine.entities import (
    Ball,
    Block,
    BlockType,
    FallingBonus,
    Particle,
    burst,
    step_ball,
    step_falling_bonus,
    step_particle,
)
from sparkbreak.engine.level_gen import generate_level
from sparkbreak.shared.constants import GREEN, ORANGE
from sparkbreak.shared.game_config import CFG, GameConfig

logger = logging.getLogger(__name__)

# slack for comparing accumulated float clocks against schedules
_EPS = 1e-9


class Phase(str, Enum):
    IDLE = "idle"
    AIMING = "aiming"
    SHOOTING = "shooting"


@dataclass
class PendingSpawn:
    due: float
    pos: Vec2


# ---------------- State ----------------
@dataclass
class RoundState:
    launch_origin: Vec2
    angle: float
    level: int = 1
    score: int = 0
    ball_count: int = 1
    phase: Phase = Phase.IDLE
    returned: int = 0
    combo: int = 0

    running: bool = False
    game_over: bool = False
    clock: float = 0.0           # simulation seconds

    blocks: List[Block] = field(default_factory=list)
    balls: List[Ball] = field(default_factory=list)
    falling: List[FallingBonus] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    pending: List[PendingSpawn] = field(default_factory=list)

    # current volley
    quota: int = 0
    launched: int = 0
    next_launch_at: float = 0.0
    launch_from: Vec2 = field(default_factory=Vec2)
    launch_vel: Vec2 = field(default_factory=Vec2)


def clamp_aim(angle: float, inset: float = CFG.aim_inset) -> float:
    """Keep the aim in the upper half-plane, at least ``inset`` off horizontal."""
    return max(-math.pi + inset, min(-inset, angle))


def is_stage_clear(blocks: List[Block]) -> bool:
    for b in blocks:
        if b.kind is BlockType.WALL:
            return False
        if b.hp > 0:
            return False
    return True


# ---------------- Controller ----------------
class RoundController:
    """
    Owns the session: board, balls in flight, inventory, score and phase.

    Input and lifecycle commands are accepted at any time; commands that make
    no sense in the current phase are ignored. Per-tick work is driven by
    ``TickDriver``. UI-facing notifications are queued as plain dicts and
    drained with ``poll()``.
    """

    def __init__(self, cfg: GameConfig = CFG, seed: Optional[int] = None):
        self.cfg = cfg
        self.rng = random.Random(seed)
        # cosmetic effects draw from their own stream so they never shift layouts
        self.fx_rng = random.Random(None if seed is None else seed ^ 0x5EED)
        self.inbox: "queue.Queue[Dict[str, Any]]" = queue.Queue()
        # latest HUD only; superseded readouts are dropped
        self._hud: Optional[Dict[str, Any]] = None
        self.state = self._new_state()

    def _new_state(self) -> RoundState:
        cfg = self.cfg
        return RoundState(
            launch_origin=Vec2(cfg.launch_x, cfg.launch_y),
            angle=cfg.start_angle,
        )

    # ---------------- Lifecycle ----------------
    def start_session(self):
        state = self._new_state()
        state.blocks = generate_level(self.rng, self.cfg)
        state.running = True
        self.state = state
        logger.info("session started (%d blocks)", len(state.blocks))

    def restart_session(self):
        logger.info("session restarted, previous score %d", self.state.score)
        self.start_session()

    def is_live(self) -> bool:
        return self.state.running and not self.state.game_over

    # ---------------- Input ----------------
    def aim_at(self, px: float, py: float) -> float:
        o = self.state.launch_origin
        return clamp_aim(math.atan2(py - o.y, px - o.x), self.cfg.aim_inset)

    def begin_aim(self, px: float, py: float):
        s = self.state
        if not self.is_live() or s.phase is Phase.SHOOTING:
            return
        s.phase = Phase.AIMING
        s.angle = self.aim_at(px, py)

    def update_aim(self, px: float, py: float):
        if not self.is_live() or self.state.phase is not Phase.AIMING:
            return
        self.state.angle = self.aim_at(px, py)

    def release_aim(self):
        if not self.is_live() or self.state.phase is not Phase.AIMING:
            return
        self._launch()

    # ---------------- Volley ----------------
    def _launch(self):
        s = self.state
        cfg = self.cfg
        s.phase = Phase.SHOOTING
        s.returned = 0
        s.combo = 0

        s.quota = s.ball_count
        s.launched = 0
        s.next_launch_at = s.clock + cfg.launch_delay
        s.launch_from = Vec2(s.launch_origin)
        s.launch_vel = Vec2(math.cos(s.angle), math.sin(s.angle)) * cfg.ball_speed
        logger.debug("volley of %d at %.3f rad from x=%.1f", s.quota, s.angle, s.launch_from.x)

    def launch_due(self):
        s = self.state
        if s.phase is not Phase.SHOOTING:
            return
        while s.launched < s.quota and s.clock + _EPS >= s.next_launch_at:
            s.balls.append(Ball(Vec2(s.launch_from), Vec2(s.launch_vel), self.cfg.ball_r, launched_at=s.clock))
            s.launched += 1
            s.next_launch_at += self.cfg.launch_delay

    # ---------------- Bonus spawns ----------------
    def schedule_spawn(self, block: Block):
        s = self.state
        s.pending.append(PendingSpawn(s.clock + self.cfg.bonus_spawn_delay, block.center))

    def drain_spawns(self):
        s = self.state
        if not s.pending:
            return
        keep = []
        for p in s.pending:
            if s.clock + _EPS >= p.due:
                s.falling.append(FallingBonus(Vec2(p.pos), self.cfg.bonus_fall_v))
            else:
                keep.append(p)
        s.pending = keep

    # ---------------- Physics ----------------
    def step_entities(self):
        s = self.state
        cfg = self.cfg

        for ball in s.balls:
            for block in step_ball(ball, s.blocks, s, cfg):
                self._on_broken(block)

        for bonus in s.falling:
            step_falling_bonus(bonus, s, cfg)

        for p in s.particles:
            step_particle(p, cfg)

        s.balls = [b for b in s.balls if b.active]
        s.falling = [b for b in s.falling if not b.collected]
        s.particles = [p for p in s.particles if p.life > 0]

    def _on_broken(self, block: Block):
        if block.kind is BlockType.BALL_BONUS:
            self.schedule_spawn(block)
            color = ORANGE
        else:
            color = GREEN
        self.state.particles.extend(burst(block.center, color, self.fx_rng, self.cfg))

    # ---------------- Round resolution ----------------
    def round_done(self) -> bool:
        s = self.state
        return s.phase is Phase.SHOOTING and s.launched >= s.quota and s.returned >= s.quota

    def resolve_round_if_done(self) -> bool:
        if not self.round_done():
            return False
        self._resolve_round()
        return True

    def _resolve_round(self):
        s = self.state
        cfg = self.cfg

        s.balls = []
        for b in s.blocks:
            b.move_down()

        if any(b.alive and b.y >= cfg.collect_y for b in s.blocks):
            self._game_over()
            return

        if is_stage_clear(s.blocks):
            score = s.score
            logger.info("stage clear, score %d", score)
            self._emit({"type": "STAGE_CLEAR", "score": score})
            self.start_session()
            return

        s.level += 1
        s.blocks = [b for b in s.blocks if b.kind is BlockType.WALL or b.alive]
        s.phase = Phase.IDLE
        logger.debug("round resolved: level %d, combo %d, %d blocks left", s.level, s.combo, len(s.blocks))
        self._emit({"type": "ROUND_END", "level": s.level, "combo": s.combo})

    def _game_over(self):
        s = self.state
        if s.game_over:
            return
        s.game_over = True
        s.running = False
        s.phase = Phase.IDLE
        logger.info("game over at level %d, score %d", s.level, s.score)
        self._emit({"type": "GAME_OVER", "score": s.score})

    # ---------------- Notifications ----------------
    def _emit(self, msg: Dict[str, Any]):
        self.inbox.put(msg)

    def publish_hud(self):
        s = self.state
        self._hud = {"type": "HUD", "level": s.level, "balls": s.ball_count, "score": s.score}

    def poll(self) -> List[Dict[str, Any]]:
        msgs: List[Dict[str, Any]] = []
        while True:
            try:
                msgs.append(self.inbox.get_nowait())
            except queue.Empty:
                break
        if self._hud is not None:
            msgs.append(self._hud)
            self._hud = None
        return msgs

    # ---------------- Presentation ----------------
    def make_snapshot(self) -> Dict[str, Any]:
        s = self.state
        return {
            "level": s.level,
            "score": s.score,
            "ball_count": s.ball_count,
            "phase": s.phase.value,
            "angle": s.angle,
            "launch_origin": (s.launch_origin.x, s.launch_origin.y),
            "returned": s.returned,
            "combo": s.combo,
            "running": s.running,
            "game_over": s.game_over,
            "blocks": [
                {"x": b.x, "y": b.y, "size": b.size, "kind": b.kind.value, "hp": b.hp, "max_hp": b.max_hp}
                for b in s.blocks if b.hp > 0
            ],
            "balls": [{"x": b.pos.x, "y": b.pos.y, "r": b.r} for b in s.balls if b.active],
            "falling": [{"x": f.pos.x, "y": f.pos.y} for f in s.falling if not f.collected],
            "particles": [
                {"x": p.pos.x, "y": p.pos.y, "size": p.size, "life": p.life, "color": p.color}
                for p in s.particles
            ],
        }

    def state_hash(self) -> str:
        s = self.state
        parts = [f"{s.level},{s.score},{s.ball_count},{s.phase.value},{s.returned},{s.combo}"]
        parts += [f"{b.x},{b.y},{b.hp}" for b in s.blocks]
        parts += [f"{int(round(b.pos.x))},{int(round(b.pos.y))}" for b in s.balls]
        parts += [f"{int(round(f.pos.x))},{int(round(f.pos.y))}" for f in s.falling]
        payload = (";".join(parts)).encode("utf-8")
        return hashlib.md5(payload).hexdigest()
