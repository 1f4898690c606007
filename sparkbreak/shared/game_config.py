# sparkbreak/shared/game_config.py
import math
from dataclasses import dataclass

from sparkbreak.shared.constants import WIDTH, HEIGHT


@dataclass(frozen=True)
class GameConfig:
    width: int = WIDTH
    height: int = HEIGHT

    ball_r: int = 6
    ball_speed: float = 12.0     # px per tick
    launch_delay: float = 0.05   # seconds between balls of one volley
    launch_y: float = 750.0
    start_angle: float = math.pi / 4

    # y threshold of the collection area
    collect_y: float = 480.0

    block_size: int = 10
    cols: int = 60
    start_row: int = 16          # first block row, in cells from the top
    rows: int = 24
    wall_hp: int = 999999

    normal_score: int = 10
    bonus_score: int = 100
    bonus_spawn_delay: float = 0.1

    bonus_fall_v: float = 2.0
    bonus_fall_accel: float = 0.2

    particle_gravity: float = 0.3
    particle_decay: float = 0.02
    particles_per_burst: int = 6

    aim_inset: float = 0.1
    combo_banner: int = 5

    def __post_init__(self):
        if self.ball_r <= 0:
            raise ValueError("ball_r must be positive")
        if self.ball_speed <= 0:
            raise ValueError("ball_speed must be positive")
        if self.block_size <= 0 or self.cols <= 0 or self.rows <= 0:
            raise ValueError("block grid must be non-empty")
        if self.launch_delay < 0 or self.bonus_spawn_delay < 0:
            raise ValueError("delays cannot be negative")
        if not 0 < self.collect_y < self.height:
            raise ValueError("collect_y must lie inside the screen")

    @property
    def launch_x(self) -> float:
        return self.width / 2


CFG = GameConfig()
