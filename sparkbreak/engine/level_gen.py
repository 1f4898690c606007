# sparkbreak/engine/level_gen.py
"""
Stage layout.

The board is a row-major band of ``cfg.rows`` x ``cfg.cols`` cells starting
``cfg.start_row`` cells below the top. Every cell starts as a Normal block with
1-3 hp, a fixed "T" motif of Wall blocks is stamped over it, and a handful of
BallBonus blocks replace random Normal cells.
"""
import logging
import random
from typing import List, Optional

from sparkbreak.engine.entities import Block, BlockType
from sparkbreak.shared.game_config import CFG, GameConfig

logger = logging.getLogger(__name__)

# (row, first col, last col exclusive) of the crossbar
CROSSBAR = (6, 5, 55)
# columns of the uprights, which span rows [UPRIGHT_ROWS[0], UPRIGHT_ROWS[1])
UPRIGHT_COLS = (5, 30, 54)
UPRIGHT_ROWS = (7, 18)

BONUS_MIN, BONUS_MAX = 3, 5


def cell_index(row: int, col: int, cfg: GameConfig = CFG) -> int:
    return row * cfg.cols + col


def wall_cells(cfg: GameConfig = CFG) -> List[tuple]:
    """(row, col) of every Wall cell. Identical for every stage."""
    cells = []
    row, c0, c1 = CROSSBAR
    for col in range(c0, c1):
        cells.append((row, col))
    for col in UPRIGHT_COLS:
        for row in range(*UPRIGHT_ROWS):
            cells.append((row, col))
    return cells


def _make(row: int, col: int, kind: BlockType, hp: int, cfg: GameConfig) -> Block:
    x = col * cfg.block_size
    y = (cfg.start_row + row) * cfg.block_size
    return Block(x, y, kind, hp, size=cfg.block_size)


def generate_level(rng: Optional[random.Random] = None, cfg: GameConfig = CFG) -> List[Block]:
    rng = rng or random.Random()
    blocks: List[Block] = []

    for row in range(cfg.rows):
        for col in range(cfg.cols):
            blocks.append(_make(row, col, BlockType.NORMAL, rng.randint(1, 3), cfg))

    for row, col in wall_cells(cfg):
        blocks[cell_index(row, col, cfg)] = _make(row, col, BlockType.WALL, cfg.wall_hp, cfg)

    wanted = rng.randint(BONUS_MIN, BONUS_MAX)
    placed = 0
    for _ in range(wanted):
        col = rng.randrange(cfg.cols - 20) + 10
        row = rng.randrange(cfg.rows - 10) + 5
        idx = cell_index(row, col, cfg)
        # occupied cells are skipped, not retried
        if blocks[idx].kind is BlockType.NORMAL:
            blocks[idx] = _make(row, col, BlockType.BALL_BONUS, 1, cfg)
            placed += 1

    logger.debug("generated %d blocks, %d/%d bonus blocks placed", len(blocks), placed, wanted)
    return blocks
