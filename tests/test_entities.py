import random

import pytest
from pygame.math import Vector2 as Vec2

from sparkbreak.engine.entities import (
    Ball, Block, BlockType, FallingBonus, Particle,
    burst, hit_block, step_ball, step_falling_bonus, step_particle,
)
from sparkbreak.shared.game_config import CFG, GameConfig


def test_ball_crossing_collection_line_returns(state):
    ball = Ball(Vec2(100, 478), Vec2(0, 5), CFG.ball_r)
    step_ball(ball, [], state, CFG)

    assert ball.pos == Vec2(100, 483)
    assert not ball.active
    assert state.returned == 1
    assert state.launch_origin.x == 100


def test_returned_ball_is_not_stepped_again(state):
    ball = Ball(Vec2(100, 478), Vec2(0, 5), CFG.ball_r)
    step_ball(ball, [], state, CFG)
    step_ball(ball, [], state, CFG)
    assert state.returned == 1
    assert ball.pos == Vec2(100, 483)


def test_rising_ball_in_collection_area_keeps_flying(state):
    ball = Ball(Vec2(300, 750), Vec2(0, -12), CFG.ball_r)
    step_ball(ball, [], state, CFG)
    assert ball.active
    assert ball.pos == Vec2(300, 738)
    assert state.returned == 0


def test_normal_block_loses_hp_per_hit(state):
    block = Block(300, 300, BlockType.NORMAL, 2)

    assert hit_block(block, state, CFG) is False
    assert (block.hp, state.score, state.combo) == (1, 10, 1)

    assert hit_block(block, state, CFG) is True
    assert (block.hp, state.score, state.combo) == (0, 20, 1)
    assert block.max_hp == 2


def test_wall_is_untouched(state):
    wall = Block(300, 300, BlockType.WALL, CFG.wall_hp)
    assert hit_block(wall, state, CFG) is False
    assert wall.hp == CFG.wall_hp
    assert state.score == 0 and state.combo == 0


def test_bonus_block_dies_in_one_hit(state):
    bonus = Block(300, 300, BlockType.BALL_BONUS, 1)
    assert hit_block(bonus, state, CFG) is True
    assert (bonus.hp, state.score, state.combo) == (0, 100, 1)


def test_ball_hits_and_bounces_off_block(state):
    block = Block(300, 300, BlockType.NORMAL, 2)
    ball = Ball(Vec2(305, 318), Vec2(0, -5), CFG.ball_r)

    broken = step_ball(ball, [block], state, CFG)

    assert broken == []
    assert block.hp == 1
    assert ball.vel == Vec2(0, 5)
    assert ball.pos.y == pytest.approx(316)


def test_dead_blocks_are_ignored(state):
    block = Block(300, 300, BlockType.NORMAL, 0)
    ball = Ball(Vec2(305, 318), Vec2(0, -5), CFG.ball_r)
    step_ball(ball, [block], state, CFG)
    assert ball.vel == Vec2(0, -5)
    assert state.score == 0


def test_destroyed_blocks_are_reported(state):
    blocks = [Block(300, 300, BlockType.NORMAL, 1), Block(300, 300, BlockType.WALL, CFG.wall_hp)]
    ball = Ball(Vec2(305, 318), Vec2(0, -5), CFG.ball_r)
    assert step_ball(ball, blocks, state, CFG) == [blocks[0]]


def test_speed_is_preserved_by_bounds():
    cfg = GameConfig(collect_y=790)
    ball = Ball(Vec2(300, 400), Vec2(7.3, -9.1), cfg.ball_r)
    speed = ball.vel.length()

    class _State:
        returned = 0
        launch_origin = Vec2(0, 0)

    flips = 0
    for _ in range(400):
        before = Vec2(ball.vel)
        step_ball(ball, [], _State, cfg)
        if not ball.active:
            break
        if before.x != ball.vel.x or before.y != ball.vel.y:
            flips += 1
        assert ball.vel.length() == pytest.approx(speed)

    assert flips >= 2


def test_falling_bonus_adds_exactly_one_ball(state):
    bonus = FallingBonus(Vec2(100, 470), CFG.bonus_fall_v)

    step_falling_bonus(bonus, state, CFG)
    assert bonus.pos.y == pytest.approx(472)
    assert bonus.vy == pytest.approx(2.2)
    assert not bonus.collected

    for _ in range(10):
        step_falling_bonus(bonus, state, CFG)
    assert bonus.collected
    assert state.ball_count == 2


def test_particle_falls_and_fades():
    p = Particle(Vec2(0, 0), Vec2(1, 0), 1.0, 3, (0, 255, 0))
    step_particle(p, CFG)
    assert p.pos == Vec2(1, 0)
    assert p.vel.y == pytest.approx(0.3)
    assert p.life == pytest.approx(0.98)


def test_burst_spawns_bounded_particles():
    parts = burst(Vec2(50, 60), (255, 153, 0), random.Random(7), CFG)
    assert len(parts) == CFG.particles_per_burst
    for p in parts:
        assert p.pos == Vec2(50, 60)
        assert -4 <= p.vel.x <= 4 and -4 <= p.vel.y <= 4
        assert 2 <= p.size < 6
        assert p.life == 1.0
