import pytest

from sparkbreak.engine.entities import Block, BlockType
from sparkbreak.engine.round_controller import Phase, RoundController
from sparkbreak.engine.tick_driver import TickDriver
from tests.helpers import anchor_wall, shoot_up


def test_no_ticks_before_session_starts():
    c = RoundController(seed=1)
    d = TickDriver(c)
    assert d.tick() is False
    assert d.run(10) == 0
    assert d.frames == 0
    assert c.poll() == []


def test_only_latest_hud_is_kept(controller, driver):
    assert driver.run(5) == 5
    huds = [m for m in controller.poll() if m["type"] == "HUD"]
    assert len(huds) == 1
    assert huds[-1] == {"type": "HUD", "level": 1, "balls": 1, "score": 0}


def test_unpolled_run_does_not_grow_the_inbox(controller, driver):
    driver.run(3000)
    assert controller.inbox.qsize() == 0
    msgs = controller.poll()
    assert [m["type"] for m in msgs] == ["HUD"]
    assert controller.poll() == []


def test_clock_advances_one_frame_per_tick(controller):
    d = TickDriver(controller, fps=50)
    d.run(10)
    assert controller.state.clock == pytest.approx(0.2)


def test_bonus_spawns_after_delay_and_adds_a_ball(controller, driver):
    s = controller.state
    bonus = Block(295, 300, BlockType.BALL_BONUS, 1)
    s.blocks = [anchor_wall(), bonus]
    shoot_up(controller)

    hit_at = None
    for _ in range(200):
        driver.tick()
        if s.pending:
            hit_at = s.clock
            break
    assert hit_at is not None
    assert bonus.hp == 0
    assert s.score == 100
    assert s.combo == 1
    assert s.falling == []
    assert len(s.particles) > 0

    spawned_at = None
    for _ in range(50):
        driver.tick()
        if s.falling:
            spawned_at = s.clock
            break
    assert spawned_at is not None
    assert spawned_at - hit_at == pytest.approx(0.1, abs=driver.dt)
    assert s.pending == []
    assert s.falling[0].pos.x == pytest.approx(300)

    for _ in range(200):
        driver.tick()
    assert s.falling == []
    assert s.ball_count == 2
    assert s.phase is Phase.IDLE
    assert s.level == 2


def test_run_stops_at_game_over(controller, driver):
    controller.state.blocks = [anchor_wall(), Block(0, 470, BlockType.NORMAL, 1)]
    shoot_up(controller)
    ran = driver.run(5000)
    assert ran < 5000
    assert controller.state.game_over
    assert driver.frames == ran
