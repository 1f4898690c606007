from sparkbreak.engine.entities import Block, BlockType
from sparkbreak.engine.round_controller import Phase


def anchor_wall():
    """A wall in the top-left corner, away from straight-up shots at x=300."""
    return Block(0, 0, BlockType.WALL, 999999)


def shoot_up(controller):
    o = controller.state.launch_origin
    controller.begin_aim(o.x, 100)
    controller.release_aim()


def play_round(controller, driver, max_ticks=1000):
    shoot_up(controller)
    for _ in range(max_ticks):
        driver.tick()
        if controller.state.phase is not Phase.SHOOTING:
            return
    raise AssertionError("round did not resolve")
