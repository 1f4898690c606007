# sparkbreak/engine/tick_driver.py
from sparkbreak.engine.round_controller import RoundController
from sparkbreak.shared.constants import FPS


class TickDriver:
    """
    Fixed-step frame driver.

    Every tick advances the simulation clock by exactly one frame, whatever
    the real frame time was; ball motion is expressed in pixels per tick.
    """

    def __init__(self, controller: RoundController, fps: int = FPS):
        self.controller = controller
        self.dt = 1.0 / fps
        self.frames = 0

    def tick(self) -> bool:
        c = self.controller
        if not c.is_live():
            return False

        c.state.clock += self.dt
        c.launch_due()
        c.drain_spawns()
        c.step_entities()
        c.resolve_round_if_done()
        c.publish_hud()

        self.frames += 1
        return True

    def run(self, n: int) -> int:
        """Tick up to ``n`` times; stops early once the session ends."""
        done = 0
        for _ in range(n):
            if not self.tick():
                break
            done += 1
        return done
