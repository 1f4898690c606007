# sparkbreak/engine/physics.py
"""
Circle-vs-box collision helpers.

Blocks are axis-aligned squares described by their top-left corner and
``size``; balls carry ``pos``, ``vel`` and ``r``. The reflection model is
deliberately approximate: the axis to flip is picked from the separation
vector, not from a true contact normal.
"""
from pygame.math import Vector2 as Vec2


def closest_point(pos: Vec2, block) -> Vec2:
    """Point of the block's box nearest to ``pos`` (``pos`` itself when inside)."""
    x = max(block.x, min(pos.x, block.x + block.size))
    y = max(block.y, min(pos.y, block.y + block.size))
    return Vec2(x, y)


def intersects_block(ball, block) -> bool:
    # bounding-box reject
    if ball.pos.x + ball.r <= block.x or ball.pos.x - ball.r >= block.x + block.size:
        return False
    if ball.pos.y + ball.r <= block.y or ball.pos.y - ball.r >= block.y + block.size:
        return False
    return ball.pos.distance_to(closest_point(ball.pos, block)) < ball.r


def resolve_collision(ball, block):
    """Reflect ``ball`` off ``block`` and push it out of the overlap."""
    sep = ball.pos - closest_point(ball.pos, block)
    dist = sep.length()

    # ties go to the vertical flip
    if abs(sep.x) > abs(sep.y):
        ball.vel.x *= -1
    else:
        ball.vel.y *= -1

    if dist > 0:
        overlap = ball.r - dist
        ball.pos += sep / dist * overlap


def bounce_off_bounds(ball, width: float):
    """Reflect off the left/right edges and the ceiling. The bottom is open."""
    if ball.pos.x - ball.r <= 0 or ball.pos.x + ball.r >= width:
        ball.vel.x *= -1
        ball.pos.x = max(ball.r, min(width - ball.r, ball.pos.x))

    if ball.pos.y - ball.r <= 0:
        ball.vel.y *= -1
        ball.pos.y = ball.r
