import numpy as np

from geometry import RING, Heading, project, stopping_distance
from settings import BORDER_MARGIN, OBSTACLE_LOOKAHEAD, TURN_SPEED

NONE, MODERATE, HIGH, CRITICAL = 0, 1, 2, 3


class Risk:
    def __init__(self, level=NONE, heading=None, margin=float("inf")):
        # heading - направление уклонения, None если уклоняться некуда
        self.level = level
        self.heading = heading
        self.margin = margin

    def __repr__(self):
        return f"Risk({self.level}, {self.heading}, {self.margin})"


def grade(margin, stop):
    # чем меньше запас по сравнению с тормозным путем, тем выше риск
    if margin <= stop:
        return CRITICAL
    elif margin <= 2 * stop:
        return HIGH
    elif margin <= 3 * stop:
        return MODERATE
    return NONE


def assess(world, x, y, heading, speed, size=1, turning=True):
    stop = stopping_distance(speed)

    found = [border_risk(world, x, y, heading, stop),
             obstacle_risk(world, x, y, heading, stop, size)]

    # на большой скорости повернуть нельзя - сначала тормозим
    if turning and speed > TURN_SPEED:
        found.append(Risk(MODERATE, None, stop))

    # max возвращает первый из равных, поэтому порядок важен
    return max(found, key=lambda risk: risk.level)


def border_risk(world, x, y, heading, stop):
    # неподвижный корабль никуда не врежется
    if stop <= 0:
        return Risk()

    px, py = project(x, y, heading, stop)

    # расстояние до каждого края и направление от него
    edges = [
        (px, Heading.EAST),
        (world.width - px, Heading.WEST),
        (py, Heading.SOUTH),
        (world.height - py, Heading.NORTH),
    ]
    margin, away = min(edges, key=lambda edge: edge[0])

    if margin >= BORDER_MARGIN:
        return Risk(NONE, None, margin)

    return Risk(grade(margin, stop), away, margin)


def obstacle_risk(world, x, y, heading, stop, size=1):
    cells = world.obstacle_cells
    if stop <= 0 or cells.size == 0:
        return Risk()

    # смещения клеток вдоль курса и поперек него
    dx, dy = heading.vector
    rel = cells + 0.5 - np.array([x, y])
    along = rel[:, 0] * dx + rel[:, 1] * dy
    lateral = np.abs(rel[:, 0] * dy - rel[:, 1] * dx)

    lookahead = OBSTACLE_LOOKAHEAD * stop + size
    ahead = (along > 0) & (along <= lookahead) & (lateral <= size / 2 + 1)
    if not ahead.any():
        return Risk()

    inds = np.flatnonzero(ahead)
    nearest = inds[along[inds].argmin()]
    clearance = along[nearest] - size

    level = grade(clearance, stop)
    if level == NONE:
        return Risk(NONE, None, clearance)

    return Risk(level, evade_from(rel[nearest], heading), clearance)


def evade_from(offset, heading):
    ox, oy = offset

    # уходим от препятствия по его основной оси, но если оно прямо по
    # курсу, разворот бесполезен - отходим в сторону
    if abs(ox) > abs(oy):
        away = Heading.WEST if ox > 0 else Heading.EAST
    else:
        away = Heading.NORTH if oy > 0 else Heading.SOUTH

    if away == heading.opposite:
        side = heading.rotated(90)
        sx, sy = side.vector
        # сторона, где препятствия нет
        if ox * sx + oy * sy > 0:
            side = side.opposite
        return side

    return away


def least_risky(world, x, y, speed, size=1, headings=RING):
    # если безопасного курса нет, все равно выбираем наименее опасный
    best = None
    best_level = None

    for heading in headings:
        level = assess(world, x, y, heading, speed, size,
                       turning=False).level
        if best is None or level < best_level:
            best, best_level = heading, level

    return best
