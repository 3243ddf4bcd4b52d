import math
from enum import Enum


class Heading(Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    # порядок на кольце - по часовой стрелке, y растет на юг
    @property
    def index(self):
        return RING.index(self)

    @property
    def vector(self):
        return VECTORS[self]

    @property
    def opposite(self):
        return RING[(self.index + 2) % 4]

    def rotated(self, rotation):
        # +90 - по часовой стрелке, -90 - против
        return RING[(self.index + rotation // 90) % 4]

    @classmethod
    def parse(cls, value, default=None):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.NORTH if default is None else default


RING = [Heading.NORTH, Heading.EAST, Heading.SOUTH, Heading.WEST]

VECTORS = {
    Heading.NORTH: (0, -1),
    Heading.EAST: (1, 0),
    Heading.SOUTH: (0, 1),
    Heading.WEST: (-1, 0),
}


def ring_distance(a, b):
    diff = (b.index - a.index) % 4
    return min(diff, 4 - diff)


def distance(a, b):
    return math.hypot(a.x - b.x, a.y - b.y)


def direction_to(source, target):
    dx = target.x - source.x
    dy = target.y - source.y

    # при равенстве побеждает ось y
    if abs(dx) > abs(dy):
        return Heading.EAST if dx > 0 else Heading.WEST
    else:
        return Heading.SOUTH if dy > 0 else Heading.NORTH


def stopping_distance(speed):
    if speed <= 0:
        return 0.0
    return speed ** 2 / 2


def rotation_to(current, desired):
    diff = (desired.index - current.index) % 4

    if diff == 0:
        return 0
    elif diff == 3:
        return -90
    else:
        # diff == 1 или разворот на 180 - всегда по часовой стрелке
        return 90


def project(x, y, heading, length):
    dx, dy = heading.vector
    return x + dx * length, y + dy * length


class Point:
    def __init__(self, x, y):
        self.x = float(x)
        self.y = float(y)

    def __eq__(self, other):
        return (self.x, self.y) == (other.x, other.y)

    def __repr__(self):
        return f"Point({self.x}, {self.y})"
