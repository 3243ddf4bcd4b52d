import math
from enum import Enum

from geometry import Point, distance
from settings import (ATTACKER_SIZE, SUPPORT_SIZE, MAX_SIZE, SCOUT_ORBIT,
                      PHASE_STEP, WANDER_PERIOD, WANDER_MIN, WANDER_MAX,
                      CRUISE_SPEED, SMALL_FLEET, SWEEP_BORDER, PATROL_SHAPES)


class Role(Enum):
    ATTACKER = "attacker"
    SUPPORT = "support"
    SCOUT = "scout"

    @classmethod
    def for_size(cls, size):
        if size >= ATTACKER_SIZE:
            return cls.ATTACKER
        elif size == SUPPORT_SIZE:
            return cls.SUPPORT
        return cls.SCOUT


# все, что корабль может делать в этот тик, в порядке приоритета
class Behavior(Enum):
    STORM_RETREAT = "storm_retreat"
    EVADE = "evade"
    STORM_AVOID = "storm_avoid"
    ENGAGE_ASSIGNED = "engage_assigned"
    ENGAGE_OPPORTUNISTIC = "engage_opportunistic"
    PATROL = "patrol"
    IDLE = "idle"


# две независимые оценки размера корпуса - по id и по скорости
def size_from_id(ship_id):
    if not ship_id:
        return 1
    last = str(ship_id)[-1]
    value = int(last) if last.isdigit() else ord(last)
    return value % MAX_SIZE + 1


def size_from_speed(speed):
    # медленные корабли обычно большие
    return int(min(MAX_SIZE, max(1, MAX_SIZE - math.ceil(speed))))


def ship_size(ship):
    if ship.size is not None:
        return ship.size
    return size_from_id(ship.id)


def enemy_size(ship):
    if ship.size is not None:
        return ship.size
    return size_from_speed(ship.speed)


def waypoint(ship, ship_state, state, memory, bounties):
    # возвращает точку патрулирования и скорость, с которой к ней идем
    role = ship_state.role

    if role == Role.ATTACKER:
        return attacker_point(state, memory, bounties), CRUISE_SPEED
    elif role not in (Role.SUPPORT, Role.SCOUT):
        raise ValueError(f"unknown role {role}")

    # без зоны разведчики и поддержка без атакующих держат свой сектор
    if state.world.zone is None:
        if role == Role.SCOUT or not attackers_for(ship, state, memory):
            path = patrol_path(ship_state, state)
            return path.point(ship_state, state), path.speed

    if role == Role.SUPPORT:
        return support_point(ship, ship_state, state, memory), CRUISE_SPEED
    return scout_point(ship_state, state), CRUISE_SPEED


def attacker_point(state, memory, bounties):
    # самая приоритетная известная цель, иначе центр зоны, иначе центр карты
    known = memory.known_enemies(state.tick)
    for enemy_id in bounties.ranking:
        if enemy_id in known:
            enemy = known[enemy_id]
            return Point(enemy.x, enemy.y)

    return state.world.zone_center() or state.world.center


def attackers_for(ship, state, memory):
    return [other for other in state.my_ships
            if other.id != ship.id
            and memory.get(other).role == Role.ATTACKER]


def support_point(ship, ship_state, state, memory):
    attackers = attackers_for(ship, state, memory)

    if attackers:
        nearest = min(attackers, key=lambda other: distance(ship, other))
        return Point(nearest.x, nearest.y)

    # атакующих нет - блуждаем вокруг центра
    return wander_point(ship_state, state)


def scout_point(ship_state, state):
    center, radius = patrol_circle(state)
    radius = radius * SCOUT_ORBIT if state.world.zone else radius

    # фаза зависит только от тика и номера корабля
    phase = patrol_phase(ship_state, state)
    return Point(center.x + math.cos(phase) * radius,
                 center.y + math.sin(phase) * radius)


def patrol_phase(ship_state, state):
    return math.radians((state.tick + ship_state.index * PHASE_STEP) % 360)


# центры секторов: при маленьком флоте четверти карты, иначе сетка
def sectors(world, count):
    width, height = world.width, world.height

    if count <= SMALL_FLEET:
        return [Point(width * 0.25, height * 0.25),
                Point(width * 0.75, height * 0.25),
                Point(width * 0.75, height * 0.75),
                Point(width * 0.25, height * 0.75)]

    rows = math.ceil(math.sqrt(count))
    cols = math.ceil(count / rows)

    centers = []
    for row in range(rows):
        for col in range(cols):
            if len(centers) < count:
                centers.append(Point((col + 0.5) * width / cols,
                                     (row + 0.5) * height / rows))
    return centers


class PatrolPath:
    def __init__(self, kind, center, reach, speed, world):
        self.kind = kind
        self.center = center
        self.reach = reach
        self.speed = speed

        # проходы ограничены полосой SWEEP_BORDER у краев карты
        low_x = max(SWEEP_BORDER, center.x - reach)
        high_x = min(world.width - SWEEP_BORDER, center.x + reach)
        low_y = max(SWEEP_BORDER, center.y - reach)
        high_y = min(world.height - SWEEP_BORDER, center.y + reach)

        self.start = self.end = None
        if kind == "horizontal":
            self.start, self.end = Point(low_x, center.y), Point(high_x, center.y)
        elif kind == "vertical":
            self.start, self.end = Point(center.x, low_y), Point(center.x, high_y)
        elif kind == "diagonal":
            self.start, self.end = Point(low_x, low_y), Point(high_x, high_y)
        return

    def point(self, ship_state, state):
        phase = patrol_phase(ship_state, state)

        if self.kind == "circle":
            return Point(self.center.x + math.cos(phase) * self.reach,
                         self.center.y + math.sin(phase) * self.reach)
        elif self.kind == "wander":
            return wander_point(ship_state, state, self.center, self.reach)

        # ходим туда и обратно по отрезку
        progress = (math.sin(phase) + 1) / 2
        return Point(self.start.x + progress * (self.end.x - self.start.x),
                     self.start.y + progress * (self.end.y - self.start.y))


def patrol_path(ship_state, state):
    # маршрут выбирается один раз, когда корабль впервые уходит в патруль
    if ship_state.patrol is None:
        count = max(len(state.my_ships), ship_state.index + 1)
        centers = sectors(state.world, count)
        center = centers[ship_state.index % len(centers)]

        kind, reach, speed = PATROL_SHAPES[ship_state.index % len(PATROL_SHAPES)]
        ship_state.patrol = PatrolPath(kind, center, reach, speed, state.world)

    return ship_state.patrol


def wander_point(ship_state, state, center=None, radius=None):
    tick = state.tick
    chosen = ship_state.waypoint_tick

    expired = chosen is None or tick < chosen
    expired = expired or (tick - chosen >= WANDER_PERIOD)
    expired = expired or (tick % WANDER_PERIOD == 0 and tick != chosen)

    if ship_state.waypoint is None or expired:
        if center is None:
            center, radius = patrol_circle(state)
        radius = min(radius, WANDER_MAX)

        angle = math.radians((tick + ship_state.index * 30) % 360)
        spread = WANDER_MAX - WANDER_MIN
        dist = WANDER_MIN + (tick * 7 + ship_state.index * 37) % (spread + 1)
        dist = min(dist, radius)

        ship_state.waypoint = Point(center.x + math.cos(angle) * dist,
                                    center.y + math.sin(angle) * dist)
        ship_state.waypoint_tick = tick

    return ship_state.waypoint


def patrol_circle(state):
    world = state.world
    if world.zone is not None:
        return world.zone.center, world.zone.radius
    return world.center, min(world.width, world.height) / 4
