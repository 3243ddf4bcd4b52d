import logging
import math

from attack import fire_point, range_acceleration
from geometry import (RING, Point, direction_to, distance, project,
                      ring_distance, rotation_to, stopping_distance)
from risk import CRITICAL, HIGH, MODERATE, NONE, assess, least_risky
from roles import Behavior, waypoint
from settings import (TURN_SPEED, CRUISE_SPEED, ENGAGE_TURN_COOLDOWN,
                      PATROL_TURN_COOLDOWN, ARRIVAL_RADIUS, STORM_LOOKAHEAD,
                      STORM_MARGIN, STORM_SAFE_FRACTION)

logger = logging.getLogger(__name__)


class Command:
    def __init__(self, ship_id, acceleration=0, rotation=0, fire=None):
        self.id = ship_id
        self.acceleration = acceleration
        self.rotation = rotation
        self.fire = fire

    def asdict(self):
        shoot = None
        if self.fire is not None:
            shoot = {"x": int(round(self.fire.x)), "y": int(round(self.fire.y))}
        return {
            "id": self.id,
            "acceleration": self.acceleration,
            "rotate": self.rotation,
            "cannonShoot": shoot,
        }

    def __eq__(self, other):
        return self.asdict() == other.asdict()

    def __repr__(self):
        return f"Command({self.asdict()})"


def move(state, actions, targets, bounties, memory):
    # если нет ожидающих кораблей, то делать нечего
    if len(actions.ships) == 0:
        return

    for ship in actions.ships:
        ship_state = memory.get(ship)

        # ошибка в логике одного корабля не должна ломать весь тик
        try:
            behavior, command = decide(ship, ship_state, state, targets,
                                       bounties, memory)
        except Exception:
            logger.exception("ship %s: decision failed, holding course",
                             ship.id)
            behavior, command = Behavior.IDLE, Command(ship.id)

        ship_state.behavior = behavior
        actions.decide(ship, command)

    actions.ships.clear()
    return


def decide(ship, ship_state, state, targets, bounties, memory):
    world = state.world
    tick = state.tick
    command = Command(ship.id)

    # 1. вне зоны - отступаем к центру, пока не вернемся внутрь
    if world.is_outside_zone(ship.x, ship.y):
        ship_state.start_retreat(tick)
        retreat(ship, ship_state, state, command)
        return Behavior.STORM_RETREAT, command

    ship_state.stop_retreat()

    # 2. риск столкновения с краем карты или препятствием
    risk = assess(world, ship.x, ship.y, ship.heading, ship.speed,
                  ship.margin)
    if risk.level > NONE:
        evade(ship, ship_state, risk, tick, command)
        return Behavior.EVADE, command

    # 3. скоро окажемся у границы зоны - заранее уходим внутрь
    if approaching_storm(ship, world):
        steer(ship, ship_state, storm_safe_point(ship, world), state,
              PATROL_TURN_COOLDOWN, CRUISE_SPEED, command)
        return Behavior.STORM_AVOID, command

    # 4. цель, назначенная аукционом
    enemy = assigned_target(ship, state, targets, memory)
    if enemy is not None:
        engage(ship, ship_state, enemy, state, command)
        return Behavior.ENGAGE_ASSIGNED, command

    # 5. любая видимая цель поблизости
    enemy = nearest_target(ship, state)
    if enemy is not None:
        engage(ship, ship_state, enemy, state, command)
        return Behavior.ENGAGE_OPPORTUNISTIC, command

    # 6. патрулирование по роли
    point, speed = waypoint(ship, ship_state, state, memory, bounties)
    steer(ship, ship_state, point, state, PATROL_TURN_COOLDOWN, speed, command)
    return Behavior.PATROL, command


def retreat(ship, ship_state, state, command):
    world = state.world
    center = world.zone_center()
    desired = direction_to(ship, center)

    if desired != ship.heading and ship.speed > TURN_SPEED:
        command.acceleration = -1
        return

    course = safe_heading(world, ship, desired)
    if course != ship.heading:
        turn(ship, ship_state, course, state.tick, PATROL_TURN_COOLDOWN,
             command)
        return

    # курс верный - разгоняемся, если впереди не опасно
    ahead = assess(world, ship.x, ship.y, ship.heading, ship.speed + 1,
                   ship.margin, turning=False)
    command.acceleration = -1 if ahead.level >= HIGH else 1
    return


def evade(ship, ship_state, risk, tick, command):
    # любой риск - тормозим
    command.acceleration = -1 if ship.speed > 0 else 0

    # при критическом и умеренном риске курс не меняем, при высоком - уходим
    if risk.level == CRITICAL or risk.level == MODERATE:
        return

    if risk.heading is None or ship.speed > TURN_SPEED:
        return

    if risk.heading != ship.heading:
        turn(ship, ship_state, risk.heading, tick, PATROL_TURN_COOLDOWN,
             command)
    return


def approaching_storm(ship, world):
    zone = world.zone
    if zone is None:
        return False

    x, y = project(ship.x, ship.y, ship.heading, ship.speed * STORM_LOOKAHEAD)
    return math.hypot(x - zone.x, y - zone.y) > zone.radius - STORM_MARGIN


def storm_safe_point(ship, world):
    # точка на луче от центра к кораблю, не дальше 80% радиуса
    zone = world.zone
    dist = math.hypot(ship.x - zone.x, ship.y - zone.y)
    if dist == 0:
        return zone.center

    # точка не ближе STORM_MARGIN + ARRIVAL_RADIUS к границе, иначе у малой
    # зоны корабль останавливается в полосе предупреждения
    safe = min(STORM_SAFE_FRACTION * zone.radius,
               zone.radius - STORM_MARGIN - ARRIVAL_RADIUS)
    scale = max(0.0, safe) / dist
    return Point(zone.x + (ship.x - zone.x) * scale,
                 zone.y + (ship.y - zone.y) * scale)


def assigned_target(ship, state, targets, memory):
    enemy_id = targets.target_for(ship)
    if enemy_id is None:
        return None

    # свежий снимок, если цель видна, иначе последний известный
    enemy = state.enemies.get(enemy_id)
    if enemy is None:
        enemy = memory.known_enemies(state.tick).get(enemy_id)
    if enemy is None:
        return None

    if not reachable(ship, enemy, state.world):
        return None
    return enemy


def nearest_target(ship, state):
    visible = [enemy for enemy in state.enemy_ships
               if distance(ship, enemy) <= ship.scan_range]
    visible.sort(key=lambda enemy: (distance(ship, enemy), enemy.id))

    for enemy in visible:
        if reachable(ship, enemy, state.world):
            return enemy
    return None


def reachable(ship, enemy, world):
    # цели в шторме не преследуем
    if world.is_outside_zone(enemy.x, enemy.y):
        return False

    # прямой путь к цели должен быть не опаснее умеренного
    heading = direction_to(ship, enemy)
    risk = assess(world, ship.x, ship.y, heading, probe_speed(ship),
                  ship.margin, turning=False)
    return risk.level <= MODERATE


def engage(ship, ship_state, enemy, state, command):
    command.fire = fire_point(state.world, ship, enemy)
    command.acceleration = range_acceleration(ship, enemy)

    desired = direction_to(ship, enemy)
    if desired == ship.heading:
        return

    # на большой скорости сначала гасим скорость
    if ship.speed > TURN_SPEED:
        command.acceleration = -1
        return

    course = safe_heading(state.world, ship, desired)
    if course != ship.heading:
        turn(ship, ship_state, course, state.tick, ENGAGE_TURN_COOLDOWN,
             command)
    return


def steer(ship, ship_state, point, state, cooldown, speed_limit, command):
    world = state.world
    desired = direction_to(ship, point)

    if desired != ship.heading:
        if ship.speed > TURN_SPEED:
            command.acceleration = -1
            return

        course = safe_heading(world, ship, desired)
        if course != ship.heading:
            turn(ship, ship_state, course, state.tick, cooldown, command)
            return

    # у точки назначения останавливаемся
    remaining = distance(ship, point)
    if remaining <= ARRIVAL_RADIUS + stopping_distance(ship.speed):
        command.acceleration = -1 if ship.speed > 0 else 0
    elif ship.speed < speed_limit:
        command.acceleration = 1
    elif ship.speed > speed_limit:
        command.acceleration = -1
    return


def turn(ship, ship_state, course, tick, cooldown, command):
    # поворот не чаще, чем раз в cooldown тиков
    if ship.speed > TURN_SPEED:
        command.acceleration = -1
        return

    if not ship_state.can_turn(tick, cooldown):
        return

    command.rotation = rotation_to(ship.heading, course)
    ship_state.turned(tick)
    return


def probe_speed(ship):
    # курс проверяем на скорости, которую корабль наберет после поворота
    return max(ship.speed, TURN_SPEED) + 1


def safe_heading(world, ship, desired):
    speed = probe_speed(ship)

    # ближайшие к желаемому курсы проверяем первыми
    order = sorted(RING, key=lambda heading: (ring_distance(desired, heading),
                                              heading.index))
    for heading in order:
        risk = assess(world, ship.x, ship.y, heading, speed, ship.margin,
                      turning=False)
        if risk.level <= MODERATE:
            return heading

    return least_risky(world, ship.x, ship.y, speed, ship.margin, order)
