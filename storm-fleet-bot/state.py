import math

import numpy as np

from geometry import Heading, Point


def number(value, default=0.0):
    # поле скана может прийти строкой или мусором - берем значение по умолчанию
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def entries(value):
    # записи, которые не являются объектами, пропускаем
    if not isinstance(value, (list, tuple)):
        return []
    return [data for data in value if isinstance(data, dict)]


class Ship:
    def __init__(self, data):
        # любое поле скана может отсутствовать - берем нейтральные значения
        self.id = str(data.get("id"))
        self.x = number(data.get("x"))
        self.y = number(data.get("y"))
        self.heading = Heading.parse(data.get("direction"))
        self.speed = number(data.get("speed"))
        self.cooldown = int(number(data.get("cannonCooldownLeft")))
        self.cannon_range = number(data.get("cannonRadius"))
        self.scan_range = number(data.get("scanRadius"))

        # корабль в скане без hp считаем живым
        self.hp = number(data.get("hp"), 1)

        size = number(data.get("size"), None)
        self.size = None if size is None else int(size)
        return

    @property
    def margin(self):
        # запас от края карты зависит от размера корпуса
        return self.size if self.size is not None else 1

    def __repr__(self):
        return f"Ship({self.id!r}, {self.x}, {self.y}, {self.heading.value})"


class Zone:
    def __init__(self, x, y, radius):
        self.x = float(x)
        self.y = float(y)
        self.radius = float(radius)

    @classmethod
    def from_json(cls, data):
        if not data:
            return None
        try:
            return cls(data["x"], data["y"], data["radius"])
        except (KeyError, TypeError, ValueError):
            return None

    @property
    def center(self):
        return Point(self.x, self.y)


class World:
    def __init__(self, map_data):
        # размер карты и препятствия приходят один раз за игру
        size = map_data.get("map") or [0, 0]
        self.width = int(size[0])
        self.height = int(size[1])

        # все препятствия сводим в одну сетку blocked[y, x]
        self.blocked = np.zeros((self.height, self.width), dtype=bool)

        for obstacle in map_data.get("obstacles") or []:
            start = obstacle.get("start") or [0, 0]
            mask = np.array(obstacle.get("map") or [], dtype=int)
            if mask.ndim != 2 or mask.size == 0:
                continue

            rows, cols = np.nonzero(mask == 1)
            xs = cols + int(start[0])
            ys = rows + int(start[1])

            # клетки за пределами карты отбрасываем
            inside = (xs >= 0) & (xs < self.width)
            inside &= (ys >= 0) & (ys < self.height)
            self.blocked[ys[inside], xs[inside]] = True

        # координаты (x, y) всех занятых клеток для векторных проверок
        self.obstacle_cells = np.argwhere(self.blocked)[:, ::-1].astype(float)

        self.zone = None
        self.zone_tick = None
        return

    @property
    def center(self):
        return Point(self.width / 2, self.height / 2)

    def is_blocked(self, x, y):
        col = int(math.floor(x))
        row = int(math.floor(y))
        if not (0 <= col < self.width and 0 <= row < self.height):
            return False
        return bool(self.blocked[row, col])

    def is_out_of_bounds(self, x, y, margin=0):
        return ((x < margin) or (y < margin)
                or (x >= self.width - margin) or (y >= self.height - margin))

    def update_zone(self, zone, tick):
        self.zone = zone
        self.zone_tick = tick
        return

    def is_outside_zone(self, x, y):
        # без зоны опасности нет
        if self.zone is None:
            return False
        return math.hypot(x - self.zone.x, y - self.zone.y) > self.zone.radius

    def zone_center(self):
        if self.zone is None:
            return None
        return self.zone.center


class State:
    def __init__(self, scan, world):
        self.world = world
        self.tick = int(number(scan.get("tick")))

        # живые наши корабли и видимые корабли противника
        ships = [Ship(data) for data in entries(scan.get("myShips"))]
        self.my_ships = [ship for ship in ships if ship.hp > 0]
        self.enemy_ships = [Ship(data) for data in entries(scan.get("enemyShips"))]
        self.enemies = {ship.id: ship for ship in self.enemy_ships}

        # зона обновляется каждый тик
        world.update_zone(Zone.from_json(scan.get("zone")), self.tick)

        self.set_derived()
        return

    # массивы позиций нужны нескольким модулям, поэтому строим их один раз
    def set_derived(self):
        self.my_ship_pos = np.array([[s.x, s.y] for s in self.my_ships],
                                    dtype=float).reshape(-1, 2)
        self.enemy_pos = np.array([[s.x, s.y] for s in self.enemy_ships],
                                  dtype=float).reshape(-1, 2)
        return
