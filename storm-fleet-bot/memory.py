from geometry import Point
from roles import Role, ship_size
from settings import STALE_TICKS, STATE_RESET_GAP


class ShipState:
    def __init__(self, ship, index, tick):
        self.role = Role.for_size(ship_size(ship))
        self.index = index

        self.retreating = False
        self.retreat_tick = None
        self.last_turn = None

        # назначенная цель и ее приоритет
        self.target = None
        self.target_score = 0.0

        # последняя известная позиция и тик, когда корабль был виден
        self.position = Point(ship.x, ship.y)
        self.seen = tick

        # точка блуждания и тик, когда она выбрана
        self.waypoint = None
        self.waypoint_tick = None

        # маршрут патрулирования по сектору, выбирается один раз
        self.patrol = None

        self.behavior = None
        return

    def can_turn(self, tick, cooldown):
        # пропущенные тики и новый матч (тик меньше записанного) считаем
        # как истекший кулдаун
        if self.last_turn is None or tick < self.last_turn:
            return True
        return tick - self.last_turn >= cooldown

    def turned(self, tick):
        self.last_turn = tick
        return

    def start_retreat(self, tick):
        if not self.retreating:
            self.retreating = True
            self.retreat_tick = tick
        return

    def stop_retreat(self):
        self.retreating = False
        self.retreat_tick = None
        return


class Sighting:
    def __init__(self, ship, tick):
        self.ship = ship
        self.tick = tick

    def is_stale(self, tick):
        return tick - self.tick >= STALE_TICKS


class Memory:
    def __init__(self):
        self.ships = {}
        self.sightings = {}
        self.next_index = 0

    def observe(self, state):
        tick = state.tick

        # наши корабли - создаем состояние при первом появлении или после
        # долгого отсутствия
        for ship in state.my_ships:
            ship_state = self.ships.get(ship.id)
            fresh = ship_state is None
            fresh = fresh or (abs(tick - ship_state.seen) > STATE_RESET_GAP)

            if fresh:
                index = self.next_index
                if ship_state is not None:
                    index = ship_state.index
                else:
                    self.next_index += 1
                ship_state = ShipState(ship, index, tick)
                self.ships[ship.id] = ship_state

            ship_state.position = Point(ship.x, ship.y)
            ship_state.seen = tick

        # корабли противника запоминаем вместе с тиком, когда их видели
        for enemy in state.enemy_ships:
            self.sightings[enemy.id] = Sighting(enemy, tick)

        # забываем устаревшие цели
        stale = [key for key, val in self.sightings.items()
                 if val.is_stale(tick) or val.tick > tick]
        for key in stale:
            del self.sightings[key]

        return

    def get(self, ship):
        return self.ships[ship.id]

    def known_enemies(self, tick):
        return {key: val.ship for key, val in self.sightings.items()
                if not val.is_stale(tick)}

    def positions(self, tick):
        # позиции кораблей, погибших давно, не учитываем
        return [val.position for val in self.ships.values()
                if 0 <= tick - val.seen < STALE_TICKS]
