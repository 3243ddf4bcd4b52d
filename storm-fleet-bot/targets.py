import numpy as np
from scipy.spatial.distance import cdist

from settings import AUCTION_BASE, HELD_PENALTY, ROLE_BONUS


class Targets:
    def __init__(self, state, memory, bounties):
        self.assigned = {}
        self.scores = {}

        ships = list(state.my_ships)
        known = memory.known_enemies(state.tick)
        ranked = [key for key in bounties.ranking if key in known]

        # если кораблей или целей нет, делать нечего
        if not ships or not ranked:
            self.remember(ships, memory)
            return

        # расстояния от каждого нашего корабля до каждой цели
        ship_pos = state.my_ship_pos
        enemy_pos = np.array([[known[key].x, known[key].y] for key in ranked])
        dist = cdist(ship_pos, enemy_pos)

        # ставка корабля без учета расстояния: роль и штраф за смену цели
        base = np.zeros((len(ships), len(ranked)))
        for i, ship in enumerate(ships):
            ship_state = memory.get(ship)
            base[i, :] += ROLE_BONUS[ship_state.role.value]

            held = ship_state.target
            if held is not None:
                switching = np.array([key != held for key in ranked])
                base[i, switching] -= HELD_PENALTY

        bids = AUCTION_BASE - dist + base
        free = np.full(len(ships), True, dtype=bool)

        # жадный аукцион - цели по убыванию приоритета, каждой достается
        # лучший из еще свободных кораблей
        for j, enemy_id in enumerate(ranked):
            if not free.any():
                break

            enemy = known[enemy_id]
            if state.world.is_outside_zone(enemy.x, enemy.y):
                continue

            column = np.where(free, bids[:, j], -np.inf)
            i = int(column.argmax())

            ship = ships[i]
            self.assigned[ship.id] = enemy_id
            self.scores[ship.id] = bounties.scores[enemy_id]
            free[i] = False

        self.remember(ships, memory)
        return

    def remember(self, ships, memory):
        # записываем назначения в состояние кораблей - в следующий тик
        # это будет "уже назначенная цель"
        for ship in ships:
            ship_state = memory.get(ship)
            ship_state.target = self.assigned.get(ship.id)
            ship_state.target_score = self.scores.get(ship.id, 0.0)
        return

    def target_for(self, ship):
        return self.assigned.get(ship.id)
