import numpy as np
from scipy.spatial.distance import cdist

from roles import enemy_size
from settings import (RERANK_INTERVAL, SIZE_WEIGHT, PROXIMITY_BONUS,
                      PROXIMITY_SCALE)


class Bounties:
    def __init__(self, memory):
        # приоритеты целей живут между тиками, поэтому объект создается
        # один раз на игру
        self.memory = memory
        self.scores = {}
        self.ranking = []
        self.ranked_tick = None
        return

    def due(self, tick):
        if self.ranked_tick is None or tick < self.ranked_tick:
            return True
        return tick - self.ranked_tick >= RERANK_INTERVAL

    def update(self, state):
        tick = state.tick
        known = self.memory.known_enemies(tick)

        if self.due(tick):
            # полный пересчет по всем известным целям
            self.scores = self.score(known, tick)
            self.ranked_tick = tick
        else:
            # между пересчетами оцениваем только новые цели
            fresh = {key: val for key, val in known.items()
                     if key not in self.scores}
            self.scores.update(self.score(fresh, tick))

        # устаревшие цели в рейтинг не попадают
        self.scores = {key: val for key, val in self.scores.items()
                       if key in known}

        # сортировка по убыванию, при равенстве - по id для детерминизма
        self.ranking = sorted(self.scores, key=lambda key: (-self.scores[key],
                                                            key))
        return

    def score(self, enemies, tick):
        if not enemies:
            return {}

        ids = list(enemies)
        enemy_pos = np.array([[enemies[key].x, enemies[key].y] for key in ids])
        sizes = np.array([enemy_size(enemies[key]) for key in ids], dtype=float)

        scores = SIZE_WEIGHT * sizes

        # бонус близости суммируется по последним позициям наших кораблей
        positions = self.memory.positions(tick)
        if positions:
            my_pos = np.array([[pos.x, pos.y] for pos in positions])
            dist = cdist(my_pos, enemy_pos)
            bonus = np.fmax(0, PROXIMITY_BONUS - dist / PROXIMITY_SCALE)
            scores = scores + np.sum(bonus, axis=0)

        return dict(zip(ids, scores.tolist()))

    def top(self):
        return self.ranking[0] if self.ranking else None
