# импортируем исходные файлы
from bounties import Bounties
from memory import Memory
from move import Command, move
from settings import TURN_SPEED
from state import State, World
from targets import Targets


# объект для хранения ожидающих решений кораблей, а также
# команды, которую мы для них определили
class Actions:
    def __init__(self, state):
        self.decided = {}
        self.ships = list(state.my_ships)
        self.order = [ship.id for ship in state.my_ships]
        return

    def decide(self, ship, command):
        # поворот на большой скорости запрещен игрой
        if ship.speed > TURN_SPEED:
            command.rotation = 0
        command.acceleration = max(-1, min(1, int(command.acceleration)))
        self.decided[ship.id] = command
        return

    def aslist(self):
        # ровно одна команда на каждый живой корабль
        return [self.decided.get(key, Command(key)).asdict()
                for key in self.order]


class Bot:
    def __init__(self, map_data):
        # карта и препятствия не меняются за игру
        self.world = World(map_data)
        self.reset()
        return

    def reset(self):
        # вся память между тиками хранится здесь, а не в глобальных переменных
        self.memory = Memory()
        self.bounties = Bounties(self.memory)
        self.world.update_zone(None, None)
        return

    def agent(self, scan):
        # читаем скан во внутренний объект состояния игры
        state = State(scan, self.world)

        # запоминаем наши корабли и замеченных противников
        self.memory.observe(state)

        # пересчитываем приоритеты целей
        self.bounties.update(state)

        # аукцион целей должен закончиться до решений по кораблям
        targets = Targets(state, self.memory, self.bounties)

        # Объект actions хранит список ожидающих кораблей.
        # после решения мы удаляем корабли из списка ожидания и сохраняем
        # их в словаре вместе с командами
        actions = Actions(state)

        # решаем ходы кораблей
        move(state, actions, targets, self.bounties, self.memory)

        return actions.aslist()
