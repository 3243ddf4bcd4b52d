# движение
TURN_SPEED = 2  # поворачивать можно только на скорости не выше этой
CRUISE_SPEED = 2  # скорость патрулирования
ENGAGE_TURN_COOLDOWN = 5  # тиков между поворотами в бою
PATROL_TURN_COOLDOWN = 3  # тиков между поворотами при патрулировании
ARRIVAL_RADIUS = 20  # у точки патрулирования тормозим

# риски
BORDER_MARGIN = 50  # опасная полоса у края карты
OBSTACLE_LOOKAHEAD = 1.5  # насколько далеко смотрим вперед (в тормозных путях)

# шторм
STORM_LOOKAHEAD = 5  # на сколько тиков вперед проецируем позицию
STORM_MARGIN = 50  # минимальный запас до границы зоны
STORM_SAFE_FRACTION = 0.8  # куда уходим от границы (доля радиуса)

# бой
CLOSE_RANGE = 0.8  # сближаемся до этой доли дальности пушки
RETREAT_RANGE = 0.6  # ближе этой доли отходим
PROJECTILE_SPEED = 20  # скорость снаряда для упреждения

# цели
RERANK_INTERVAL = 10  # пересчет приоритетов целей раз в столько тиков
STALE_TICKS = 20  # цель, не виденная столько тиков, забывается
SIZE_WEIGHT = 50  # вес размера корабля противника
PROXIMITY_BONUS = 100  # бонус близости к каждому нашему кораблю
PROXIMITY_SCALE = 10  # бонус падает на 1 каждые столько единиц расстояния
AUCTION_BASE = 1000  # базовая ставка корабля в аукционе
HELD_PENALTY = 150  # штраф за смену уже назначенной цели
ROLE_BONUS = {"attacker": 200, "support": 100, "scout": 0}

# роли и патрулирование
ATTACKER_SIZE = 4  # минимальный размер атакующего
SUPPORT_SIZE = 3  # размер поддержки
MAX_SIZE = 5  # самый большой корпус
SCOUT_ORBIT = 0.7  # радиус облета зоны разведчиком (доля радиуса)
PHASE_STEP = 25  # сдвиг фазы облета между кораблями (в градусах)
WANDER_PERIOD = 50  # как часто меняем точку блуждания
WANDER_MIN = 100  # минимальное расстояние точки блуждания от центра
WANDER_MAX = 300  # максимальное расстояние точки блуждания от центра
SMALL_FLEET = 3  # до стольких кораблей карта делится на четверти
SWEEP_BORDER = 100  # проходы не подходят к краю карты ближе этого

# маршруты патрулирования по номеру корабля: вид, размах, скорость
PATROL_SHAPES = [
    ("circle", 300, 2),
    ("circle", 150, 1),
    ("horizontal", 200, 2),
    ("vertical", 200, 2),
    ("diagonal", 250, 2),
    ("wander", 400, 1),
]

# память
STATE_RESET_GAP = 100  # корабль, пропавший на столько тиков, считается новым
