from geometry import Point, distance
from settings import CLOSE_RANGE, RETREAT_RANGE, PROJECTILE_SPEED


def can_fire(ship, enemy):
    # стреляем только с полностью остывшей пушкой и на дистанции выстрела
    return ship.cooldown == 0 and distance(ship, enemy) <= ship.cannon_range


def lead_point(world, ship, enemy):
    # линейное упреждение: куда цель успеет сдвинуться, пока летит снаряд
    flight = distance(ship, enemy) / PROJECTILE_SPEED
    dx, dy = enemy.heading.vector
    x = enemy.x + dx * enemy.speed * flight
    y = enemy.y + dy * enemy.speed * flight

    # точка прицеливания не может быть за пределами карты
    x = max(0.0, min(x, world.width - 1))
    y = max(0.0, min(y, world.height - 1))
    return Point(x, y)


def fire_point(world, ship, enemy):
    if not can_fire(ship, enemy):
        return None
    return lead_point(world, ship, enemy)


def range_acceleration(ship, enemy):
    # держимся между RETREAT_RANGE и CLOSE_RANGE от дальности пушки
    dist = distance(ship, enemy)

    if dist > ship.cannon_range * CLOSE_RANGE:
        return 1
    elif dist < ship.cannon_range * RETREAT_RANGE:
        return -1
    return 0
