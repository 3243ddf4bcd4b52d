"""
Tests for role classification and role waypoints.

Tests cover:
- Role thresholds and the two size estimators
- Attacker, support and scout waypoints
- Deterministic wander waypoints
- Sector patrol paths for ships without a zone
"""

import math

import pytest

from bounties import Bounties
from memory import Memory
from roles import (Role, attacker_point, enemy_size, patrol_path, scout_point,
                   sectors, ship_size, size_from_id, size_from_speed,
                   support_point, waypoint, wander_point)
from settings import CRUISE_SPEED
from state import Ship, State, World


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def world():
    """An empty 1000x800 map."""
    return World({"map": [1000, 800]})


def ship(ship_id, x, y, size=4, **extra):
    data = {"id": ship_id, "x": x, "y": y, "direction": "north", "speed": 0,
            "hp": 100, "size": size}
    data.update(extra)
    return data


def observe(world, memory, tick, my_ships, enemy_ships=(), zone=None):
    scan = {"tick": tick, "myShips": list(my_ships),
            "enemyShips": list(enemy_ships)}
    if zone is not None:
        scan["zone"] = zone
    state = State(scan, world)
    memory.observe(state)
    return state


# =============================================================================
# CLASSIFICATION TESTS
# =============================================================================

class TestRoleClassification:
    """Tests for size thresholds and size estimators."""

    @pytest.mark.parametrize("size,role", [
        (5, Role.ATTACKER),
        (4, Role.ATTACKER),
        (3, Role.SUPPORT),
        (2, Role.SCOUT),
        (1, Role.SCOUT),
    ])
    def test_for_size(self, size, role):
        assert Role.for_size(size) == role

    @pytest.mark.parametrize("ship_id,size", [
        ("ship-7", 3),
        ("ship-4", 5),
        ("abc", 5),
        ("", 1),
    ])
    def test_size_from_id(self, ship_id, size):
        assert size_from_id(ship_id) == size

    @pytest.mark.parametrize("speed,size", [
        (0, 5),
        (1, 4),
        (2.5, 2),
        (10, 1),
    ])
    def test_size_from_speed(self, speed, size):
        assert size_from_speed(speed) == size

    def test_explicit_size_wins(self):
        own = Ship({"id": "ship-7", "size": 4})
        assert ship_size(own) == 4

        enemy = Ship({"id": "e", "speed": 0, "size": 1})
        assert enemy_size(enemy) == 1

    def test_own_ships_fall_back_to_id(self):
        assert ship_size(Ship({"id": "ship-7", "speed": 0})) == 3

    def test_enemies_fall_back_to_speed(self):
        assert enemy_size(Ship({"id": "ship-7", "speed": 0})) == 5

    def test_role_assigned_on_first_sight(self, world):
        memory = Memory()
        observe(world, memory, 0, [ship("a", 1, 1, size=3),
                                   ship("b", 2, 2, size=None)])
        assert memory.ships["a"].role == Role.SUPPORT
        # "b" has no digit at the end: ord("b") % 5 + 1 == 4
        assert memory.ships["b"].role == Role.ATTACKER


# =============================================================================
# WAYPOINT TESTS
# =============================================================================

class TestAttackerWaypoint:
    """Tests for the attacker default waypoint."""

    def test_map_center_without_zone_or_enemies(self, world):
        memory = Memory()
        bounties = Bounties(memory)
        state = observe(world, memory, 0, [ship("a", 10, 10)])
        bounties.update(state)

        point = attacker_point(state, memory, bounties)
        assert (point.x, point.y) == (500, 400)

    def test_zone_center(self, world):
        memory = Memory()
        bounties = Bounties(memory)
        state = observe(world, memory, 0, [ship("a", 10, 10)],
                        zone={"x": 300, "y": 200, "radius": 150})
        bounties.update(state)

        point = attacker_point(state, memory, bounties)
        assert (point.x, point.y) == (300, 200)

    def test_top_ranked_enemy(self, world):
        memory = Memory()
        bounties = Bounties(memory)
        state = observe(world, memory, 0, [ship("a", 10, 10)],
                        [ship("small", 50, 50, size=1),
                         ship("big", 900, 700, size=5)])
        bounties.update(state)

        point = attacker_point(state, memory, bounties)
        assert (point.x, point.y) == (900, 700)


class TestSupportWaypoint:
    """Tests for the support default waypoint."""

    def test_follows_nearest_attacker(self, world):
        memory = Memory()
        state = observe(world, memory, 0, [
            ship("sup", 100, 100, size=3),
            ship("far", 900, 700, size=4),
            ship("near", 200, 100, size=5),
            ship("scout", 110, 100, size=1),
        ])
        sup = state.my_ships[0]

        point = support_point(sup, memory.get(sup), state, memory)
        assert (point.x, point.y) == (200, 100)

    def test_wanders_without_attackers(self, world):
        memory = Memory()
        state = observe(world, memory, 0, [ship("sup", 100, 100, size=3)])
        sup = state.my_ships[0]
        ship_state = memory.get(sup)

        point = support_point(sup, ship_state, state, memory)
        assert ship_state.waypoint == point
        assert ship_state.waypoint_tick == 0


class TestWander:
    """Tests for deterministic wander waypoints."""

    def test_stable_within_period_and_changes_after(self, world):
        memory = Memory()
        state = observe(world, memory, 1, [ship("sup", 100, 100, size=3)])
        ship_state = memory.get(state.my_ships[0])

        first = wander_point(ship_state, state)

        state = observe(world, memory, 30, [ship("sup", 100, 100, size=3)])
        assert wander_point(ship_state, state) == first

        state = observe(world, memory, 51, [ship("sup", 100, 100, size=3)])
        assert wander_point(ship_state, state) != first

    def test_replayable(self, world):
        points = []
        for _ in range(2):
            memory = Memory()
            state = observe(world, memory, 17, [ship("sup", 100, 100, size=3)])
            points.append(wander_point(memory.get(state.my_ships[0]), state))
        assert points[0] == points[1]

    def test_stays_near_center(self, world):
        memory = Memory()
        state = observe(world, memory, 13, [ship("sup", 100, 100, size=3)])
        point = wander_point(memory.get(state.my_ships[0]), state)
        assert math.hypot(point.x - 500, point.y - 400) <= 300 + 1e-9


class TestScoutWaypoint:
    """Tests for the scout orbit."""

    def test_orbit_around_zone(self, world):
        memory = Memory()
        zone = {"x": 500, "y": 400, "radius": 200}

        state = observe(world, memory, 0, [ship("s", 10, 10, size=1)], zone=zone)
        point = scout_point(memory.get(state.my_ships[0]), state)
        assert point.x == pytest.approx(640)
        assert point.y == pytest.approx(400)

        state = observe(world, memory, 90, [ship("s", 10, 10, size=1)], zone=zone)
        point = scout_point(memory.get(state.my_ships[0]), state)
        assert point.x == pytest.approx(500)
        assert point.y == pytest.approx(540)

    def test_phase_shift_per_ship(self, world):
        memory = Memory()
        state = observe(world, memory, 0, [ship("s0", 10, 10, size=1),
                                           ship("s1", 20, 20, size=1)])
        a = scout_point(memory.get(state.my_ships[0]), state)
        b = scout_point(memory.get(state.my_ships[1]), state)
        assert a != b

    def test_orbit_around_map_center_without_zone(self, world):
        memory = Memory()
        state = observe(world, memory, 0, [ship("s", 10, 10, size=1)])
        point = scout_point(memory.get(state.my_ships[0]), state)
        # a quarter of the smaller side
        assert point.x == pytest.approx(700)
        assert point.y == pytest.approx(400)

    def test_dispatch_by_role(self, world):
        memory = Memory()
        bounties = Bounties(memory)
        zone = {"x": 500, "y": 400, "radius": 200}
        state = observe(world, memory, 0, [ship("s", 10, 10, size=1)], zone=zone)
        bounties.update(state)

        scout = state.my_ships[0]
        point, speed = waypoint(scout, memory.get(scout), state, memory,
                                bounties)
        assert point.x == pytest.approx(640)
        assert speed == CRUISE_SPEED


# =============================================================================
# SECTOR PATROL TESTS
# =============================================================================

class TestSectors:
    """Tests for splitting the map into patrol sectors."""

    def test_small_fleet_uses_quarters(self, world):
        centers = [(p.x, p.y) for p in sectors(world, 2)]
        assert centers == [(250, 200), (750, 200), (750, 600), (250, 600)]

    def test_large_fleet_uses_grid(self, world):
        centers = sectors(world, 5)
        # 3 rows by 2 columns, the last cell stays empty
        assert len(centers) == 5
        assert (centers[0].x, centers[0].y) == (250, pytest.approx(800 / 6))
        assert (centers[3].x, centers[3].y) == (750, 400)
        assert (centers[4].x, centers[4].y) == (250, pytest.approx(4000 / 6))


class TestPatrolPath:
    """Tests for per-ship patrol shapes."""

    def fleet(self, world, count, tick=0):
        memory = Memory()
        state = observe(world, memory, tick,
                        [ship(f"s{i}", 10 * i, 10, size=1)
                         for i in range(count)])
        return memory, state

    def at_tick(self, world, path, ship_state, tick):
        return path.point(ship_state, State({"tick": tick}, world))

    def test_shape_and_speed_by_index(self, world):
        memory, state = self.fleet(world, 6)
        paths = [patrol_path(memory.get(s), state) for s in state.my_ships]

        assert [p.kind for p in paths] == ["circle", "circle", "horizontal",
                                           "vertical", "diagonal", "wander"]
        assert [p.speed for p in paths] == [2, 1, 2, 2, 2, 1]
        assert all(p.speed <= CRUISE_SPEED for p in paths)

    def test_path_is_chosen_once(self, world):
        memory, state = self.fleet(world, 1)
        ship_state = memory.get(state.my_ships[0])

        path = patrol_path(ship_state, state)
        state = observe(world, memory, 1, [ship("s0", 0, 10, size=1),
                                           ship("s9", 90, 10, size=1)])
        assert patrol_path(ship_state, state) is path

    def test_big_circle(self, world):
        memory, state = self.fleet(world, 2)
        ship_state = memory.get(state.my_ships[0])
        path = patrol_path(ship_state, state)

        point = self.at_tick(world, path, ship_state, 0)
        assert point.x == pytest.approx(550)
        assert point.y == pytest.approx(200)

    def test_horizontal_sweep(self, world):
        memory, state = self.fleet(world, 3)
        ship_state = memory.get(state.my_ships[2])
        path = patrol_path(ship_state, state)

        # sector (750, 600), sweep clipped to 100 from the right edge
        assert (path.start.x, path.end.x) == (550, 900)

        # phase of ship 2 is tick + 50 degrees
        far = self.at_tick(world, path, ship_state, 40)
        middle = self.at_tick(world, path, ship_state, 130)
        near = self.at_tick(world, path, ship_state, 220)
        assert far.x == pytest.approx(900)
        assert middle.x == pytest.approx(725)
        assert near.x == pytest.approx(550)
        assert far.y == middle.y == near.y == 600

    def test_vertical_sweep(self, world):
        memory, state = self.fleet(world, 4)
        ship_state = memory.get(state.my_ships[3])
        path = patrol_path(ship_state, state)

        # 4 ships: 2x2 grid, ship 3 sits in the lower right cell
        assert (path.start.y, path.end.y) == (400, 700)
        point = self.at_tick(world, path, ship_state, 15)
        assert (point.x, point.y) == (750, pytest.approx(700))

    def test_diagonal_sweep(self, world):
        memory, state = self.fleet(world, 5)
        ship_state = memory.get(state.my_ships[4])
        path = patrol_path(ship_state, state)

        assert (path.start.x, path.start.y) == (100, pytest.approx(800 / 6 * 5 - 250))
        assert (path.end.x, path.end.y) == (500, 700)

        point = self.at_tick(world, path, ship_state, 260)
        assert point.x == pytest.approx(300)

    def test_wander_inside_sector(self, world):
        memory, state = self.fleet(world, 6)
        ship_state = memory.get(state.my_ships[5])
        path = patrol_path(ship_state, state)

        point = path.point(ship_state, state)
        assert ship_state.waypoint == point
        assert math.hypot(point.x - path.center.x,
                          point.y - path.center.y) <= 300 + 1e-9

    def test_replayable(self, world):
        points = []
        for _ in range(2):
            memory, state = self.fleet(world, 6, tick=33)
            points.append([patrol_path(memory.get(s), state)
                           .point(memory.get(s), state)
                           for s in state.my_ships])
        assert points[0] == points[1]


class TestPatrolDispatch:
    """Which ships follow sector paths."""

    def test_scouts_spread_over_sectors(self, world):
        memory = Memory()
        bounties = Bounties(memory)
        state = observe(world, memory, 0, [ship("s0", 10, 10, size=1),
                                           ship("s1", 20, 20, size=1)])
        bounties.update(state)

        a, _ = waypoint(state.my_ships[0], memory.get(state.my_ships[0]),
                        state, memory, bounties)
        b, speed = waypoint(state.my_ships[1], memory.get(state.my_ships[1]),
                            state, memory, bounties)

        # first ship: big circle around (250, 200); second: small circle
        # around (750, 200)
        assert a.x == pytest.approx(550)
        assert b.x == pytest.approx(750 + 150 * math.cos(math.radians(25)))
        assert speed == 1

    def test_support_without_attackers_patrols_sector(self, world):
        memory = Memory()
        bounties = Bounties(memory)
        state = observe(world, memory, 0, [ship("sup", 100, 100, size=3)])
        bounties.update(state)

        sup = state.my_ships[0]
        point, speed = waypoint(sup, memory.get(sup), state, memory, bounties)
        assert memory.get(sup).patrol is not None
        assert point.x == pytest.approx(550)
        assert speed == 2

    def test_support_follows_attacker_before_sector(self, world):
        memory = Memory()
        bounties = Bounties(memory)
        state = observe(world, memory, 0, [ship("sup", 100, 100, size=3),
                                           ship("att", 200, 100, size=4)])
        bounties.update(state)

        sup = state.my_ships[0]
        point, speed = waypoint(sup, memory.get(sup), state, memory, bounties)
        assert (point.x, point.y) == (200, 100)
        assert speed == CRUISE_SPEED
        assert memory.get(sup).patrol is None

    def test_zone_replaces_sector_patrol(self, world):
        memory = Memory()
        bounties = Bounties(memory)
        zone = {"x": 500, "y": 400, "radius": 200}
        state = observe(world, memory, 0, [ship("s", 10, 10, size=1)],
                        zone=zone)
        bounties.update(state)

        scout = state.my_ships[0]
        point, _ = waypoint(scout, memory.get(scout), state, memory, bounties)
        assert point.x == pytest.approx(640)
        assert memory.get(scout).patrol is None
