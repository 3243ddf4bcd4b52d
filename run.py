import os
import sys
import json
import time
import httpx
import matplotlib.pyplot as plt
from matplotlib.font_manager import FontProperties
import matplotlib.patches as mpatches

STORM_FLEET_BOT_FOLDER = "storm-fleet-bot"

# добавить файлы бота к пути python, если бот не установлен
sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)),
                             STORM_FLEET_BOT_FOLDER))

from api import BASE_URL, GameClient  # noqa: E402
from main import Bot  # noqa: E402
from state import entries, number  # noqa: E402


#    наши корабли, здоровье, противники
GRAPH_COLORS = [
    "#E2CD13",
    "#F24E4E",
    "#34BB1C",
]


def main():
    argv = sys.argv
    argc = len(argv)

    if (argc != 2 or not argv[1].isdigit()):
        print("\"ticks\" parameter not passed or is a string.\nExample usage: 'python run.py 400'")
        exit(1)

    ticks = int(argv[1])

    token = os.environ.get("STORM_FLEET_TOKEN")
    base_url = os.environ.get("STORM_FLEET_URL", BASE_URL)
    interval = float(os.environ.get("STORM_FLEET_INTERVAL", "1.0"))

    print(f"Running for {ticks} ticks against {base_url}...")
    print("Initializing map data...")

    with GameClient(token, base_url=base_url) as client:
        bot = Bot(client.get_map())
        print("Map initialized successfully")
        print()

        played_match = play(client, bot, ticks, interval)

    json.dump(played_match, fp=open("data.json", "w"),
              sort_keys=True, indent=4)

    make_graphs(played_match)

    print("Match done.\n")

    return


def play(client, bot, ticks, interval):
    played_match = []

    for _ in range(ticks):
        started = time.monotonic()

        # сбой транспорта - выбрасываем тик и пробуем на следующем
        try:
            scan = client.scan()
            commands = bot.agent(scan)
            result = client.send(commands) if commands else None
        except httpx.HTTPError as e:
            print(f"Transport error: {e}")
            time.sleep(interval)
            continue

        report(scan, commands, result)
        played_match.append({"scan": scan, "commands": commands})

        # ждем начала следующего тика
        elapsed = time.monotonic() - started
        time.sleep(max(0.0, interval - elapsed))

    return played_match


def report(scan, commands, result):
    print(f"Tick: {scan.get('tick')} | My ships: {len(scan.get('myShips') or [])}"
          f" | Enemy ships: {len(scan.get('enemyShips') or [])}")

    for command in commands:
        action = []
        if command["acceleration"] != 0:
            action.append(f"Accel: {command['acceleration']}")
        if command["rotate"] != 0:
            action.append(f"Rotate: {command['rotate']}")
        if command["cannonShoot"] is not None:
            shoot = command["cannonShoot"]
            action.append(f"Shoot: ({shoot['x']}, {shoot['y']})")

        if action:
            print(f"  Ship {command['id'][:8]}: {', '.join(action)}")

    if result is None:
        print("No commands to send")
    elif isinstance(result, dict) and result.get("success"):
        print("Commands executed successfully")
    else:
        error = result.get("error") if isinstance(result, dict) else None
        print(f"Failed to execute commands: {error or 'Unknown error'}")

    print()
    return


def make_graphs(played_match):
    print(f"Generating graphs based on {len(played_match)} ticks...\n")

    os.makedirs("analysis", exist_ok=True)

    total_ships_during_match(played_match)
    plt.clf()

    total_hp_during_match(played_match)
    plt.clf()

    enemy_ships_during_match(played_match)
    plt.clf()


def prepare_plot_settings(label, color):
    plt.figure(num=None, figsize=(10, 6), dpi=80, facecolor='w', edgecolor='k')

    handles = [mpatches.Patch(color=color, label=label)]
    plt.legend(handles=handles, loc='upper left', bbox_to_anchor=(0, 1.15),
               prop=FontProperties(size='small'))

    plt.xlabel('Тик')


def hp_of(ship):
    # как и бот, корабль без hp считаем живым
    return number(ship.get("hp"), 1)


def alive(ships):
    return [ship for ship in entries(ships) if hp_of(ship) > 0]


def total_ships_during_match(played_match):
    prepare_plot_settings("Наши корабли", GRAPH_COLORS[0])

    ticks = [step["scan"].get("tick") for step in played_match]
    counts = [len(alive(step["scan"].get("myShips"))) for step in played_match]
    plt.plot(ticks, counts, color=GRAPH_COLORS[0])

    plt.ylabel('Количество кораблей')

    plt.savefig("analysis/graph_total_ships_during_match.png", bbox_inches='tight')


def total_hp_during_match(played_match):
    prepare_plot_settings("Здоровье флота", GRAPH_COLORS[1])

    ticks = [step["scan"].get("tick") for step in played_match]
    hp = [sum(hp_of(ship) for ship in alive(step["scan"].get("myShips")))
          for step in played_match]
    plt.plot(ticks, hp, color=GRAPH_COLORS[1])

    plt.ylabel('Суммарное здоровье')

    plt.savefig("analysis/graph_total_hp_during_match.png", bbox_inches='tight')


def enemy_ships_during_match(played_match):
    prepare_plot_settings("Видимые противники", GRAPH_COLORS[2])

    ticks = [step["scan"].get("tick") for step in played_match]
    counts = [len(step["scan"].get("enemyShips") or []) for step in played_match]
    plt.plot(ticks, counts, color=GRAPH_COLORS[2])

    plt.ylabel('Количество кораблей противника')

    plt.savefig("analysis/graph_enemy_ships_during_match.png", bbox_inches='tight')


if __name__ == "__main__":
    main()
