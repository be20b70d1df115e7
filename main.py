#!/usr/bin/env python3

from arena.core.config import BattleConfig
from arena.core.data import ATTACK_STYLE_NAMES, TEAM_NAMES, UNIT_ROLE_NAMES
from arena.game.battle_grid import BattleGrid
from arena.game.rosters import RosterLoader


ROSTER_FILE = "assets/rosters/tutorial.yaml"


def render_grid(grid: BattleGrid) -> str:
    state = grid.get_grid_state()
    glyphs = {"difficult": "~", "hazard": "!", "blocked": "#", "cover": "+"}

    lines = []
    for row in state["cells"]:
        line = []
        for cell in row:
            unit = cell["unit"]
            if unit is not None:
                line.append(unit["id"][0].upper() if unit["is_alive"] else "x")
            elif cell["highlighted"]:
                line.append("*")
            else:
                line.append(glyphs.get(cell["terrain"]["id"], "."))
        lines.append(" ".join(line))
    return "\n".join(lines)


def describe_units(grid: BattleGrid) -> str:
    lines = []
    for unit in grid.turn_order:
        lines.append(
            f"{unit.name:<16} {TEAM_NAMES[unit.team]:<7} {UNIT_ROLE_NAMES[unit.role]:<9}"
            f" HP {unit.hp:>3}/{unit.max_hp:<3} SPD {unit.spd:>2}"
            f" {ATTACK_STYLE_NAMES[unit.attack_style]} x{unit.attack_range}"
        )
    return "\n".join(lines)


def main():
    config = BattleConfig.load()
    setup = RosterLoader.load_from_file(ROSTER_FILE)

    grid = BattleGrid(config)
    grid.start(setup)

    current = grid.get_current_unit()
    if current is not None:
        grid.highlight_movement(current)

    print(f"{setup.name}: {setup.description}")
    print()
    print(render_grid(grid))
    print()
    print(describe_units(grid))
    print()
    for entry in grid.get_recent_log():
        print(entry.format())


if __name__ == "__main__":
    main()
