"""Battle rosters.

This package contains roster definitions and loading:
- roster.py: Player/enemy rosters, terrain overrides and battle setups
- roster_loader.py: YAML loading for battle setups
"""

from .roster import BattleSetup, EnemyRoster, PlayerRoster, TerrainOverride
from .roster_loader import RosterLoader

__all__ = [
    "BattleSetup",
    "EnemyRoster",
    "PlayerRoster",
    "RosterLoader",
    "TerrainOverride",
]
