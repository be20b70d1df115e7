"""Battle entities.

This package contains the combatants placed on the grid:
- unit.py: UnitConfig (roster configuration with defaults) and BattleUnit
- status_effects.py: Temporary stat modifiers and turn-start effects
"""

from .status_effects import StatusEffect
from .unit import BattleUnit, UnitConfig, STAT_ATTRIBUTES

__all__ = [
    "StatusEffect",
    "BattleUnit",
    "UnitConfig",
    "STAT_ATTRIBUTES",
]
