"""Combat system.

- combat_resolver.py: Damage calculation and attack application
"""

from .combat_resolver import AttackResult, CombatResolver, DamageBreakdown

__all__ = [
    "AttackResult",
    "CombatResolver",
    "DamageBreakdown",
]
