"""
Basic test fixtures for the arena test suite.

Provides fresh grids, sample unit configs and a deterministic RNG.
"""

import sys
import os
import pytest
from unittest.mock import Mock

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from arena.core.config import BattleConfig
from arena.core.data import Team, UnitRole
from arena.core.events import EventManager
from arena.game.battle_grid import BattleGrid
from arena.game.entities import UnitConfig


@pytest.fixture
def no_crit_rng():
    """RNG whose rolls never land a critical hit."""
    rng = Mock()
    rng.random.return_value = 0.99
    return rng


@pytest.fixture
def always_crit_rng():
    """RNG whose rolls always land a critical hit."""
    rng = Mock()
    rng.random.return_value = 0.0
    return rng


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def grid(no_crit_rng):
    """Create an empty battle grid with crits disabled."""
    return BattleGrid(BattleConfig(), rng=no_crit_rng)


@pytest.fixture
def player_config():
    """The player leader with default stats."""
    return UnitConfig(id="player", role=UnitRole.PLAYER, team=Team.PLAYER, name="Hero")


@pytest.fixture
def minion_config():
    """An enemy minion: hp 55, atk 10, def 5, spd 10."""
    return UnitConfig(
        id="minion_0", role=UnitRole.MINION, team=Team.ENEMY, name="Grunt",
        hp=55, atk=10, defense=5, spd=10,
    )
