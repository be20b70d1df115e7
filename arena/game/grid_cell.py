from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from ..core.data import HighlightType, Position, TerrainType, Zone
from ..core.data.game_info import ZONES, TerrainInfo, get_terrain_info

if TYPE_CHECKING:
    from .entities.unit import BattleUnit


@dataclass
class GridCell:
    """One battlefield tile.

    The occupant reference is non-owning: the grid owns units, the cell only
    points at the one standing on it.
    """
    row: int
    col: int
    terrain: TerrainInfo = field(default_factory=lambda: get_terrain_info(TerrainType.NORMAL))
    unit: Optional["BattleUnit"] = None
    effects: list[dict[str, Any]] = field(default_factory=list)
    highlighted: bool = False
    highlight_type: Optional[HighlightType] = None

    @property
    def id(self) -> str:
        return f"cell_{self.row}_{self.col}"

    @property
    def position(self) -> Position:
        return Position(self.row, self.col)

    @property
    def zone(self) -> Zone:
        for zone_info in ZONES:
            if zone_info.contains_row(self.row):
                return zone_info.zone
        return Zone.PLAYER

    @property
    def is_occupied(self) -> bool:
        return self.unit is not None

    @property
    def movement_cost(self) -> float:
        return self.terrain.cost

    @property
    def is_passable(self) -> bool:
        return self.terrain.passable and not self.is_occupied

    def set_unit(self, unit: "BattleUnit") -> None:
        """Place a unit here and record this cell as the unit's position."""
        if self.unit is not None and self.unit is not unit:
            raise ValueError(f"{self.id} is already occupied by {self.unit.id}")
        self.unit = unit
        unit.update_position(self.position)

    def remove_unit(self) -> Optional["BattleUnit"]:
        unit = self.unit
        self.unit = None
        return unit

    def set_terrain(self, terrain: "TerrainType | str") -> None:
        """Set terrain by enum or name; unknown names become normal terrain."""
        self.terrain = get_terrain_info(terrain)

    def add_effect(self, effect: dict[str, Any]) -> None:
        """Attach a declarative effect (fire, ice, ...). Effects need an ``id``."""
        if "id" not in effect:
            raise ValueError("Cell effects require an 'id'")
        entry = dict(effect)
        entry.setdefault("applied_at", datetime.now().isoformat())
        self.effects.append(entry)

    def remove_effect(self, effect_id: str) -> None:
        self.effects = [e for e in self.effects if e.get("id") != effect_id]

    def set_highlight(self, highlight_type: HighlightType) -> None:
        self.highlighted = True
        self.highlight_type = highlight_type

    def clear_highlight(self) -> None:
        self.highlighted = False
        self.highlight_type = None
