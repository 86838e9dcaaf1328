from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ..entities import Boss, Drop, Hero, Monster
from .geometry import Rect
from .tiles import Tile

logger = logging.getLogger(__name__)

Occupant = Union[Hero, Monster, Boss]


@dataclass(frozen=True)
class StitchDiagnostic:
    """An unexpected tile found at a corridor junction (left untouched)."""

    position: str
    x: int
    y: int
    found: Optional[Tile]

    def __str__(self) -> str:
        found = self.found.value if self.found is not None else "<empty>"
        return f"{self.position} at ({self.x},{self.y}): {found}"


@dataclass
class Level:
    """
    The level's floor, wall and occupancy grids plus the room/corridor
    rectangles they were built from.

    All grids are row-major ``[y][x]``. Tile access is bounds-checked:
    out-of-bounds reads return None and out-of-bounds writes are logged
    and dropped, so a geometry edge case never crashes generation.
    """

    index: int
    width: int
    height: int
    rooms: List[Rect] = field(default_factory=list)
    corridors_h: List[Rect] = field(default_factory=list)
    corridors_v: List[Rect] = field(default_factory=list)
    monsters: List[Monster] = field(default_factory=list)
    drops: List[Drop] = field(default_factory=list)
    boss: Optional[Boss] = None
    hero: Optional[Hero] = None
    diagnostics: List[StitchDiagnostic] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Level must be at least 1x1, got {self.width}x{self.height}")
        self.floor_map: List[List[Optional[Tile]]] = [[None] * self.width for _ in range(self.height)]
        self.wall_map: List[List[Optional[Tile]]] = [[None] * self.width for _ in range(self.height)]
        self.monster_map: List[List[Optional[Occupant]]] = [[None] * self.width for _ in range(self.height)]
        self.drop_map: List[List[Optional[Drop]]] = [[None] * self.width for _ in range(self.height)]

    # ---- Bounds ----------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # ---- Tiles -----------------------------------------------------------
    def floor_at(self, x: int, y: int) -> Optional[Tile]:
        if not self.in_bounds(x, y):
            return None
        return self.floor_map[y][x]

    def wall_at(self, x: int, y: int) -> Optional[Tile]:
        if not self.in_bounds(x, y):
            return None
        return self.wall_map[y][x]

    def set_floor(self, x: int, y: int, tile: Optional[Tile]) -> None:
        if not self.in_bounds(x, y):
            logger.error("Attempt to write out-of-bounds floor at (%d,%d)", x, y)
            return
        self.floor_map[y][x] = tile

    def set_wall(self, x: int, y: int, tile: Optional[Tile]) -> None:
        if not self.in_bounds(x, y):
            logger.error("Attempt to write out-of-bounds wall at (%d,%d)", x, y)
            return
        self.wall_map[y][x] = tile

    def find_tiles(self, tile: Tile) -> List[Tuple[int, int]]:
        """All cells whose floor or wall tile equals ``tile``."""
        found = []
        for y in range(self.height):
            floor_row = self.floor_map[y]
            wall_row = self.wall_map[y]
            for x in range(self.width):
                if floor_row[x] is tile or wall_row[x] is tile:
                    found.append((x, y))
        return found

    # ---- Occupancy -------------------------------------------------------
    def monster_at(self, x: int, y: int) -> Optional[Occupant]:
        if not self.in_bounds(x, y):
            return None
        return self.monster_map[y][x]

    def is_free(self, x: int, y: int) -> bool:
        """True when (x, y) is inside the level and holds no occupant."""
        return self.in_bounds(x, y) and self.monster_map[y][x] is None

    def place_occupant(self, occupant: Occupant) -> bool:
        """Link an occupant to its cell; refuses occupied or out-of-bounds cells."""
        if not self.is_free(occupant.x, occupant.y):
            return False
        self.monster_map[occupant.y][occupant.x] = occupant
        if isinstance(occupant, Monster):
            self.monsters.append(occupant)
        elif isinstance(occupant, Boss):
            self.boss = occupant
        else:
            self.hero = occupant
        return True

    def has_drop(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return self.drop_map[y][x] is not None

    def add_drop(self, drop: Drop) -> bool:
        if not self.in_bounds(drop.x, drop.y) or self.has_drop(drop.x, drop.y):
            return False
        self.drop_map[drop.y][drop.x] = drop
        self.drops.append(drop)
        return True

    # ---- Export / Compare -----------------------------------------------
    def iter_cells(self) -> Iterator[Tuple[int, int]]:
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def snapshot(self) -> Tuple[Tuple[Any, ...], ...]:
        """
        Deterministic, hashable snapshot of tiles and occupancy for equality tests.
        """
        rows = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                floor = self.floor_map[y][x]
                wall = self.wall_map[y][x]
                occupant = self.monster_map[y][x]
                drop = self.drop_map[y][x]
                row.append((
                    floor.value if floor is not None else None,
                    wall.value if wall is not None else None,
                    (type(occupant).__name__, occupant.name) if occupant is not None else None,
                    drop.name if drop is not None else None,
                ))
            rows.append(tuple(row))
        return tuple(rows)

    def to_str_lines(self) -> List[str]:
        """ASCII view: occupants over drops over walls over floors."""
        lines: List[str] = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                occupant = self.monster_map[y][x]
                if isinstance(occupant, Hero):
                    row.append("@")
                elif isinstance(occupant, Boss):
                    row.append("B")
                elif isinstance(occupant, Monster):
                    row.append("m")
                elif self.drop_map[y][x] is not None:
                    row.append("$")
                elif self.wall_map[y][x] is not None:
                    row.append(self.wall_map[y][x].glyph)
                elif self.floor_map[y][x] is not None:
                    row.append(self.floor_map[y][x].glyph)
                else:
                    row.append(" ")
            lines.append("".join(row).rstrip())
        return lines

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable summary for tools and the CLI."""

        def rect(r: Rect) -> List[int]:
            return [r.x, r.y, r.w, r.h]

        def tiles(grid: List[List[Optional[Tile]]]) -> List[List[Any]]:
            return [[x, y, grid[y][x].value] for y in range(self.height) for x in range(self.width) if grid[y][x] is not None]

        return {
            "level": self.index,
            "width": self.width,
            "height": self.height,
            "rooms": [rect(r) for r in self.rooms],
            "corridors_h": [rect(r) for r in self.corridors_h],
            "corridors_v": [rect(r) for r in self.corridors_v],
            "hero": [self.hero.x, self.hero.y] if self.hero else None,
            "boss": {"name": self.boss.name, "x": self.boss.x, "y": self.boss.y} if self.boss else None,
            "monsters": [{"name": m.name, "x": m.x, "y": m.y} for m in self.monsters],
            "drops": [{"name": d.name, "x": d.x, "y": d.y} for d in self.drops],
            "floor": tiles(self.floor_map),
            "walls": tiles(self.wall_map),
            "diagnostics": [str(d) for d in self.diagnostics],
            "stats": dict(self.stats),
        }


__all__ = ["Level", "Occupant", "StitchDiagnostic"]
