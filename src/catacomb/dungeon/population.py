"""Monster, boss and drop placement by bounded rejection sampling.

Each entity gets a fixed attempt budget. Running out of attempts is an
accepted outcome of a crowded room: the entity is skipped, counted in
``Level.stats`` and nothing is raised.
"""
from __future__ import annotations

import logging
from typing import Sequence

from ..entities import Boss, Drop, Monster
from ..loot.drops import DropTable
from ..rng import RandomSource
from .level import Level

logger = logging.getLogger(__name__)


def _bump(level: Level, key: str, amount: int = 1) -> None:
    level.stats[key] = level.stats.get(key, 0) + amount


def place_monsters(
    level: Level,
    count: int,
    names: Sequence[str],
    rng: RandomSource,
    *,
    exclude_last: bool = False,
    attempts: int = 10,
) -> int:
    """Scatter ``count`` monsters over every room but the entry room.

    The last room is also skipped when it is reserved for a boss. Each
    monster draws its room once and retries cells inside it, so a crowded
    room ends up with fewer monsters. Returns the number placed.
    """
    _bump(level, "monsters_requested", count)
    level.stats.setdefault("monsters_placed", 0)
    max_room = len(level.rooms) - (1 if exclude_last else 0)
    if max_room <= 1:
        logger.debug("No room available for monsters (%d rooms)", len(level.rooms))
        return 0

    placed = 0
    for _ in range(count):
        # the room is fixed per monster; only the cell is retried
        room = level.rooms[rng.range(1, max_room)]
        for _ in range(attempts):
            x = room.x + rng.range(0, room.w)
            y = room.y + rng.range(0, room.h)
            if not level.is_free(x, y):
                continue
            monster = Monster(name=rng.choice(names), x=x, y=y)
            level.place_occupant(monster)
            placed += 1
            break
    _bump(level, "monsters_placed", placed)
    if placed < count:
        logger.debug("Placed %d/%d monsters", placed, count)
    return placed


def place_boss(
    level: Level,
    name: str,
    rng: RandomSource,
    *,
    attempts: int = 10,
) -> bool:
    """Anchor a boss inside the last room, one tile in from its edges.

    The 2x2 footprint (anchor, right, above, above-right) must be free; only
    the anchor is recorded in the monster map.
    """
    _bump(level, "boss_requested")
    level.stats.setdefault("boss_placed", 0)
    if not level.rooms:
        return False
    room = level.rooms[-1]
    if room.w < 3 or room.h < 3:
        logger.info("Last room %s too small for a boss; skipping", room)
        return False

    for _ in range(attempts):
        x = room.x + rng.range(1, room.w - 1)
        y = room.y + rng.range(1, room.h - 1)
        boss = Boss(name=name, x=x, y=y)
        if all(level.is_free(cx, cy) for cx, cy in boss.footprint):
            level.place_occupant(boss)
            _bump(level, "boss_placed")
            logger.debug("Boss %s anchored at (%d,%d)", name, x, y)
            return True
    logger.debug("No free footprint for boss %s after %d attempts", name, attempts)
    return False


def place_drops(
    level: Level,
    count: int,
    table: DropTable,
    rng: RandomSource,
    *,
    attempts: int = 64,
) -> int:
    """Scatter ``count`` drops over all rooms, at most one drop per cell.

    As with monsters, the room is drawn once per drop.
    """
    _bump(level, "drops_requested", count)
    level.stats.setdefault("drops_placed", 0)
    if not level.rooms:
        return 0

    placed = 0
    for _ in range(count):
        room = rng.choice(level.rooms)
        for _ in range(attempts):
            x = room.x + rng.range(0, room.w)
            y = room.y + rng.range(0, room.h)
            if level.has_drop(x, y) or not level.in_bounds(x, y):
                continue
            level.add_drop(Drop(name=table.roll(level.index, rng), x=x, y=y))
            placed += 1
            break
    _bump(level, "drops_placed", placed)
    if placed < count:
        logger.debug("Placed %d/%d drops", placed, count)
    return placed


__all__ = ["place_monsters", "place_boss", "place_drops"]
