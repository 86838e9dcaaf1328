from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..rng import RandomSource
from .level import Level
from .tiles import FLOOR_VARIANTS, WALL_FEATURES_BOTTOM, WALL_FEATURES_TOP, Tile

logger = logging.getLogger(__name__)

FOUNTAIN_BASINS = {
    Tile.FOUNTAIN_MID_RED: Tile.FOUNTAIN_BASIN_RED,
    Tile.FOUNTAIN_MID_BLUE: Tile.FOUNTAIN_BASIN_BLUE,
}


def vary_floors(
    level: Level,
    rng: RandomSource,
    chance: float = 0.2,
    variants: Sequence[Tile] = FLOOR_VARIANTS,
) -> int:
    """Swap floor tiles for cosmetic variants. Returns the number changed."""
    changed = 0
    for x, y in level.iter_cells():
        if level.floor_map[y][x] is None:
            continue
        if rng.random() < chance:
            level.floor_map[y][x] = rng.choice(variants)
            changed += 1
    logger.debug("Floor variety pass changed %d tiles", changed)
    return changed


def apply_wall_feature(level: Level, x: int, y: int, feature: Tile) -> bool:
    """Draw ``feature`` on the wall at (x, y) with its extra tiles.

    Goo adds a base tile on the floor below; fountains add a top cap above
    and a basin on the floor below. Nothing is written unless every cell
    the feature needs is inside the level.
    """
    if feature is Tile.GOO:
        if not level.in_bounds(x, y + 1):
            return False
        level.set_wall(x, y, Tile.GOO)
        level.set_floor(x, y + 1, Tile.GOO_BASE)
        return True
    basin = FOUNTAIN_BASINS.get(feature)
    if basin is not None:
        if not (level.in_bounds(x, y - 1) and level.in_bounds(x, y + 1)):
            return False
        level.set_wall(x, y - 1, Tile.FOUNTAIN_TOP)
        level.set_wall(x, y, feature)
        level.set_floor(x, y + 1, basin)
        return True
    level.set_wall(x, y, feature)
    return True


def add_wall_features(
    level: Level,
    rng: RandomSource,
    chance: float = 0.2,
    top_palette: Sequence[Tile] = WALL_FEATURES_TOP,
    bottom_palette: Sequence[Tile] = WALL_FEATURES_BOTTOM,
) -> int:
    """Decorate plain ``wall_mid`` tiles. Returns the number of features drawn.

    A wall with floor directly below it faces into a room ("top" wall) and
    draws from the richer palette.
    """
    drawn = 0
    for x, y in level.iter_cells():
        if level.wall_map[y][x] is not Tile.MID:
            continue
        if rng.random() >= chance:
            continue
        is_top = level.floor_at(x, y + 1) is not None
        feature = rng.choice(top_palette if is_top else bottom_palette)
        if apply_wall_feature(level, x, y, feature):
            drawn += 1
        else:
            logger.debug("Skipped %s at (%d,%d): not enough room", feature.value, x, y)
    logger.debug("Wall feature pass drew %d features", drawn)
    return drawn


def place_ladder(level: Level) -> Optional[tuple]:
    """Put the exit ladder on the center of the last room."""
    if not level.rooms:
        return None
    center = level.rooms[-1].center()
    level.set_floor(center.x, center.y, Tile.LADDER)
    return center.x, center.y


def decorate(level: Level, rng: RandomSource, floor_chance: float = 0.2, wall_chance: float = 0.2) -> None:
    """Floor variety, then wall features, then the ladder as the last floor write."""
    vary_floors(level, rng, floor_chance)
    add_wall_features(level, rng, wall_chance)
    place_ladder(level)


__all__ = [
    "FOUNTAIN_BASINS",
    "vary_floors",
    "apply_wall_feature",
    "add_wall_features",
    "place_ladder",
    "decorate",
]
