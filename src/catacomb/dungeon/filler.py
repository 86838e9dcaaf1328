from __future__ import annotations

import logging
from typing import Iterable

from .geometry import Rect
from .level import Level
from .stitcher import stitch_horizontal, stitch_vertical
from .tiles import Tile

logger = logging.getLogger(__name__)


def fill_floor(level: Level, rect: Rect, tile: Tile = Tile.FLOOR) -> None:
    for xx, yy in rect.cells():
        level.set_floor(xx, yy, tile)


def fill_room(level: Level, room: Rect) -> None:
    """Lay the floor of a room and draw its wall perimeter.

    The top wall sits on the two rows above the room. The bottom caps overlay
    the last floor row with the faces one row below, and the side walls
    overlay the first and last floor columns. A one-wide room only gets its
    left-hand corner caps.
    """
    x, y, w, h = room.x, room.y, room.w, room.h
    fill_floor(level, room)

    # top wall
    level.set_wall(x, y - 2, Tile.CORNER_TOP_LEFT)
    level.set_wall(x, y - 1, Tile.CORNER_LEFT)
    if w > 1:
        for r_x in range(x + 1, x + w - 1):
            level.set_wall(r_x, y - 2, Tile.TOP_MID)
            level.set_wall(r_x, y - 1, Tile.MID)
        level.set_wall(x + w - 1, y - 2, Tile.CORNER_TOP_RIGHT)
        level.set_wall(x + w - 1, y - 1, Tile.CORNER_RIGHT)

    # bottom wall
    level.set_wall(x, y + h - 1, Tile.CORNER_BOTTOM_LEFT)
    level.set_wall(x, y + h, Tile.LEFT)
    if w > 1:
        for r_x in range(x + 1, x + w - 1):
            level.set_wall(r_x, y + h - 1, Tile.TOP_MID)
            level.set_wall(r_x, y + h, Tile.MID)
        level.set_wall(x + w - 1, y + h - 1, Tile.CORNER_BOTTOM_RIGHT)
        level.set_wall(x + w - 1, y + h, Tile.RIGHT)

        # side walls
        for r_y in range(y, y + h - 1):
            level.set_wall(x, r_y, Tile.SIDE_MID_RIGHT)
            level.set_wall(x + w - 1, r_y, Tile.SIDE_MID_LEFT)


def fill_corridor_h(level: Level, corridor: Rect) -> None:
    fill_floor(level, corridor)
    stitch_horizontal(level, corridor)


def fill_corridor_v(level: Level, corridor: Rect) -> None:
    fill_floor(level, corridor)
    stitch_vertical(level, corridor)


def fill_all(
    level: Level,
    rooms: Iterable[Rect],
    corridors_h: Iterable[Rect],
    corridors_v: Iterable[Rect],
) -> None:
    """Rooms first, so every corridor finds finished room walls to repair."""
    rooms = list(rooms)
    corridors_h = list(corridors_h)
    corridors_v = list(corridors_v)
    for room in rooms:
        fill_room(level, room)
    for corridor in corridors_h:
        fill_corridor_h(level, corridor)
    for corridor in corridors_v:
        fill_corridor_v(level, corridor)
    logger.debug(
        "Filled %d rooms, %d horizontal and %d vertical corridors (%d junction diagnostics)",
        len(rooms),
        len(corridors_h),
        len(corridors_v),
        len(level.diagnostics),
    )


__all__ = ["fill_floor", "fill_room", "fill_corridor_h", "fill_corridor_v", "fill_all"]
