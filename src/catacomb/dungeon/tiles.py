from __future__ import annotations

from enum import Enum
from typing import Tuple


class Tile(str, Enum):
    """Closed tile vocabulary.

    Values are sprite names resolved by the tile registry of the
    presentation layer; generation treats them as opaque identities.
    """

    # floors
    FLOOR = "floor_1.png"
    FLOOR_2 = "floor_2.png"
    FLOOR_3 = "floor_3.png"
    FLOOR_4 = "floor_4.png"
    FLOOR_5 = "floor_5.png"
    FLOOR_6 = "floor_6.png"
    FLOOR_7 = "floor_7.png"
    FLOOR_8 = "floor_8.png"
    LADDER = "floor_ladder.png"

    # straight walls
    TOP_MID = "wall_top_mid.png"
    MID = "wall_mid.png"
    LEFT = "wall_left.png"
    RIGHT = "wall_right.png"

    # room corners
    CORNER_TOP_LEFT = "wall_corner_top_left.png"
    CORNER_TOP_RIGHT = "wall_corner_top_right.png"
    CORNER_LEFT = "wall_corner_left.png"
    CORNER_RIGHT = "wall_corner_right.png"
    CORNER_BOTTOM_LEFT = "wall_corner_bottom_left.png"
    CORNER_BOTTOM_RIGHT = "wall_corner_bottom_right.png"
    CORNER_FRONT_LEFT = "wall_corner_front_left.png"
    CORNER_FRONT_RIGHT = "wall_corner_front_right.png"

    # side walls (named after the direction they face)
    SIDE_MID_LEFT = "wall_side_mid_left.png"
    SIDE_MID_RIGHT = "wall_side_mid_right.png"
    SIDE_TOP_LEFT = "wall_side_top_left.png"
    SIDE_TOP_RIGHT = "wall_side_top_right.png"
    SIDE_FRONT_LEFT = "wall_side_front_left.png"
    SIDE_FRONT_RIGHT = "wall_side_front_right.png"

    # wall features
    HOLE_1 = "wall_hole_1.png"
    HOLE_2 = "wall_hole_2.png"
    BANNER_RED = "wall_banner_red.png"
    BANNER_BLUE = "wall_banner_blue.png"
    BANNER_GREEN = "wall_banner_green.png"
    BANNER_YELLOW = "wall_banner_yellow.png"
    GOO = "wall_goo.png"
    GOO_BASE = "wall_goo_base.png"
    FOUNTAIN_TOP = "wall_fountain_top.png"
    # animated sprites, registered without an extension
    FOUNTAIN_MID_RED = "wall_fountain_mid_red"
    FOUNTAIN_MID_BLUE = "wall_fountain_mid_blue"
    FOUNTAIN_BASIN_RED = "wall_fountain_basin_red"
    FOUNTAIN_BASIN_BLUE = "wall_fountain_basin_blue"

    def __str__(self) -> str:
        return self.value

    @property
    def glyph(self) -> str:
        """Single-character visualization for logs and the ASCII debug view."""
        return _GLYPHS.get(self, "#")


FLOOR_VARIANTS: Tuple[Tile, ...] = (
    Tile.FLOOR_2,
    Tile.FLOOR_3,
    Tile.FLOOR_4,
    Tile.FLOOR_5,
    Tile.FLOOR_6,
    Tile.FLOOR_7,
    Tile.FLOOR_8,
)

WALL_FEATURES_TOP: Tuple[Tile, ...] = (
    Tile.HOLE_1,
    Tile.HOLE_2,
    Tile.BANNER_RED,
    Tile.BANNER_BLUE,
    Tile.BANNER_GREEN,
    Tile.BANNER_YELLOW,
    Tile.GOO,
    Tile.FOUNTAIN_MID_RED,
    Tile.FOUNTAIN_MID_BLUE,
)

WALL_FEATURES_BOTTOM: Tuple[Tile, ...] = (
    Tile.HOLE_1,
    Tile.HOLE_2,
)

_GLYPHS = {
    Tile.FLOOR: ".",
    Tile.FLOOR_2: ".",
    Tile.FLOOR_3: ".",
    Tile.FLOOR_4: ".",
    Tile.FLOOR_5: ".",
    Tile.FLOOR_6: ".",
    Tile.FLOOR_7: ".",
    Tile.FLOOR_8: ".",
    Tile.GOO_BASE: ",",
    Tile.FOUNTAIN_BASIN_RED: "~",
    Tile.FOUNTAIN_BASIN_BLUE: "~",
    Tile.LADDER: ">",
    Tile.SIDE_MID_LEFT: "|",
    Tile.SIDE_MID_RIGHT: "|",
    Tile.TOP_MID: "-",
}
