"""Junction repair between corridors and the room walls they cut through.

Every wall cell around a corridor is classified by its junction position;
the rule table maps ``(position, existing tile)`` to a replacement tile,
to ``REMOVE`` (the corridor opens a passage) or to ``KEEP`` (the tile is
already correct). Tiles with no rule are left in place and reported as a
diagnostic: the layout provider's geometry is trusted, not re-verified.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional, Union

from .geometry import Rect
from .level import Level, StitchDiagnostic
from .tiles import Tile

logger = logging.getLogger(__name__)


class Action(Enum):
    KEEP = "keep"
    REMOVE = "remove"


KEEP = Action.KEEP
REMOVE = Action.REMOVE

Outcome = Union[Tile, Action]
RuleTable = Dict[str, Dict[Tile, Outcome]]


# Horizontal corridor: a room on the left ends in column x-1 and a room on
# the right starts in column x+w.
HORIZONTAL_RULES: RuleTable = {
    "top left cap": {
        Tile.CORNER_TOP_RIGHT: Tile.TOP_MID,
        Tile.SIDE_MID_LEFT: KEEP,
    },
    "top left face": {
        Tile.CORNER_RIGHT: Tile.MID,
        Tile.SIDE_MID_LEFT: Tile.SIDE_FRONT_LEFT,
    },
    "left edge": {
        Tile.SIDE_MID_LEFT: REMOVE,
    },
    "bottom left cap": {
        Tile.SIDE_MID_LEFT: Tile.SIDE_TOP_LEFT,
        Tile.CORNER_BOTTOM_RIGHT: Tile.TOP_MID,
    },
    "bottom left face": {
        Tile.SIDE_MID_LEFT: KEEP,
        Tile.RIGHT: Tile.MID,
    },
    "top right cap": {
        Tile.CORNER_TOP_LEFT: Tile.TOP_MID,
        Tile.SIDE_MID_RIGHT: KEEP,
    },
    "top right face": {
        Tile.CORNER_LEFT: Tile.MID,
        Tile.SIDE_MID_RIGHT: Tile.SIDE_FRONT_RIGHT,
    },
    "right edge": {
        Tile.SIDE_MID_RIGHT: REMOVE,
    },
    "bottom right cap": {
        Tile.SIDE_MID_RIGHT: Tile.SIDE_TOP_RIGHT,
        Tile.CORNER_BOTTOM_LEFT: Tile.TOP_MID,
    },
    "bottom right face": {
        Tile.SIDE_MID_RIGHT: KEEP,
        Tile.LEFT: Tile.MID,
    },
}

# Vertical corridor: it starts on the bottom face row (y) of the room above
# and ends on the top face row (y+h-1) of the room below.
VERTICAL_RULES: RuleTable = {
    "top left cap": {Tile.TOP_MID: Tile.CORNER_TOP_RIGHT},
    "top left face": {Tile.MID: Tile.CORNER_RIGHT},
    "top cap": {Tile.TOP_MID: REMOVE},
    "top face": {Tile.MID: REMOVE},
    "top right cap": {Tile.TOP_MID: Tile.CORNER_TOP_LEFT},
    "top right face": {Tile.MID: Tile.CORNER_LEFT},
    "bottom left cap": {Tile.TOP_MID: Tile.CORNER_BOTTOM_RIGHT},
    "bottom left face": {Tile.MID: Tile.CORNER_FRONT_RIGHT},
    "bottom cap": {Tile.TOP_MID: REMOVE},
    "bottom face": {Tile.MID: REMOVE},
    "bottom right cap": {Tile.TOP_MID: Tile.CORNER_BOTTOM_LEFT},
    "bottom right face": {Tile.MID: Tile.CORNER_FRONT_LEFT},
}


def transition(rules: RuleTable, position: str, existing: Optional[Tile]) -> Optional[Outcome]:
    """Look up the rewrite for ``existing`` at ``position``; None when unhandled."""
    if existing is None:
        return None
    return rules[position].get(existing)


def apply_rule(level: Level, rules: RuleTable, position: str, x: int, y: int) -> bool:
    """Rewrite the wall at (x, y) per the rule table.

    Returns False (after recording a diagnostic) when the existing tile has
    no rule at this position; the wall is left unchanged in that case.
    """
    existing = level.wall_at(x, y)
    outcome = transition(rules, position, existing)
    if outcome is None:
        diag = StitchDiagnostic(position=position, x=x, y=y, found=existing)
        level.diagnostics.append(diag)
        logger.warning("Unhandled junction tile: %s", diag)
        return False
    if outcome is REMOVE:
        level.set_wall(x, y, None)
    elif outcome is not KEEP:
        level.set_wall(x, y, outcome)
    return True


def stitch_horizontal(level: Level, corridor: Rect) -> List[StitchDiagnostic]:
    """Open a horizontal corridor into the rooms on its left and right."""
    x, y, w, h = corridor.x, corridor.y, corridor.w, corridor.h
    before = len(level.diagnostics)

    for side_x, side in ((x - 1, "left"), (x + w, "right")):
        apply_rule(level, HORIZONTAL_RULES, f"top {side} cap", side_x, y - 2)
        apply_rule(level, HORIZONTAL_RULES, f"top {side} face", side_x, y - 1)
        if h > 1:
            for r_y in range(y, y + h - 1):
                apply_rule(level, HORIZONTAL_RULES, f"{side} edge", side_x, r_y)
        apply_rule(level, HORIZONTAL_RULES, f"bottom {side} cap", side_x, y + h - 1)
        apply_rule(level, HORIZONTAL_RULES, f"bottom {side} face", side_x, y + h)

    # the corridor's own top and bottom runs
    for r_x in range(x, x + w):
        level.set_wall(r_x, y - 2, Tile.TOP_MID)
        level.set_wall(r_x, y - 1, Tile.MID)
        level.set_wall(r_x, y + h - 1, Tile.TOP_MID)
        level.set_wall(r_x, y + h, Tile.MID)

    return level.diagnostics[before:]


def stitch_vertical(level: Level, corridor: Rect) -> List[StitchDiagnostic]:
    """Open a vertical corridor into the rooms above and below it."""
    x, y, w, h = corridor.x, corridor.y, corridor.w, corridor.h
    before = len(level.diagnostics)

    for end, cap_y, face_y in (("top", y - 1, y), ("bottom", y + h - 2, y + h - 1)):
        apply_rule(level, VERTICAL_RULES, f"{end} left cap", x - 1, cap_y)
        apply_rule(level, VERTICAL_RULES, f"{end} left face", x - 1, face_y)
        for r_x in range(x, x + w):
            apply_rule(level, VERTICAL_RULES, f"{end} cap", r_x, cap_y)
            apply_rule(level, VERTICAL_RULES, f"{end} face", r_x, face_y)
        apply_rule(level, VERTICAL_RULES, f"{end} right cap", x + w, cap_y)
        apply_rule(level, VERTICAL_RULES, f"{end} right face", x + w, face_y)

    # side walls between the two junctions
    for r_y in range(y + 1, y + h - 2):
        level.set_wall(x - 1, r_y, Tile.SIDE_MID_LEFT)
        level.set_wall(x + w, r_y, Tile.SIDE_MID_RIGHT)

    return level.diagnostics[before:]


__all__ = [
    "Action",
    "KEEP",
    "REMOVE",
    "HORIZONTAL_RULES",
    "VERTICAL_RULES",
    "transition",
    "apply_rule",
    "stitch_horizontal",
    "stitch_vertical",
]
