"""Room/corridor layouts and the providers that produce them.

The generator only consumes a ``Layout``; how the rectangles are found is
the provider's business. ``TunnelingLayoutProvider`` is the reference
provider used by default.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

from ..config import LayoutSettings
from ..rng import RandomSource
from .geometry import Rect

logger = logging.getLogger(__name__)

DIRECTIONS = ("right", "left", "down", "up")

# vertical corridors span the room-above face row, at least one side-wall
# row and both wall rows of the room below
MIN_VERTICAL_LENGTH = 4


@dataclass
class Layout:
    """Rooms in discovery order (entry first, exit last) plus corridors."""

    rooms: List[Rect] = field(default_factory=list)
    corridors_h: List[Rect] = field(default_factory=list)
    corridors_v: List[Rect] = field(default_factory=list)


class LayoutProvider(Protocol):
    def generate(self, rooms_total: int, width: int, height: int, rng: RandomSource) -> Optional[Layout]:
        """Return a layout with exactly ``rooms_total`` rooms, or None if none fits."""
        ...


class StaticLayoutProvider:
    """Hands out a fixed layout, e.g. to replay a recorded level."""

    def __init__(self, layout: Layout) -> None:
        self.layout = layout

    def generate(self, rooms_total: int, width: int, height: int, rng: RandomSource) -> Optional[Layout]:
        if len(self.layout.rooms) != rooms_total:
            logger.info(
                "Static layout has %d rooms; %d requested", len(self.layout.rooms), rooms_total
            )
        return Layout(
            rooms=list(self.layout.rooms),
            corridors_h=list(self.layout.corridors_h),
            corridors_v=list(self.layout.corridors_v),
        )


def room_bounds(room: Rect) -> Rect:
    """Cells covered by a room including its walls (two rows above, one below)."""
    return Rect(room.x, room.y - 2, room.w, room.h + 3)


def corridor_h_bounds(corridor: Rect) -> Rect:
    return Rect(corridor.x, corridor.y - 2, corridor.w, corridor.h + 3)


def corridor_v_bounds(corridor: Rect) -> Rect:
    return Rect(corridor.x - 1, corridor.y, corridor.w + 2, corridor.h)


def _padded(r: Rect) -> Rect:
    return Rect(r.x - 1, r.y - 1, r.w + 2, r.h + 2)


class TunnelingLayoutProvider:
    """
    Grows a tree of rooms by tunneling out of existing ones.

    Each step picks an existing room and a direction, digs a corridor of
    random length out of it and places a new room at the far end. The
    candidate is rejected when the room (with a one-cell margin) or the
    corridor would leave the level or touch geometry other than the two
    rooms it joins. Corridors are only dug in junction shapes the stitcher
    knows how to repair:

    - horizontal corridors enter both rooms strictly between their top and
      bottom walls;
    - vertical corridors enter both rooms strictly between their corners.
    """

    def __init__(self, settings: Optional[LayoutSettings] = None) -> None:
        self.settings = settings or LayoutSettings()

    def generate(self, rooms_total: int, width: int, height: int, rng: RandomSource) -> Optional[Layout]:
        s = self.settings
        if rooms_total < 1:
            return None
        layout = Layout()
        # obstacles: (room index, or None for a corridor; bounds)
        blocked: List[Tuple[Optional[int], Rect]] = []

        w = rng.range(s.room_min_size, s.room_max_size + 1)
        h = rng.range(s.room_min_size, s.room_max_size + 1)
        first = Rect((width - w) // 2, (height - h) // 2, w, h)
        if not self._inside(first, width, height):
            logger.warning("Level %dx%d too small for a %dx%d room", width, height, w, h)
            return None
        layout.rooms.append(first)
        blocked.append((0, room_bounds(first)))

        attempts = 0
        while len(layout.rooms) < rooms_total and attempts < s.max_attempts:
            attempts += 1
            base_index = rng.range(0, len(layout.rooms))
            direction = rng.choice(DIRECTIONS)
            candidate = self._propose(layout.rooms[base_index], direction, rng)
            if candidate is None:
                continue
            room, corridor, horizontal = candidate
            if not self._inside(room, width, height):
                continue
            new_index = len(layout.rooms)
            corridor_box = corridor_h_bounds(corridor) if horizontal else corridor_v_bounds(corridor)
            if not self._fits(room, corridor_box, (base_index, new_index), blocked):
                continue
            layout.rooms.append(room)
            if horizontal:
                layout.corridors_h.append(corridor)
            else:
                layout.corridors_v.append(corridor)
            blocked.append((new_index, room_bounds(room)))
            blocked.append((None, corridor_box))

        if len(layout.rooms) < rooms_total:
            logger.warning(
                "Tunneling placed %d/%d rooms after %d attempts", len(layout.rooms), rooms_total, attempts
            )
            return None
        logger.debug("Tunneling placed %d rooms after %d attempts", rooms_total, attempts)
        return layout

    # ---- Candidates ------------------------------------------------------
    def _propose(self, base: Rect, direction: str, rng: RandomSource) -> Optional[Tuple[Rect, Rect, bool]]:
        s = self.settings
        w = rng.range(s.room_min_size, s.room_max_size + 1)
        h = rng.range(s.room_min_size, s.room_max_size + 1)
        thickness = rng.range(1, s.corridor_max_width + 1)
        length = rng.range(s.corridor_min_length, s.corridor_max_length + 1)

        if direction in ("right", "left"):
            # the corridor floor is one row taller than its passage: its
            # bottom caps overlay the last row
            ch = thickness + 1
            need = ch + 4
            if base.h < need or h < need:
                return None
            ny = rng.range(base.y - h + need, base.bottom - need + 1)
            nx = base.right + length if direction == "right" else base.x - length - w
            room = Rect(nx, ny, w, h)
            left, right = (base, room) if direction == "right" else (room, base)
            lo = max(left.y, right.y)
            hi = min(left.bottom, right.bottom)
            cy = rng.range(lo + 2, hi - 2 - ch + 1)
            return room, Rect(left.right, cy, right.x - left.right, ch), True

        length = max(length, MIN_VERTICAL_LENGTH)
        cw = thickness
        need = cw + 4
        if base.w < need or w < need:
            return None
        nx = rng.range(base.x - w + need, base.right - need + 1)
        ny = base.bottom + length if direction == "down" else base.y - length - h
        room = Rect(nx, ny, w, h)
        top, bottom = (base, room) if direction == "down" else (room, base)
        lo = max(top.x, bottom.x)
        hi = min(top.right, bottom.right)
        cx = rng.range(lo + 2, hi - 2 - cw + 1)
        return room, Rect(cx, top.bottom, cw, bottom.y - top.bottom), False

    # ---- Checks ----------------------------------------------------------
    @staticmethod
    def _inside(room: Rect, width: int, height: int) -> bool:
        b = _padded(room_bounds(room))
        return b.x >= 0 and b.y >= 0 and b.right <= width and b.bottom <= height

    @staticmethod
    def _fits(
        room: Rect,
        corridor_box: Rect,
        joined: Tuple[int, int],
        blocked: List[Tuple[Optional[int], Rect]],
    ) -> bool:
        room_box = _padded(room_bounds(room))
        corridor_pad = _padded(corridor_box)
        for owner, box in blocked:
            if room_box.intersects(box):
                return False
            # a corridor necessarily touches the two rooms it joins
            if owner is not None and owner in joined:
                continue
            if corridor_pad.intersects(box):
                return False
        return True


__all__ = [
    "Layout",
    "LayoutProvider",
    "StaticLayoutProvider",
    "TunnelingLayoutProvider",
    "room_bounds",
    "corridor_h_bounds",
    "corridor_v_bounds",
]
