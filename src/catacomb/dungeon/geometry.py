from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Rect:
    """Integer rectangle used for rooms and corridor segments.

    Coordinates are (x, y) with (0,0) at top-left; x grows to the right,
    y grows down. ``right`` and ``bottom`` are exclusive.
    """

    x: int
    y: int
    w: int
    h: int

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    def center(self) -> Point:
        return Point(self.x + (self.w >> 1), self.y + (self.h >> 1))

    def contains(self, x: int, y: int) -> bool:
        return (self.x <= x < self.right) and (self.y <= y < self.bottom)

    def intersects(self, other: "Rect") -> bool:
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def cells(self) -> Iterator[Tuple[int, int]]:
        for yy in range(self.y, self.bottom):
            for xx in range(self.x, self.right):
                yield xx, yy

    def interior_cells(self) -> Iterator[Tuple[int, int]]:
        """Room cells not covered by the room's own wall overlay.

        Side walls overlay columns ``x`` and ``right - 1`` and the bottom
        caps overlay row ``bottom - 1``; a one-wide room has no side walls.
        """
        if self.w == 1:
            xs = range(self.x, self.right)
        else:
            xs = range(self.x + 1, self.right - 1)
        for yy in range(self.y, self.bottom - 1):
            for xx in xs:
                yield xx, yy
