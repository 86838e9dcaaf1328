"""Occupant and item records placed on a level.

Records are plain values: they carry their own position and never point
back at the level that holds them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cell = Tuple[int, int]


@dataclass
class Hero:
    name: str = "hero"
    x: int = 0
    y: int = 0

    def reset_position(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


@dataclass(frozen=True)
class Monster:
    name: str
    x: int
    y: int


@dataclass(frozen=True)
class Boss:
    """A boss anchored at (x, y).

    The sprite covers a 2x2 block extending right and up from the anchor,
    but only the anchor cell is recorded in the monster map.
    """

    name: str
    x: int
    y: int

    @property
    def footprint(self) -> Tuple[Cell, ...]:
        return (
            (self.x, self.y),
            (self.x + 1, self.y),
            (self.x, self.y - 1),
            (self.x + 1, self.y - 1),
        )


@dataclass(frozen=True)
class Drop:
    name: str
    x: int
    y: int


__all__ = ["Hero", "Monster", "Boss", "Drop", "Cell"]
