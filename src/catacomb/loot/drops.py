from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping

from ..rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DropEntry:
    name: str
    weight: float = 1.0
    min_level: int = 1

    def eligible(self, level: int) -> bool:
        return level >= self.min_level

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "DropEntry":
        return cls(
            name=str(raw["name"]),
            weight=float(raw.get("weight", 1.0)),
            min_level=int(raw.get("min_level", 1)),
        )


@dataclass
class DropTable:
    """Weighted drop table gated by level index.

    Deeper levels unlock more entries; among eligible entries the pick is
    proportional to weight.
    """

    entries: List[DropEntry] = field(default_factory=list)

    def add(self, entry: DropEntry) -> None:
        if entry.weight <= 0:
            raise ValueError(f"Drop weight must be positive: {entry}")
        self.entries.append(entry)

    def extend(self, entries: Iterable[DropEntry]) -> None:
        for e in entries:
            self.add(e)

    def eligible(self, level: int) -> List[DropEntry]:
        return [e for e in self.entries if e.eligible(level)]

    def roll(self, level: int, rng: RandomSource) -> str:
        pool = self.eligible(level)
        if not pool:
            raise ValueError(f"No eligible drops for level {level}")
        weights: Dict[str, float] = {}
        for e in pool:
            weights[e.name] = weights.get(e.name, 0.0) + e.weight
        name = rng.weighted_choice(weights)
        logger.debug("Rolled drop %s at level %d", name, level)
        return name

    @classmethod
    def from_list(cls, raw: Iterable[Mapping[str, Any]]) -> "DropTable":
        table = cls()
        table.extend(DropEntry.from_dict(r) for r in raw)
        return table


__all__ = ["DropEntry", "DropTable"]
