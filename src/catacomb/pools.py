from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .data.loader import DataLoader, default_loader
from .loot.drops import DropTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pools:
    """Name pools for monsters and bosses plus the drop table."""

    monsters: Tuple[str, ...]
    bosses: Tuple[str, ...]
    drops: DropTable

    def boss_for_level(self, level: int, boss_interval: int) -> str:
        """Boss variety cycles predictably: ``floor(level / interval) mod len``."""
        return self.bosses[(level // boss_interval) % len(self.bosses)]


def load_pools(path: Optional[Path] = None, loader: Optional[DataLoader] = None) -> Pools:
    """Load pools from ``path`` or from the packaged ``pools.yaml``.

    Raises DataValidationError when the document does not match the schema.
    """
    loader = loader or default_loader()
    if path is not None:
        raw = loader.load(path, schema="pools")
        logger.info("Loaded pools from %s", path)
    else:
        raw = loader.load_packaged("pools.yaml", schema="pools")
    return Pools(
        monsters=tuple(raw["monsters"]),
        bosses=tuple(raw["bosses"]),
        drops=DropTable.from_list(raw["drops"]),
    )


__all__ = ["Pools", "load_pools"]
