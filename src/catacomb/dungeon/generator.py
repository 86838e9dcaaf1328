from __future__ import annotations

import logging
from typing import Optional

from ..config import GenerationSettings
from ..entities import Hero
from ..pools import Pools, load_pools
from ..rng import RandomSource, derive_seed
from .decoration import add_wall_features, place_ladder, vary_floors
from .filler import fill_all
from .layout import LayoutProvider, TunnelingLayoutProvider
from .level import Level
from .population import place_boss, place_drops, place_monsters

logger = logging.getLogger(__name__)


class DungeonGenerator:
    """Builds one level at a time from a layout provider and a random source.

    Phases run in a fixed order and draw from ``rng`` in that order, so the
    same seed and provider always rebuild the same level:

    layout, fill and stitch, hero spawn, monsters, boss, drops, floor
    variety, wall features, ladder.

    The hero spawn draws nothing; it only reserves room 0's center so a
    boss sharing that room can never cover it.
    """

    def __init__(
        self,
        settings: Optional[GenerationSettings] = None,
        rng: Optional[RandomSource] = None,
        layout_provider: Optional[LayoutProvider] = None,
        pools: Optional[Pools] = None,
    ) -> None:
        self.settings = settings or GenerationSettings()
        self.rng = rng or RandomSource()
        self.layout_provider = layout_provider or TunnelingLayoutProvider(self.settings.layout)
        self.pools = pools or load_pools()

    def generate_rooms(self, level: Level) -> bool:
        """Ask the provider for a layout sized for ``level`` and draw it.

        Returns False when the provider finds no legal arrangement; the level
        is left untouched in that case.
        """
        rooms_total = self.settings.rooms_for_level(level.index)
        layout = self.layout_provider.generate(rooms_total, level.width, level.height, self.rng)
        if layout is None or not layout.rooms:
            logger.warning("No layout with %d rooms for level %d", rooms_total, level.index)
            return False
        level.rooms = list(layout.rooms)
        level.corridors_h = list(layout.corridors_h)
        level.corridors_v = list(layout.corridors_v)
        fill_all(level, level.rooms, level.corridors_h, level.corridors_v)
        return True

    def generate(self, level_index: int, hero: Optional[Hero] = None) -> Optional[Level]:
        """Generate level ``level_index`` (1-based). Returns None if no layout fits."""
        if level_index < 1:
            raise ValueError(f"Level index must be >= 1, got {level_index}")
        s = self.settings
        logger.info("Generating level %d (%dx%d)", level_index, s.level_size, s.level_size)
        level = Level(index=level_index, width=s.level_size, height=s.level_size)

        if not self.generate_rooms(level):
            return None

        # the spawn cell is claimed before anything else can land on it
        hero = hero or Hero()
        start = level.rooms[0].center()
        hero.reset_position(start.x, start.y)
        level.place_occupant(hero)

        boss_level = s.is_boss_level(level_index)
        place_monsters(
            level,
            s.monsters_for_level(level_index),
            self.pools.monsters,
            self.rng,
            exclude_last=boss_level,
            attempts=s.monster_attempts,
        )
        if boss_level:
            place_boss(
                level,
                self.pools.boss_for_level(level_index, s.boss_interval),
                self.rng,
                attempts=s.boss_attempts,
            )
        place_drops(
            level,
            s.drops_for_level(level_index),
            self.pools.drops,
            self.rng,
            attempts=s.drop_attempts,
        )

        vary_floors(level, self.rng, s.floor_variety_chance)
        add_wall_features(level, self.rng, s.wall_feature_chance)
        place_ladder(level)

        st = level.stats
        logger.info(
            "Level %d: %d rooms, monsters %d/%d, boss %d/%d, drops %d/%d, %d junction diagnostics",
            level_index,
            len(level.rooms),
            st.get("monsters_placed", 0),
            st.get("monsters_requested", 0),
            st.get("boss_placed", 0),
            st.get("boss_requested", 0),
            st.get("drops_placed", 0),
            st.get("drops_requested", 0),
            len(level.diagnostics),
        )
        return level


def generate_level(
    settings: Optional[GenerationSettings] = None,
    level_index: int = 1,
    *,
    layout_provider: Optional[LayoutProvider] = None,
    pools: Optional[Pools] = None,
) -> Optional[Level]:
    """Generate one level with a random source derived from ``settings.seed``.

    With a fixed seed the result depends only on (seed, level index), so any
    level can be rebuilt on its own.
    """
    settings = settings or GenerationSettings()
    rng = RandomSource(derive_seed(settings.seed, "level", level_index))
    gen = DungeonGenerator(settings, rng, layout_provider=layout_provider, pools=pools)
    return gen.generate(level_index)


__all__ = ["DungeonGenerator", "generate_level"]
