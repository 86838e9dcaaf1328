from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .data.loader import default_loader
from .errors import ConfigError, DataValidationError

logger = logging.getLogger(__name__)


@dataclass
class LayoutSettings:
    """Parameters of the reference tunneling layout provider."""

    room_min_size: int = 7
    room_max_size: int = 13
    corridor_min_length: int = 4
    corridor_max_length: int = 8
    corridor_max_width: int = 2
    max_attempts: int = 2000

    def __post_init__(self) -> None:
        if self.room_min_size > self.room_max_size:
            raise ConfigError(
                f"room_min_size ({self.room_min_size}) exceeds room_max_size ({self.room_max_size})"
            )
        if self.corridor_min_length > self.corridor_max_length:
            raise ConfigError(
                f"corridor_min_length ({self.corridor_min_length}) exceeds "
                f"corridor_max_length ({self.corridor_max_length})"
            )


@dataclass
class GenerationSettings:
    """Central generation configuration.

    - Counts scale linearly with the level index: rooms = rooms_base + level,
      monsters = monsters_base + level, drops = drops_base + level.
    - Every ``boss_interval``-th level is a boss level.
    - The ``*_attempts`` fields are the rejection-sampling budgets per entity.
    - The ``*_chance`` fields are the per-tile probabilities of the two
      decoration passes.
    """

    level_size: int = 200
    rooms_base: int = 1
    monsters_base: int = 3
    drops_base: int = 5
    boss_interval: int = 5
    monster_attempts: int = 10
    boss_attempts: int = 10
    drop_attempts: int = 64
    floor_variety_chance: float = 0.2
    wall_feature_chance: float = 0.2
    seed: Union[int, str, None] = None
    layout: LayoutSettings = field(default_factory=LayoutSettings)

    def __post_init__(self) -> None:
        if self.boss_interval < 1:
            raise ConfigError(f"boss_interval must be >= 1, got {self.boss_interval}")
        for name in ("floor_variety_chance", "wall_feature_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be within [0, 1], got {value}")

    # ---- Derived counts --------------------------------------------------
    def rooms_for_level(self, level: int) -> int:
        return self.rooms_base + level

    def monsters_for_level(self, level: int) -> int:
        return self.monsters_base + level

    def drops_for_level(self, level: int) -> int:
        return self.drops_base + level

    def is_boss_level(self, level: int) -> bool:
        return level % self.boss_interval == 0

    # ---- Loading ---------------------------------------------------------
    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationSettings":
        try:
            default_loader().validate_data(data, "settings")
        except DataValidationError as e:
            raise ConfigError(e.to_human()) from e
        data = dict(data)
        layout = LayoutSettings(**(data.pop("layout", None) or {}))
        return cls(layout=layout, **data)

    @classmethod
    def load(cls, user_path: Optional[Path] = None, env: Optional[Dict[str, str]] = None) -> "GenerationSettings":
        """Load settings from built-in defaults, an optional user YAML file and env overrides.

        If user_path is provided and exists, overlay values onto defaults.
        """
        try:
            default_data = default_loader().load_packaged("defaults.yaml", validate=False) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(GenerationSettings())

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        merged = cls._deep_merge(merged, cls._env_overrides(os.environ if env is None else env))
        settings = cls.from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    @staticmethod
    def _env_overrides(env: Dict[str, str]) -> dict:
        overrides: Dict[str, Any] = {}
        casts = {
            "CATACOMB_LEVEL_SIZE": ("level_size", int),
            "CATACOMB_BOSS_INTERVAL": ("boss_interval", int),
            "CATACOMB_FLOOR_VARIETY": ("floor_variety_chance", float),
            "CATACOMB_WALL_FEATURES": ("wall_feature_chance", float),
        }
        for key, (attr, cast) in casts.items():
            if key in env:
                try:
                    overrides[attr] = cast(env[key])
                except ValueError as e:
                    raise ConfigError(f"Invalid value for {key}: {env[key]!r}") from e
        if "CATACOMB_SEED" in env:
            raw = env["CATACOMB_SEED"]
            overrides["seed"] = int(raw) if raw.lstrip("-").isdigit() else raw
        return overrides

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)


__all__ = ["GenerationSettings", "LayoutSettings"]
