from .generator import DungeonGenerator, generate_level
from .geometry import Point, Rect
from .layout import Layout, LayoutProvider, StaticLayoutProvider, TunnelingLayoutProvider
from .level import Level, StitchDiagnostic
from .tiles import Tile

__all__ = [
    "DungeonGenerator",
    "generate_level",
    "Point",
    "Rect",
    "Layout",
    "LayoutProvider",
    "StaticLayoutProvider",
    "TunnelingLayoutProvider",
    "Level",
    "StitchDiagnostic",
    "Tile",
]
