"""Lot packing for city footprints."""

from city_layout.lots.packer import LotPacker, get_max_space, pack_lots
from city_layout.lots.types import (
    CENTER_CLEARANCE,
    DEFAULT_WALL_HEIGHT,
    MAX_LOT_SIZE,
    MAX_LOT_TRIALS,
    MIN_LOT_SIZE,
    Building,
    City,
    Lot,
    LotConfig,
)

__all__ = [
    "Building",
    "CENTER_CLEARANCE",
    "City",
    "DEFAULT_WALL_HEIGHT",
    "Lot",
    "LotConfig",
    "LotPacker",
    "MAX_LOT_SIZE",
    "MAX_LOT_TRIALS",
    "MIN_LOT_SIZE",
    "get_max_space",
    "pack_lots",
]
