"""Types for city lot generation."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from city_layout.geometry import Point, Rect

if TYPE_CHECKING:
    from city_layout.config import Settings

# Placement trials per city
MAX_LOT_TRIALS = 100

# Lot edge length bounds in blocks
MIN_LOT_SIZE = 6.0
MAX_LOT_SIZE = 16.0

# Extra keep-out radius around the city center, on top of half a lot
CENTER_CLEARANCE = 5.0

# Wall height of the default building placed on every lot
DEFAULT_WALL_HEIGHT = 4


@dataclass(frozen=True)
class City:
    """A settlement site; ``name`` is its identity for seeding."""

    name: str
    center: Point
    diameter: float

    @property
    def radius(self) -> float:
        return self.diameter * 0.5


@dataclass(frozen=True)
class Building:
    """A box-shaped building standing on a lot."""

    layout: Rect
    wall_height: int
    base_height: int = 0


@dataclass(eq=False)
class Lot:
    """A rectangular plot reserved for buildings.

    Lots compare and hash by identity.
    """

    shape: Rect
    buildings: list[Building] = field(default_factory=list)

    def add_building(self, building: Building) -> None:
        self.buildings.append(building)

    def to_feature(self) -> dict[str, Any]:
        """Convert to a GeoJSON-like Feature."""
        return {
            "type": "Feature",
            "geometry": self.shape.to_geojson(),
            "properties": {
                "feature_type": "lot",
                "width": self.shape.width,
                "depth": self.shape.depth,
                "wall_height": max((b.wall_height for b in self.buildings), default=0),
                "buildings": len(self.buildings),
            },
        }


@dataclass
class LotConfig:
    """Configuration for random lot packing."""

    min_size: float = MIN_LOT_SIZE
    max_size: float = MAX_LOT_SIZE
    center_clearance: float = CENTER_CLEARANCE
    max_trials: int = MAX_LOT_TRIALS
    wall_height: int = DEFAULT_WALL_HEIGHT

    def __post_init__(self) -> None:
        if self.min_size <= 0:
            raise ValueError(f"min_size must be positive, got {self.min_size}")
        if self.min_size > self.max_size:
            raise ValueError(
                f"min_size ({self.min_size}) must not exceed max_size ({self.max_size})"
            )
        if self.max_trials <= 0:
            raise ValueError(f"max_trials must be positive, got {self.max_trials}")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "LotConfig":
        """Create config from environment-backed settings."""
        return cls(
            min_size=settings.min_lot_size,
            max_size=settings.max_lot_size,
            center_clearance=settings.center_clearance,
            max_trials=settings.max_lot_trials,
            wall_height=settings.wall_height,
        )

    @property
    def min_radius(self) -> float:
        """Inner radius of the ring lots are placed in."""
        return self.center_clearance + self.max_size * 0.5

    def max_radius(self, city: City) -> float:
        """Outer radius of the ring lots are placed in."""
        return (city.diameter - self.max_size) * 0.5
