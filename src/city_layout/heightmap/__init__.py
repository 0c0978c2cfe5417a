"""Height samplers consumed by the contour tracer."""

from city_layout.heightmap.base import (
    BACKGROUND,
    FOREGROUND,
    ArrayHeightMap,
    ConstantHeightMap,
    HeightSampler,
    WindowedHeightMap,
    threshold_classifier,
)
from city_layout.heightmap.noise import NoiseHeightMap

__all__ = [
    "ArrayHeightMap",
    "BACKGROUND",
    "ConstantHeightMap",
    "FOREGROUND",
    "HeightSampler",
    "NoiseHeightMap",
    "WindowedHeightMap",
    "threshold_classifier",
]
