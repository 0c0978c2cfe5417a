"""Procedural city layout over terrain height maps."""

from city_layout.contour import Contour, ContourKind, ContourTracer, trace_contours
from city_layout.geometry import GridPoint, Point, Rect, Region, Window
from city_layout.heightmap import (
    ArrayHeightMap,
    ConstantHeightMap,
    HeightSampler,
    NoiseHeightMap,
    threshold_classifier,
)
from city_layout.layout import CityLayout, CityLayoutGenerator, layout_cities
from city_layout.lots import Building, City, Lot, LotConfig, LotPacker, pack_lots

__version__ = "0.1.0"
__all__ = [
    "ArrayHeightMap",
    "Building",
    "City",
    "CityLayout",
    "CityLayoutGenerator",
    "ConstantHeightMap",
    "Contour",
    "ContourKind",
    "ContourTracer",
    "GridPoint",
    "HeightSampler",
    "Lot",
    "LotConfig",
    "LotPacker",
    "NoiseHeightMap",
    "Point",
    "Rect",
    "Region",
    "Window",
    "layout_cities",
    "pack_lots",
    "threshold_classifier",
    "trace_contours",
]
