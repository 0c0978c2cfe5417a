"""City layout: water contours as blocked area, then lots per city."""

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from city_layout.config import Settings, settings as default_settings
from city_layout.contour import Contour, ContourTracer
from city_layout.geometry import Region, Window
from city_layout.heightmap import FOREGROUND, HeightSampler, WindowedHeightMap, threshold_classifier
from city_layout.lots import City, Lot, LotConfig, LotPacker

logger = logging.getLogger(__name__)


@dataclass
class CityLayout:
    """Geometry generated for one city."""

    city: City
    contours: list[Contour]
    lots: set[Lot] = field(default_factory=set)

    def to_geojson(self) -> dict[str, Any]:
        """Convert contours and lots to a GeoJSON FeatureCollection."""
        features: list[dict[str, Any]] = [
            {
                "type": "Feature",
                "geometry": c.to_geojson(),
                "properties": {
                    "feature_type": "contour",
                    "kind": str(c.kind),
                    "truncated": c.truncated,
                },
            }
            for c in self.contours
        ]
        for lot in sorted(self.lots, key=lambda lot: lot.shape):
            features.append(lot.to_feature())
        return {
            "type": "FeatureCollection",
            "properties": {
                "city": self.city.name,
                "center": [self.city.center.x, self.city.center.z],
                "diameter": self.city.diameter,
            },
            "features": features,
        }


class CityLayoutGenerator:
    """Lays out lots for a sequence of cities on one height map.

    Terrain at or below ``sea_level`` around each city is blocked, and so
    are the lots of every city laid out before it.
    """

    def __init__(
        self,
        sampler: HeightSampler,
        seed: str,
        sea_level: int,
        settings: Settings | None = None,
    ) -> None:
        self.sampler = sampler
        self.seed = seed
        self.sea_level = sea_level
        self.settings = settings or default_settings
        self.lot_config = LotConfig.from_settings(self.settings)

    def window_for(self, city: City) -> Window:
        """Scan window covering the city footprint plus one cell."""
        return Window.around(city.center, city.radius + 1)

    def windowed_sampler(self, city: City) -> WindowedHeightMap:
        """Height map clipped to the city window, land everywhere outside it."""
        return WindowedHeightMap(self.sampler, self.window_for(city), self.sea_level + 1)

    def trace_city(self, city: City) -> list[Contour]:
        """Water outlines inside the city window.

        Water cut by the window edge is closed off along the edge, so every
        body of water gets its own outer contour.
        """
        tracer = ContourTracer(
            self.windowed_sampler(city),
            self.window_for(city),
            self.sea_level,
            max_points=self.settings.max_contour_points,
        )
        return tracer.contours

    def blocked_area_for(self, city: City) -> Region:
        """Terrain area around ``city`` that lots must avoid."""
        return self._terrain_region(city, self.trace_city(city))

    def _terrain_region(self, city: City, contours: list[Contour]) -> Region:
        if not any(c.truncated for c in contours):
            return Region.from_contours(contours)

        # Truncated outlines do not enclose their water; block it cell by cell
        logger.warning(
            "Contours around city %s truncated, blocking water cells directly", city.name,
        )
        classify = threshold_classifier(self.windowed_sampler(city), self.sea_level)
        return Region.from_cells(
            p for p in self.window_for(city).cells() if classify(p.x, p.z) == FOREGROUND
        )

    def layout(self, cities: Iterable[City]) -> list[CityLayout]:
        """Lay out all cities in order."""
        t_start = time.perf_counter()
        placed = Region.empty()
        layouts: list[CityLayout] = []

        for city in cities:
            contours = self.trace_city(city)
            blocked = self._terrain_region(city, contours).union(placed)
            lots = LotPacker(self.seed, blocked, self.lot_config).pack(city)
            placed = placed.union(Region.from_rects(lot.shape for lot in lots))
            layouts.append(CityLayout(city=city, contours=contours, lots=lots))

        total_ms = (time.perf_counter() - t_start) * 1000
        logger.info(
            "[Layout] %d cities laid out in %.1fms (%d contours, %d lots)",
            len(layouts),
            total_ms,
            sum(len(layout.contours) for layout in layouts),
            sum(len(layout.lots) for layout in layouts),
        )
        return layouts


def layout_cities(
    sampler: HeightSampler,
    cities: Iterable[City],
    seed: str,
    sea_level: int,
    settings: Settings | None = None,
) -> list[CityLayout]:
    """Convenience function to lay out several cities on one height map."""
    return CityLayoutGenerator(sampler, seed, sea_level, settings).layout(cities)
