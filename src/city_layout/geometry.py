"""Core geometry types shared by the contour tracer and the lot packer."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple, Protocol

from pydantic import BaseModel, ConfigDict, PositiveInt
from shapely.errors import GEOSException
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

if TYPE_CHECKING:
    from city_layout.contour.types import Contour

logger = logging.getLogger(__name__)


class GridPoint(NamedTuple):
    """An integer cell coordinate on the height-map grid."""

    x: int
    z: int


class Point(NamedTuple):
    """A real-valued 2D position in world units."""

    x: float
    z: float


@dataclass(frozen=True, order=True)
class Rect:
    """An axis-aligned rectangle with integer origin and size.

    ``x``/``z`` is the minimum corner, ``width`` extends along x and
    ``depth`` along z.
    """

    x: int
    z: int
    width: int
    depth: int

    @property
    def max_x(self) -> int:
        return self.x + self.width

    @property
    def max_z(self) -> int:
        return self.z + self.depth

    @property
    def center(self) -> Point:
        return Point(self.x + self.width * 0.5, self.z + self.depth * 0.5)

    @property
    def area(self) -> int:
        return self.width * self.depth

    def is_empty(self) -> bool:
        return self.width <= 0 or self.depth <= 0

    def intersects(self, other: Rect) -> bool:
        """Return True if the interiors of the two rectangles overlap.

        Rectangles that only share an edge do not intersect.
        """
        if self.is_empty() or other.is_empty():
            return False
        return (
            self.x < other.max_x
            and other.x < self.max_x
            and self.z < other.max_z
            and other.z < self.max_z
        )

    def contains(self, point: Point) -> bool:
        """Half-open containment test: min edges inclusive, max edges exclusive."""
        return self.x <= point.x < self.max_x and self.z <= point.z < self.max_z

    def to_polygon(self) -> Polygon:
        return box(self.x, self.z, self.max_x, self.max_z)

    def to_geojson(self) -> dict:
        """Convert to a GeoJSON-like Polygon geometry."""
        return {"type": "Polygon", "coordinates": [list(self.to_polygon().exterior.coords)]}


class Window(BaseModel):
    """A rectangular scan window on the integer grid.

    Width and height must be positive; constructing an empty window raises
    a ``ValueError`` (pydantic's ``ValidationError``).
    """

    model_config = ConfigDict(frozen=True)

    x: int
    z: int
    width: PositiveInt
    height: PositiveInt

    @classmethod
    def around(cls, center: Point, radius: float) -> Window:
        """Smallest window covering the square of ``radius`` around ``center``."""
        min_x = math.floor(center.x - radius)
        min_z = math.floor(center.z - radius)
        max_x = math.ceil(center.x + radius)
        max_z = math.ceil(center.z + radius)
        return cls(
            x=min_x,
            z=min_z,
            width=max(max_x - min_x, 1),
            height=max(max_z - min_z, 1),
        )

    @property
    def max_x(self) -> int:
        return self.x + self.width

    @property
    def max_z(self) -> int:
        return self.z + self.height

    def expand(self, margin: int) -> Window:
        return Window(
            x=self.x - margin,
            z=self.z - margin,
            width=self.width + 2 * margin,
            height=self.height + 2 * margin,
        )

    def __contains__(self, point: GridPoint) -> bool:
        return self.x <= point.x < self.max_x and self.z <= point.z < self.max_z

    def cells(self) -> Iterator[GridPoint]:
        """Iterate all cells row by row, top to bottom and left to right."""
        for z in range(self.z, self.max_z):
            for x in range(self.x, self.max_x):
                yield GridPoint(x, z)


class BlockedArea(Protocol):
    """Anything lots can be tested against for overlap."""

    def contains(self, point: Point) -> bool: ...

    def intersects(self, rect: Rect) -> bool: ...


class Region:
    """A blocked area backed by a Shapely geometry.

    Lots are tested against it with :meth:`intersects`; any object exposing
    ``contains(point)`` and ``intersects(rect)`` can stand in for it.
    """

    def __init__(self, geometry: BaseGeometry | None = None) -> None:
        self.geometry = geometry if geometry is not None else Polygon()

    @classmethod
    def empty(cls) -> Region:
        return cls()

    @classmethod
    def from_rects(cls, rects: Iterable[Rect]) -> Region:
        polygons = [r.to_polygon() for r in rects if not r.is_empty()]
        if not polygons:
            return cls()
        return cls(unary_union(polygons))

    @classmethod
    def from_cells(cls, cells: Iterable[GridPoint]) -> Region:
        """Union of the unit cells centered on ``cells``.

        Horizontal runs are merged into one box each before the union.
        """
        boxes = []
        first = last = None
        for cell in sorted(set(cells), key=lambda c: (c.z, c.x)):
            if last is not None and cell.z == last.z and cell.x == last.x + 1:
                last = cell
                continue
            if first is not None:
                boxes.append(_run_box(first, last))
            first = last = cell
        if first is not None:
            boxes.append(_run_box(first, last))
        if not boxes:
            return cls()
        return cls(unary_union(boxes))

    @classmethod
    def from_contours(cls, contours: Iterable[Contour]) -> Region:
        """Build the area enclosed by traced contours.

        Contours are folded in discovery order. A chain winding around
        foreground adds its enclosed area, a chain winding around a hole cuts
        the hole out. Truncated chains only add their own cells.
        """
        geometry: BaseGeometry = Polygon()
        for contour in contours:
            try:
                if contour.truncated:
                    geometry = geometry.union(contour.cell_polygon())
                elif contour.encloses_foreground:
                    geometry = geometry.union(contour.to_polygon())
                else:
                    geometry = geometry.difference(contour.hole_polygon())
            except GEOSException as e:
                logger.warning(
                    "Falling back to cell outline for %s contour at %s: %s",
                    contour.kind, contour.start, e,
                )
                if contour.encloses_foreground:
                    geometry = geometry.union(contour.cell_polygon())
        return cls(geometry)

    @property
    def is_empty(self) -> bool:
        return self.geometry.is_empty

    def contains(self, point: Point) -> bool:
        return self.geometry.contains(ShapelyPoint(point.x, point.z))

    def intersects(self, rect: Rect) -> bool:
        if self.geometry.is_empty:
            return False
        return self.geometry.intersects(rect.to_polygon())

    def union(self, other: Region) -> Region:
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        return Region(self.geometry.union(other.geometry))

    def __repr__(self) -> str:
        return f"Region({self.geometry.geom_type}, area={self.geometry.area:.1f})"


def _run_box(first: GridPoint, last: GridPoint) -> Polygon:
    return box(first.x - 0.5, first.z - 0.5, last.x + 0.5, last.z + 0.5)
