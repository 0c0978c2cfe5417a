"""Type definitions for contour tracing."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Any

from shapely.geometry import LineString, MultiPoint, Polygon
from shapely.geometry.base import BaseGeometry

from city_layout.geometry import GridPoint

# Upper bound on points per traced contour
MAX_CONTOUR_POINTS = 200


class Direction(IntEnum):
    """Moore neighborhood offsets, clockwise from east with z pointing down."""

    EAST = 0
    SOUTH_EAST = 1
    SOUTH = 2
    SOUTH_WEST = 3
    WEST = 4
    NORTH_WEST = 5
    NORTH = 6
    NORTH_EAST = 7

    @property
    def offset(self) -> tuple[int, int]:
        return _OFFSETS[self]

    def rotate(self, steps: int) -> "Direction":
        """Turn clockwise by ``steps`` eighths (negative turns counter-clockwise)."""
        return Direction((self + steps) % 8)

    def step(self, point: GridPoint) -> GridPoint:
        dx, dz = _OFFSETS[self]
        return GridPoint(point.x + dx, point.z + dz)


_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)


class ContourKind(StrEnum):
    """Which raster-scan rule started a trace."""

    OUTER = "outer"  # started at a cell with background to its left
    INNER = "inner"  # started at a cell with an unvisited background cell to its right


@dataclass
class Contour:
    """An ordered, closed 8-connected chain of boundary cells.

    The chain starts at the successor of the start cell and ends at the
    start cell, so the last point steps back to the first one.
    """

    points: list[GridPoint]
    kind: ContourKind = ContourKind.OUTER
    truncated: bool = False  # the trace hit the point cap before closing

    def __post_init__(self) -> None:
        if not self.points:
            raise ValueError("a contour needs at least one point")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[GridPoint]:
        return iter(self.points)

    def __contains__(self, point: object) -> bool:
        return point in self.points

    @property
    def start(self) -> GridPoint:
        """The cell the trace started from."""
        return self.points[-1]

    @property
    def is_degenerate(self) -> bool:
        return len(self.points) == 1

    @property
    def signed_area(self) -> float:
        """Shoelace area of the closed chain.

        Traces keep the foreground on their right. With z pointing down the
        outline of a foreground region comes out positive and the outline of
        a hole negative, whichever scan rule started the trace.
        """
        pts = self.points
        return 0.5 * sum(a.x * b.z - b.x * a.z for a, b in zip(pts, pts[1:] + pts[:1]))

    @property
    def encloses_foreground(self) -> bool:
        return self.signed_area >= 0

    def to_polygon(self) -> BaseGeometry:
        """Area covered by the contour cells and everything they enclose.

        Each cell is treated as a unit square around its center, so a
        one-point contour becomes a single cell.
        """
        cells = self.cell_polygon()
        if len(self.points) < 3:
            return cells
        ring = Polygon(self.points)
        if not ring.is_valid:
            ring = ring.buffer(0)
        return ring.union(cells)

    def hole_polygon(self) -> BaseGeometry:
        """Area enclosed by a hole outline, excluding the contour cells."""
        if len(self.points) < 3:
            return Polygon()
        ring = Polygon(self.points)
        if not ring.is_valid:
            ring = ring.buffer(0)
        return ring.difference(self.cell_polygon())

    def cell_polygon(self) -> BaseGeometry:
        """Union of the unit cells the contour passes through."""
        if len(self.points) == 1:
            return MultiPoint(self.points).buffer(0.5, cap_style="square")
        path = LineString(self.points if self.truncated else [*self.points, self.points[0]])
        return path.buffer(0.5, cap_style="square", join_style="mitre")

    def to_geojson(self) -> dict[str, Any]:
        """Convert to a GeoJSON-like geometry.

        Degenerate contours become a Point, everything else a closed
        LineString.
        """
        if self.is_degenerate:
            x, z = self.points[0]
            return {"type": "Point", "coordinates": [x, z]}
        coords = [[x, z] for x, z in self.points]
        if not self.truncated:
            coords.append(coords[0])
        return {"type": "LineString", "coordinates": coords}
