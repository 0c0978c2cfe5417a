"""Moore-neighbor boundary tracing over a thresholded height map.

Follows the contour tracing scheme from Burger & Burge, "Digital Image
Processing - An Algorithmic Introduction using Java": a single raster scan
starts an outer trace at the first unclaimed cell of every foreground
region and an inner trace next to every hole cell no trace has probed yet.
Background cells are marked as they are probed, so a hole is found even
when its whole rim already lies on an outer contour. Each
trace walks the 8-connected boundary clockwise until it returns to its
initial state.
"""

import logging

from city_layout.contour.types import MAX_CONTOUR_POINTS, Contour, ContourKind, Direction
from city_layout.geometry import GridPoint, Window
from city_layout.heightmap.base import BACKGROUND, FOREGROUND, HeightSampler, threshold_classifier

logger = logging.getLogger(__name__)


def find_next_point(
    classifier: HeightSampler,
    point: GridPoint,
    direction: Direction,
    visited: set[GridPoint] | None = None,
) -> tuple[GridPoint, Direction]:
    """Find the first foreground neighbor clockwise from ``direction``.

    At most 7 neighbors are examined. Returns the neighbor and the direction
    it lies in; if every examined neighbor is background, ``point`` itself
    is returned. Background neighbors examined on the way are added to
    ``visited`` when given.
    """
    for _ in range(7):
        candidate = direction.step(point)
        if classifier(candidate.x, candidate.z) != BACKGROUND:
            return candidate, direction
        if visited is not None:
            visited.add(candidate)
        direction = direction.rotate(1)
    return point, direction


def trace_contour(
    classifier: HeightSampler,
    start: GridPoint,
    direction: Direction = Direction.EAST,
    kind: ContourKind = ContourKind.OUTER,
    max_points: int = MAX_CONTOUR_POINTS,
    visited: set[GridPoint] | None = None,
) -> Contour:
    """Trace one contour from ``start``, searching first in ``direction``.

    The chain begins with the successor of ``start`` and ends with ``start``.
    Tracing stops once the walk leaves ``start`` for its successor a second
    time, or when more than ``max_points`` points were collected; in the
    latter case the contour is marked truncated. Background cells probed
    along the way are collected in ``visited``.
    """
    successor, found = find_next_point(classifier, start, direction, visited)
    points = [successor]
    if successor == start:
        return Contour(points, kind)

    current = successor
    while True:
        previous = current
        current, found = find_next_point(classifier, previous, found.rotate(6), visited)
        if previous == start and current == successor:
            return Contour(points, kind)
        points.append(current)
        if len(points) > max_points:
            logger.warning(
                "Aborting %s trace from (%d, %d) after %d points",
                kind, start.x, start.z, len(points),
            )
            return Contour(points, kind, truncated=True)


class ContourTracer:
    """Extracts the contours of all regions at or below a threshold height.

    Cells with ``height <= sea_level`` are foreground. The window is scanned
    top to bottom and left to right; contours are returned in the order
    their start cells are reached. Cells just outside the window are read
    as neighbors of edge cells.
    """

    def __init__(
        self,
        sampler: HeightSampler,
        window: Window,
        sea_level: int,
        max_points: int = MAX_CONTOUR_POINTS,
    ) -> None:
        if max_points <= 0:
            raise ValueError(f"max_points must be positive, got {max_points}")
        self.window = window
        self.sea_level = sea_level
        self.max_points = max_points
        self._classify = threshold_classifier(sampler, sea_level)
        self._contours: list[Contour] | None = None
        self._found: set[GridPoint] = set()
        self._visited: set[GridPoint] = set()

    @property
    def contours(self) -> list[Contour]:
        """All contours in the window, traced on first access."""
        if self._contours is None:
            self._contours = []
            self._find_all_contours()
        return self._contours

    def is_found(self, point: GridPoint) -> bool:
        """Return True if ``point`` lies on an already traced contour."""
        return point in self._found

    def is_visited(self, point: GridPoint) -> bool:
        """Return True if a trace already probed the background cell ``point``."""
        return point in self._visited

    def _add(self, contour: Contour) -> None:
        assert self._contours is not None
        self._contours.append(contour)
        self._found.update(contour.points)

    def _find_all_contours(self) -> None:
        classify = self._classify
        w = self.window

        for z in range(w.z, w.max_z):
            left = classify(w.x - 1, z)
            for x in range(w.x, w.max_x):
                value = classify(x, z)
                if value == FOREGROUND:
                    point = GridPoint(x, z)
                    if left == BACKGROUND and not self.is_found(point):
                        logger.debug("Outer contour at (%d, %d)", x, z)
                        self._add(self._trace(point, ContourKind.OUTER))
                elif x > w.x and left == FOREGROUND and not self.is_visited(GridPoint(x, z)):
                    # A hole cell no earlier trace has touched
                    logger.debug("Inner contour at (%d, %d)", x - 1, z)
                    self._add(self._trace(GridPoint(x - 1, z), ContourKind.INNER))
                left = value

        logger.debug(
            "Traced %d contours in %dx%d window at (%d, %d)",
            len(self._contours or []), w.width, w.height, w.x, w.z,
        )

    def _trace(self, start: GridPoint, kind: ContourKind) -> Contour:
        return trace_contour(
            self._classify, start, Direction.EAST, kind, self.max_points, self._visited,
        )


def trace_contours(
    sampler: HeightSampler,
    window: Window,
    sea_level: int,
    max_points: int = MAX_CONTOUR_POINTS,
) -> list[Contour]:
    """Trace every contour of the regions at or below ``sea_level`` in ``window``.

    Args:
        sampler: Height sampler, defined one cell beyond the window.
        window: Scan window.
        sea_level: Cells at or below this height are traced.
        max_points: Per-contour point cap.

    Returns:
        Outer and inner contours in raster-scan discovery order.
    """
    return ContourTracer(sampler, window, sea_level, max_points).contours
