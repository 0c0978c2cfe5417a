"""Boundary tracing of land/sea regions in a height map."""

from city_layout.contour.tracer import ContourTracer, find_next_point, trace_contour, trace_contours
from city_layout.contour.types import MAX_CONTOUR_POINTS, Contour, ContourKind, Direction

__all__ = [
    "Contour",
    "ContourKind",
    "ContourTracer",
    "Direction",
    "MAX_CONTOUR_POINTS",
    "find_next_point",
    "trace_contour",
    "trace_contours",
]
