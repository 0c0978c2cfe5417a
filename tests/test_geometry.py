"""Tests for shared geometry types."""

import pytest
from shapely.geometry import box

from city_layout.contour import Contour, trace_contours
from city_layout.geometry import GridPoint, Point, Rect, Region, Window

from conftest import SEA_LEVEL


class TestRect:
    """Tests for axis-aligned rectangles."""

    def test_bounds(self):
        """Max corners and center derive from origin and size."""
        rect = Rect(2, 3, 6, 8)
        assert (rect.max_x, rect.max_z) == (8, 11)
        assert rect.center == Point(5.0, 7.0)
        assert rect.area == 48

    def test_overlap(self):
        """Overlapping interiors intersect."""
        assert Rect(0, 0, 10, 10).intersects(Rect(9, 9, 5, 5))

    def test_shared_edge_is_not_overlap(self):
        """Rectangles sharing only an edge do not intersect."""
        assert not Rect(0, 0, 10, 10).intersects(Rect(10, 0, 5, 5))
        assert not Rect(0, 0, 10, 10).intersects(Rect(0, 10, 5, 5))

    def test_empty_never_intersects(self):
        """Zero-sized rectangles intersect nothing."""
        assert not Rect(0, 0, 0, 10).intersects(Rect(-5, -5, 20, 20))

    def test_contains_half_open(self):
        """Min edges are inside, max edges are outside."""
        rect = Rect(0, 0, 4, 4)
        assert rect.contains(Point(0, 0))
        assert not rect.contains(Point(4, 2))

    def test_geojson(self):
        """Rectangles export as closed polygons."""
        ring = Rect(0, 0, 2, 3).to_geojson()["coordinates"][0]
        assert len(ring) == 5
        assert ring[0] == ring[-1]


class TestWindow:
    """Tests for scan windows."""

    def test_around(self):
        """Windows around a point cover the whole square."""
        window = Window.around(Point(10.5, -3.0), 4)
        assert (window.x, window.z) == (6, -7)
        assert (window.max_x, window.max_z) == (15, 1)

    def test_rejects_negative_size(self):
        """Sizes must be positive."""
        with pytest.raises(ValueError):
            Window(x=0, z=0, width=3, height=-1)

    def test_cells_row_major(self):
        """Cells come top to bottom, left to right."""
        cells = list(Window(x=1, z=1, width=2, height=2).cells())
        assert cells == [GridPoint(1, 1), GridPoint(2, 1), GridPoint(1, 2), GridPoint(2, 2)]

    def test_contains(self):
        """Membership uses half-open bounds."""
        window = Window(x=0, z=0, width=3, height=3)
        assert GridPoint(2, 2) in window
        assert GridPoint(3, 0) not in window


class TestRegion:
    """Tests for blocked-area regions."""

    def test_empty_blocks_nothing(self):
        """The empty region neither contains nor intersects anything."""
        region = Region.empty()
        assert region.is_empty
        assert not region.contains(Point(0, 0))
        assert not region.intersects(Rect(-100, -100, 200, 200))

    def test_touching_counts_as_intersecting(self):
        """Lots may not even touch the blocked area."""
        region = Region(box(0, 0, 10, 10))
        assert region.intersects(Rect(10, 0, 5, 5))
        assert not region.intersects(Rect(11, 0, 5, 5))

    def test_from_rects_and_union(self):
        """Regions combine rectangles and other regions."""
        region = Region.from_rects([Rect(0, 0, 2, 2)]).union(Region.from_rects([Rect(10, 10, 2, 2)]))
        assert region.contains(Point(1, 1))
        assert region.contains(Point(11, 11))
        assert not region.contains(Point(5, 5))

    def test_from_contours_covers_blob(self, picture_map):
        """The region of a traced blob covers all of its cells."""
        hm = picture_map([".....", ".###.", ".###.", ".###.", "....."])
        region = Region.from_contours(trace_contours(hm, Window(x=0, z=0, width=5, height=5), SEA_LEVEL))

        for x in range(1, 4):
            for z in range(1, 4):
                assert region.contains(Point(x, z))
        assert not region.contains(Point(0, 0))
        assert not region.intersects(Rect(4, 0, 3, 3))

    def test_from_contours_cuts_holes(self, picture_map):
        """Inner contours remove the hole they enclose."""
        hm = picture_map([
            ".......",
            ".#####.",
            ".#####.",
            ".##.##.",
            ".#####.",
            ".#####.",
            ".......",
        ])
        region = Region.from_contours(trace_contours(hm, Window(x=0, z=0, width=7, height=7), SEA_LEVEL))

        assert region.contains(Point(2, 2))
        assert not region.contains(Point(3, 3))
        assert not region.contains(Point(0, 0))

    def test_from_contours_single_cell(self, picture_map):
        """A one-point contour blocks its unit cell."""
        hm = picture_map(["...", ".#.", "..."])
        region = Region.from_contours(trace_contours(hm, Window(x=0, z=0, width=3, height=3), SEA_LEVEL))
        assert region.geometry.area == pytest.approx(1.0)

    def test_from_contours_follows_winding(self, picture_map):
        """A region traced by the inner rule is still added, not cut out."""
        hm = picture_map([".....", "###..", "###..", "###..", "....."])
        region = Region.from_contours(trace_contours(hm, Window(x=1, z=0, width=4, height=5), SEA_LEVEL))

        assert region.contains(Point(1, 2))
        assert region.contains(Point(0, 2))
        assert not region.contains(Point(4, 2))

    def test_from_contours_thin_ring_hole(self, picture_map):
        """The hole of a ring one cell wide is cut out of the ring's area."""
        hm = picture_map([".#####.", ".#...#.", ".#...#.", ".#####."])
        region = Region.from_contours(trace_contours(hm, Window(x=0, z=0, width=7, height=4), SEA_LEVEL))

        assert region.contains(Point(1, 1))
        assert region.contains(Point(5, 2))
        assert not region.contains(Point(3, 1.5))

    def test_from_contours_truncated_adds_cells_only(self):
        """A truncated chain blocks the cells it passed and nothing it might enclose."""
        contour = Contour(
            [GridPoint(0, 0), GridPoint(1, 0), GridPoint(2, 0), GridPoint(2, 1), GridPoint(2, 2)],
            truncated=True,
        )
        region = Region.from_contours([contour])

        assert region.geometry.area == pytest.approx(5.0)
        assert region.contains(Point(2, 1))
        assert not region.contains(Point(1, 1))

    def test_from_cells(self):
        """Cells become unit squares centered on their coordinates."""
        region = Region.from_cells(
            [GridPoint(0, 0), GridPoint(1, 0), GridPoint(3, 0), GridPoint(0, 1), GridPoint(1, 0)]
        )
        assert region.geometry.area == pytest.approx(4.0)
        assert region.contains(Point(1.2, 0))
        assert not region.contains(Point(2, 0))
        assert Region.from_cells([]).is_empty
