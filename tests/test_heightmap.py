"""Tests for height maps and the threshold classifier."""

import numpy as np
import pytest

from city_layout.geometry import Window
from city_layout.heightmap import (
    BACKGROUND,
    FOREGROUND,
    ArrayHeightMap,
    ConstantHeightMap,
    NoiseHeightMap,
    WindowedHeightMap,
    threshold_classifier,
)


class TestThresholdClassifier:
    """Tests for the classifier adapter."""

    def test_at_or_below_threshold_is_foreground(self):
        """Heights up to the threshold are foreground, higher ones background."""
        heights = {(0, 0): 4, (1, 0): 5, (2, 0): 6}
        classify = threshold_classifier(lambda x, z: heights[(x, z)], 5)

        assert classify(0, 0) == FOREGROUND
        assert classify(1, 0) == FOREGROUND
        assert classify(2, 0) == BACKGROUND

    def test_wraps_any_sampler(self):
        """Classifiers compose with any height sampler."""
        assert threshold_classifier(ConstantHeightMap(3), 3)(100, -7) == FOREGROUND
        assert threshold_classifier(ConstantHeightMap(4), 3)(100, -7) == BACKGROUND


class TestArrayHeightMap:
    """Tests for the array-backed height map."""

    def test_indexing_with_origin(self):
        """Arrays are indexed [z, x] relative to the origin."""
        hm = ArrayHeightMap(np.array([[1, 2, 3], [4, 5, 6]]), origin=(10, 20))
        assert hm(10, 20) == 1
        assert hm(12, 20) == 3
        assert hm(11, 21) == 5

    def test_fill_outside(self):
        """Cells outside the array return the fill height."""
        hm = ArrayHeightMap([[1, 2], [3, 4]], fill=99)
        assert hm(-1, 0) == 99
        assert hm(2, 0) == 99
        assert hm(0, 2) == 99

    def test_rejects_non_2d(self):
        """Height arrays must be two-dimensional."""
        with pytest.raises(ValueError, match="2D"):
            ArrayHeightMap(np.zeros(5))

    def test_from_sampler_adds_margin(self):
        """Rasterizing covers the window plus the margin on every side."""
        window = Window(x=5, z=5, width=4, height=3)
        hm = ArrayHeightMap.from_sampler(lambda x, z: x * 100 + z, window, margin=1)

        assert hm.shape == (5, 6)
        assert hm(4, 4) == 404
        assert hm(9, 8) == 908
        assert hm(10, 8) == 0


class TestNoise:
    """Tests for noise-based height maps."""

    def test_fbm_range(self):
        """Fractal noise stays in [-1, 1]."""
        hm = NoiseHeightMap("world", scale=0.1)
        for x in range(20):
            for z in range(20):
                assert -1.0 <= hm.fbm(x, z) <= 1.0

    def test_height_from_fbm(self):
        """Heights are the base height plus the scaled fractal noise."""
        hm = NoiseHeightMap("world", octaves=1, scale=0.05)
        again = NoiseHeightMap("world", octaves=1, scale=0.05)
        assert hm.fbm(12, 7) == again.fbm(12, 7)
        assert hm(12, 7) == 32 + round(24.0 * hm.fbm(12, 7))

    def test_rejects_zero_octaves(self):
        """At least one octave is needed."""
        with pytest.raises(ValueError, match="octaves"):
            NoiseHeightMap("world", octaves=0)

    def test_noise_height_map_deterministic(self):
        """Same seed string gives the same terrain."""
        a = NoiseHeightMap("world")
        b = NoiseHeightMap("world")
        assert [a(x, 3) for x in range(50)] == [b(x, 3) for x in range(50)]

    def test_noise_height_map_seed_matters(self):
        """Different seed strings give different terrain."""
        a = NoiseHeightMap("world")
        b = NoiseHeightMap("other")
        assert [a(x, 3) for x in range(0, 500, 7)] != [b(x, 3) for x in range(0, 500, 7)]

    def test_noise_height_range(self):
        """Heights stay within base height plus or minus the amplitude."""
        hm = NoiseHeightMap("world", base_height=32, amplitude=24.0)
        for x in range(0, 200, 13):
            for z in range(0, 200, 17):
                assert 8 <= hm(x, z) <= 56
                assert isinstance(hm(x, z), int)


class TestWindowedHeightMap:
    """Tests for clipping a sampler to a window."""

    def test_inside_window_passes_through(self):
        """Cells in the window read the wrapped sampler."""
        hm = WindowedHeightMap(lambda x, z: x + 10 * z, Window(x=2, z=3, width=4, height=2), 99)
        assert hm(2, 3) == 32
        assert hm(5, 4) == 45

    def test_outside_window_reads_fill(self):
        """Cells beyond any window edge read the outside height."""
        hm = WindowedHeightMap(ConstantHeightMap(0), Window(x=2, z=3, width=4, height=2), 99)
        assert hm(1, 3) == 99
        assert hm(6, 3) == 99
        assert hm(2, 2) == 99
        assert hm(2, 5) == 99
