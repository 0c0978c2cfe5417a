"""Height sampler protocol and the simple height maps built on it."""

from collections.abc import Callable

import numpy as np
from numpy.typing import NDArray

from city_layout.geometry import GridPoint, Window

# A height sampler maps an integer (x, z) cell to an integer height.
HeightSampler = Callable[[int, int], int]

FOREGROUND = 1
BACKGROUND = 0


def threshold_classifier(sampler: HeightSampler, threshold: int) -> HeightSampler:
    """Wrap a height sampler into a two-valued classifier.

    Cells at or below ``threshold`` are FOREGROUND, cells above it are
    BACKGROUND.
    """

    def classify(x: int, z: int) -> int:
        if sampler(x, z) > threshold:
            return BACKGROUND
        return FOREGROUND

    return classify


class ConstantHeightMap:
    """Returns the same height everywhere."""

    def __init__(self, height: int) -> None:
        self.height = height

    def __call__(self, x: int, z: int) -> int:
        return self.height

    def __repr__(self) -> str:
        return f"ConstantHeightMap({self.height})"


class ArrayHeightMap:
    """Height map backed by a 2D numpy array indexed ``[z, x]``.

    ``origin`` is the world cell of ``heights[0, 0]``. Cells outside the
    array return ``fill``.
    """

    def __init__(
        self,
        heights: NDArray[np.integer] | list[list[int]],
        origin: tuple[int, int] = (0, 0),
        fill: int = 0,
    ) -> None:
        arr = np.asarray(heights)
        if arr.ndim != 2:
            raise ValueError(f"heights must be 2D, got shape {arr.shape}")
        self.heights = arr
        self.origin_x, self.origin_z = origin
        self.fill = fill

    @classmethod
    def from_sampler(
        cls,
        sampler: HeightSampler,
        window: Window,
        margin: int = 1,
        fill: int = 0,
    ) -> "ArrayHeightMap":
        """Rasterize ``sampler`` over ``window`` plus ``margin`` cells on each side.

        Contour tracing reads one cell beyond the scan window, so the
        default margin covers every lookup of a trace that stays inside it.
        """
        area = window.expand(margin)
        heights = np.empty((area.height, area.width), dtype=np.int64)
        for i in range(area.height):
            for j in range(area.width):
                heights[i, j] = sampler(area.x + j, area.z + i)
        return cls(heights, origin=(area.x, area.z), fill=fill)

    @property
    def shape(self) -> tuple[int, int]:
        return self.heights.shape

    def __call__(self, x: int, z: int) -> int:
        i = z - self.origin_z
        j = x - self.origin_x
        h, w = self.heights.shape
        if 0 <= i < h and 0 <= j < w:
            return int(self.heights[i, j])
        return self.fill


class WindowedHeightMap:
    """Restricts a sampler to ``window``; every cell outside reads ``outside``.

    With ``outside`` above the tracing threshold, each region cut by the
    window edge is closed off along that edge and traced like any other.
    """

    def __init__(self, sampler: HeightSampler, window: Window, outside: int) -> None:
        self.sampler = sampler
        self.window = window
        self.outside = outside

    def __call__(self, x: int, z: int) -> int:
        if GridPoint(x, z) in self.window:
            return self.sampler(x, z)
        return self.outside
