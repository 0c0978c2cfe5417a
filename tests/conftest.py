"""Pytest configuration and fixtures for layout tests."""

import numpy as np
import pytest

from city_layout.heightmap import ArrayHeightMap

# Heights used by picture-built maps: "#" cells sit below sea level.
SEA_LEVEL = 5
WATER = 0
LAND = 10


@pytest.fixture
def picture_map():
    """Build a height map from rows of text.

    ``#`` is a cell at or below ``SEA_LEVEL`` (traced), anything else is
    land. Cells outside the picture are land.
    """

    def build(rows: list[str], origin: tuple[int, int] = (0, 0)) -> ArrayHeightMap:
        heights = np.array(
            [[WATER if ch == "#" else LAND for ch in row] for row in rows],
            dtype=np.int64,
        )
        return ArrayHeightMap(heights, origin=origin, fill=LAND)

    return build
