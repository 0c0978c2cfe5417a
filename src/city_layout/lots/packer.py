"""Random lot packing inside a circular city footprint.

Lots are square-ish rectangles dropped at random positions in a ring
around the city center. Each candidate is shrunk to the free space left
between the lots placed so far and discarded if it becomes too small or
touches the blocked area. The number of trials is fixed, so sparse or
heavily blocked cities simply end up with fewer lots.
"""

import logging
import math
import random
from collections.abc import Iterable

from city_layout.geometry import BlockedArea, Point, Rect, Region
from city_layout.lots.types import Building, City, Lot, LotConfig
from city_layout.seeds import derive_seed

logger = logging.getLogger(__name__)


def get_max_space(pos: Point, lots: Iterable[Lot]) -> tuple[float, float]:
    """Free extent along x and z available at ``pos``.

    For every placed lot the gap from ``pos`` to its bounds is measured per
    axis::

          xxxxxxxxxxxxxxxxx
          x               x            (p)
          x       o------ x-------------|
          x               x
          xxxxxxxxxxxxxxxxx
                           <----------->
                                dx

    A lot that spans ``pos`` on one axis only limits the other axis. Among
    lots lying diagonally away, the one leaving the smallest ``dx * dz``
    area limits both axes. Returns ``(0, 0)`` if ``pos`` is inside a lot.
    """
    axis_x = axis_z = math.inf
    diag_x = diag_z = math.inf

    for lot in lots:
        bounds = lot.shape
        center = bounds.center
        dx = abs(pos.x - center.x) - bounds.width * 0.5
        dz = abs(pos.z - center.z) - bounds.depth * 0.5

        if dx <= 0 and dz <= 0:
            return 0.0, 0.0

        if dx > 0 and dz > 0:
            if dx * dz < diag_x * diag_z:
                diag_x, diag_z = dx, dz
        elif dx > 0:
            axis_x = min(axis_x, dx)
        else:
            axis_z = min(axis_z, dz)

    return min(axis_x, diag_x), min(axis_z, diag_z)


class LotPacker:
    """Packs non-overlapping rectangular lots into a city."""

    def __init__(
        self,
        seed: str,
        blocked_area: BlockedArea | None = None,
        config: LotConfig | None = None,
    ) -> None:
        self.seed = seed
        self.blocked_area = blocked_area if blocked_area is not None else Region.empty()
        self.config = config or LotConfig()

    def rng_for(self, city: City) -> random.Random:
        """Deterministic generator for ``city`` under this packer's seed."""
        return random.Random(derive_seed(self.seed, city))

    def pack(self, city: City, rng: random.Random | None = None) -> set[Lot]:
        """Generate the lots of ``city`` within its radius.

        Args:
            city: The city to fill.
            rng: Random source; derived from the seed and the city if None.

        Returns:
            Set of mutually disjoint lots, each carrying one building.
        """
        if city.diameter <= 0:
            raise ValueError(f"city diameter must be positive, got {city.diameter}")

        cfg = self.config
        if rng is None:
            rng = self.rng_for(city)
        min_radius = cfg.min_radius
        max_radius = cfg.max_radius(city)
        # Placement order is kept so the free-space search is reproducible.
        placed: list[Lot] = []

        if max_radius < min_radius:
            logger.debug(
                "City %s too small for lots (diameter %.1f)", city.name, city.diameter,
            )
            return set()

        for _ in range(cfg.max_trials):
            lot = self._try_place(city, rng, min_radius, max_radius, placed)
            if lot is not None:
                placed.append(lot)

        logger.debug(
            "Placed %d lots in %d trials for city %s", len(placed), cfg.max_trials, city.name,
        )
        return set(placed)

    def _try_place(
        self,
        city: City,
        rng: random.Random,
        min_radius: float,
        max_radius: float,
        placed: list[Lot],
    ) -> Lot | None:
        """Run one placement trial; returns the new lot or None."""
        cfg = self.config
        angle = rng.random() * 2.0 * math.pi
        radius = rng.uniform(min_radius, max_radius)
        desired = rng.uniform(cfg.min_size, cfg.max_size)

        pos = Point(
            city.center.x + radius * math.cos(angle),
            city.center.z + radius * math.sin(angle),
        )
        space_x, space_z = get_max_space(pos, placed)

        size_x = int(min(desired, space_x))
        size_z = int(min(desired, space_z))
        if size_x < cfg.min_size or size_z < cfg.min_size:
            return None

        shape = Rect(
            math.floor(pos.x - size_x * 0.5),
            math.floor(pos.z - size_z * 0.5),
            size_x,
            size_z,
        )
        if self.blocked_area.intersects(shape):
            return None

        lot = Lot(shape)
        lot.add_building(Building(shape, cfg.wall_height))
        return lot


def pack_lots(
    seed: str,
    city: City,
    blocked_area: BlockedArea | None = None,
    config: LotConfig | None = None,
    rng: random.Random | None = None,
) -> set[Lot]:
    """Generate the lots of a city.

    Args:
        seed: Seed string; combined with the city identity.
        city: The city to fill.
        blocked_area: Area lots must not touch. Nothing is blocked if None.
        config: Packing parameters. Uses defaults if None.
        rng: Random source overriding the seeded one.

    Returns:
        Set of mutually disjoint lots.
    """
    return LotPacker(seed, blocked_area, config).pack(city, rng)
