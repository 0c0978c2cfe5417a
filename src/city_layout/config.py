"""Layout configuration."""

import logging
import sys

from pydantic_settings import BaseSettings

from city_layout.contour.types import MAX_CONTOUR_POINTS
from city_layout.lots.types import (
    CENTER_CLEARANCE,
    DEFAULT_WALL_HEIGHT,
    MAX_LOT_SIZE,
    MAX_LOT_TRIALS,
    MIN_LOT_SIZE,
)


class Settings(BaseSettings):
    """Layout settings loaded from environment variables."""

    # Contour tracing
    max_contour_points: int = MAX_CONTOUR_POINTS

    # Lot packing
    max_lot_trials: int = MAX_LOT_TRIALS
    min_lot_size: float = MIN_LOT_SIZE
    max_lot_size: float = MAX_LOT_SIZE
    center_clearance: float = CENTER_CLEARANCE
    wall_height: int = DEFAULT_WALL_HEIGHT

    # Logging
    log_level: str = "info"

    class Config:
        env_prefix = "CITY_LAYOUT_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for applications embedding the layout core."""
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
