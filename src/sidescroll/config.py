import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationSettings:
    # Level size the game asks for.
    width: int = 320
    height: int = 15
    # Stop adding zones once within this many columns of the width.
    exit_margin: int = 64
    exit_offset: int = 8
    # Upper bound on hill tiers; heights used in practice stop far earlier.
    max_hill_tiers: int = 64
    # Viewport and tile size used by the spawn sweep.
    view_width: int = 320
    view_height: int = 240
    tile_px: int = 16


# Global settings (can be swapped by launcher)
SETTINGS = GenerationSettings()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
