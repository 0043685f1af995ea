# src/sidescroll/mapgen/generator.py
# Seeded level generator: zones left to right, exit run, ceiling, wall pass.

import logging
from typing import Optional

from ..config import SETTINGS, GenerationSettings
from ..grid import LevelGrid
from ..rng import JavaRandom
from ..tiles import GROUND, LevelType, TileBehaviorTable, default_behaviors
from .walls import fix_walls
from .zones import ZoneBuilder

logger = logging.getLogger(__name__)


def _carve_ceiling(level: LevelGrid, rng: JavaRandom) -> None:
    ceiling = 0
    run = 0
    for x in range(level.width):
        # The countdown ticks every column, even before the ceiling starts at x=5.
        expired = run <= 0
        run -= 1
        if expired and x > 4:
            ceiling = rng.next_int(4)
            run = rng.next_int(4) + 4
        for y in range(level.height):
            if (x > 4 and y <= ceiling) or x < 1:
                level.set_block(x, y, GROUND)


def generate_level(
    seed: int,
    width: int = SETTINGS.width,
    height: int = SETTINGS.height,
    difficulty: int = 0,
    level_type: LevelType = LevelType.OVERGROUND,
    behaviors: Optional[TileBehaviorTable] = None,
    settings: GenerationSettings = SETTINGS,
) -> LevelGrid:
    """
    Build a complete level. The same arguments always give the same tiles,
    markers and exit; each call owns its own JavaRandom.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"level size must be positive, got {width}x{height}")
    level_type = LevelType(level_type)
    if behaviors is None:
        behaviors = default_behaviors()

    level = LevelGrid(width, height, behaviors)
    rng = JavaRandom(seed)
    builder = ZoneBuilder(level, rng, difficulty, level_type, settings)

    length = builder.build_straight(0, width, True)
    zones = 1
    while length < width - settings.exit_margin:
        length += builder.build_zone(length, width - length)
        zones += 1

    floor = height - 1 - rng.next_int(4)
    level.x_exit = length + settings.exit_offset
    level.y_exit = floor
    for x in range(length, width):
        for y in range(max(floor, 0), height):
            level.set_block(x, y, GROUND)

    if level_type in (LevelType.CASTLE, LevelType.UNDERGROUND):
        _carve_ceiling(level, rng)

    fix_walls(level, level_type)

    logger.info(
        "Generated %s level seed=%d size=%dx%d difficulty=%d: %d zones, exit at (%d, %d), %d markers",
        level_type.name, seed, width, height, difficulty, zones,
        level.x_exit, level.y_exit, len(level.templates),
    )
    return level
