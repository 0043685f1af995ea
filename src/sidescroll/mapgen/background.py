# src/sidescroll/mapgen/background.py
# Cosmetic parallax layers. Same grid shape as a level, different tile sheet
# (8 columns wide), never collided against. Cells not listed below stay 0.

from ..grid import LevelGrid
from ..rng import JavaRandom
from ..tiles import LevelType

BG_WIDTH = 2048
BG_HEIGHT = 15

SKY_ROWS = 2    # underground/castle: only the top rows get a backdrop
SKY_TILE = 4


def _overground(level: LevelGrid, rng: JavaRandom, distant: bool) -> None:
    rng_range = 4 if distant else 6
    offs = 2 if distant else 1
    sheet = 2 if distant else 0

    oh = rng.next_int(rng_range) + offs
    h = rng.next_int(rng_range) + offs
    for x in range(level.width):
        oh = h
        while oh == h:
            h = rng.next_int(rng_range) + offs
        h0, h1 = min(oh, h), max(oh, h)
        rising = 0 if h0 == h else 1
        for y in range(level.height):
            if y < h0:
                if distant:
                    s = y if y < 2 else 2
                    level.set_block(x, y, 4 + s * 8)
                else:
                    level.set_block(x, y, 5)
            elif y == h0:
                level.set_block(x, y, rising + sheet)
            elif y == h1:
                level.set_block(x, y, rising + sheet + 16)


def _flat_sky(level: LevelGrid) -> None:
    for x in range(level.width):
        for y in range(min(SKY_ROWS, level.height)):
            level.set_block(x, y, SKY_TILE)


def generate_background(
    width: int = BG_WIDTH,
    height: int = BG_HEIGHT,
    distant: bool = False,
    level_type: LevelType = LevelType.OVERGROUND,
    seed: int = 0,
) -> LevelGrid:
    """
    Overground gets a ridge line drawn from its own JavaRandom(seed);
    underground and castle layers are a fixed strip and ignore seed and distant.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"background size must be positive, got {width}x{height}")
    level_type = LevelType(level_type)
    level = LevelGrid(width, height)
    if level_type == LevelType.OVERGROUND:
        _overground(level, JavaRandom(seed), distant)
    else:
        _flat_sky(level)
    return level
