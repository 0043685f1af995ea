# src/sidescroll/tiles.py
# Tile ids emitted by the generator, per-tile behavior flags, and the
# 256-byte behavior table that gameplay and rendering read them from.

from __future__ import annotations

import logging
import os
from functools import lru_cache
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Union

logger = logging.getLogger(__name__)

TABLE_SIZE = 256

EMPTY = 0
USED_BLOCK = 4          # what a bumped block turns into at runtime
STAIR_BLOCK = 9
TUBE_TOP_LEFT, TUBE_TOP_RIGHT = 10, 11
TUBE_LEFT, TUBE_RIGHT = 26, 27
CANNON_TOP, CANNON_NECK, CANNON_BASE = 14, 30, 46

BRICK = 0 + 1 * 16
HIDDEN_COIN = 1 + 1 * 16
HIDDEN_POWERUP = 2 + 1 * 16
COIN_BLOCK = 4 + 1 + 1 * 16
POWERUP_BLOCK = 4 + 2 + 1 * 16
COIN = 2 + 2 * 16

GROUND = 1 + 9 * 16     # raw solid ground before the wall pass

# Hill sheet: columns 4..6 (left/middle/right), row 8 = top, row 9 = body,
# row 11 = a lower tier's top cap overlapped by a higher tier's body.
HILL_TOP_LEFT, HILL_TOP, HILL_TOP_RIGHT = 4 + 8 * 16, 5 + 8 * 16, 6 + 8 * 16
HILL_LEFT, HILL_FILL, HILL_RIGHT = 4 + 9 * 16, 5 + 9 * 16, 6 + 9 * 16
HILL_CAP_LEFT, HILL_CAP_RIGHT = 4 + 11 * 16, 6 + 11 * 16


class LevelType(IntEnum):
    OVERGROUND = 0
    UNDERGROUND = 1
    CASTLE = 2


def wall_offset_for(level_type: LevelType) -> int:
    # Castle and underground ground art sits 8 and 12 columns right of overground.
    if level_type == LevelType.CASTLE:
        return 4 * 2
    if level_type == LevelType.UNDERGROUND:
        return 4 * 3
    return 0


class Behavior(IntFlag):
    NONE = 0
    BLOCK_UPPER = 1 << 0
    BLOCK_ALL = 1 << 1
    BLOCK_LOWER = 1 << 2
    SPECIAL = 1 << 3
    BUMPABLE = 1 << 4
    BREAKABLE = 1 << 5
    PICKUPABLE = 1 << 6
    ANIMATED = 1 << 7


class TileBehaviorError(RuntimeError):
    """The behavior resource is missing, unreadable or the wrong size."""


PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class TileBehaviorTable:
    flags: bytes

    def __post_init__(self):
        if len(self.flags) != TABLE_SIZE:
            raise ValueError(f"behavior table needs {TABLE_SIZE} entries, got {len(self.flags)}")
        object.__setattr__(self, "flags", bytes(self.flags))

    def __getitem__(self, tile: int) -> Behavior:
        return Behavior(self.flags[tile & 0xFF])

    def has(self, tile: int, flag: Behavior) -> bool:
        return (self.flags[tile & 0xFF] & flag) != 0

    @classmethod
    def load(cls, path: PathLike) -> "TileBehaviorTable":
        """
        Read the 256-byte resource (one flag byte per tile id).
        Anything else is fatal for the caller: the file is static, so there
        is nothing to retry.
        """
        try:
            with open(path, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise TileBehaviorError(f"cannot read tile behaviors from {path}: {e}") from e
        if len(raw) != TABLE_SIZE:
            raise TileBehaviorError(f"{path}: expected {TABLE_SIZE} bytes, got {len(raw)}")
        logger.debug("Loaded tile behaviors from %s", path)
        return cls(raw)

    def save(self, path: PathLike) -> None:
        with open(path, "wb") as f:
            f.write(self.flags)


@lru_cache(maxsize=None)
def default_behaviors() -> TileBehaviorTable:
    """Flags for every tile id this generator can emit. Built once and shared."""
    b = bytearray(TABLE_SIZE)

    # Ground sheet (4x4 block per level type) after the wall pass.
    for to in (0, 4 * 2, 4 * 3):
        for row in range(8, 12):
            for col in range(4):
                b[col + to + row * 16] = Behavior.BLOCK_ALL

    # Hill tops are one-way platforms; bodies are scenery.
    for t in (HILL_TOP_LEFT, HILL_TOP, HILL_TOP_RIGHT, HILL_CAP_LEFT, HILL_CAP_RIGHT):
        b[t] = Behavior.BLOCK_UPPER
    for t in (HILL_LEFT, HILL_FILL, HILL_RIGHT):
        b[t] = Behavior.NONE

    for t in (USED_BLOCK, STAIR_BLOCK, TUBE_TOP_LEFT, TUBE_TOP_RIGHT, TUBE_LEFT, TUBE_RIGHT,
              CANNON_NECK, CANNON_BASE):
        b[t] = Behavior.BLOCK_ALL
    b[CANNON_TOP] = Behavior.BLOCK_ALL | Behavior.ANIMATED

    # Bricks, including the wall-pass fallback tile of each sheet.
    for t in (BRICK, BRICK + 4 * 2, BRICK + 4 * 3):
        b[t] = Behavior.BLOCK_ALL | Behavior.BUMPABLE | Behavior.BREAKABLE

    b[HIDDEN_COIN] = Behavior.BLOCK_LOWER | Behavior.BUMPABLE
    b[HIDDEN_POWERUP] = Behavior.BLOCK_LOWER | Behavior.BUMPABLE | Behavior.SPECIAL
    b[COIN_BLOCK] = Behavior.BLOCK_ALL | Behavior.BUMPABLE | Behavior.ANIMATED
    b[POWERUP_BLOCK] = Behavior.BLOCK_ALL | Behavior.BUMPABLE | Behavior.SPECIAL | Behavior.ANIMATED
    b[COIN] = Behavior.PICKUPABLE | Behavior.ANIMATED
    return TileBehaviorTable(bytes(b))
