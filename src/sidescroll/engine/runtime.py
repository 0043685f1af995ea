# src/sidescroll/engine/runtime.py
# Per-tick queries a renderer or gameplay driver makes against a generated
# level: animated tile frames, cannon cadence and the spawn sweep over the
# visible window. Nothing here draws or simulates.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config import SETTINGS
from ..grid import LevelGrid
from ..sprites import Spawn
from ..tiles import Behavior, TileBehaviorTable

CANNON_PERIOD = 100


def animation_column(tile: int, behaviors: TileBehaviorTable, tick: int, x: int, y: int) -> int:
    """Sheet column to draw for tile at (x, y) on this tick."""
    tile &= 0xFF
    col, row = tile % 16, tile // 16
    if not behaviors.has(tile, Behavior.ANIMATED):
        return col
    frame = (tick // 3) % 4
    if col // 4 == 0 and row == 1:
        # "?" blocks shimmer briefly, staggered along the diagonal.
        frame = (tick // 2 + (x + y) // 8) % 20
        if frame > 3:
            frame = 0
    if col // 4 == 3 and row == 0:
        frame = 2
    return col // 4 * 4 + frame


def is_cannon(tile: int, behaviors: TileBehaviorTable) -> bool:
    tile &= 0xFF
    return behaviors.has(tile, Behavior.ANIMATED) and (tile % 16) // 4 == 3 and tile // 16 == 0


def cannon_fires(tile: int, behaviors: TileBehaviorTable, x: int, tick: int) -> bool:
    # Columns are staggered two ticks apart so neighbouring cannons don't sync.
    return is_cannon(tile, behaviors) and (tick - x * 2) % CANNON_PERIOD == 0


@dataclass(frozen=True)
class CannonShot:
    x: int
    y: int
    facing: int


@dataclass
class SweepResult:
    spawns: List[Tuple[int, int, Spawn]] = field(default_factory=list)
    shots: List[CannonShot] = field(default_factory=list)


def visible_spawns(
    level: LevelGrid,
    x_cam: int,
    y_cam: int,
    tick: int,
    player_x: Optional[float] = None,
    view: Tuple[int, int] = (SETTINGS.view_width, SETTINGS.view_height),
) -> SweepResult:
    """
    Walk the visible tiles plus a one-tile rim. A marker spawns when it was
    not seen on the previous tick, is alive and has no live sprite; cannons
    fire on their cadence toward the player.
    """
    px = SETTINGS.tile_px
    vw, vh = view
    out = SweepResult()
    for x in range(x_cam // px - 1, (x_cam + vw) // px + 2):
        for y in range(y_cam // px - 1, (y_cam + vh) // px + 2):
            if player_x is None:
                facing = 1
            else:
                facing = -1 if x * px + 8 > player_x else 1

            st = level.get_sprite_template(x, y)
            if st is not None:
                if st.last_visible_tick != tick - 1 and not st.is_dead and st.sprite is None:
                    req = st.spawn(x, y, facing)
                    if req is not None:
                        out.spawns.append((x, y, req))
                st.last_visible_tick = tick

            if cannon_fires(level.get_block(x, y), level.behaviors, x, tick):
                out.shots.append(CannonShot(x * px + 8 + facing * 8, y * px + 15, facing))
    return out
