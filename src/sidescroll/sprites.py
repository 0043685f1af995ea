# src/sidescroll/sprites.py
# Spawn markers recorded in the level grid, and the factory that turns a
# marker into the live-instance shape the gameplay driver builds.

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional, Union

from .config import SETTINGS


class EnemyKind(IntEnum):
    RED_KOOPA = 0
    GREEN_KOOPA = 1
    GOOMBA = 2
    SPIKY = 3
    FLOWER = 4  # lives in a pipe mouth


@dataclass(frozen=True)
class EnemySpawn:
    x: int
    y: int
    facing: int
    kind: EnemyKind
    winged: bool


@dataclass(frozen=True)
class FlowerSpawn:
    x: int
    y: int


Spawn = Union[EnemySpawn, FlowerSpawn]


def spawn_for(kind: EnemyKind, winged: bool, x: int, y: int, facing: int) -> Spawn:
    """Pixel-space spawn request for a marker at tile (x, y)."""
    px = SETTINGS.tile_px
    if kind == EnemyKind.FLOWER:
        return FlowerSpawn(x=x * px + 15, y=y * px + 24)
    return EnemySpawn(x=x * px + 8, y=y * px + 15, facing=facing,
                      kind=EnemyKind(kind), winged=winged)


@dataclass(eq=False)
class SpriteTemplate:
    kind: EnemyKind
    winged: bool = False
    is_dead: bool = False
    last_visible_tick: int = -1
    # Whatever the gameplay driver builds from the spawn request.
    sprite: Optional[Any] = None

    def spawn(self, x: int, y: int, facing: int) -> Optional[Spawn]:
        if self.is_dead:
            return None
        req = spawn_for(self.kind, self.winged, x, y, facing)
        self.sprite = req
        return req

    def attach(self, sprite: Any) -> None:
        """Replace the spawn request with the live object built from it."""
        self.sprite = sprite

    def detach(self) -> None:
        self.sprite = None
