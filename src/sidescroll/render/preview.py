# src/sidescroll/render/preview.py
# Flat-colour PNG previews of a level using Pillow. Meant for eyeballing
# generator output and golden packs, not for the game itself.

from __future__ import annotations

import os
from typing import Tuple

from PIL import Image, ImageDraw

from ..grid import LevelGrid
from ..tiles import (
    Behavior, COIN, CANNON_TOP, CANNON_NECK, CANNON_BASE,
    TUBE_TOP_LEFT, TUBE_TOP_RIGHT, TUBE_LEFT, TUBE_RIGHT,
)

RGBA = Tuple[int, int, int, int]

SKY = (92, 148, 252, 255)
MARKER = (220, 30, 30, 255)
EXIT = (255, 220, 0, 255)


def tile_color(level: LevelGrid, tile: int) -> RGBA:
    if tile == 0:
        return SKY
    if tile == COIN:
        return (255, 200, 40, 255)
    if tile in (TUBE_TOP_LEFT, TUBE_TOP_RIGHT, TUBE_LEFT, TUBE_RIGHT):
        return (0, 170, 0, 255)
    if tile in (CANNON_TOP, CANNON_NECK, CANNON_BASE):
        return (40, 40, 40, 255)
    flags = level.behaviors[tile]
    if flags & Behavior.SPECIAL or flags & Behavior.ANIMATED:
        return (230, 150, 30, 255)      # "?" blocks
    if flags & Behavior.BREAKABLE:
        return (170, 80, 30, 255)       # bricks
    if flags & Behavior.BLOCK_LOWER:
        return (150, 190, 250, 255)     # hidden blocks, barely visible
    if flags & Behavior.BLOCK_ALL:
        return (120, 70, 40, 255)       # ground, stairs
    if flags & Behavior.BLOCK_UPPER:
        return (80, 200, 120, 255)      # hill tops
    return (150, 220, 150, 255)         # scenery


def render_level(level: LevelGrid, tile_size: int = 4, markers: bool = True) -> Image.Image:
    canvas = Image.new("RGBA", (level.width * tile_size, level.height * tile_size), SKY)
    draw = ImageDraw.Draw(canvas)
    for y, row in enumerate(level.as_rows()):
        for x, tid in enumerate(row):
            if tid == 0:
                continue
            x0, y0 = x * tile_size, y * tile_size
            draw.rectangle((x0, y0, x0 + tile_size - 1, y0 + tile_size - 1), fill=tile_color(level, tid))
    if markers:
        inset = tile_size // 4
        for x, y, _ in level.sprite_templates():
            x0, y0 = x * tile_size, y * tile_size
            draw.ellipse((x0 + inset, y0 + inset, x0 + tile_size - 1 - inset, y0 + tile_size - 1 - inset),
                         fill=MARKER)
    # Exit pole one tile wide, eight tall, ending on the exit row.
    if 0 <= level.x_exit < level.width and 0 < level.y_exit <= level.height:
        x0 = level.x_exit * tile_size
        top = max(0, level.y_exit - 8) * tile_size
        draw.rectangle((x0, top, x0 + tile_size - 1, level.y_exit * tile_size - 1), fill=EXIT)
    return canvas


def save_preview(level: LevelGrid, out_png: str, tile_size: int = 4) -> None:
    out_dir = os.path.dirname(out_png)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    render_level(level, tile_size).save(out_png)
