# src/sidescroll/mapgen/walls.py
# Wall pass: turn raw GROUND occupancy into edge/corner/interior ground art.

from typing import List, Optional

from ..grid import LevelGrid
from ..tiles import GROUND, LevelType, wall_offset_for

FILL = 1 + 9 * 16
TOP_EDGE = 1 + 8 * 16
BOTTOM_EDGE = 1 + 10 * 16
LEFT_EDGE = 0 + 9 * 16
RIGHT_EDGE = 2 + 9 * 16
TOP_LEFT = 0 + 8 * 16
TOP_RIGHT = 2 + 8 * 16
BOTTOM_LEFT = 0 + 10 * 16
BOTTOM_RIGHT = 2 + 10 * 16
NOTCH_TOP_LEFT = 3 + 8 * 16
NOTCH_TOP_RIGHT = 3 + 9 * 16
NOTCH_BOTTOM_RIGHT = 3 + 10 * 16
NOTCH_BOTTOM_LEFT = 3 + 11 * 16
FALLBACK = 0 + 1 * 16


def solid_vertices(level: LevelGrid) -> List[List[bool]]:
    """
    (width+1) x (height+1) vertex map, indexed [x][y]. Vertex (x, y) is solid
    when all four cells touching it are GROUND; reads past the edge repeat
    the border cell.
    """
    w, h = level.width, level.height
    verts = [[False] * (h + 1) for _ in range(w + 1)]
    for x in range(w + 1):
        for y in range(h + 1):
            verts[x][y] = all(
                level.get_block_capped(xx, yy) == GROUND
                for xx in (x - 1, x)
                for yy in (y - 1, y)
            )
    return verts


def classify_corners(b00: bool, b10: bool, b01: bool, b11: bool) -> Optional[int]:
    """
    Tile offset for a cell from its corner vertices (b<dx><dy>: top-left,
    top-right, bottom-left, bottom-right), or None to keep the old tile.
    Branch order decides overlapping patterns; keep it as is.
    """
    if b00 == b10 and b01 == b11:
        if b00 == b01:
            return FILL if b00 else None
        return BOTTOM_EDGE if b00 else TOP_EDGE
    if b00 == b01 and b10 == b11:
        return RIGHT_EDGE if b00 else LEFT_EDGE
    if b00 == b11 and b01 == b10:
        return FILL
    if b00 == b10:
        if b00:
            return NOTCH_BOTTOM_RIGHT if b01 else NOTCH_BOTTOM_LEFT
        return TOP_RIGHT if b01 else TOP_LEFT
    if b01 == b11:
        if b01:
            return NOTCH_TOP_RIGHT if b00 else NOTCH_TOP_LEFT
        return BOTTOM_RIGHT if b00 else BOTTOM_LEFT
    return FALLBACK


def fix_walls(level: LevelGrid, level_type: LevelType) -> None:
    verts = solid_vertices(level)
    to = wall_offset_for(level_type)
    for x in range(level.width):
        for y in range(level.height):
            offset = classify_corners(verts[x][y], verts[x + 1][y],
                                      verts[x][y + 1], verts[x + 1][y + 1])
            if offset is not None:
                level.set_block(x, y, offset + to)
