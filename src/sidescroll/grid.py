from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .sprites import SpriteTemplate
from .tiles import Behavior, TileBehaviorTable, default_behaviors

XY = Tuple[int, int]


@dataclass
class LevelGrid:
    """
    Tile ids, a per-tile countdown overlay and spawn markers for one level.
    Buffers are row-major (y * width + x) and never resized.
    """
    width: int
    height: int
    behaviors: TileBehaviorTable = field(default_factory=default_behaviors, repr=False)
    tiles: Optional[bytearray] = field(default=None, repr=False)
    data: Optional[bytearray] = field(default=None, repr=False)
    templates: Dict[XY, SpriteTemplate] = field(default_factory=dict, repr=False)
    x_exit: int = 10
    y_exit: int = 10

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid size must be positive, got {self.width}x{self.height}")
        size = self.width * self.height
        if self.tiles is None:
            self.tiles = bytearray(size)
        if self.data is None:
            self.data = bytearray(size)
        if len(self.tiles) != size or len(self.data) != size:
            raise ValueError("tile/data buffers do not match the grid size")

    def idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # ---------- tiles ----------

    def get_block(self, x: int, y: int) -> int:
        # Above the top is open sky; below the bottom repeats the last row.
        if y < 0:
            return 0
        x = min(max(x, 0), self.width - 1)
        y = min(y, self.height - 1)
        return self.tiles[self.idx(x, y)]

    def get_block_capped(self, x: int, y: int) -> int:
        x = min(max(x, 0), self.width - 1)
        y = min(max(y, 0), self.height - 1)
        return self.tiles[self.idx(x, y)]

    def set_block(self, x: int, y: int, b: int) -> None:
        if not self.in_bounds(x, y):
            return
        self.tiles[self.idx(x, y)] = b & 0xFF

    def is_blocking(self, x: int, y: int, xa: float, ya: float) -> bool:
        flags = self.behaviors[self.get_block(x, y)]
        if flags & Behavior.BLOCK_ALL:
            return True
        if ya > 0 and flags & Behavior.BLOCK_UPPER:
            return True
        return ya < 0 and bool(flags & Behavior.BLOCK_LOWER)

    # ---------- countdown overlay ----------

    def get_block_data(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            return 0
        return self.data[self.idx(x, y)]

    def set_block_data(self, x: int, y: int, b: int) -> None:
        if not self.in_bounds(x, y):
            return
        self.data[self.idx(x, y)] = b & 0xFF

    def tick(self) -> None:
        d = self.data
        for i, v in enumerate(d):
            if v > 0:
                d[i] = v - 1

    # ---------- spawn markers ----------

    def get_sprite_template(self, x: int, y: int) -> Optional[SpriteTemplate]:
        return self.templates.get((x, y))

    def set_sprite_template(self, x: int, y: int, st: Optional[SpriteTemplate]) -> None:
        if not self.in_bounds(x, y):
            return
        if st is None:
            self.templates.pop((x, y), None)
        else:
            self.templates[(x, y)] = st

    def sprite_templates(self) -> Iterator[Tuple[int, int, SpriteTemplate]]:
        for (x, y), st in sorted(self.templates.items()):
            yield x, y, st

    def release(self) -> None:
        """End of session: drop every marker and the live links they hold."""
        for st in self.templates.values():
            st.detach()
        self.templates.clear()

    # ---------- export ----------

    def as_rows(self) -> List[List[int]]:
        w = self.width
        return [list(self.tiles[y * w:(y + 1) * w]) for y in range(self.height)]
