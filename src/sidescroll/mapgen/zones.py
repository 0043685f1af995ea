# src/sidescroll/mapgen/zones.py
# Zone builders. Each one writes a contiguous run of columns starting at xo
# and returns how many columns it used (never more than max_length).
# The order of every RNG draw below is part of the level format.

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple
import logging

from ..config import SETTINGS, GenerationSettings
from ..grid import LevelGrid
from ..rng import JavaRandom
from ..sprites import EnemyKind, SpriteTemplate
from ..tiles import (
    GROUND, COIN, BRICK, COIN_BLOCK, POWERUP_BLOCK, HIDDEN_COIN, HIDDEN_POWERUP,
    STAIR_BLOCK, TUBE_TOP_LEFT, CANNON_TOP, CANNON_NECK, CANNON_BASE,
    HILL_TOP_LEFT, HILL_TOP_RIGHT, HILL_CAP_LEFT, HILL_CAP_RIGHT, LevelType,
)

logger = logging.getLogger(__name__)


class ZoneKind(IntEnum):
    STRAIGHT = 0
    HILL_STRAIGHT = 1
    TUBES = 2
    JUMP = 3
    CANNONS = 4


@dataclass(frozen=True)
class OddsTable:
    """
    Cumulative zone weights. thresholds[i] is the running total before zone i,
    so a zone with weight 0 shares its threshold with the next one.
    """
    thresholds: Tuple[int, ...]
    total: int

    @classmethod
    def from_weights(cls, weights) -> "OddsTable":
        thresholds = []
        total = 0
        for w in weights:
            w = max(0, w)
            thresholds.append(total)
            total += w
        return cls(tuple(thresholds), total)

    @classmethod
    def for_level(cls, difficulty: int, level_type: LevelType) -> "OddsTable":
        weights = [0] * len(ZoneKind)
        weights[ZoneKind.STRAIGHT] = 20
        weights[ZoneKind.HILL_STRAIGHT] = 10
        weights[ZoneKind.TUBES] = 2 + difficulty
        weights[ZoneKind.JUMP] = 2 * difficulty
        weights[ZoneKind.CANNONS] = -10 + 5 * difficulty
        if level_type != LevelType.OVERGROUND:
            weights[ZoneKind.HILL_STRAIGHT] = 0
        return cls.from_weights(weights)

    def pick(self, draw: int) -> ZoneKind:
        # Last zone whose threshold is <= draw; ties go to the higher index.
        kind = 0
        for i, t in enumerate(self.thresholds):
            if t <= draw:
                kind = i
        return ZoneKind(kind)


class ZoneBuilder:
    def __init__(self, level: LevelGrid, rng: JavaRandom, difficulty: int,
                 level_type: LevelType, settings: GenerationSettings = SETTINGS):
        self.level = level
        self.rng = rng
        self.difficulty = difficulty
        self.level_type = level_type
        self.settings = settings
        self.odds = OddsTable.for_level(difficulty, level_type)

    # ---------- helpers ----------

    def _random_floor(self) -> int:
        return self.level.height - 1 - self.rng.next_int(4)

    def _fill_ground(self, x: int, floor: int) -> None:
        for y in range(max(floor, 0), self.level.height):
            self.level.set_block(x, y, GROUND)

    # ---------- dispatch ----------

    def build_zone(self, x: int, max_length: int) -> int:
        kind = self.odds.pick(self.rng.next_int(self.odds.total))
        logger.debug("zone %s at x=%d (room %d)", kind.name, x, max_length)
        if kind == ZoneKind.STRAIGHT:
            return self.build_straight(x, max_length, False)
        if kind == ZoneKind.HILL_STRAIGHT:
            return self.build_hill_straight(x, max_length)
        if kind == ZoneKind.TUBES:
            return self.build_tubes(x, max_length)
        if kind == ZoneKind.JUMP:
            return self.build_jump(x, max_length)
        return self.build_cannons(x, max_length)

    # ---------- zones ----------

    def build_straight(self, xo: int, max_length: int, safe: bool) -> int:
        rng = self.rng
        length = rng.next_int(10) + 2
        if safe:
            length = 10 + rng.next_int(5)
        length = min(length, max_length)

        floor = self._random_floor()
        for x in range(xo, xo + length):
            self._fill_ground(x, floor)

        if not safe and length > 5:
            self.decorate(xo, xo + length, floor)
        return length

    def build_hill_straight(self, xo: int, max_length: int) -> int:
        rng, level = self.rng, self.level
        length = min(rng.next_int(10) + 10, max_length)

        floor = self._random_floor()
        for x in range(xo, xo + length):
            self._fill_ground(x, floor)

        self.add_enemy_line(xo + 1, xo + length - 1, floor - 1)

        h = floor
        occupied = [False] * length
        tiers = 0
        # h drops by at least 2 per tier; the cap only matters on very tall grids.
        while tiers < self.settings.max_hill_tiers:
            tiers += 1
            h = h - 2 - rng.next_int(3)
            if h <= 0:
                break
            l = rng.next_int(5) + 3
            xxo = rng.next_int(length - l - 2) + xo + 1
            rel = xxo - xo
            if (rel < 0 or rel >= length or rel + l >= length
                    or occupied[rel] or occupied[rel + l]
                    or (rel - 1 >= 0 and occupied[rel - 1])
                    or (rel + l + 1 < length and occupied[rel + l + 1])):
                break

            occupied[rel] = True
            occupied[rel + l] = True
            self.add_enemy_line(xxo, xxo + l, h - 1)
            last_tier = False
            if rng.next_int(4) == 0:
                self.decorate(xxo - 1, xxo + l + 1, h)
                last_tier = True

            for x in range(xxo, xxo + l):
                for y in range(h, floor):
                    xx = 5
                    if x == xxo:
                        xx = 4
                    if x == xxo + l - 1:
                        xx = 6
                    yy = 8 if y == h else 9
                    cur = level.get_block(x, y)
                    if cur == 0:
                        level.set_block(x, y, xx + yy * 16)
                    elif cur == HILL_TOP_LEFT:
                        level.set_block(x, y, HILL_CAP_LEFT)
                    elif cur == HILL_TOP_RIGHT:
                        level.set_block(x, y, HILL_CAP_RIGHT)
            if last_tier:
                break
        return length

    def build_tubes(self, xo: int, max_length: int) -> int:
        rng, level = self.rng, self.level
        length = min(rng.next_int(10) + 5, max_length)

        floor = self._random_floor()
        x_tube = xo + 1 + rng.next_int(4)
        tube_height = floor - rng.next_int(2) - 2

        for x in range(xo, xo + length):
            if x > x_tube + 1:
                x_tube += 3 + rng.next_int(4)
                tube_height = floor - rng.next_int(2) - 2
            # No tube that would poke past the end of the zone.
            if x_tube >= xo + length - 2:
                x_tube += 10

            if x == x_tube and rng.next_int(11) < self.difficulty + 1:
                level.set_sprite_template(x, tube_height, SpriteTemplate(EnemyKind.FLOWER, False))

            self._fill_ground(x, floor)
            if x == x_tube or x == x_tube + 1:
                x_pic = TUBE_TOP_LEFT + x - x_tube
                for y in range(max(tube_height, 0), min(floor, level.height)):
                    level.set_block(x, y, x_pic if y == tube_height else x_pic + 16)
        return length

    def build_jump(self, xo: int, max_length: int) -> int:
        rng, level = self.rng, self.level
        js = rng.next_int(4) + 2
        jl = rng.next_int(2) + 2
        length = min(js * 2 + jl, max_length)

        has_stairs = rng.next_int(3) == 0

        floor = self._random_floor()
        for x in range(xo, xo + length):
            if xo + js <= x <= xo + length - js - 1:
                continue  # the gap
            self._fill_ground(x, floor)
            if not has_stairs:
                continue
            # Steps climb toward the gap from both sides.
            if x < xo + js:
                top = floor - (x - xo) + 1
            else:
                top = floor - (xo + length - 1 - x) + 1
            for y in range(max(top, 0), floor):
                level.set_block(x, y, STAIR_BLOCK)
        return length

    def build_cannons(self, xo: int, max_length: int) -> int:
        rng, level = self.rng, self.level
        length = min(rng.next_int(10) + 2, max_length)

        floor = self._random_floor()
        x_cannon = xo + 1 + rng.next_int(4)

        for x in range(xo, xo + length):
            if x > x_cannon:
                x_cannon += 2 + rng.next_int(4)
            if x_cannon >= xo + length - 2:
                x_cannon += 10
            cannon_height = floor - rng.next_int(4) - 1

            self._fill_ground(x, floor)
            if x != x_cannon:
                continue
            for y in range(max(cannon_height, 0), floor):
                if y == cannon_height:
                    level.set_block(x, y, CANNON_TOP)
                elif y == cannon_height + 1:
                    level.set_block(x, y, CANNON_NECK)
                else:
                    level.set_block(x, y, CANNON_BASE)
        return length

    # ---------- dressing ----------

    def decorate(self, x0: int, x1: int, floor: int) -> None:
        """Enemies on the floor, a coin row two up and a block row four up."""
        if floor < 1:
            return
        rng, level = self.rng, self.level

        self.add_enemy_line(x0 + 1, x1 - 1, floor - 1)

        s = rng.next_int(4)
        e = rng.next_int(4)
        if floor - 2 > 0 and (x1 - 1 - e) - (x0 + 1 + s) > 1:
            for x in range(x0 + 1 + s, x1 - 1 - e):
                level.set_block(x, floor - 2, COIN)

        s = rng.next_int(4)
        e = rng.next_int(4)
        if floor - 4 > 0 and (x1 - 1 - e) - (x0 + 1 + s) > 2:
            for x in range(x0 + 1 + s, x1 - 1 - e):
                # Edge columns never get a "?" block.
                if x != x0 + 1 and x != x1 - 2 and rng.next_int(3) == 0:
                    tile = POWERUP_BLOCK if rng.next_int(4) == 0 else COIN_BLOCK
                elif rng.next_int(4) == 0:
                    tile = HIDDEN_POWERUP if rng.next_int(4) == 0 else HIDDEN_COIN
                else:
                    tile = BRICK
                level.set_block(x, floor - 4, tile)

    def add_enemy_line(self, x0: int, x1: int, y: int) -> None:
        rng, d = self.rng, self.difficulty
        for x in range(x0, x1):
            if rng.next_int(35) < d + 1:
                kind = rng.next_int(4)
                if d < 1:
                    kind = EnemyKind.GOOMBA
                elif d < 3:
                    kind = rng.next_int(3)
                winged = rng.next_int(35) < d
                self.level.set_sprite_template(x, y, SpriteTemplate(EnemyKind(kind), winged))
