import pytest

from sidescroll.grid import LevelGrid
from sidescroll.mapgen.background import generate_background
from sidescroll.mapgen.generator import generate_level
from sidescroll.tiles import (
    Behavior, TileBehaviorError, TileBehaviorTable, LevelType, default_behaviors, wall_offset_for,
    GROUND, HILL_TOP, HILL_FILL, COIN, COIN_BLOCK, HIDDEN_COIN, BRICK, CANNON_TOP, TUBE_TOP_LEFT,
)


def test_wall_offsets():
    assert wall_offset_for(LevelType.OVERGROUND) == 0
    assert wall_offset_for(LevelType.CASTLE) == 8
    assert wall_offset_for(LevelType.UNDERGROUND) == 12


def test_default_table_flags():
    b = default_behaviors()
    assert b[0] == Behavior.NONE
    assert b.has(GROUND, Behavior.BLOCK_ALL)
    assert b.has(GROUND + 8, Behavior.BLOCK_ALL)
    assert b.has(GROUND + 12, Behavior.BLOCK_ALL)
    assert b[HILL_TOP] == Behavior.BLOCK_UPPER
    assert b[HILL_FILL] == Behavior.NONE
    assert b.has(COIN, Behavior.PICKUPABLE)
    assert not b.has(COIN, Behavior.BLOCK_ALL)
    assert b.has(COIN_BLOCK, Behavior.ANIMATED)
    assert b[HIDDEN_COIN] & Behavior.BLOCK_LOWER
    assert b.has(BRICK, Behavior.BREAKABLE)
    assert b.has(CANNON_TOP, Behavior.BLOCK_ALL)
    assert b.has(TUBE_TOP_LEFT, Behavior.BLOCK_ALL)


def test_table_rejects_wrong_size():
    with pytest.raises(ValueError):
        TileBehaviorTable(bytes(255))


def test_save_and_load(tmp_path):
    path = tmp_path / "tiles.dat"
    default_behaviors().save(path)
    assert path.stat().st_size == 256
    assert TileBehaviorTable.load(path) == default_behaviors()


def test_load_missing_file(tmp_path):
    with pytest.raises(TileBehaviorError):
        TileBehaviorTable.load(tmp_path / "nope.dat")


def test_load_short_file(tmp_path):
    path = tmp_path / "short.dat"
    path.write_bytes(bytes(100))
    with pytest.raises(TileBehaviorError, match="expected 256 bytes, got 100"):
        TileBehaviorTable.load(path)


def test_default_table_is_shared():
    table = default_behaviors()
    assert default_behaviors() is table
    assert LevelGrid(2, 2).behaviors is table
    assert generate_level(1, 100, 15).behaviors is table
    assert generate_background(16, 15).behaviors is table
