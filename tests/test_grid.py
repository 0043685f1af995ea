import pytest

from sidescroll.grid import LevelGrid
from sidescroll.sprites import EnemyKind, SpriteTemplate
from sidescroll.tiles import Behavior, GROUND, HIDDEN_COIN, HILL_TOP, TileBehaviorTable


def make(w=4, h=3):
    g = LevelGrid(w, h)
    for x in range(w):
        g.set_block(x, h - 1, GROUND)
    return g


def test_bad_size():
    with pytest.raises(ValueError):
        LevelGrid(0, 5)
    with pytest.raises(ValueError):
        LevelGrid(5, -1)
    with pytest.raises(ValueError):
        LevelGrid(2, 2, tiles=bytearray(3))


def test_get_block_edges():
    g = make()
    g.set_block(0, 0, 7)
    g.set_block(3, 1, 9)
    # above the top is sky even over a solid column
    assert g.get_block(0, -1) == 0
    # below the bottom repeats the last row
    assert g.get_block(1, 50) == GROUND
    # x clamps both ways
    assert g.get_block(-10, 0) == 7
    assert g.get_block(99, 1) == 9
    assert g.get_block_capped(0, -1) == 7


def test_writes_outside_are_ignored():
    g = make()
    before = bytes(g.tiles)
    g.set_block(-1, 0, 5)
    g.set_block(4, 0, 5)
    g.set_block(0, 3, 5)
    g.set_block_data(0, -1, 5)
    assert bytes(g.tiles) == before
    assert not any(g.data)
    assert g.get_block_data(-1, 0) == 0


def test_set_block_masks_to_byte():
    g = make()
    g.set_block(1, 1, 256 + 3)
    assert g.get_block(1, 1) == 3


def test_is_blocking_directions():
    g = make()
    g.set_block(1, 0, HILL_TOP)
    g.set_block(2, 0, HIDDEN_COIN)
    assert g.is_blocking(0, 2, 0, 0)
    # one-way platform: only while falling onto it
    assert g.is_blocking(1, 0, 0, 1)
    assert not g.is_blocking(1, 0, 0, -1)
    assert not g.is_blocking(1, 0, 1, 0)
    # hidden block: only from below
    assert g.is_blocking(2, 0, 0, -1)
    assert not g.is_blocking(2, 0, 0, 1)
    assert not g.is_blocking(3, 0, 0, 1)


def test_custom_behavior_table():
    flags = bytearray(256)
    flags[5] = Behavior.BLOCK_ALL
    g = LevelGrid(2, 2, behaviors=TileBehaviorTable(bytes(flags)))
    g.set_block(0, 0, 5)
    g.set_block(1, 0, GROUND)
    assert g.is_blocking(0, 0, 0, 0)
    assert not g.is_blocking(1, 0, 0, 1)


def test_tick_counts_down_to_zero():
    g = make()
    g.set_block_data(1, 1, 2)
    g.tick()
    assert g.get_block_data(1, 1) == 1
    g.tick()
    g.tick()
    assert g.get_block_data(1, 1) == 0


def test_sprite_templates_set_clear_and_order():
    g = make()
    a = SpriteTemplate(EnemyKind.GOOMBA)
    b = SpriteTemplate(EnemyKind.SPIKY, winged=True)
    g.set_sprite_template(3, 0, a)
    g.set_sprite_template(1, 1, b)
    g.set_sprite_template(9, 9, SpriteTemplate(EnemyKind.GOOMBA))
    assert [(x, y) for x, y, _ in g.sprite_templates()] == [(1, 1), (3, 0)]
    assert g.get_sprite_template(1, 1) is b
    g.set_sprite_template(1, 1, None)
    assert g.get_sprite_template(1, 1) is None
    assert len(list(g.sprite_templates())) == 1


def test_release_detaches_live_sprites():
    g = make()
    st = SpriteTemplate(EnemyKind.RED_KOOPA)
    g.set_sprite_template(0, 0, st)
    st.attach(object())
    g.release()
    assert st.sprite is None
    assert g.get_sprite_template(0, 0) is None


def test_as_rows():
    g = make(3, 2)
    assert g.as_rows() == [[0, 0, 0], [GROUND] * 3]
