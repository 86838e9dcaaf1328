import json
import logging

import pytest

from catacomb.dungeon.geometry import Point, Rect
from catacomb.dungeon.level import Level
from catacomb.dungeon.tiles import Tile
from catacomb.entities import Boss, Drop, Hero, Monster


def test_rect_edges_and_center():
    r = Rect(2, 3, 5, 4)
    assert r.right == 7
    assert r.bottom == 7
    assert r.center() == Point(4, 5)
    assert r.contains(2, 3) and r.contains(6, 6)
    assert not r.contains(7, 3)


def test_rect_intersects_is_exclusive_at_edges():
    a = Rect(0, 0, 2, 2)
    assert not a.intersects(Rect(2, 0, 2, 2))
    assert not a.intersects(Rect(0, 2, 2, 2))
    assert a.intersects(Rect(1, 1, 2, 2))


def test_interior_cells_skip_wall_overlay():
    assert sorted(Rect(0, 2, 4, 3).interior_cells()) == [(1, 2), (1, 3), (2, 2), (2, 3)]
    assert list(Rect(5, 5, 1, 3).interior_cells()) == [(5, 5), (5, 6)]


def test_level_rejects_empty_size():
    with pytest.raises(ValueError):
        Level(index=1, width=0, height=5)


def test_out_of_bounds_reads_are_empty_and_writes_are_logged(caplog):
    level = Level(index=1, width=4, height=3)
    assert level.floor_at(-1, 0) is None
    assert level.wall_at(4, 0) is None
    with caplog.at_level(logging.ERROR, logger="catacomb.dungeon.level"):
        level.set_wall(0, 3, Tile.MID)
        level.set_floor(9, 9, Tile.FLOOR)
    assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 2
    assert all(level.wall_at(x, y) is None for x, y in level.iter_cells())


def test_place_occupant_keeps_one_per_cell():
    level = Level(index=1, width=5, height=5)
    assert level.place_occupant(Monster("imp", 1, 1))
    assert not level.place_occupant(Monster("goblin", 1, 1))
    assert not level.place_occupant(Monster("goblin", 5, 1))
    assert level.monster_at(1, 1).name == "imp"
    assert [m.name for m in level.monsters] == ["imp"]

    assert level.place_occupant(Boss("ogre", 3, 3))
    assert level.boss == Boss("ogre", 3, 3)
    # only the anchor is tracked
    assert level.is_free(4, 3) and level.is_free(3, 2)


def test_drops_do_not_stack():
    level = Level(index=1, width=5, height=5)
    assert level.add_drop(Drop("coins", 2, 2))
    assert not level.add_drop(Drop("flask_red", 2, 2))
    assert level.has_drop(2, 2)
    assert not level.has_drop(7, 7)
    assert len(level.drops) == 1


def test_find_tiles_checks_both_layers():
    level = Level(index=1, width=4, height=4)
    level.set_floor(1, 1, Tile.LADDER)
    level.set_wall(2, 0, Tile.LADDER)
    assert level.find_tiles(Tile.LADDER) == [(2, 0), (1, 1)]


def test_snapshot_and_exports():
    a = Level(index=2, width=6, height=4, rooms=[Rect(1, 1, 2, 2)])
    b = Level(index=2, width=6, height=4, rooms=[Rect(1, 1, 2, 2)])
    for level in (a, b):
        level.set_floor(1, 1, Tile.FLOOR)
        level.set_wall(1, 0, Tile.MID)
        level.place_occupant(Monster("imp", 2, 2))
    assert a.snapshot() == b.snapshot()
    hash(a.snapshot())

    a.hero = Hero(x=1, y=1)
    a.monster_map[1][1] = a.hero
    assert a.to_str_lines()[1].startswith(" @")

    data = a.to_dict()
    json.dumps(data)
    assert data["rooms"] == [[1, 1, 2, 2]]
    assert data["hero"] == [1, 1]
    assert data["walls"] == [[1, 0, "wall_mid.png"]]


def test_hero_is_linked_when_placed():
    level = Level(index=1, width=5, height=5)
    hero = Hero(x=2, y=2)
    assert level.place_occupant(hero)
    assert level.hero is hero
    assert not level.place_occupant(Boss("ogre", 2, 2))
    assert level.boss is None
