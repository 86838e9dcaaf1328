from catacomb.dungeon.geometry import Rect
from catacomb.dungeon.level import Level
from catacomb.dungeon.population import place_boss, place_drops, place_monsters
from catacomb.entities import Boss, Monster
from catacomb.loot.drops import DropEntry, DropTable
from catacomb.rng import RandomSource

NAMES = ("imp", "goblin")


def _level(rooms, size=20):
    return Level(index=1, width=size, height=size, rooms=list(rooms))


def test_monster_retry_budget_is_bounded(scripted):
    level = _level([Rect(0, 0, 3, 3), Rect(5, 5, 1, 1)])
    # first monster lands; the second keeps its room and finds the cell taken 10 times
    rng = scripted([1, 0, 0, 0] + [1] + [0, 0] * 10)
    placed = place_monsters(level, 2, NAMES, rng, attempts=10)
    assert placed == 1
    assert rng.values == []
    assert rng.calls.count("range") == 24
    assert level.monster_at(5, 5) == Monster("imp", 5, 5)
    assert level.stats["monsters_requested"] == 2
    assert level.stats["monsters_placed"] == 1


def test_monster_drawing_a_full_room_is_skipped(scripted):
    rooms = [Rect(1, 1, 3, 3), Rect(6, 1, 1, 1), Rect(9, 1, 8, 8)]
    level = _level(rooms)
    level.place_occupant(Monster("imp", 6, 1))
    # the full room is drawn once; the roomy one is never tried
    rng = scripted([1] + [0, 0] * 3)
    assert place_monsters(level, 1, NAMES, rng, attempts=3) == 0
    assert rng.values == []
    assert len(level.monsters) == 1


def test_crowded_room_sheds_monsters():
    rooms = [Rect(1, 1, 3, 3), Rect(6, 1, 1, 1), Rect(9, 1, 8, 8)]
    level = _level(rooms)
    level.place_occupant(Monster("imp", 6, 1))
    placed = place_monsters(level, 40, NAMES, RandomSource(1))
    # roughly half the monsters draw the full room
    assert 5 < placed < 35
    assert all(rooms[2].contains(m.x, m.y) for m in level.monsters[1:])


def test_monsters_avoid_entry_and_boss_room():
    rooms = [Rect(1, 1, 4, 4), Rect(7, 1, 4, 4), Rect(13, 1, 4, 4)]
    level = _level(rooms)
    place_monsters(level, 12, NAMES, RandomSource(3), exclude_last=True)
    assert level.monsters
    assert all(rooms[1].contains(m.x, m.y) for m in level.monsters)
    assert all(m.name in NAMES for m in level.monsters)


def test_no_monster_rooms_means_no_monsters(scripted):
    level = _level([Rect(1, 1, 4, 4), Rect(7, 1, 4, 4)])
    rng = scripted([])
    assert place_monsters(level, 4, NAMES, rng, exclude_last=True) == 0
    assert rng.calls == []
    assert level.stats["monsters_requested"] == 4
    assert level.stats["monsters_placed"] == 0


def test_monsters_never_share_a_cell():
    level = _level([Rect(1, 1, 4, 4), Rect(7, 7, 2, 2)])
    place_monsters(level, 10, NAMES, RandomSource(11), attempts=50)
    cells = [(m.x, m.y) for m in level.monsters]
    assert len(cells) == len(set(cells)) == 4


def test_boss_needs_free_footprint(scripted):
    level = _level([Rect(10, 10, 3, 3), Rect(2, 2, 4, 4)])
    level.place_occupant(Monster("imp", 4, 2))
    # (1,1) -> anchor (3,3) whose upper-right cell (4,2) is taken; (2,2) -> (4,4) is clear
    rng = scripted([1, 1, 2, 2])
    assert place_boss(level, "ogre", rng) is True
    assert level.boss == Boss("ogre", 4, 4)
    assert level.monster_at(4, 4) is level.boss
    for cell in level.boss.footprint[1:]:
        assert level.is_free(*cell)
    assert level.stats["boss_requested"] == 1
    assert level.stats["boss_placed"] == 1


def test_boss_skipped_when_budget_runs_out(scripted):
    level = _level([Rect(2, 2, 3, 3)])
    level.place_occupant(Monster("imp", 3, 3))
    rng = scripted([1, 1] * 10)
    assert place_boss(level, "ogre", rng, attempts=10) is False
    assert level.boss is None
    assert rng.values == []
    assert level.stats["boss_placed"] == 0


def test_boss_skipped_in_tiny_room(scripted):
    level = _level([Rect(1, 1, 2, 5)])
    assert place_boss(level, "ogre", scripted([])) is False
    assert level.boss is None


def test_drops_one_per_cell(scripted):
    table = DropTable([DropEntry("coins")])
    level = _level([Rect(3, 3, 1, 1), Rect(8, 8, 2, 1)])
    rng = scripted(
        [0, 0, 0, "coins"]  # lands on (3, 3)
        + [0] + [0, 0] * 3  # same room again: skipped after 3 attempts
        + [1, 1, 0, "coins"]  # lands on (9, 8)
    )
    placed = place_drops(level, 3, table, rng, attempts=3)
    assert placed == 2
    assert rng.values == []
    assert {(d.x, d.y) for d in level.drops} == {(3, 3), (9, 8)}
    assert level.stats["drops_requested"] == 3
    assert level.stats["drops_placed"] == 2


def test_drops_rolled_from_eligible_entries():
    table = DropTable([DropEntry("coins", 1.0), DropEntry("relic", 5.0, min_level=50)])
    level = _level([Rect(2, 2, 6, 6)])
    place_drops(level, 8, table, RandomSource(5))
    assert len(level.drops) == 8
    assert {d.name for d in level.drops} == {"coins"}
    assert len({(d.x, d.y) for d in level.drops}) == 8


def test_drops_may_share_cells_with_monsters(scripted):
    level = _level([Rect(4, 4, 1, 1)])
    level.place_occupant(Monster("imp", 4, 4))
    table = DropTable([DropEntry("coins")])
    rng = scripted([0, 0, 0, "coins"])
    assert place_drops(level, 1, table, rng) == 1
    assert level.drops[0].name == "coins"
