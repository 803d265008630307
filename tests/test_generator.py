import pytest

from blockfield.config import GeneratorSettings, MapConfig
from blockfield.errors import ConfigurationError, EmptyMapError, OutOfBoundsError
from blockfield.grid import Coord
from blockfield.mapgen.generator import MapGenerator, all_coords, generate_layout
from blockfield.mapgen.reachability import reachable_count
from blockfield.render.sink import RecordingSink

SCENARIO = MapConfig(Coord(10, 10), 0.4, 42, 0.5, 3.0, (0, 0, 0, 255), (200, 200, 200, 255), "scenario")
EMPTY = MapConfig(Coord(10, 10), 0.0, 42, name="empty")
DENSE = MapConfig(Coord(7, 5), 1.0, 99, 1.0, 2.0, name="dense")
TINY = MapConfig(Coord(1, 1), 1.0, 5, name="tiny")

def make(maps=(SCENARIO, EMPTY, DENSE, TINY), **kw):
    return MapGenerator(list(maps), GeneratorSettings(**kw))

def check_invariants(gm):
    cfg = gm.config
    placed = len(gm.obstacles)
    assert not gm.mask.get(cfg.center.x, cfg.center.y)
    assert gm.mask.count() == placed
    assert placed <= cfg.obstacle_attempts
    assert gm.attempts == cfg.obstacle_attempts
    assert gm.attempts == placed + gm.rejected
    assert reachable_count(gm.mask, cfg.center) == cfg.tile_count - placed
    assert len(gm.open_coords) == cfg.tile_count - placed

def test_scenario_map_is_deterministic_and_connected():
    a = make().generate(0)
    b = make().generate(0)
    check_invariants(a)
    assert a.mask == b.mask
    assert set(a.mask.obstacles()) == {o.coord for o in b.obstacles}
    assert [o.height for o in a.obstacles] == [o.height for o in b.obstacles]
    assert not a.mask.get(5, 5)
    assert 0 < len(a.obstacles) <= 40

def test_all_maps_hold_invariants():
    gen = make()
    for i in range(len(gen.maps)):
        check_invariants(gen.generate(i))

def test_zero_percent_means_no_obstacles():
    gm = make().generate(1)
    assert gm.obstacles == [] and gm.attempts == 0
    assert reachable_count(gm.mask, Coord(5, 5)) == 100
    assert len(gm.open_coords) == 100

def test_single_tile_map_keeps_its_center():
    gm = make().generate(3)
    assert gm.obstacles == [] and gm.rejected == 1
    assert gm.open_coords == [Coord(0, 0)]

def test_obstacle_heights_and_colors():
    gm = make().generate(0)
    for o in gm.obstacles:
        assert 0.5 <= o.height <= 3.0
        shade = round(200 * o.coord.y / 10)
        assert o.color == (shade, shade, shade, 255)

def test_query_sequences_are_deterministic():
    g1, g2 = make(), make()
    g1.generate(0)
    g2.generate(0)
    assert [g1.random_coord() for _ in range(250)] == [g2.random_coord() for _ in range(250)]
    assert [g1.random_open_tile().coord for _ in range(150)] == [g2.random_open_tile().coord for _ in range(150)]

def test_random_coord_cycles_through_every_tile():
    gen = make()
    gen.generate(2)
    n = DENSE.tile_count
    first = [gen.random_coord() for _ in range(n)]
    second = [gen.random_coord() for _ in range(n)]
    assert set(first) == set(all_coords(DENSE.size))
    assert first == second

def test_random_open_tile_is_never_an_obstacle():
    gen = make()
    gm = gen.generate(0)
    for _ in range(2 * len(gm.open_coords)):
        c = gen.random_open_tile().coord
        assert not gm.mask.get(c.x, c.y)

def test_queries_before_generation_fail():
    gen = make()
    with pytest.raises(EmptyMapError):
        gen.random_open_tile()
    with pytest.raises(EmptyMapError):
        gen.random_coord()
    with pytest.raises(EmptyMapError):
        gen.tile_from_position((0.0, 0.0, 0.0))
    with pytest.raises(OutOfBoundsError):
        gen.tile_at(Coord(0, 0))

def test_bad_index_leaves_state_untouched():
    sink = RecordingSink()
    gen = MapGenerator([SCENARIO], sink=sink)
    gm = gen.generate(0)
    for bad in (-1, 1, 99):
        with pytest.raises(ConfigurationError):
            gen.generate(bad)
    assert gen.current_map is gm and gen.map_index == 0
    assert sink.clears == 1 and len(sink.tiles) == 100

def test_map_larger_than_footprint_is_rejected():
    gen = make(max_map_size=Coord(8, 8))
    with pytest.raises(ConfigurationError):
        gen.generate(0)
    assert gen.current_map is None

def test_tile_at_bounds():
    gen = make()
    gen.generate(0)
    assert gen.tile_at(Coord(9, 9)).coord == Coord(9, 9)
    for c in (Coord(10, 0), Coord(0, 10), Coord(-1, 3)):
        with pytest.raises(OutOfBoundsError):
            gen.tile_at(c)

def test_tile_from_position_clamps():
    gen = make(tile_size=2.0)
    gen.generate(0)
    # even sizes put the origin on a tile corner; ties round to even
    assert gen.tile_from_position((0.0, 0.0, 0.0)).coord == Coord(4, 4)
    assert gen.tile_from_position((1.0, 0.0, 1.0)).coord == Coord(5, 5)
    assert gen.tile_from_position((500.0, 0.0, 500.0)).coord == Coord(9, 9)
    assert gen.tile_from_position((-500.0, 7.0, 3.0)).coord == Coord(0, 6)

def test_on_new_wave_is_one_based():
    gen = make()
    assert gen.on_new_wave(3).config is DENSE
    assert gen.map_index == 2
    with pytest.raises(ConfigurationError):
        gen.on_new_wave(0)

def test_sink_receives_tiles_obstacles_and_masks():
    sink = RecordingSink()
    gen = MapGenerator([SCENARIO, DENSE], GeneratorSettings(tile_size=2.0, outline_percent=0.25,
                                                            max_map_size=Coord(12, 12)), sink)
    gm = gen.generate(0)
    assert sink.clears == 1
    assert len(sink.tiles) == 100 and all(t.scale == 1.5 for t in sink.tiles)
    assert [p.obstacle for p in sink.obstacles] == gm.obstacles
    for p in sink.obstacles:
        assert p.position[1] == p.obstacle.height / 2
        assert p.scale == (1.5, p.obstacle.height, 1.5)
    assert len(sink.masks) == 4
    assert sink.floor == ((24.0, 24.0), (20.0, 20.0))

    gen.generate(1)
    assert sink.clears == 2
    assert len(sink.tiles) == DENSE.tile_count

def test_regeneration_replaces_map():
    gen = make()
    first = gen.generate(0)
    second = gen.generate(2)
    assert gen.current_map is second and second is not first
    assert gen.tile_at(Coord(6, 4)).coord == Coord(6, 4)
    with pytest.raises(OutOfBoundsError):
        gen.tile_at(Coord(9, 9))

def test_generate_layout_matches_generator():
    gm = make().generate(0)
    res = generate_layout(SCENARIO)
    assert res.mask == gm.mask
    assert res.obstacles == gm.obstacles
