# src/blockfield/mapgen/generator.py
# Map generator: seeded shuffle -> reachability-gated obstacle placement ->
# query surface for spawn/navigation code.

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, List, Optional, Sequence

from ..config import DEFAULT_MAPS, GeneratorSettings, MapConfig
from ..errors import ConfigurationError, EmptyMapError, OutOfBoundsError
from ..grid import Coord, Mask
from ..render.sink import MapSink, RecordingSink
from ..rng import shuffle
from .layout import Vec3, border_masks, coord_to_position, obstacle_placement, position_to_coord, tile_scale
from .placement import Obstacle, PlacementResult, next_cyclic, place_obstacles

logger = logging.getLogger(__name__)


def all_coords(size: Coord) -> List[Coord]:
    """Canonical enumeration (x outer, y inner); fixes the shuffle input order."""
    return [Coord(x, y) for x in range(size.x) for y in range(size.y)]


def generate_layout(cfg: MapConfig) -> PlacementResult:
    """Obstacle layout for `cfg` with no renderer involved."""
    coords = all_coords(cfg.size)
    return place_obstacles(cfg, deque(shuffle(coords, cfg.seed)), coords)


@dataclass
class GeneratedMap:
    config: MapConfig
    mask: Mask
    obstacles: List[Obstacle]
    open_coords: List[Coord]
    tiles: List[Any] = field(repr=False)  # flat, index = y * width + x
    attempts: int = 0
    rejected: int = 0

    @property
    def width(self) -> int:
        return self.config.size.x

    @property
    def height(self) -> int:
        return self.config.size.y

    def tile(self, c: Coord) -> Any:
        return self.tiles[c.y * self.width + c.x]


class MapGenerator:
    """
    Owns the current map. Each generate() call replaces the grid and both
    coordinate queues wholesale; nothing carries over between calls.
    Not safe for concurrent use: finish generate() before serving queries.
    """

    def __init__(self, maps: Optional[Sequence[MapConfig]] = None,
                 settings: Optional[GeneratorSettings] = None,
                 sink: Optional[MapSink] = None):
        self.maps: List[MapConfig] = list(DEFAULT_MAPS if maps is None else maps)
        self.settings = settings or GeneratorSettings()
        self.sink = sink if sink is not None else RecordingSink()
        self.map_index: Optional[int] = None
        self._map: Optional[GeneratedMap] = None
        self._coord_queue: Deque[Coord] = deque()
        self._open_queue: Deque[Coord] = deque()

    @property
    def current_map(self) -> Optional[GeneratedMap]:
        return self._map

    def on_new_wave(self, wave_number: int) -> GeneratedMap:
        """Wave numbers are 1-based; wave N uses map N-1."""
        return self.generate(wave_number - 1)

    def generate(self, index: int) -> GeneratedMap:
        if not (0 <= index < len(self.maps)):
            raise ConfigurationError(f"map index {index} out of range (have {len(self.maps)} maps)")
        cfg = self.maps[index]
        settings = self.settings
        settings.check_fits(cfg)

        coords = all_coords(cfg.size)
        coord_queue = deque(shuffle(coords, cfg.seed))

        self.sink.clear()
        t = settings.tile_size
        scale = tile_scale(t, settings.outline_percent)
        tiles: List[Any] = [None] * cfg.tile_count
        for c in coords:
            pos = coord_to_position(c.x, c.y, cfg.size, t)
            tiles[c.y * cfg.size.x + c.x] = self.sink.place_tile(c, pos, scale)

        res = place_obstacles(cfg, coord_queue, coords)
        for ob in res.obstacles:
            pos, box = obstacle_placement(ob.coord.x, ob.coord.y, ob.height, cfg.size, t,
                                          settings.outline_percent)
            self.sink.place_obstacle(ob, pos, box)

        open_queue = deque(shuffle(res.open_coords, cfg.seed))

        if settings.max_map_size is not None:
            m = settings.max_map_size
            for rect in border_masks(cfg.size, m, t):
                self.sink.place_mask(rect)
            self.sink.set_floor((m.x * t, m.y * t), (cfg.size.x * t, cfg.size.y * t))

        self.map_index = index
        self._coord_queue = coord_queue
        self._open_queue = open_queue
        self._map = GeneratedMap(
            config=cfg, mask=res.mask, obstacles=res.obstacles, open_coords=res.open_coords,
            tiles=tiles, attempts=res.attempts, rejected=res.rejected,
        )
        logger.info(
            "Generated %r (%dx%d): %d attempts, %d placed, %d rejected, %d open",
            cfg.name, cfg.size.x, cfg.size.y, res.attempts, len(res.obstacles),
            res.rejected, len(res.open_coords),
        )
        return self._map

    # ---------- queries ----------

    def _require_map(self) -> GeneratedMap:
        if self._map is None:
            raise EmptyMapError("no map has been generated")
        return self._map

    def random_coord(self) -> Coord:
        if not self._coord_queue:
            raise EmptyMapError("no map has been generated")
        return next_cyclic(self._coord_queue)

    def random_open_tile(self) -> Any:
        if not self._open_queue:
            raise EmptyMapError("no open tiles on the current map")
        m = self._require_map()
        return m.tile(next_cyclic(self._open_queue))

    def tile_at(self, c: Coord) -> Any:
        m = self._map
        if m is None or not (0 <= c.x < m.width and 0 <= c.y < m.height):
            size = "no map" if m is None else f"{m.width}x{m.height}"
            raise OutOfBoundsError(f"({c.x}, {c.y}) is outside the grid ({size})")
        return m.tile(c)

    def coord_from_position(self, position: Vec3) -> Coord:
        m = self._require_map()
        return position_to_coord(position, m.config.size, self.settings.tile_size)

    def tile_from_position(self, position: Vec3) -> Any:
        return self._require_map().tile(self.coord_from_position(position))
