# src/blockfield/render/sink.py
# Rendering collaborator contract. The generator only talks to a MapSink;
# whatever place_tile returns is the tile handle handed back by queries.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Tuple

from ..grid import Coord
from ..mapgen.layout import MaskRect, Vec3
from ..mapgen.placement import Obstacle


class MapSink(Protocol):
    def clear(self) -> None: ...

    def place_tile(self, coord: Coord, position: Vec3, scale: float) -> Any: ...

    def place_obstacle(self, obstacle: Obstacle, position: Vec3, scale: Vec3) -> None: ...

    def place_mask(self, rect: MaskRect) -> None: ...

    def set_floor(self, navmesh_size: Tuple[float, float], map_size: Tuple[float, float]) -> None: ...


@dataclass(frozen=True)
class Tile:
    coord: Coord
    position: Vec3
    scale: float


@dataclass(frozen=True)
class PlacedObstacle:
    obstacle: Obstacle
    position: Vec3
    scale: Vec3


@dataclass
class RecordingSink:
    """In-memory sink: keeps everything placed since the last clear()."""
    tiles: List[Tile] = field(default_factory=list)
    obstacles: List[PlacedObstacle] = field(default_factory=list)
    masks: List[MaskRect] = field(default_factory=list)
    floor: Optional[Tuple[Tuple[float, float], Tuple[float, float]]] = None
    clears: int = 0

    def clear(self) -> None:
        self.tiles = []
        self.obstacles = []
        self.masks = []
        self.floor = None
        self.clears += 1

    def place_tile(self, coord: Coord, position: Vec3, scale: float) -> Tile:
        t = Tile(coord, position, scale)
        self.tiles.append(t)
        return t

    def place_obstacle(self, obstacle: Obstacle, position: Vec3, scale: Vec3) -> None:
        self.obstacles.append(PlacedObstacle(obstacle, position, scale))

    def place_mask(self, rect: MaskRect) -> None:
        self.masks.append(rect)

    def set_floor(self, navmesh_size: Tuple[float, float], map_size: Tuple[float, float]) -> None:
        self.floor = (navmesh_size, map_size)
