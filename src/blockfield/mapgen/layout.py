# src/blockfield/mapgen/layout.py
# World-space geometry: the grid is centered on the origin in the x/z plane,
# y is up. Tile (x, y) maps to world (x, 0, z).

import math
from dataclasses import dataclass
from typing import List, Tuple

from ..grid import Coord

Vec3 = Tuple[float, float, float]
RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class MaskRect:
    side: str      # "left" | "right" | "top" | "bottom"
    position: Vec3
    scale: Vec3


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_color(c0: RGBA, c1: RGBA, t: float) -> RGBA:
    r, g, b, a = (int(round(lerp(p, q, t))) for p, q in zip(c0, c1))
    return (r, g, b, a)


def coord_to_position(x: int, y: int, size: Coord, tile_size: float) -> Vec3:
    return (
        (x - size.x / 2 + 0.5) * tile_size,
        0.0,
        (y - size.y / 2 + 0.5) * tile_size,
    )


def _axis_index(p: float, n: int, tile_size: float) -> int:
    f = p / tile_size + (n - 1) / 2
    if math.isnan(f):
        f = (n - 1) / 2
    # Clamp before rounding so infinities never reach round().
    return round(max(0.0, min(n - 1.0, f)))


def position_to_coord(position: Vec3, size: Coord, tile_size: float) -> Coord:
    """Nearest tile to a world position, clamped onto the grid. Never raises.
    NaN components resolve to the middle of the axis."""
    px, _, pz = position
    return Coord(_axis_index(px, size.x, tile_size), _axis_index(pz, size.y, tile_size))


def tile_scale(tile_size: float, outline_percent: float) -> float:
    return (1 - outline_percent) * tile_size


def obstacle_placement(x: int, y: int, height: float, size: Coord,
                       tile_size: float, outline_percent: float) -> Tuple[Vec3, Vec3]:
    """(position, scale) of an obstacle box standing on tile (x, y)."""
    px, _, pz = coord_to_position(x, y, size, tile_size)
    s = tile_scale(tile_size, outline_percent)
    return (px, height / 2, pz), (s, height, s)


def border_masks(size: Coord, max_size: Coord, tile_size: float) -> List[MaskRect]:
    """
    Four navmesh masks covering the band between the current map and the
    max map footprint.
    """
    w, h = size.x, size.y
    mw, mh = max_size.x, max_size.y
    off_x = (w + mw) / 4 * tile_size
    off_z = (h + mh) / 4 * tile_size
    side_scale = ((mw - w) / 2 * tile_size, tile_size, h * tile_size)
    cap_scale = (mw * tile_size, tile_size, (mh - h) / 2 * tile_size)
    return [
        MaskRect("left", (-off_x, 0.0, 0.0), side_scale),
        MaskRect("right", (off_x, 0.0, 0.0), side_scale),
        MaskRect("top", (0.0, 0.0, off_z), cap_scale),
        MaskRect("bottom", (0.0, 0.0, -off_z), cap_scale),
    ]
