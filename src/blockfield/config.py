# src/blockfield/config.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

import yaml

from .errors import ConfigurationError
from .grid import Coord

logger = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, int]

DEFAULT_FOREGROUND: RGBA = (40, 40, 60, 255)
DEFAULT_BACKGROUND: RGBA = (200, 200, 220, 255)


def _check_color(name: str, value: Sequence[int]) -> RGBA:
    try:
        comps = tuple(int(c) for c in value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be 4 integer components, got {value!r}") from e
    if len(comps) != 4 or not all(0 <= c <= 255 for c in comps):
        raise ConfigurationError(f"{name} must be 4 components in 0..255, got {value!r}")
    r, g, b, a = comps
    return (r, g, b, a)


@dataclass(frozen=True)
class MapConfig:
    """Parameters for one map variant. Validated on construction."""
    size: Coord
    obstacle_percent: float = 0.0
    seed: int = 0
    min_obstacle_height: float = 1.0
    max_obstacle_height: float = 1.0
    foreground_color: RGBA = DEFAULT_FOREGROUND
    background_color: RGBA = DEFAULT_BACKGROUND
    name: str = ""

    def __post_init__(self):
        if self.size.x < 1 or self.size.y < 1:
            raise ConfigurationError(f"map size must be at least 1x1, got {self.size.x}x{self.size.y}")
        if not (0.0 <= self.obstacle_percent <= 1.0):
            raise ConfigurationError(f"obstacle_percent must be in [0, 1], got {self.obstacle_percent}")
        if self.min_obstacle_height > self.max_obstacle_height:
            raise ConfigurationError(
                f"min_obstacle_height {self.min_obstacle_height} > max_obstacle_height {self.max_obstacle_height}"
            )
        object.__setattr__(self, "foreground_color", _check_color("foreground_color", self.foreground_color))
        object.__setattr__(self, "background_color", _check_color("background_color", self.background_color))

    @property
    def center(self) -> Coord:
        # Flood-fill origin; never receives an obstacle.
        return Coord(self.size.x // 2, self.size.y // 2)

    @property
    def tile_count(self) -> int:
        return self.size.x * self.size.y

    @property
    def obstacle_attempts(self) -> int:
        return int(self.size.x * self.size.y * self.obstacle_percent)


@dataclass(frozen=True)
class GeneratorSettings:
    tile_size: float = 1.0
    outline_percent: float = 0.0  # cosmetic inset, only forwarded to the sink
    max_map_size: Optional[Coord] = None

    def __post_init__(self):
        if self.tile_size <= 0:
            raise ConfigurationError(f"tile_size must be positive, got {self.tile_size}")
        if not (0.0 <= self.outline_percent <= 1.0):
            raise ConfigurationError(f"outline_percent must be in [0, 1], got {self.outline_percent}")

    def check_fits(self, cfg: MapConfig) -> None:
        m = self.max_map_size
        if m is not None and (cfg.size.x > m.x or cfg.size.y > m.y):
            raise ConfigurationError(
                f"map {cfg.name!r} ({cfg.size.x}x{cfg.size.y}) exceeds max_map_size {m.x}x{m.y}"
            )


DEFAULT_MAPS: List[MapConfig] = [
    MapConfig(Coord(10, 10), 0.4, 42, 0.5, 3.0, (40, 40, 60, 255), (200, 200, 220, 255), "Wave 1"),
    MapConfig(Coord(13, 9), 0.3, 7, 1.0, 2.0, (90, 30, 30, 255), (240, 180, 120, 255), "Wave 2"),
    MapConfig(Coord(15, 15), 0.5, 1993, 0.5, 4.0, (20, 60, 20, 255), (170, 230, 160, 255), "Wave 3"),
    MapConfig(Coord(19, 11), 0.25, 314, 1.0, 5.0, (30, 30, 30, 255), (230, 230, 230, 255), "Wave 4"),
    MapConfig(Coord(21, 21), 0.6, 2718, 0.25, 6.0, (10, 20, 80, 255), (120, 200, 255, 255), "Wave 5"),
]

def footprint(maps: Sequence[MapConfig]) -> Coord:
    """Smallest size that holds every map; used as max_map_size."""
    if not maps:
        raise ConfigurationError("no maps configured")
    return Coord(max(m.size.x for m in maps), max(m.size.y for m in maps))


def _as_coord(value: Any, key: str) -> Coord:
    try:
        x, y = value
        return Coord(int(x), int(y))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be a [width, height] pair, got {value!r}") from e


def parse_map(entry: dict, index: int = 0) -> MapConfig:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"map #{index} must be a mapping, got {type(entry).__name__}")
    if "size" not in entry:
        raise ConfigurationError(f"map #{index} is missing 'size'")
    kw: dict = {"size": _as_coord(entry["size"], "size")}
    try:
        for key, conv in (
            ("obstacle_percent", float),
            ("seed", int),
            ("min_obstacle_height", float),
            ("max_obstacle_height", float),
            ("name", str),
        ):
            if key in entry:
                kw[key] = conv(entry[key])
        for key in ("foreground_color", "background_color"):
            if key in entry:
                kw[key] = tuple(entry[key])
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"map #{index}: {e}") from e
    kw.setdefault("name", f"Map {index + 1}")
    return MapConfig(**kw)


def parse_maps(data: Any) -> List[MapConfig]:
    """Accepts either {'maps': [...]} or a bare list of map mappings."""
    if isinstance(data, dict):
        data = data.get("maps")
    if not isinstance(data, list):
        raise ConfigurationError("map file must hold a list of maps (or a 'maps' key)")
    return [parse_map(e, i) for i, e in enumerate(data)]


def load_maps(path: str) -> List[MapConfig]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"{path}: invalid YAML: {e}") from e
    logger.debug("Loaded map config from path: %s", path)
    maps = parse_maps(raw)
    logger.info("Loaded %d maps from %s", len(maps), path)
    return maps
