# src/blockfield/mapgen/placement.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Deque, List, Sequence

from ..config import MapConfig, RGBA
from ..grid import Coord, Mask
from ..rng import PMRandom
from .layout import lerp, lerp_color
from .reachability import is_fully_accessible

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Obstacle:
    coord: Coord
    height: float
    color: RGBA


@dataclass
class PlacementResult:
    mask: Mask
    obstacles: List[Obstacle] = field(default_factory=list)
    open_coords: List[Coord] = field(default_factory=list)
    attempts: int = 0
    rejected: int = 0


def next_cyclic(queue: Deque[Coord]) -> Coord:
    """Pop the head and push it back on the tail."""
    c = queue.popleft()
    queue.append(c)
    return c


def place_obstacles(cfg: MapConfig, candidates: Deque[Coord],
                    all_coords: Sequence[Coord]) -> PlacementResult:
    """
    Run exactly cfg.obstacle_attempts placement attempts:
      1) take the next candidate from the cyclic queue (mutated in place)
      2) tentatively obstruct it
      3) keep it only if it is not the center and every open cell still
         reaches the center; otherwise roll the mark back.
    Heights come from their own stream seeded with cfg.seed, drawn only on commit.
    """
    w, h = cfg.size.x, cfg.size.y
    center = cfg.center
    heights = PMRandom.from_seed(cfg.seed)
    res = PlacementResult(mask=Mask.empty(w, h))
    mask = res.mask
    count = 0

    for _ in range(cfg.obstacle_attempts):
        c = next_cyclic(candidates)
        res.attempts += 1
        if mask.get(c.x, c.y):
            # Already committed earlier in this run; leave it in place.
            res.rejected += 1
            continue

        mask.set(c.x, c.y, True)
        count += 1
        if c != center and is_fully_accessible(mask, count, center):
            height = lerp(cfg.min_obstacle_height, cfg.max_obstacle_height, heights.random())
            color = lerp_color(cfg.foreground_color, cfg.background_color, c.y / h)
            res.obstacles.append(Obstacle(c, height, color))
        else:
            mask.set(c.x, c.y, False)
            count -= 1
            res.rejected += 1
            logger.debug("Rolled back obstacle at (%d, %d)", c.x, c.y)

    res.open_coords = [c for c in all_coords if not mask.get(c.x, c.y)]
    return res
