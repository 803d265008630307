# src/blockfield/mapgen/reachability.py
# Breadth-first flood fill over an obstacle mask, 4-connected.

from collections import deque

from ..grid import Coord, Mask


def flood_fill(mask: Mask, origin: Coord) -> Mask:
    """
    Return the visited mask of every open cell reachable from `origin`
    through orthogonal steps. An obstructed or out-of-range origin reaches nothing.
    """
    visited = Mask.empty(mask.width, mask.height)
    if not mask.in_bounds(origin.x, origin.y) or mask.get(origin.x, origin.y):
        return visited
    visited.set(origin.x, origin.y, True)
    queue = deque([origin])
    while queue:
        c = queue.popleft()
        for n in c.neighbors4():
            if not mask.in_bounds(n.x, n.y):
                continue
            i = mask.idx(n.x, n.y)
            if visited.buf[i] or mask.buf[i]:
                continue
            visited.buf[i] = True
            queue.append(n)
    return visited


def reachable_count(mask: Mask, origin: Coord) -> int:
    return flood_fill(mask, origin).count()


def is_fully_accessible(mask: Mask, obstacle_count: int, center: Coord) -> bool:
    """True iff no open cell is cut off from `center` (no islands)."""
    if not mask.in_bounds(center.x, center.y) or mask.get(center.x, center.y):
        return False
    target = mask.width * mask.height - obstacle_count
    return reachable_count(mask, center) == target
