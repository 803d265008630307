# src/blockfield/grid.py
from dataclasses import dataclass
from typing import Iterator, List


@dataclass(frozen=True)
class Coord:
    x: int
    y: int

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y

    def neighbors4(self) -> Iterator["Coord"]:
        # Orthogonal only; diagonals never count as connected.
        yield Coord(self.x - 1, self.y)
        yield Coord(self.x + 1, self.y)
        yield Coord(self.x, self.y - 1)
        yield Coord(self.x, self.y + 1)


@dataclass
class Mask:
    """
    Boolean grid backed by a flat buffer (index = y * width + x).
    True marks an obstructed cell.
    """
    width: int
    height: int
    buf: List[bool]

    @classmethod
    def empty(cls, width: int, height: int) -> "Mask":
        return cls(width, height, [False] * (width * height))

    def idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> bool:
        return self.buf[self.idx(x, y)]

    def set(self, x: int, y: int, v: bool) -> None:
        self.buf[self.idx(x, y)] = v

    def count(self) -> int:
        return sum(self.buf)

    def obstacles(self) -> List[Coord]:
        return [Coord(i % self.width, i // self.width) for i, v in enumerate(self.buf) if v]

    def as_rows(self) -> List[List[bool]]:
        """Row-major copy: rows[y][x]."""
        w = self.width
        return [self.buf[y * w:(y + 1) * w] for y in range(self.height)]
