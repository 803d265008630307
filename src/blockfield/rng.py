# src/blockfield/rng.py
# Park–Miller "minimal standard" generator. The algorithm is fixed so that a
# given seed yields the same map on every platform.

from dataclasses import dataclass
from typing import List, Sequence, TypeVar

T = TypeVar("T")

A = 16807
M = 0x7FFFFFFF  # 2^31-1
SPAN = M - 1    # number of distinct outputs: 1..M-1


def pm_next(state: int) -> int:
    return (state * A) % M


def seed_state(seed: int) -> int:
    """Map any integer seed onto a valid Park–Miller state (1..M-1)."""
    s = seed % M
    return s or 1  # 0 is a fixed point of the recurrence


@dataclass
class PMRandom:
    state: int

    @classmethod
    def from_seed(cls, seed: int) -> "PMRandom":
        return cls(seed_state(seed))

    def next32(self) -> int:
        self.state = pm_next(self.state)
        return self.state

    def randrange(self, lo: int, hi: int) -> int:
        """Uniform integer in [lo, hi). Rejection sampling keeps it unbiased."""
        n = hi - lo
        if n <= 0:
            raise ValueError(f"empty range [{lo}, {hi})")
        limit = SPAN - (SPAN % n)
        while True:
            r = self.next32() - 1  # 0..SPAN-1
            if r < limit:
                return lo + (r % n)

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return (self.next32() - 1) / SPAN


def shuffle(sequence: Sequence[T], seed: int) -> List[T]:
    """
    Fisher–Yates over a copy of `sequence`:
      for i in 0..n-2, pick j uniformly in [i, n-1] and swap i,j.
    Identical (sequence, seed) always gives the identical permutation.
    """
    out = list(sequence)
    rng = PMRandom.from_seed(seed)
    for i in range(len(out) - 1):
        j = rng.randrange(i, len(out))
        out[i], out[j] = out[j], out[i]
    return out
