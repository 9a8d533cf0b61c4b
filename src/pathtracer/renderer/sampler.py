# renderer/sampler.py
import random

import numpy as np
from numba import njit

# Number of 2D points generated per chunk and per pass.
SAMPLE_BLOCK_SIZE = 4096

# Largest start offset into the sequence drawn for a block.
MAX_HALTON_OFFSET = 1 << 20


@njit(cache=True)
def halton(index, base):
    """
    Compute the Halton sequence value for a given index and base.
    """
    f = 1.0
    r = 0.0
    while index > 0:
        f = f / base
        r = r + f * (index % base)
        index = index // base
    return r


@njit(cache=True)
def halton_block(offset, count):
    """
    ``count`` consecutive 2D Halton points (bases 2 and 3) starting at
    sequence index ``offset + 1``. Returns a ``(count, 2)`` float64 array
    with every value in [0, 1).
    """
    block = np.empty((count, 2), dtype=np.float64)
    for i in range(count):
        block[i, 0] = halton(offset + i + 1, 2)
        block[i, 1] = halton(offset + i + 1, 3)
    return block


class SampleBlock:
    """
    Chunk-local cursor over a block of low-discrepancy points.

    The block is drawn once per chunk and pass and reused cyclically for
    every pixel, primary ray and bounce of that chunk.
    """

    def __init__(self, points: np.ndarray):
        if len(points) == 0:
            raise ValueError("A sample block needs at least one point")
        self.points = points
        self.index = 0

    @classmethod
    def draw(cls, rng: random.Random, size: int = SAMPLE_BLOCK_SIZE) -> "SampleBlock":
        """Block of ``size`` points starting at a random offset taken from ``rng``."""
        return cls(halton_block(rng.randrange(MAX_HALTON_OFFSET), size))

    def __len__(self):
        return len(self.points)

    def next(self):
        """Returns the next ``(r1, r2)`` pair, wrapping at the end of the block."""
        r1, r2 = self.points[self.index]
        self.index = (self.index + 1) % len(self.points)
        return float(r1), float(r2)
