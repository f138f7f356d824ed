"""Coherent noise used by world generation.

A ``PerlinNoise`` generator is classic gradient noise: each lattice corner
gets one of eight unit gradients picked through a seeded permutation table,
and the four corner contributions are blended with a quintic fade curve.
Sampling is vectorised over NumPy arrays so a whole world can be evaluated
in one call; single-point sampling goes through the same code path and
therefore returns bit-identical values.

``NoiseField`` bundles the two independent generators a world needs
(terrain and resources).  Only the seed is ever persisted -- the tables are
cheap to rebuild.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

_TABLE_SIZE = 256
_UINT64_MASK = (1 << 64) - 1
_SCALE = math.sqrt(2.0)  # unit-gradient 2D Perlin peaks at sqrt(2)/2

_GRADIENTS: NDArray[np.float64] = np.array(
    [
        (math.cos(k * math.pi / 4.0), math.sin(k * math.pi / 4.0))
        for k in range(8)
    ],
    dtype=np.float64,
)


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


@dataclass
class PerlinNoise:
    """Seeded 2D Perlin noise with output in ``[-1, 1]``.

    Attributes:
        seed: Seed for the permutation table (any non-negative integer).
    """

    seed: int
    _perm: NDArray[np.int64] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Build the doubled permutation table from the seed."""
        rng = np.random.default_rng(self.seed)
        perm = rng.permutation(_TABLE_SIZE).astype(np.int64)
        self._perm = np.concatenate([perm, perm])

    def sample(self, x: float, y: float) -> float:
        """Return the noise value at a single point."""
        xs = np.array([x], dtype=np.float64)
        ys = np.array([y], dtype=np.float64)
        return float(self.sample_many(xs, ys)[0])

    def sample_grid(
        self,
        width: int,
        height: int,
        frequency: float,
    ) -> NDArray[np.float64]:
        """Sample at ``(x * frequency, y * frequency)`` for every grid cell.

        Args:
            width: Number of columns.
            height: Number of rows.
            frequency: Lattice units per cell.

        Returns:
            Array of shape ``(height, width)`` indexed ``[y, x]``.
        """
        ys, xs = np.mgrid[0:height, 0:width]
        return self.sample_many(
            xs.astype(np.float64) * frequency,
            ys.astype(np.float64) * frequency,
        )

    def sample_many(
        self,
        xs: NDArray[np.float64],
        ys: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        """Vectorised noise evaluation over matching coordinate arrays."""
        x0 = np.floor(xs).astype(np.int64)
        y0 = np.floor(ys).astype(np.int64)
        fx = xs - x0
        fy = ys - y0

        xi = x0 & (_TABLE_SIZE - 1)
        yi = y0 & (_TABLE_SIZE - 1)
        xj = (xi + 1) & (_TABLE_SIZE - 1)
        yj = (yi + 1) & (_TABLE_SIZE - 1)

        n00 = self._corner(xi, yi, fx, fy)
        n10 = self._corner(xj, yi, fx - 1.0, fy)
        n01 = self._corner(xi, yj, fx, fy - 1.0)
        n11 = self._corner(xj, yj, fx - 1.0, fy - 1.0)

        u = _fade(fx)
        v = _fade(fy)
        bottom = n00 + u * (n10 - n00)
        top = n01 + u * (n11 - n01)
        value = bottom + v * (top - bottom)
        return np.clip(value * _SCALE, -1.0, 1.0)

    def _corner(
        self,
        ix: NDArray[np.int64],
        iy: NDArray[np.int64],
        dx: NDArray[np.float64],
        dy: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        """Dot product of a corner's gradient with the offset to the point."""
        index = self._perm[self._perm[ix] + iy] & 7
        grad = _GRADIENTS[index]
        return grad[..., 0] * dx + grad[..., 1] * dy


@dataclass
class NoiseField:
    """The pair of independent noise generators behind a world.

    Attributes:
        seed: World seed (uint64).
        resource_seed_offset: Added to the seed (mod 2**64) for the
            resource generator so it never mirrors the terrain.
        terrain: Generator driving terrain classification.
        resources: Generator driving resource placement.
    """

    seed: int
    resource_seed_offset: int = 42
    terrain: PerlinNoise = field(init=False, repr=False)
    resources: PerlinNoise = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Derive both generators from the world seed."""
        self.terrain = PerlinNoise(self.seed & _UINT64_MASK)
        self.resources = PerlinNoise(
            (self.seed + self.resource_seed_offset) & _UINT64_MASK,
        )
