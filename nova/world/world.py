"""World grid — the spatial container for terrain, deposits and fog of war.

The World owns a terrain grid, a discovered (fog-of-war) grid and a sparse
resource store keyed by ``(x, y)``.  Every accessor and mutator checks
bounds before touching state, so a failed call never leaves a partial
mutation behind.

A bare ``World(width, height)`` is all plains with no deposits; use
:func:`nova.world.generator.generate` (or :meth:`World.generate`) for a
procedurally populated one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from nova.world.errors import (
    InsufficientResourcesError,
    NoResourceAtPositionError,
    OutOfBoundsError,
)
from nova.world.noise import NoiseField
from nova.world.terrain import Resource, ResourceKind, TerrainType

if TYPE_CHECKING:
    from nova.world.generator import GenerationParams

Position = tuple[int, int]


@dataclass
class World:
    """A 2D grid world holding all spatial state.

    Attributes:
        width: Number of columns in the grid.
        height: Number of rows in the grid.
        seed: Source of truth for regeneration and reproducibility.
        terrain: ``uint8`` terrain ordinals indexed as ``terrain[y, x]``.
        discovered: Fog-of-war flags indexed as ``discovered[y, x]``.
        resources: Deposits keyed by ``(x, y)``.
        noise: Noise generators rebuilt from ``seed`` (never persisted).
    """

    width: int
    height: int
    seed: int = 0
    terrain: NDArray[np.uint8] = field(init=False, repr=False)
    discovered: NDArray[np.bool_] = field(init=False, repr=False)
    resources: dict[Position, Resource] = field(
        init=False,
        repr=False,
        default_factory=dict,
    )
    noise: NoiseField = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialise an all-plain, undiscovered grid."""
        if self.width <= 0 or self.height <= 0:
            msg = f"World dimensions must be positive, got {self.width}x{self.height}"
            raise ValueError(msg)
        self.terrain = np.full(
            (self.height, self.width),
            TerrainType.PLAIN,
            dtype=np.uint8,
        )
        self.discovered = np.zeros((self.height, self.width), dtype=np.bool_)
        self.resources = {}
        self.noise = NoiseField(self.seed)

    @classmethod
    def generate(
        cls,
        width: int,
        height: int,
        seed: int,
        params: GenerationParams | None = None,
    ) -> World:
        """Build a procedurally generated world (see ``generator.generate``)."""
        from nova.world.generator import generate

        return generate(width, height, seed, params)

    @property
    def dimensions(self) -> Position:
        """Return ``(width, height)``."""
        return self.width, self.height

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)

    # -- Terrain --

    def terrain_at(self, x: int, y: int) -> TerrainType:
        """Return the terrain classification at ``(x, y)``.

        Raises:
            OutOfBoundsError: If coordinates are out of bounds.
        """
        self._check_bounds(x, y)
        return TerrainType.from_ordinal(int(self.terrain[y, x]))

    def set_terrain(self, x: int, y: int, terrain: TerrainType) -> None:
        """Overwrite the terrain at ``(x, y)``."""
        self._check_bounds(x, y)
        self.terrain[y, x] = terrain

    def is_traversable(self, x: int, y: int) -> bool:
        """Return True if a robot may route through ``(x, y)``."""
        return self.terrain_at(x, y).is_traversable

    def neighbours(
        self,
        x: int,
        y: int,
        *,
        include_diagonals: bool = True,
    ) -> list[Position]:
        """Return adjacent in-bounds positions for the given cell.

        Neighbours come in compass order: N, S, E, W, then NE, NW, SE, SW.
        The pathfinder expands cells in this order.

        Args:
            x: Column index.
            y: Row index.
            include_diagonals: If True, return up to 8 neighbours; otherwise 4.
        """
        offsets = [(0, -1), (0, 1), (1, 0), (-1, 0)]
        if include_diagonals:
            offsets += [(1, -1), (-1, -1), (1, 1), (-1, 1)]

        result: list[Position] = []
        for dx, dy in offsets:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                result.append((nx, ny))
        return result

    # -- Fog of war --

    def discover(self, x: int, y: int) -> None:
        """Mark ``(x, y)`` as discovered.  Discovery is never undone."""
        self._check_bounds(x, y)
        self.discovered[y, x] = True

    def is_discovered(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` has been discovered."""
        self._check_bounds(x, y)
        return bool(self.discovered[y, x])

    # -- Resource store --

    def get_resource(self, x: int, y: int) -> Resource | None:
        """Return the deposit at ``(x, y)``, or None if the cell is empty.

        Raises:
            OutOfBoundsError: If coordinates are out of bounds.
        """
        self._check_bounds(x, y)
        return self.resources.get((x, y))

    def place_resource(self, x: int, y: int, resource: Resource) -> None:
        """Insert (or replace) the deposit at ``(x, y)``."""
        self._check_bounds(x, y)
        if resource.amount < 0:
            msg = f"Resource amount must be non-negative, got {resource.amount}"
            raise ValueError(msg)
        self.resources[(x, y)] = resource

    def collect_resource(self, x: int, y: int, amount: int) -> Resource:
        """Take ``amount`` units from the deposit at ``(x, y)``.

        The deposit shrinks by exactly ``amount`` and is removed once it
        reaches zero.

        Args:
            x: Column index.
            y: Row index.
            amount: Units to collect.

        Returns:
            The kind and amount collected.

        Raises:
            OutOfBoundsError: If coordinates are out of bounds.
            NoResourceAtPositionError: If the cell holds no deposit.
            InsufficientResourcesError: If ``amount`` exceeds the deposit.
        """
        self._check_bounds(x, y)
        if amount < 0:
            msg = f"Cannot collect a negative amount ({amount})"
            raise ValueError(msg)

        deposit = self.resources.get((x, y))
        if deposit is None:
            raise NoResourceAtPositionError(x, y)
        if amount > deposit.amount:
            raise InsufficientResourcesError(amount, deposit.amount)

        remaining = deposit.amount - amount
        if remaining == 0:
            del self.resources[(x, y)]
        else:
            self.resources[(x, y)] = Resource(deposit.kind, remaining)
        return Resource(deposit.kind, amount)

    def resource_counts(self) -> dict[ResourceKind, int]:
        """Return the number of deposits of each kind."""
        counts = {kind: 0 for kind in ResourceKind}
        for deposit in self.resources.values():
            counts[deposit.kind] += 1
        return counts
