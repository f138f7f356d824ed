"""Procedural world generation from a single seed.

Two passes run over a fresh :class:`World`:

1. **Terrain**: terrain noise sampled at ``(x*f, y*f)`` is normalised to
   ``[0, 1]`` and bucketed by ascending thresholds into plain, hill,
   mountain or canyon.
2. **Resources**: an independently seeded noise field, sampled at
   ``1.5 * f``, is checked against descending rarity thresholds
   (scientific interest, then mineral, then energy).  Deposit amounts are
   drawn from one seeded NumPy stream, advanced once per placed deposit in
   row-major order (``y`` outer, ``x`` inner).  The scan order is part of
   the reproducibility contract: same seed and size, same world.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from nova.world.noise import NoiseField
from nova.world.terrain import Resource, ResourceKind, TerrainType
from nova.world.world import World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationParams:
    """Constants steering terrain and resource generation.

    Attributes:
        noise_frequency: Lattice units per cell for the terrain field.
        plain_threshold: Normalised terrain value below which a cell is plain.
        hill_threshold: ... below which it is a hill.
        mountain_threshold: ... below which it is a mountain (else canyon).
        resource_frequency_scale: Multiplier on ``noise_frequency`` for the
            resource field.
        scientific_threshold: Normalised resource value above which a cell
            holds a scientific-interest deposit.
        mineral_threshold: ... above which it holds minerals.
        energy_threshold: ... above which it holds energy.
        min_scientific_amount: Smallest scientific deposit.
        min_mineral_amount: Smallest mineral deposit.
        min_energy_amount: Smallest energy deposit.
        max_resource_amount: Largest deposit of any kind (inclusive).
        resource_seed_offset: Offset separating the resource seed from the
            terrain seed.
    """

    noise_frequency: float = 0.1
    plain_threshold: float = 0.40
    hill_threshold: float = 0.70
    mountain_threshold: float = 0.85
    resource_frequency_scale: float = 1.5
    scientific_threshold: float = 0.85
    mineral_threshold: float = 0.70
    energy_threshold: float = 0.60
    min_scientific_amount: int = 10
    min_mineral_amount: int = 20
    min_energy_amount: int = 30
    max_resource_amount: int = 100
    resource_seed_offset: int = 42


def classify_terrain(value: float, params: GenerationParams) -> TerrainType:
    """Bucket a normalised terrain value into a terrain type."""
    if value < params.plain_threshold:
        return TerrainType.PLAIN
    if value < params.hill_threshold:
        return TerrainType.HILL
    if value < params.mountain_threshold:
        return TerrainType.MOUNTAIN
    return TerrainType.CANYON


def classify_resource(
    value: float,
    params: GenerationParams,
) -> tuple[ResourceKind, int] | None:
    """Map a normalised resource value to ``(kind, minimum amount)``.

    Rarest first: once a check matches, the more common kinds are never
    considered.
    """
    if value > params.scientific_threshold:
        return ResourceKind.SCIENTIFIC_INTEREST, params.min_scientific_amount
    if value > params.mineral_threshold:
        return ResourceKind.MINERAL, params.min_mineral_amount
    if value > params.energy_threshold:
        return ResourceKind.ENERGY, params.min_energy_amount
    return None


def generate(
    width: int,
    height: int,
    seed: int,
    params: GenerationParams | None = None,
) -> World:
    """Generate a world of the given size from ``seed``.

    Args:
        width: Number of grid columns.
        height: Number of grid rows.
        seed: World seed (uint64).
        params: Generation constants; defaults to ``GenerationParams()``.

    Returns:
        A populated World with every cell undiscovered.
    """
    params = params or GenerationParams()
    world = World(width=width, height=height, seed=seed)
    if params.resource_seed_offset != world.noise.resource_seed_offset:
        world.noise = NoiseField(seed, params.resource_seed_offset)

    _generate_terrain(world, params)
    _generate_resources(world, params)

    if logger.isEnabledFor(logging.DEBUG):
        counts = world.resource_counts()
        logger.debug(
            "Generated %dx%d world (seed=%d): %d deposits %s",
            width,
            height,
            seed,
            len(world.resources),
            {kind.value: n for kind, n in counts.items()},
        )
    return world


def _generate_terrain(world: World, params: GenerationParams) -> None:
    raw = world.noise.terrain.sample_grid(
        world.width,
        world.height,
        params.noise_frequency,
    )
    normalised = (raw + 1.0) / 2.0
    for y in range(world.height):
        for x in range(world.width):
            world.terrain[y, x] = classify_terrain(float(normalised[y, x]), params)


def _generate_resources(world: World, params: GenerationParams) -> None:
    rng = np.random.default_rng(world.seed)
    raw = world.noise.resources.sample_grid(
        world.width,
        world.height,
        params.noise_frequency * params.resource_frequency_scale,
    )
    normalised = (raw + 1.0) / 2.0

    # Row-major: each placed deposit advances the amount stream exactly once
    for y in range(world.height):
        for x in range(world.width):
            placement = classify_resource(float(normalised[y, x]), params)
            if placement is None:
                continue
            kind, low = placement
            amount = int(rng.integers(low, params.max_resource_amount + 1))
            world.resources[(x, y)] = Resource(kind, amount)
