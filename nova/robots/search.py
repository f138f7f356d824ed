"""Radius search over the world grid.

``radius_search`` grows a square window around an origin one ring at a
time, but rescans the *whole* window at each radius (not just the new
ring).  Within a radius the scan order is ``dx`` ascending, then ``dy``
ascending, so ties between equally distant matches resolve to the one with
the smallest ``dx`` (then ``dy``) rather than the Euclidean nearest.
Behaviours rely on that order being stable.
"""

from __future__ import annotations

from collections.abc import Callable, Collection

from nova.world.terrain import ResourceKind, TerrainType
from nova.world.world import Position, World

Predicate = Callable[[World, int, int], bool]


def radius_search(
    world: World,
    origin: Position,
    max_radius: int,
    predicate: Predicate,
) -> Position | None:
    """Return the first in-bounds cell around ``origin`` matching ``predicate``.

    Args:
        world: The world to scan.
        origin: Centre of the search window.
        max_radius: Largest half-width of the window to try.
        predicate: Called as ``predicate(world, x, y)``.

    Returns:
        The matching ``(x, y)``, or None if nothing matched.
    """
    ox, oy = origin
    for radius in range(1, max_radius + 1):
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                x, y = ox + dx, oy + dy
                if world.in_bounds(x, y) and predicate(world, x, y):
                    return x, y
    return None


def find_nearest_resource(
    world: World,
    origin: Position,
    max_radius: int,
    allowed_kinds: Collection[ResourceKind],
) -> tuple[Position, ResourceKind] | None:
    """Find the first deposit of one of ``allowed_kinds`` around ``origin``."""

    def has_allowed(w: World, x: int, y: int) -> bool:
        deposit = w.resources.get((x, y))
        return deposit is not None and deposit.kind in allowed_kinds

    found = radius_search(world, origin, max_radius, has_allowed)
    if found is None:
        return None
    return found, world.resources[found].kind


def find_nearest_unexplored(
    world: World,
    origin: Position,
    max_radius: int,
) -> Position | None:
    """Find the first undiscovered plain around ``origin``."""
    return radius_search(
        world,
        origin,
        max_radius,
        lambda w, x, y: (
            not w.discovered[y, x] and w.terrain[y, x] == TerrainType.PLAIN
        ),
    )


def find_nearest_scientific_interest(
    world: World,
    origin: Position,
    max_radius: int,
) -> Position | None:
    """Find the first scientific-interest deposit around ``origin``."""
    found = find_nearest_resource(
        world,
        origin,
        max_radius,
        (ResourceKind.SCIENTIFIC_INTEREST,),
    )
    return None if found is None else found[0]


def count_nearby_resources(world: World, origin: Position, radius: int) -> int:
    """Count deposits within the square window of half-width ``radius``."""
    ox, oy = origin
    count = 0
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if (ox + dx, oy + dy) in world.resources:
                count += 1
    return count
