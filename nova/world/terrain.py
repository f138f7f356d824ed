"""Terrain and resource value types stored in the world grid.

Terrain lives in a compact ``uint8`` grid on the World, so the enum values
double as the persisted ordinals.  Resources are immutable values; the
world hands out the same objects it stores without risk of aliasing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class TerrainType(IntEnum):
    """Terrain classification of a single cell."""

    PLAIN = 0
    HILL = 1
    MOUNTAIN = 2
    CANYON = 3

    @classmethod
    def from_ordinal(cls, value: int) -> TerrainType:
        """Return the terrain for ``value``, defaulting to PLAIN when unknown."""
        try:
            return cls(value)
        except ValueError:
            return cls.PLAIN

    @property
    def is_traversable(self) -> bool:
        """Only plains can be walked through."""
        return self is TerrainType.PLAIN

    @property
    def movement_cost(self) -> int:
        """Energy multiplier for entering a cell of this terrain."""
        return _MOVEMENT_COSTS[self]


_MOVEMENT_COSTS = {
    TerrainType.PLAIN: 1,
    TerrainType.HILL: 2,
    TerrainType.MOUNTAIN: 3,
    TerrainType.CANYON: 4,
}


class ResourceKind(Enum):
    """Kinds of deposits found in the world, from most to least common."""

    ENERGY = "Energy"
    MINERAL = "Mineral"
    SCIENTIFIC_INTEREST = "ScientificInterest"


@dataclass(frozen=True)
class Resource:
    """A deposit (or a carried load) of a single resource kind.

    Attributes:
        kind: What the deposit contains.
        amount: Units remaining.
    """

    kind: ResourceKind
    amount: int
