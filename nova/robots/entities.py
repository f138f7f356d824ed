"""Robots and the station they report back to.

Both are plain state containers owned by whoever drives the simulation.
Behaviours and the pathfinder only read them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from nova.world.terrain import Resource, ResourceKind


class RobotClass(Enum):
    """Specialisation of a robot, which selects its behaviour strategy."""

    EXPLORER = auto()
    HARVESTER = auto()
    SCIENTIST = auto()


@dataclass
class Robot:
    """A single robot agent.

    Attributes:
        robot_id: Unique identifier.
        robot_class: Specialisation driving its decisions.
        x: Current column position in the world grid.
        y: Current row position in the world grid.
        energy: Remaining energy units.
        carrying: Cargo currently held, if any.
    """

    robot_id: int
    robot_class: RobotClass
    x: int
    y: int
    energy: int = 100
    carrying: Resource | None = None

    @property
    def position(self) -> tuple[int, int]:
        """Return ``(x, y)``."""
        return self.x, self.y

    @property
    def is_carrying(self) -> bool:
        """Return True if the robot holds any cargo."""
        return self.carrying is not None


@dataclass
class Station:
    """The base robots return to with cargo and findings.

    Attributes:
        x: Column of the station.
        y: Row of the station.
        resources: Delivered totals per resource kind.
        discoveries: Number of scientific findings reported.
    """

    x: int
    y: int
    resources: dict[ResourceKind, int] = field(default_factory=dict)
    discoveries: int = 0

    @property
    def position(self) -> tuple[int, int]:
        """Return ``(x, y)``."""
        return self.x, self.y
