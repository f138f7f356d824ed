"""Tasks — the intents a behaviour emits for the driver to carry out.

A task is a value: it is produced fresh by each decision, never mutated, and
compared by content.  ``task_type`` is one of four variants; use
``isinstance`` (or ``match``) to tell them apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from nova.world.terrain import ResourceKind
from nova.world.world import Position

_MAX_PRIORITY = 255


class AnalysisKind(Enum):
    """Category of on-site analysis a scientist performs."""

    CHEMICAL = auto()


@dataclass(frozen=True)
class ExploreTask:
    """Survey the area around ``target_area``."""

    target_area: Position
    radius: int


@dataclass(frozen=True)
class HarvestTask:
    """Collect a deposit of ``resource_kind`` at ``target_position``."""

    resource_kind: ResourceKind
    target_position: Position


@dataclass(frozen=True)
class AnalyzeTask:
    """Study the point of interest at ``target_position``."""

    target_position: Position
    analysis_kind: AnalysisKind


@dataclass(frozen=True)
class ReturnToStation:
    """Head back to the station (to refuel or unload)."""


TaskType = ExploreTask | HarvestTask | AnalyzeTask | ReturnToStation


@dataclass(frozen=True)
class Task:
    """A prioritised intent.

    Attributes:
        task_type: What to do.
        target_position: Where to go, if the task has a destination.
        priority: Urgency from 0 to 255; higher is more urgent.
    """

    task_type: TaskType
    target_position: Position | None
    priority: int

    def __post_init__(self) -> None:
        """Reject priorities outside the 0-255 range."""
        if not 0 <= self.priority <= _MAX_PRIORITY:
            msg = f"Task priority must be in 0..{_MAX_PRIORITY}, got {self.priority}"
            raise ValueError(msg)


class Direction(Enum):
    """Eight-way movement step.  North decreases ``y``."""

    NORTH = (0, -1)
    SOUTH = (0, 1)
    EAST = (1, 0)
    WEST = (-1, 0)
    NORTHEAST = (1, -1)
    NORTHWEST = (-1, -1)
    SOUTHEAST = (1, 1)
    SOUTHWEST = (-1, 1)

    @property
    def delta(self) -> tuple[int, int]:
        """Return the ``(dx, dy)`` offset of one step."""
        return self.value

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> Direction | None:
        """Return the direction for a unit step, or None if it is not one."""
        try:
            return cls((dx, dy))
        except ValueError:
            return None
