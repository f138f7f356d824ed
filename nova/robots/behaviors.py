"""Behaviours — per-class decision strategies for robots.

Every strategy evaluates the same fixed ladder and stops at the first rung
that yields a task:

1. **Return** when carrying cargo or running low on energy.
2. **Search** for the class's objective within its sensor radius.
3. **Fallback** exploration toward a deterministic target, if it is a plain.
4. Nothing.

Strategies are stateless; ``create_behavior`` hands out a shared instance
per robot class.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Protocol

from nova.robots.entities import RobotClass
from nova.robots.search import (
    count_nearby_resources,
    find_nearest_resource,
    find_nearest_scientific_interest,
    find_nearest_unexplored,
)
from nova.robots.tasks import (
    AnalysisKind,
    AnalyzeTask,
    ExploreTask,
    HarvestTask,
    ReturnToStation,
    Task,
)
from nova.world.terrain import ResourceKind, TerrainType

if TYPE_CHECKING:
    from nova.robots.entities import Robot, Station
    from nova.world.world import Position, World

_UINT64_MASK = (1 << 64) - 1


def stable_hash(*values: int) -> int:
    """Mix integers into a 64-bit value that is stable across runs.

    Each input goes through the MurmurHash3 ``fmix64`` finaliser and is folded
    into the accumulator with a multiply.  This is not cryptographic; it only
    needs to spread nearby inputs apart reproducibly, which the built-in
    ``hash`` does not guarantee across processes.
    """
    acc = 0x345678ABCDEF1234
    for value in values:
        v = value & _UINT64_MASK
        v ^= v >> 33
        v = (v * 0xFF51AFD7ED558CCD) & _UINT64_MASK
        v ^= v >> 33
        acc ^= v
        acc = (acc * 0xC4CEB9FE1A85EC53) & _UINT64_MASK
    return acc


def _return_to_station(station: Station, priority: int) -> Task:
    return Task(
        task_type=ReturnToStation(),
        target_position=station.position,
        priority=priority,
    )


def _explore(target: Position, radius: int, priority: int) -> Task:
    return Task(
        task_type=ExploreTask(target_area=target, radius=radius),
        target_position=target,
        priority=priority,
    )


def _plain_or_none(world: World, target: Position) -> Position | None:
    x, y = target
    if not world.in_bounds(x, y):
        return None
    if world.terrain[y, x] != TerrainType.PLAIN:
        return None
    return target


class RobotBehavior(Protocol):
    """Contract shared by all robot strategies."""

    def decide_next_action(
        self,
        robot: Robot,
        world: World,
        station: Station,
    ) -> Task | None:
        """Pick the robot's next task, or None if it has nothing to do."""
        ...

    def preferred_resources(self) -> frozenset[ResourceKind]:
        """Resource kinds this class goes looking for."""
        ...

    def energy_consumption_rate(self) -> int:
        """Energy spent per tick of activity."""
        ...

    def can_perform(self, task: Task) -> bool:
        """Return True if this class accepts ``task``."""
        ...


class ExplorerBehavior:
    """Scouts undiscovered plains and otherwise wanders pseudo-randomly."""

    LOW_ENERGY: ClassVar[int] = 20
    SEARCH_RADIUS: ClassVar[int] = 5

    def decide_next_action(
        self,
        robot: Robot,
        world: World,
        station: Station,
    ) -> Task | None:
        """Return, explore the nearest unknown plain, or wander."""
        if robot.energy < self.LOW_ENERGY or robot.is_carrying:
            return _return_to_station(station, priority=9)

        unexplored = find_nearest_unexplored(
            world,
            robot.position,
            self.SEARCH_RADIUS,
        )
        if unexplored is not None:
            return _explore(unexplored, radius=3, priority=7)

        target = self.random_exploration_target(robot, world)
        if target is not None:
            return _explore(target, radius=2, priority=5)

        return None

    def random_exploration_target(
        self,
        robot: Robot,
        world: World,
    ) -> Position | None:
        """Derive a wander target from ``(id, x, y)``, kept off the border.

        Returns None when the target is not a plain (or, on worlds under
        three cells wide or tall, falls outside the grid).
        """
        seed = stable_hash(robot.robot_id, robot.x, robot.y)
        tx = min(max(seed % world.width, 1), world.width - 2)
        ty = min(max((seed >> 16) % world.height, 1), world.height - 2)
        return _plain_or_none(world, (tx, ty))

    def preferred_resources(self) -> frozenset[ResourceKind]:
        """Explorers do not gather anything."""
        return frozenset()

    def energy_consumption_rate(self) -> int:
        """Explorers are the most frugal class."""
        return 2

    def can_perform(self, task: Task) -> bool:
        """Accept exploration and returning."""
        return isinstance(task.task_type, ExploreTask | ReturnToStation)


class HarvesterBehavior:
    """Gathers energy and minerals, drifting toward the map centre otherwise."""

    LOW_ENERGY: ClassVar[int] = 15
    SEARCH_RADIUS: ClassVar[int] = 4
    _PREFERRED: ClassVar[frozenset[ResourceKind]] = frozenset(
        {ResourceKind.ENERGY, ResourceKind.MINERAL},
    )

    def decide_next_action(
        self,
        robot: Robot,
        world: World,
        station: Station,
    ) -> Task | None:
        """Return, harvest the nearest preferred deposit, or go look for one."""
        if robot.is_carrying or robot.energy < self.LOW_ENERGY:
            return _return_to_station(station, priority=10)

        found = find_nearest_resource(
            world,
            robot.position,
            self.SEARCH_RADIUS,
            self._PREFERRED,
        )
        if found is not None:
            position, kind = found
            return Task(
                task_type=HarvestTask(resource_kind=kind, target_position=position),
                target_position=position,
                priority=8,
            )

        target = self.resource_exploration_target(robot, world)
        if target is not None:
            return _explore(target, radius=2, priority=6)

        return None

    def resource_exploration_target(
        self,
        robot: Robot,
        world: World,
    ) -> Position | None:
        """Step two cells toward the centre along each axis."""
        if robot.x < world.width // 2:
            tx = robot.x + 2
        else:
            tx = max(robot.x - 2, 0)
        if robot.y < world.height // 2:
            ty = robot.y + 2
        else:
            ty = max(robot.y - 2, 0)
        tx = min(tx, world.width - 1)
        ty = min(ty, world.height - 1)
        return _plain_or_none(world, (tx, ty))

    def preferred_resources(self) -> frozenset[ResourceKind]:
        """Energy and minerals."""
        return self._PREFERRED

    def energy_consumption_rate(self) -> int:
        """Hauling costs more than scouting."""
        return 3

    def can_perform(self, task: Task) -> bool:
        """Accept harvesting, exploration and returning."""
        return isinstance(
            task.task_type,
            HarvestTask | ExploreTask | ReturnToStation,
        )


class ScientistBehavior:
    """Analyses points of scientific interest."""

    LOW_ENERGY: ClassVar[int] = 25
    SEARCH_RADIUS: ClassVar[int] = 6
    DENSITY_RADIUS: ClassVar[int] = 2
    PATTERN_OFFSET: ClassVar[tuple[int, int]] = (3, 2)

    def decide_next_action(
        self,
        robot: Robot,
        world: World,
        station: Station,
    ) -> Task | None:
        """Return, analyse the nearest point of interest, or follow the pattern."""
        if robot.is_carrying or robot.energy < self.LOW_ENERGY:
            return _return_to_station(station, priority=9)

        poi = find_nearest_scientific_interest(
            world,
            robot.position,
            self.SEARCH_RADIUS,
        )
        if poi is not None:
            return Task(
                task_type=AnalyzeTask(
                    target_position=poi,
                    analysis_kind=self.determine_analysis_kind(poi, world),
                ),
                target_position=poi,
                priority=8,
            )

        target = self.scientific_exploration_target(robot, world)
        if target is not None:
            return _explore(target, radius=2, priority=6)

        return None

    def determine_analysis_kind(
        self,
        position: Position,
        world: World,
    ) -> AnalysisKind:
        """Choose the analysis for a site from its local deposit density.

        Only chemical analysis exists so far, so every density maps to it.
        """
        density = count_nearby_resources(world, position, self.DENSITY_RADIUS)
        if density > 2:
            return AnalysisKind.CHEMICAL
        return AnalysisKind.CHEMICAL

    def scientific_exploration_target(
        self,
        robot: Robot,
        world: World,
    ) -> Position | None:
        """Offset the position by a fixed pattern, wrapping at the edges."""
        dx, dy = self.PATTERN_OFFSET
        target = ((robot.x + dx) % world.width, (robot.y + dy) % world.height)
        return _plain_or_none(world, target)

    def preferred_resources(self) -> frozenset[ResourceKind]:
        """Only scientific interest."""
        return frozenset({ResourceKind.SCIENTIFIC_INTEREST})

    def energy_consumption_rate(self) -> int:
        """Instruments make scientists the hungriest class."""
        return 4

    def can_perform(self, task: Task) -> bool:
        """Accept analysis, exploration and returning."""
        return isinstance(
            task.task_type,
            AnalyzeTask | ExploreTask | ReturnToStation,
        )


_BEHAVIORS: dict[RobotClass, RobotBehavior] = {
    RobotClass.EXPLORER: ExplorerBehavior(),
    RobotClass.HARVESTER: HarvesterBehavior(),
    RobotClass.SCIENTIST: ScientistBehavior(),
}


def create_behavior(robot_class: RobotClass) -> RobotBehavior:
    """Return the strategy for a robot class."""
    return _BEHAVIORS[robot_class]
