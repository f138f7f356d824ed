"""Session — a generated world with its station and robot roster.

A session wires the core together for one planning pass:

1. Generate the world from the configured seed and size.
2. Place the station on the plain nearest the map centre.
3. Spawn the robots on the station, cycling through the robot classes.
4. Let every robot decide its next task and, on request, route it there.

The session never advances time; executing tasks (moving, collecting,
discovering) belongs to whoever drives the robots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from nova.robots.behaviors import RobotBehavior, create_behavior
from nova.robots.entities import Robot, RobotClass, Station
from nova.robots.pathfinding import Pathfinder
from nova.robots.search import radius_search
from nova.robots.tasks import Direction, Task
from nova.simulation.config import SimulationConfig
from nova.world.generator import generate
from nova.world.persistence import save_world
from nova.world.terrain import TerrainType
from nova.world.world import Position, World

logger = logging.getLogger(__name__)

_CLASS_CYCLE: tuple[RobotClass, ...] = (
    RobotClass.EXPLORER,
    RobotClass.HARVESTER,
    RobotClass.SCIENTIST,
)


@dataclass(frozen=True)
class Route:
    """A planned path toward a task target.

    Attributes:
        path: Cells from the robot's position to the target, inclusive.
        first_move: Direction of the first step (None if already there).
        energy_cost: Energy needed to walk the whole path.
    """

    path: list[Position]
    first_move: Direction | None
    energy_cost: int

    @property
    def steps(self) -> int:
        """Number of moves along the path."""
        return len(self.path) - 1


@dataclass
class Session:
    """Owns the world, station and robots for one planning pass.

    Attributes:
        config: Loaded simulation configuration.
        world: The generated world.
        station: Where robots start and return to.
        robots: All robots, in spawn order.
        pathfinder: Router shared by all robots.
    """

    config: SimulationConfig
    world: World = field(init=False)
    station: Station = field(init=False)
    robots: list[Robot] = field(init=False, default_factory=list)
    pathfinder: Pathfinder = field(init=False, default_factory=Pathfinder)

    def __post_init__(self) -> None:
        """Generate the world, then place the station and robots."""
        self.config.validate()
        self.world = generate(
            self.config.world_width,
            self.config.world_height,
            self.config.seed,
        )
        sx, sy = self._station_site()
        self.station = Station(x=sx, y=sy)
        self.world.discover(sx, sy)
        self.robots = [
            Robot(
                robot_id=i,
                robot_class=_CLASS_CYCLE[i % len(_CLASS_CYCLE)],
                x=sx,
                y=sy,
                energy=self.config.initial_energy,
            )
            for i in range(self.config.robot_count)
        ]
        logger.info(
            "Session ready: %dx%d world (seed=%d), station at (%d, %d), %d robots",
            self.world.width,
            self.world.height,
            self.world.seed,
            sx,
            sy,
            len(self.robots),
        )

    def behavior_for(self, robot: Robot) -> RobotBehavior:
        """Return the strategy that drives ``robot``."""
        return create_behavior(robot.robot_class)

    def decide_all(self) -> dict[int, Task | None]:
        """Ask every robot for its next task, keyed by robot id."""
        decisions: dict[int, Task | None] = {}
        for robot in self.robots:
            task = self.behavior_for(robot).decide_next_action(
                robot,
                self.world,
                self.station,
            )
            decisions[robot.robot_id] = task
            logger.debug(
                "Robot %d (%s) at %s -> %s",
                robot.robot_id,
                robot.robot_class.name,
                robot.position,
                task,
            )
        return decisions

    def plan_route(self, robot: Robot, task: Task) -> Route | None:
        """Route ``robot`` to the target of ``task``.

        Returns:
            The route, or None if the task has no target or it is unreachable.
        """
        if task.target_position is None:
            return None
        path = self.pathfinder.find_path(
            self.world,
            robot.position,
            task.target_position,
        )
        if path is None:
            return None

        first_move = None
        if len(path) > 1:
            (x0, y0), (x1, y1) = path[0], path[1]
            first_move = Direction.from_delta(x1 - x0, y1 - y0)
        rate = self.behavior_for(robot).energy_consumption_rate()
        return Route(
            path=path,
            first_move=first_move,
            energy_cost=rate * sum(
                self.world.terrain_at(x, y).movement_cost for x, y in path[1:]
            ),
        )

    def save(self, path: str | Path) -> Path:
        """Persist the world to ``path``."""
        return save_world(self.world, path)

    def _station_site(self) -> Position:
        """Return the plain nearest the centre, or the centre itself."""
        centre = (self.world.width // 2, self.world.height // 2)
        if self.world.terrain_at(*centre) is TerrainType.PLAIN:
            return centre
        found = radius_search(
            self.world,
            centre,
            max(self.world.width, self.world.height),
            lambda w, x, y: w.terrain[y, x] == TerrainType.PLAIN,
        )
        return found if found is not None else centre
