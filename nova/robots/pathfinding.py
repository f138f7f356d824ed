"""Pathfinder — A* over the 8-connected terrain grid.

Only plains can be entered, each at a cost of one step, diagonals
included.  The heuristic is Manhattan distance: admissible for this move
set only when diagonal steps are priced like straight ones, so paths are
valid but their shape (and, against obstacles, occasionally their length)
depends on how the open set breaks f-cost ties.  The open set is a
``heapq`` min-heap on f-cost with ties resolved in insertion order.
"""

from __future__ import annotations

import heapq
import itertools
from typing import TYPE_CHECKING

from nova.robots.tasks import Direction
from nova.world.terrain import TerrainType

if TYPE_CHECKING:
    from nova.world.world import Position, World


class Pathfinder:
    """Stateless A* search over a world's terrain."""

    @staticmethod
    def heuristic(a: Position, b: Position) -> int:
        """Manhattan distance between two cells."""
        return abs(a[0] - b[0]) + abs(a[1] - b[1])

    def find_path(
        self,
        world: World,
        start: Position,
        goal: Position,
    ) -> list[Position] | None:
        """Find a path of plains from ``start`` to ``goal``.

        The start cell itself may be any terrain.

        Args:
            world: The world to route through.
            start: Starting cell.
            goal: Destination cell.

        Returns:
            The cells from ``start`` to ``goal`` inclusive (just ``[start]``
            when they coincide), or None if the goal is unreachable or
            either endpoint is out of bounds.
        """
        if not (world.in_bounds(*start) and world.in_bounds(*goal)):
            return None
        if start == goal:
            return [start]

        tie = itertools.count()
        open_set: list[tuple[int, int, Position]] = [
            (self.heuristic(start, goal), next(tie), start),
        ]
        came_from: dict[Position, Position] = {}
        g_score: dict[Position, int] = {start: 0}

        while open_set:
            _, _, current = heapq.heappop(open_set)
            if current == goal:
                return self._reconstruct(came_from, current)

            for neighbour in world.neighbours(*current):
                nx, ny = neighbour
                if world.terrain[ny, nx] != TerrainType.PLAIN:
                    continue

                tentative = g_score[current] + 1
                if tentative < g_score.get(neighbour, tentative + 1):
                    came_from[neighbour] = current
                    g_score[neighbour] = tentative
                    f_cost = tentative + self.heuristic(neighbour, goal)
                    heapq.heappush(open_set, (f_cost, next(tie), neighbour))

        return None

    def get_next_move(
        self,
        world: World,
        current: Position,
        target: Position,
    ) -> Direction | None:
        """Return the first step from ``current`` toward ``target``.

        Returns None when there is no path or ``current`` is the target.
        """
        path = self.find_path(world, current, target)
        if path is None or len(path) < 2:
            return None
        (x0, y0), (x1, y1) = path[0], path[1]
        return Direction.from_delta(x1 - x0, y1 - y0)

    @staticmethod
    def _reconstruct(
        came_from: dict[Position, Position],
        current: Position,
    ) -> list[Position]:
        path = [current]
        while current in came_from:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return path
