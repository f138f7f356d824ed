"""Pygame 2D viewer for a planning session.

Draws the terrain grid, deposits, fog of war, the station and each robot
with a line to the target of its chosen task.  Nothing moves: the view is
a snapshot of one planning pass, with a few toggles to inspect it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pygame

if TYPE_CHECKING:
    from nova.robots.tasks import Task
    from nova.simulation.session import Session

from nova.robots.entities import RobotClass
from nova.world.terrain import ResourceKind, TerrainType

# Colour palette
_BG = (20, 20, 25)
_STATION = (240, 240, 240)
_TARGET_LINE = (255, 255, 255)

_TERRAIN_COLOURS: dict[TerrainType, tuple[int, int, int]] = {
    TerrainType.PLAIN: (110, 140, 70),
    TerrainType.HILL: (140, 120, 80),
    TerrainType.MOUNTAIN: (120, 110, 110),
    TerrainType.CANYON: (90, 50, 40),
}

_RESOURCE_COLOURS: dict[ResourceKind, tuple[int, int, int]] = {
    ResourceKind.ENERGY: (255, 210, 60),
    ResourceKind.MINERAL: (80, 170, 255),
    ResourceKind.SCIENTIFIC_INTEREST: (220, 90, 255),
}

_ROBOT_COLOURS: dict[RobotClass, tuple[int, int, int]] = {
    RobotClass.EXPLORER: (100, 230, 100),
    RobotClass.HARVESTER: (255, 160, 60),
    RobotClass.SCIENTIST: (230, 80, 200),
}

# Undiscovered cells are blended toward black by this factor
_FOG_DIM = 0.45

_FOG_COLOURS: dict[TerrainType, tuple[int, int, int]] = {
    terrain: (int(r * _FOG_DIM), int(g * _FOG_DIM), int(b * _FOG_DIM))
    for terrain, (r, g, b) in _TERRAIN_COLOURS.items()
}


class MapRenderer:
    """Renders a Session snapshot into a Pygame window.

    Attributes:
        session: The planning session to visualise.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    def __init__(self, session: Session, cell_size: int = 16) -> None:
        """Initialise the renderer and compute the decisions to display.

        Args:
            session: The session to render.
            cell_size: Pixel width/height per grid cell.
        """
        self.session = session
        self.cell_size = cell_size
        self.decisions: dict[int, Task | None] = session.decide_all()

        w = session.world.width * cell_size
        h = session.world.height * cell_size
        self._panel_width = 260
        self._win_w = w + self._panel_width
        self._win_h = max(h, 320)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption(f"Nova - seed {session.world.seed}")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True
        self.show_fog = True
        self.show_resources = True
        self.show_targets = True

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events and redraw until closed.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            self.clock.tick(fps)
            self._handle_events()
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_f:
                    self.show_fog = not self.show_fog
                elif event.key == pygame.K_r:
                    self.show_resources = not self.show_resources
                elif event.key == pygame.K_t:
                    self.show_targets = not self.show_targets

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_terrain()
        if self.show_resources:
            self._draw_resources()
        self._draw_station()
        if self.show_targets:
            self._draw_targets()
        self._draw_robots()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_terrain(self) -> None:
        """Fill every cell with its terrain colour, dimmed under fog."""
        cs = self.cell_size
        world = self.session.world
        for y in range(world.height):
            for x in range(world.width):
                terrain = world.terrain_at(x, y)
                if self.show_fog and not world.discovered[y, x]:
                    colour = _FOG_COLOURS[terrain]
                else:
                    colour = _TERRAIN_COLOURS[terrain]
                pygame.draw.rect(
                    self.screen,
                    colour,
                    (x * cs, y * cs, cs, cs),
                )

    def _draw_resources(self) -> None:
        """Draw deposits as squares scaled by remaining amount."""
        cs = self.cell_size
        for (x, y), deposit in self.session.world.resources.items():
            t = min(deposit.amount / 100.0, 1.0)
            size = max(2, int(cs * (0.3 + 0.5 * t)))
            offset = (cs - size) // 2
            pygame.draw.rect(
                self.screen,
                _RESOURCE_COLOURS[deposit.kind],
                (x * cs + offset, y * cs + offset, size, size),
            )

    def _draw_station(self) -> None:
        """Outline the station cell."""
        cs = self.cell_size
        station = self.session.station
        pygame.draw.rect(
            self.screen,
            _STATION,
            (station.x * cs, station.y * cs, cs, cs),
            width=2,
        )

    def _draw_targets(self) -> None:
        """Draw a line from each robot to its task target."""
        cs = self.cell_size
        for robot in self.session.robots:
            task = self.decisions.get(robot.robot_id)
            if task is None or task.target_position is None:
                continue
            tx, ty = task.target_position
            pygame.draw.line(
                self.screen,
                _TARGET_LINE,
                (robot.x * cs + cs // 2, robot.y * cs + cs // 2),
                (tx * cs + cs // 2, ty * cs + cs // 2),
            )

    def _draw_robots(self) -> None:
        """Draw each robot as a small coloured dot."""
        cs = self.cell_size
        radius = max(2, cs // 3)
        for robot in self.session.robots:
            colour = _ROBOT_COLOURS.get(robot.robot_class, (200, 200, 200))
            cx = robot.x * cs + cs // 2
            cy = robot.y * cs + cs // 2
            pygame.draw.circle(self.screen, colour, (cx, cy), radius)

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        world = self.session.world
        panel_x = world.width * self.cell_size + 10
        y = 10

        counts = world.resource_counts()
        lines = [
            f"Seed: {world.seed}",
            f"Size: {world.width}x{world.height}",
            "",
            "--- Deposits ---",
        ]
        lines += [f"  {kind.value}: {counts[kind]}" for kind in ResourceKind]
        lines += ["", "--- Robots ---"]
        for robot in self.session.robots:
            task = self.decisions.get(robot.robot_id)
            label = "idle" if task is None else type(task.task_type).__name__
            name = robot.robot_class.name[:4]
            lines.append(f"  #{robot.robot_id} {name}: {label}")

        lines += [
            "",
            "--- Controls ---",
            "F: fog  R: deposits",
            "T: targets  ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, (200, 200, 200))
            self.screen.blit(surf, (panel_x, y))
            y += 18
