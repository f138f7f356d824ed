"""Entry point for ``python -m nova``.

Loads the YAML config, generates the world, lets every robot pick its next
task, saves the world to JSON and optionally opens a Pygame window to
inspect the result.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from nova.simulation.config import SimulationConfig
from nova.simulation.session import Session
from nova.world.errors import WorldError

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

logger = logging.getLogger("nova")


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="nova",
        description="Nova - procedural world and robot planning",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument("--seed", type=int, help="Override the world seed")
    parser.add_argument("--width", type=int, help="Override the world width")
    parser.add_argument("--height", type=int, help="Override the world height")
    parser.add_argument("--robots", type=int, help="Override the robot count")
    parser.add_argument(
        "--save",
        type=pathlib.Path,
        help="Where to write the world JSON (default: map_seed_<seed>.json)",
    )
    parser.add_argument(
        "--view",
        action="store_true",
        help="Open a Pygame window showing the world and decisions",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=16,
        help="Pixel size per grid cell (default: 16)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI args, build the session, report, save and optionally view."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SimulationConfig.from_yaml(args.config).with_overrides(
            seed=args.seed,
            world_width=args.width,
            world_height=args.height,
            robot_count=args.robots,
        )
    except (OSError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    session = Session(config=config)
    counts = session.world.resource_counts()
    logger.info(
        "Deposits: %s",
        ", ".join(f"{kind.value}={n}" for kind, n in counts.items()),
    )
    for robot_id, task in session.decide_all().items():
        logger.info("Robot %d: %s", robot_id, task)

    save_path = args.save or pathlib.Path(f"map_seed_{config.seed}.json")
    try:
        session.save(save_path)
    except WorldError as exc:
        logger.error("Failed to save map: %s", exc)
        return 1

    if args.view:
        from nova.ui.pygame_client import MapRenderer

        MapRenderer(session=session, cell_size=args.cell_size).run(fps=args.fps)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
