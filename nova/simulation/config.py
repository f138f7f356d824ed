"""Config — load simulation parameters from YAML files.

Generation needs only a seed and the world size; the robot settings shape
the planning session built on top of the world.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

_UINT64_MAX = (1 << 64) - 1


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: World seed (uint64) for deterministic generation.
        world_width: Number of grid columns.
        world_height: Number of grid rows.
        robot_count: Robots spawned at the station.
        initial_energy: Starting energy of each robot.
    """

    seed: int = 42
    world_width: int = 10
    world_height: int = 10
    robot_count: int = 5
    initial_energy: int = 100

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Missing keys keep their defaults.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If the file is not a YAML mapping or a value is
                out of range.
        """
        path = Path(path)
        with path.open("r") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                msg = f"Invalid YAML in {path}: {exc}"
                raise ValueError(msg) from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            msg = f"Config {path} must be a mapping, got {type(data).__name__}"
            raise ValueError(msg)

        config = cls(
            seed=data.get("seed", cls.seed),
            world_width=data.get("world_width", cls.world_width),
            world_height=data.get("world_height", cls.world_height),
            robot_count=data.get("robot_count", cls.robot_count),
            initial_energy=data.get("initial_energy", cls.initial_energy),
        )
        config.validate()
        return config

    def with_overrides(self, **overrides: Any) -> SimulationConfig:
        """Return a copy with every non-None override applied and validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        config = replace(self, **changes)
        config.validate()
        return config

    def validate(self) -> None:
        """Check that every field is an integer in range.

        Raises:
            ValueError: On the first invalid field.
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                msg = f"{f.name} must be an integer, got {value!r}"
                raise ValueError(msg)
        if not 0 <= self.seed <= _UINT64_MAX:
            msg = f"seed must fit in 64 unsigned bits, got {self.seed}"
            raise ValueError(msg)
        if self.world_width <= 0 or self.world_height <= 0:
            msg = (
                "world dimensions must be positive, got "
                f"{self.world_width}x{self.world_height}"
            )
            raise ValueError(msg)
        if self.robot_count < 0:
            msg = f"robot_count must be non-negative, got {self.robot_count}"
            raise ValueError(msg)
        if self.initial_energy < 0:
            msg = f"initial_energy must be non-negative, got {self.initial_energy}"
            raise ValueError(msg)
