"""Shared fixtures for the Nova test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from nova.robots.entities import Robot, RobotClass, Station
from nova.simulation.config import SimulationConfig
from nova.world.generator import generate
from nova.world.world import World

RobotFactory = Callable[..., Robot]


@pytest.fixture
def open_world() -> World:
    """A 10x10 world of undiscovered plains with no deposits."""
    return World(width=10, height=10, seed=1)


@pytest.fixture
def generated_world() -> World:
    """A 32x32 procedurally generated world."""
    return generate(32, 32, seed=42)


@pytest.fixture
def station() -> Station:
    """A station in the middle of a 10x10 world."""
    return Station(x=5, y=5)


@pytest.fixture
def make_robot() -> RobotFactory:
    """Build robots with sensible defaults: id 0 at (5, 5), full energy."""

    def _make(
        robot_class: RobotClass,
        x: int = 5,
        y: int = 5,
        **kwargs: object,
    ) -> Robot:
        kwargs.setdefault("robot_id", 0)
        return Robot(robot_class=robot_class, x=x, y=y, **kwargs)

    return _make


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()
