"""Errors raised by world accessors, mutators and persistence."""

from __future__ import annotations


class WorldError(Exception):
    """Base class for every recoverable world error."""


class OutOfBoundsError(WorldError, IndexError):
    """A cell outside ``[0, width) x [0, height)`` was addressed."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"({x}, {y}) out of bounds for {width}x{height}")


class NoResourceAtPositionError(WorldError):
    """A collection was attempted on a cell without a deposit."""

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        super().__init__(f"No resource at position ({x}, {y})")


class InsufficientResourcesError(WorldError):
    """A collection asked for more than the deposit holds."""

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot collect {requested} units, only {available} available",
        )


class SerializationError(WorldError):
    """A world record could not be encoded or decoded."""


class PersistenceIOError(WorldError):
    """Reading or writing a saved world failed at the filesystem level."""
