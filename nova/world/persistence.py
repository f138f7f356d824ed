"""Persistence — encode worlds as JSON records and back.

The record layout is::

    {
        "width": int,
        "height": int,
        "terrain": [[int, ...], ...],          # row-major ordinals
        "resources": {"x,y": [kind, amount]},  # kind is e.g. "Energy"
        "discovered": [[bool, ...], ...],      # row-major flags
        "seed": int
    }

Noise tables are never stored; ``from_dict`` builds a fresh ``World`` from
the seed, which re-derives both noise generators.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import numpy as np

from nova.world.errors import PersistenceIOError, SerializationError
from nova.world.terrain import Resource, ResourceKind, TerrainType
from nova.world.world import Position, World

logger = logging.getLogger(__name__)

_KINDS_BY_NAME: dict[str, ResourceKind] = {
    kind.value: kind for kind in ResourceKind
}
_UINT64_MAX = (1 << 64) - 1


def encode_key(position: Position) -> str:
    """Encode an ``(x, y)`` position as ``"x,y"``."""
    x, y = position
    return f"{x},{y}"


def decode_key(key: str) -> Position:
    """Parse ``"x,y"`` back into a position.

    Raises:
        SerializationError: If the key does not have exactly two integer parts.
    """
    parts = key.split(",")
    if len(parts) != 2:
        msg = f"Invalid position key {key!r}: expected 'x,y'"
        raise SerializationError(msg)
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as exc:
        msg = f"Invalid position key {key!r}: components must be integers"
        raise SerializationError(msg) from exc


def to_dict(world: World) -> dict[str, Any]:
    """Convert a world into a JSON-compatible record."""
    return {
        "width": world.width,
        "height": world.height,
        "terrain": world.terrain.astype(int).tolist(),
        "resources": {
            encode_key(pos): [res.kind.value, res.amount]
            for pos, res in sorted(
                world.resources.items(),
                key=lambda item: (item[0][1], item[0][0]),
            )
        },
        "discovered": world.discovered.tolist(),
        "seed": world.seed,
    }


def from_dict(data: dict[str, Any]) -> World:
    """Rebuild a world from a record produced by :func:`to_dict`.

    Unknown terrain ordinals load as plain.

    Raises:
        SerializationError: If the record is malformed.
    """
    try:
        width = _integer_field(data, "width")
        height = _integer_field(data, "height")
        seed = _integer_field(data, "seed")
        terrain_rows = data["terrain"]
        discovered_rows = data["discovered"]
        resources = data["resources"]
    except KeyError as exc:
        msg = f"Malformed world record: missing field {exc}"
        raise SerializationError(msg) from exc

    if not 0 <= seed <= _UINT64_MAX:
        msg = f"Seed must fit in 64 unsigned bits, got {seed}"
        raise SerializationError(msg)

    try:
        world = World(width=width, height=height, seed=seed)
    except ValueError as exc:
        raise SerializationError(str(exc)) from exc

    _check_grid_shape("terrain", terrain_rows, width, height)
    _check_grid_shape("discovered", discovered_rows, width, height)

    for y, row in enumerate(terrain_rows):
        for x, ordinal in enumerate(row):
            if not isinstance(ordinal, int) or isinstance(ordinal, bool):
                msg = f"Terrain ordinal at ({x}, {y}) is not an integer: {ordinal!r}"
                raise SerializationError(msg)
            world.terrain[y, x] = TerrainType.from_ordinal(ordinal)

    for y, row in enumerate(discovered_rows):
        for x, flag in enumerate(row):
            if not isinstance(flag, bool):
                msg = f"Discovered flag at ({x}, {y}) is not a boolean: {flag!r}"
                raise SerializationError(msg)
    world.discovered = np.array(discovered_rows, dtype=np.bool_).reshape(
        height,
        width,
    )

    if not isinstance(resources, dict):
        msg = "Field 'resources' must be a mapping"
        raise SerializationError(msg)
    for key, entry in resources.items():
        x, y = decode_key(key)
        if not world.in_bounds(x, y):
            msg = f"Resource key {key!r} lies outside {width}x{height}"
            raise SerializationError(msg)
        world.resources[(x, y)] = _decode_resource(key, entry)

    return world


def serialize(world: World) -> bytes:
    """Encode a world as UTF-8 JSON."""
    try:
        return json.dumps(to_dict(world), indent=2).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(str(exc)) from exc


def deserialize(payload: bytes) -> World:
    """Decode a world from UTF-8 JSON.

    Raises:
        SerializationError: If the payload is not a valid world record.
    """
    try:
        data = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"Invalid world payload: {exc}"
        raise SerializationError(msg) from exc
    if not isinstance(data, dict):
        msg = "World payload must be a JSON object"
        raise SerializationError(msg)
    return from_dict(data)


def save_world(world: World, path: str | Path) -> Path:
    """Write a world to ``path`` as pretty-printed JSON.

    Returns:
        The path written.

    Raises:
        PersistenceIOError: If the file cannot be written.
    """
    path = Path(path)
    payload = serialize(world)
    try:
        path.write_bytes(payload)
    except OSError as exc:
        msg = f"Failed to write world to {path}: {exc}"
        raise PersistenceIOError(msg) from exc
    logger.info(
        "Saved %dx%d world (seed=%d) to %s",
        world.width,
        world.height,
        world.seed,
        path,
    )
    return path


def load_world(path: str | Path) -> World:
    """Read a world previously written by :func:`save_world`.

    Raises:
        PersistenceIOError: If the file cannot be read.
        SerializationError: If its contents are not a valid world record.
    """
    path = Path(path)
    try:
        payload = path.read_bytes()
    except OSError as exc:
        msg = f"Failed to read world from {path}: {exc}"
        raise PersistenceIOError(msg) from exc
    world = deserialize(payload)
    logger.debug(
        "Loaded %dx%d world (seed=%d) from %s",
        world.width,
        world.height,
        world.seed,
        path,
    )
    return world


def _check_grid_shape(name: str, rows: Any, width: int, height: int) -> None:
    if not isinstance(rows, list) or len(rows) != height:
        msg = f"Field {name!r} must have {height} rows"
        raise SerializationError(msg)
    for y, row in enumerate(rows):
        if not isinstance(row, list) or len(row) != width:
            msg = f"Row {y} of {name!r} must have {width} columns"
            raise SerializationError(msg)


def _decode_resource(key: str, entry: Any) -> Resource:
    if not isinstance(entry, list) or len(entry) != 2:
        msg = f"Resource {key!r} must be [kind, amount]"
        raise SerializationError(msg)
    name, amount = entry
    kind = _KINDS_BY_NAME.get(name) if isinstance(name, str) else None
    if kind is None:
        msg = f"Resource {key!r} has unknown kind {name!r}"
        raise SerializationError(msg)
    if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
        msg = f"Resource {key!r} has invalid amount {amount!r}"
        raise SerializationError(msg)
    return Resource(kind, amount)


def _integer_field(data: dict[str, Any], name: str) -> int:
    value = data[name]
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"Field {name!r} must be an integer, got {value!r}"
        raise SerializationError(msg)
    return value
