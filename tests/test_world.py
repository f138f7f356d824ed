"""Tests for nova.world.world and nova.world.terrain."""

import pytest

from nova.robots.tasks import Direction
from nova.world.errors import (
    InsufficientResourcesError,
    NoResourceAtPositionError,
    OutOfBoundsError,
    WorldError,
)
from nova.world.terrain import Resource, ResourceKind, TerrainType
from nova.world.world import World


class TestTerrainType:
    """Tests for terrain ordinals."""

    def test_ordinals(self) -> None:
        assert [int(t) for t in TerrainType] == [0, 1, 2, 3]

    def test_unknown_ordinal_is_plain(self) -> None:
        assert TerrainType.from_ordinal(2) is TerrainType.MOUNTAIN
        assert TerrainType.from_ordinal(9) is TerrainType.PLAIN
        assert TerrainType.from_ordinal(-1) is TerrainType.PLAIN

    def test_only_plain_is_traversable(self) -> None:
        assert TerrainType.PLAIN.is_traversable
        assert not TerrainType.HILL.is_traversable
        assert not TerrainType.MOUNTAIN.is_traversable
        assert not TerrainType.CANYON.is_traversable

    def test_movement_costs(self) -> None:
        costs = [t.movement_cost for t in TerrainType]
        assert costs == [1, 2, 3, 4]


class TestWorld:
    """Tests for the World grid."""

    def test_dimensions(self, open_world: World) -> None:
        assert open_world.dimensions == (10, 10)
        assert open_world.terrain.shape == (10, 10)
        assert open_world.discovered.shape == (10, 10)

    def test_blank_world_is_plain_and_hidden(self, open_world: World) -> None:
        assert (open_world.terrain == TerrainType.PLAIN).all()
        assert not open_world.discovered.any()
        assert open_world.resources == {}

    def test_rejects_empty_dimensions(self) -> None:
        with pytest.raises(ValueError):
            World(width=0, height=5)

    def test_terrain_at_out_of_bounds(self, open_world: World) -> None:
        with pytest.raises(OutOfBoundsError):
            open_world.terrain_at(10, 0)
        # Still an IndexError for callers that only know about that
        with pytest.raises(IndexError):
            open_world.terrain_at(0, -1)

    def test_set_terrain(self, open_world: World) -> None:
        open_world.set_terrain(2, 3, TerrainType.CANYON)
        assert open_world.terrain_at(2, 3) is TerrainType.CANYON
        assert open_world.terrain[3, 2] == TerrainType.CANYON
        assert not open_world.is_traversable(2, 3)
        assert open_world.is_traversable(3, 2)

    def test_is_traversable_out_of_bounds(self, open_world: World) -> None:
        with pytest.raises(OutOfBoundsError):
            open_world.is_traversable(-1, 0)

    def test_neighbours_corner(self, open_world: World) -> None:
        assert len(open_world.neighbours(0, 0)) == 3

    def test_neighbours_center(self, open_world: World) -> None:
        assert len(open_world.neighbours(3, 3)) == 8

    def test_neighbours_cardinal_only(self, open_world: World) -> None:
        neighbours = open_world.neighbours(3, 3, include_diagonals=False)
        assert sorted(neighbours) == [(2, 3), (3, 2), (3, 4), (4, 3)]

    def test_neighbours_follow_compass_order(self, open_world: World) -> None:
        expected = [(4 + dx, 4 + dy) for dx, dy in (d.delta for d in Direction)]
        assert open_world.neighbours(4, 4) == expected


class TestFogOfWar:
    """Tests for discovery flags."""

    def test_discover_is_idempotent(self, open_world: World) -> None:
        assert not open_world.is_discovered(4, 4)
        open_world.discover(4, 4)
        open_world.discover(4, 4)
        assert open_world.is_discovered(4, 4)
        assert int(open_world.discovered.sum()) == 1

    def test_discover_out_of_bounds(self, open_world: World) -> None:
        with pytest.raises(OutOfBoundsError):
            open_world.discover(10, 10)
        assert not open_world.discovered.any()


class TestResourceStore:
    """Tests for placing and collecting deposits."""

    def test_get_empty_cell(self, open_world: World) -> None:
        assert open_world.get_resource(1, 1) is None

    def test_get_out_of_bounds(self, open_world: World) -> None:
        with pytest.raises(OutOfBoundsError):
            open_world.get_resource(0, 10)

    def test_place_and_get(self, open_world: World) -> None:
        deposit = Resource(ResourceKind.MINERAL, 40)
        open_world.place_resource(2, 7, deposit)
        assert open_world.get_resource(2, 7) == deposit
        assert open_world.get_resource(7, 2) is None

    def test_place_negative_amount(self, open_world: World) -> None:
        with pytest.raises(ValueError):
            open_world.place_resource(1, 1, Resource(ResourceKind.ENERGY, -1))
        assert open_world.resources == {}

    def test_partial_collect(self, open_world: World) -> None:
        open_world.place_resource(3, 3, Resource(ResourceKind.ENERGY, 50))
        taken = open_world.collect_resource(3, 3, 20)
        assert taken == Resource(ResourceKind.ENERGY, 20)
        assert open_world.get_resource(3, 3) == Resource(ResourceKind.ENERGY, 30)

    def test_full_collect_removes_entry(self, open_world: World) -> None:
        open_world.place_resource(3, 3, Resource(ResourceKind.MINERAL, 25))
        taken = open_world.collect_resource(3, 3, 25)
        assert taken == Resource(ResourceKind.MINERAL, 25)
        assert open_world.get_resource(3, 3) is None
        assert (3, 3) not in open_world.resources

    def test_collect_absent(self, open_world: World) -> None:
        with pytest.raises(NoResourceAtPositionError) as info:
            open_world.collect_resource(4, 4, 1)
        assert (info.value.x, info.value.y) == (4, 4)
        assert open_world.resources == {}

    def test_collect_too_much_leaves_state(self, open_world: World) -> None:
        open_world.place_resource(3, 3, Resource(ResourceKind.ENERGY, 10))
        with pytest.raises(InsufficientResourcesError) as info:
            open_world.collect_resource(3, 3, 11)
        assert info.value.requested == 11
        assert info.value.available == 10
        assert open_world.get_resource(3, 3) == Resource(ResourceKind.ENERGY, 10)

    def test_collect_out_of_bounds(self, open_world: World) -> None:
        with pytest.raises(OutOfBoundsError):
            open_world.collect_resource(-1, 0, 1)

    def test_collect_negative_amount(self, open_world: World) -> None:
        open_world.place_resource(3, 3, Resource(ResourceKind.ENERGY, 10))
        with pytest.raises(ValueError):
            open_world.collect_resource(3, 3, -5)
        assert open_world.get_resource(3, 3) == Resource(ResourceKind.ENERGY, 10)

    def test_errors_share_a_base(self) -> None:
        for error in (
            OutOfBoundsError,
            NoResourceAtPositionError,
            InsufficientResourcesError,
        ):
            assert issubclass(error, WorldError)

    def test_resource_counts(self, open_world: World) -> None:
        open_world.place_resource(0, 0, Resource(ResourceKind.ENERGY, 30))
        open_world.place_resource(1, 0, Resource(ResourceKind.ENERGY, 30))
        open_world.place_resource(2, 0, Resource(ResourceKind.SCIENTIFIC_INTEREST, 5))
        counts = open_world.resource_counts()
        assert counts[ResourceKind.ENERGY] == 2
        assert counts[ResourceKind.MINERAL] == 0
        assert counts[ResourceKind.SCIENTIFIC_INTEREST] == 1
