"""Tests for nova.world.generator."""

import numpy as np
import pytest

from nova.world.generator import (
    GenerationParams,
    classify_resource,
    classify_terrain,
    generate,
)
from nova.world.terrain import ResourceKind, TerrainType
from nova.world.world import World


class TestClassification:
    """Tests for the threshold buckets."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0.0, TerrainType.PLAIN),
            (0.39, TerrainType.PLAIN),
            (0.40, TerrainType.HILL),
            (0.69, TerrainType.HILL),
            (0.70, TerrainType.MOUNTAIN),
            (0.85, TerrainType.CANYON),
            (1.0, TerrainType.CANYON),
        ],
    )
    def test_terrain_thresholds(self, value: float, expected: TerrainType) -> None:
        assert classify_terrain(value, GenerationParams()) is expected

    def test_resource_checks_rarest_first(self) -> None:
        params = GenerationParams()
        assert classify_resource(0.9, params) == (
            ResourceKind.SCIENTIFIC_INTEREST,
            10,
        )
        assert classify_resource(0.8, params) == (ResourceKind.MINERAL, 20)
        assert classify_resource(0.65, params) == (ResourceKind.ENERGY, 30)
        assert classify_resource(0.5, params) is None

    def test_resource_thresholds_are_strict(self) -> None:
        params = GenerationParams()
        assert classify_resource(0.85, params)[0] is ResourceKind.MINERAL
        assert classify_resource(0.70, params)[0] is ResourceKind.ENERGY
        assert classify_resource(0.60, params) is None


class TestGenerate:
    """Tests for whole-world generation."""

    def test_deterministic(self) -> None:
        a = generate(48, 40, seed=7)
        b = generate(48, 40, seed=7)
        np.testing.assert_array_equal(a.terrain, b.terrain)
        assert a.resources == b.resources

    def test_seed_changes_world(self) -> None:
        a = generate(48, 48, seed=1)
        b = generate(48, 48, seed=2)
        assert not np.array_equal(a.terrain, b.terrain) or (
            a.resources != b.resources
        )

    def test_generated_world_is_undiscovered(self, generated_world: World) -> None:
        assert not generated_world.discovered.any()
        assert generated_world.seed == 42

    def test_alias_classmethod(self) -> None:
        a = World.generate(20, 20, seed=5)
        b = generate(20, 20, seed=5)
        np.testing.assert_array_equal(a.terrain, b.terrain)
        assert a.resources == b.resources

    def test_terrain_matches_noise(self, generated_world: World) -> None:
        params = GenerationParams()
        raw = generated_world.noise.terrain.sample_grid(
            32,
            32,
            params.noise_frequency,
        )
        normalised = (raw + 1.0) / 2.0
        for y in range(32):
            for x in range(32):
                expected = classify_terrain(float(normalised[y, x]), params)
                assert generated_world.terrain_at(x, y) is expected

    def test_resources_match_noise(self, generated_world: World) -> None:
        params = GenerationParams()
        raw = generated_world.noise.resources.sample_grid(
            32,
            32,
            params.noise_frequency * params.resource_frequency_scale,
        )
        normalised = (raw + 1.0) / 2.0
        for y in range(32):
            for x in range(32):
                placement = classify_resource(float(normalised[y, x]), params)
                deposit = generated_world.resources.get((x, y))
                if placement is None:
                    assert deposit is None
                else:
                    assert deposit is not None
                    assert deposit.kind is placement[0]

    def test_amounts_within_bounds(self) -> None:
        world = generate(64, 64, seed=3)
        minimum = {
            ResourceKind.ENERGY: 30,
            ResourceKind.MINERAL: 20,
            ResourceKind.SCIENTIFIC_INTEREST: 10,
        }
        assert world.resources
        for deposit in world.resources.values():
            assert minimum[deposit.kind] <= deposit.amount <= 100

    def test_common_kinds_outnumber_rare_ones(self) -> None:
        counts = generate(128, 128, seed=42).resource_counts()
        energy = counts[ResourceKind.ENERGY]
        mineral = counts[ResourceKind.MINERAL]
        scientific = counts[ResourceKind.SCIENTIFIC_INTEREST]
        assert energy > mineral > scientific

    def test_unreachable_thresholds_place_nothing(self) -> None:
        params = GenerationParams(
            scientific_threshold=1.0,
            mineral_threshold=1.0,
            energy_threshold=1.0,
        )
        world = generate(32, 32, seed=9, params=params)
        assert world.resources == {}

    def test_custom_terrain_thresholds(self) -> None:
        world = generate(16, 16, seed=9, params=GenerationParams(plain_threshold=2.0))
        assert (world.terrain == TerrainType.PLAIN).all()

    def test_custom_resource_offset_rebuilds_noise(self) -> None:
        world = generate(8, 8, seed=9, params=GenerationParams(resource_seed_offset=1))
        assert world.noise.resources.seed == 10
