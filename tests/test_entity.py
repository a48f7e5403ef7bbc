"""Tests for neurogrid.world.entity and neurogrid.world.node."""

import math

import pytest

from neurogrid.world.entity import DEFAULT_KIND, Entity, TerrainKind
from neurogrid.world.node import MAX_RECEPTIVE_FIELD, ComputeNode


class TestEntity:
    """Tests for the Entity value type."""

    def test_of_uses_default_iota(self) -> None:
        entity = Entity.of(TerrainKind.RESOURCE, 3, 4)
        assert entity.position == (3, 4)
        assert entity.iota == TerrainKind.RESOURCE.default_iota

    def test_default_kind_is_grass(self) -> None:
        assert DEFAULT_KIND is TerrainKind.GRASS

    def test_every_kind_constructible_from_coordinates(self) -> None:
        for kind in TerrainKind:
            entity = Entity.of(kind, 1, 2)
            assert entity.kind is kind
            assert len(kind.glyph) == 1

    def test_clone_is_equal_but_distinct(self) -> None:
        entity = Entity.of(TerrainKind.WATER, 5, 5)
        copy = entity.clone()
        assert copy == entity
        assert copy is not entity

    def test_with_iota_returns_copy(self) -> None:
        entity = Entity.of(TerrainKind.WATER, 5, 5)
        changed = entity.with_iota(0.9)
        assert changed.iota == 0.9
        assert entity.iota == TerrainKind.WATER.default_iota
        assert changed.kind is TerrainKind.WATER

    def test_moved_to(self) -> None:
        entity = Entity.of(TerrainKind.STONE, 1, 1).moved_to(2, 3)
        assert entity.position == (2, 3)
        assert entity.kind is TerrainKind.STONE

    def test_frozen(self) -> None:
        entity = Entity.of(TerrainKind.GRASS, 0, 0)
        with pytest.raises(AttributeError):
            entity.iota = 1.0  # type: ignore[misc]


class TestComputeNode:
    """Tests for the ComputeNode neuron."""

    def test_defaults(self) -> None:
        node = ComputeNode(x=2, y=3)
        assert node.is_empty
        assert node.current_value == 0.0
        assert node.receptive_field == []

    def test_bind_and_unbind(self) -> None:
        node = ComputeNode(x=0, y=0)
        entity = Entity.of(TerrainKind.GRASS, 0, 0)
        node.bind(entity)
        assert node.entity is entity
        node.unbind()
        assert node.is_empty

    def test_activate_is_logistic(self) -> None:
        node = ComputeNode(x=0, y=0, weight=2.0, bias=-1.0, current_value=0.5)
        assert node.activate() == pytest.approx(0.5)
        node.current_value = 1.0
        expected = 1.0 / (1.0 + math.exp(-1.0))
        assert node.activate() == pytest.approx(expected)
        assert node.activation == pytest.approx(expected)

    def test_receptive_field_caps_at_eight(self) -> None:
        node = ComputeNode(x=0, y=0)
        for i in range(MAX_RECEPTIVE_FIELD):
            assert node.add_to_receptive_field(ComputeNode(x=i, y=1))
        assert not node.add_to_receptive_field(ComputeNode(x=9, y=9))
        assert len(node.receptive_field) == MAX_RECEPTIVE_FIELD

    def test_set_iota_sets_current_value(self) -> None:
        node = ComputeNode(x=0, y=0)
        node.set_iota(0.7)
        assert node.current_value == 0.7
