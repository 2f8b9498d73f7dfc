"""Tests for PropertySetWriter: set creation, sharing and relations."""

from __future__ import annotations

import pytest

from helpers import add_entity
from psetmap.ifc.properties import PropertyFactory
from psetmap.ifc.writer import PropertySetWriter
from psetmap.properties.types import PropertyType, PropertyValueType, QuantityType

SINGLE = PropertyValueType.SINGLE_VALUE


def _relations(obj):
    return [rel for rel in obj.IsDefinedBy if rel.is_a("IfcRelDefinesByProperties")]


# ---------------------------------------------------------------------------
# Property sets
# ---------------------------------------------------------------------------


class TestPropertySets:
    def test_creates_set_and_relation(self, model, wall):
        factory = PropertyFactory(model)
        writer = PropertySetWriter(model)
        props = [factory.create_single_value("IsExternal", PropertyType.BOOLEAN, True)]

        pset = writer.write_property_set(wall, "Pset_WallCommon", props)
        assert pset.is_a("IfcPropertySet")
        assert pset.Name == "Pset_WallCommon"
        assert [p.id() for p in pset.HasProperties] == [props[0].id()]
        rels = _relations(wall)
        assert len(rels) == 1
        assert rels[0].RelatingPropertyDefinition.id() == pset.id()
        assert writer.created == 1

    def test_identical_sets_are_shared(self, model, wall):
        other = add_entity(model, "IfcWall", "Wall 2")
        factory = PropertyFactory(model)
        writer = PropertySetWriter(model)
        props = [factory.create_single_value("IsExternal", PropertyType.BOOLEAN, True)]

        first = writer.write_property_set(wall, "Pset_WallCommon", props)
        second = writer.write_property_set(other, "Pset_WallCommon", list(props))
        assert first.id() == second.id()
        assert writer.created == 1
        assert writer.reused == 1
        assert len(model.by_type("IfcPropertySet")) == 1

        rel = _relations(wall)[0]
        assert {o.id() for o in rel.RelatedObjects} == {wall.id(), other.id()}

    def test_different_properties_give_different_sets(self, model, wall):
        other = add_entity(model, "IfcWall", "Wall 2")
        factory = PropertyFactory(model)
        writer = PropertySetWriter(model)

        first = writer.write_property_set(
            wall, "Pset_WallCommon", [factory.create_single_value("Mark", PropertyType.LABEL, "A")]
        )
        second = writer.write_property_set(
            other, "Pset_WallCommon", [factory.create_single_value("Mark", PropertyType.LABEL, "B")]
        )
        assert first.id() != second.id()
        assert writer.created == 2

    def test_same_properties_different_name(self, model, wall):
        factory = PropertyFactory(model)
        writer = PropertySetWriter(model)
        props = [factory.create_single_value("IsExternal", PropertyType.BOOLEAN, True)]

        first = writer.write_property_set(wall, "Pset_A", props)
        second = writer.write_property_set(wall, "Pset_B", props)
        assert first.id() != second.id()

    def test_empty_set_is_not_written(self, model, wall):
        writer = PropertySetWriter(model)
        assert writer.write_property_set(wall, "Pset_WallCommon", []) is None
        assert not model.by_type("IfcPropertySet")

    def test_type_objects_use_has_property_sets(self, model):
        wall_type = add_entity(model, "IfcWallType", "Generic", PredefinedType="STANDARD")
        factory = PropertyFactory(model)
        writer = PropertySetWriter(model)
        props = [factory.create_single_value("Manufacturer", PropertyType.LABEL, "ACME")]

        pset = writer.write_property_set(wall_type, "Pset_ManufacturerTypeInformation", props)
        writer.write_property_set(wall_type, "Pset_ManufacturerTypeInformation", props)
        assert [p.id() for p in wall_type.HasPropertySets] == [pset.id()]
        assert not model.by_type("IfcRelDefinesByProperties")

    def test_owner_history_is_used_when_present(self, model):
        writer = PropertySetWriter(model)
        assert writer.owner_history is None
        history = model.create_entity("IfcOwnerHistory")
        assert writer.owner_history.id() == history.id()


# ---------------------------------------------------------------------------
# Quantity sets
# ---------------------------------------------------------------------------


class TestQuantitySets:
    def test_quantity_set(self, model, wall):
        factory = PropertyFactory(model)
        writer = PropertySetWriter(model)
        quantities = [factory.create_quantity("Length", QuantityType.LENGTH, 5.0)]

        qset = writer.write_quantity_set(wall, "Qto_WallBaseQuantities", quantities, "Standard")
        assert qset.is_a("IfcElementQuantity")
        assert qset.MethodOfMeasurement == "Standard"
        assert qset.Quantities[0].LengthValue == pytest.approx(5.0)
        assert _relations(wall)[0].RelatingPropertyDefinition.id() == qset.id()

    def test_quantity_sets_are_shared(self, model, wall):
        other = add_entity(model, "IfcWall", "Wall 2")
        factory = PropertyFactory(model)
        writer = PropertySetWriter(model)
        quantities = [factory.create_quantity("Length", QuantityType.LENGTH, 5.0)]

        first = writer.write_quantity_set(wall, "Qto_WallBaseQuantities", quantities)
        second = writer.write_quantity_set(other, "Qto_WallBaseQuantities", quantities)
        assert first.id() == second.id()
        assert first.MethodOfMeasurement is None
        assert writer.reused == 1

    def test_empty_quantity_set(self, model, wall):
        assert PropertySetWriter(model).write_quantity_set(wall, "Qto_WallBaseQuantities", []) is None


# ---------------------------------------------------------------------------
# Predefined property sets
# ---------------------------------------------------------------------------


class TestPreDefinedSets:
    def test_attributes_are_set(self, model):
        door = add_entity(model, "IfcDoor", "Door")
        writer = PropertySetWriter(model)

        lining = writer.write_predefined_set(
            door,
            "IfcDoorLiningProperties",
            [("LiningDepth", SINGLE, [0.1]), ("LiningThickness", SINGLE, [0.05])],
        )
        assert lining.is_a("IfcDoorLiningProperties")
        assert lining.LiningDepth == pytest.approx(0.1)
        assert lining.LiningThickness == pytest.approx(0.05)
        assert _relations(door)[0].RelatingPropertyDefinition.id() == lining.id()

    def test_unknown_attribute_is_skipped(self, model):
        door = add_entity(model, "IfcDoor", "Door")
        writer = PropertySetWriter(model)

        lining = writer.write_predefined_set(
            door,
            "IfcDoorLiningProperties",
            [("NoSuchAttribute", SINGLE, [1.0]), ("LiningDepth", SINGLE, [0.1])],
        )
        assert lining.LiningDepth == pytest.approx(0.1)

    def test_nothing_assigned_removes_entity(self, model):
        door = add_entity(model, "IfcDoor", "Door")
        writer = PropertySetWriter(model)

        assert writer.write_predefined_set(door, "IfcDoorLiningProperties", [("NoSuchAttribute", SINGLE, [1.0])]) is None
        assert not model.by_type("IfcDoorLiningProperties")
        assert writer.created == 0

    def test_no_results(self, model):
        door = add_entity(model, "IfcDoor", "Door")
        assert PropertySetWriter(model).write_predefined_set(door, "IfcDoorLiningProperties", None) is None
