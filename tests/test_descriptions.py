"""Tests for descriptions: applicability, entry processing, quantities and predefined sets."""

from __future__ import annotations

import pytest

from helpers import (
    IDENTITY_SCALES,
    add_entity,
    assign_type,
    build_model,
    int_param,
    length_param,
    text_param,
)
from psetmap.context import ExportContext
from psetmap.models.body import BodyParams
from psetmap.models.host import BuiltInParameter, HostElement
from psetmap.options import ExportOptions
from psetmap.properties.calculator import PropertyCalculator
from psetmap.properties.description import (
    BuiltInParameterMapper,
    Description,
    PreDefinedPropertySetDescription,
    PropertySetDescription,
    QuantityDescription,
)
from psetmap.properties.predefined_entry import PreDefinedPropertySetEntry
from psetmap.properties.pset_entry import PropertySetEntry
from psetmap.properties.types import PropertyType, PropertyValueType, QuantityType
from psetmap.properties.calculators import VolumeCalculator


class _FailingCalculator(PropertyCalculator):
    name = "FailingCalculator"

    def calculate(self, ctx, body, element, element_type, entry_map):
        raise RuntimeError("boom")


# ---------------------------------------------------------------------------
# Applicability
# ---------------------------------------------------------------------------


class TestApplicability:
    def test_subtype_by_class_name(self):
        description = Description(name="Pset_WallCommon", entity_types=["IfcWall"])
        assert description.is_sub_type_of_entity_types("IfcWallStandardCase")
        assert description.is_sub_type_of_entity_types("IfcWall")
        assert not description.is_sub_type_of_entity_types("IfcSlab")
        assert not description.is_sub_type_of_entity_types("")

    def test_subtype_by_handle(self, model, wall):
        description = Description(name="Pset_WallCommon", entity_types=["IfcBuildingElement"])
        assert description.is_sub_type_of_entity_types(wall)
        assert description.is_applicable(wall)

    def test_not_applicable_to_other_classes(self, model):
        slab = add_entity(model, "IfcSlab", "Floor")
        description = Description(name="Pset_WallCommon", entity_types=["IfcWall"])
        assert not description.is_applicable(slab)
        assert not description.is_applicable(None)

    def test_object_type_containment(self, model):
        slab = add_entity(model, "IfcSlab", "Floor")
        description = Description(name="Pset_X", entity_types=["IfcBuildingElement"], object_type="IfcWall, IfcSlab")
        assert description.is_appropriate_object_type("IfcSlab")
        assert description.is_appropriate_object_type(slab)
        assert not description.is_appropriate_object_type("IfcDoor")

    def test_object_type_from_attribute(self, model):
        proxy = add_entity(model, "IfcBuildingElementProxy", "Proxy", ObjectType="Bench")
        description = Description(name="Pset_X", entity_types=["IfcBuildingElementProxy"], object_type="Bench")
        assert description.is_applicable(proxy)

    def test_appropriate_type_ignores_case_and_spaces(self, model, wall):
        description = Description(name="Pset_X", entity_types=["IfcWall"], object_type="ifc wall")
        assert description.is_appropriate_type(wall)

    def test_predefined_type_on_handle(self, model):
        wall = add_entity(model, "IfcWall", "Shear wall", PredefinedType="SHEAR")
        description = Description(name="Pset_X", entity_types=["IfcWall"], predefined_type="SHEAR")
        assert description.is_applicable(wall)

    def test_predefined_type_user_defined(self, model):
        wall = add_entity(model, "IfcWall", "Wall", PredefinedType="USERDEFINED", ObjectType="Acoustic Panel")
        description = Description(name="Pset_X", entity_types=["IfcWall"], predefined_type="ACOUSTIC_PANEL")
        assert description.is_applicable(wall)

    def test_predefined_type_from_type_object(self, model):
        wall = add_entity(model, "IfcWall", "Wall")
        wall_type = add_entity(model, "IfcWallType", "Partition", PredefinedType="PARTITIONING")
        assign_type(model, wall, wall_type)
        description = Description(name="Pset_X", entity_types=["IfcWall"], predefined_type="PARTITIONING")
        assert description.is_applicable(wall)

    def test_predefined_type_missing(self, model):
        wall = add_entity(model, "IfcWall", "Wall")
        description = Description(name="Pset_X", entity_types=["IfcWall"], predefined_type="SHEAR")
        assert not description.is_applicable(wall)


class TestBuiltInParameterMapper:
    def test_general_map(self):
        assert BuiltInParameterMapper.get_builtin("Pset_WallCommon", "FireRating") == BuiltInParameter.FIRE_RATING

    def test_specific_map(self):
        assert (
            BuiltInParameterMapper.get_builtin("Pset_ManufacturerTypeInformation", "Manufacturer")
            == BuiltInParameter.ALL_MODEL_MANUFACTURER
        )
        assert BuiltInParameterMapper.get_builtin("Pset_Other", "Manufacturer") is None

    def test_general_map_wins(self):
        assert BuiltInParameterMapper.get_builtin("Pset_RoofCommon", "FireRating") == BuiltInParameter.FIRE_RATING


# ---------------------------------------------------------------------------
# PropertySetDescription
# ---------------------------------------------------------------------------


class TestPropertySetDescription:
    def test_add_entry_applies_builtin(self):
        pset = PropertySetDescription(name="Pset_WallCommon", entity_types=["IfcWall"])
        pset.add_entry(PropertySetEntry.create_label("FireRating"))
        assert pset.entries[0].maps[0].builtin == BuiltInParameter.FIRE_RATING

    def test_add_entry_keeps_explicit_builtin(self):
        pset = PropertySetDescription(name="Pset_WallCommon", entity_types=["IfcWall"])
        pset.add_entry(PropertySetEntry.create_label("FireRating", builtin=BuiltInParameter.ALL_MODEL_DESCRIPTION))
        assert pset.entries[0].maps[0].builtin == BuiltInParameter.ALL_MODEL_DESCRIPTION

    def test_apply_parameter_map(self):
        pset = PropertySetDescription(name="Pset_WallCommon", entity_types=["IfcWall"])
        pset.add_entry(PropertySetEntry.create_boolean("IsExternal"))
        pset.apply_parameter_map({("Pset_WallCommon", "IsExternal"): "Exterior", ("Pset_Other", "IsExternal"): "X"})
        assert pset.entries[0].maps[0].parameter_name == "Exterior"

    def test_process_entries_sorted_and_failures_skipped(self, ctx, wall):
        pset = PropertySetDescription(name="Pset_Test", entity_types=["IfcWall"])
        pset.add_entry(PropertySetEntry.create_label("Zeta"))
        broken = PropertySetEntry.create_label("Broken", parameter_name="")
        broken.set_calculator(_FailingCalculator())
        pset.add_entry(broken)
        pset.add_entry(PropertySetEntry.create_label("Alpha"))
        element = HostElement(id=1, parameters=[text_param("Zeta", "z"), text_param("Alpha", "a")])

        properties = pset.process_entries(ctx, None, element, None, wall)
        assert [p.Name for p in properties] == ["Alpha", "Zeta"]

    def test_empty_text_does_not_replace(self, ctx, wall):
        pset = PropertySetDescription(name="Pset_Test", entity_types=["IfcWall"])
        pset.add_entry(PropertySetEntry.create_label("Mark", parameter_name="Mark"))
        pset.add_entry(PropertySetEntry.create_label("Mark", parameter_name="Old Mark"))
        element = HostElement(id=1, parameters=[text_param("Mark", "M1"), text_param("Old Mark", "")])

        properties = pset.process_entries(ctx, None, element, None, wall)
        assert len(properties) == 1
        assert properties[0].NominalValue.wrappedValue == "M1"

    def test_look_in_type_before_ifc4(self):
        element_type = HostElement(id=10, is_type=True, parameters=[text_param("Mark", "R1")])
        element = HostElement(id=1, category="Roofs", type_element=element_type)
        pset = PropertySetDescription(name="Pset_RoofCommon", entity_types=["IfcRoof"])
        pset.add_entry(PropertySetEntry.create_label("Mark"))

        legacy = build_model("IFC2X3")
        roof = add_entity(legacy, "IfcRoof", "Roof")
        ctx = ExportContext(legacy, ExportOptions(unit_scales=IDENTITY_SCALES))
        properties = pset.process_entries(ctx, None, element, element_type, roof)
        assert [p.NominalValue.wrappedValue for p in properties] == ["R1"]

        current = build_model("IFC4")
        roof = add_entity(current, "IfcRoof", "Roof")
        ctx = ExportContext(current, ExportOptions(unit_scales=IDENTITY_SCALES))
        assert pset.process_entries(ctx, None, element, element_type, roof) == []


# ---------------------------------------------------------------------------
# QuantityDescription
# ---------------------------------------------------------------------------


class TestQuantityDescription:
    def test_name_by_schema(self, ctx):
        qto = QuantityDescription.for_base("Wall", ["IfcWall"])
        assert qto.name == "Qto_WallBaseQuantities"
        assert qto.set_name(ctx) == "Qto_WallBaseQuantities"
        legacy_ctx = ExportContext(build_model("IFC2X3"))
        assert qto.set_name(legacy_ctx) == "BaseQuantities"

    def test_length_from_parameter_is_scaled(self, model):
        ctx = ExportContext(model)
        qto = QuantityDescription.for_base("Wall", ["IfcWall"], method_of_measurement="Standard")
        qto.add_quantity("Length", QuantityType.LENGTH, parameter_name="Length")
        element = HostElement(id=1, parameters=[length_param("Length", 10.0)])

        quantities = qto.process_entries(ctx, None, element, None)
        assert len(quantities) == 1
        assert quantities[0].is_a("IfcQuantityLength")
        assert quantities[0].LengthValue == pytest.approx(3.048)
        assert quantities[0].Description == "Standard"

    def test_calculator_fallback(self, ctx):
        qto = QuantityDescription.for_base("Slab", ["IfcSlab"])
        qto.add_quantity("GrossVolume", QuantityType.VOLUME, calculator=VolumeCalculator())
        body = BodyParams(scaled_area=2.0, scaled_height=3.0)

        quantities = qto.process_entries(ctx, body, HostElement(id=1), None)
        assert quantities[0].is_a("IfcQuantityVolume")
        assert quantities[0].VolumeValue == pytest.approx(6.0)

    def test_count(self, ctx):
        qto = QuantityDescription.for_base("Stair", ["IfcStair"])
        qto.add_quantity("NumberOfRiser", QuantityType.COUNT, parameter_name="Risers")
        element = HostElement(id=1, parameters=[int_param("Risers", 12)])

        quantities = qto.process_entries(ctx, None, element, None)
        assert quantities[0].is_a("IfcQuantityCount")
        assert quantities[0].CountValue == 12

    def test_builtin_area(self, ctx):
        qto = QuantityDescription.for_base("Slab", ["IfcSlab"])
        qto.add_quantity("GrossArea", QuantityType.AREA, builtin=BuiltInParameter.HOST_AREA_COMPUTED)
        element = HostElement(
            id=1,
            parameters=[length_param("Area", 20.0, builtin=BuiltInParameter.HOST_AREA_COMPUTED)],
        )
        quantities = qto.process_entries(ctx, None, element, None)
        assert quantities[0].AreaValue == pytest.approx(20.0)

    def test_real_quantity_not_in_ifc4(self, ctx):
        qto = QuantityDescription.for_base("Wall", ["IfcWall"])
        qto.add_quantity("Factor", QuantityType.REAL, parameter_name="Factor")
        element = HostElement(id=1, parameters=[length_param("Factor", 1.5)])
        assert qto.process_entries(ctx, None, element, None) == []

    def test_missing_values(self, ctx):
        qto = QuantityDescription.for_base("Wall", ["IfcWall"])
        qto.add_quantity("Length", QuantityType.LENGTH, parameter_name="Length")
        assert qto.process_entries(ctx, None, HostElement(id=1), None) == []


# ---------------------------------------------------------------------------
# PreDefinedPropertySetDescription
# ---------------------------------------------------------------------------


class TestPreDefinedDescription:
    def _lining(self) -> PreDefinedPropertySetDescription:
        lining = PreDefinedPropertySetDescription(name="IfcDoorLiningProperties", entity_types=["IfcDoor"])
        lining.add_entry(PreDefinedPropertySetEntry.create("LiningDepth", PropertyType.POSITIVE_LENGTH))
        lining.add_entry(PreDefinedPropertySetEntry.create("LiningThickness", PropertyType.POSITIVE_LENGTH))
        return lining

    def test_values(self, ctx):
        element = HostElement(id=1, parameters=[length_param("LiningDepth", 0.1)])
        results = self._lining().process_entries(ctx, element)
        assert results == [("LiningDepth", PropertyValueType.SINGLE_VALUE, [pytest.approx(0.1)])]

    def test_builtin_source(self, ctx):
        entry = PreDefinedPropertySetEntry.create(
            "Description", PropertyType.TEXT, parameter_name="", builtin=BuiltInParameter.ALL_MODEL_DESCRIPTION
        )
        element = HostElement(
            id=1, parameters=[text_param("Description", "Oak", builtin=BuiltInParameter.ALL_MODEL_DESCRIPTION)]
        )
        assert entry.process_entry(ctx, element) == ["Oak"]

    def test_list_values(self, ctx):
        entry = PreDefinedPropertySetEntry.create(
            "Layers", PropertyType.LABEL, property_value_type=PropertyValueType.LIST_VALUE
        )
        element = HostElement(id=1, parameters=[text_param("Layers(1)", "A"), text_param("Layers(2)", "B")])
        assert entry.process_entry(ctx, element) == ["A", "B"]

    def test_empty(self, ctx):
        assert self._lining().process_entries(ctx, HostElement(id=1)) is None
