"""Tests for type tags, unit scaling and value conversion."""

from __future__ import annotations

import math

import pytest

from helpers import build_model
from psetmap.ifc.units import UnitScaler, has_monetary_unit
from psetmap.ifc.values import (
    MEASURES,
    ValueKind,
    coerce,
    ifc_type_for,
    match_enumeration,
    normalize_name,
    value_from_parameter,
    value_from_string,
)
from psetmap.models.host import Parameter, SpecType, StorageType
from psetmap.properties.types import PropertyType, PropertyValueType, QuantityType


# ---------------------------------------------------------------------------
# Type tags
# ---------------------------------------------------------------------------


class TestTypeParsing:
    @pytest.mark.parametrize(
        "text",
        ["IfcLengthMeasure", "Length", "length", "LengthMeasure"],
    )
    def test_property_type_affixes(self, text):
        assert PropertyType.parse(text) == PropertyType.LENGTH

    def test_property_type_positive_length(self):
        assert PropertyType.parse("IfcPositiveLengthMeasure") == PropertyType.POSITIVE_LENGTH

    def test_property_type_unknown(self):
        assert PropertyType.parse("Bogus") is None
        assert PropertyType.parse("Bogus", PropertyType.LABEL) == PropertyType.LABEL

    def test_value_type_with_prefix(self):
        assert PropertyValueType.parse("PropertyListValue") == PropertyValueType.LIST_VALUE
        assert PropertyValueType.parse("enumeratedvalue") == PropertyValueType.ENUMERATED_VALUE

    def test_quantity_type(self):
        assert QuantityType.parse("IfcQuantityArea") == QuantityType.AREA
        assert QuantityType.parse("Count") == QuantityType.COUNT
        assert QuantityType.parse("Speed") is None


# ---------------------------------------------------------------------------
# Measure table
# ---------------------------------------------------------------------------


class TestMeasures:
    def test_entity_references_have_no_measure(self):
        for ptype in (PropertyType.IFC_MATERIAL, PropertyType.IFC_ORGANIZATION, PropertyType.MONETARY):
            assert ptype not in MEASURES

    def test_text_kinds(self):
        assert MEASURES[PropertyType.LABEL].kind == ValueKind.TEXT
        assert MEASURES[PropertyType.IDENTIFIER].ifc_type == "IfcIdentifier"

    def test_currency_without_monetary_unit_is_real(self):
        model = build_model()
        assert not has_monetary_unit(model)
        assert ifc_type_for(model, PropertyType.CURRENCY) == "IfcReal"

    def test_currency_with_monetary_unit(self):
        model = build_model()
        model.create_entity("IfcMonetaryUnit", Currency="EUR")
        assert ifc_type_for(model, PropertyType.CURRENCY) == "IfcMonetaryMeasure"

    def test_type_missing_from_schema(self):
        model = build_model("IFC2X3")
        assert ifc_type_for(model, PropertyType.NON_NEGATIVE_LENGTH) is None

    def test_count_is_float_before_ifc4x3(self):
        value = coerce(build_model("IFC4"), MEASURES[PropertyType.COUNT], 3)
        assert value == 3.0
        assert isinstance(value, float)

    def test_positive_length_rejects_zero(self):
        assert coerce(build_model(), MEASURES[PropertyType.POSITIVE_LENGTH], 0.0) is None
        assert coerce(build_model(), MEASURES[PropertyType.POSITIVE_LENGTH], 0.5) == 0.5

    def test_normalised_ratio_bounds(self):
        spec = MEASURES[PropertyType.NORMALISED_RATIO]
        assert spec.is_valid(1.0)
        assert spec.is_valid(0.0)
        assert not spec.is_valid(1.2)


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------


class TestUnitScaler:
    def test_defaults_feet_to_metres(self):
        scaler = UnitScaler()
        assert scaler.scale_length(10.0) == pytest.approx(3.048)
        assert scaler.scale_angle(math.pi) == pytest.approx(180.0)

    def test_unknown_category_is_identity(self):
        scaler = UnitScaler()
        assert scaler.factor("power") == 1.0
        assert scaler.factor(None) == 1.0

    def test_override(self):
        scaler = UnitScaler({"length": 1.0})
        assert scaler.scale_length(2.0) == 2.0
        assert scaler.scale_area(1.0) == pytest.approx(0.09290304)


# ---------------------------------------------------------------------------
# From host parameters
# ---------------------------------------------------------------------------


class TestValueFromParameter:
    def test_length_is_scaled(self):
        param = Parameter(name="Width", storage=StorageType.DOUBLE, spec=SpecType.LENGTH, value=10.0)
        value, unscaled = value_from_parameter(param, PropertyType.LENGTH, UnitScaler())
        assert value == pytest.approx(3.048)
        assert unscaled == 10.0

    def test_number_spec_is_not_scaled(self):
        param = Parameter(name="Factor", storage=StorageType.DOUBLE, spec=SpecType.NUMBER, value=2.0)
        value, _ = value_from_parameter(param, PropertyType.LENGTH, UnitScaler())
        assert value == 2.0

    def test_yes_no_becomes_boolean(self):
        param = Parameter(name="IsExternal", storage=StorageType.INTEGER, spec=SpecType.YES_NO, value=1)
        assert value_from_parameter(param, PropertyType.BOOLEAN, UnitScaler()) == (True, None)
        param.value = 0
        assert value_from_parameter(param, PropertyType.BOOLEAN, UnitScaler()) == (False, None)

    def test_element_id_uses_display_value(self):
        param = Parameter(name="Material", storage=StorageType.ELEMENT_ID, value=123, display_value="Concrete")
        assert value_from_parameter(param, PropertyType.LABEL, UnitScaler()) == ("Concrete", None)

    def test_invalid_positive_length(self):
        param = Parameter(name="Depth", storage=StorageType.DOUBLE, spec=SpecType.LENGTH, value=-1.0)
        assert value_from_parameter(param, PropertyType.POSITIVE_LENGTH, UnitScaler()) is None

    def test_string_storage_for_real_is_none(self):
        param = Parameter(name="Width", storage=StorageType.STRING, value="wide")
        assert value_from_parameter(param, PropertyType.REAL, UnitScaler()) is None

    def test_missing_value(self):
        param = Parameter(name="Width", storage=StorageType.DOUBLE, spec=SpecType.LENGTH)
        assert value_from_parameter(param, PropertyType.LENGTH, UnitScaler()) is None
        assert value_from_parameter(None, PropertyType.LENGTH, UnitScaler()) is None

    def test_type_without_measure(self):
        param = Parameter(name="Material", value="Steel")
        assert value_from_parameter(param, PropertyType.IFC_MATERIAL, UnitScaler()) is None


# ---------------------------------------------------------------------------
# From strings
# ---------------------------------------------------------------------------


class TestValueFromString:
    def test_unit_suffix_is_cut(self):
        assert value_from_string("230 V", PropertyType.ELECTRIC_VOLTAGE) == 230.0

    def test_text_stops_at_first_space(self):
        assert value_from_string("2HR rated", PropertyType.LABEL) == "2HR"
        assert value_from_string("Fire door", PropertyType.IDENTIFIER) == "Fire"

    def test_leading_space_is_not_trimmed(self):
        assert value_from_string(" Fire door", PropertyType.TEXT) == " Fire door"

    @pytest.mark.parametrize("text,expected", [("1", True), ("0", False), ("true", True), ("FALSE", False)])
    def test_booleans(self, text, expected):
        assert value_from_string(text, PropertyType.BOOLEAN) is expected

    def test_integer(self):
        assert value_from_string("4 pcs", PropertyType.INTEGER) == 4

    def test_ratio_validation(self):
        assert value_from_string("0.5", PropertyType.NORMALISED_RATIO) == 0.5
        assert value_from_string("1.5", PropertyType.NORMALISED_RATIO) is None

    def test_unparseable(self):
        assert value_from_string("abc", PropertyType.REAL) is None
        assert value_from_string("", PropertyType.REAL) is None
        assert value_from_string(None, PropertyType.REAL) is None


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class TestEnumerations:
    def test_normalize(self):
        assert normalize_name("Not_Known ") == "notknown"

    def test_match_uses_canonical_spelling(self):
        assert match_enumeration("not known", ["NEW", "NOTKNOWN"]) == "NOTKNOWN"

    def test_no_match(self):
        assert match_enumeration("purple", ["NEW", "EXISTING"]) is None

    def test_empty_enumeration_passes_through(self):
        assert match_enumeration("anything", []) == "anything"
