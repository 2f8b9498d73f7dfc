"""Tests for the parameter-mapping and user-defined property set files."""

from __future__ import annotations

import logging

import pytest

from psetmap.models.host import BuiltInParameter
from psetmap.properties.calculators import HeightCalculator
from psetmap.properties.parameter_map import (
    load_parameter_map,
    load_user_defined_psets,
    parse_property_types,
)
from psetmap.properties.types import PropertyType, PropertyValueType


def _write(tmp_path, name, lines):
    path = tmp_path / name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Parameter mapping file
# ---------------------------------------------------------------------------


class TestParameterMap:
    def test_load(self, tmp_path):
        path = _write(
            tmp_path,
            "mapping.txt",
            [
                "# comment",
                "",
                "Pset_WallCommon\tFireRating\tFire Resistance",
                "Pset_WallCommon\tIsExternal",
                "  Pset_DoorCommon\tFireRating\tDoor Rating",
            ],
        )
        mapping = load_parameter_map(path)
        assert mapping == {
            ("Pset_WallCommon", "FireRating"): "Fire Resistance",
            ("Pset_DoorCommon", "FireRating"): "Door Rating",
        }

    def test_missing_file(self, tmp_path):
        assert load_parameter_map(tmp_path / "nope.txt") == {}
        assert load_parameter_map(None) == {}


# ---------------------------------------------------------------------------
# Type column
# ---------------------------------------------------------------------------


class TestParsePropertyTypes:
    def test_single(self):
        assert parse_property_types("Length") == (PropertyValueType.SINGLE_VALUE, [PropertyType.LENGTH])

    def test_value_type_prefix(self):
        assert parse_property_types("PropertyListValue.Label") == (
            PropertyValueType.LIST_VALUE,
            [PropertyType.LABEL],
        )

    def test_table(self):
        assert parse_property_types("PropertyTableValue.Real/Length") == (
            PropertyValueType.TABLE_VALUE,
            [PropertyType.REAL, PropertyType.LENGTH],
        )

    def test_unknowns(self):
        assert parse_property_types("Nonsense.Gibberish") == (PropertyValueType.SINGLE_VALUE, [PropertyType.LABEL])


# ---------------------------------------------------------------------------
# User-defined property sets
# ---------------------------------------------------------------------------


class TestUserDefinedPsets:
    @pytest.fixture
    def psets_file(self, tmp_path):
        return _write(
            tmp_path,
            "psets.txt",
            [
                "# User defined property sets",
                "\tOrphan\tLabel",
                "PropertySet:\tAcme_Wall\tI\tIfcWall, IfcSlab",
                "\tWidth\tLength\tWall Width",
                "\tMaterials\tPropertyListValue.Label\tMaterial",
                "\tHeight\tLength\tHeightCalculator",
                "\tMark\tLabel\tBuiltInParameter.ALL_MODEL_TYPE_MARK",
                "\tBroken\tLabel\tBuiltInParameter.NOT_A_PARAMETER",
                "\tNote\tText",
                "PropertySet:\tAcme_Type\tT\tIfcWallType;IfcSlabType",
                "\tSupplier\tLabel",
            ],
        )

    def test_headers(self, psets_file):
        descriptions = load_user_defined_psets(psets_file)
        assert [d.name for d in descriptions] == ["Acme_Wall", "Acme_Type"]
        assert descriptions[0].entity_types == ["IfcWall", "IfcSlab"]
        assert descriptions[1].entity_types == ["IfcWallType", "IfcSlabType"]

    def test_entries(self, psets_file):
        wall = load_user_defined_psets(psets_file)[0]
        by_name = {e.property_name: e for e in wall.entries}
        assert list(by_name) == ["Width", "Materials", "Height", "Mark", "Note"]

        width = by_name["Width"]
        assert width.property_type == PropertyType.LENGTH
        assert width.maps[0].parameter_name == "Wall Width"

        materials = by_name["Materials"]
        assert materials.property_value_type == PropertyValueType.LIST_VALUE
        assert materials.maps[0].parameter_name == "Material"

        note = by_name["Note"]
        assert note.property_type == PropertyType.TEXT
        assert note.maps[0].parameter_name == "Note"

    def test_calculator_column(self, psets_file):
        height = load_user_defined_psets(psets_file)[0].entries[2]
        entry_map = height.maps[0]
        assert isinstance(entry_map.calculator, HeightCalculator)
        assert entry_map.use_calculator_only
        assert not entry_map.parameter_name_is_valid

    def test_builtin_column(self, psets_file):
        mark = load_user_defined_psets(psets_file)[0].entries[3]
        assert mark.maps[0].builtin == BuiltInParameter.ALL_MODEL_TYPE_MARK
        assert mark.maps[0].parameter_name == "Mark"

    def test_unknown_builtin_is_skipped(self, psets_file, caplog):
        with caplog.at_level(logging.WARNING, logger="psetmap.properties.parameter_map"):
            wall = load_user_defined_psets(psets_file)[0]
        assert "Broken" not in [e.property_name for e in wall.entries]
        assert "NOT_A_PARAMETER" in caplog.text

    def test_type_flag(self, psets_file):
        instance, type_set = load_user_defined_psets(psets_file)
        assert not any(e.is_element_type_property for e in instance.entries)
        assert all(e.is_element_type_property for e in type_set.entries)

    def test_missing_file(self, tmp_path):
        assert load_user_defined_psets(tmp_path / "missing.txt") == []
