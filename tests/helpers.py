"""Builders for synthetic IFC models and host parameters."""

from __future__ import annotations

import ifcopenshell
import ifcopenshell.guid

from psetmap.models.host import Parameter, SpecType, StorageType

# Host units equal export units, so expected values read as written
IDENTITY_SCALES = {"length": 1.0, "area": 1.0, "volume": 1.0, "angle": 1.0}


def build_model(schema: str = "IFC4") -> ifcopenshell.file:
    f = ifcopenshell.file(schema=schema)
    f.create_entity("IfcProject", GlobalId=ifcopenshell.guid.new(), Name="SyntheticProject")
    return f


def add_entity(f: ifcopenshell.file, ifc_class: str, name: str | None = None, **attributes):
    """Create a rooted entity directly, without owner history."""
    return f.create_entity(ifc_class, GlobalId=ifcopenshell.guid.new(), Name=name, **attributes)


def assign_type(f: ifcopenshell.file, element, element_type) -> None:
    f.create_entity(
        "IfcRelDefinesByType",
        GlobalId=ifcopenshell.guid.new(),
        RelatedObjects=[element],
        RelatingType=element_type,
    )


def text_param(name: str, value: str | None, **kwargs) -> Parameter:
    return Parameter(name=name, storage=StorageType.STRING, spec=SpecType.TEXT, value=value, **kwargs)


def length_param(name: str, value: float | None, **kwargs) -> Parameter:
    return Parameter(name=name, storage=StorageType.DOUBLE, spec=SpecType.LENGTH, value=value, **kwargs)


def double_param(name: str, value: float | None, spec: SpecType = SpecType.NUMBER, **kwargs) -> Parameter:
    return Parameter(name=name, storage=StorageType.DOUBLE, spec=spec, value=value, **kwargs)


def int_param(name: str, value: int | None, spec: SpecType = SpecType.NUMBER, **kwargs) -> Parameter:
    return Parameter(name=name, storage=StorageType.INTEGER, spec=spec, value=value, **kwargs)


def yes_no_param(name: str, value: int | None, **kwargs) -> Parameter:
    return int_param(name, value, spec=SpecType.YES_NO, **kwargs)
