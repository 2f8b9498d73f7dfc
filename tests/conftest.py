"""Shared fixtures: synthetic IFC models, contexts and host elements."""

from __future__ import annotations

import ifcopenshell
import ifcopenshell.api
import pytest

from helpers import IDENTITY_SCALES, build_model, text_param, yes_no_param
from psetmap.context import ExportContext
from psetmap.models.host import HostElement
from psetmap.options import ExportOptions


@pytest.fixture
def model() -> ifcopenshell.file:
    return build_model("IFC4")


@pytest.fixture
def ctx(model) -> ExportContext:
    return ExportContext(model, ExportOptions(unit_scales=IDENTITY_SCALES))


@pytest.fixture
def wall(model):
    return ifcopenshell.api.run("root.create_entity", model, ifc_class="IfcWall", name="Wall 1")


@pytest.fixture
def wall_element() -> HostElement:
    wall_type = HostElement(
        id=10,
        name="Generic - 200mm",
        family_name="Basic Wall",
        is_type=True,
        parameters=[text_param("Manufacturer", "ACME")],
    )
    return HostElement(
        id=1,
        name="Wall 1",
        category="Walls",
        parameters=[
            yes_no_param("IsExternal", 1),
            text_param("Fire Rating", "2HR"),
        ],
        type_element=wall_type,
    )
