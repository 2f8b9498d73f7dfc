"""Entity subtype checks against the ifcopenshell schema declarations."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import ifcopenshell
import ifcopenshell.ifcopenshell_wrapper as wrapper

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _schema(schema_name: str) -> Any:
    return wrapper.schema_by_name(schema_name)


def _declaration(schema_name: str, entity_name: str) -> Any | None:
    try:
        return _schema(schema_name).declaration_by_name(entity_name)
    except Exception:
        logger.debug("No declaration %s in %s", entity_name, schema_name)
        return None


def schema_name(model: ifcopenshell.file) -> str:
    """Short schema family of *model*: ``IFC2X3``, ``IFC4`` or ``IFC4X3``."""
    name = model.schema.upper()
    if name.startswith("IFC4X3"):
        return "IFC4X3"
    return name


def is_pre_ifc4(model: ifcopenshell.file) -> bool:
    return schema_name(model) == "IFC2X3"


def is_ifc4x3(model: ifcopenshell.file) -> bool:
    return schema_name(model) == "IFC4X3"


def has_declaration(model: ifcopenshell.file, name: str) -> bool:
    """True if *name* (entity or defined type) exists in the model's schema."""
    return _declaration(getattr(model, "schema_identifier", None) or model.schema, name) is not None


def is_subtype_of(schema: str, entity_name: str, parent_name: str) -> bool:
    """Non-strict subtype test by class name; unknown names give False."""
    decl = _declaration(schema, entity_name)
    if decl is None:
        return False
    target = parent_name.lower()
    while decl is not None:
        if decl.name().lower() == target:
            return True
        supertype = getattr(decl, "supertype", None)
        decl = supertype() if supertype is not None else None
    return False


def handle_is_subtype_of(handle: ifcopenshell.entity_instance, parent_name: str) -> bool:
    try:
        return bool(handle.is_a(parent_name))
    except Exception:
        return False
