"""Descriptions: which entries make up a set and which IFC entities it applies to."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import ifcopenshell
import ifcopenshell.util.element
from pydantic import BaseModel, ConfigDict, Field

from psetmap.config import ENTITIES_WITH_NO_RELATED_TYPE, LEGACY_QUANTITY_SET_NAME
from psetmap.ifc import schema
from psetmap.ifc.values import normalize_name
from psetmap.models.body import BodyParams
from psetmap.models.host import BuiltInParameter, HostElement
from psetmap.properties.predefined_entry import PreDefinedPropertySetEntry
from psetmap.properties.pset_entry import PropertySetEntry
from psetmap.properties.quantity_entry import QuantityEntry
from psetmap.properties.types import PropertyValueType, QuantityType

if TYPE_CHECKING:
    from psetmap.context import ExportContext

logger = logging.getLogger(__name__)

# Property name -> built-in parameter, regardless of property set
_GENERAL_BUILTINS: dict[str, BuiltInParameter] = {
    "Span": BuiltInParameter.INSTANCE_LENGTH_PARAM,
    "CeilingCovering": BuiltInParameter.ROOM_FINISH_CEILING,
    "WallCovering": BuiltInParameter.ROOM_FINISH_WALL,
    "FloorCovering": BuiltInParameter.ROOM_FINISH_FLOOR,
    "FireRating": BuiltInParameter.FIRE_RATING,
    "ThermalTransmittance": BuiltInParameter.ANALYTICAL_HEAT_TRANSFER_COEFFICIENT,
}

# (property set, property name) -> built-in parameter
_SPECIFIC_BUILTINS: dict[tuple[str, str], BuiltInParameter] = {
    ("Pset_ManufacturerTypeInformation", "Manufacturer"): BuiltInParameter.ALL_MODEL_MANUFACTURER,
    ("Pset_CoveringCommon", "TotalThickness"): BuiltInParameter.CEILING_THICKNESS,
    ("Pset_LightFixtureTypeCommon", "TotalWattage"): BuiltInParameter.LIGHTING_FIXTURE_WATTAGE,
    ("Pset_RoofCommon", "TotalArea"): BuiltInParameter.HOST_AREA_COMPUTED,
}


class BuiltInParameterMapper:
    """Built-in parameter id for a property, by name or by (set, name)."""

    @staticmethod
    def get_builtin(pset_name: str, property_name: str) -> BuiltInParameter | None:
        builtin = _GENERAL_BUILTINS.get(property_name)
        if builtin is not None:
            return builtin
        return _SPECIFIC_BUILTINS.get((pset_name, property_name))


def _is_empty_text(prop: ifcopenshell.entity_instance) -> bool:
    if not prop.is_a("IfcPropertySingleValue") or prop.NominalValue is None:
        return False
    value = prop.NominalValue.wrappedValue
    return isinstance(value, str) and not value.strip()


class Description(BaseModel):
    """Common applicability checks for all set descriptions."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    description: str = ""
    entity_types: list[str] = Field(default_factory=list)
    object_type: str = ""
    predefined_type: str = ""

    def is_sub_type_of_entity_types(
        self, target: ifcopenshell.entity_instance | str | None, schema_name: str = "IFC4"
    ) -> bool:
        """True if *target* (a handle or a class name) is one of the entity types or a subtype."""
        if target is None:
            return False
        if isinstance(target, str):
            return bool(target) and any(schema.is_subtype_of(schema_name, target, t) for t in self.entity_types)
        return any(schema.handle_is_subtype_of(target, t) for t in self.entity_types)

    def is_appropriate_type(self, handle: ifcopenshell.entity_instance | None) -> bool:
        if handle is None or not self.is_sub_type_of_entity_types(handle):
            return False
        if not self.object_type:
            return True
        return normalize_name(self.object_type) == normalize_name(handle.is_a())

    def is_appropriate_entity_type(
        self, target: ifcopenshell.entity_instance | str | None, schema_name: str = "IFC4"
    ) -> bool:
        return target is not None and self.is_sub_type_of_entity_types(target, schema_name)

    def is_appropriate_object_type(self, target: ifcopenshell.entity_instance | str | None) -> bool:
        """Case-insensitive containment of the class (or ObjectType) in ``object_type``.

        ``object_type`` may list several applicable types separated by commas.
        """
        if target is None or not self.object_type:
            return False
        applicable = self.object_type.lower()
        if isinstance(target, str):
            return bool(target) and target.lower() in applicable
        if target.is_a().lower() in applicable:
            return True
        object_type = getattr(target, "ObjectType", None)
        if object_type:
            return object_type.lower() in applicable
        return False

    def is_appropriate_predefined_type(self, handle: ifcopenshell.entity_instance | None) -> bool:
        """True if no predefined type is required or the handle (or its type) has it."""
        if not self.predefined_type:
            return True
        if handle is None:
            return False
        wanted = normalize_name(self.predefined_type)
        candidates = [handle]
        related_type = ifcopenshell.util.element.get_type(handle)
        if related_type is not None and related_type != handle:
            candidates.append(related_type)
        for candidate in candidates:
            for value in _predefined_values(candidate):
                if normalize_name(value) == wanted:
                    return True
        return False

    def is_applicable(self, handle: ifcopenshell.entity_instance | None) -> bool:
        """Entity type matches and any object type / predefined type condition holds."""
        if not self.is_appropriate_entity_type(handle):
            return False
        if self.object_type and not self.is_appropriate_object_type(handle):
            return False
        return self.is_appropriate_predefined_type(handle)


def _predefined_values(handle: ifcopenshell.entity_instance) -> list[str]:
    values: list[str] = []
    predefined = getattr(handle, "PredefinedType", None)
    if predefined:
        values.append(predefined)
    if predefined in (None, "USERDEFINED"):
        for attribute in ("ObjectType", "ElementType"):
            user_value = getattr(handle, attribute, None)
            if user_value:
                values.append(user_value)
    return values


class PropertySetDescription(Description):
    """A named property set and the entries that fill it."""

    entries: list[PropertySetEntry] = Field(default_factory=list)
    add_type_properties_to_instance: bool = False

    def add_entry(self, entry: PropertySetEntry) -> None:
        """Add *entry*, giving its first map the mapped built-in parameter."""
        builtin = BuiltInParameterMapper.get_builtin(self.name, entry.property_name)
        if builtin is not None and entry.maps and entry.maps[0].builtin is None:
            entry.set_builtin_parameter(builtin)
        entry.update_entry()
        self.entries.append(entry)

    def apply_parameter_map(self, parameter_map: dict[tuple[str, str], str]) -> None:
        """Point entries at the user's parameter names for (set, property) pairs."""
        for entry in self.entries:
            mapped = parameter_map.get((self.name, entry.property_name))
            if mapped:
                entry.set_parameter_name(mapped)

    def process_entries(
        self,
        ctx: ExportContext,
        body: BodyParams | None,
        element: HostElement,
        element_type: HostElement | None,
        handle: ifcopenshell.entity_instance | None,
    ) -> list[ifcopenshell.entity_instance]:
        """Create the set's properties, sorted by name.

        An entry that raises is logged and skipped.  A later property
        never replaces an earlier one of the same name with an empty text.
        """
        look_in_type = (
            ctx.is_pre_ifc4 and handle is not None and handle.is_a() in ENTITIES_WITH_NO_RELATED_TYPE
        )
        by_name: dict[str, ifcopenshell.entity_instance] = {}
        for entry in self.entries:
            try:
                prop = entry.process_entry(
                    ctx,
                    self.name,
                    body,
                    element,
                    element_type,
                    handle,
                    look_in_type,
                    self.add_type_properties_to_instance,
                )
            except Exception:
                logger.debug("Entry %s.%s failed", self.name, entry.property_name, exc_info=True)
                continue
            if prop is None:
                continue
            if prop.Name in by_name and _is_empty_text(prop):
                continue
            by_name[prop.Name] = prop
        return [by_name[name] for name in sorted(by_name)]


class QuantityDescription(Description):
    """A quantity set (IfcElementQuantity)."""

    method_of_measurement: str = ""
    entries: list[QuantityEntry] = Field(default_factory=list)

    @classmethod
    def for_base(cls, base_name: str, entity_types: list[str], **kwargs: Any) -> QuantityDescription:
        """``Qto_<base>BaseQuantities`` for *entity_types*."""
        return cls(name=f"Qto_{base_name}BaseQuantities", entity_types=entity_types, **kwargs)

    def set_name(self, ctx: ExportContext) -> str:
        """Set name to write: ``BaseQuantities`` before IFC4."""
        return LEGACY_QUANTITY_SET_NAME if ctx.is_pre_ifc4 else self.name

    def add_entry(self, entry: QuantityEntry) -> None:
        entry.update_entry()
        self.entries.append(entry)

    def add_quantity(
        self,
        property_name: str,
        quantity_type: QuantityType,
        parameter_name: str = "",
        builtin: BuiltInParameter | None = None,
        calculator: Any = None,
    ) -> QuantityEntry:
        entry = QuantityEntry.create(property_name, quantity_type, parameter_name, builtin, calculator)
        self.add_entry(entry)
        return entry

    def process_entries(
        self,
        ctx: ExportContext,
        body: BodyParams | None,
        element: HostElement,
        element_type: HostElement | None,
    ) -> list[ifcopenshell.entity_instance]:
        quantities: list[ifcopenshell.entity_instance] = []
        for entry in self.entries:
            try:
                quantity = entry.process_entry(ctx, body, element, element_type, self.method_of_measurement or None)
            except Exception:
                logger.debug("Quantity %s.%s failed", self.name, entry.property_name, exc_info=True)
                continue
            if quantity is not None:
                quantities.append(quantity)
        return quantities


class PreDefinedPropertySetDescription(Description):
    """An IfcPreDefinedPropertySet subtype; ``name`` is the entity class."""

    entries: list[PreDefinedPropertySetEntry] = Field(default_factory=list)

    def add_entry(self, entry: PreDefinedPropertySetEntry) -> None:
        entry.update_entry()
        self.entries.append(entry)

    def process_entries(
        self, ctx: ExportContext, element: HostElement
    ) -> list[tuple[str, PropertyValueType, list[Any]]] | None:
        results: list[tuple[str, PropertyValueType, list[Any]]] = []
        for entry in self.entries:
            try:
                values = entry.process_entry(ctx, element)
            except Exception:
                logger.debug("Attribute %s.%s failed", self.name, entry.property_name, exc_info=True)
                continue
            if values:
                results.append((entry.property_name, entry.property_value_type, values))
        return results or None
