"""PropertyFactory — build IfcProperty* and IfcQuantity* entities."""

from __future__ import annotations

import logging
from typing import Any

import ifcopenshell

from psetmap.ifc import schema
from psetmap.ifc.cache import PropertyInfoCache
from psetmap.ifc.values import MEASURES, ValueKind, coerce, ifc_type_for, match_enumeration
from psetmap.properties.types import PropertyType, PropertyValueType, QuantityType

logger = logging.getLogger(__name__)

# QuantityType -> (entity, value attribute)
_QUANTITIES: dict[QuantityType, tuple[str, str]] = {
    QuantityType.LENGTH: ("IfcQuantityLength", "LengthValue"),
    QuantityType.POSITIVE_LENGTH: ("IfcQuantityLength", "LengthValue"),
    QuantityType.AREA: ("IfcQuantityArea", "AreaValue"),
    QuantityType.VOLUME: ("IfcQuantityVolume", "VolumeValue"),
    QuantityType.WEIGHT: ("IfcQuantityWeight", "WeightValue"),
    QuantityType.MASS: ("IfcQuantityWeight", "WeightValue"),
    QuantityType.COUNT: ("IfcQuantityCount", "CountValue"),
    QuantityType.TIME: ("IfcQuantityTime", "TimeValue"),
    QuantityType.REAL: ("IfcQuantityNumber", "NumberValue"),
}


class PropertyFactory:
    """Create property entities in one model, reusing cached ones.

    All ``create_*`` methods return None rather than raising when the
    value cannot be represented, so callers can move on to the next
    source.
    """

    def __init__(self, model: ifcopenshell.file, cache: PropertyInfoCache | None = None) -> None:
        self.model = model
        self.cache = cache if cache is not None else PropertyInfoCache()

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def create_value(self, property_type: PropertyType, value: Any) -> ifcopenshell.entity_instance | None:
        """Wrap *value* in the IFC defined type for *property_type*."""
        spec = MEASURES.get(property_type)
        ifc_type = ifc_type_for(self.model, property_type)
        if spec is None or ifc_type is None:
            return None
        wrapped = coerce(self.model, spec, value)
        if wrapped is None:
            return None
        return self.model.create_entity(ifc_type, wrapped)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def create_single_value(
        self,
        name: str,
        property_type: PropertyType,
        value: Any,
        *,
        unscaled: float | None = None,
        cache_strings: bool = False,
    ) -> ifcopenshell.entity_instance | None:
        key = PropertyInfoCache.key_for(
            property_type,
            name,
            PropertyValueType.SINGLE_VALUE,
            value,
            unscaled=unscaled,
            cache_strings=cache_strings,
        )
        cached = self.cache.find(key)
        if cached is not None:
            return cached

        nominal = self.create_value(property_type, value)
        if nominal is None:
            return None
        prop = self.model.create_entity("IfcPropertySingleValue", Name=name, NominalValue=nominal)
        self.cache.add(key, prop)
        return prop

    def create_enumerated_value(
        self,
        name: str,
        property_type: PropertyType,
        values: list[Any],
        enumeration: list[str] | None = None,
        *,
        cache_strings: bool = False,
    ) -> ifcopenshell.entity_instance | None:
        """Enumerated property; text values must match *enumeration* if one is given."""
        spec = MEASURES.get(property_type)
        if spec is None:
            return None
        if spec.kind == ValueKind.TEXT:
            matched = [match_enumeration(str(v), enumeration or []) for v in values]
            if any(m is None for m in matched):
                logger.debug("%s: %s not in enumeration %s", name, values, enumeration)
                return None
            values = matched

        key = None
        if len(values) == 1:
            key = PropertyInfoCache.key_for(
                property_type,
                name,
                PropertyValueType.ENUMERATED_VALUE,
                values[0],
                cache_strings=cache_strings,
            )
        cached = self.cache.find(key)
        if cached is not None:
            return cached

        wrapped = [self.create_value(property_type, v) for v in values]
        wrapped = [w for w in wrapped if w is not None]
        if not wrapped:
            return None
        prop = self.model.create_entity("IfcPropertyEnumeratedValue", Name=name, EnumerationValues=wrapped)
        self.cache.add(key, prop)
        return prop

    def create_list_value(
        self, name: str, property_type: PropertyType, values: list[Any]
    ) -> ifcopenshell.entity_instance | None:
        wrapped = [self.create_value(property_type, v) for v in values]
        wrapped = [w for w in wrapped if w is not None]
        if not wrapped:
            return None
        return self.model.create_entity("IfcPropertyListValue", Name=name, ListValues=wrapped)

    def create_table_value(
        self,
        name: str,
        defining_type: PropertyType,
        defined_type: PropertyType,
        rows: list[tuple[Any, Any]],
    ) -> ifcopenshell.entity_instance | None:
        """Two-column table; rows whose cells cannot be wrapped are dropped."""
        defining: list[ifcopenshell.entity_instance] = []
        defined: list[ifcopenshell.entity_instance] = []
        for left, right in rows:
            left_value = self.create_value(defining_type, left)
            right_value = self.create_value(defined_type, right)
            if left_value is None or right_value is None:
                continue
            defining.append(left_value)
            defined.append(right_value)
        if not defining:
            return None
        return self.model.create_entity(
            "IfcPropertyTableValue",
            Name=name,
            DefiningValues=defining,
            DefinedValues=defined,
        )

    def create_reference_value(
        self, name: str, identification: str | None, reference_name: str | None = None
    ) -> ifcopenshell.entity_instance | None:
        """Reference property pointing at a new IfcClassificationReference."""
        if not identification:
            return None
        if schema.is_pre_ifc4(self.model):
            reference = self.model.create_entity(
                "IfcClassificationReference", ItemReference=identification, Name=reference_name
            )
        else:
            reference = self.model.create_entity(
                "IfcClassificationReference", Identification=identification, Name=reference_name
            )
        return self.model.create_entity("IfcPropertyReferenceValue", Name=name, PropertyReference=reference)

    # ------------------------------------------------------------------
    # Quantities
    # ------------------------------------------------------------------

    def create_quantity(
        self,
        name: str,
        quantity_type: QuantityType,
        value: float | int,
        description: str | None = None,
    ) -> ifcopenshell.entity_instance | None:
        entity, attribute = _QUANTITIES[quantity_type]
        if not schema.has_declaration(self.model, entity):
            logger.debug("%s quantities are not supported in %s", entity, self.model.schema)
            return None
        if quantity_type == QuantityType.COUNT:
            value = int(value) if schema.is_ifc4x3(self.model) else float(int(value))
        else:
            value = float(value)
        return self.model.create_entity(entity, Name=name, Description=description, **{attribute: value})
