"""Property set entries: one IfcProperty per entry, resolved from the host."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import ifcopenshell
from pydantic import Field

from psetmap.config import TYPE_PARAMETER_SUFFIX
from psetmap.ifc.units import UnitScaler
from psetmap.ifc.values import TEXT_TYPES, measure_for, value_from_parameter, value_from_string
from psetmap.models.body import BodyParams
from psetmap.models.host import BuiltInParameter, HostElement, Parameter, SpecType, StorageType
from psetmap.properties.entry import Entry
from psetmap.properties.entry_map import EntryMap
from psetmap.properties.types import PropertyType, PropertyValueType

if TYPE_CHECKING:
    from psetmap.context import ExportContext

logger = logging.getLogger(__name__)

# Host spec -> property type for double parameters exported as-is
_DOUBLE_SPEC_TYPES: dict[SpecType, PropertyType] = {
    SpecType.ANGLE: PropertyType.PLANE_ANGLE,
    SpecType.AREA: PropertyType.AREA,
    SpecType.LENGTH: PropertyType.LENGTH,
    SpecType.VOLUME: PropertyType.VOLUME,
    SpecType.COLOR_TEMPERATURE: PropertyType.COLOR_TEMPERATURE,
    SpecType.CURRENCY: PropertyType.CURRENCY,
    SpecType.ELECTRICAL_EFFICACY: PropertyType.ELECTRICAL_EFFICACY,
    SpecType.LUMINOUS_INTENSITY: PropertyType.LUMINOUS_INTENSITY,
    SpecType.ILLUMINANCE: PropertyType.ILLUMINANCE,
    SpecType.ELECTRICAL_POWER: PropertyType.POWER,
    SpecType.ELECTRICAL_CURRENT: PropertyType.ELECTRIC_CURRENT,
    SpecType.ELECTRICAL_POTENTIAL: PropertyType.ELECTRIC_VOLTAGE,
    SpecType.ELECTRICAL_FREQUENCY: PropertyType.FREQUENCY,
    SpecType.LUMINOUS_FLUX: PropertyType.LUMINOUS_FLUX,
    SpecType.TEMPERATURE: PropertyType.THERMODYNAMIC_TEMPERATURE,
    SpecType.FORCE: PropertyType.FORCE,
    SpecType.AIR_FLOW: PropertyType.VOLUMETRIC_FLOW_RATE,
    SpecType.PRESSURE: PropertyType.PRESSURE,
    SpecType.MASS_DENSITY: PropertyType.MASS_DENSITY,
}

_DEFAULTABLE_TYPES = frozenset({PropertyType.LABEL, PropertyType.TEXT, PropertyType.IDENTIFIER})


def list_parameter_values(
    element: HostElement,
    name: str,
    property_type: PropertyType,
    scaler: UnitScaler,
) -> list[Any]:
    """Collect ``name(1)``, ``name(2)``, ... until the first gap.

    The bare *name* stands in for ``name(1)`` when the latter is missing.
    """
    values: list[Any] = []
    index = 1
    while True:
        param = element.get_parameter(f"{name}({index})")
        if param is None and index == 1:
            param = element.get_parameter(name)
        converted = value_from_parameter(param, property_type, scaler)
        if converted is None:
            break
        values.append(converted[0])
        index += 1
    return values


class PropertySetEntryMap(EntryMap):
    """Resolves one IfcProperty from parameters, the element type or a calculator."""

    def process_entry(
        self,
        ctx: ExportContext,
        pset_name: str,
        body: BodyParams | None,
        element: HostElement,
        element_type: HostElement | None,
        handle: ifcopenshell.entity_instance | None,
        entry: PropertySetEntry,
        look_in_type: bool = False,
        add_type_properties_to_instance: bool = False,
    ) -> ifcopenshell.entity_instance | None:
        prop = None
        if self.parameter_name_is_valid:
            prop = self._from_element_or_type(
                ctx, element, element_type, entry, look_in_type, add_type_properties_to_instance
            )
        if prop is None and self.calculator is not None:
            prop = self._from_calculator(ctx, body, element, element_type, entry)
        if prop is None:
            logger.debug("%s.%s: no value for element %s", pset_name, entry.property_name, element.id)
        return prop

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def _from_element_or_type(
        self,
        ctx: ExportContext,
        element: HostElement,
        element_type: HostElement | None,
        entry: PropertySetEntry,
        look_in_type: bool,
        add_type_properties_to_instance: bool,
    ) -> ifcopenshell.entity_instance | None:
        # Type-less entities take their type's values directly, never the type's own
        if element.is_type and look_in_type:
            return None

        prop = self._from_names(ctx, element, entry, suffix="")
        if prop is None and element.is_type:
            prop = self._from_names(ctx, element, entry, suffix=TYPE_PARAMETER_SUFFIX)

        if prop is None and element_type is not None and (look_in_type or add_type_properties_to_instance):
            return self._from_element_or_type(ctx, element_type, None, entry, False, False)
        return prop

    def _from_names(
        self, ctx: ExportContext, element: HostElement, entry: PropertySetEntry, suffix: str
    ) -> ifcopenshell.entity_instance | None:
        builtin = self.builtin if not suffix else None
        candidates = [
            (self.parameter_name, builtin),
            (self.compatible_parameter_name, None),
            (self.localized_parameter_name(ctx.language) or "", None),
        ]
        for name, candidate_builtin in candidates:
            if not name and candidate_builtin is None:
                continue
            prop = self._from_parameter_name(
                ctx, element, entry, f"{name}{suffix}" if name else "", candidate_builtin
            )
            if prop is not None:
                return prop
        return None

    def _from_parameter_name(
        self,
        ctx: ExportContext,
        element: HostElement,
        entry: PropertySetEntry,
        name: str,
        builtin: BuiltInParameter | None,
    ) -> ifcopenshell.entity_instance | None:
        value_type = entry.property_value_type

        if value_type == PropertyValueType.LIST_VALUE:
            if not name:
                return None
            values = list_parameter_values(element, name, entry.property_type, ctx.scaler)
            if not values:
                return None
            if entry.property_type in TEXT_TYPES and entry.property_enumeration:
                return ctx.properties.create_enumerated_value(
                    entry.property_name, entry.property_type, values, entry.property_enumeration
                )
            return ctx.properties.create_list_value(entry.property_name, entry.property_type, values)

        param = _find_parameter(element, name, builtin)
        if param is None:
            return None

        if value_type == PropertyValueType.TABLE_VALUE:
            return self._table_from_parameter(ctx, entry, param)

        if value_type == PropertyValueType.REFERENCE_VALUE or entry.property_type in (
            PropertyType.CLASSIFICATION_REFERENCE,
            PropertyType.IFC_CLASSIFICATION_REFERENCE,
        ):
            return ctx.properties.create_reference_value(entry.property_name, param.as_string())

        converted = value_from_parameter(param, entry.property_type, ctx.scaler)
        if converted is None:
            return None
        value, unscaled = converted

        if value_type == PropertyValueType.ENUMERATED_VALUE:
            return ctx.properties.create_enumerated_value(
                entry.property_name, entry.property_type, [value], entry.property_enumeration
            )
        return ctx.properties.create_single_value(
            entry.property_name, entry.property_type, value, unscaled=unscaled
        )

    @staticmethod
    def _table_from_parameter(
        ctx: ExportContext, entry: PropertySetEntry, param: Parameter
    ) -> ifcopenshell.entity_instance | None:
        text = param.as_string()
        if not text:
            return None
        defining_type = entry.property_argument_type or PropertyType.REAL
        rows: list[tuple[Any, Any]] = []
        for line in text.splitlines():
            cells = line.split(";")
            if len(cells) != 2:
                continue
            defining = value_from_string(cells[0].strip(), defining_type)
            defined = value_from_string(cells[1].strip(), entry.property_type)
            if defining is None or defined is None:
                continue
            rows.append((defining, defined))
        if not rows:
            return None
        return ctx.properties.create_table_value(entry.property_name, defining_type, entry.property_type, rows)

    # ------------------------------------------------------------------
    # Calculator
    # ------------------------------------------------------------------

    def _from_calculator(
        self,
        ctx: ExportContext,
        body: BodyParams | None,
        element: HostElement,
        element_type: HostElement | None,
        entry: PropertySetEntry,
    ) -> ifcopenshell.entity_instance | None:
        calculator = self.calculator
        value = calculator.calculate(ctx, body, element, element_type, self)
        if value is None:
            return None

        name = entry.property_name
        property_type = entry.property_type
        value_type = entry.property_value_type

        if value_type == PropertyValueType.REFERENCE_VALUE or property_type == PropertyType.CLASSIFICATION_REFERENCE:
            return ctx.properties.create_reference_value(name, str(value))

        if measure_for(property_type) is None:
            raise ValueError(f"Missing case: calculated {property_type.value} for {name}")

        if isinstance(value, (list, tuple)):
            values = list(value)
            if not values:
                return None
            if property_type in TEXT_TYPES and calculator.calculates_multiple_values:
                if value_type == PropertyValueType.ENUMERATED_VALUE:
                    return ctx.properties.create_enumerated_value(
                        name, property_type, values, entry.property_enumeration
                    )
                return ctx.properties.create_list_value(name, property_type, values)
            value = values[0]

        if value_type == PropertyValueType.ENUMERATED_VALUE:
            return ctx.properties.create_enumerated_value(
                name,
                property_type,
                [value],
                entry.property_enumeration,
                cache_strings=calculator.cache_string_values,
            )
        if value_type == PropertyValueType.LIST_VALUE:
            return ctx.properties.create_list_value(name, property_type, [value])
        if value_type == PropertyValueType.SINGLE_VALUE:
            return ctx.properties.create_single_value(
                name, property_type, value, cache_strings=calculator.cache_string_values
            )
        raise ValueError(f"Missing case: calculated {value_type.value} for {name}")


def _find_parameter(element: HostElement, name: str, builtin: BuiltInParameter | None) -> Parameter | None:
    """Parameter by name, then by built-in id, on the element itself."""
    param = element.get_parameter(name)
    if param is not None and param.has_value:
        return param
    param = element.get_builtin_parameter(builtin)
    if param is not None and param.has_value:
        return param
    return None


class PropertySetEntry(Entry):
    """One property of a property set description."""

    property_type: PropertyType = PropertyType.LABEL
    property_value_type: PropertyValueType = PropertyValueType.SINGLE_VALUE
    property_enumeration: list[str] = Field(default_factory=list)
    property_argument_type: PropertyType | None = None
    default_value: str | None = None
    maps: list[PropertySetEntryMap] = Field(default_factory=list)

    @classmethod
    def map_class(cls) -> type[EntryMap]:
        return PropertySetEntryMap

    def process_entry(
        self,
        ctx: ExportContext,
        pset_name: str,
        body: BodyParams | None,
        element: HostElement,
        element_type: HostElement | None,
        handle: ifcopenshell.entity_instance | None,
        look_in_type: bool = False,
        add_type_properties_to_instance: bool = False,
    ) -> ifcopenshell.entity_instance | None:
        """First property produced by the maps, else the default property."""
        for entry_map in self.maps:
            prop = entry_map.process_entry(
                ctx,
                pset_name,
                body,
                element,
                element_type,
                handle,
                self,
                look_in_type,
                add_type_properties_to_instance,
            )
            if prop is not None:
                return prop
        return self.default_property(ctx, pset_name)

    def default_property(self, ctx: ExportContext, pset_name: str) -> ifcopenshell.entity_instance | None:
        if self.default_value is None or self.property_type not in _DEFAULTABLE_TYPES:
            return None
        key = (pset_name, self.property_name, self.property_type.value, self.default_value)
        if self.property_value_type == PropertyValueType.ENUMERATED_VALUE:
            return ctx.default_property(
                key,
                lambda: ctx.properties.create_enumerated_value(
                    self.property_name, self.property_type, [self.default_value], self.property_enumeration
                ),
            )
        return ctx.default_property(
            key,
            lambda: ctx.properties.create_single_value(self.property_name, self.property_type, self.default_value),
        )

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        property_name: str,
        property_type: PropertyType,
        parameter_name: str | None = None,
        builtin: BuiltInParameter | None = None,
        **kwargs: Any,
    ) -> PropertySetEntry:
        """Entry whose single map looks up *parameter_name* (default: the property name)."""
        entry = cls(property_name=property_name, property_type=property_type, **kwargs)
        entry_map = PropertySetEntryMap(
            parameter_name=property_name if parameter_name is None else parameter_name,
            builtin=builtin,
        )
        entry.add_entry(entry_map)
        return entry

    @classmethod
    def create_label(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.LABEL, **kwargs)

    @classmethod
    def create_text(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.TEXT, **kwargs)

    @classmethod
    def create_identifier(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.IDENTIFIER, **kwargs)

    @classmethod
    def create_boolean(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.BOOLEAN, **kwargs)

    @classmethod
    def create_logical(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.LOGICAL, **kwargs)

    @classmethod
    def create_integer(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.INTEGER, **kwargs)

    @classmethod
    def create_count(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.COUNT, **kwargs)

    @classmethod
    def create_real(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.REAL, **kwargs)

    @classmethod
    def create_length(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.LENGTH, **kwargs)

    @classmethod
    def create_positive_length(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.POSITIVE_LENGTH, **kwargs)

    @classmethod
    def create_area(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.AREA, **kwargs)

    @classmethod
    def create_volume(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.VOLUME, **kwargs)

    @classmethod
    def create_plane_angle(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.PLANE_ANGLE, **kwargs)

    @classmethod
    def create_positive_plane_angle(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.POSITIVE_PLANE_ANGLE, **kwargs)

    @classmethod
    def create_ratio(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.RATIO, **kwargs)

    @classmethod
    def create_normalised_ratio(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.NORMALISED_RATIO, **kwargs)

    @classmethod
    def create_thermal_transmittance(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.THERMAL_TRANSMITTANCE, **kwargs)

    @classmethod
    def create_power(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.POWER, **kwargs)

    @classmethod
    def create_electric_voltage(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.ELECTRIC_VOLTAGE, **kwargs)

    @classmethod
    def create_frequency(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, PropertyType.FREQUENCY, **kwargs)

    @classmethod
    def create_enumerated_value(
        cls,
        property_name: str,
        property_type: PropertyType,
        enumeration: list[str],
        **kwargs: Any,
    ) -> PropertySetEntry:
        return cls.create(
            property_name,
            property_type,
            property_value_type=PropertyValueType.ENUMERATED_VALUE,
            property_enumeration=list(enumeration),
            **kwargs,
        )

    @classmethod
    def create_list_value(cls, property_name: str, property_type: PropertyType, **kwargs: Any) -> PropertySetEntry:
        return cls.create(property_name, property_type, property_value_type=PropertyValueType.LIST_VALUE, **kwargs)

    @classmethod
    def create_table_value(
        cls,
        property_name: str,
        property_type: PropertyType,
        argument_type: PropertyType,
        **kwargs: Any,
    ) -> PropertySetEntry:
        return cls.create(
            property_name,
            property_type,
            property_value_type=PropertyValueType.TABLE_VALUE,
            property_argument_type=argument_type,
            **kwargs,
        )

    @classmethod
    def create_classification_reference(cls, property_name: str, **kwargs: Any) -> PropertySetEntry:
        return cls.create(
            property_name,
            PropertyType.CLASSIFICATION_REFERENCE,
            property_value_type=PropertyValueType.REFERENCE_VALUE,
            **kwargs,
        )

    @classmethod
    def from_parameter(
        cls, parameter: Parameter, builtin: BuiltInParameter | None = None
    ) -> PropertySetEntry | None:
        """Entry exporting *parameter* as-is, typed from its storage and spec.

        Returns None for parameters without storage.
        """
        storage = parameter.storage
        if storage == StorageType.NONE:
            return None
        if storage == StorageType.INTEGER:
            if parameter.spec == SpecType.YES_NO:
                property_type = PropertyType.BOOLEAN
            elif parameter.spec == SpecType.INVALID:
                property_type = PropertyType.IDENTIFIER
            else:
                property_type = PropertyType.COUNT
        elif storage == StorageType.DOUBLE:
            property_type = _DOUBLE_SPEC_TYPES.get(parameter.spec, PropertyType.REAL)
        elif storage == StorageType.STRING:
            property_type = PropertyType.TEXT
        else:
            property_type = PropertyType.LABEL
        return cls.create(
            parameter.name,
            property_type,
            builtin=builtin if builtin is not None else parameter.builtin,
        )
