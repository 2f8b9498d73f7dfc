"""Predefined property set entries: attribute values of IfcPreDefinedPropertySet subtypes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from psetmap.ifc.values import value_from_parameter
from psetmap.models.host import BuiltInParameter, HostElement
from psetmap.properties.entry import Entry
from psetmap.properties.entry_map import EntryMap
from psetmap.properties.pset_entry import list_parameter_values
from psetmap.properties.types import PropertyType, PropertyValueType

if TYPE_CHECKING:
    from psetmap.context import ExportContext


class PreDefinedPropertySetEntryMap(EntryMap):
    """Returns typed python values rather than property entities."""

    def process_entry(
        self, ctx: ExportContext, element: HostElement, entry: PreDefinedPropertySetEntry
    ) -> list[Any] | None:
        if entry.property_value_type == PropertyValueType.LIST_VALUE:
            for name in self._names(ctx):
                values = list_parameter_values(element, name, entry.property_type, ctx.scaler)
                if values:
                    return values
            return None

        sources = [
            (self.localized_parameter_name(ctx.language) or "", None),
            (self.parameter_name, None),
            ("", self.builtin),
            (self.compatible_parameter_name, None),
        ]
        for name, builtin in sources:
            if not name and builtin is None:
                continue
            param = element.lookup(*([name] if name else []), builtin=builtin)
            converted = value_from_parameter(param, entry.property_type, ctx.scaler)
            if converted is not None:
                return [converted[0]]
        return None

    def _names(self, ctx: ExportContext) -> list[str]:
        """Localized name first, then the parameter name, then the compatible name."""
        names = [
            self.localized_parameter_name(ctx.language) or "",
            self.parameter_name,
            self.compatible_parameter_name,
        ]
        return [n for n in names if n]


class PreDefinedPropertySetEntry(Entry):
    """One attribute of a predefined property set."""

    property_type: PropertyType = PropertyType.LABEL
    property_value_type: PropertyValueType = PropertyValueType.SINGLE_VALUE
    maps: list[PreDefinedPropertySetEntryMap] = Field(default_factory=list)

    @classmethod
    def map_class(cls) -> type[EntryMap]:
        return PreDefinedPropertySetEntryMap

    def process_entry(self, ctx: ExportContext, element: HostElement) -> list[Any] | None:
        for entry_map in self.maps:
            values = entry_map.process_entry(ctx, element, self)
            if values:
                return values
        return None

    @classmethod
    def create(
        cls,
        property_name: str,
        property_type: PropertyType,
        parameter_name: str | None = None,
        builtin: BuiltInParameter | None = None,
        property_value_type: PropertyValueType = PropertyValueType.SINGLE_VALUE,
    ) -> PreDefinedPropertySetEntry:
        entry = cls(
            property_name=property_name,
            property_type=property_type,
            property_value_type=property_value_type,
        )
        entry.add_entry(
            PreDefinedPropertySetEntryMap(
                parameter_name=property_name if parameter_name is None else parameter_name,
                builtin=builtin,
            )
        )
        return entry
