"""Quantity entries: one IfcPhysicalQuantity per entry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import ifcopenshell
from pydantic import Field

from psetmap.models.body import BodyParams
from psetmap.models.host import BuiltInParameter, HostElement
from psetmap.properties.entry import Entry
from psetmap.properties.entry_map import EntryMap
from psetmap.properties.types import QuantityType

if TYPE_CHECKING:
    from psetmap.context import ExportContext

logger = logging.getLogger(__name__)

_QUANTITY_UNITS: dict[QuantityType, str] = {
    QuantityType.LENGTH: "length",
    QuantityType.POSITIVE_LENGTH: "length",
    QuantityType.AREA: "area",
    QuantityType.VOLUME: "volume",
}


class QuantityEntryMap(EntryMap):
    """Reads a quantity from a parameter, falling back to the calculator."""

    def process_entry(
        self,
        ctx: ExportContext,
        body: BodyParams | None,
        element: HostElement,
        element_type: HostElement | None,
        entry: QuantityEntry,
        method_of_measurement: str | None = None,
    ) -> ifcopenshell.entity_instance | None:
        quantity_type = entry.quantity_type
        value = self._from_parameter(ctx, element, quantity_type) if self.parameter_name_is_valid else None

        if value is None and self.calculator is not None:
            calculated = self.calculator.calculate(ctx, body, element, element_type, self)
            if calculated is not None:
                if quantity_type == QuantityType.COUNT:
                    value = int(calculated)
                else:
                    value = float(calculated)

        if value is None:
            return None
        return ctx.properties.create_quantity(entry.property_name, quantity_type, value, method_of_measurement)

    def _from_parameter(self, ctx: ExportContext, element: HostElement, quantity_type: QuantityType) -> float | int | None:
        if quantity_type == QuantityType.COUNT:
            return element.lookup_integer(self.parameter_name, builtin=self.builtin)
        raw = element.lookup_double(self.parameter_name, builtin=self.builtin)
        if raw is None:
            return None
        return ctx.scaler.scale(_QUANTITY_UNITS.get(quantity_type), raw)


class QuantityEntry(Entry):
    """One quantity of a quantity description."""

    quantity_type: QuantityType = QuantityType.REAL
    maps: list[QuantityEntryMap] = Field(default_factory=list)

    @classmethod
    def map_class(cls) -> type[EntryMap]:
        return QuantityEntryMap

    def process_entry(
        self,
        ctx: ExportContext,
        body: BodyParams | None,
        element: HostElement,
        element_type: HostElement | None,
        method_of_measurement: str | None = None,
    ) -> ifcopenshell.entity_instance | None:
        for entry_map in self.maps:
            quantity = entry_map.process_entry(ctx, body, element, element_type, self, method_of_measurement)
            if quantity is not None:
                return quantity
        return None

    @classmethod
    def create(
        cls,
        property_name: str,
        quantity_type: QuantityType,
        parameter_name: str = "",
        builtin: BuiltInParameter | None = None,
        calculator=None,
    ) -> QuantityEntry:
        entry = cls(property_name=property_name, quantity_type=quantity_type)
        entry.add_entry(QuantityEntryMap(parameter_name=parameter_name, builtin=builtin, calculator=calculator))
        return entry
