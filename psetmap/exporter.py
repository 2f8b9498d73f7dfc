"""PropertySetExporter — write the applicable sets for one element at a time."""

from __future__ import annotations

import logging

import ifcopenshell
import ifcopenshell.util.element

from psetmap.context import ExportContext
from psetmap.ifc import schema
from psetmap.models.body import BodyParams
from psetmap.models.host import HostElement
from psetmap.properties.calculator import CalculatorRegistry, default_registry
from psetmap.properties.description import (
    PreDefinedPropertySetDescription,
    PropertySetDescription,
    QuantityDescription,
)
from psetmap.properties.library import default_predefined_sets, default_property_sets, default_quantity_sets
from psetmap.properties.parameter_map import load_parameter_map, load_user_defined_psets

logger = logging.getLogger(__name__)


def is_type_set(description: PropertySetDescription) -> bool:
    """A set is written to the type object when all its entries are type properties."""
    return bool(description.entries) and all(e.is_element_type_property for e in description.entries)


class PropertySetExporter:
    """Select the descriptions that apply to an IFC entity and write their sets.

    Instance sets go to the element's entity.  Type sets go to the related
    IfcTypeObject, once per type.
    """

    def __init__(
        self,
        ctx: ExportContext,
        property_sets: list[PropertySetDescription] | None = None,
        quantity_sets: list[QuantityDescription] | None = None,
        predefined_sets: list[PreDefinedPropertySetDescription] | None = None,
        parameter_map: dict[tuple[str, str], str] | None = None,
    ) -> None:
        self.ctx = ctx
        self.property_sets = list(property_sets or [])
        self.quantity_sets = list(quantity_sets or [])
        self.predefined_sets = list(predefined_sets or [])
        self.parameter_map = dict(parameter_map or {})
        if self.parameter_map:
            for description in self.property_sets:
                description.apply_parameter_map(self.parameter_map)
        self._exported_types: set[int] = set()

    @classmethod
    def from_options(
        cls, ctx: ExportContext, registry: CalculatorRegistry | None = None
    ) -> PropertySetExporter:
        """Build the description lists the context's options ask for."""
        options = ctx.options
        registry = registry or default_registry()

        property_sets: list[PropertySetDescription] = []
        if options.export_ifc_common_property_sets:
            property_sets.extend(default_property_sets(registry))
        if options.export_user_defined_psets:
            property_sets.extend(load_user_defined_psets(options.user_defined_psets_file, registry))

        quantity_sets = default_quantity_sets(registry) if options.export_base_quantities else []
        predefined_sets = default_predefined_sets() if options.export_predefined_property_sets else []
        parameter_map = load_parameter_map(options.parameter_mapping_file)

        logger.debug(
            "Exporter: %d property sets, %d quantity sets, %d predefined sets, %d mappings",
            len(property_sets),
            len(quantity_sets),
            len(predefined_sets),
            len(parameter_map),
        )
        return cls(ctx, property_sets, quantity_sets, predefined_sets, parameter_map)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_element(
        self,
        element: HostElement,
        handle: ifcopenshell.entity_instance,
        body: BodyParams | None = None,
    ) -> list[ifcopenshell.entity_instance]:
        """Write every applicable set for *element*; return the sets related to it."""
        self.ctx.register_handle(element, handle)
        written: list[ifcopenshell.entity_instance] = []
        written.extend(self.export_instance_sets(element, handle, body))
        if self.ctx.options.export_base_quantities:
            written.extend(self.export_quantity_sets(element, handle, body))
        written.extend(self.export_predefined_sets(element, handle))
        written.extend(self.export_type_sets(element, handle))
        return written

    def export_instance_sets(
        self,
        element: HostElement,
        handle: ifcopenshell.entity_instance,
        body: BodyParams | None = None,
    ) -> list[ifcopenshell.entity_instance]:
        written = []
        for description in self.property_sets:
            if is_type_set(description) or not description.is_applicable(handle):
                continue
            properties = description.process_entries(self.ctx, body, element, element.type_element, handle)
            pset = self.ctx.writer.write_property_set(handle, description.name, properties)
            if pset is not None:
                written.append(pset)
        return written

    def export_type_sets(
        self, element: HostElement, handle: ifcopenshell.entity_instance
    ) -> list[ifcopenshell.entity_instance]:
        """Write type sets to the related IfcTypeObject, once per type."""
        element_type = element.type_element
        type_handle = ifcopenshell.util.element.get_type(handle)
        if element_type is None or type_handle is None or type_handle.id() in self._exported_types:
            return []
        self._exported_types.add(type_handle.id())
        self.ctx.register_handle(element_type, type_handle)

        written = []
        for description in self.property_sets:
            if not is_type_set(description):
                continue
            if not (description.is_applicable(type_handle) or description.is_applicable(handle)):
                continue
            properties = description.process_entries(self.ctx, None, element_type, None, type_handle)
            pset = self.ctx.writer.write_property_set(type_handle, description.name, properties)
            if pset is not None:
                written.append(pset)
        return written

    def export_quantity_sets(
        self,
        element: HostElement,
        handle: ifcopenshell.entity_instance,
        body: BodyParams | None = None,
    ) -> list[ifcopenshell.entity_instance]:
        written = []
        for description in self.quantity_sets:
            if not description.is_applicable(handle):
                continue
            quantities = description.process_entries(self.ctx, body, element, element.type_element)
            qset = self.ctx.writer.write_quantity_set(
                handle, description.set_name(self.ctx), quantities, description.method_of_measurement or None
            )
            if qset is not None:
                written.append(qset)
        return written

    def export_predefined_sets(
        self, element: HostElement, handle: ifcopenshell.entity_instance
    ) -> list[ifcopenshell.entity_instance]:
        written = []
        for description in self.predefined_sets:
            if not description.is_applicable(handle):
                continue
            if not schema.has_declaration(self.ctx.model, description.name):
                logger.debug("%s is not in %s", description.name, self.ctx.schema)
                continue
            results = description.process_entries(self.ctx, element)
            entity = self.ctx.writer.write_predefined_set(handle, description.name, results or [])
            if entity is not None:
                written.append(entity)
        return written
