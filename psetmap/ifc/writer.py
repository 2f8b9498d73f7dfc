"""PropertySetWriter — create set entities and relate them to objects."""

from __future__ import annotations

import logging
from typing import Any

import ifcopenshell
import ifcopenshell.guid

from psetmap.properties.types import PropertyValueType

logger = logging.getLogger(__name__)


class PropertySetWriter:
    """Write property, quantity and predefined sets into one model.

    Property and quantity sets are de-duplicated: asking for a set with
    the same name and the same property entities returns the existing
    set, which is then related to the new object as well.
    """

    def __init__(self, model: ifcopenshell.file) -> None:
        self.model = model
        self._sets: dict[tuple, ifcopenshell.entity_instance] = {}
        self._relations: dict[int, ifcopenshell.entity_instance] = {}
        self.created = 0
        self.reused = 0

    @property
    def owner_history(self) -> ifcopenshell.entity_instance | None:
        histories = self.model.by_type("IfcOwnerHistory")
        return histories[0] if histories else None

    def write_property_set(
        self,
        obj: ifcopenshell.entity_instance,
        name: str,
        properties: list[ifcopenshell.entity_instance],
        description: str | None = None,
    ) -> ifcopenshell.entity_instance | None:
        if not properties:
            return None
        key = ("pset", name, frozenset(p.id() for p in properties))
        pset = self._sets.get(key)
        if pset is None:
            pset = self.model.create_entity(
                "IfcPropertySet",
                GlobalId=ifcopenshell.guid.new(),
                OwnerHistory=self.owner_history,
                Name=name,
                Description=description,
                HasProperties=properties,
            )
            self._sets[key] = pset
            self.created += 1
        else:
            self.reused += 1
            logger.debug("Reusing %s #%d for %s", name, pset.id(), obj.GlobalId)
        self.attach(obj, pset)
        return pset

    def write_quantity_set(
        self,
        obj: ifcopenshell.entity_instance,
        name: str,
        quantities: list[ifcopenshell.entity_instance],
        method_of_measurement: str | None = None,
    ) -> ifcopenshell.entity_instance | None:
        if not quantities:
            return None
        key = ("qto", name, method_of_measurement, frozenset(q.id() for q in quantities))
        qset = self._sets.get(key)
        if qset is None:
            qset = self.model.create_entity(
                "IfcElementQuantity",
                GlobalId=ifcopenshell.guid.new(),
                OwnerHistory=self.owner_history,
                Name=name,
                MethodOfMeasurement=method_of_measurement or None,
                Quantities=quantities,
            )
            self._sets[key] = qset
            self.created += 1
        else:
            self.reused += 1
        self.attach(obj, qset)
        return qset

    def write_predefined_set(
        self,
        obj: ifcopenshell.entity_instance,
        entity_name: str,
        results: list[tuple[str, PropertyValueType, list[Any]]],
    ) -> ifcopenshell.entity_instance | None:
        """Create an IfcPreDefinedPropertySet subtype and fill its attributes.

        Attributes that the schema rejects are skipped and logged.
        """
        if not results:
            return None
        entity = self.model.create_entity(
            entity_name,
            GlobalId=ifcopenshell.guid.new(),
            OwnerHistory=self.owner_history,
        )
        assigned = 0
        for name, value_type, values in results:
            value = tuple(values) if value_type == PropertyValueType.LIST_VALUE else values[0]
            try:
                setattr(entity, name, value)
                assigned += 1
            except Exception:
                logger.debug("Could not set %s.%s = %r", entity_name, name, value, exc_info=True)
        if assigned == 0:
            self.model.remove(entity)
            return None
        self.created += 1
        self.attach(obj, entity)
        return entity

    def attach(self, obj: ifcopenshell.entity_instance, definition: ifcopenshell.entity_instance) -> None:
        """Relate *definition* to *obj*: HasPropertySets for types, a relation otherwise."""
        if obj.is_a("IfcTypeObject"):
            current = tuple(obj.HasPropertySets or ())
            if definition not in current:
                obj.HasPropertySets = current + (definition,)
            return

        rel = self._relations.get(definition.id())
        if rel is None:
            rel = self.model.create_entity(
                "IfcRelDefinesByProperties",
                GlobalId=ifcopenshell.guid.new(),
                OwnerHistory=self.owner_history,
                RelatedObjects=[obj],
                RelatingPropertyDefinition=definition,
            )
            self._relations[definition.id()] = rel
            return
        if obj not in rel.RelatedObjects:
            rel.RelatedObjects = tuple(rel.RelatedObjects) + (obj,)
