"""ExportContext — state shared by everything that runs during one export."""

from __future__ import annotations

import logging
from typing import Callable, Hashable

import ifcopenshell

from psetmap.ifc import schema
from psetmap.ifc.cache import PropertyInfoCache
from psetmap.ifc.properties import PropertyFactory
from psetmap.ifc.units import UnitScaler
from psetmap.ifc.writer import PropertySetWriter
from psetmap.models.host import HostElement, LanguageType
from psetmap.options import ExportOptions

logger = logging.getLogger(__name__)


class ExportContext:
    """Per-export state: the target model, options, caches and factories.

    A fresh context per export keeps cached property entities from
    leaking between models.
    """

    def __init__(self, model: ifcopenshell.file, options: ExportOptions | None = None) -> None:
        self.model = model
        self.options = options or ExportOptions()
        self.schema = schema.schema_name(model)
        self.scaler = UnitScaler(self.options.unit_scales)
        self.cache = PropertyInfoCache()
        self.properties = PropertyFactory(model, self.cache)
        self.writer = PropertySetWriter(model)
        self.handles: dict[int, ifcopenshell.entity_instance] = {}
        self._defaults: dict[Hashable, ifcopenshell.entity_instance | None] = {}

    @property
    def language(self) -> LanguageType:
        return self.options.language

    @property
    def is_pre_ifc4(self) -> bool:
        return self.schema == "IFC2X3"

    @property
    def is_ifc4x3(self) -> bool:
        return self.schema == "IFC4X3"

    def register_handle(self, element: HostElement, handle: ifcopenshell.entity_instance) -> None:
        self.handles[element.id] = handle

    def handle_for(self, element: HostElement) -> ifcopenshell.entity_instance | None:
        """IFC entity written for *element*, if any."""
        return self.handles.get(element.id)

    def default_property(
        self,
        key: Hashable,
        build: Callable[[], ifcopenshell.entity_instance | None],
    ) -> ifcopenshell.entity_instance | None:
        """Return the default property for *key*, building it on first use."""
        if key not in self._defaults:
            self._defaults[key] = build()
        return self._defaults[key]
